"""
Runtime settings and logging.

Settings come from the environment (a .env file in the working directory is
loaded first):

    RHEUMASEATS_DATA_DIR   where persistence slots are written  (default: data/)
    RHEUMASEATS_LOG_DIR    rotating log file location           (default: logs/)
    RHEUMASEATS_LOG_LEVEL  root log level                       (default: INFO)
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent

LOG_FORMAT = "%(asctime)s  %(levelname)s  %(name)s  %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_dir: Path
    log_level: str = "INFO"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "app.log"


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        data_dir=Path(os.environ.get("RHEUMASEATS_DATA_DIR", ROOT_DIR / "data")),
        log_dir=Path(os.environ.get("RHEUMASEATS_LOG_DIR", ROOT_DIR / "logs")),
        log_level=os.environ.get("RHEUMASEATS_LOG_LEVEL", "INFO").upper(),
    )


def resolve_level(name: str) -> int | None:
    """Numeric level for a level name such as "DEBUG", or None if unknown."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else None


def setup_logging(settings: Settings) -> None:
    """Attach stdout + rotating file handlers to the root logger once."""
    root = logging.getLogger()
    level = resolve_level(settings.log_level)
    root.setLevel(logging.INFO if level is None else level)

    # Streamlit re-executes the app script on every interaction.
    if any(getattr(h, "_rheumaseats", False) for h in root.handlers):
        return

    fmt = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)
    stream._rheumaseats = True
    root.addHandler(stream)

    if level is None:
        logging.getLogger(__name__).warning(
            "Unknown log level %r in RHEUMASEATS_LOG_LEVEL; using INFO.", settings.log_level
        )

    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        # Rotate at 5 MB, keep 3 backups
        rotating = logging.handlers.RotatingFileHandler(
            settings.log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
    except OSError as exc:
        logging.getLogger(__name__).warning("File logging disabled: %s", exc)
        return

    rotating.setFormatter(fmt)
    rotating._rheumaseats = True
    root.addHandler(rotating)
