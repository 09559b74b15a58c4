"""
Key-value persistence slots for the directory.

A slot is a named string value, in the spirit of a browser's localStorage.
JsonFileStorage keeps each slot in <data_dir>/<key>.json; MemoryStorage keeps
them in a dict (tests, throwaway sessions).

InstitutePersistence sits on top of a slot and speaks Institute lists:
    load()  → list[Institute] | None   (None when absent or unreadable)
    save(institutes)                   (raises StorageError)
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from directory.errors import StorageError
from directory.models import Institute

STORAGE_KEY = "rheumatology_institutes"

log = logging.getLogger(__name__)

_institute_list = TypeAdapter(list[Institute])


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class JsonFileStorage:
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Could not read slot %r from %s: %s", key, path, exc)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp: Path | None = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # One temp file per write; replace() swaps it in atomically.
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.data_dir,
                prefix=f".{key}.", suffix=".tmp", delete=False,
            ) as fh:
                tmp = Path(fh.name)
                fh.write(value)
            os.replace(tmp, path)
        except OSError as exc:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Could not write slot {key!r} to {path}: {exc}") from exc


class MemoryStorage:
    def __init__(self, items: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


# ---------------------------------------------------------------------------
# Institute persistence
# ---------------------------------------------------------------------------

class InstitutePersistence:
    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key     = key

    def load(self) -> list[Institute] | None:
        raw = self.storage.get_item(self.key)
        if not raw:
            log.info("Slot %r is empty.", self.key)
            return None

        try:
            institutes = _institute_list.validate_json(raw)
        except ValidationError as exc:
            log.error("Failed to parse saved data in slot %r: %s", self.key, exc)
            return None

        ids = [i.id for i in institutes]
        if len(ids) != len(set(ids)):
            log.error("Saved data in slot %r has duplicate ids; ignoring it.", self.key)
            return None

        log.info("Loaded %d institutes from slot %r.", len(institutes), self.key)
        return institutes

    def save(self, institutes: list[Institute]) -> None:
        payload = _institute_list.dump_json(institutes).decode("utf-8")
        self.storage.set_item(self.key, payload)
