"""
View-models for the institute list.

Everything here is presentation-independent: the Streamlit layouts in
frontend/ui.py consume these rows and strings and never read the store.
"""

from dataclasses import dataclass
from collections.abc import Sequence

from directory.models import Institute
from directory.search import SeatStats

APP_TITLE = "RheumaSeats India"


@dataclass(frozen=True)
class InstituteRow:
    position: int          # 1-based, within the rendered list
    institute: Institute

    @property
    def key(self) -> int:
        return self.institute.id


@dataclass(frozen=True)
class EmptyState:
    title: str
    message: str


@dataclass(frozen=True)
class HeaderStat:
    label: str
    value: str


def build_rows(institutes: Sequence[Institute]) -> list[InstituteRow]:
    return [InstituteRow(position=n, institute=inst) for n, inst in enumerate(institutes, start=1)]


def list_heading(search: str, count: int) -> str:
    return f"Search Results ({count})" if search else "All Institutes"


def empty_state(total: int, matches: int, search: str) -> EmptyState | None:
    """Message for an empty list, or None when there is something to show."""
    if matches:
        return None
    if total == 0:
        return EmptyState(
            "No institutes yet",
            "The directory is empty. Add the first institute to get started.",
        )
    return EmptyState(
        "No institutes found",
        f"Nothing matches “{search}”. Try adjusting your search or add a new institute.",
    )


def header_stats(stats: SeatStats) -> list[HeaderStat]:
    return [
        HeaderStat("Total Institutes", str(stats.total_institutes)),
        HeaderStat("Est. Seats", f"{stats.total_seats}+"),
    ]


def footer_text(year: int) -> str:
    return f"© {year} {APP_TITLE}. Information is for reference purposes only."
