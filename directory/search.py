"""
Search and aggregate derivations over the institute list.

Both are pure: they read a list of institutes and never modify it.

    filter_institutes(institutes, search) → list[Institute]
        case-insensitive substring match on name, city or course;
        an empty search returns every institute in order.

    seat_stats(institutes) → SeatStats
        institute count plus the sum of parseable seat counts.
"""

import re
from collections.abc import Sequence
from typing import NamedTuple

from directory.models import Institute

# Leading whitespace, optional sign, digits 0-9; anything after is ignored.
_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


class SeatStats(NamedTuple):
    total_institutes: int
    total_seats: int


def filter_institutes(institutes: Sequence[Institute], search: str) -> list[Institute]:
    needle = search.lower()
    return [
        inst for inst in institutes
        if needle in inst.name.lower()
        or needle in inst.city.lower()
        or needle in inst.course.lower()
    ]


def parse_seats(value: str | int) -> int | None:
    """
    Parse a seat count the lenient way a number field in a form is read:
    "4" → 4, " 3 " → 3, "2+" → 2, "abc" → None.
    """
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def seat_stats(institutes: Sequence[Institute]) -> SeatStats:
    total = 0
    for inst in institutes:
        seats = parse_seats(inst.seats)
        if seats is not None:
            total += seats
    return SeatStats(total_institutes=len(institutes), total_seats=total)
