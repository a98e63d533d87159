from __future__ import annotations

from typing import Callable, List, Optional, Tuple

# Marker used in the source for an undated record ("sine dato").
UNDATED = "s.d."

# ``(earliest, latest) -> (matched, eventDate)``
EventDateRule = Callable[[Optional[str], Optional[str]], Tuple[bool, Optional[str]]]


def no_earliest(earliest: Optional[str], latest: Optional[str]) -> Tuple[bool, Optional[str]]:
    return earliest is None, latest


def both_undated(earliest: Optional[str], latest: Optional[str]) -> Tuple[bool, Optional[str]]:
    return earliest == UNDATED and latest == UNDATED, ""


def no_latest(earliest: Optional[str], latest: Optional[str]) -> Tuple[bool, Optional[str]]:
    return latest is None, earliest


def undated_latest_single_year(
    earliest: Optional[str], latest: Optional[str]
) -> Tuple[bool, Optional[str]]:
    """Data patch: one record has a 1937 first sighting and an undated last one.

    Only that exact pair collapses to the single year; any other undated
    ``latest`` still yields an interval.
    """

    return earliest == "1937" and latest == UNDATED, earliest


def neither(earliest: Optional[str], latest: Optional[str]) -> Tuple[bool, Optional[str]]:
    return earliest is None and latest is None, ""


def interval(earliest: Optional[str], latest: Optional[str]) -> Tuple[bool, Optional[str]]:
    return True, f"{earliest} / {latest}"


# Evaluated in order; the first matching rule wins.
EVENT_DATE_RULES: List[EventDateRule] = [
    no_earliest,
    both_undated,
    no_latest,
    undated_latest_single_year,
    neither,
    interval,
]


def derive_event_date(earliest: Optional[str], latest: Optional[str]) -> Optional[str]:
    """Combine first and last record years into a Darwin Core ``eventDate``."""

    for rule in EVENT_DATE_RULES:
        matched, value = rule(earliest, latest)
        if matched:
            return value
    return None
