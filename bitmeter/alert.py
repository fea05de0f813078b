"""Alerts and the date criteria that describe when they apply."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import str_to_int
from .data import clean_text

MAX_PART_LENGTH = 256
WILDCARD = "*"
_BAD_NUM = -1


@dataclass(frozen=True)
class DateCriteriaPart:
    """One element of a date criterion.

    An absolute part covers the inclusive range ``val1``..``val2``; a relative
    part (written ``-n``) refers back ``val1`` units from the present.
    """

    is_relative: bool
    val1: int
    val2: int

    def __str__(self) -> str:
        if self.is_relative:
            return f"-{self.val1}"
        if self.val1 == self.val2:
            return str(self.val1)
        return f"{self.val1}-{self.val2}"


def _parse_range(token: str, txt: str) -> DateCriteriaPart:
    if "-" in token:
        first, _, second = token.partition("-")
        val1 = str_to_int(first, _BAD_NUM)
        val2 = str_to_int(second, _BAD_NUM)
    else:
        val1 = val2 = str_to_int(token, _BAD_NUM)
    if _BAD_NUM in (val1, val2) or val1 > val2:
        raise ValueError(f"invalid date criteria part {token!r} in {txt!r}")
    return DateCriteriaPart(False, val1, val2)


def parse_date_criteria_part(txt: str | None) -> list[DateCriteriaPart] | None:
    """Parse text such as ``1,4-6,9`` or ``-3`` into criteria parts.

    Returns ``None`` for the wildcard ``*`` (or text holding no values), and
    raises ``ValueError`` when the text is missing, too long or malformed.
    """
    if txt is None:
        raise ValueError("date criteria text is missing")
    if txt == WILDCARD:
        return None
    if len(txt) > MAX_PART_LENGTH:
        raise ValueError(f"date criteria text is too long at {len(txt)} chars: {txt!r}")
    if txt.startswith("-"):
        value = str_to_int(txt[1:], _BAD_NUM)
        if value == _BAD_NUM:
            raise ValueError(f"invalid relative date criteria part: {txt!r}")
        return [DateCriteriaPart(True, value, 0)]

    parts = [_parse_range(token, txt) for token in txt.split(",") if token]
    return parts or None


def date_criteria_part_to_text(parts: list[DateCriteriaPart] | None) -> str:
    """Render criteria parts back to their text form, ``*`` for ``None``."""
    if parts is None:
        return WILDCARD
    return ",".join(str(part) for part in parts)


@dataclass
class DateCriteria:
    """Criteria over year, month, day, weekday and hour; ``None`` matches anything."""

    year: list[DateCriteriaPart] | None = None
    month: list[DateCriteriaPart] | None = None
    day: list[DateCriteriaPart] | None = None
    weekday: list[DateCriteriaPart] | None = None
    hour: list[DateCriteriaPart] | None = None


def make_date_criteria(year: str, month: str, day: str, weekday: str, hour: str) -> DateCriteria:
    """Build a DateCriteria from the text of each of its fields."""
    return DateCriteria(
        year=parse_date_criteria_part(year),
        month=parse_date_criteria_part(month),
        day=parse_date_criteria_part(day),
        weekday=parse_date_criteria_part(weekday),
        hour=parse_date_criteria_part(hour),
    )


@dataclass
class Alert:
    """A traffic limit, active within ``bound`` and counted over ``periods``.

    The name is trimmed of surrounding whitespace whenever it is set.
    """

    id: int = 0
    name: str | None = None
    active: int = 0
    bound: DateCriteria | None = None
    periods: list[DateCriteria] = field(default_factory=list)
    direction: int = 0
    amount: int = 0

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "name":
            value = clean_text(value)
        super().__setattr__(key, value)