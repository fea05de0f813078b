"""The traffic record passed between capture, storage and reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_C_WHITESPACE = " \t\n\v\f\r"


def clean_text(value: str | None) -> str | None:
    """Strip leading and trailing whitespace, leaving ``None`` as it is."""
    if value is None:
        return None
    return value.strip(_C_WHITESPACE)


@dataclass
class Data:
    """Bytes downloaded and uploaded on one adapter over one interval.

    ``ts`` is the timestamp, ``dr`` the duration in seconds, ``dl``/``ul`` the
    byte counts, ``ad`` the adapter address and ``hs`` the host. The address
    and host are trimmed of surrounding whitespace whenever they are set.
    """

    ts: int = 0
    dr: int = 0
    dl: int = 0
    ul: int = 0
    ad: str | None = None
    hs: str | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("ad", "hs"):
            value = clean_text(value)
        super().__setattr__(name, value)