"""Reading per-adapter byte counters from the kernel's interface statistics."""

from __future__ import annotations

import os

from .data import Data

PROC_NET_DEV = "/proc/net/dev"

_LOOPBACK = "lo"
_DL_FIELD = 0
_UL_FIELD = 8


def _parse_counters(name: str, counters: str) -> Data:
    fields = counters.split()
    try:
        dl = int(fields[_DL_FIELD])
        ul = int(fields[_UL_FIELD])
    except (IndexError, ValueError) as exc:
        raise ValueError(
            f"malformed statistics for interface {name.strip()!r}: {counters.strip()!r}"
        ) from exc
    return Data(dl=dl, ul=ul, ad=name, hs="")


def parse_proc_net_dev(text: str) -> list[Data]:
    """Return the received and sent byte totals of each non-loopback interface.

    Lines without a colon (the headers) are skipped; a malformed interface
    line raises ``ValueError``.
    """
    adapters = []
    for line in text.splitlines():
        name, sep, counters = line.partition(":")
        if not sep:
            continue
        data = _parse_counters(name, counters)
        if data.ad != _LOOPBACK:
            adapters.append(data)
    return adapters


def read_adapter_data(path: str | os.PathLike[str] = PROC_NET_DEV) -> list[Data]:
    """Read the interface statistics file; raises ``OSError`` if it cannot be read."""
    with open(path, encoding="utf-8") as handle:
        return parse_proc_net_dev(handle.read())