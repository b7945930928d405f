# File: /adminview/services/fencing.py | Version: 1.0 | Title: Monotonic request sequencing per query class
from __future__ import annotations

from typing import Dict


class RequestSequencer:
    """
    Hands out increasing sequence numbers per request kind ("layout", "data").
    A completion is current only if no newer request of the same kind
    was issued after it.
    """

    def __init__(self) -> None:
        self._latest: Dict[str, int] = {}

    def issue(self, kind: str) -> int:
        seq = self._latest.get(kind, 0) + 1
        self._latest[kind] = seq
        return seq

    def is_current(self, kind: str, seq: int) -> bool:
        return self._latest.get(kind, 0) == seq
