"""Bounded ring arena holding one track's detection history."""

from __future__ import annotations

from typing import Iterator, List, Optional

from contracts import Detection

MIN_CAPACITY = 2


class HistoryRing:
    """Fixed-capacity ring of detections, newest last.

    When the ring overflows, the oldest entry is dropped and the back-link
    of the new oldest entry is cut, so the chain reachable from the newest
    detection never extends past the ring.

    Note:
        Cutting that back-link mutates a detection the caller may still
        hold: its ``predecessor`` becomes None once it is the oldest
        retained point. The newest detection is never touched, which is why
        the capacity is at least two: with one slot the just-matched
        detection would lose its own link.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < MIN_CAPACITY:
            raise ValueError(f"History capacity must be at least {MIN_CAPACITY}, got {capacity}")
        self._slots: List[Optional[Detection]] = [None] * capacity
        self._start = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._size

    def append(self, detection: Detection) -> None:
        cap = len(self._slots)
        if self._size < cap:
            self._slots[(self._start + self._size) % cap] = detection
            self._size += 1
            return
        self._slots[self._start] = detection
        self._start = (self._start + 1) % cap
        oldest = self._slots[self._start]
        if oldest is not None:
            oldest.predecessor = None

    def newest(self) -> Optional[Detection]:
        if self._size == 0:
            return None
        return self._slots[(self._start + self._size - 1) % len(self._slots)]

    def newest_first(self) -> Iterator[Detection]:
        cap = len(self._slots)
        for k in range(self._size - 1, -1, -1):
            yield self._slots[(self._start + k) % cap]

    def clear(self) -> None:
        self._size = 0
        self._start = 0
        self._slots = [None] * len(self._slots)
