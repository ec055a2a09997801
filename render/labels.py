"""Legend label sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from contracts import RGBA, LabelEntry

# Horizontal advance of one character, as a fraction of the text height
CHAR_STEP_X = 0.5


class LabelSink(ABC):
    """Receives legend geometry; glyph layout and drawing belong to the implementer."""

    @abstractmethod
    def add_rectangle(self, x: float, y: float, w: float, h: float, rgba: RGBA) -> None:
        """Queue a filled rectangle with top-left corner (x, y)."""

    @abstractmethod
    def add_string(self, text: str, x: float, y: float, h: float, rgba: RGBA) -> None:
        """Queue a string whose left edge is x and vertical center is y."""


class LabelCollector(LabelSink):
    """Sink that records every call as a LabelEntry."""

    def __init__(self, char_step_x: float = CHAR_STEP_X) -> None:
        self.char_step_x = char_step_x
        self.entries: List[LabelEntry] = []

    def add_rectangle(self, x: float, y: float, w: float, h: float, rgba: RGBA) -> None:
        self.entries.append(LabelEntry(x=x, y=y, width=w, height=h, text=None, rgba=tuple(rgba)))

    def add_string(self, text: str, x: float, y: float, h: float, rgba: RGBA) -> None:
        width = len(text) * h * self.char_step_x
        self.entries.append(LabelEntry(x=x, y=y, width=width, height=h, text=text, rgba=tuple(rgba)))

    @property
    def rectangles(self) -> List[LabelEntry]:
        return [e for e in self.entries if e.text is None]

    @property
    def strings(self) -> List[LabelEntry]:
        return [e for e in self.entries if e.text is not None]

    def clear(self) -> None:
        self.entries.clear()


__all__ = ["CHAR_STEP_X", "LabelCollector", "LabelSink"]
