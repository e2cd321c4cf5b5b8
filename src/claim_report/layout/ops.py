"""Draw operations emitted by the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class TextOp:
    """A single left-aligned text run with its baseline at (x, y)."""

    content: str
    x: float
    y: float
    bold: bool = False
    size: int = 10


@dataclass(frozen=True)
class RectOp:
    """A stroked, unfilled rectangle with its lower-left corner at (x, y)."""

    x: float
    y: float
    width: float
    height: float
    border_width: float = 1.0


DrawOp = Union[TextOp, RectOp]


@dataclass(frozen=True)
class LayoutResult:
    """Outcome of one layout pass."""

    ops: tuple[DrawOp, ...]
    cursor: float
    truncated: tuple[str, ...] = field(default_factory=tuple)

    @property
    def texts(self) -> list[TextOp]:
        return [op for op in self.ops if isinstance(op, TextOp)]

    @property
    def rects(self) -> list[RectOp]:
        return [op for op in self.ops if isinstance(op, RectOp)]
