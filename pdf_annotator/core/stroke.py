"""
Stroke model - one freehand annotation in scene coordinates.

A stroke is append-only while it is being drawn and immutable once frozen.
Strokes frozen with a single point are kept and rendered as a dot.
"""

import math
from typing import List, NamedTuple, Optional, Tuple

from .exceptions import InvalidStrokeOperation


class Point(NamedTuple):
    """A position in scene (or page-local) coordinates."""
    x: float
    y: float


class Stroke:
    """
    Freehand stroke with a fixed pen style.

    Points are stored in scene space. Style is captured at creation time
    and cannot be changed afterwards.
    """

    def __init__(self, handle: int, start: Tuple[float, float], color: str, width: float):
        if width <= 0 or not math.isfinite(width):
            raise ValueError(f"Invalid pen width: {width}")

        self._handle = handle
        self._color = color
        self._width = float(width)
        self._points: List[Point] = [Point(float(start[0]), float(start[1]))]
        self._frozen = False
        self._page_index: Optional[int] = None

    # ==================== Properties ====================

    @property
    def handle(self) -> int:
        return self._handle

    @property
    def color(self) -> str:
        return self._color

    @property
    def width(self) -> float:
        return self._width

    @property
    def points(self) -> Tuple[Point, ...]:
        """Snapshot of the current points, safe to hold across appends."""
        return tuple(self._points)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def is_dot(self) -> bool:
        """True if the stroke never moved away from its first point."""
        return len(self._points) == 1

    @property
    def page_index(self) -> Optional[int]:
        """Page the stroke was anchored to when it was frozen."""
        return self._page_index

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        state = 'frozen' if self._frozen else 'active'
        return f"Stroke(handle={self._handle}, points={len(self._points)}, {state})"

    # ==================== Mutation ====================

    def append(self, point: Tuple[float, float]):
        """Append a point to an active stroke."""
        if self._frozen:
            raise InvalidStrokeOperation(f"Stroke {self._handle} is frozen")
        self._points.append(Point(float(point[0]), float(point[1])))

    def freeze(self, page_index: Optional[int] = None):
        """Make the stroke immutable and record the page it belongs to."""
        if self._frozen:
            raise InvalidStrokeOperation(f"Stroke {self._handle} is already frozen")
        self._frozen = True
        self._page_index = page_index

    def moved(self, dx: float, dy: float, page_index: Optional[int]) -> 'Stroke':
        """Get a frozen copy translated by (dx, dy) and anchored to `page_index`."""
        if not self._frozen:
            raise InvalidStrokeOperation(f"Stroke {self._handle} is still being drawn")
        copy = Stroke(self._handle, self._points[0], self._color, self._width)
        copy._points = [Point(p.x + dx, p.y + dy) for p in self._points]
        copy._frozen = True
        copy._page_index = page_index
        return copy


__all__ = ['Point', 'Stroke']
