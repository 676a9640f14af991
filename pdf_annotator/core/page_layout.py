"""
Page layout engine for the annotation canvas.

Stacks document pages vertically in a single scene coordinate space and
converts between scene coordinates and page-local coordinates.
"""

import bisect
import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .stroke import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """A laid-out document page. Origin is its top-left corner in scene space."""
    index: int
    width: float
    height: float
    origin_x: float = 0.0
    origin_y: float = 0.0

    @property
    def origin(self) -> Point:
        return Point(self.origin_x, self.origin_y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def bottom(self) -> float:
        return self.origin_y + self.height

    def contains(self, point: Tuple[float, float]) -> bool:
        """Check containment. Right and bottom edges are exclusive."""
        x, y = point
        return (self.origin_x <= x < self.origin_x + self.width and
                self.origin_y <= y < self.origin_y + self.height)

    def to_local(self, point: Tuple[float, float]) -> Point:
        return Point(point[0] - self.origin_x, point[1] - self.origin_y)

    def to_scene(self, local: Tuple[float, float]) -> Point:
        return Point(local[0] + self.origin_x, local[1] + self.origin_y)


class PageLayout:
    """
    Vertical page stacking with fixed spacing.

    All pages are left-aligned at x=0 regardless of width. Page origins are
    strictly increasing and page extents never overlap, so lookups can use
    binary search over the origins.
    """

    def __init__(self, spacing: float = 20.0):
        if spacing < 0 or not math.isfinite(spacing):
            raise ValueError(f"Invalid page spacing: {spacing}")
        self._spacing = float(spacing)
        self._pages: List[Page] = []
        self._tops: List[float] = []

    @property
    def spacing(self) -> float:
        return self._spacing

    @property
    def pages(self) -> Tuple[Page, ...]:
        return tuple(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    # ==================== Layout ====================

    def layout(self, sizes: Iterable[Tuple[float, float]]) -> Tuple[Page, ...]:
        """
        Replace all pages with a fresh stack.

        Args:
            sizes: Native (width, height) of each page, in document order

        Returns:
            The laid-out pages
        """
        checked = [self._check_size(size) for size in sizes]
        self._restack(checked)
        logger.debug(f"Laid out {len(self._pages)} pages")
        return self.pages

    def clear(self):
        """Remove all pages."""
        self._pages = []
        self._tops = []

    def insert_page(self, index: int, size: Tuple[float, float]) -> Page:
        """
        Insert a page before `index` and re-stack the following pages.

        Args:
            index: Position of the new page (0..page_count)
            size: Native (width, height) of the new page

        Returns:
            The inserted page
        """
        if not 0 <= index <= len(self._pages):
            raise IndexError(f"Page index out of range: {index}")
        sizes = [p.size for p in self._pages]
        sizes.insert(index, self._check_size(size))
        self._restack(sizes)
        return self._pages[index]

    def append_page(self, size: Tuple[float, float]) -> Page:
        """Add a page after the last one."""
        return self.insert_page(len(self._pages), size)

    def remove_page(self, index: int) -> Page:
        """Remove a page and re-stack the following pages."""
        removed = self.page(index)
        sizes = [p.size for p in self._pages]
        del sizes[index]
        self._restack(sizes)
        return removed

    def _restack(self, sizes: List[Tuple[float, float]]):
        pages = []
        y = 0.0
        for i, (width, height) in enumerate(sizes):
            pages.append(Page(index=i, width=width, height=height, origin_x=0.0, origin_y=y))
            y += height + self._spacing
        self._pages = pages
        self._tops = [p.origin_y for p in pages]

    @staticmethod
    def _check_size(size: Tuple[float, float]) -> Tuple[float, float]:
        width, height = float(size[0]), float(size[1])
        if not (width > 0 and height > 0 and math.isfinite(width) and math.isfinite(height)):
            raise ValueError(f"Invalid page size: {size}")
        return (width, height)

    # ==================== Queries ====================

    def page(self, index: int) -> Page:
        if not 0 <= index < len(self._pages):
            raise IndexError(f"Page index out of range: {index}")
        return self._pages[index]

    def page_origin(self, index: int) -> Point:
        """Get the precomputed scene-space origin of a page."""
        return self.page(index).origin

    def page_at(self, point: Tuple[float, float]) -> Optional[int]:
        """
        Find the page containing a scene point.

        Args:
            point: (x, y) in scene coordinates

        Returns:
            Page index, or None for points in gaps or outside all pages
        """
        if not self._pages:
            return None
        i = bisect.bisect_right(self._tops, point[1]) - 1
        if i < 0:
            return None
        if self._pages[i].contains(point):
            return i
        return None

    def scene_to_page(self, point: Tuple[float, float]) -> Optional[Tuple[int, Point]]:
        """
        Convert a scene point to page-local coordinates.

        Returns:
            (page_index, local_point), or None if no page contains the point
        """
        index = self.page_at(point)
        if index is None:
            return None
        return index, self._pages[index].to_local(point)

    def page_to_scene(self, index: int, local: Tuple[float, float]) -> Point:
        """Convert page-local coordinates of page `index` to scene space."""
        return self.page(index).to_scene(local)

    def scene_bounds(self) -> Tuple[float, float, float, float]:
        """
        Get the (x, y, width, height) rectangle enclosing all pages.

        Returns an empty rectangle at the origin when there are no pages.
        """
        if not self._pages:
            return (0.0, 0.0, 0.0, 0.0)
        width = max(p.width for p in self._pages)
        height = self._pages[-1].bottom
        return (0.0, 0.0, width, height)


__all__ = ['Page', 'PageLayout']
