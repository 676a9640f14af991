"""
CanvasScene - arena owning the pages, rendered page images and strokes

The scene holds canonical data only (scene-space coordinates). Rendering
widgets observe it through Qt signals, which are emitted after each
mutation has completed.
"""

import itertools
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .exceptions import CanvasBusyError, InvalidStrokeOperation
from .page_layout import Page, PageLayout
from .stroke import Stroke

logger = logging.getLogger(__name__)


class CanvasScene(QObject):
    """
    Canvas scene graph.

    Features:
    - Pages referenced from a PageLayout, with one rendered image each
    - Strokes addressed by integer handles, in creation order
    - At most one active (unfrozen) stroke at a time
    - Page-list changes are refused while a stroke is being drawn

    Usage:
        scene = CanvasScene(PageLayout(spacing=20))
        for page in scene.reset_pages([(600, 800)]):
            scene.add_page(page, image)
        handle = scene.begin_stroke((100, 100), '#ff0000', 3)
        scene.extend_stroke(handle, (100, 200))
        scene.end_stroke(handle)
    """

    # Signals
    cleared = pyqtSignal()
    page_added = pyqtSignal(int)  # page index
    pages_relaid_out = pyqtSignal()
    stroke_started = pyqtSignal(int)  # stroke handle
    stroke_extended = pyqtSignal(int)  # stroke handle
    stroke_finished = pyqtSignal(int)  # stroke handle

    def __init__(self, layout: Optional[PageLayout] = None, strict: bool = False,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._layout = layout if layout is not None else PageLayout()
        self._strict = strict

        self._images: Dict[int, Any] = {}  # page index -> rendered image
        self._strokes: Dict[int, Stroke] = {}  # handle -> stroke (insertion ordered)
        self._active_handle: Optional[int] = None
        self._handles = itertools.count(1)

    # ==================== Properties ====================

    @property
    def layout(self) -> PageLayout:
        """
        Page geometry, for queries only.

        Page edits must go through the scene (`reset_pages`, `insert_blank_page`,
        `remove_page`) so they are refused while a stroke is being drawn.
        """
        return self._layout

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def page_count(self) -> int:
        return len(self._layout)

    @property
    def active_handle(self) -> Optional[int]:
        return self._active_handle

    @property
    def is_drawing(self) -> bool:
        return self._active_handle is not None

    # ==================== Pages ====================

    def clear(self):
        """Remove all pages, images and strokes."""
        if self._active_handle is not None:
            logger.debug(f"Force-ending stroke {self._active_handle} before clear")
            self.end_stroke(self._active_handle)

        self._images.clear()
        self._strokes.clear()
        self._layout.clear()
        self.cleared.emit()

    def reset_pages(self, sizes: Iterable[Tuple[float, float]]) -> Tuple[Page, ...]:
        """
        Replace the document: clear the scene and lay out fresh pages.

        Like `clear()`, an active stroke is ended first. Pages have no image
        until `add_page` is called for each of them.

        Args:
            sizes: Native (width, height) of each page, in document order

        Returns:
            The laid-out pages
        """
        sizes = list(sizes)
        # Reject bad sizes before anything is cleared
        PageLayout(self._layout.spacing).layout(sizes)

        self.clear()
        return self._layout.layout(sizes)

    def add_page(self, page: Page, rendered_image: Any = None):
        """
        Attach a rendered image to a page of this scene's layout.

        Args:
            page: Page produced by `self.layout`
            rendered_image: Raster of the page, or None for a blank page
        """
        self._check_not_drawing("add a page")
        if page.index >= len(self._layout) or self._layout.page(page.index) != page:
            raise ValueError(f"Page {page.index} does not belong to this layout")

        self._images[page.index] = rendered_image
        self.page_added.emit(page.index)

    def insert_blank_page(self, index: int, size: Tuple[float, float]) -> Page:
        """
        Insert an empty page and shift the following pages down.

        Strokes anchored to shifted pages move with them.
        """
        self._check_not_drawing("insert a page")
        old_pages = self._layout.pages
        page = self._layout.insert_page(index, size)

        self._images = {
            (i + 1 if i >= index else i): image for i, image in self._images.items()
        }
        self._images[index] = None
        self._reanchor_strokes(old_pages, lambda i: i + 1 if i >= index else i)

        logger.info(f"Inserted blank page at {index} ({page.width:.0f}x{page.height:.0f})")
        self.pages_relaid_out.emit()
        return page

    def remove_page(self, index: int) -> Page:
        """
        Remove a page and shift the following pages up.

        Strokes anchored to the removed page are discarded.
        """
        self._check_not_drawing("remove a page")
        old_pages = self._layout.pages
        page = self._layout.remove_page(index)

        images = {}
        for i, image in self._images.items():
            if i < index:
                images[i] = image
            elif i > index:
                images[i - 1] = image
        self._images = images

        dropped = [h for h, s in self._strokes.items() if s.page_index == index]
        for handle in dropped:
            del self._strokes[handle]
        self._reanchor_strokes(old_pages, lambda i: i - 1 if i > index else i)

        logger.info(f"Removed page {index} and {len(dropped)} stroke(s) on it")
        self.pages_relaid_out.emit()
        return page

    def _reanchor_strokes(self, old_pages: Tuple[Page, ...], remap):
        for handle, stroke in list(self._strokes.items()):
            if stroke.page_index is None:
                continue
            new_index = remap(stroke.page_index)
            old_origin = old_pages[stroke.page_index].origin
            new_origin = self._layout.page_origin(new_index)
            dy = new_origin.y - old_origin.y
            dx = new_origin.x - old_origin.x
            if dx or dy or new_index != stroke.page_index:
                self._strokes[handle] = stroke.moved(dx, dy, new_index)

    def pages(self) -> Tuple[Page, ...]:
        return self._layout.pages

    def page_image(self, index: int) -> Any:
        """Get the rendered image of a page (None for blank pages)."""
        return self._images.get(index)

    def page_at(self, point: Tuple[float, float]) -> Optional[int]:
        return self._layout.page_at(point)

    def _check_not_drawing(self, action: str):
        if self._active_handle is not None:
            raise CanvasBusyError(
                f"Cannot {action} while stroke {self._active_handle} is being drawn"
            )

    # ==================== Strokes ====================

    def begin_stroke(self, point: Tuple[float, float], color: str, width: float) -> int:
        """
        Start a new stroke at `point`.

        Any stroke still active is frozen first.

        Returns:
            Handle of the new stroke
        """
        if self._active_handle is not None:
            logger.warning(f"Stroke {self._active_handle} was still active; ending it")
            self.end_stroke(self._active_handle)

        handle = next(self._handles)
        self._strokes[handle] = Stroke(handle, point, color, width)
        self._active_handle = handle
        self.stroke_started.emit(handle)
        return handle

    def extend_stroke(self, handle: int, point: Tuple[float, float]) -> bool:
        """
        Append a point to the active stroke.

        Returns:
            True if the point was added, False if `handle` is not active
        """
        if handle != self._active_handle:
            self._invalid(f"extend_stroke on inactive stroke {handle}")
            return False

        self._strokes[handle].append(point)
        self.stroke_extended.emit(handle)
        return True

    def end_stroke(self, handle: int) -> bool:
        """
        Freeze the active stroke and cache the page it belongs to.

        Returns:
            True if the stroke was frozen, False if `handle` is not active
        """
        if handle != self._active_handle:
            self._invalid(f"end_stroke on inactive stroke {handle}")
            return False

        stroke = self._strokes[handle]
        stroke.freeze(self._anchor_page(stroke))
        self._active_handle = None
        self.stroke_finished.emit(handle)
        return True

    def _anchor_page(self, stroke: Stroke) -> Optional[int]:
        # Page holding most of the points; ties go to the lower index
        counts: Dict[int, int] = {}
        for point in stroke.points:
            index = self._layout.page_at(point)
            if index is not None:
                counts[index] = counts.get(index, 0) + 1
        if not counts:
            return None
        return min(counts, key=lambda i: (-counts[i], i))

    def _invalid(self, message: str):
        if self._strict:
            raise InvalidStrokeOperation(message)
        logger.debug(f"Ignored {message}")

    def stroke(self, handle: int) -> Optional[Stroke]:
        return self._strokes.get(handle)

    def all_strokes(self) -> Tuple[Stroke, ...]:
        """Get all strokes in creation order."""
        return tuple(self._strokes.values())

    def strokes_on_page(self, index: int) -> Tuple[Stroke, ...]:
        """Get frozen strokes anchored to page `index`."""
        return tuple(
            s for s in self._strokes.values()
            if s.is_frozen and s.page_index == index
        )


__all__ = ['CanvasScene']
