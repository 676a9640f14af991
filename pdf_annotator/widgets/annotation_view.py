"""
AnnotationView - Graphics view rendering the paginated annotation canvas

Draws the pages and strokes of a CanvasScene and feeds Qt input events to
the input state machine and the view transform:
- Left button draws freehand strokes
- Right/middle button (or Alt+left) drag pans
- Ctrl+wheel zooms toward the cursor, plain wheel scrolls
"""

import logging
from typing import Dict, List, Optional, Tuple

from PyQt6.QtWidgets import QGraphicsView, QGraphicsScene, QGraphicsItem, QWidget
from PyQt6.QtCore import Qt, pyqtSignal, QPoint, QPointF, QRectF
from PyQt6.QtGui import QPainter, QColor, QBrush, QTransform, QCursor

from ..config import Config
from ..core.canvas_scene import CanvasScene
from ..core.input_state import InputStateMachine, InputOutcome, PointerButton, Modifiers
from ..core.view_transform import ViewTransform
from ..utils.image_utils import image_to_pixmap
from .stroke_renderer import (
    build_stroke_path,
    create_item_from_stroke,
    create_page_background,
    create_page_image
)

logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}


def _to_modifiers(qt_modifiers) -> Modifiers:
    modifiers = Modifiers.NONE
    if qt_modifiers & Qt.KeyboardModifier.ShiftModifier:
        modifiers |= Modifiers.SHIFT
    if qt_modifiers & Qt.KeyboardModifier.ControlModifier:
        modifiers |= Modifiers.CTRL
    if qt_modifiers & Qt.KeyboardModifier.AltModifier:
        modifiers |= Modifiers.ALT
    return modifiers


class AnnotationView(QGraphicsView):
    """
    View over a CanvasScene.

    Features:
    - Pages drawn as white rectangles with the page raster on top
    - Live stroke rendering while drawing
    - Zoom toward cursor and unclamped panning
    - Active stroke is ended when the view loses focus

    The ViewTransform is the source of truth for scale and pan. Qt gets the
    scale as the view transform and the pan as scroll bar values; the view's
    scene rect is regrown around the visible area on every update so Qt never
    clamps the scroll position.
    """

    # Signals
    zoom_changed = pyqtSignal(float)  # scale
    stroke_finished = pyqtSignal(int)  # stroke handle

    VIEW_MARGIN = 20.0
    SCROLL_MARGIN = 1000.0  # Viewport pixels of slack around the visible area
    WHEEL_SCROLL_PIXELS = 60.0  # Per wheel notch

    def __init__(
        self,
        canvas: CanvasScene,
        input_machine: InputStateMachine,
        view_transform: ViewTransform,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self._canvas = canvas
        self._input = input_machine
        self._transform = view_transform
        self._scene = QGraphicsScene()

        # Rendered items
        self._page_items: Dict[int, List[QGraphicsItem]] = {}  # page index -> items
        self._stroke_items: Dict[int, QGraphicsItem] = {}  # stroke handle -> item

        # Pan drag state
        self._pan_button: Optional[Qt.MouseButton] = None
        self._pan_last: Optional[QPointF] = None

        self._setup_view()
        self._connect_canvas()
        self.rebuild()
        self.reset_view()

    def _setup_view(self):
        """Configure the graphics view."""
        self._scene.setBackgroundBrush(QBrush(QColor(Config.CANVAS_BACKGROUND_COLOR)))
        self.setScene(self._scene)

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))

    def _connect_canvas(self):
        self._canvas.cleared.connect(self._on_cleared)
        self._canvas.page_added.connect(self._on_page_added)
        self._canvas.pages_relaid_out.connect(self.rebuild)
        self._canvas.stroke_started.connect(self._on_stroke_started)
        self._canvas.stroke_extended.connect(self._on_stroke_extended)
        self._canvas.stroke_finished.connect(self._on_stroke_finished)

    # ==================== Properties ====================

    @property
    def canvas(self) -> CanvasScene:
        return self._canvas

    @property
    def view_transform(self) -> ViewTransform:
        return self._transform

    def stroke_item(self, handle: int) -> Optional[QGraphicsItem]:
        """Get the graphics item currently drawn for a stroke."""
        return self._stroke_items.get(handle)

    # ==================== View Transform ====================

    def _visible_scene_rect(self) -> QRectF:
        """Scene area the ViewTransform puts in the viewport."""
        scale = self._transform.scale
        top_left = self._transform.map_to_scene((0, 0))
        viewport = self.viewport()
        return QRectF(top_left.x, top_left.y, viewport.width() / scale, viewport.height() / scale)

    def _update_scene_rect(self):
        rect = self._visible_scene_rect()
        x, y, width, height = self._canvas.layout.scene_bounds()
        if width > 0 and height > 0:
            rect = rect.united(QRectF(x, y, width, height))
        margin = self.SCROLL_MARGIN / self._transform.scale
        self.setSceneRect(rect.adjusted(-margin, -margin, margin, margin))

    def _apply_view_transform(self):
        """Push scale and pan to Qt. Translation goes through the scroll bars."""
        scale = self._transform.scale
        offset = self._transform.offset
        self.setTransform(QTransform.fromScale(scale, scale))
        self._update_scene_rect()
        self.horizontalScrollBar().setValue(round(-offset.x))
        self.verticalScrollBar().setValue(round(-offset.y))

        qt_origin = self.mapToScene(QPoint(0, 0))
        origin = self._transform.map_to_scene((0, 0))
        drift = max(abs(qt_origin.x() - origin.x), abs(qt_origin.y() - origin.y)) * scale
        if drift > 1.0:
            logger.warning(f"Qt view is {drift:.1f}px away from the view transform")

        self.zoom_changed.emit(scale)

    def reset_view(self):
        """Back to 100% with the first page near the top-left corner."""
        self._transform.reset()
        self._transform.pan(self.VIEW_MARGIN, self.VIEW_MARGIN)
        self._apply_view_transform()

    def _anchor(self, anchor: Optional[QPointF]) -> Tuple[float, float]:
        if anchor is None:
            return (self.viewport().width() / 2, self.viewport().height() / 2)
        return (anchor.x(), anchor.y())

    def zoom_in(self, anchor: Optional[QPointF] = None):
        """Zoom one step in, keeping `anchor` (viewport center by default) fixed."""
        if self._transform.zoom_in(self._anchor(anchor)) != 1.0:
            self._apply_view_transform()

    def zoom_out(self, anchor: Optional[QPointF] = None):
        if self._transform.zoom_out(self._anchor(anchor)) != 1.0:
            self._apply_view_transform()

    def pan(self, dx: float, dy: float):
        """Move the view by a viewport-pixel delta. Not limited to the pages."""
        self._transform.pan(dx, dy)
        self._apply_view_transform()

    def _scene_pos(self, position: QPointF) -> Tuple[float, float]:
        # mapToScene only takes integer points; keep sub-pixel precision
        inverse, _ = self.viewportTransform().inverted()
        pos = inverse.map(position)
        return (pos.x(), pos.y())

    # ==================== Canvas Signals ====================

    def _on_cleared(self):
        """Drop all rendered items and pixmaps."""
        self._scene.clear()
        self._page_items.clear()
        self._stroke_items.clear()

    def _on_page_added(self, index: int):
        self._add_page_items(index)

    def _add_page_items(self, index: int):
        page = self._canvas.layout.page(index)
        items = [create_page_background(page, Config.PAGE_BACKGROUND_COLOR, Config.PAGE_BORDER_COLOR)]

        pixmap = image_to_pixmap(self._canvas.page_image(index))
        if not pixmap.isNull():
            items.append(create_page_image(page, pixmap))

        for item in items:
            self._scene.addItem(item)
        self._page_items[index] = items

    def _on_stroke_started(self, handle: int):
        stroke = self._canvas.stroke(handle)
        if stroke is None:
            return
        item = create_item_from_stroke(stroke)
        self._scene.addItem(item)
        self._stroke_items[handle] = item

    def _on_stroke_extended(self, handle: int):
        stroke = self._canvas.stroke(handle)
        item = self._stroke_items.get(handle)
        if stroke is None or item is None:
            return
        item.setPath(build_stroke_path(stroke.points))

    def _on_stroke_finished(self, handle: int):
        stroke = self._canvas.stroke(handle)
        if stroke is None:
            return
        # Replace the live item (dots render differently once frozen)
        old_item = self._stroke_items.pop(handle, None)
        if old_item is not None and old_item.scene() is not None:
            self._scene.removeItem(old_item)
        self._on_stroke_started(handle)
        self.stroke_finished.emit(handle)

    def rebuild(self):
        """Recreate every item from the canvas (after pages are inserted or removed)."""
        self._on_cleared()
        for page in self._canvas.pages():
            self._add_page_items(page.index)
        for stroke in self._canvas.all_strokes():
            self._on_stroke_started(stroke.handle)

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event):
        button = _BUTTONS.get(event.button())
        if button is None or self._pan_button is not None:
            super().mousePressEvent(event)
            return

        outcome = self._input.press(
            self._scene_pos(event.position()), button, _to_modifiers(event.modifiers())
        )

        if outcome == InputOutcome.PAN:
            self._pan_button = event.button()
            self._pan_last = event.position()
            self.setCursor(QCursor(Qt.CursorShape.ClosedHandCursor))
            event.accept()
        elif outcome == InputOutcome.STROKE_STARTED:
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._pan_button is not None:
            delta = event.position() - self._pan_last
            self._pan_last = event.position()
            self.pan(delta.x(), delta.y())
            event.accept()
            return

        if self._input.move(self._scene_pos(event.position())) == InputOutcome.STROKE_EXTENDED:
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if self._pan_button is not None:
            if event.button() == self._pan_button:
                self._pan_button = None
                self._pan_last = None
                self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
            event.accept()
            return

        button = _BUTTONS.get(event.button())
        if button is not None and self._input.release(button) == InputOutcome.STROKE_FINISHED:
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def wheelEvent(self, event):
        """Ctrl+wheel zooms toward the cursor; plain wheel scrolls."""
        delta = event.angleDelta()
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            if delta.y() > 0:
                self.zoom_in(event.position())
            elif delta.y() < 0:
                self.zoom_out(event.position())
        else:
            notches_x = delta.x() / 120.0
            notches_y = delta.y() / 120.0
            self.pan(notches_x * self.WHEEL_SCROLL_PIXELS, notches_y * self.WHEEL_SCROLL_PIXELS)
        event.accept()

    def focusOutEvent(self, event):
        """End the active stroke; its release may never arrive."""
        if self._input.cancel():
            logger.debug("Stroke ended on focus loss")
        self._pan_button = None
        self._pan_last = None
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
        super().focusOutEvent(event)

    def resizeEvent(self, event):
        """Keep the pan offset on resize."""
        super().resizeEvent(event)
        self._apply_view_transform()


__all__ = ['AnnotationView']
