"""
Stroke renderer for creating graphics items from strokes and pages.
"""

from typing import Sequence, Tuple

from PyQt6.QtWidgets import (
    QGraphicsItem, QGraphicsPathItem, QGraphicsEllipseItem,
    QGraphicsRectItem, QGraphicsPixmapItem
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPen, QBrush, QColor, QPainterPath, QPixmap

from ..core.page_layout import Page
from ..core.stroke import Stroke

STROKE_Z = 1.0
PAGE_IMAGE_Z = 0.0
PAGE_BACKGROUND_Z = -1.0


def create_stroke_pen(color: str, width: float) -> QPen:
    """Create a round-capped solid pen for freehand strokes."""
    pen = QPen(QColor(color), width, Qt.PenStyle.SolidLine)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


def build_stroke_path(points: Sequence[Tuple[float, float]]) -> QPainterPath:
    """
    Build a polyline path through `points`.

    Args:
        points: Scene-space points, at least one

    Returns:
        QPainterPath starting at the first point
    """
    path = QPainterPath()
    if not points:
        return path
    path.moveTo(points[0][0], points[0][1])
    for point in points[1:]:
        path.lineTo(point[0], point[1])
    return path


def create_item_from_stroke(stroke: Stroke) -> QGraphicsItem:
    """
    Create graphics item for a stroke.

    Frozen single-point strokes become a filled dot of the pen width;
    everything else is a path item.
    """
    points = stroke.points

    if stroke.is_frozen and stroke.is_dot:
        radius = stroke.width / 2.0
        x, y = points[0]
        item = QGraphicsEllipseItem(x - radius, y - radius, stroke.width, stroke.width)
        item.setPen(QPen(Qt.PenStyle.NoPen))
        item.setBrush(QBrush(QColor(stroke.color)))
    else:
        item = QGraphicsPathItem(build_stroke_path(points))
        item.setPen(create_stroke_pen(stroke.color, stroke.width))

    item.setZValue(STROKE_Z)
    item.setData(0, stroke.handle)
    return item


def create_page_background(page: Page, fill: str, border: str) -> QGraphicsRectItem:
    """Create the page rectangle drawn behind the page raster."""
    item = QGraphicsRectItem(0, 0, page.width, page.height)
    item.setBrush(QBrush(QColor(fill)))
    item.setPen(QPen(QColor(border)))
    item.setZValue(PAGE_BACKGROUND_Z)
    item.setPos(page.origin_x, page.origin_y)
    return item


def create_page_image(page: Page, pixmap: QPixmap) -> QGraphicsPixmapItem:
    """
    Create the page raster item, scaled to the page's native size.

    The raster may be rendered at a higher resolution than the page size.
    """
    item = QGraphicsPixmapItem(pixmap)
    item.setTransformationMode(Qt.TransformationMode.SmoothTransformation)
    if pixmap.width() > 0:
        item.setScale(page.width / pixmap.width())
    item.setZValue(PAGE_IMAGE_Z)
    item.setPos(page.origin_x, page.origin_y)
    return item


__all__ = [
    'create_stroke_pen',
    'build_stroke_path',
    'create_item_from_stroke',
    'create_page_background',
    'create_page_image',
]
