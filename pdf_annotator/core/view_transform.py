"""
View transform controller - presentation-only scale and pan.

Maps scene coordinates to screen (viewport) coordinates:

    screen = scene * scale + offset

Nothing here touches page or stroke data.
"""

import logging
import math
from typing import Tuple

from .exceptions import DegenerateTransform
from .stroke import Point

logger = logging.getLogger(__name__)


class ViewTransform:
    """Uniform scale plus pan offset, with the scale clamped to a zoom range."""

    def __init__(self, min_scale: float = 0.1, max_scale: float = 10.0, zoom_step: float = 1.15):
        if not 0 < min_scale <= 1.0 <= max_scale:
            raise ValueError(f"Invalid zoom range: [{min_scale}, {max_scale}]")
        if zoom_step <= 1.0:
            raise ValueError(f"Zoom step must be greater than 1: {zoom_step}")

        self._min_scale = min_scale
        self._max_scale = max_scale
        self._zoom_step = zoom_step
        self._scale = 1.0
        self._offset_x = 0.0
        self._offset_y = 0.0

    # ==================== Properties ====================

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def offset(self) -> Point:
        return Point(self._offset_x, self._offset_y)

    @property
    def min_scale(self) -> float:
        return self._min_scale

    @property
    def max_scale(self) -> float:
        return self._max_scale

    def set_scale(self, scale: float):
        """Set the scale directly, clamped to the zoom range."""
        if not math.isfinite(scale) or scale <= 0:
            raise DegenerateTransform(f"Invalid scale: {scale}")
        self._scale = self._clamp(scale)

    def _clamp(self, scale: float) -> float:
        return max(self._min_scale, min(self._max_scale, scale))

    # ==================== Operations ====================

    def zoom(self, factor: float, anchor: Tuple[float, float]) -> float:
        """
        Zoom by `factor`, keeping `anchor` fixed on screen.

        Args:
            factor: Scale multiplier (> 1 zooms in)
            anchor: Screen point that must not move, usually the cursor

        Returns:
            The factor actually applied after clamping (1.0 if nothing changed)
        """
        if not math.isfinite(factor) or factor <= 0:
            logger.warning(f"Ignoring degenerate zoom factor: {factor}")
            return 1.0

        new_scale = self._clamp(self._scale * factor)
        if new_scale == self._scale:
            return 1.0

        # Scene point under the anchor stays under the anchor
        scene_x, scene_y = self.map_to_scene(anchor)
        applied = new_scale / self._scale
        self._scale = new_scale
        self._offset_x = anchor[0] - scene_x * new_scale
        self._offset_y = anchor[1] - scene_y * new_scale
        return applied

    def zoom_in(self, anchor: Tuple[float, float]) -> float:
        return self.zoom(self._zoom_step, anchor)

    def zoom_out(self, anchor: Tuple[float, float]) -> float:
        return self.zoom(1.0 / self._zoom_step, anchor)

    def pan(self, dx: float, dy: float):
        """Move the view by a screen-space delta. Not clamped to content."""
        self._offset_x += dx
        self._offset_y += dy

    def reset(self):
        self._scale = 1.0
        self._offset_x = 0.0
        self._offset_y = 0.0

    # ==================== Mapping ====================

    def map_to_screen(self, point: Tuple[float, float]) -> Point:
        return Point(point[0] * self._scale + self._offset_x,
                     point[1] * self._scale + self._offset_y)

    def map_to_scene(self, point: Tuple[float, float]) -> Point:
        return Point((point[0] - self._offset_x) / self._scale,
                     (point[1] - self._offset_y) / self._scale)


__all__ = ['ViewTransform']
