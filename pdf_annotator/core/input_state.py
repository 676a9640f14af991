"""
Input state machine - turns pointer events into stroke operations.

States are tagged variants rather than handler subclasses:

    Idle --press(PRIMARY)--> Drawing(handle) --release(PRIMARY)--> Idle

Pan presses never leave Idle; the caller is told to start panning.
"""

import logging
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Optional, Tuple, Union

from ..utils.color_utils import normalize_hex_color
from .canvas_scene import CanvasScene

logger = logging.getLogger(__name__)


class PointerButton(Enum):
    """Pointer buttons the canvas distinguishes."""
    PRIMARY = 1
    SECONDARY = 2
    MIDDLE = 3


class Modifiers(Flag):
    """Keyboard modifiers held during a pointer event."""
    NONE = 0
    SHIFT = auto()
    CTRL = auto()
    ALT = auto()


class InputOutcome(Enum):
    """What an event did to the canvas."""
    IGNORED = 0
    STROKE_STARTED = 1
    STROKE_EXTENDED = 2
    STROKE_FINISHED = 3
    PAN = 4  # Caller should start panning


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Drawing:
    handle: int


InputState = Union[Idle, Drawing]


class PenStyle:
    """Pen color and width used for the next stroke."""

    def __init__(self, color: str = '#ff0000', width: int = 3,
                 min_width: int = 1, max_width: int = 20):
        self._min_width = min_width
        self._max_width = max_width
        self._color = normalize_hex_color(color)
        self._width = self._clamp(width)

    @property
    def color(self) -> str:
        return self._color

    @color.setter
    def color(self, value: str):
        self._color = normalize_hex_color(value)

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int):
        self._width = self._clamp(value)

    def _clamp(self, value: int) -> int:
        return max(self._min_width, min(self._max_width, int(value)))


class InputStateMachine:
    """
    Pointer event handler for the canvas.

    Events must be fed in arrival order. Positions are scene coordinates.
    """

    def __init__(self, scene: CanvasScene, style: Optional[PenStyle] = None):
        self._scene = scene
        self._style = style if style is not None else PenStyle()
        self._state: InputState = Idle()

    @property
    def state(self) -> InputState:
        return self._state

    @property
    def style(self) -> PenStyle:
        return self._style

    @property
    def is_drawing(self) -> bool:
        return isinstance(self._state, Drawing)

    @staticmethod
    def is_pan_trigger(button: PointerButton, modifiers: Modifiers = Modifiers.NONE) -> bool:
        if button in (PointerButton.SECONDARY, PointerButton.MIDDLE):
            return True
        return bool(modifiers & Modifiers.ALT)

    def _sync(self):
        # Drop a Drawing state whose stroke was ended behind our back (e.g. clear())
        if isinstance(self._state, Drawing) and self._scene.active_handle != self._state.handle:
            logger.debug(f"Stroke {self._state.handle} is no longer active; back to idle")
            self._state = Idle()

    # ==================== Events ====================

    def press(self, point: Tuple[float, float], button: PointerButton = PointerButton.PRIMARY,
              modifiers: Modifiers = Modifiers.NONE) -> InputOutcome:
        self._sync()
        if self._scene.page_count == 0:
            return InputOutcome.IGNORED

        if isinstance(self._state, Drawing):
            # Second button pressed mid-stroke
            return InputOutcome.IGNORED

        if self.is_pan_trigger(button, modifiers):
            return InputOutcome.PAN

        handle = self._scene.begin_stroke(point, self._style.color, self._style.width)
        self._state = Drawing(handle)
        return InputOutcome.STROKE_STARTED

    def move(self, point: Tuple[float, float]) -> InputOutcome:
        self._sync()
        if self._scene.page_count == 0 or not isinstance(self._state, Drawing):
            return InputOutcome.IGNORED

        if self._scene.extend_stroke(self._state.handle, point):
            return InputOutcome.STROKE_EXTENDED
        return InputOutcome.IGNORED

    def release(self, button: PointerButton = PointerButton.PRIMARY) -> InputOutcome:
        self._sync()
        if self._scene.page_count == 0 or not isinstance(self._state, Drawing):
            return InputOutcome.IGNORED
        if button != PointerButton.PRIMARY:
            return InputOutcome.IGNORED

        handle = self._state.handle
        self._state = Idle()
        self._scene.end_stroke(handle)
        return InputOutcome.STROKE_FINISHED

    def cancel(self) -> bool:
        """
        Force-terminate the active stroke (focus loss, document reload).

        The stroke is frozen and kept, not discarded.

        Returns:
            True if a stroke was ended
        """
        self._sync()
        if not isinstance(self._state, Drawing):
            return False

        handle = self._state.handle
        self._state = Idle()
        self._scene.end_stroke(handle)
        logger.debug(f"Stroke {handle} terminated early")
        return True


__all__ = [
    'PointerButton',
    'Modifiers',
    'InputOutcome',
    'Idle',
    'Drawing',
    'InputState',
    'PenStyle',
    'InputStateMachine',
]
