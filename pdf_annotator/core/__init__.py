"""Annotation canvas model: pages, strokes, input handling and view transform"""

from .exceptions import (
    AnnotatorError,
    DocumentLoadFailure,
    InvalidStrokeOperation,
    DegenerateTransform,
    CanvasBusyError,
)
from .stroke import Point, Stroke
from .page_layout import Page, PageLayout
from .canvas_scene import CanvasScene
from .input_state import (
    PointerButton,
    Modifiers,
    InputOutcome,
    Idle,
    Drawing,
    PenStyle,
    InputStateMachine,
)
from .view_transform import ViewTransform

__all__ = [
    # Errors
    'AnnotatorError',
    'DocumentLoadFailure',
    'InvalidStrokeOperation',
    'DegenerateTransform',
    'CanvasBusyError',
    # Model
    'Point',
    'Stroke',
    'Page',
    'PageLayout',
    'CanvasScene',
    # Input
    'PointerButton',
    'Modifiers',
    'InputOutcome',
    'Idle',
    'Drawing',
    'PenStyle',
    'InputStateMachine',
    # View
    'ViewTransform',
]
