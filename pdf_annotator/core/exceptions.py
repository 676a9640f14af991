"""
Exception types for the annotation canvas.
"""

from typing import Optional


class AnnotatorError(Exception):
    """Base class for all annotator errors."""
    pass


class DocumentLoadFailure(AnnotatorError):
    """Raised when a document cannot be read or rendered.

    The canvas is never partially populated when this is raised.
    """

    def __init__(self, path: Optional[str], reason: str):
        self.path = path
        self.reason = reason
        if path:
            super().__init__(f"Failed to load '{path}': {reason}")
        else:
            super().__init__(f"Failed to load document: {reason}")


class InvalidStrokeOperation(AnnotatorError):
    """Raised when extending or ending a stroke that is not the active one."""
    pass


class DegenerateTransform(AnnotatorError):
    """Raised for zoom factors that cannot produce a valid transform."""
    pass


class CanvasBusyError(AnnotatorError):
    """Raised when the page list is mutated while a stroke is being drawn."""
    pass


__all__ = [
    'AnnotatorError',
    'DocumentLoadFailure',
    'InvalidStrokeOperation',
    'DegenerateTransform',
    'CanvasBusyError',
]
