"""
EventBus - Central event system for application-wide state

Pattern: Observer/Publisher-Subscriber over Qt signals
"""

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal


class EventBus(QObject):
    """
    Central event bus for decoupled communication between components

    Holds the document and pen state shared by the toolbar, the canvas view
    and the status bar. Setters only emit when the value actually changes.

    Usage:
        event_bus = get_event_bus()
        event_bus.pen_color_changed.connect(some_handler)
        event_bus.set_pen_color('#00ff00')
    """

    # Document events
    document_loaded = pyqtSignal(str, int)  # path, page_count
    document_load_failed = pyqtSignal(str, str)  # path, message
    page_count_changed = pyqtSignal(int)

    # Pen events (apply to the next stroke only)
    pen_color_changed = pyqtSignal(str)  # '#rrggbb'
    pen_width_changed = pyqtSignal(int)  # pixels

    # View events
    zoom_changed = pyqtSignal(float)  # scale factor

    # Stroke events
    stroke_count_changed = pyqtSignal(int)

    # Error events
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def __init__(self):
        super().__init__()

        # State storage
        self._document_path: Optional[str] = None
        self._page_count: int = 0
        self._pen_color: str = '#ff0000'
        self._pen_width: int = 3
        self._zoom: float = 1.0
        self._stroke_count: int = 0

    # Getters (read current state)

    def get_document_path(self) -> Optional[str]:
        """Get path of the open document, or None"""
        return self._document_path

    def get_page_count(self) -> int:
        return self._page_count

    def get_pen_color(self) -> str:
        return self._pen_color

    def get_pen_width(self) -> int:
        return self._pen_width

    def get_zoom(self) -> float:
        return self._zoom

    def get_stroke_count(self) -> int:
        return self._stroke_count

    # Setters (update state and emit signals)

    def set_document(self, path: str, page_count: int):
        """
        Record a successfully loaded document

        Args:
            path: Document file path
            page_count: Number of pages laid out on the canvas
        """
        self._document_path = path
        self._page_count = page_count
        self.document_loaded.emit(path, page_count)

    def set_page_count(self, page_count: int):
        if self._page_count != page_count:
            self._page_count = page_count
            self.page_count_changed.emit(page_count)

    def set_pen_color(self, color: str):
        """
        Set pen color for the next stroke

        Args:
            color: '#rrggbb' color string
        """
        if self._pen_color != color:
            self._pen_color = color
            self.pen_color_changed.emit(color)

    def set_pen_width(self, width: int):
        if self._pen_width != width:
            self._pen_width = width
            self.pen_width_changed.emit(width)

    def set_zoom(self, scale: float):
        if self._zoom != scale:
            self._zoom = scale
            self.zoom_changed.emit(scale)

    def set_stroke_count(self, count: int):
        if self._stroke_count != count:
            self._stroke_count = count
            self.stroke_count_changed.emit(count)

    # Convenience methods

    def report_load_failure(self, path: str, message: str):
        """Report a document that could not be opened"""
        self.document_load_failed.emit(path, message)
        self.report_error("document_load", message)

    def report_error(self, error_type: str, message: str):
        """
        Report an error to the UI

        Args:
            error_type: Type of error (e.g., "document_load", "canvas")
            message: Human-readable error message
        """
        self.error_occurred.emit(error_type, message)


# Singleton instance (lazy initialization)
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


# Export
__all__ = ['EventBus', 'get_event_bus']
