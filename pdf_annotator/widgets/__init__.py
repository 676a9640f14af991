"""UI Widgets for PDF Annotator"""

from .main_window import MainWindow
from .annotation_view import AnnotationView

__all__ = [
    'MainWindow',
    'AnnotationView',
]
