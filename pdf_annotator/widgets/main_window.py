"""
MainWindow - Main application window

Pattern: QMainWindow with a toolbar over a single annotation view
"""

import logging

from PyQt6.QtWidgets import (
    QMainWindow, QToolBar, QSpinBox, QStatusBar, QFileDialog,
    QMessageBox, QColorDialog, QLabel
)
from PyQt6.QtCore import QSettings, QSize
from PyQt6.QtGui import QAction, QCloseEvent, QColor, QIcon, QKeySequence, QPixmap

from ..config import Config
from ..core.canvas_scene import CanvasScene
from ..core.exceptions import CanvasBusyError, DocumentLoadFailure
from ..core.input_state import InputStateMachine, PenStyle
from ..core.page_layout import PageLayout
from ..core.view_transform import ViewTransform
from ..events.event_bus import get_event_bus
from ..services.document_loader import load_document
from ..services.pdf_document import PdfDocumentSource
from .annotation_view import AnnotationView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window

    Features:
    - Open PDF, pen color and pen width controls
    - Zoom in/out/reset and blank page actions
    - Status bar with page count, stroke count and zoom level
    - Window geometry and pen settings persistence

    Toolbar, view and status bar talk through the event bus; the status bar
    and window title only read event bus state.
    """

    ERROR_MESSAGE_TIMEOUT_MS = 5000

    def __init__(self, parent=None):
        super().__init__(parent)

        self._event_bus = get_event_bus()

        # Canvas model
        self._layout = PageLayout(spacing=Config.PAGE_SPACING)
        self._canvas = CanvasScene(self._layout, strict=Config.STRICT_STROKE_OPERATIONS, parent=self)
        self._pen = self._load_pen_style()
        self._input = InputStateMachine(self._canvas, self._pen)
        self._view_transform = ViewTransform(
            min_scale=Config.MIN_SCALE,
            max_scale=Config.MAX_SCALE,
            zoom_step=Config.ZOOM_STEP
        )

        self._setup_window()
        self._create_widgets()
        self._create_toolbar()
        self._connect_signals()
        self._sync_canvas_state()
        self._event_bus.set_zoom(self._view_transform.scale)
        self._load_settings()
        self._update_status()

    def _load_pen_style(self) -> PenStyle:
        color, width = Config.load_pen_settings()
        try:
            pen = PenStyle(color, width, Config.MIN_PEN_WIDTH, Config.MAX_PEN_WIDTH)
        except ValueError:
            logger.warning(f"Ignoring saved pen color {color!r}")
            pen = PenStyle(Config.DEFAULT_PEN_COLOR, width, Config.MIN_PEN_WIDTH, Config.MAX_PEN_WIDTH)
        self._event_bus.set_pen_color(pen.color)
        self._event_bus.set_pen_width(pen.width)
        return pen

    def _setup_window(self):
        self.setWindowTitle(Config.APP_NAME)
        self.setMinimumSize(Config.MIN_WINDOW_WIDTH, Config.MIN_WINDOW_HEIGHT)
        self.resize(Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

    def _create_widgets(self):
        self._view = AnnotationView(self._canvas, self._input, self._view_transform, self)
        self.setCentralWidget(self._view)

        self._status_bar = QStatusBar()
        self._zoom_label = QLabel()
        self._status_bar.addPermanentWidget(self._zoom_label)
        self.setStatusBar(self._status_bar)

    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        toolbar.setObjectName("main_toolbar")
        toolbar.setIconSize(QSize(20, 20))
        self.addToolBar(toolbar)

        self._open_action = QAction(QIcon.fromTheme("document-open"), "Open PDF", self)
        self._open_action.setShortcut(QKeySequence.StandardKey.Open)
        toolbar.addAction(self._open_action)

        toolbar.addSeparator()

        self._color_action = QAction("Pen Color", self)
        self._update_color_icon(self._pen.color)
        toolbar.addAction(self._color_action)

        self._width_spinner = QSpinBox()
        self._width_spinner.setRange(Config.MIN_PEN_WIDTH, Config.MAX_PEN_WIDTH)
        self._width_spinner.setSuffix("px")
        self._width_spinner.setValue(self._pen.width)
        self._width_spinner.setToolTip("Pen width")
        toolbar.addWidget(self._width_spinner)

        toolbar.addSeparator()

        self._zoom_in_action = QAction(QIcon.fromTheme("zoom-in"), "Zoom In", self)
        self._zoom_in_action.setShortcut(QKeySequence.StandardKey.ZoomIn)
        toolbar.addAction(self._zoom_in_action)

        self._zoom_out_action = QAction(QIcon.fromTheme("zoom-out"), "Zoom Out", self)
        self._zoom_out_action.setShortcut(QKeySequence.StandardKey.ZoomOut)
        toolbar.addAction(self._zoom_out_action)

        self._zoom_reset_action = QAction(QIcon.fromTheme("zoom-original"), "Actual Size", self)
        self._zoom_reset_action.setShortcut(QKeySequence("Ctrl+0"))
        toolbar.addAction(self._zoom_reset_action)

        toolbar.addSeparator()

        self._add_page_action = QAction(QIcon.fromTheme("document-new"), "Add Page", self)
        self._add_page_action.setToolTip("Append a blank page")
        toolbar.addAction(self._add_page_action)

    def _connect_signals(self):
        self._open_action.triggered.connect(self._open_pdf)
        self._color_action.triggered.connect(self._select_pen_color)
        self._width_spinner.valueChanged.connect(self._event_bus.set_pen_width)
        self._zoom_in_action.triggered.connect(lambda: self._view.zoom_in())
        self._zoom_out_action.triggered.connect(lambda: self._view.zoom_out())
        self._zoom_reset_action.triggered.connect(self._view.reset_view)
        self._add_page_action.triggered.connect(self.add_blank_page)

        self._view.zoom_changed.connect(self._event_bus.set_zoom)
        self._view.stroke_finished.connect(lambda _: self._sync_canvas_state())

        self._event_bus.pen_color_changed.connect(self._on_pen_color_changed)
        self._event_bus.pen_width_changed.connect(self._on_pen_width_changed)
        self._event_bus.document_loaded.connect(self._on_document_loaded)
        self._event_bus.document_load_failed.connect(self._on_load_failed)
        self._event_bus.page_count_changed.connect(lambda _: self._update_status())
        self._event_bus.stroke_count_changed.connect(lambda _: self._update_status())
        self._event_bus.zoom_changed.connect(lambda _: self._update_status())
        self._event_bus.error_occurred.connect(self._on_error)

    # ==================== Properties ====================

    @property
    def canvas(self) -> CanvasScene:
        return self._canvas

    @property
    def view(self) -> AnnotationView:
        return self._view

    # ==================== Actions ====================

    def _open_pdf(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open PDF File", "", "PDF Files (*.pdf)")
        if not path:
            return
        self.open_document(path)

    def open_document(self, path: str) -> bool:
        """
        Load a PDF into the canvas.

        On failure the canvas keeps its current content.

        Returns:
            True if the document was loaded
        """
        try:
            with PdfDocumentSource(path) as source:
                page_count = load_document(
                    source, self._canvas, self._input, render_scale=Config.RENDER_SCALE
                )
        except DocumentLoadFailure as e:
            logger.error(str(e))
            self._event_bus.report_load_failure(path, e.reason)
            return False

        self._view.reset_view()
        self._event_bus.set_document(path, page_count)
        self._sync_canvas_state()
        return True

    def _select_pen_color(self):
        color = QColorDialog.getColor(QColor(self._pen.color), self, "Select Pen Color")
        if color.isValid():
            self._event_bus.set_pen_color(color.name())

    def add_blank_page(self) -> bool:
        """
        Append a blank page sized like the last page (A4 for an empty canvas).

        Returns:
            True if the page was added, False while a stroke is being drawn
        """
        size = Config.BLANK_PAGE_SIZE
        pages = self._canvas.pages()
        if pages:
            size = pages[-1].size
        try:
            self._canvas.insert_blank_page(len(pages), size)
        except CanvasBusyError as e:
            logger.warning(str(e))
            self._event_bus.report_error("canvas", str(e))
            return False
        self._sync_canvas_state()
        return True

    # ==================== Event Handlers ====================

    def _sync_canvas_state(self):
        self._event_bus.set_page_count(self._canvas.page_count)
        self._event_bus.set_stroke_count(len(self._canvas.all_strokes()))

    def _on_pen_color_changed(self, color: str):
        # Applies to the next stroke only
        self._pen.color = color
        self._update_color_icon(self._pen.color)

    def _on_pen_width_changed(self, width: int):
        self._pen.width = width
        if self._width_spinner.value() != self._pen.width:
            self._width_spinner.setValue(self._pen.width)

    def _on_document_loaded(self, path: str, page_count: int):
        self.setWindowTitle(f"{Config.APP_NAME} - {self._event_bus.get_document_path()}")
        logger.info(f"Showing {path} ({page_count} pages)")

    def _on_load_failed(self, path: str, message: str):
        QMessageBox.critical(self, "Error", f"Failed to load PDF file.\n\n{message}")

    def _on_error(self, error_type: str, message: str):
        self._status_bar.showMessage(f"Error: {message}", self.ERROR_MESSAGE_TIMEOUT_MS)

    def _update_color_icon(self, color: str):
        pixmap = QPixmap(16, 16)
        pixmap.fill(QColor(color))
        self._color_action.setIcon(QIcon(pixmap))
        self._color_action.setToolTip(f"Pen color ({color})")

    def _update_status(self):
        pages = self._event_bus.get_page_count()
        strokes = self._event_bus.get_stroke_count()
        self._status_bar.showMessage(f"{pages} page(s), {strokes} stroke(s)")
        self._zoom_label.setText(f"{self._event_bus.get_zoom() * 100:.0f}%")

    # ==================== Settings ====================

    def _load_settings(self):
        """Load window geometry"""
        settings = QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        if settings.contains("window/geometry"):
            self.restoreGeometry(settings.value("window/geometry"))
        if settings.contains("window/state"):
            self.restoreState(settings.value("window/state"))

    def _save_settings(self):
        """Save window geometry and pen settings"""
        settings = QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        settings.setValue("window/geometry", self.saveGeometry())
        settings.setValue("window/state", self.saveState())
        Config.save_pen_settings(self._event_bus.get_pen_color(), self._event_bus.get_pen_width())

    def closeEvent(self, event: QCloseEvent):
        self._input.cancel()
        self._save_settings()
        super().closeEvent(event)


__all__ = ['MainWindow']
