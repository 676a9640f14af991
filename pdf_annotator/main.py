"""
PDF Annotator - Main Entry Point

Usage:
    python -m pdf_annotator.main [file.pdf]
    pdf-annotator [file.pdf]
"""

import sys
from typing import List, Optional

from PyQt6.QtWidgets import QApplication

from .config import Config
from .utils.logging_config import LoggingConfig


def setup_application(argv: List[str]) -> QApplication:
    """
    Create the Qt application with PDF Annotator metadata

    QSettings uses the organization and application names set here.

    Returns:
        Configured QApplication instance
    """
    app = QApplication(argv)
    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)
    return app


def _document_argument(args: List[str]) -> Optional[str]:
    """First non-option argument, taken as the PDF to open."""
    for arg in args:
        if not arg.startswith('-'):
            return arg
    return None


def main():
    """
    Main entry point for PDF Annotator

    Logging comes first so window construction and the initial document
    load are both captured in the log file.
    """
    LoggingConfig.setup_logging(
        Config.get_log_dir(),
        Config.LOG_FILE_NAME,
        max_bytes=Config.LOG_MAX_BYTES,
        backup_count=Config.LOG_BACKUP_COUNT
    )
    LoggingConfig.install_exception_hook()

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}")

    app = setup_application(sys.argv)

    from .widgets.main_window import MainWindow
    window = MainWindow()
    window.show()

    path = _document_argument(app.arguments()[1:])
    if path:
        logger.info(f"Opening {path} from command line")
        window.open_document(path)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
