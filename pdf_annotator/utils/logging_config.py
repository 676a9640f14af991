"""
Centralized logging configuration for PDF Annotator

One rotating log file per user plus console output. Uncaught exceptions
are written to the log before the interpreter's default hook runs.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_LEVEL_ENV = "PDF_ANNOTATOR_LOG_LEVEL"


class LoggingConfig:
    """Central logging configuration"""

    _initialized = False
    _log_file_path: Optional[Path] = None
    _handlers: List[logging.Handler] = []

    @classmethod
    def setup_logging(cls, log_dir: Path, file_name: str = "pdf_annotator.log",
                      console_level: int = logging.INFO,
                      max_bytes: int = 2 * 1024 * 1024, backup_count: int = 3):
        """
        Attach file and console handlers to the root logger (once).

        Args:
            log_dir: Folder for the log file, created if missing
            file_name: Log file name inside `log_dir`
            console_level: Console threshold, overridden by $PDF_ANNOTATOR_LOG_LEVEL
            max_bytes: Size at which the log file is rotated
            backup_count: Number of rotated files kept
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        cls._log_file_path = log_dir / file_name

        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        file_handler = RotatingFileHandler(
            cls._log_file_path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(cls._console_level(console_level))
        console_handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))

        cls._handlers = [file_handler, console_handler]
        for handler in cls._handlers:
            root.addHandler(handler)

        cls._initialized = True
        root.info(f"Logging to {cls._log_file_path}")

    @staticmethod
    def _console_level(default: int) -> int:
        name = os.environ.get(LOG_LEVEL_ENV, '').strip().upper()
        if not name:
            return default
        level = logging.getLevelName(name)
        # getLevelName returns a string for unknown names
        return level if isinstance(level, int) else default

    @classmethod
    def install_exception_hook(cls):
        """Log uncaught exceptions, then defer to the default hook."""
        def excepthook(exc_type, exc_value, exc_tb):
            if not issubclass(exc_type, KeyboardInterrupt):
                logging.getLogger('pdf_annotator').critical(
                    "Uncaught exception", exc_info=(exc_type, exc_value, exc_tb)
                )
            sys.__excepthook__(exc_type, exc_value, exc_tb)

        sys.excepthook = excepthook

    @classmethod
    def shutdown(cls):
        """Detach and close the handlers added by setup_logging."""
        root = logging.getLogger()
        for handler in cls._handlers:
            root.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._initialized = False
        cls._log_file_path = None

    @classmethod
    def get_logger(cls, name: str):
        """Get a logger instance"""
        return logging.getLogger(name)

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        """Get the log file path"""
        return cls._log_file_path


__all__ = ['LoggingConfig', 'LOG_LEVEL_ENV']
