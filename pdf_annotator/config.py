"""
Global configuration for PDF Annotator
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Final, Tuple

logger = logging.getLogger(__name__)


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "PDF Annotator"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "PDF Annotator"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent
    USER_DIR_NAME: Final[str] = "PDFAnnotator"
    SETTINGS_FILE_NAME: Final[str] = "settings.json"
    LOG_FILE_NAME: Final[str] = "pdf_annotator.log"
    LOG_MAX_BYTES: Final[int] = 2 * 1024 * 1024
    LOG_BACKUP_COUNT: Final[int] = 3

    # Page layout
    PAGE_SPACING: Final[float] = 20.0  # Gap between stacked pages (scene units)
    RENDER_SCALE: Final[float] = 2.0  # Raster pixels per PDF point
    BLANK_PAGE_SIZE: Final[Tuple[float, float]] = (595.0, 842.0)  # A4 in points
    PAGE_BACKGROUND_COLOR: Final[str] = '#ffffff'
    PAGE_BORDER_COLOR: Final[str] = '#808080'
    CANVAS_BACKGROUND_COLOR: Final[str] = '#505050'

    # Pen
    DEFAULT_PEN_COLOR: Final[str] = '#ff0000'
    DEFAULT_PEN_WIDTH: Final[int] = 3
    MIN_PEN_WIDTH: Final[int] = 1
    MAX_PEN_WIDTH: Final[int] = 20

    # Zoom
    ZOOM_STEP: Final[float] = 1.15  # Per wheel notch
    MIN_SCALE: Final[float] = 0.1
    MAX_SCALE: Final[float] = 10.0

    # Set to True to raise on stray stroke operations instead of ignoring them
    STRICT_STROKE_OPERATIONS: Final[bool] = False

    # Window settings
    MIN_WINDOW_WIDTH: Final[int] = 800
    MIN_WINDOW_HEIGHT: Final[int] = 600
    DEFAULT_WINDOW_WIDTH: Final[int] = 1200
    DEFAULT_WINDOW_HEIGHT: Final[int] = 900

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS) or
        .local/share (Linux). A 'portable.txt' file next to the package keeps
        everything in a local 'data' folder instead.
        """
        portable_flag = cls.APP_ROOT.parent / 'portable.txt'
        if portable_flag.exists():
            user_dir = cls.APP_ROOT.parent / 'data'
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / cls.USER_DIR_NAME
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / cls.USER_DIR_NAME
        else:
            user_dir = Path.home() / '.local' / 'share' / cls.USER_DIR_NAME

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get the log folder path."""
        return cls.get_user_data_dir() / 'logs'

    @classmethod
    def get_settings_file(cls) -> Path:
        """Get user settings JSON file path"""
        return cls.get_user_data_dir() / cls.SETTINGS_FILE_NAME

    # ==================== PEN SETTINGS ====================

    @classmethod
    def load_pen_settings(cls) -> Tuple[str, int]:
        """
        Load the last used pen color and width.

        Returns:
            (color, width), falling back to defaults for missing or bad values
        """
        color, width = cls.DEFAULT_PEN_COLOR, cls.DEFAULT_PEN_WIDTH
        settings_file = cls.get_settings_file()
        if not settings_file.exists():
            return color, width

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                settings = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {settings_file}: {e}")
            return color, width

        if not isinstance(settings, dict):
            return color, width
        if isinstance(settings.get('pen_color'), str):
            color = settings['pen_color']
        if isinstance(settings.get('pen_width'), int):
            width = max(cls.MIN_PEN_WIDTH, min(cls.MAX_PEN_WIDTH, settings['pen_width']))
        return color, width

    @classmethod
    def save_pen_settings(cls, color: str, width: int) -> bool:
        """Save pen color and width, keeping other settings in the file."""
        settings_file = cls.get_settings_file()
        try:
            settings = {}
            if settings_file.exists():
                try:
                    with open(settings_file, 'r', encoding='utf-8') as f:
                        settings = json.load(f)
                except json.JSONDecodeError:
                    logger.warning(f"Overwriting invalid settings file {settings_file}")
            if not isinstance(settings, dict):
                settings = {}

            settings['pen_color'] = color
            settings['pen_width'] = width

            with open(settings_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Could not save pen settings: {e}")
            return False


__all__ = ['Config']
