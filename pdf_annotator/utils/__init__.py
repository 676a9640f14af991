"""Utility functions for PDF Annotator"""

from .color_utils import normalize_hex_color
from .logging_config import LoggingConfig

__all__ = [
    'normalize_hex_color',
    'LoggingConfig',
]
