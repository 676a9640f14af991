"""
PDF Annotator

Freehand annotation of PDF documents on a continuous, zoomable page canvas.
"""

__version__ = "1.0.0"

from .config import Config
from .events.event_bus import EventBus, get_event_bus

__all__ = [
    'Config',
    'EventBus',
    'get_event_bus',
]
