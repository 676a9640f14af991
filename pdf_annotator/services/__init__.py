"""Services for PDF Annotator"""

from .document_source import DocumentSource
from .document_loader import load_document, stage_pages, target_pixel_size

__all__ = [
    'DocumentSource',
    'load_document',
    'stage_pages',
    'target_pixel_size',
]
