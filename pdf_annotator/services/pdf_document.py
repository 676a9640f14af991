"""
PDF document source backed by PyMuPDF.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import fitz  # PyMuPDF
from PyQt6.QtGui import QImage

from ..core.exceptions import DocumentLoadFailure
from ..utils.image_utils import fitz_pixmap_to_qimage
from .document_source import DocumentSource

logger = logging.getLogger(__name__)


class PdfDocumentSource(DocumentSource):
    """
    Opens a PDF with PyMuPDF and renders pages to QImages.

    Raises DocumentLoadFailure from the constructor when the file is
    missing, unreadable, corrupt or password protected.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = str(path)
        self._doc: Optional[fitz.Document] = None

        if not Path(self._path).is_file():
            raise DocumentLoadFailure(self._path, "file not found")

        try:
            doc = fitz.open(self._path)
        except Exception as e:
            raise DocumentLoadFailure(self._path, str(e)) from e

        if doc.needs_pass:
            doc.close()
            raise DocumentLoadFailure(self._path, "document is password protected")

        self._doc = doc
        logger.debug(f"Opened {self._path} ({doc.page_count} pages)")

    @property
    def path(self) -> Optional[str]:
        return self._path

    def _document(self) -> fitz.Document:
        if self._doc is None:
            raise DocumentLoadFailure(self._path, "document is closed")
        return self._doc

    def page_count(self) -> int:
        return self._document().page_count

    def page_size(self, index: int) -> Tuple[float, float]:
        rect = self._document()[index].rect
        return (rect.width, rect.height)

    def render_page(self, index: int, target_size: Tuple[int, int]) -> QImage:
        page = self._document()[index]
        rect = page.rect
        matrix = fitz.Matrix(target_size[0] / rect.width, target_size[1] / rect.height)
        pix = page.get_pixmap(matrix=matrix, alpha=False)
        return fitz_pixmap_to_qimage(pix)

    def close(self):
        if self._doc is not None:
            self._doc.close()
            self._doc = None


__all__ = ['PdfDocumentSource']
