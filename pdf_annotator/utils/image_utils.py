"""
Image utilities for turning rendered pages into Qt images
"""

import fitz  # PyMuPDF
from PyQt6.QtGui import QImage, QPixmap


def fitz_pixmap_to_qimage(pix: fitz.Pixmap) -> QImage:
    """
    Convert a PyMuPDF pixmap to a QImage that owns its pixel data

    Args:
        pix: RGB or RGBA pixmap from `Page.get_pixmap`

    Returns:
        Detached QImage copy (safe after `pix` is released)
    """
    image_format = QImage.Format.Format_RGBA8888 if pix.alpha else QImage.Format.Format_RGB888
    image = QImage(pix.samples, pix.width, pix.height, pix.stride, image_format)
    # QImage does not copy the buffer it wraps
    return image.copy()


def image_to_pixmap(image) -> QPixmap:
    """Wrap a rendered page image as a QPixmap (None gives a null pixmap)."""
    if image is None:
        return QPixmap()
    if isinstance(image, QPixmap):
        return image
    return QPixmap.fromImage(image)


__all__ = [
    'fitz_pixmap_to_qimage',
    'image_to_pixmap',
]
