"""
Document source interface consumed by the canvas loader.

A document source knows how many pages a document has, the native size of
each page, and how to rasterize a page at a requested pixel size.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple


class DocumentSource(ABC):
    """Abstract paged document."""

    @property
    def path(self) -> Optional[str]:
        """File the document came from, if any."""
        return None

    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def page_size(self, index: int) -> Tuple[float, float]:
        """Native (width, height) of a page in document units (PDF points)."""

    @abstractmethod
    def render_page(self, index: int, target_size: Tuple[int, int]) -> Any:
        """Rasterize a page to an image of `target_size` pixels."""

    def close(self):
        """Release the underlying document."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


__all__ = ['DocumentSource']
