"""
Document loader - populates the canvas from a document source.

Loading is all-or-nothing: every page size and raster is fetched before the
canvas is touched, so a failing document leaves the previous content as is.
"""

import logging
import math
from typing import Any, List, Optional, Tuple

from ..core.canvas_scene import CanvasScene
from ..core.exceptions import DocumentLoadFailure
from ..core.input_state import InputStateMachine
from ..core.view_transform import ViewTransform
from .document_source import DocumentSource

logger = logging.getLogger(__name__)


def target_pixel_size(page_size: Tuple[float, float], render_scale: float) -> Tuple[int, int]:
    """
    Get the raster size for a page rendered at `render_scale` pixels per unit

    Returns:
        (width, height) in pixels, at least 1x1
    """
    return (max(1, round(page_size[0] * render_scale)),
            max(1, round(page_size[1] * render_scale)))


def stage_pages(source: DocumentSource, render_scale: float = 1.0) -> List[Tuple[Tuple[float, float], Any]]:
    """
    Read every page size and render every page.

    Args:
        source: Document to read
        render_scale: Raster pixels per document unit

    Returns:
        List of ((width, height), image) in page order

    Raises:
        DocumentLoadFailure: if any page cannot be read or rendered
    """
    path = source.path
    try:
        count = source.page_count()
    except DocumentLoadFailure:
        raise
    except Exception as e:
        raise DocumentLoadFailure(path, f"cannot read page count: {e}") from e

    if count < 0:
        raise DocumentLoadFailure(path, f"invalid page count: {count}")

    staged = []
    for index in range(count):
        try:
            width, height = source.page_size(index)
            width, height = float(width), float(height)
        except DocumentLoadFailure:
            raise
        except Exception as e:
            raise DocumentLoadFailure(path, f"cannot read size of page {index + 1}: {e}") from e

        if not (width > 0 and height > 0 and math.isfinite(width) and math.isfinite(height)):
            raise DocumentLoadFailure(path, f"page {index + 1} has invalid size {width}x{height}")

        try:
            image = source.render_page(index, target_pixel_size((width, height), render_scale))
        except DocumentLoadFailure:
            raise
        except Exception as e:
            raise DocumentLoadFailure(path, f"cannot render page {index + 1}: {e}") from e

        staged.append(((width, height), image))

    return staged


def load_document(
    source: DocumentSource,
    scene: CanvasScene,
    input_machine: Optional[InputStateMachine] = None,
    view_transform: Optional[ViewTransform] = None,
    render_scale: float = 1.0
) -> int:
    """
    Replace the canvas content with the pages of `source`.

    The active stroke, if any, is ended before the scene is cleared, and the
    view transform is reset.

    Args:
        source: Document to load
        scene: Canvas scene to populate
        input_machine: Input handler whose active stroke must be ended
        view_transform: View to reset after loading
        render_scale: Raster pixels per document unit

    Returns:
        Number of pages loaded

    Raises:
        DocumentLoadFailure: nothing on the canvas has changed
    """
    staged = stage_pages(source, render_scale)

    if input_machine is not None:
        input_machine.cancel()
    pages = scene.reset_pages(size for size, _ in staged)
    for page, (_, image) in zip(pages, staged):
        scene.add_page(page, image)

    if view_transform is not None:
        view_transform.reset()

    logger.info(f"Loaded {len(pages)} page(s) from {source.path or 'document'}")
    return len(pages)


__all__ = ['target_pixel_size', 'stage_pages', 'load_document']
