"""Shared fixtures for canvas tests"""

import os

import pytest
from PyQt6.QtWidgets import QApplication

from pdf_annotator.core.canvas_scene import CanvasScene
from pdf_annotator.core.exceptions import DocumentLoadFailure
from pdf_annotator.core.input_state import InputStateMachine, PenStyle
from pdf_annotator.core.page_layout import PageLayout
from pdf_annotator.services.document_source import DocumentSource

# Widgets need a platform plugin; offscreen runs without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeDocumentSource(DocumentSource):
    """In-memory document. Rendered 'images' are (index, target_size) tuples."""

    def __init__(self, sizes, fail_render_at=None, fail_count=False, path="fake.pdf"):
        self._sizes = list(sizes)
        self._fail_render_at = fail_render_at
        self._fail_count = fail_count
        self._path = path
        self.rendered = []
        self.closed = False

    @property
    def path(self):
        return self._path

    def page_count(self):
        if self._fail_count:
            raise RuntimeError("corrupt xref table")
        return len(self._sizes)

    def page_size(self, index):
        return self._sizes[index]

    def render_page(self, index, target_size):
        if index == self._fail_render_at:
            raise DocumentLoadFailure(self._path, f"page {index + 1} is damaged")
        self.rendered.append((index, target_size))
        return (index, target_size)

    def close(self):
        self.closed = True


class SignalRecorder:
    """Collects (signal_name, args) for every emission of the given signals."""

    def __init__(self, obj, *names):
        self.events = []
        for name in names:
            getattr(obj, name).connect(
                lambda *args, _name=name: self.events.append((_name,) + args)
            )

    def names(self):
        return [event[0] for event in self.events]


@pytest.fixture
def layout():
    return PageLayout(spacing=20.0)


@pytest.fixture
def scene(layout):
    return CanvasScene(layout)


@pytest.fixture
def loaded_scene(scene):
    """Scene with two pages: 600x800 at y=0 and 600x1000 at y=820."""
    for page in scene.reset_pages([(600, 800), (600, 1000)]):
        scene.add_page(page, f"image-{page.index}")
    return scene


@pytest.fixture
def pen():
    return PenStyle('#ff0000', 3)


@pytest.fixture
def machine(loaded_scene, pen):
    return InputStateMachine(loaded_scene, pen)


@pytest.fixture
def fake_source():
    return FakeDocumentSource


@pytest.fixture
def recorder():
    return SignalRecorder


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Widget-capable application on the offscreen platform (no display needed)."""
    app = QApplication.instance() or QApplication([])
    yield app
