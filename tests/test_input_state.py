import random

import pytest

from pdf_annotator.core.canvas_scene import CanvasScene
from pdf_annotator.core.input_state import (
    Drawing,
    Idle,
    InputOutcome,
    InputStateMachine,
    Modifiers,
    PenStyle,
    PointerButton,
)
from pdf_annotator.core.page_layout import PageLayout
from pdf_annotator.services.document_loader import load_document


def test_press_move_release_creates_one_stroke(machine, loaded_scene):
    assert machine.press((10, 10)) == InputOutcome.STROKE_STARTED
    assert isinstance(machine.state, Drawing)
    assert machine.move((20, 20)) == InputOutcome.STROKE_EXTENDED
    assert machine.move((30, 25)) == InputOutcome.STROKE_EXTENDED
    assert machine.release() == InputOutcome.STROKE_FINISHED

    assert machine.state == Idle()
    (stroke,) = loaded_scene.all_strokes()
    assert stroke.points == ((10, 10), (20, 20), (30, 25))
    assert stroke.is_frozen


def test_stroke_uses_current_pen(machine, loaded_scene, pen):
    machine.press((10, 10))
    pen.color = '#0000FF'
    pen.width = 9
    machine.release()

    machine.press((50, 50))
    machine.release()

    first, second = loaded_scene.all_strokes()
    assert (first.color, first.width) == ('#ff0000', 3)
    assert (second.color, second.width) == ('#0000ff', 9)


def test_move_and_release_while_idle_are_ignored(machine, loaded_scene):
    assert machine.move((1, 1)) == InputOutcome.IGNORED
    assert machine.release() == InputOutcome.IGNORED
    assert loaded_scene.all_strokes() == ()


def test_events_ignored_without_pages(pen):
    scene = CanvasScene(PageLayout())
    machine = InputStateMachine(scene, pen)

    assert machine.press((1, 1)) == InputOutcome.IGNORED
    assert machine.move((2, 2)) == InputOutcome.IGNORED
    assert machine.release() == InputOutcome.IGNORED
    assert scene.all_strokes() == ()
    assert machine.state == Idle()


@pytest.mark.parametrize("button,modifiers", [
    (PointerButton.SECONDARY, Modifiers.NONE),
    (PointerButton.MIDDLE, Modifiers.NONE),
    (PointerButton.PRIMARY, Modifiers.ALT),
])
def test_pan_triggers_do_not_draw(machine, loaded_scene, button, modifiers):
    assert machine.press((10, 10), button, modifiers) == InputOutcome.PAN
    assert machine.state == Idle()
    assert loaded_scene.all_strokes() == ()


def test_second_press_while_drawing_is_ignored(machine, loaded_scene):
    machine.press((10, 10))

    assert machine.press((20, 20)) == InputOutcome.IGNORED
    assert machine.press((20, 20), PointerButton.SECONDARY) == InputOutcome.IGNORED
    assert len(loaded_scene.all_strokes()) == 1


def test_only_primary_release_ends_stroke(machine, loaded_scene):
    machine.press((10, 10))

    assert machine.release(PointerButton.SECONDARY) == InputOutcome.IGNORED
    assert machine.is_drawing
    assert machine.release(PointerButton.PRIMARY) == InputOutcome.STROKE_FINISHED


def test_stroke_may_start_in_page_gap(machine, loaded_scene):
    machine.press((10, 810))
    machine.release()

    (stroke,) = loaded_scene.all_strokes()
    assert stroke.page_index is None


def test_cancel_freezes_active_stroke(machine, loaded_scene):
    machine.press((10, 10))
    machine.move((20, 20))

    assert machine.cancel() is True
    assert machine.state == Idle()
    assert loaded_scene.all_strokes()[0].is_frozen
    assert machine.cancel() is False


def test_resyncs_after_scene_clear(machine, loaded_scene):
    machine.press((10, 10))
    loaded_scene.clear()

    assert machine.move((20, 20)) == InputOutcome.IGNORED
    assert machine.state == Idle()


def test_pen_style_clamps_and_validates():
    pen = PenStyle('#ABC', 50, min_width=1, max_width=20)

    assert pen.color == '#aabbcc'
    assert pen.width == 20
    pen.width = 0
    assert pen.width == 1
    with pytest.raises(ValueError):
        pen.color = 'red'


@pytest.mark.parametrize("seed", range(5))
def test_stroke_count_equals_started_strokes(loaded_scene, seed):
    rng = random.Random(seed)
    machine = InputStateMachine(loaded_scene)
    started = 0
    finished = 0

    for _ in range(300):
        kind = rng.choice(['press', 'move', 'release', 'pan'])
        point = (rng.uniform(-50, 700), rng.uniform(-50, 1900))
        if kind == 'press':
            started += machine.press(point) == InputOutcome.STROKE_STARTED
        elif kind == 'move':
            machine.move(point)
        elif kind == 'pan':
            machine.press(point, PointerButton.MIDDLE)
        else:
            finished += machine.release() == InputOutcome.STROKE_FINISHED
    finished += machine.release() == InputOutcome.STROKE_FINISHED

    strokes = loaded_scene.all_strokes()
    assert len(strokes) == started == finished
    assert all(s.is_frozen and len(s) >= 1 for s in strokes)


@pytest.mark.parametrize("moves", [0, 1, 7, 50])
def test_point_count_is_moves_plus_press(machine, loaded_scene, moves):
    path = [(10 + i, 20 + 2 * i) for i in range(moves + 1)]

    machine.press(path[0])
    for point in path[1:]:
        machine.move(point)
    machine.release()

    (stroke,) = loaded_scene.all_strokes()
    assert len(stroke) == moves + 1
    assert stroke.points == tuple(path)


def test_two_page_document_scenario(scene, fake_source):
    load_document(fake_source([(600, 800), (600, 1000)]), scene)
    machine = InputStateMachine(scene)

    machine.press((100, 100))
    machine.move((100, 200))
    machine.release()

    assert scene.layout.page_origin(0) == (0, 0)
    assert scene.layout.page_origin(1) == (0, 820)
    (stroke,) = scene.all_strokes()
    assert stroke.points == ((100, 100), (100, 200))
    assert all(scene.page_at(p) == 0 for p in stroke.points)
    assert stroke.page_index == 0
