import pytest

from pdf_annotator.core.exceptions import InvalidStrokeOperation
from pdf_annotator.core.stroke import Point, Stroke


def make_stroke(*points):
    stroke = Stroke(1, points[0], '#ff0000', 3)
    for point in points[1:]:
        stroke.append(point)
    return stroke


def test_new_stroke_has_start_point():
    stroke = Stroke(7, (10, 20), '#00ff00', 2)

    assert stroke.handle == 7
    assert stroke.points == (Point(10, 20),)
    assert not stroke.is_frozen
    assert stroke.is_dot
    assert stroke.page_index is None


def test_append_keeps_order():
    stroke = make_stroke((0, 0), (1, 1), (2, 5))

    assert stroke.points == ((0, 0), (1, 1), (2, 5))
    assert len(stroke) == 3
    assert not stroke.is_dot


def test_points_snapshot_is_not_live():
    stroke = make_stroke((0, 0))
    snapshot = stroke.points

    stroke.append((5, 5))

    assert len(snapshot) == 1
    assert len(stroke.points) == 2


def test_freeze_records_page_and_blocks_appends():
    stroke = make_stroke((0, 0), (1, 1))
    stroke.freeze(page_index=2)

    assert stroke.is_frozen
    assert stroke.page_index == 2
    with pytest.raises(InvalidStrokeOperation):
        stroke.append((3, 3))
    with pytest.raises(InvalidStrokeOperation):
        stroke.freeze()
    assert len(stroke) == 2


def test_single_point_stroke_survives_freeze():
    stroke = make_stroke((4, 4))
    stroke.freeze(0)

    assert stroke.is_dot
    assert stroke.points == ((4, 4),)


@pytest.mark.parametrize("width", [0, -2, float('nan')])
def test_invalid_width_rejected(width):
    with pytest.raises(ValueError):
        Stroke(1, (0, 0), '#000000', width)


def test_moved_returns_translated_frozen_copy():
    stroke = make_stroke((0, 0), (10, 0))
    stroke.freeze(0)

    moved = stroke.moved(0, 100, 1)

    assert moved.points == ((0, 100), (10, 100))
    assert moved.page_index == 1
    assert moved.is_frozen
    assert moved.handle == stroke.handle
    assert stroke.points == ((0, 0), (10, 0))


def test_moved_requires_frozen_stroke():
    with pytest.raises(InvalidStrokeOperation):
        make_stroke((0, 0)).moved(1, 1, None)

