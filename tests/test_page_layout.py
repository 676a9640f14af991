import random

import pytest

from pdf_annotator.core.page_layout import Page, PageLayout


SIZE_SEQUENCES = [
    [(600, 800)],
    [(600, 800), (600, 1000)],
    [(612, 792), (842, 595), (100, 100), (2000, 50.5)],
    [(1, 1)] * 10,
]


def test_two_page_scenario(layout):
    layout.layout([(600, 800), (600, 1000)])

    assert layout.page_origin(0) == (0, 0)
    assert layout.page_origin(1) == (0, 820)


def test_empty_document(layout):
    assert layout.layout([]) == ()
    assert len(layout) == 0
    assert layout.page_at((0, 0)) is None
    assert layout.scene_bounds() == (0.0, 0.0, 0.0, 0.0)


def test_single_page(layout):
    (page,) = layout.layout([(600, 800)])

    assert page == Page(index=0, width=600, height=800, origin_x=0, origin_y=0)
    assert layout.page_at((300, 400)) == 0
    assert layout.page_at((300, 800)) is None


@pytest.mark.parametrize("sizes", SIZE_SEQUENCES)
def test_origins_strictly_increasing_by_height_plus_spacing(layout, sizes):
    pages = layout.layout(sizes)

    for prev, nxt in zip(pages, pages[1:]):
        assert nxt.origin_y >= prev.origin_y + prev.height + layout.spacing
        assert nxt.origin_y > prev.origin_y
    assert all(p.origin_x == 0 for p in pages)


@pytest.mark.parametrize("sizes", SIZE_SEQUENCES)
def test_page_at_finds_points_inside_pages(layout, sizes):
    pages = layout.layout(sizes)

    for page in pages:
        corners = [
            (page.origin_x, page.origin_y),
            (page.origin_x + page.width / 2, page.origin_y + page.height / 2),
            (page.origin_x + page.width * 0.999, page.origin_y + page.height * 0.999),
        ]
        for point in corners:
            assert layout.page_at(point) == page.index


@pytest.mark.parametrize("sizes", SIZE_SEQUENCES)
def test_page_at_returns_none_in_gaps(layout, sizes):
    pages = layout.layout(sizes)

    for page in pages[:-1]:
        gap_y = page.bottom + layout.spacing / 2
        assert layout.page_at((page.width / 2, gap_y)) is None


def test_page_at_random_points_matches_linear_scan(layout):
    rng = random.Random(1234)
    sizes = [(rng.uniform(50, 900), rng.uniform(50, 1200)) for _ in range(25)]
    pages = layout.layout(sizes)
    _, _, width, height = layout.scene_bounds()

    for _ in range(500):
        point = (rng.uniform(-10, width + 10), rng.uniform(-10, height + 10))
        expected = next((p.index for p in pages if p.contains(point)), None)
        assert layout.page_at(point) == expected


def test_heterogeneous_widths_left_align(layout):
    layout.layout([(300, 400), (900, 400)])

    # Right of the narrow page is outside it even at the same height
    assert layout.page_at((500, 100)) is None
    assert layout.page_at((500, 520)) == 1
    assert layout.scene_bounds() == (0.0, 0.0, 900.0, 820.0)


def test_points_above_or_left_of_pages(layout):
    layout.layout([(600, 800)])

    assert layout.page_at((-1, 10)) is None
    assert layout.page_at((10, -1)) is None


def test_scene_to_page_and_back(layout):
    layout.layout([(600, 800), (600, 1000)])

    index, local = layout.scene_to_page((100, 920))
    assert index == 1
    assert local == (100, 100)
    assert layout.page_to_scene(1, local) == (100, 920)
    assert layout.scene_to_page((100, 810)) is None


def test_insert_page_restacks_following_pages(layout):
    layout.layout([(600, 800), (600, 1000)])

    inserted = layout.insert_page(1, (600, 500))

    assert inserted.index == 1
    assert inserted.origin_y == 820
    assert [p.origin_y for p in layout.pages] == [0, 820, 1340]
    assert [p.index for p in layout.pages] == [0, 1, 2]


def test_append_and_remove_page(layout):
    layout.layout([(600, 800)])
    layout.append_page((600, 1000))
    assert layout.page_origin(1) == (0, 820)

    removed = layout.remove_page(0)
    assert removed.height == 800
    assert layout.page_origin(0) == (0, 0)
    assert layout.page(0).height == 1000


@pytest.mark.parametrize("size", [(0, 100), (100, -1), (float('nan'), 10), (float('inf'), 10)])
def test_invalid_page_size_rejected(layout, size):
    with pytest.raises(ValueError):
        layout.layout([size])


def test_unknown_page_index(layout):
    layout.layout([(600, 800)])

    with pytest.raises(IndexError):
        layout.page_origin(1)
    with pytest.raises(IndexError):
        layout.insert_page(5, (10, 10))


def test_negative_spacing_rejected():
    with pytest.raises(ValueError):
        PageLayout(spacing=-1)


def test_relayout_replaces_pages(layout):
    layout.layout([(600, 800), (600, 1000)])
    layout.layout([(100, 100)])

    assert len(layout) == 1
    assert layout.page_at((50, 900)) is None
