import pytest

from pdf_annotator.utils.color_utils import normalize_hex_color


@pytest.mark.parametrize("value,expected", [
    ('#FF0000', '#ff0000'),
    ('00ff00', '#00ff00'),
    ('#abc', '#aabbcc'),
    ('  #123456 ', '#123456'),
])
def test_normalize_hex_color(value, expected):
    assert normalize_hex_color(value) == expected


@pytest.mark.parametrize("value", ['', 'red', '#12345', '#gggggg'])
def test_normalize_rejects_invalid(value):
    with pytest.raises(ValueError):
        normalize_hex_color(value)
