"""Color utilities

Pen colors are stored as lowercase '#rrggbb' strings so the core does not
depend on QtGui.
"""

import re

_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def normalize_hex_color(hex_color: str) -> str:
    """
    Normalize a hex color to lowercase '#rrggbb'

    Args:
        hex_color: Hex color string (e.g., '#AABBCC', 'AABBCC' or '#ABC')

    Raises:
        ValueError: if the string is not a 3- or 6-digit hex color
    """
    match = _HEX_PATTERN.match(hex_color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    digits = match.group(1)
    # Handle 3-digit hex codes
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return '#' + digits.lower()


__all__ = ['normalize_hex_color']
