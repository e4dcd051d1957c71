"""Parsing of the numbers, vectors and colours that make up scene-file fields."""

from __future__ import annotations

import re
from typing import List

from minirt.scene import SceneError
from minirt.vector import Vec3

VECTOR_FORMAT_ERROR = "Invalid vector format"
COLOR_FORMAT_ERROR = "Invalid color format"

NORMALIZED_TOLERANCE = 0.0001

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def _split(text: str, separator: str) -> List[str]:
    """Split on ``separator``, dropping empty pieces."""
    return [part for part in text.split(separator) if part]


def parse_int(text: str) -> int:
    """Read a leading integer like C's atoi: whitespace, sign, digits; 0 if none."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def parse_double(text: str) -> float:
    """Read a decimal number as integer part plus fraction.

    The fraction is always added to the integer part, so ``"-1.5"`` reads as
    ``-0.5`` and ``"-0.5"`` as ``0.5``. Anything unreadable counts as zero.
    """
    whole, dot, fraction = text.partition(".")
    if not dot:
        return float(parse_int(text))
    return parse_int(whole) + parse_int(fraction) / 10 ** len(fraction)


def parse_vector(text: str) -> Vec3:
    """Parse ``"x,y,z"``; pieces beyond the third are ignored."""
    parts = _split(text, ",")
    if len(parts) < 3:
        raise SceneError(VECTOR_FORMAT_ERROR)
    x, y, z = (parse_double(part) for part in parts[:3])
    return Vec3(x, y, z)


def parse_color(text: str) -> Vec3:
    """Parse ``"r,g,b"`` with each channel in 0..255 into a colour in [0, 1]."""
    parts = _split(text, ",")
    if len(parts) < 3:
        raise SceneError(COLOR_FORMAT_ERROR)
    channels = [parse_int(part) for part in parts[:3]]
    if any(not 0 <= channel <= 255 for channel in channels):
        raise SceneError(COLOR_FORMAT_ERROR)
    r, g, b = (channel / 255.0 for channel in channels)
    return Vec3(r, g, b)


def validate_non_zero_vector(vec: Vec3) -> Vec3:
    """Return ``vec`` unchanged, or raise if it is the zero vector."""
    if vec.is_zero():
        raise SceneError(VECTOR_FORMAT_ERROR)
    return vec


def validate_normalized_vector(vec: Vec3) -> Vec3:
    """Return ``vec`` unchanged, or raise if its length is not 1."""
    if abs(vec.length() - 1.0) > NORMALIZED_TOLERANCE:
        raise SceneError(VECTOR_FORMAT_ERROR)
    return vec