"""Reading whole ``.rt`` scene files."""

from __future__ import annotations

import os
import re
from typing import Iterable, Union

from minirt.elements import dispatch
from minirt.scene import Scene, SceneError
from minirt.validation import validate_scene

FILE_EXTENSION_ERROR = "File must have .rt extension"
EMPTY_FILE_ERROR = "Empty file"

_BLANKS = " \t\n\r"
_SEPARATORS = re.compile(r"[ \t\n\r]+")


def is_empty_line(line: str) -> bool:
    """True when the line holds nothing but spaces, tabs and line breaks."""
    return all(char in _BLANKS for char in line)


def parse_scene_lines(lines: Iterable[str]) -> Scene:
    """Build and validate a scene from the lines of a scene file."""
    scene = Scene()
    line_count = 0
    for line_count, line in enumerate(lines, start=1):
        if is_empty_line(line):
            continue
        tokens = [token for token in _SEPARATORS.split(line) if token]
        if not tokens or tokens[0].startswith("#"):
            continue
        try:
            dispatch(tokens, scene)
        except SceneError as exc:
            raise SceneError(f"Line {line_count}: {exc}") from exc
    if line_count == 0:
        raise SceneError(EMPTY_FILE_ERROR)
    return validate_scene(scene)


def _has_rt_extension(name: str) -> bool:
    dot = name.rfind(".")
    return dot != -1 and name[dot:].startswith(".rt")


def parse_scene_file(path: Union[str, "os.PathLike[str]"]) -> Scene:
    """Read the scene stored at ``path``, which must carry the ``.rt`` extension."""
    name = os.fspath(path)
    if not _has_rt_extension(name):
        raise SceneError(FILE_EXTENSION_ERROR)
    try:
        with open(name, encoding="utf-8", errors="replace") as handle:
            return parse_scene_lines(handle)
    except OSError as exc:
        raise SceneError(f"Could not open file {name}") from exc