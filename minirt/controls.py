"""Keyboard controls for moving the camera and editing the selected object."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional

from minirt.scene import Scene
from minirt.transforms import (
    scene_rotate_object,
    scene_scale_object,
    scene_translate_camera,
    scene_translate_object,
)
from minirt.vector import Vec3

WORLD_UP = Vec3(0.0, 1.0, 0.0)
CAMERA_STEP = 0.5
LOOK_ANGLE = 0.1
OBJECT_STEP = 0.3
ROTATE_STEP = 0.2
SCALE_UP = 1.1
SCALE_DOWN = 0.9


class Key(IntEnum):
    """Key codes for X11 keyboards and their macOS equivalents."""

    ESC = 65307
    ESC_MAC = 53
    W = 119
    W_MAC = 13
    A = 97
    A_MAC = 0
    S = 115
    S_MAC = 1
    D = 100
    D_MAC = 2
    Q = 113
    Q_MAC = 12
    E = 101
    E_MAC = 14
    UP = 65362
    UP_MAC = 126
    DOWN = 65364
    DOWN_MAC = 125
    LEFT = 65361
    LEFT_MAC = 123
    RIGHT = 65363
    RIGHT_MAC = 124
    PLUS = 65451
    PLUS_MAC = 24
    MINUS = 65453
    MINUS_MAC = 27
    R = 114
    R_MAC = 15
    T = 116
    T_MAC = 17
    F = 102
    F_MAC = 3
    G = 103
    G_MAC = 5
    I = 105  # noqa: E741
    I_MAC = 34
    J = 106
    J_MAC = 38
    K = 107
    K_MAC = 40
    L = 108
    L_MAC = 37
    SPACE = 32
    SPACE_MAC = 49
    P = 112
    P_MAC = 35
    O = 111  # noqa: E741
    O_MAC = 31


class Action(Enum):
    QUIT = "quit"
    HELP = "help"
    MOVE_FORWARD = "move_forward"
    MOVE_BACKWARD = "move_backward"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    LOOK_UP = "look_up"
    LOOK_DOWN = "look_down"
    LOOK_LEFT = "look_left"
    LOOK_RIGHT = "look_right"
    SELECT_NEXT = "select_next"
    SELECT_PREVIOUS = "select_previous"
    OBJECT_LEFT = "object_left"
    OBJECT_RIGHT = "object_right"
    OBJECT_UP = "object_up"
    OBJECT_DOWN = "object_down"
    SCALE_UP = "scale_up"
    SCALE_DOWN = "scale_down"
    ROTATE_X = "rotate_x"
    ROTATE_Y = "rotate_y"
    ROTATE_X_REVERSE = "rotate_x_reverse"
    ROTATE_Y_REVERSE = "rotate_y_reverse"


_KEY_ACTIONS = {
    "ESC": Action.QUIT,
    "SPACE": Action.HELP,
    "W": Action.MOVE_FORWARD,
    "S": Action.MOVE_BACKWARD,
    "A": Action.MOVE_LEFT,
    "D": Action.MOVE_RIGHT,
    "Q": Action.MOVE_DOWN,
    "E": Action.MOVE_UP,
    "I": Action.LOOK_UP,
    "K": Action.LOOK_DOWN,
    "J": Action.LOOK_LEFT,
    "L": Action.LOOK_RIGHT,
    "P": Action.SELECT_NEXT,
    "O": Action.SELECT_PREVIOUS,
    "LEFT": Action.OBJECT_LEFT,
    "RIGHT": Action.OBJECT_RIGHT,
    "UP": Action.OBJECT_UP,
    "DOWN": Action.OBJECT_DOWN,
    "PLUS": Action.SCALE_UP,
    "MINUS": Action.SCALE_DOWN,
    "R": Action.ROTATE_X,
    "T": Action.ROTATE_Y,
    "F": Action.ROTATE_X_REVERSE,
    "G": Action.ROTATE_Y_REVERSE,
}

_BINDINGS: Dict[int, Action] = {
    int(Key[name + suffix]): action
    for name, action in _KEY_ACTIONS.items()
    for suffix in ("", "_MAC")
}

_OBJECT_MOVES = {
    Action.OBJECT_LEFT: Vec3(-OBJECT_STEP, 0.0, 0.0),
    Action.OBJECT_RIGHT: Vec3(OBJECT_STEP, 0.0, 0.0),
    Action.OBJECT_UP: Vec3(0.0, OBJECT_STEP, 0.0),
    Action.OBJECT_DOWN: Vec3(0.0, -OBJECT_STEP, 0.0),
}

_OBJECT_ROTATIONS = {
    Action.ROTATE_X: Vec3(ROTATE_STEP, 0.0, 0.0),
    Action.ROTATE_Y: Vec3(0.0, ROTATE_STEP, 0.0),
    Action.ROTATE_X_REVERSE: Vec3(-ROTATE_STEP, 0.0, 0.0),
    Action.ROTATE_Y_REVERSE: Vec3(0.0, -ROTATE_STEP, 0.0),
}

_OBJECT_SCALES = {Action.SCALE_UP: SCALE_UP, Action.SCALE_DOWN: SCALE_DOWN}

_NON_REDRAW = {Action.QUIT, Action.HELP}

_HELP_LINES = (
    "=== MiniRT Transform Controls ===",
    "CAMERA MOVEMENT:",
    "  W/S - Move forward/backward",
    "  A/D - Move left/right",
    "  Q/E - Move down/up",
    "",
    "CAMERA ROTATION:",
    "  I/K - Look up/down",
    "  J/L - Look left/right",
    "",
    "OBJECT CONTROLS:",
    "  P/O - Select object (next/previous)",
    "  Arrow keys - Move object (left/right/up/down)",
    "  +/- - Scale object up/down",
    "  R/F - Rotate object around X-axis (forward/reverse)",
    "  T/G - Rotate object around Y-axis (forward/reverse)",
    "",
    "OTHER:",
    "  SPACE - Show this help",
    "  ESC - Exit",
    "==============================",
)


def action_for(keycode: int) -> Optional[Action]:
    """The action bound to ``keycode``, or None."""
    return _BINDINGS.get(keycode)


def handle_camera_movement(keycode: int, scene: Scene) -> None:
    """Move the camera for W/S/A/D/Q/E; other keys do nothing."""
    action = action_for(keycode)
    orientation = scene.camera.orientation
    if action is Action.MOVE_FORWARD:
        delta = orientation * CAMERA_STEP
    elif action is Action.MOVE_BACKWARD:
        delta = orientation * -CAMERA_STEP
    elif action in (Action.MOVE_LEFT, Action.MOVE_RIGHT):
        right = orientation.cross(WORLD_UP).normalized()
        step = -CAMERA_STEP if action is Action.MOVE_LEFT else CAMERA_STEP
        delta = right * step
    elif action is Action.MOVE_DOWN:
        delta = Vec3(0.0, -CAMERA_STEP, 0.0)
    elif action is Action.MOVE_UP:
        delta = Vec3(0.0, CAMERA_STEP, 0.0)
    else:
        return
    scene_translate_camera(scene, delta)


def handle_camera_rotation(keycode: int, scene: Scene) -> None:
    """Turn the camera for I/K/J/L; other keys do nothing."""
    action = action_for(keycode)
    if action not in (Action.LOOK_UP, Action.LOOK_DOWN, Action.LOOK_LEFT, Action.LOOK_RIGHT):
        return
    forward = scene.camera.orientation.normalized()
    right = forward.cross(WORLD_UP).normalized()
    up = right.cross(forward)
    if action in (Action.LOOK_UP, Action.LOOK_DOWN):
        towards = up
        angle = LOOK_ANGLE if action is Action.LOOK_UP else -LOOK_ANGLE
    else:
        towards = right
        angle = LOOK_ANGLE if action is Action.LOOK_RIGHT else -LOOK_ANGLE
    turned = forward * math.cos(angle) + towards * math.sin(angle)
    scene.camera.orientation = turned.normalized()


def is_redraw_key(keycode: int) -> bool:
    """True for keys that change the scene and so need a new image."""
    action = action_for(keycode)
    return action is not None and action not in _NON_REDRAW


def controls_help() -> str:
    """The help text listing every key binding."""
    return "\n".join(_HELP_LINES)


@dataclass
class Controller:
    """Applies key presses to a scene and tracks the selected object."""

    scene: Scene
    selected: int = 0
    output: Callable[[str], None] = print
    quit_requested: bool = False

    def handle_object_transforms(self, keycode: int) -> None:
        """Change the selection or move, scale or turn the selected object."""
        action = action_for(keycode)
        if action is Action.SELECT_NEXT and self.selected < len(self.scene.objects) - 1:
            self.selected += 1
        elif action is Action.SELECT_PREVIOUS and self.selected > 0:
            self.selected -= 1
        elif action in _OBJECT_MOVES:
            scene_translate_object(self.scene, self.selected, _OBJECT_MOVES[action])
        elif action in _OBJECT_SCALES:
            scene_scale_object(self.scene, self.selected, _OBJECT_SCALES[action])
        elif action in _OBJECT_ROTATIONS:
            scene_rotate_object(self.scene, self.selected, _OBJECT_ROTATIONS[action])

    def handle_key(self, keycode: int) -> bool:
        """Apply one key press; return True when the image must be redrawn.

        ESC sets ``quit_requested``; SPACE sends the help text to ``output``.
        """
        action = action_for(keycode)
        if action is Action.QUIT:
            self.quit_requested = True
            return False
        handle_camera_movement(keycode, self.scene)
        handle_camera_rotation(keycode, self.scene)
        self.handle_object_transforms(keycode)
        if action is Action.HELP:
            self.output(controls_help())
        return is_redraw_key(keycode)