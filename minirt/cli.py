"""Command line entry point: load a scene, describe it and render it to a file."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from minirt.render import HEIGHT, WIDTH, render
from minirt.scene import Cone, Cylinder, Plane, Scene, SceneError, SceneObject, Sphere
from minirt.scene_file import parse_scene_file
from minirt.vector import Vec3

SCENE_ERROR = "Error: Invalid scene configuration"


def _vec(v: Vec3, precision: int = 2) -> str:
    return ",".join(f"{c:.{precision}f}" for c in v)


def format_object_info(obj: SceneObject, index: int) -> str:
    """One line describing ``obj``, numbered from ``index + 1``."""
    number = index + 1
    if isinstance(obj, Sphere):
        return (
            f"  Sphere {number}: center=({_vec(obj.center)}), "
            f"diam={obj.diameter:.2f}, color=({_vec(obj.color)})"
        )
    if isinstance(obj, Plane):
        return (
            f"  Plane {number}: point=({_vec(obj.point)}), "
            f"normal=({_vec(obj.normal)}), color=({_vec(obj.color)})"
        )
    if isinstance(obj, Cylinder):
        return (
            f"  Cylinder {number}: center=({_vec(obj.center)}), "
            f"axis=({_vec(obj.axis)}), diam={obj.diameter:.2f}, "
            f"height={obj.height:.2f}, color=({_vec(obj.color)})"
        )
    if isinstance(obj, Cone):
        return (
            f"  Cone {number}: vertex=({_vec(obj.vertex)}), "
            f"axis=({_vec(obj.axis)}), angle={math.degrees(obj.angle):.2f}, "
            f"height={obj.height:.2f}, color=({_vec(obj.color)})"
        )
    raise TypeError(f"unknown scene object {type(obj).__name__}")


def format_scene_info(scene: Scene) -> str:
    """A multi-line summary of the scene's lights, camera and objects."""
    lines: List[str] = ["Scene Information:"]
    if scene.ambient is not None:
        lines.append(
            f"Ambient: ratio={scene.ambient.ratio:.2f}, "
            f"color=({_vec(scene.ambient.color * 255, 0)})"
        )
    if scene.light is not None:
        light = scene.light
        lines.append(
            f"Light: pos=({_vec(light.position)}), brightness={light.brightness:.2f}, "
            f"color=({_vec(light.color * 255, 0)})"
        )
    camera = scene.camera
    lines.append(
        f"Camera: pos=({_vec(camera.position)}), dir=({_vec(camera.orientation)}), "
        f"fov={camera.fov:.2f}"
    )
    lines.append(f"Objects ({len(scene.objects)}):")
    lines.extend(format_object_info(obj, i) for i, obj in enumerate(scene.objects))
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minirt", description="Render a .rt scene file to a PPM image."
    )
    parser.add_argument("scene", help="path of the .rt scene file")
    parser.add_argument(
        "-o", "--output", help="image file to write (default: scene name with .ppm)"
    )
    parser.add_argument("--width", type=int, default=WIDTH, help="image width in pixels")
    parser.add_argument("--height", type=int, default=HEIGHT, help="image height in pixels")
    parser.add_argument(
        "--selected",
        type=int,
        default=0,
        help="index of the highlighted object (-1 for none)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the renderer; return 0 on success and 1 on failure."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="Warning: %(message)s")
    if args.width <= 0 or args.height <= 0:
        print("Error: Image dimensions must be positive", file=sys.stderr)
        return 1
    try:
        scene = parse_scene_file(args.scene)
    except SceneError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(SCENE_ERROR, file=sys.stderr)
        return 1
    print(format_scene_info(scene))
    output = Path(args.output) if args.output else Path(args.scene).with_suffix(".ppm")
    selected = args.selected if args.selected >= 0 else None
    image = render(scene, selected, args.width, args.height)
    try:
        image.save(output)
    except OSError as exc:
        print(f"Error: Could not write {output}: {exc}", file=sys.stderr)
        return 1
    print(f"Image written to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())