"""Shading, camera rays and rendering of a scene into an RGB image."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Union

from minirt.intersect import Hit, trace_objects
from minirt.scene import (
    ATTENUATION_LINEAR,
    ATTENUATION_QUADRATIC,
    DEFAULT_SKY_COLOR,
    LIGHTENING_FACTOR,
    SHADOW_EPSILON,
    Scene,
)
from minirt.vector import Ray, Vec3

WIDTH = 800
HEIGHT = 600
WORLD_UP = Vec3(0.0, 1.0, 0.0)


@dataclass
class Image:
    """A width x height grid of 0xRRGGBB pixels, initially black."""

    width: int = WIDTH
    height: int = HEIGHT
    pixels: List[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image dimensions must be positive")
        self.pixels = [0] * (self.width * self.height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set a pixel; coordinates outside the image are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color

    def get_pixel(self, x: int, y: int) -> int:
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]

    def to_ppm(self) -> bytes:
        """Encode the image as a binary PPM (P6) file."""
        data = bytearray(f"P6\n{self.width} {self.height}\n255\n".encode("ascii"))
        for pixel in self.pixels:
            data.extend(((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF))
        return bytes(data)

    def save(self, path: Union[str, "os.PathLike[str]"]) -> None:
        with open(path, "wb") as handle:
            handle.write(self.to_ppm())


def color_to_int(color: Vec3) -> int:
    """Pack a colour with channels in [0, 1] into 0xRRGGBB."""
    return (int(color.x * 255.0) << 16) | (int(color.y * 255.0) << 8) | int(color.z * 255.0)


def sky_color(ray: Ray) -> int:
    """Blend from white (looking down) to sky blue (looking up)."""
    grad = 0.5 * (ray.direction.y + 1.0)
    r, g, b = (int((1.0 - grad) * 255 + grad * channel) for channel in DEFAULT_SKY_COLOR)
    return (r << 16) | (g << 8) | b


def clamp_color(color: Vec3) -> Vec3:
    return Vec3(*(min(1.0, max(0.0, channel)) for channel in color))


def is_in_shadow(scene: Scene, point: Vec3, light_position: Vec3) -> bool:
    """True when an object lies between ``point`` and the light."""
    to_light = light_position - point
    distance = to_light.length()
    direction = to_light.normalized()
    shadow_ray = Ray(point + direction * SHADOW_EPSILON, direction)
    hit = trace_objects(scene, shadow_ray)
    return hit is not None and hit.t < distance - SHADOW_EPSILON


def calculate_diffuse(scene: Scene, hit: Hit) -> Vec3:
    """Lambertian term from the scene's light, with distance attenuation and shadows."""
    light = scene.light
    if light is None:
        return Vec3(0.0, 0.0, 0.0)
    to_light = light.position - hit.point
    distance = to_light.length()
    dot = max(0.0, hit.normal.dot(to_light.normalized()))
    if is_in_shadow(scene, hit.point, light.position):
        return Vec3(0.0, 0.0, 0.0)
    attenuation = 1.0 / (
        1.0 + ATTENUATION_LINEAR * distance + ATTENUATION_QUADRATIC * distance * distance
    )
    factor = light.brightness * dot * attenuation
    return Vec3(
        light.color.x * hit.color.x * factor,
        light.color.y * hit.color.y * factor,
        light.color.z * hit.color.z * factor,
    )


def calculate_lighting(scene: Scene, hit: Hit) -> Vec3:
    """Ambient plus diffuse light at ``hit``, clamped to [0, 1]."""
    ambient = Vec3(0.0, 0.0, 0.0)
    if scene.ambient is not None:
        ratio = scene.ambient.ratio
        ambient = Vec3(
            ratio * scene.ambient.color.x * hit.color.x,
            ratio * scene.ambient.color.y * hit.color.y,
            ratio * scene.ambient.color.z * hit.color.z,
        )
    return clamp_color(ambient + calculate_diffuse(scene, hit))


def apply_selection_highlight(color: Vec3) -> Vec3:
    """Move each channel LIGHTENING_FACTOR of the way towards white."""
    return Vec3(*(c + (1.0 - c) * LIGHTENING_FACTOR for c in color))


def generate_camera_ray(
    scene: Scene, x: int, y: int, width: int = WIDTH, height: int = HEIGHT
) -> Ray:
    """Ray from the camera through pixel (x, y) of a width x height image."""
    camera = scene.camera
    forward = camera.orientation.normalized()
    right = forward.cross(WORLD_UP).normalized()
    up = right.cross(forward)
    pixel_scale = math.tan(math.radians(camera.fov) / 2.0) / (width / 2.0)
    u = (x - width / 2.0) * pixel_scale
    v = (height / 2.0 - y) * pixel_scale
    direction = (right * u + up * v + forward).normalized()
    return Ray(camera.position, direction)


def trace_ray(scene: Scene, ray: Ray, selected: Optional[int] = 0) -> int:
    """Colour seen along ``ray``; the object at index ``selected`` is highlighted."""
    hit = trace_objects(scene, ray)
    if hit is None:
        return sky_color(ray)
    color = calculate_lighting(scene, hit)
    if hit.obj_index == selected:
        color = apply_selection_highlight(color)
    return color_to_int(color)


def render(
    scene: Scene, selected: Optional[int] = 0, width: int = WIDTH, height: int = HEIGHT
) -> Image:
    """Trace one ray per pixel and return the finished image."""
    image = Image(width, height)
    for y in range(height):
        for x in range(width):
            ray = generate_camera_ray(scene, x, y, width, height)
            image.put_pixel(x, y, trace_ray(scene, ray, selected))
    return image