# minirt

A compact ray tracer for `.rt` scene files, in pure Python with no
dependencies. It reads a scene, checks it, and renders spheres, planes,
cylinders and cones into a PPM image. Lighting has an ambient term and a
single point light with diffuse shading, distance attenuation and hard
shadows. Rays that hit nothing take the colour of a sky gradient, from white
looking down to sky blue looking up.

## Installation

```
pip install .
```

## Usage

```
minirt scene.rt
```

The command parses the scene file, prints a summary of the ambient light, the
light, the camera and every object, then renders the scene and writes it as a
binary PPM (P6) image. Options:

| Option              | Meaning                                                  |
|---------------------|----------------------------------------------------------|
| `-o`, `--output`    | image file to write (default: the scene path with `.ppm`) |
| `--width`           | image width in pixels (default 800)                      |
| `--height`          | image height in pixels (default 600)                     |
| `--selected`        | index of the object to highlight (default 0, `-1` for none) |

The highlighted object is drawn lighter, each channel moved 40% of the way
towards white. If the file cannot be read or parsed, or the image cannot be
written, the command prints an error to standard error and exits with
status 1. Warnings (very small objects, objects far from the origin) are
printed through `logging`.

## Scene format

The file name must end in `.rt`. Each non-empty line describes one element;
lines whose first word starts with `#` are comments. Vectors are written as
`x,y,z` and colours as `r,g,b`, each channel an integer from 0 to 255.

| Element  | Line                                          |
|----------|-----------------------------------------------|
| Ambient  | `A ratio r,g,b`                               |
| Camera   | `C x,y,z nx,ny,nz fov`                        |
| Light    | `L x,y,z brightness r,g,b`                    |
| Sphere   | `sp x,y,z diameter r,g,b`                     |
| Plane    | `pl x,y,z nx,ny,nz r,g,b`                     |
| Cylinder | `cy x,y,z nx,ny,nz diameter [height] r,g,b`   |
| Cone     | `cn x,y,z ax,ay,az angle height r,g,b`        |

Rules the parser applies:

- A scene needs a camera (non-zero field of view), an ambient light and a
  light. Ambient and light may appear only once; a later camera line replaces
  an earlier one.
- Ambient ratio and light brightness lie in [0, 1]; the camera's field of view
  in [0, 180] degrees.
- Direction vectors must not be zero; they are normalised.
- A cylinder without a height is as tall as it is wide.
- A cone angle in (0, 180] is taken in degrees.
- A scene holds at most 100 objects.
- A number is read as its integer part plus its fraction, and the fraction is
  always added: `-1.5` reads as `-0.5`. Unreadable numbers count as zero.

Example:

```
A 0.2 255,255,255
C 0,0,-10 0,0,1 70
L -5,5,-5 0.8 255,255,255
sp 0,0,0 2 255,0,0
pl 0,-1,0 0,1,0 200,200,200
cy 2,-1,1 0,1,0 1 2 0,255,0
cn -2,1,1 0,-1,0 30 2 0,0,255
```

## Library use

```python
from minirt.scene_file import parse_scene_file
from minirt.render import render

scene = parse_scene_file("scene.rt")
image = render(scene, None, 320, 240)   # no highlighted object
image.save("scene.ppm")
```

Errors in a scene raise `minirt.scene.SceneError`. The main modules:

- `minirt.vector`: `Vec3`, `Ray` and `solve_quadratic`.
- `minirt.matrix`: `Matrix4` and the `identity`, `translation`,
  `rotation_x/y/z` and `scaling` constructors, combined with `a @ b`.
- `minirt.scene`: `Scene`, `Camera`, `Ambient`, `Light`, `Sphere`, `Plane`,
  `Cylinder`, `Cone`.
- `minirt.scene_file`: `parse_scene_file(path)` and `parse_scene_lines(lines)`.
- `minirt.intersect`: per-shape intersection, `Hit` and `trace_objects`.
- `minirt.render`: shading, `generate_camera_ray`, `trace_ray`, `render`
  and `Image` (with `put_pixel`, `get_pixel`, `to_ppm`, `save`).
- `minirt.transforms`: `Transform` and helpers that move, turn and scale
  objects or the camera.
- `minirt.controls`: `Controller` applies key presses (X11 or macOS key codes,
  see `Key`) to a scene: W/S/A/D/Q/E move the camera, I/K/J/L turn it, P/O
  change the selected object, arrow keys move it, +/- scale it, R/F and T/G
  rotate it. `controls_help()` returns the list of bindings.

## What it does not do

There is no window and no interactive viewer. `Controller.handle_key` tells
its caller whether the image needs redrawing and sets `quit_requested` on
ESC, but redrawing and displaying are left to the caller. Images are written
only as PPM files.