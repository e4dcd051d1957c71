import pytest

from minirt.intersect import Hit
from minirt.render import (
    Image,
    apply_selection_highlight,
    calculate_diffuse,
    calculate_lighting,
    clamp_color,
    color_to_int,
    generate_camera_ray,
    is_in_shadow,
    render,
    sky_color,
    trace_ray,
)
from minirt.scene import (
    DEFAULT_SKY_COLOR,
    LIGHTENING_FACTOR,
    Ambient,
    Camera,
    Light,
    Scene,
    Sphere,
)
from minirt.vector import Ray, Vec3


def make_scene(light_pos=Vec3(0, 0, -5), objects=()):
    scene = Scene(
        camera=Camera(Vec3(0, 0, 0), Vec3(0, 0, 1), 70.0),
        ambient=Ambient(0.2, Vec3(1, 1, 1)),
        light=Light(light_pos, 1.0, Vec3(1, 1, 1)),
    )
    for obj in objects:
        scene.add_object(obj)
    return scene


def channels(value):
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def test_color_to_int_black_and_white():
    assert color_to_int(Vec3(0, 0, 0)) == 0
    assert color_to_int(Vec3(1, 1, 1)) == 0xFFFFFF


def test_color_to_int_channel_order():
    assert channels(color_to_int(Vec3(1, 0, 0))) == (255, 0, 0)
    assert channels(color_to_int(Vec3(0, 0, 1))) == (0, 0, 255)


def test_sky_color_up_is_sky_blue():
    assert channels(sky_color(Ray(Vec3(), Vec3(0, 1, 0)))) == DEFAULT_SKY_COLOR


def test_sky_color_down_is_white():
    assert sky_color(Ray(Vec3(), Vec3(0, -1, 0))) == color_to_int(Vec3(1, 1, 1))


def test_clamp_color():
    assert clamp_color(Vec3(-1.0, 0.5, 2.0)) == Vec3(0.0, 0.5, 1.0)


def test_selection_highlight():
    assert apply_selection_highlight(Vec3(0, 0, 0)) == Vec3(
        LIGHTENING_FACTOR, LIGHTENING_FACTOR, LIGHTENING_FACTOR
    )
    assert apply_selection_highlight(Vec3(1, 1, 1)) == Vec3(1, 1, 1)


def test_image_put_and_get():
    image = Image(3, 2)
    image.put_pixel(2, 1, 0x123456)
    assert image.get_pixel(2, 1) == 0x123456
    assert image.get_pixel(0, 0) == 0


def test_image_put_outside_is_ignored():
    image = Image(2, 2)
    image.put_pixel(5, 5, 0xFFFFFF)
    image.put_pixel(-1, 0, 0xFFFFFF)
    assert image.pixels == [0, 0, 0, 0]


def test_image_get_outside_raises():
    with pytest.raises(IndexError):
        Image(2, 2).get_pixel(2, 0)


def test_image_to_ppm():
    image = Image(2, 1)
    image.put_pixel(1, 0, 0x102030)
    assert image.to_ppm() == b"P6\n2 1\n255\n" + bytes([0, 0, 0, 0x10, 0x20, 0x30])


def test_image_save(tmp_path):
    image = Image(1, 1)
    image.put_pixel(0, 0, 0xFF00FF)
    path = tmp_path / "out.ppm"
    image.save(path)
    assert path.read_bytes() == image.to_ppm()


def test_center_ray_follows_orientation():
    scene = make_scene()
    ray = generate_camera_ray(scene, 400, 300, 800, 600)
    assert ray.origin == scene.camera.position
    assert ray.direction.x == pytest.approx(0.0)
    assert ray.direction.y == pytest.approx(0.0)
    assert ray.direction.z == pytest.approx(1.0)


def test_edge_rays_are_mirrored_and_unit():
    scene = make_scene()
    left = generate_camera_ray(scene, 0, 300, 800, 600)
    right = generate_camera_ray(scene, 800, 300, 800, 600)
    assert left.direction.length() == pytest.approx(1.0)
    assert left.direction.x == pytest.approx(-right.direction.x)
    assert left.direction.x != pytest.approx(0.0)


def test_is_in_shadow():
    blocker = Sphere(Vec3(0, 0, 5), 2.0, Vec3(1, 1, 1))
    assert is_in_shadow(make_scene(objects=[blocker]), Vec3(0, 0, 0), Vec3(0, 0, 10))
    assert not is_in_shadow(make_scene(), Vec3(0, 0, 0), Vec3(0, 0, 10))


def test_object_beyond_light_casts_no_shadow():
    beyond = Sphere(Vec3(0, 0, 20), 2.0, Vec3(1, 1, 1))
    assert not is_in_shadow(make_scene(objects=[beyond]), Vec3(0, 0, 0), Vec3(0, 0, 10))


def hit_at_origin(normal, color=Vec3(1, 1, 1)):
    return Hit(1.0, Vec3(0, 0, 0), normal, color, None)


def test_diffuse_facing_light_is_positive_and_attenuated():
    near = calculate_diffuse(make_scene(Vec3(0, 0, 2)), hit_at_origin(Vec3(0, 0, 1)))
    far = calculate_diffuse(make_scene(Vec3(0, 0, 10)), hit_at_origin(Vec3(0, 0, 1)))
    assert 0.0 < far.x < near.x < 1.0
    assert near.x == pytest.approx(near.y) == pytest.approx(near.z)


def test_diffuse_facing_away_is_black():
    diffuse = calculate_diffuse(make_scene(Vec3(0, 0, 10)), hit_at_origin(Vec3(0, 0, -1)))
    assert diffuse == Vec3(0, 0, 0)


def test_diffuse_in_shadow_is_black():
    blocker = Sphere(Vec3(0, 0, 5), 2.0, Vec3(1, 1, 1))
    scene = make_scene(Vec3(0, 0, 10), objects=[blocker])
    assert calculate_diffuse(scene, hit_at_origin(Vec3(0, 0, 1))) == Vec3(0, 0, 0)


def test_lighting_is_ambient_when_unlit():
    scene = make_scene(Vec3(0, 0, 10))
    scene.ambient = Ambient(1.0, Vec3(1, 1, 1))
    color = Vec3(0.3, 0.6, 0.9)
    result = calculate_lighting(scene, hit_at_origin(Vec3(0, 0, -1), color))
    assert result.x == pytest.approx(color.x)
    assert result.y == pytest.approx(color.y)
    assert result.z == pytest.approx(color.z)


def test_lighting_is_clamped():
    scene = make_scene(Vec3(0, 0, 1))
    scene.ambient = Ambient(1.0, Vec3(1, 1, 1))
    result = calculate_lighting(scene, hit_at_origin(Vec3(0, 0, 1)))
    assert result == Vec3(1.0, 1.0, 1.0)


def test_trace_ray_miss_gives_sky():
    ray = Ray(Vec3(0, 0, 0), Vec3(0, 0, 1))
    assert trace_ray(make_scene(), ray) == sky_color(ray)


def test_trace_ray_selection_brightens():
    sphere = Sphere(Vec3(0, 0, 5), 2.0, Vec3(1, 0, 0))
    scene = make_scene(objects=[sphere])
    ray = Ray(Vec3(0, 0, 0), Vec3(0, 0, 1))
    plain = channels(trace_ray(scene, ray, -1))
    highlighted = channels(trace_ray(scene, ray, 0))
    assert all(h >= p for h, p in zip(highlighted, plain))
    assert highlighted[1] > plain[1]


def test_render_empty_scene_is_sky():
    scene = make_scene()
    image = render(scene, 0, 4, 3)
    for y in range(3):
        for x in range(4):
            expected = sky_color(generate_camera_ray(scene, x, y, 4, 3))
            assert image.get_pixel(x, y) == expected


def test_render_shows_object_in_center():
    sphere = Sphere(Vec3(0, 0, 5), 2.0, Vec3(1, 0, 0))
    scene = make_scene(objects=[sphere])
    image = render(scene, -1, 8, 6)
    center_ray = generate_camera_ray(scene, 4, 3, 8, 6)
    assert image.get_pixel(4, 3) != sky_color(center_ray)
    assert image.get_pixel(4, 3) == trace_ray(scene, center_ray, -1)