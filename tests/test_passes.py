import numpy as np
import pytest

from nature_generator import config as DEFAULTS
from nature_generator import passes
from nature_generator.palettes import PALETTES, Style
from nature_generator.random_source import RandomSource
from nature_generator.raster import RasterBuffer


def flat_noise(x, y):
    return np.full(np.broadcast(np.asarray(x), np.asarray(y)).shape, 0.5)


def _sky(style: Style, width: int, height: int) -> RasterBuffer:
    buffer = RasterBuffer.allocate(width, height)
    return passes.draw_sky(buffer, PALETTES[style])


# --- Sky ---
def test_sky_runs_from_top_to_bottom_color():
    palette = PALETTES[Style.SUNSET]
    buffer = _sky(Style.SUNSET, 16, 64)
    assert tuple(buffer.pixels[0, 0, :3]) == palette.sky_top
    assert tuple(buffer.pixels[-1, 0, :3]) == palette.sky_bottom
    assert (buffer.alpha == 255).all()
    assert (buffer.rgb == buffer.rgb[:, :1]).all()


# --- Stars ---
def test_star_placement_counts_and_draws():
    rng = RandomSource("stars")
    stars = passes.place_stars(rng, 1280, 720)
    assert 300 <= len(stars) < 600
    assert rng.draw_count == 1 + 4 * len(stars)
    for star in stars:
        assert 0 <= star.x < 1280
        assert 0 <= star.y < 432
        assert 0.2 <= star.radius < 1.6
        assert 0.5 <= star.alpha < 1.0


def test_star_field_lights_only_the_upper_sky():
    buffer = _sky(Style.NIGHT, 1280, 720)
    stars = passes.place_stars(RandomSource("any seed"), 1280, 720)
    passes.draw_stars(buffer, stars)

    bright = buffer.rgb.min(axis=-1) >= 128
    assert bright[:432].sum() >= 300
    # A star's reach ends a couple of pixels below its centre.
    assert not bright[435:].any()
    for star in stars:
        assert bright[int(star.y), int(star.x)]


# --- Sun ---
@pytest.mark.parametrize("style, band", [(Style.DAY, (0.08, 0.45)), (Style.NIGHT, (0.10, 0.35))])
def test_sun_stays_in_its_band(style, band):
    for seed in ("a", "b", "c", "d", "e"):
        rng = RandomSource(seed)
        sun = passes.place_sun(rng, 800, 600, style)
        assert rng.draw_count == 3
        assert 0.05 * 600 <= sun.radius <= 0.12 * 600
        margin = sun.radius + DEFAULTS.SUN_EDGE_MARGIN_PX
        assert margin <= sun.x <= 800 - margin
        assert band[0] * 600 <= sun.y <= band[1] * 600


def test_sun_disc_is_solid_and_glow_is_bounded():
    palette = PALETTES[Style.DAY]
    buffer = _sky(Style.DAY, 200, 200)
    sun = passes.SunPlacement(100.0, 100.0, 10.0)
    passes.draw_sun(buffer, sun, palette.sun)
    assert tuple(buffer.pixels[100, 100, :3]) == palette.sun
    assert tuple(buffer.pixels[0, 0, :3]) == palette.sky_top
    assert tuple(buffer.pixels[100, 80, :3]) != tuple(_sky(Style.DAY, 200, 200).pixels[100, 80, :3])


# --- Mountains ---
def test_mountain_layers_run_back_to_front():
    rng = RandomSource("peaks")
    layers = passes.place_mountains(rng, 1000)
    assert rng.draw_count == 1 + 2 * DEFAULTS.MOUNTAIN_LAYERS
    assert [layer.index for layer in layers] == [0, 1, 2, 3]
    assert layers[0].base_y == pytest.approx(350)
    assert layers[-1].base_y == pytest.approx(750)
    assert layers[-1].amplitude == pytest.approx(60)
    assert len({layer.noise_row for layer in layers}) == 4
    for layer in layers:
        assert 60 <= layer.amplitude <= 60 + 160 * 1.2 + 1e-9
        assert layer.roughness >= DEFAULTS.MOUNTAIN_ROUGHNESS_BASE


def test_flat_noise_gives_flat_ridges():
    layer = passes.place_mountains(RandomSource("flat"), 400)[1]
    ridge = passes.mountain_ridge(layer, 50, noise_field=flat_noise)
    assert np.allclose(ridge, layer.base_y)


def test_ridge_stays_within_its_amplitude():
    for layer in passes.place_mountains(RandomSource("ridge"), 600):
        ridge = passes.mountain_ridge(layer, 500)
        assert ridge.shape == (500,)
        assert (np.abs(ridge - layer.base_y) <= layer.amplitude + 1e-9).all()


def test_snow_caps_sit_above_the_base():
    assert passes.has_snow_caps(Style.ARCTIC)
    assert passes.has_snow_caps(Style.WATERCOLOR)
    assert not passes.has_snow_caps(Style.DAY)
    layer = passes.place_mountains(RandomSource("snow"), 800)[0]
    edge = passes.snow_cap_edge(layer, 300)
    assert (edge <= layer.base_y - layer.amplitude * DEFAULTS.SNOW_CAP_MIN_RISE + 1e-9).all()


def test_snow_caps_only_change_snowy_styles():
    layers = passes.place_mountains(RandomSource("caps"), 300)
    palette = PALETTES[Style.DAY]

    plain = passes.draw_mountains(_sky(Style.DAY, 120, 300), layers, palette, Style.DAY)
    capped = passes.draw_mountains(_sky(Style.DAY, 120, 300), layers, palette, Style.ARCTIC)
    assert not np.array_equal(plain.pixels, capped.pixels)
    # Below the farthest layers' bases nothing differs.
    assert np.array_equal(plain.pixels[int(layers[1].base_y) + 1:], capped.pixels[int(layers[1].base_y) + 1:])


def test_mountains_fill_to_the_bottom():
    layers = passes.place_mountains(RandomSource("fill"), 300)
    palette = PALETTES[Style.DAY]
    buffer = passes.draw_mountains(_sky(Style.DAY, 80, 300), layers, palette, Style.DAY)
    assert (buffer.pixels[-1, :, :3] == palette.near_mountain).all()


# --- Water ---
def test_water_randomness_is_drawn_per_wave():
    rng = RandomSource("lake")
    water = passes.place_water(rng, 1000)
    assert rng.draw_count == 1 + 2 * DEFAULTS.WAVE_COUNT
    assert 550 <= water.horizon <= 670
    assert len(water.waves) == DEFAULTS.WAVE_COUNT
    for wave in water.waves:
        base = water.horizon + wave.index * DEFAULTS.WAVE_SPACING_PX
        assert base <= wave.y <= base + DEFAULTS.WAVE_JITTER_PX


def test_wave_line_hugs_its_row():
    water = passes.place_water(RandomSource("waves"), 600)
    for wave in water.waves:
        line = passes.wave_line(wave, 400)
        assert line.shape == (400,)
        assert (np.abs(line - wave.y) <= 4.0 + 1e-9).all()


def test_water_draws_nothing_above_its_waves():
    palette = PALETTES[Style.DAY]
    before = _sky(Style.DAY, 100, 400)
    water = passes.place_water(RandomSource("still"), 400)
    after = passes.draw_water(before.copy(), water, palette.water)
    cutoff = int(np.floor(water.horizon)) - 5
    assert np.array_equal(before.pixels[:cutoff], after.pixels[:cutoff])
    assert not np.array_equal(before.pixels[cutoff:], after.pixels[cutoff:])


# --- Trees ---
def test_tree_placement():
    rng = RandomSource("forest")
    placement = passes.place_trees(rng, 640, 480)
    assert 30 <= len(placement.trees) < 80
    assert rng.draw_count == 2 + 3 * len(placement.trees)
    assert 0.68 * 480 <= placement.ground_y <= 0.76 * 480
    for tree in placement.trees:
        assert 0 <= tree.x < 640
        assert 30 <= tree.size <= 120
        assert placement.ground_y - tree.size - 20 <= tree.y <= placement.ground_y - tree.size


def test_ground_covers_the_bottom_rows():
    placement = passes.place_trees(RandomSource("ground"), 300, 400)
    buffer = passes.draw_trees(_sky(Style.DAY, 300, 400), placement, PALETTES[Style.DAY].tree)
    assert (buffer.pixels[-1, :, :3] == passes.GROUND_COLOR).all()


def test_single_tree_shape():
    color = PALETTES[Style.DAY].tree
    buffer = _sky(Style.DAY, 200, 200)
    passes.draw_tree(buffer, passes.Tree(100.0, 50.0, 100.0), color)
    # Right half of the foliage, clear of the highlight.
    assert tuple(buffer.pixels[130, 110, :3]) == color
    # Trunk pokes out below the foliage.
    assert tuple(buffer.pixels[160, 100, :3]) == passes.TRUNK_COLOR
    # Left flank is lightened by the highlight.
    assert tuple(buffer.pixels[130, 80, :3]) != color
    assert tuple(buffer.pixels[0, 10, :3]) == PALETTES[Style.DAY].sky_top
