import dataclasses

import pytest

from nature_generator import config as DEFAULTS
from nature_generator.palettes import Style
from nature_generator.scene import SceneConfig, preset_dimensions


def test_from_dict_uses_defaults():
    scene = SceneConfig.from_dict({})
    assert scene == SceneConfig()
    assert scene.style is Style.DAY
    assert scene.size == (DEFAULTS.DEFAULT_WIDTH, DEFAULTS.DEFAULT_HEIGHT)
    assert scene.seed == "nature"
    assert scene.include_water and scene.include_trees


def test_from_dict_reads_every_field():
    scene = SceneConfig.from_dict({
        'style': "Night", 'width': "640", 'height': 480, 'seed': 42,
        'include_water': 0, 'include_trees': False,
    })
    assert scene == SceneConfig(Style.NIGHT, 640, 480, "42", False, False)


def test_size_preset_wins_over_explicit_dimensions():
    scene = SceneConfig.from_dict({'size': "Landscape", 'width': 10, 'height': 10})
    assert scene.size == (1280, 720)


def test_unknown_preset_is_an_error():
    with pytest.raises(ValueError, match="Unknown size preset"):
        SceneConfig.from_dict({'size': "billboard"})
    with pytest.raises(ValueError):
        preset_dimensions("poster")


def test_preset_lookup():
    assert preset_dimensions("wallpaper") == (1920, 1080)
    assert preset_dimensions("instagram") == (1080, 1350)


def test_unknown_style_falls_back_to_day():
    assert SceneConfig(style="sepia").style is Style.DAY
    assert SceneConfig.from_dict({'style': "sepia"}).style is Style.DAY


def test_missing_seed_becomes_empty():
    assert SceneConfig(seed=None).seed == ""
    assert SceneConfig.from_dict({'seed': None}).seed == ""


def test_dict_round_trip():
    scene = SceneConfig(Style.AUTUMN, 300, 200, "leaves", True, False)
    assert scene.to_dict()['style'] == "autumn"
    assert SceneConfig.from_dict(scene.to_dict()) == scene


def test_scene_is_immutable():
    scene = SceneConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        scene.width = 10
    changed = scene.replace(width=10)
    assert changed.width == 10
    assert scene.width == DEFAULTS.DEFAULT_WIDTH
