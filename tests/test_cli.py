import json
import logging

from PIL import Image

import render_nature
from nature_generator.palettes import Style


def _run(tmp_path, *flags):
    return render_nature.main(["--output-dir", str(tmp_path), *flags])


def test_renders_a_single_scene(tmp_path):
    assert _run(tmp_path, "--width", "64", "--height", "48", "--style", "night", "--seed", "cli") == 0
    path = tmp_path / "nature-night-64x48.png"
    assert path.exists()
    with Image.open(path) as image:
        assert image.size == (64, 48)


def test_config_file_supplies_parameters(tmp_path):
    config_path = tmp_path / "scene.json"
    config_path.write_text(json.dumps({
        "scene_parameters": {"style": "autumn", "width": 40, "height": 30, "seed": "file", "include_trees": False}
    }))
    assert _run(tmp_path, "--config", str(config_path)) == 0
    assert (tmp_path / "nature-autumn-40x30.png").exists()


def test_flags_override_the_config_file(tmp_path):
    config_path = tmp_path / "scene.json"
    config_path.write_text(json.dumps({"style": "autumn", "size": "wallpaper", "seed": "file"}))
    assert _run(tmp_path, "--config", str(config_path), "--style", "fog", "--width", "32", "--height", "24") == 0
    assert (tmp_path / "nature-fog-32x24.png").exists()


def test_missing_config_file_fails(tmp_path):
    assert _run(tmp_path, "--config", str(tmp_path / "nope.json")) == 1


def test_malformed_config_file_fails(tmp_path):
    config_path = tmp_path / "broken.json"
    config_path.write_text("{ not json")
    assert _run(tmp_path, "--config", str(config_path)) == 1


def test_unknown_preset_fails(tmp_path):
    assert _run(tmp_path, "--size", "billboard") == 1


def test_invalid_dimensions_fail(tmp_path):
    assert _run(tmp_path, "--width", "0", "--height", "10") == 1
    assert not list(tmp_path.glob("*.png"))


def test_all_styles_share_one_random_seed(tmp_path, caplog):
    with caplog.at_level(logging.INFO):
        assert _run(tmp_path, "--all-styles", "--seed", "", "--width", "32", "--height", "24") == 0
    files = sorted(p.name for p in tmp_path.glob("*.png"))
    assert files == sorted(f"nature-{style.value}-32x24.png" for style in Style)
    assert "Randomized gallery seed" in caplog.text
    assert "Empty seed" not in caplog.text


def test_merge_arguments():
    args = render_nature.build_parser().parse_args(["--no-water", "--seed", "x", "--height", "99"])
    merged = render_nature.merge_arguments({"size": "square", "style": "night", "include_trees": False}, args)
    assert merged == {"style": "night", "include_trees": False, "include_water": False, "seed": "x", "height": 99}


def test_parser_defaults_leave_file_values_alone():
    args = render_nature.build_parser().parse_args([])
    assert render_nature.merge_arguments({"style": "arctic"}, args) == {"style": "arctic"}
