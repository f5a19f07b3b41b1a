# render_nature.py

"""
================================================================================
COMMAND-LINE SCENE RENDERER
================================================================================
Renders a nature scene (or a gallery of every style) and writes it to PNG.

Scene parameters come from an optional JSON config file, either at the top
level or under a "scene_parameters" key, and any flag given on the command
line overrides the file.

Usage:
    python render_nature.py --style night --size landscape --seed stars
    python render_nature.py --config my_scene.json --all-styles
================================================================================
"""
import argparse
import json
import logging
import sys

from tqdm import tqdm

from nature_generator import config as DEFAULTS
from nature_generator.export import save_result
from nature_generator.palettes import Style
from nature_generator.pipeline import RenderPipeline
from nature_generator.random_source import generate_seed
from nature_generator.raster import SurfaceAcquisitionError
from nature_generator.scene import SceneConfig

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Procedural nature scene renderer.")
    parser.add_argument("--config", type=str, help="Path to a JSON file of scene parameters.")
    parser.add_argument("--style", type=str, help=f"One of: {', '.join(s.value for s in Style)}.")
    parser.add_argument("--size", type=str, help=f"Size preset: {', '.join(DEFAULTS.SIZE_PRESETS)}.")
    parser.add_argument("--width", type=int, help="Custom width in pixels.")
    parser.add_argument("--height", type=int, help="Custom height in pixels.")
    parser.add_argument("--seed", type=str, help="Seed string. An empty string picks a random seed.")
    parser.add_argument("--no-water", dest="include_water", action="store_false", default=None, help="Leave out the water.")
    parser.add_argument("--no-trees", dest="include_trees", action="store_false", default=None, help="Leave out the trees.")
    parser.add_argument("--output-dir", type=str, default=DEFAULTS.DEFAULT_OUTPUT_DIR, help="Directory for the PNG files.")
    parser.add_argument("--all-styles", action="store_true", help="Render the same scene once in every style.")
    parser.add_argument("--verbose", action="store_true", help="Log per-pass detail.")
    return parser

def load_scene_parameters(config_path: str, logger: logging.Logger) -> dict:
    """Loads scene parameters from a JSON file. Raises on a missing or malformed file."""
    logger.info(f"Loading configuration from: {config_path}")
    with open(config_path, 'r') as f:
        config = json.load(f)
    return dict(config.get('scene_parameters', config))

def merge_arguments(params: dict, args: argparse.Namespace) -> dict:
    """Command-line flags win over values from the config file."""
    merged = dict(params)
    if args.width is not None or args.height is not None:
        merged.pop('size', None)
    for key in ('style', 'size', 'width', 'height', 'seed', 'include_water', 'include_trees'):
        value = getattr(args, key)
        if value is not None:
            merged[key] = value
    return merged

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Renderer")

    # 2. --- Load Configuration ---
    params = {}
    if args.config:
        try:
            params = load_scene_parameters(args.config, logger)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    try:
        scene = SceneConfig.from_dict(merge_arguments(params, args), logger=logger)
    except ValueError as e:
        logger.critical(f"Invalid scene parameters: {e}")
        return 1

    # 3. --- Render ---
    pipeline = RenderPipeline(logger=logger)
    if args.all_styles and not scene.seed:
        # One seed shared by every style in the gallery.
        scene = scene.replace(seed=generate_seed())
        logger.info(f"Randomized gallery seed: '{scene.seed}'.")
    scenes = [scene.replace(style=style) for style in Style] if args.all_styles else [scene]

    try:
        for item in tqdm(scenes, desc="Rendering Styles", disable=len(scenes) == 1):
            result = pipeline.render(item)
            if result.seed_was_generated:
                logger.info(f"Randomized seed used: '{result.effective_seed}'. Pass --seed {result.effective_seed} to reproduce.")
            save_result(result, args.output_dir, logger=logger)
    except SurfaceAcquisitionError as e:
        logger.critical(f"Render aborted: {e}")
        return 1

    return 0

# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
