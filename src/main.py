"""
Spatial object detector: runs a camera + stereo depth + detection network
pipeline on an OAK-D device and shows detections with their X/Y/Z position.

Usage:
    python src/main.py --config config/config.yaml -w 640 -H 480 -m yolov6-nano

Arguments:
    --config: Path to configuration file
    -w/--width, -H/--height: Camera output size (multiples of 16)
    -m/--model: Model zoo name of the detection network
    -b/--box-scale: Bounding box scale used for depth calculation
    -l/--lower-threshold, -u/--upper-threshold: Depth range in mm
    -a/--algorithm: average/mean/min/max/mode/median
    -s/--step-size: Pixel step used for depth calculation
    -f/--fps: Frames per second processed

Press 'q' in the display window to quit.
"""

import os
import sys
import argparse
import logging
from typing import Any, Dict, List, Optional, Tuple

import yaml

from models.config import Config
from ops.logging import setup_logging
from display.window import DisplayError
from pipeline.engine import create_engine_from_config

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        base_path = os.path.join(os.path.dirname(config_path), "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(os.path.dirname(config_path), "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        # Finally apply explicit config_path if it's not one of the files above
        explicit = os.path.abspath(config_path)
        if os.path.exists(config_path) and explicit not in (
            os.path.abspath(local_overrides_path),
            os.path.abspath(base_path),
        ):
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    The spatial algorithm name is not checked here; unknown names fall
    back to the average algorithm when the pipeline is built.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['camera', 'model', 'spatial', 'display', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Validate camera settings
    camera = config.get('camera') or {}
    if 'resolution' not in camera:
        return False, "Missing camera.resolution"
    resolution = camera['resolution']
    if not isinstance(resolution, list) or len(resolution) != 2:
        return False, "camera.resolution must be a list of [width, height]"
    if not all(_is_int(x) and x > 0 for x in resolution):
        return False, "camera.resolution values must be positive integers"
    if not all(x % 16 == 0 for x in resolution):
        return False, "camera.resolution values must be multiples of 16"

    if 'fps' not in camera:
        return False, "Missing camera.fps"
    if not _is_number(camera['fps']) or camera['fps'] <= 0:
        return False, "camera.fps must be a positive number"

    # Validate model settings
    model = config.get('model') or {}
    if not isinstance(model.get('name'), str) or not model.get('name'):
        return False, "model.name must be a non-empty string"
    labels = model.get('labels')
    if labels is not None:
        if not isinstance(labels, list) or not all(isinstance(x, str) for x in labels):
            return False, "model.labels must be a list of strings"

    # Validate spatial calculation settings
    spatial = config.get('spatial') or {}
    box_scale = spatial.get('box_scale', 0.5)
    if not _is_number(box_scale) or not (0 < box_scale <= 1):
        return False, "spatial.box_scale must be between 0 and 1"
    lower = spatial.get('lower_threshold', 100)
    upper = spatial.get('upper_threshold', 5000)
    if not _is_int(lower) or lower < 0:
        return False, "spatial.lower_threshold must be a non-negative integer"
    if not _is_int(upper) or upper < 0:
        return False, "spatial.upper_threshold must be a non-negative integer"
    if lower >= upper:
        return False, "spatial.lower_threshold must be below spatial.upper_threshold"
    step_size = spatial.get('step_size', 1)
    if not _is_int(step_size) or step_size <= 0:
        return False, "spatial.step_size must be a positive integer"
    if 'algorithm' in spatial and not isinstance(spatial['algorithm'], str):
        return False, "spatial.algorithm must be a string"

    # Validate display settings
    display = config.get('display') or {}
    window_name = display.get('window_name', 'Display')
    if not isinstance(window_name, str) or not window_name:
        return False, "display.window_name must be a non-empty string"
    quit_key = display.get('quit_key', 'q')
    if not isinstance(quit_key, str) or len(quit_key) != 1 or not quit_key.isascii():
        return False, "display.quit_key must be a single ASCII character"
    too_close = display.get('too_close_mm', 300)
    if not _is_number(too_close) or too_close <= 0:
        return False, "display.too_close_mm must be a positive number"
    wait_ms = display.get('wait_ms', 1)
    if not _is_int(wait_ms) or wait_ms <= 0:
        return False, "display.wait_ms must be a positive integer"

    # Validate log settings
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"
    log_path = config.get('log_path')
    if log_path is not None and not isinstance(log_path, str):
        return False, "log_path must be a string"

    return True, None


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spatial-detector',
        description='Runs a multi-node pipeline for visual object and depth detection',
    )
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('-w', '--width', type=int,
                        help='Width of the camera output in pixels; must be a multiple of 16')
    parser.add_argument('-H', '--height', type=int,
                        help='Height of the camera output in pixels; must be a multiple of 16')
    parser.add_argument('-m', '--model', type=str,
                        help='Name of the object detection neural network')
    parser.add_argument('-b', '--box-scale', type=float,
                        help='Scale of the bounding box used for depth calculations')
    parser.add_argument('-l', '--lower-threshold', '--l-threshold', dest='lower_threshold', type=int,
                        help='Depth values below this (mm) are ignored in depth calculation')
    parser.add_argument('-u', '--upper-threshold', '--u-threshold', dest='upper_threshold', type=int,
                        help='Depth values above this (mm) are ignored in depth calculation')
    parser.add_argument('-a', '--algorithm', '--alg', dest='algorithm', type=str,
                        help='Algorithm used to calculate object depth: average/mean/min/max/mode/median')
    parser.add_argument('-s', '--step-size', type=int,
                        help='Distance between pixels used in depth calculation')
    parser.add_argument('-f', '--fps', type=float,
                        help='Frames per second processed')
    parser.add_argument('--log-level', type=str, choices=VALID_LOG_LEVELS,
                        help='Override log level')
    return parser


def apply_cli_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Overlay command-line values onto the loaded config; unset flags are ignored."""
    camera = config.setdefault('camera', {})
    if args.width is not None or args.height is not None:
        resolution = list(camera.get('resolution') or [640, 480])
        if args.width is not None:
            resolution[0] = args.width
        if args.height is not None:
            resolution[1] = args.height
        camera['resolution'] = resolution
    if args.fps is not None:
        camera['fps'] = args.fps

    if args.model is not None:
        config.setdefault('model', {})['name'] = args.model

    spatial = config.setdefault('spatial', {})
    for key in ('box_scale', 'lower_threshold', 'upper_threshold', 'algorithm', 'step_size'):
        value = getattr(args, key)
        if value is not None:
            spatial[key] = value

    if args.log_level is not None:
        config['log_level'] = args.log_level
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main application function."""
    args = build_arg_parser().parse_args(argv)

    # Load configuration
    config = apply_cli_overrides(load_config(args.config), args)

    # Validate configuration
    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        return 1

    cfg = Config.from_dict(config)
    setup_logging(cfg.log_path, cfg.log_level)
    logging.info("Starting spatial detector")

    # depthai is only loaded once the config is valid
    from pipeline.builder import build_pipeline

    try:
        source = build_pipeline(cfg)
        engine = create_engine_from_config(cfg, source)
        engine.run()
    except DisplayError as e:
        logging.error(f"Display unavailable: {e}")
        return 1
    except RuntimeError as e:
        logging.error(f"Pipeline error: {e}")
        return 1

    logging.info("Spatial detector stopped")
    return 0


if __name__ == '__main__':
    sys.exit(main())
