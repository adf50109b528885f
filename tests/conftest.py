"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
camera:
  resolution: [640, 480]
  fps: 30.0
  extended_disparity: true

model:
  name: "yolov6-nano"
  labels: null

spatial:
  box_scale: 0.5
  lower_threshold: 100
  upper_threshold: 5000
  algorithm: "average"
  step_size: 1

display:
  window_name: "Display"
  quit_key: "q"
  wait_ms: 1
  too_close_mm: 300

log_path: null
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "camera": {
            "resolution": [640, 480],
            "fps": 30.0,
            "extended_disparity": True,
        },
        "model": {
            "name": "yolov6-nano",
            "labels": None,
        },
        "spatial": {
            "box_scale": 0.5,
            "lower_threshold": 100,
            "upper_threshold": 5000,
            "algorithm": "average",
            "step_size": 1,
        },
        "display": {
            "window_name": "Display",
            "quit_key": "q",
            "wait_ms": 1,
            "too_close_mm": 300,
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }


@pytest.fixture
def blank_frame():
    """A black 640x480 BGR frame."""
    return np.zeros((480, 640, 3), dtype=np.uint8)
