"""
Typed models for the spatial detector application.

Use the adapter functions to convert from SDK messages and config dicts.
"""

from .frame import DetectionFrame
from .detection import BoundingBox, NormalizedBox, SpatialCoordinates, SpatialDetection
from .config import (
    Config,
    CameraConfig,
    ModelConfig,
    SpatialConfig,
    DisplayConfig,
)

__all__ = [
    # Frame
    "DetectionFrame",
    # Detection
    "BoundingBox",
    "NormalizedBox",
    "SpatialCoordinates",
    "SpatialDetection",
    # Config
    "Config",
    "CameraConfig",
    "ModelConfig",
    "SpatialConfig",
    "DisplayConfig",
]
