"""
Pipeline module for the spatial detector.

The pipeline covers:
- Device pipeline assembly (camera, stereo depth, spatial detection network)
- The render/display loop driven by synchronized pairs
"""

from .engine import DetectionDisplayEngine, EngineConfig, EngineStats, create_engine_from_config
from .spatial import parse_spatial_algorithm

__all__ = [
    "DetectionDisplayEngine",
    "EngineConfig",
    "EngineStats",
    "create_engine_from_config",
    "parse_spatial_algorithm",
]
