"""
Observation layer for synchronized frame + detection sources.

This layer abstracts where (frame, detections) pairs come from so the
display loop can run against the device pipeline or a test double. Each
source implements the DetectionSource interface and returns
DetectionFrame objects.
"""

from .base import DetectionSource
from .depthai_source import DepthAISource

__all__ = [
    "DetectionSource",
    "DepthAISource",
]
