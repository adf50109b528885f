"""
DetectionFrame model for a synchronized frame and its detections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .detection import SpatialDetection


@dataclass
class DetectionFrame:
    """
    One detection cycle: a decoded video frame and the detections made on it.

    Attributes:
        frame: The raw frame data as a numpy array (BGR format). Drawing
            happens on this buffer in place.
        detections: Spatial detections produced for this frame.
        timestamp: Unix timestamp when the pair was received.
        sequence_num: Sequence number reported by the device, if any.
    """
    frame: np.ndarray
    detections: List[SpatialDetection] = field(default_factory=list)
    timestamp: float = 0.0
    sequence_num: Optional[int] = None

    @property
    def width(self) -> int:
        return int(self.frame.shape[1])

    @property
    def height(self) -> int:
        return int(self.frame.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)
