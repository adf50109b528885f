"""
Detection models for spatial object detection results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """
    A bounding box in pixel coordinates.

    Attributes:
        x1: Left edge x coordinate.
        y1: Top edge y coordinate.
        x2: Right edge x coordinate.
        y2: Bottom edge y coordinate.
    """
    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    @property
    def top_left(self) -> Tuple[int, int]:
        return (self.x1, self.y1)

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return (self.x2, self.y2)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return as (x1, y1, x2, y2) tuple."""
        return (self.x1, self.y1, self.x2, self.y2)


@dataclass(frozen=True)
class NormalizedBox:
    """
    A bounding box relative to the frame size.

    Values are nominally in [0, 1] but are not clamped; the detection
    network may report boxes slightly outside the frame.
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def to_pixels(self, width: int, height: int) -> BoundingBox:
        """
        Scale to pixel space for a frame of the given size.

        Each edge is multiplied by the matching frame dimension and
        truncated toward zero. No clamping is applied.
        """
        return BoundingBox(
            x1=int(self.xmin * width),
            y1=int(self.ymin * height),
            x2=int(self.xmax * width),
            y2=int(self.ymax * height),
        )


@dataclass(frozen=True)
class SpatialCoordinates:
    """Camera-relative position in millimetres."""
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class SpatialDetection:
    """
    A single detection from the spatial detection network.

    Attributes:
        box: Bounding box normalized to the frame size.
        label: Class index into the label map.
        spatial: 3D position of the object in millimetres.
        confidence: Detection confidence score (0-1).
    """
    box: NormalizedBox
    label: int
    spatial: SpatialCoordinates
    confidence: float = 1.0

    @property
    def depth_mm(self) -> float:
        return self.spatial.z

    @classmethod
    def from_values(
        cls,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
        label: int = 0,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        confidence: float = 1.0,
    ) -> "SpatialDetection":
        """Create a SpatialDetection from flat box, label and coordinate values."""
        return cls(
            box=NormalizedBox(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax),
            label=int(label),
            spatial=SpatialCoordinates(x=x, y=y, z=z),
            confidence=confidence,
        )

    @classmethod
    def from_dai(cls, det: Any) -> "SpatialDetection":
        """
        Adapter: Convert a depthai SpatialImgDetection to SpatialDetection.

        Raises AttributeError if the upstream object is missing a field.
        """
        coords = det.spatialCoordinates
        return cls.from_values(
            xmin=float(det.xmin),
            ymin=float(det.ymin),
            xmax=float(det.xmax),
            ymax=float(det.ymax),
            label=int(det.label),
            x=float(coords.x),
            y=float(coords.y),
            z=float(coords.z),
            confidence=float(det.confidence),
        )
