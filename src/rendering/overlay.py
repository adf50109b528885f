"""
Detection overlay rendering.

Draws a bounding box, class label and X/Y/Z readout for every spatial
detection directly onto the frame buffer. Layout is computed by annotate()
as plain data so it can be inspected without touching pixels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from models.detection import BoundingBox, SpatialDetection

# Objects closer than this (mm) are flagged
TOO_CLOSE_MM = 300
TOO_CLOSE_SUFFIX = " [TOO CLOSE]"

# Colors (BGR)
COLOR_OK = (0, 255, 0)  # Green
COLOR_TOO_CLOSE = (0, 0, 255)  # Red
COLOR_TEXT = (255, 255, 255)  # White

Color = Tuple[int, int, int]
Point = Tuple[int, int]


@dataclass
class OverlayStyle:
    """
    Fixed annotation layout.

    Attributes:
        too_close_mm: Depth below which a detection is drawn as too close.
        ok_color: Box color for detections at a safe distance.
        too_close_color: Box color for detections closer than too_close_mm.
        text_color: Color for all text.
        font: OpenCV font face.
        font_scale: OpenCV font scale.
        box_thickness: Rectangle outline thickness in pixels.
        label_offset: Pixels between the label baseline and the box top.
        line_indent: Horizontal indent of the coordinate lines.
        line_spacing: Vertical step between coordinate lines.
    """
    too_close_mm: float = TOO_CLOSE_MM
    ok_color: Color = COLOR_OK
    too_close_color: Color = COLOR_TOO_CLOSE
    text_color: Color = COLOR_TEXT
    font: int = cv2.FONT_HERSHEY_TRIPLEX
    font_scale: float = 0.5
    box_thickness: int = 1
    label_offset: int = 5
    line_indent: int = 3
    line_spacing: int = 15


@dataclass
class Annotation:
    """Everything drawn for one detection, in pixel space."""
    box: BoundingBox
    box_color: Color
    label: str
    label_origin: Point
    lines: List[Tuple[str, Point]] = field(default_factory=list)
    too_close: bool = False


def resolve_label(class_index: int, label_map: Sequence[str]) -> str:
    """Look up a class name, falling back to the index itself when out of range."""
    if 0 <= class_index < len(label_map):
        return label_map[class_index]
    return str(class_index)


def annotate(
    detection: SpatialDetection,
    width: int,
    height: int,
    label_map: Sequence[str],
    style: Optional[OverlayStyle] = None,
) -> Annotation:
    """
    Lay out the overlay for a single detection on a width x height frame.

    Args:
        detection: Detection with a normalized box.
        width: Frame width in pixels.
        height: Frame height in pixels.
        label_map: Class names indexed by detection.label.
        style: Colors, font and spacing.

    Returns:
        Annotation with the pixel box, colors, label and coordinate lines.
    """
    style = style or OverlayStyle()
    box = detection.box.to_pixels(width, height)
    label = resolve_label(detection.label, label_map)

    too_close = detection.depth_mm < style.too_close_mm
    box_color = style.ok_color
    if too_close:
        label += TOO_CLOSE_SUFFIX
        box_color = style.too_close_color

    x, y = box.x1, box.y1
    coords = detection.spatial
    readouts = [
        f"X: {int(coords.x)}mm",
        f"Y: {int(coords.y)}mm",
        f"Z (Depth): {int(coords.z)}mm",
    ]
    lines = [
        (text, (x + style.line_indent, y + style.line_spacing * (i + 1)))
        for i, text in enumerate(readouts)
    ]

    return Annotation(
        box=box,
        box_color=box_color,
        label=label,
        label_origin=(x, y - style.label_offset),
        lines=lines,
        too_close=too_close,
    )


def draw_annotation(frame: np.ndarray, annotation: Annotation, style: Optional[OverlayStyle] = None) -> None:
    """Draw one annotation onto the frame in place."""
    style = style or OverlayStyle()
    box = annotation.box
    cv2.rectangle(frame, box.bottom_right, box.top_left, annotation.box_color, style.box_thickness)
    cv2.putText(frame, annotation.label, annotation.label_origin,
                style.font, style.font_scale, style.text_color)
    for text, origin in annotation.lines:
        cv2.putText(frame, text, origin, style.font, style.font_scale, style.text_color)


class DetectionOverlay:
    """
    Renders spatial detections onto frames.

    Holds only the immutable label map and style, so repeated draw() calls
    are independent of each other.

    Example:
        overlay = DetectionOverlay(["person", "bottle"])
        overlay.draw(frame, detections)
        cv2.imshow("Display", frame)
    """

    def __init__(self, label_map: Sequence[str], style: Optional[OverlayStyle] = None):
        self._label_map: Tuple[str, ...] = tuple(label_map)
        self._style = style or OverlayStyle()

    @property
    def label_map(self) -> Tuple[str, ...]:
        return self._label_map

    @property
    def style(self) -> OverlayStyle:
        return self._style

    def annotate(self, frame: np.ndarray, detections: Sequence[SpatialDetection]) -> List[Annotation]:
        """Compute annotations for a frame without drawing them."""
        height, width = frame.shape[:2]
        return [
            annotate(det, width, height, self._label_map, self._style)
            for det in detections
        ]

    def draw(self, frame: np.ndarray, detections: Sequence[SpatialDetection]) -> None:
        """Draw all detections onto the frame in place."""
        for annotation in self.annotate(frame, detections):
            draw_annotation(frame, annotation, self._style)
