"""
Overlay rendering for spatial detections.
"""

from .overlay import (
    TOO_CLOSE_MM,
    TOO_CLOSE_SUFFIX,
    COLOR_OK,
    COLOR_TOO_CLOSE,
    COLOR_TEXT,
    Annotation,
    DetectionOverlay,
    OverlayStyle,
    annotate,
    draw_annotation,
    resolve_label,
)

__all__ = [
    "TOO_CLOSE_MM",
    "TOO_CLOSE_SUFFIX",
    "COLOR_OK",
    "COLOR_TOO_CLOSE",
    "COLOR_TEXT",
    "Annotation",
    "DetectionOverlay",
    "OverlayStyle",
    "annotate",
    "draw_annotation",
    "resolve_label",
]
