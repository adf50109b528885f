"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CameraConfig:
    """Camera and stereo depth configuration."""
    resolution: List[int] = field(default_factory=lambda: [640, 480])
    fps: float = 30.0
    extended_disparity: bool = True

    @property
    def width(self) -> int:
        return int(self.resolution[0])

    @property
    def height(self) -> int:
        return int(self.resolution[1])

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CameraConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            resolution=list(d.get("resolution", [640, 480])),
            fps=float(d.get("fps", 30.0)),
            extended_disparity=bool(d.get("extended_disparity", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resolution": self.resolution,
            "fps": self.fps,
            "extended_disparity": self.extended_disparity,
        }


@dataclass
class ModelConfig:
    """Detection network configuration."""
    name: str = "yolov6-nano"
    labels: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ModelConfig":
        labels = d.get("labels")
        return cls(
            name=d.get("name", "yolov6-nano"),
            labels=list(labels) if labels is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"name": self.name}
        if self.labels is not None:
            d["labels"] = self.labels
        return d


@dataclass
class SpatialConfig:
    """
    Spatial location calculation settings.

    Attributes:
        box_scale: Scale applied to the bounding box before sampling depth.
        lower_threshold: Depth values below this (mm) are ignored.
        upper_threshold: Depth values above this (mm) are ignored.
        algorithm: Depth aggregation: average/mean/min/max/mode/median.
        step_size: Distance in pixels between sampled depth points.
    """
    box_scale: float = 0.5
    lower_threshold: int = 100
    upper_threshold: int = 5000
    algorithm: str = "average"
    step_size: int = 1

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SpatialConfig":
        return cls(
            box_scale=float(d.get("box_scale", 0.5)),
            lower_threshold=int(d.get("lower_threshold", 100)),
            upper_threshold=int(d.get("upper_threshold", 5000)),
            algorithm=str(d.get("algorithm", "average")),
            step_size=int(d.get("step_size", 1)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "box_scale": self.box_scale,
            "lower_threshold": self.lower_threshold,
            "upper_threshold": self.upper_threshold,
            "algorithm": self.algorithm,
            "step_size": self.step_size,
        }


@dataclass
class DisplayConfig:
    """Display window and overlay configuration."""
    window_name: str = "Display"
    quit_key: str = "q"
    wait_ms: int = 1
    too_close_mm: float = 300.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DisplayConfig":
        return cls(
            window_name=d.get("window_name", "Display"),
            quit_key=d.get("quit_key", "q"),
            wait_ms=int(d.get("wait_ms", 1)),
            too_close_mm=float(d.get("too_close_mm", 300.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window_name": self.window_name,
            "quit_key": self.quit_key,
            "wait_ms": self.wait_ms,
            "too_close_mm": self.too_close_mm,
        }


@dataclass
class Config:
    """Full application configuration."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    spatial: SpatialConfig = field(default_factory=SpatialConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create from the merged YAML dictionary."""
        return cls(
            camera=CameraConfig.from_dict(d.get("camera") or {}),
            model=ModelConfig.from_dict(d.get("model") or {}),
            spatial=SpatialConfig.from_dict(d.get("spatial") or {}),
            display=DisplayConfig.from_dict(d.get("display") or {}),
            log_path=d.get("log_path"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "camera": self.camera.to_dict(),
            "model": self.model.to_dict(),
            "spatial": self.spatial.to_dict(),
            "display": self.display.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
