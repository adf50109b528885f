"""
Display loop engine for the spatial detector.

Pulls synchronized (frame, detections) pairs from a DetectionSource, draws
the detection overlay onto each frame and shows it. The display window's
quit key is the only way the loop asks the source to stop.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from display.window import DisplayWindow, create_window_from_config
from models.config import Config
from models.frame import DetectionFrame
from observation.base import DetectionSource
from rendering.overlay import DetectionOverlay, OverlayStyle


@dataclass
class EngineConfig:
    """
    Configuration for the display engine.

    Attributes:
        max_consecutive_failures: Max empty reads before stopping.
        retry_delay: Seconds to wait after an empty read.
        stats_log_interval: Seconds between status log messages.
    """
    max_consecutive_failures: int = 10
    retry_delay: float = 0.1
    stats_log_interval: float = 60.0


@dataclass
class EngineStats:
    """Runtime statistics for the engine."""
    frame_count: int = 0
    detection_count: int = 0
    too_close_count: int = 0
    start_time: float = field(default_factory=time.time)
    last_stats_log_time: float = field(default_factory=time.time)
    consecutive_failures: int = 0


class DetectionDisplayEngine:
    """
    Single-threaded render/display loop.

    Each cycle:
    - Reads one DetectionFrame from the source
    - Draws the overlay onto the frame in place
    - Shows the frame and polls the quit key

    Example:
        source = build_pipeline(config)
        overlay = DetectionOverlay(source.label_map)
        window = DisplayWindow("Display")
        engine = DetectionDisplayEngine(source, overlay, window)
        engine.run()
    """

    def __init__(
        self,
        source: DetectionSource,
        overlay: DetectionOverlay,
        window: DisplayWindow,
        config: Optional[EngineConfig] = None,
    ):
        self.source = source
        self.overlay = overlay
        self.window = window
        self.config = config or EngineConfig()
        self.stats = EngineStats()
        self._running = False
        self._callbacks: List[Callable[[DetectionFrame], None]] = []

    @property
    def is_running(self) -> bool:
        return self._running

    def add_callback(self, callback: Callable[[DetectionFrame], None]) -> None:
        """
        Add a callback to be called after each frame is drawn.

        Args:
            callback: Function taking the annotated DetectionFrame.
        """
        self._callbacks.append(callback)

    def run(self) -> None:
        """
        Run the loop until quit is requested or the source is exhausted.

        Raises:
            DisplayError: If the window cannot be created or updated.
        """
        self._running = True
        self.stats = EngineStats()

        try:
            self.window.open()
            self.source.open()
            logging.info(f"Engine started: source={self.source.source_id}, window={self.window.name}")

            while self._running:
                detection_frame = self.source.read()

                if detection_frame is None:
                    self.stats.consecutive_failures += 1
                    if self.stats.consecutive_failures >= self.config.max_consecutive_failures:
                        logging.error(
                            f"Too many consecutive empty reads ({self.stats.consecutive_failures}), stopping"
                        )
                        break
                    logging.warning(
                        f"No frame available ({self.stats.consecutive_failures}/"
                        f"{self.config.max_consecutive_failures})"
                    )
                    time.sleep(self.config.retry_delay)
                    continue

                self.stats.consecutive_failures = 0
                if not self.process(detection_frame):
                    break

                self._log_stats()

        except KeyboardInterrupt:
            logging.info("Engine interrupted by user")
        finally:
            self._cleanup()

    def process(self, detection_frame: DetectionFrame) -> bool:
        """
        Draw and display one cycle.

        Returns False once the window has requested quit.
        """
        self.stats.frame_count += 1
        self.stats.detection_count += len(detection_frame.detections)
        self.stats.too_close_count += sum(
            1 for d in detection_frame.detections if d.depth_mm < self.overlay.style.too_close_mm
        )

        self.overlay.draw(detection_frame.frame, detection_frame.detections)

        for callback in self._callbacks:
            try:
                callback(detection_frame)
            except Exception as e:
                logging.warning(f"Callback error: {e}")

        if not self.window.show(detection_frame.frame):
            logging.info("Quit requested from display window")
            self.stop()
            return False
        return True

    def stop(self) -> None:
        """Signal the loop to stop after the current frame."""
        self._running = False

    def _log_stats(self) -> None:
        now = time.time()
        if now - self.stats.last_stats_log_time >= self.config.stats_log_interval:
            elapsed = max(now - self.stats.start_time, 1e-6)
            logging.info(
                f"Engine stats: frames={self.stats.frame_count}, "
                f"fps={self.stats.frame_count / elapsed:.1f}, "
                f"detections={self.stats.detection_count}, "
                f"too_close={self.stats.too_close_count}"
            )
            self.stats.last_stats_log_time = now

    def _cleanup(self) -> None:
        """Stop the source and release the window."""
        self._running = False

        try:
            self.source.close()
        finally:
            self.window.close()

        logging.info(f"Engine stopped after {self.stats.frame_count} frames")


def create_engine_from_config(
    config: Config,
    source: DetectionSource,
    engine_config: Optional[EngineConfig] = None,
) -> DetectionDisplayEngine:
    """
    Factory function to create a DetectionDisplayEngine for a source.

    The label map comes from the source; the too-close threshold and
    window settings come from config.display.
    """
    style = OverlayStyle(too_close_mm=config.display.too_close_mm)
    overlay = DetectionOverlay(source.label_map, style)
    window = create_window_from_config(config.display)
    return DetectionDisplayEngine(source, overlay, window, engine_config)
