"""
depthai-based detection source.

Reads the spatial detection network's passthrough frames and detections
from host output queues and pairs them by sequence number. The device
pipeline itself is assembled in pipeline.builder.
"""

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional, Sequence

from models.detection import SpatialDetection
from models.frame import DetectionFrame
from .base import DetectionSource


class DepthAISource(DetectionSource):
    """
    Detection source backed by a depthai v3 pipeline.

    Closing the source stops the device pipeline, so a quit request from
    the display loop also stops frame production upstream.

    Example:
        source = build_pipeline(config)
        with source:
            for detection_frame in source:
                overlay.draw(detection_frame.frame, detection_frame.detections)
    """

    def __init__(
        self,
        pipeline: Any,
        frame_queue: Any,
        detection_queue: Any,
        label_map: Optional[Sequence[str]] = None,
        source_id: str = "oak",
    ):
        super().__init__(source_id)
        self._pipeline = pipeline
        self._frame_queue = frame_queue
        self._detection_queue = detection_queue
        self._label_map = list(label_map or [])

    @property
    def label_map(self) -> List[str]:
        return list(self._label_map)

    def open(self) -> None:
        """Start the device pipeline."""
        if self._is_open:
            return
        if not self._pipeline.isRunning():
            self._pipeline.start()
        self._is_open = True
        self._frame_index = 0
        logging.info(f"DepthAISource opened: source_id={self.source_id}, labels={len(self._label_map)}")

    def read(self) -> Optional[DetectionFrame]:
        """
        Block until the next frame and its detections are available.

        Returns None once the source is closed or the pipeline has stopped.
        """
        if not self._is_open or not self._pipeline.isRunning():
            return None

        frame_msg = self._frame_queue.get()
        det_msg = self._detection_queue.get()

        # Drop whichever message is older until both describe the same frame
        frame_seq = frame_msg.getSequenceNum()
        det_seq = det_msg.getSequenceNum()
        while frame_seq != det_seq:
            if frame_seq < det_seq:
                logging.debug(f"Dropping unmatched frame seq={frame_seq} (detections seq={det_seq})")
                frame_msg = self._frame_queue.get()
                frame_seq = frame_msg.getSequenceNum()
            else:
                logging.debug(f"Dropping unmatched detections seq={det_seq} (frame seq={frame_seq})")
                det_msg = self._detection_queue.get()
                det_seq = det_msg.getSequenceNum()

        detections = [SpatialDetection.from_dai(d) for d in det_msg.detections]
        self._frame_index += 1

        return DetectionFrame(
            frame=frame_msg.getCvFrame(),
            detections=detections,
            timestamp=time.time(),
            sequence_num=frame_seq,
        )

    def close(self) -> None:
        """Stop the device pipeline."""
        if not self._is_open:
            return
        self._is_open = False
        if self._pipeline.isRunning():
            self._pipeline.stop()
        logging.info(f"DepthAISource closed after {self._frame_index} frames")
