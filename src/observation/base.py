"""
DetectionSource interface for synchronized frame + detection producers.

The display loop only needs one fully formed (frame, detections) pair per
cycle. Sources hide where those pairs come from:
- A depthai spatial detection pipeline running on the device
- Recorded or synthetic pairs in tests
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from models.frame import DetectionFrame


class DetectionSource(ABC):
    """
    Abstract base class for detection sources.

    Lifecycle:
        1. Create instance
        2. Call open() to start producing pairs
        3. Call read() repeatedly to get DetectionFrames
        4. Call close() to stop the producer and release resources

    Can also be used as a context manager:
        with source:
            for detection_frame in source:
                process(detection_frame)
    """

    def __init__(self, source_id: str = "default"):
        self._source_id = source_id
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        """Unique identifier for this source."""
        return self._source_id

    @property
    def is_open(self) -> bool:
        """Whether the source is currently open and ready to read."""
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Number of pairs read since open."""
        return self._frame_index

    @property
    def label_map(self) -> List[str]:
        """Class names for the detections this source produces."""
        return []

    @abstractmethod
    def open(self) -> None:
        """
        Start the source.

        Raises:
            RuntimeError: If the source cannot be started.
        """
        pass

    @abstractmethod
    def read(self) -> Optional[DetectionFrame]:
        """
        Read the next synchronized pair.

        Returns:
            DetectionFrame, or None if no pair is available (source stopped).
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Stop the source. Safe to call multiple times.
        """
        pass

    def __enter__(self) -> "DetectionSource":
        """Context manager entry - opens the source."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes the source."""
        self.close()

    def __iter__(self) -> Iterator[DetectionFrame]:
        """
        Iterate over pairs until the source is exhausted or closed.
        """
        if not self._is_open:
            raise RuntimeError("Source must be open before iterating")

        while True:
            detection_frame = self.read()
            if detection_frame is None:
                break
            yield detection_frame
