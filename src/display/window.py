"""
OpenCV display window with quit-key polling.
"""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np


class DisplayError(RuntimeError):
    """Raised when the display window cannot be created or updated."""


class DisplayWindow:
    """
    A single named OpenCV window owned for the life of the application.

    Lifecycle:
        1. Create instance with a window name
        2. Call open() to create the window
        3. Call show() once per frame; it returns False once quit was requested
        4. Call close() to destroy the window

    Can also be used as a context manager:
        with DisplayWindow("Display") as window:
            while window.show(frame):
                ...
    """

    def __init__(self, name: str, quit_key: str = "q", wait_ms: int = 1):
        if not name:
            raise ValueError("Window name must not be empty")
        if len(quit_key) != 1 or not quit_key.isascii():
            raise ValueError("quit_key must be a single ASCII character")
        self._name = name
        self._quit_key = quit_key
        # waitKey(0) blocks until a key is pressed, which stops repaints
        self._wait_ms = max(1, int(wait_ms))
        self._is_open = False
        self._quit_requested = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def quit_requested(self) -> bool:
        """Whether the quit key has been pressed in this window."""
        return self._quit_requested

    def open(self) -> None:
        """
        Create the window.

        Raises:
            DisplayError: If no display surface is available.
        """
        if self._is_open:
            return
        try:
            cv2.namedWindow(self._name, cv2.WINDOW_AUTOSIZE)
        except cv2.error as e:
            raise DisplayError(f"Failed to create display window '{self._name}': {e}") from e
        self._is_open = True
        logging.info(f"Display window opened: {self._name}")

    def show(self, frame: np.ndarray) -> bool:
        """
        Show a frame and poll for the quit key.

        Returns False if the user pressed the quit key.

        Raises:
            DisplayError: If the frame cannot be shown.
        """
        if not self._is_open:
            self.open()
        try:
            cv2.imshow(self._name, frame)
            key = cv2.waitKey(self._wait_ms)
        except cv2.error as e:
            raise DisplayError(f"Failed to update display window '{self._name}': {e}") from e

        if key != -1 and (key & 0xFF) == ord(self._quit_key):
            if not self._quit_requested:
                logging.info(f"Quit key '{self._quit_key}' pressed in {self._name}")
            self._quit_requested = True
        return not self._quit_requested

    def close(self) -> None:
        """Destroy the window. Safe to call multiple times."""
        if not self._is_open:
            return
        self._is_open = False
        try:
            cv2.destroyWindow(self._name)
        except cv2.error as e:
            logging.warning(f"Error closing display window '{self._name}': {e}")

    def __enter__(self) -> "DisplayWindow":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_window_from_config(display_cfg, name: Optional[str] = None) -> DisplayWindow:
    """Factory: build a DisplayWindow from a DisplayConfig."""
    return DisplayWindow(
        name=name or display_cfg.window_name,
        quit_key=display_cfg.quit_key,
        wait_ms=display_cfg.wait_ms,
    )
