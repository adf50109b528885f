"""
Display output for annotated frames.
"""

from .window import DisplayWindow, DisplayError, create_window_from_config

__all__ = [
    "DisplayWindow",
    "DisplayError",
    "create_window_from_config",
]
