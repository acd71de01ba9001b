# core/geometry.py
from __future__ import annotations

import logging
from typing import Tuple

from .platform import WindowPlatform

log = logging.getLogger(__name__)


class WindowGeometrySetter:
    """Moves/resizes/shows a window in one SetWindowPos-style call."""

    def __init__(self, windows: WindowPlatform) -> None:
        self.windows = windows

    def apply(self, hwnd: int, position: Tuple[int, int], size: Tuple[int, int]) -> bool:
        # the window may have closed during the settle delay
        if not self.windows.is_window_valid(hwnd):
            log.debug("hwnd %s is not a window, geometry not applied", hwnd)
            return False
        x, y = position
        w, h = size
        return bool(self.windows.set_window_geometry(hwnd, x, y, w, h))
