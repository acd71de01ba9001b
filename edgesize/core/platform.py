# core/platform.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

# HWND 0 means "no window"; resolution misses are returned, never raised.
NOT_FOUND = 0


@dataclass
class ProcessInfo:
    pid: int
    name: str


class ProcessPlatform(Protocol):
    def start_process(self, path: str, args: str) -> Any: ...

    def wait_idle(self, proc: Any, timeout_ms: int = -1) -> bool: ...

    def list_processes_by_name(self, name: str) -> List[ProcessInfo]: ...

    def has_main_window(self, pid: int) -> bool: ...


class WindowPlatform(Protocol):
    def is_window_valid(self, hwnd: int) -> bool: ...

    def set_window_geometry(self, hwnd: int, x: int, y: int, width: int, height: int) -> bool: ...


class AccessibilityPlatform(Protocol):
    """
    Element objects are opaque to callers; only the platform that produced
    them knows how to search, read or unwrap them.
    """
    def find_roots_by_process_and_class(self, pid: int, class_name: str) -> List[Any]: ...

    def find_descendant_by_name(self, root: Any, name: str) -> Optional[Any]: ...

    def read_text(self, element: Any) -> Optional[str]: ...

    def native_handle(self, element: Any) -> int: ...


def normalize_process_name(name: str) -> str:
    """'MSEdge.exe' -> 'msedge' (GetProcessesByName compares without extension)."""
    n = (name or "").strip().lower()
    if n.endswith(".exe"):
        n = n[:-4]
    return n
