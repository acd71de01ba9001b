# core/platform_win.py
from __future__ import annotations

import logging
import os
import subprocess
from typing import List

import psutil

from .platform import ProcessInfo, normalize_process_name

try:
    import pywintypes
    import win32api
    import win32con
    import win32event
    import win32gui
    import win32process
    WIN32_AVAILABLE = True
except ImportError:
    WIN32_AVAILABLE = False

log = logging.getLogger(__name__)

WAIT_OBJECT_0 = 0


def _enum_windows_for_pid(pid: int) -> list[int]:
    hwnds: list[int] = []
    if not WIN32_AVAILABLE:
        return hwnds

    def cb(hwnd, _):
        try:
            if not win32gui.IsWindowVisible(hwnd):
                return True
            _, wp = win32process.GetWindowThreadProcessId(hwnd)
            if wp != pid:
                return True
            # owned popups and tool windows are never a main window
            if win32gui.GetWindow(hwnd, win32con.GW_OWNER):
                return True
            style = win32gui.GetWindowLong(hwnd, win32con.GWL_EXSTYLE)
            if style & win32con.WS_EX_TOOLWINDOW:
                return True
            hwnds.append(hwnd)
        except pywintypes.error:
            pass
        return True

    try:
        win32gui.EnumWindows(cb, None)
    except pywintypes.error as e:
        log.debug("EnumWindows failed for pid %s: %s", pid, e)
    return hwnds


def build_command_line(path: str, args: str) -> str:
    cmd = subprocess.list2cmdline([path])
    args = (args or "").strip()
    return f"{cmd} {args}" if args else cmd


class Win32ProcessPlatform:
    """Process start / enumeration / input-idle on top of psutil and pywin32."""

    def start_process(self, path: str, args: str) -> subprocess.Popen:
        cmdline = build_command_line(path, args)
        log.info("Starting: %s", cmdline)
        return subprocess.Popen(cmdline, cwd=os.path.dirname(path) or None)

    def wait_idle(self, proc: subprocess.Popen, timeout_ms: int = -1) -> bool:
        if not WIN32_AVAILABLE:
            return False
        ms = win32event.INFINITE if timeout_ms < 0 else int(timeout_ms)
        try:
            handle = win32api.OpenProcess(
                win32con.PROCESS_QUERY_INFORMATION | win32con.SYNCHRONIZE, False, proc.pid
            )
        except pywintypes.error as e:
            # launcher processes (msedge hands off to a running browser) may already be gone
            log.debug("OpenProcess(%s) failed: %s", proc.pid, e)
            return False
        try:
            rc = win32event.WaitForInputIdle(handle, ms)
        except pywintypes.error as e:
            log.debug("WaitForInputIdle(%s) failed: %s", proc.pid, e)
            return False
        finally:
            win32api.CloseHandle(handle)
        if rc != WAIT_OBJECT_0:
            log.warning("Process %s not input-idle after %s ms", proc.pid, timeout_ms)
            return False
        return True

    def list_processes_by_name(self, name: str) -> List[ProcessInfo]:
        wanted = normalize_process_name(name)
        out: List[ProcessInfo] = []
        for p in psutil.process_iter(["pid", "name"]):
            pname = p.info.get("name") or ""
            if normalize_process_name(pname) == wanted:
                out.append(ProcessInfo(pid=p.info["pid"], name=pname))
        return out

    def has_main_window(self, pid: int) -> bool:
        return bool(_enum_windows_for_pid(pid))


class Win32WindowPlatform:
    def is_window_valid(self, hwnd: int) -> bool:
        if not WIN32_AVAILABLE or not hwnd:
            return False
        return bool(win32gui.IsWindow(hwnd))

    def set_window_geometry(self, hwnd: int, x: int, y: int, width: int, height: int) -> bool:
        if not WIN32_AVAILABLE:
            return False
        try:
            win32gui.SetWindowPos(hwnd, win32con.HWND_NOTOPMOST, x, y, width, height,
                                  win32con.SWP_SHOWWINDOW)
        except pywintypes.error as e:
            log.warning("SetWindowPos(%s) failed: %s", hwnd, e)
            return False
        return True
