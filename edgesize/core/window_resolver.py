# core/window_resolver.py
from __future__ import annotations

import logging
import re
from typing import Any, Optional, Pattern, Union

from .platform import NOT_FOUND, AccessibilityPlatform, ProcessPlatform

log = logging.getLogger(__name__)


class WindowResolver:
    """
    Finds the top-level window that shows a given application instance.

    Multi-process applications (Edge, Chrome) start many same-named
    processes and may own several windows of the same class, so the
    window is picked by the text of an identifying element inside it
    (e.g. the address bar) rather than by process or class alone:

      processes named X with a main window
        -> UIA roots of that pid with class C
          -> first descendant named <local hint>, else <hint>
            -> its value matches the pattern  => root's HWND

    A miss at any stage is NOT_FOUND. The first match enumerated wins.
    """

    def __init__(self, processes: ProcessPlatform, accessibility: AccessibilityPlatform) -> None:
        self.processes = processes
        self.accessibility = accessibility

    def resolve(self,
                process_name: str,
                class_name: str,
                name_local: str,
                name: str,
                pattern: Union[str, Pattern[str]]) -> int:
        rx = re.compile(pattern) if isinstance(pattern, str) else pattern

        for proc in self.processes.list_processes_by_name(process_name):
            if not self.processes.has_main_window(proc.pid):
                log.debug("pid %s (%s): no main window, skipped", proc.pid, proc.name)
                continue

            roots = self.accessibility.find_roots_by_process_and_class(proc.pid, class_name)
            log.debug("pid %s: %d root(s) of class %r", proc.pid, len(roots), class_name)

            for root in roots:
                hwnd = self._match_root(root, name_local, name, rx)
                if hwnd != NOT_FOUND:
                    log.debug("pid %s: resolved hwnd %s", proc.pid, hwnd)
                    return hwnd

        return NOT_FOUND

    def _find_identifying_element(self, root: Any, name_local: str, name: str) -> Optional[Any]:
        element = self.accessibility.find_descendant_by_name(root, name_local)
        if element is None:
            element = self.accessibility.find_descendant_by_name(root, name)
        return element

    def _match_root(self, root: Any, name_local: str, name: str, rx: Pattern[str]) -> int:
        element = self._find_identifying_element(root, name_local, name)
        if element is None:
            return NOT_FOUND

        text = self.accessibility.read_text(element)
        if not text:
            return NOT_FOUND
        if not rx.search(text):
            log.debug("content %r does not match %r", text, rx.pattern)
            return NOT_FOUND

        return self.accessibility.native_handle(root)
