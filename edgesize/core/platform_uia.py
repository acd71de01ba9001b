# core/platform_uia.py
from __future__ import annotations

import logging
from typing import List, Optional

from .platform import NOT_FOUND

try:
    from comtypes import COMError
    from pywinauto import Desktop
    from pywinauto.controls.uiawrapper import UIAWrapper
    from pywinauto.uia_defines import NoPatternInterfaceError
    UIA_AVAILABLE = True
except ImportError:
    UIA_AVAILABLE = False

log = logging.getLogger(__name__)


class UIAAccessibilityPlatform:
    """
    UI Automation tree access through pywinauto's "uia" backend.

    Roots are the desktop's direct children, filtered on the UIA side by
    ProcessId and ClassName, so elements of other instances sharing the
    executable are never visited.
    """

    def __init__(self) -> None:
        self._desktop = Desktop(backend="uia") if UIA_AVAILABLE else None

    def find_roots_by_process_and_class(self, pid: int, class_name: str) -> List["UIAWrapper"]:
        if self._desktop is None:
            return []
        try:
            return self._desktop.windows(process=pid, class_name=class_name,
                                         visible_only=False, top_level_only=True)
        except COMError as e:
            log.debug("UIA root search failed for pid %s: %s", pid, e)
            return []

    def find_descendant_by_name(self, root: "UIAWrapper", name: str) -> Optional["UIAWrapper"]:
        if not UIA_AVAILABLE or not name:
            return None
        try:
            found = root.element_info.descendants(title=name)
        except COMError as e:
            log.debug("UIA descendant search for %r failed: %s", name, e)
            return None
        if not found:
            return None
        return UIAWrapper(found[0])

    def read_text(self, element: "UIAWrapper") -> Optional[str]:
        if not UIA_AVAILABLE:
            return None
        try:
            return element.iface_value.CurrentValue
        except (NoPatternInterfaceError, COMError) as e:
            log.debug("No ValuePattern on %r: %s", element, e)
            return None

    def native_handle(self, element: "UIAWrapper") -> int:
        if not UIA_AVAILABLE:
            return NOT_FOUND
        try:
            return int(element.handle or NOT_FOUND)
        except COMError as e:
            # root closed after its address bar was read
            log.debug("NativeWindowHandle of %r unavailable: %s", element, e)
            return NOT_FOUND
