from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from edgesize.core.geometry import WindowGeometrySetter
from edgesize.core.instance_spec import InstanceSpec
from edgesize.core.launch_pipeline import LaunchPipeline
from edgesize.core.platform import ProcessInfo, normalize_process_name
from edgesize.core.window_resolver import WindowResolver


@dataclass
class FakeElement:
    name: str = ""
    value: Optional[str] = None
    class_name: str = ""
    hwnd: int = 0
    children: List["FakeElement"] = field(default_factory=list)

    def walk(self):
        for c in self.children:
            yield c
            yield from c.walk()


class FakeProcesses:
    def __init__(self) -> None:
        self.running: List[ProcessInfo] = []
        self.with_main_window: set = set()
        self.started: List[tuple] = []
        self.waited: List[tuple] = []
        self.fail_paths: set = set()
        self.main_window_queries: List[int] = []

    def add(self, pid: int, name: str = "msedge.exe", main_window: bool = True) -> None:
        self.running.append(ProcessInfo(pid=pid, name=name))
        if main_window:
            self.with_main_window.add(pid)

    def start_process(self, path, args):
        if path in self.fail_paths:
            raise FileNotFoundError(2, "No such file", path)
        self.started.append((path, args))
        return object()

    def wait_idle(self, proc, timeout_ms=-1):
        self.waited.append((proc, timeout_ms))
        return True

    def list_processes_by_name(self, name):
        wanted = normalize_process_name(name)
        return [p for p in self.running if normalize_process_name(p.name) == wanted]

    def has_main_window(self, pid):
        self.main_window_queries.append(pid)
        return pid in self.with_main_window


class FakeAccessibility:
    def __init__(self) -> None:
        self.roots: Dict[int, List[FakeElement]] = {}
        self.root_queries: List[tuple] = []
        self.name_queries: List[str] = []

    def add_root(self, pid: int, root: FakeElement) -> FakeElement:
        self.roots.setdefault(pid, []).append(root)
        return root

    def find_roots_by_process_and_class(self, pid, class_name):
        self.root_queries.append((pid, class_name))
        return [r for r in self.roots.get(pid, []) if r.class_name == class_name]

    def find_descendant_by_name(self, root, name):
        self.name_queries.append(name)
        for el in root.walk():
            if el.name == name:
                return el
        return None

    def read_text(self, element):
        return element.value

    def native_handle(self, element):
        return element.hwnd


class FakeWindows:
    def __init__(self) -> None:
        self.valid: set = set()
        self.refuse: set = set()
        self.calls: List[tuple] = []

    def is_window_valid(self, hwnd):
        return hwnd in self.valid

    def set_window_geometry(self, hwnd, x, y, width, height):
        self.calls.append((hwnd, x, y, width, height))
        return hwnd not in self.refuse


class RecordingReporter:
    def __init__(self) -> None:
        self.reports: List[tuple] = []

    def report(self, section, message):
        self.reports.append((section, message))


def edge_window(hwnd: int, url: str, name: str = "address and search bar") -> FakeElement:
    """Chrome_WidgetWin_1 root with an address bar a few levels down."""
    bar = FakeElement(name=name, value=url)
    toolbar = FakeElement(name="App bar", children=[bar])
    return FakeElement(name="Edge", class_name="Chrome_WidgetWin_1", hwnd=hwnd,
                       children=[FakeElement(name="", children=[toolbar])])


def make_spec(section: str = "App1", regex: str = "yahoo", **kw) -> InstanceSpec:
    values = dict(
        section=section,
        path=r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
        args="--app=https://www.yahoo.co.jp/",
        process_name="msedge",
        class_name="Chrome_WidgetWin_1",
        name_property_local="アドレスと検索バー",
        name_property="address and search bar",
        address_regex=regex,
        x=0, y=0, width=960, height=1024,
        sleep_ms=200,
    )
    values.update(kw)
    return InstanceSpec(**values)


@pytest.fixture
def processes():
    return FakeProcesses()


@pytest.fixture
def accessibility():
    return FakeAccessibility()


@pytest.fixture
def windows():
    return FakeWindows()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def resolver(processes, accessibility):
    return WindowResolver(processes, accessibility)


@pytest.fixture
def geometry(windows):
    return WindowGeometrySetter(windows)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def pipeline(processes, resolver, geometry, reporter, sleeps):
    return LaunchPipeline(processes, resolver, geometry, reporter,
                          idle_timeout_ms=5000, sleep=sleeps.append)
