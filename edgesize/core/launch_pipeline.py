# core/launch_pipeline.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Protocol

from ..translations import tr
from .geometry import WindowGeometrySetter
from .instance_spec import InstanceSpec, InstanceState
from .platform import NOT_FOUND, ProcessPlatform
from .window_resolver import WindowResolver

log = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    def report(self, section: str, message: str) -> None: ...


@dataclass
class InstanceOutcome:
    section: str
    state: InstanceState = InstanceState.NOT_STARTED
    hwnd: int = NOT_FOUND
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == InstanceState.APPLIED


@dataclass
class BatchReport:
    outcomes: List[InstanceOutcome] = field(default_factory=list)

    @property
    def all_ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def failed(self) -> List[InstanceOutcome]:
        return [o for o in self.outcomes if not o.ok]


class LaunchPipeline:
    """
    start process -> wait input-idle -> settle -> resolve window -> SetWindowPos

    Instances run one after another on the calling thread. The settle sleep
    blocks (there is no event for "address bar populated"), and each instance
    is tried exactly once. A failure is reported and the batch moves on.
    """
    def __init__(self,
                 processes: ProcessPlatform,
                 resolver: WindowResolver,
                 geometry: WindowGeometrySetter,
                 reporter: ErrorReporter,
                 idle_timeout_ms: int = -1,
                 sleep: Callable[[float], None] = time.sleep) -> None:
        self.processes = processes
        self.resolver = resolver
        self.geometry = geometry
        self.reporter = reporter
        self.idle_timeout_ms = idle_timeout_ms
        self._sleep = sleep

    def run_all(self, specs: Iterable[InstanceSpec]) -> BatchReport:
        report = BatchReport()
        for spec in specs:
            report.outcomes.append(self.run_one(spec))
        log.info("Batch done: %d instance(s), %d failed",
                 len(report.outcomes), len(report.failed))
        return report

    def run_one(self, spec: InstanceSpec) -> InstanceOutcome:
        outcome = InstanceOutcome(section=spec.section)

        try:
            proc = self.processes.start_process(spec.path, spec.args)
        except OSError as e:
            log.warning("[%s] launch failed: %s", spec.section, e)
            return self._fail(outcome, tr("launch_failed", spec.path, e))
        outcome.state = InstanceState.LAUNCHED

        self.processes.wait_idle(proc, self.idle_timeout_ms)
        self._sleep(max(spec.sleep_ms, 0) / 1000.0)
        outcome.state = InstanceState.SETTLED

        outcome.hwnd = self.resolver.resolve(spec.process_name, spec.class_name,
                                             spec.name_property_local, spec.name_property,
                                             spec.address_regex)
        outcome.state = InstanceState.RESOLVED
        if outcome.hwnd == NOT_FOUND:
            log.warning("[%s] no %s window matching %r", spec.section,
                        spec.process_name, spec.address_regex)

        if not self.geometry.apply(outcome.hwnd, spec.position, spec.size):
            log.warning("[%s] could not place hwnd %s", spec.section, outcome.hwnd)
            return self._fail(outcome, tr("resize_failed"))

        outcome.state = InstanceState.APPLIED
        log.info("[%s] hwnd %s -> (%d, %d) %dx%d", spec.section, outcome.hwnd,
                 spec.x, spec.y, spec.width, spec.height)
        return outcome

    def _fail(self, outcome: InstanceOutcome, message: str) -> InstanceOutcome:
        outcome.state = InstanceState.FAILED
        outcome.error = message
        self.reporter.report(outcome.section, message)
        return outcome
