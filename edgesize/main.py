"""Command-line entry point: launch every [AppN] instance and place its window."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from PyQt6 import QtWidgets

from .core.geometry import WindowGeometrySetter
from .core.launch_pipeline import LaunchPipeline
from .core.platform_uia import UIAAccessibilityPlatform
from .core.platform_win import Win32ProcessPlatform, Win32WindowPlatform
from .core.window_resolver import WindowResolver
from .reporters import DialogReporter, LogReporter
from .settings import ConfigError, Settings, default_ini_path
from .translations import tr
from .utils import setup_logging

log = logging.getLogger("edgesize")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="edgesize",
                                     description="Launch applications and move their windows into place")
    parser.add_argument("--config", type=Path, default=None, help="Settings file (default: EdgeSize.ini)")
    parser.add_argument("--no-dialog", action="store_true", help="Log errors instead of showing dialogs")
    parser.add_argument("--dry-run", action="store_true", help="Print the instances and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_pipeline(reporter, idle_timeout_ms: int = -1) -> LaunchPipeline:
    processes = Win32ProcessPlatform()
    resolver = WindowResolver(processes, UIAAccessibilityPlatform())
    geometry = WindowGeometrySetter(Win32WindowPlatform())
    return LaunchPipeline(processes, resolver, geometry, reporter, idle_timeout_ms=idle_timeout_ms)


def main(argv=None) -> int:
    args = parse_args(argv)
    ini_path = str(args.config) if args.config else default_ini_path()
    setup_logging(Path(os.path.dirname(os.path.abspath(ini_path))) / "edgesize.log", args.verbose)

    app = None
    if not args.no_dialog:
        app = QtWidgets.QApplication(sys.argv if argv is None else ["edgesize", *argv])
        app.setApplicationName(tr("app_name"))
    reporter = LogReporter() if args.no_dialog else DialogReporter()

    try:
        settings = Settings(ini_path)
        specs = settings.instance_specs()
    except ConfigError as e:
        log.error("%s: %s", ini_path, e)
        reporter.report("Settings", tr("config_error", e))
        return 2

    if args.dry_run:
        for spec in specs:
            print(spec)
        return 0

    report = build_pipeline(reporter, settings.idle_timeout_ms).run_all(specs)
    return 0 if report.all_ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
