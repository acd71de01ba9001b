from __future__ import annotations

import logging

from .translations import tr

log = logging.getLogger(__name__)


class LogReporter:
    def report(self, section: str, message: str) -> None:
        log.error("[%s] %s", section, message)


class DialogReporter:
    """Shows one modal error box per failed instance (needs a QApplication)."""

    def report(self, section: str, message: str) -> None:
        from PyQt6 import QtWidgets

        log.error("[%s] %s", section, message)
        QtWidgets.QMessageBox.critical(None, tr("error_title"), message)
