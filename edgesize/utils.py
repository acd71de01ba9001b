"""Paths and logging setup."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path


def app_dir() -> str:
    """Directory holding EdgeSize.ini: beside the frozen exe, else the working directory."""
    if getattr(sys, "frozen", False):
        return os.path.dirname(os.path.abspath(sys.executable))
    return os.getcwd()


def setup_logging(log_path: Path, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("edgesize")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    try:
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        # read-only install dir; stderr still works
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
