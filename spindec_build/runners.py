#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test and example entry points.

Both only resolve their directory for now; running the Fortran unit tests
and the example initialisation states is not wired up yet.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from .config import BuildSettings


def _locate(kind: str, directory: Path) -> Path:
    if directory.is_dir():
        logger.info(f"Using {kind} directory {directory}")
    else:
        logger.warning(f"{kind.capitalize()} directory does not exist: {directory}")
    return directory


def run_tests(settings: BuildSettings) -> Path:
    """Resolve the automated test directory."""
    return _locate("test", settings.test_path)


def run_examples(settings: BuildSettings) -> Path:
    """Resolve the example initialisation states directory."""
    return _locate("example", settings.example_path)
