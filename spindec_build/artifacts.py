#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Locate source files and previously produced build artifacts.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from .core.errors import ErrorContext, handle_error
from .core.models import Artifact, ArtifactKind

MODULE_SUFFIX = ".mod"
OBJECT_SUFFIX = ".o"


def list_sources(source_dir: Union[Path, str]) -> List[Path]:
    """
    Return the compilable units in ``source_dir``, sorted by name.

    The enumeration is not recursive and skips sub-directories. A missing
    directory yields an empty list.
    """
    directory = Path(source_dir)
    if not directory.is_dir():
        logger.debug(f"Source directory does not exist: {directory}")
        return []

    try:
        sources = sorted(p for p in directory.iterdir() if p.is_file())
    except OSError as e:
        raise handle_error(
            "list_sources", e, context=ErrorContext(working_directory=directory)
        )
    logger.debug(f"Found {len(sources)} source file(s) in {directory}")
    return sources


def classify(path: Path, binary_name: str) -> Optional[ArtifactKind]:
    """Classify a file name as a build artifact, or None if it is not one."""
    name = path.name
    if name.endswith(MODULE_SUFFIX):
        return ArtifactKind.MODULE_FILE
    if name.endswith(OBJECT_SUFFIX):
        return ArtifactKind.OBJECT_FILE
    if name.endswith(binary_name):
        return ArtifactKind.COMPILED_BINARY
    return None


def list_artifacts(output_dir: Union[Path, str], binary_name: str = "spindec") -> List[Artifact]:
    """
    List build artifacts directly inside ``output_dir``.

    Module files (``*.mod``), object files (``*.o``) and any file whose name
    ends with ``binary_name`` are reported, sorted by name.
    """
    directory = Path(output_dir)
    if not directory.is_dir():
        return []

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise handle_error(
            "list_artifacts", e, context=ErrorContext(working_directory=directory)
        )

    artifacts = []
    for path in entries:
        if not (path.is_file() or path.is_symlink()):
            continue
        kind = classify(path, binary_name)
        if kind is not None:
            artifacts.append(Artifact(path=path, kind=kind))

    logger.bind(artifacts=[a.name for a in artifacts]).debug(
        f"Found {len(artifacts)} artifact(s) in {directory}"
    )
    return artifacts
