#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
spindec build front-end

Compile the SpinDec2 Fortran sources against NetCDF-Fortran, clean build
artifacts and offer to put the binary on the user's PATH.
"""

# Package metadata
__version__ = "2.0.0"
__license__ = "GPL-3.0-or-later"

from .config import BuildSettings
from .core.errors import (
    ArgumentParsingError,
    ArtifactRemovalError,
    ConfigurationError,
    ExternalToolFailure,
    PreconditionError,
    SpinDecError,
    UsageError,
)
from .core.models import (
    Artifact,
    ArtifactKind,
    CleanReport,
    CommandResult,
    CompileMode,
    ConfirmMode,
    InstallOutcome,
    Operation,
    OperationKind,
    ToolchainFlags,
)
from .artifacts import list_artifacts, list_sources
from .cleaner import Cleaner
from .installer import PathInstaller, append_if_marker_absent
from .prompt import YesNoPrompt
from .toolchain import ToolchainAdapter, run_command

__all__ = [
    "BuildSettings",
    "ArgumentParsingError",
    "ArtifactRemovalError",
    "ConfigurationError",
    "ExternalToolFailure",
    "PreconditionError",
    "SpinDecError",
    "UsageError",
    "Artifact",
    "ArtifactKind",
    "CleanReport",
    "CommandResult",
    "CompileMode",
    "ConfirmMode",
    "InstallOutcome",
    "Operation",
    "OperationKind",
    "ToolchainFlags",
    "list_artifacts",
    "list_sources",
    "Cleaner",
    "PathInstaller",
    "append_if_marker_absent",
    "YesNoPrompt",
    "ToolchainAdapter",
    "run_command",
    "__version__",
    "__license__",
]
