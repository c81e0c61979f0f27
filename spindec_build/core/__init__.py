#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core components for the spindec build front-end.
"""

from .errors import (
    ArgumentParsingError,
    ArtifactRemovalError,
    ConfigurationError,
    ErrorContext,
    ExternalToolFailure,
    PreconditionError,
    SpinDecError,
    UsageError,
    handle_error,
)
from .models import (
    Artifact,
    ArtifactKind,
    CleanReport,
    CommandResult,
    CompileMode,
    ConfirmMode,
    InstallOutcome,
    Operation,
    OperationKind,
    PromptState,
    ToolchainFlags,
)

__all__ = [
    "ArgumentParsingError",
    "ArtifactRemovalError",
    "ConfigurationError",
    "ErrorContext",
    "ExternalToolFailure",
    "PreconditionError",
    "SpinDecError",
    "UsageError",
    "handle_error",
    "Artifact",
    "ArtifactKind",
    "CleanReport",
    "CommandResult",
    "CompileMode",
    "ConfirmMode",
    "InstallOutcome",
    "Operation",
    "OperationKind",
    "PromptState",
    "ToolchainFlags",
]
