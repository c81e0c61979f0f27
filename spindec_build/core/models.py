#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models for the spindec build front-end.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import List, Optional

from .errors import ErrorContext, ExternalToolFailure


class OperationKind(Enum):
    """The single top-level action selected per invocation."""

    COMPILE = auto()
    CLEAN = auto()
    TEST = auto()
    EXAMPLE = auto()
    HELP = auto()
    VERSION = auto()


class CompileMode(Enum):
    """Diagnostic level passed to the compiler."""

    DEFAULT = "default"
    DEBUG = "debug"


class ConfirmMode(Enum):
    """Whether artifact removal asks before deleting."""

    AUTO = "auto"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class Operation:
    """A parsed invocation: one kind plus its optional sub-mode."""

    kind: OperationKind
    compile_mode: CompileMode = CompileMode.DEFAULT
    confirm_mode: ConfirmMode = ConfirmMode.AUTO


class ArtifactKind(Enum):
    """Classification of files produced by compilation."""

    COMPILED_BINARY = auto()
    MODULE_FILE = auto()
    OBJECT_FILE = auto()


@dataclass(frozen=True)
class Artifact:
    """A build output found on disk. Existence is the only tracked state."""

    path: Path
    kind: ArtifactKind

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ToolchainFlags:
    """Link and compile flags reported by the library configuration helper."""

    link_flags: str = ""
    compile_flags: str = ""

    @property
    def link_args(self) -> List[str]:
        return self.link_flags.split()

    @property
    def compile_args(self) -> List[str]:
        return self.compile_flags.split()


@dataclass(frozen=True)
class CommandResult:
    """
    Immutable result of an external command execution.

    A failed result can be turned into an ExternalToolFailure with
    raise_for_status, so callers decide explicitly when a non-zero exit
    aborts the operation.
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    return_code: int = 0
    command: List[str] = field(default_factory=list)
    execution_time: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if self.execution_time < 0:
            raise ValueError("execution_time cannot be negative")

    @property
    def failed(self) -> bool:
        """Check if the command failed."""
        return not self.success

    @property
    def command_str(self) -> str:
        """Get command as a single string."""
        return " ".join(self.command)

    def to_failure(self, tool: Optional[str] = None) -> ExternalToolFailure:
        """Build the exception describing this failed result."""
        tool_name = tool or (self.command[0] if self.command else "command")
        return ExternalToolFailure(
            f"{tool_name} exited with code {self.return_code}",
            tool=tool_name,
            return_code=self.return_code,
            context=ErrorContext(
                command=self.command_str,
                exit_code=self.return_code,
                stderr=self.stderr or None,
                execution_time=self.execution_time,
            ),
        )

    def raise_for_status(self, tool: Optional[str] = None) -> CommandResult:
        """Raise ExternalToolFailure if the command failed, else return self."""
        if self.failed:
            raise self.to_failure(tool)
        return self


class PromptState(Enum):
    """States of the interactive yes/no loop."""

    PROMPTING = auto()
    CONFIRMED = auto()
    DECLINED = auto()


class InstallOutcome(Enum):
    """Terminal states of the PATH installer."""

    ADDED = auto()
    ALREADY_PRESENT = auto()
    DECLINED = auto()
    UNSUPPORTED_SHELL = auto()


@dataclass
class CleanReport:
    """Outcome of a clean operation."""

    matched: List[Artifact] = field(default_factory=list)
    removed: List[Artifact] = field(default_factory=list)
    failed: List[Artifact] = field(default_factory=list)
    declined: bool = False

    @property
    def success(self) -> bool:
        return not self.declined and not self.failed
