#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for the spindec build front-end with error context.

Every exception carries the process exit code the dispatcher should
return when it reaches the top level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger


@dataclass(frozen=True)
class ErrorContext:
    """Context information for build front-end errors."""

    command: Optional[str] = None
    exit_code: Optional[int] = None
    working_directory: Optional[Path] = None
    stderr: Optional[str] = None
    execution_time: Optional[float] = None
    additional_info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for structured logging."""
        return {
            "command": self.command,
            "exit_code": self.exit_code,
            "working_directory": (
                str(self.working_directory) if self.working_directory else None
            ),
            "stderr": self.stderr,
            "execution_time": self.execution_time,
            "additional_info": self.additional_info,
        }


class SpinDecError(Exception):
    """
    Base exception for the build front-end.

    Attributes:
        context: Structured information about the failing step.
        cause: The lower-level exception this one wraps, if any.
        exit_code: Process exit code reported by the dispatcher.
    """

    default_exit_code = 1

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        exit_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause
        self.exit_code = exit_code if exit_code is not None else self.default_exit_code

        logger.bind(
            error_context=self.context.to_dict(),
            exit_code=self.exit_code,
            original_cause=str(cause) if cause else None,
        ).debug(f"{self.__class__.__name__}: {message}")

    def __str__(self) -> str:
        base_msg = super().__str__()

        if self.context.command:
            base_msg += f"\nCommand: {self.context.command}"

        if self.context.stderr:
            base_msg += f"\nStderr: {self.context.stderr}"

        if self.cause:
            base_msg += f"\nCaused by: {self.cause}"

        return base_msg


class UsageError(SpinDecError):
    """Bad or ambiguous command-line arguments."""

    default_exit_code = 2

    def __init__(self, message: str, *, option: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.option = option


class ArgumentParsingError(SpinDecError):
    """Malformed flags that the option parser itself rejects."""


class PreconditionError(SpinDecError):
    """The operation has nothing to act on."""


class ConfigurationError(SpinDecError):
    """Invalid or unreadable settings."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Optional[Union[str, Path]] = None,
        invalid_option: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.config_file = Path(config_file) if config_file else None
        self.invalid_option = invalid_option


class ExternalToolFailure(SpinDecError):
    """The compiler or the library configuration helper exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        tool: str,
        return_code: int,
        **kwargs: Any,
    ) -> None:
        # Tools that never started report a non-positive code
        kwargs.setdefault("exit_code", return_code if return_code > 0 else 1)
        super().__init__(message, **kwargs)
        self.tool = tool
        self.return_code = return_code

    @property
    def stderr(self) -> Optional[str]:
        return self.context.stderr


class ArtifactRemovalError(SpinDecError):
    """One or more artifacts could not be removed during clean."""

    def __init__(self, message: str, *, failures: Optional[List[str]] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.failures = failures or []


def handle_error(
    func_name: str,
    error: Exception,
    *,
    context: Optional[ErrorContext] = None,
) -> SpinDecError:
    """
    Convert generic exceptions to SpinDecError with context.

    Args:
        func_name: Name of the function where the error occurred
        error: The original exception
        context: Error context information

    Returns:
        SpinDecError subclass matching the original exception
    """
    if isinstance(error, SpinDecError):
        return error

    message = f"Error in {func_name}: {error}"

    if isinstance(error, FileNotFoundError):
        return PreconditionError(message, context=context, cause=error)
    return SpinDecError(message, context=context, cause=error)
