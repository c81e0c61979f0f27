#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Toolchain adapter: query the NetCDF-Fortran configuration helper and run
the Fortran compiler over the program sources.
"""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from loguru import logger
from rich.console import Console

from .artifacts import list_sources
from .config import BuildSettings
from .core.errors import ErrorContext, PreconditionError, handle_error
from .core.models import CommandResult, CompileMode, ToolchainFlags

# Strict diagnostics: implicit-none enforcement, runtime checks, extra
# warnings, pedantic mode and backtraces
DEBUG_FLAGS = [
    "-g",
    "-std=f2008",
    "-Wall",
    "-fimplicit-none",
    "-fcheck=all",
    "-Wextra",
    "-pedantic",
    "-fbacktrace",
]
DEFAULT_FLAGS = ["-g"]


class CommandRunner(Protocol):
    def __call__(self, command: List[str], capture: bool = True) -> CommandResult: ...


def run_command(
    command: List[str],
    capture: bool = True,
    cwd: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """
    Run a command synchronously.

    Args:
        command: Command and arguments to execute
        capture: Collect stdout/stderr instead of passing them through to
            the terminal
        cwd: Working directory for the command
        env: Extra environment variables

    Returns:
        CommandResult with execution details
    """
    start_time = time.time()
    logger.debug(f"Executing command: {' '.join(command)}")

    final_env = os.environ.copy()
    if env:
        final_env.update(env)

    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
            cwd=cwd,
            env=final_env,
        )
    except FileNotFoundError:
        return CommandResult(
            success=False,
            stderr=f"Command not found: {command[0]}",
            return_code=127,
            command=command,
            execution_time=time.time() - start_time,
        )
    except OSError as e:
        return CommandResult(
            success=False,
            stderr=f"Failed to start {command[0]}: {e}",
            return_code=-1,
            command=command,
            execution_time=time.time() - start_time,
        )

    execution_time = time.time() - start_time
    cmd_result = CommandResult(
        success=result.returncode == 0,
        stdout=(result.stdout or b"").decode("utf-8", errors="replace").strip(),
        stderr=(result.stderr or b"").decode("utf-8", errors="replace").strip(),
        return_code=result.returncode,
        command=command,
        execution_time=execution_time,
    )

    if cmd_result.success:
        logger.debug(f"Command completed successfully in {execution_time:.2f}s")
    else:
        logger.bind(command=cmd_result.command_str, stderr=cmd_result.stderr).error(
            f"Command failed with code {cmd_result.return_code} in {execution_time:.2f}s"
        )

    return cmd_result


def mode_flags(mode: CompileMode) -> List[str]:
    """Compiler diagnostic flags for a compile mode."""
    return list(DEBUG_FLAGS if mode is CompileMode.DEBUG else DEFAULT_FLAGS)


class ToolchainAdapter:
    """
    Builds and runs the compiler invocation for the program.

    Attributes:
        settings: Layout and tool names.
        runner: Callable executing a command and returning a CommandResult.
        console: Console receiving the echoed compile line.
    """

    def __init__(
        self,
        settings: BuildSettings,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.settings = settings
        self.runner: Callable[..., CommandResult] = runner or run_command
        self.console = console or Console()

    def query_flags(self) -> ToolchainFlags:
        """
        Ask the configuration helper for link and compile flags.

        Raises:
            ExternalToolFailure: If either query exits non-zero.
        """
        helper = self.settings.config_helper
        link = self.runner([helper, "--flibs"], capture=True).raise_for_status(helper)
        compile_ = self.runner([helper, "--fflags"], capture=True).raise_for_status(helper)

        flags = ToolchainFlags(link_flags=link.stdout, compile_flags=compile_.stdout)
        logger.bind(link_flags=flags.link_flags, compile_flags=flags.compile_flags).debug(
            "Queried toolchain flags"
        )
        return flags

    def build_command(
        self,
        mode: CompileMode,
        sources: Sequence[Path],
        flags: ToolchainFlags,
    ) -> List[str]:
        """
        Assemble the compiler invocation.

        Order: compiler, mode flags, compile flags, sources, module output
        directory, link flags, output binary.
        """
        return [
            self.settings.compiler,
            *mode_flags(mode),
            *flags.compile_args,
            *(str(s) for s in sources),
            f"-J{self.settings.output_path}",
            *flags.link_args,
            "-o",
            str(self.settings.binary_path),
        ]

    def compile(self, mode: CompileMode = CompileMode.DEFAULT) -> CommandResult:
        """
        Compile every source file into the program binary.

        Returns:
            CommandResult of the compiler run. A failed result means the
            binary written during this run, if any, has been removed.

        Raises:
            PreconditionError: If the source directory holds no files.
            ExternalToolFailure: If the configuration helper fails.
        """
        sources = list_sources(self.settings.source_path)
        if not sources:
            raise PreconditionError(
                f"No source files found in {self.settings.source_path}",
                context=ErrorContext(working_directory=self.settings.project_root),
            )

        flags = self.query_flags()

        try:
            self.settings.output_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise handle_error("compile", e, context=ErrorContext(working_directory=self.settings.output_path))

        command = self.build_command(mode, sources, flags)
        self.console.print(
            f"Compile line: {' '.join(command)}\n",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

        started = time.time()
        result = self.runner(command, capture=False)
        logger.bind(execution_time=result.execution_time, mode=mode.value).info(
            f"Compiler finished with code {result.return_code}"
        )

        if result.failed:
            self._discard_partial_binary(started)
        return result

    def _discard_partial_binary(self, started: float) -> None:
        binary = self.settings.binary_path
        try:
            # Allow for coarse filesystem mtime resolution
            if binary.exists() and binary.stat().st_mtime >= started - 1:
                binary.unlink()
                logger.warning(f"Removed incomplete binary {binary}")
        except OSError as e:
            logger.warning(f"Could not remove incomplete binary {binary}: {e}")
