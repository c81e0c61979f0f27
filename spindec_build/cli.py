#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line option parser and dispatcher.

Exactly one argument token is accepted per invocation and it selects exactly
one operation: compile, clean, test, example, help or version.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Dict, List, Mapping, NoReturn, Optional, Sequence

from loguru import logger
from rich.console import Console

from . import __version__
from .banner import HELP_TEXT, banner
from .cleaner import Cleaner
from .config import BuildSettings
from .core.errors import (
    ArgumentParsingError,
    ArtifactRemovalError,
    ExternalToolFailure,
    SpinDecError,
    UsageError,
)
from .core.models import CompileMode, ConfirmMode, Operation, OperationKind
from .installer import PathInstaller
from .logging_config import setup_logging
from .prompt import LineReader, YesNoPrompt
from .runners import run_examples, run_tests
from .toolchain import CommandRunner, ToolchainAdapter

COMPILE_VALUES: Dict[str, CompileMode] = {
    "": CompileMode.DEFAULT,
    "d": CompileMode.DEBUG,
    "debug": CompileMode.DEBUG,
}
CLEAN_VALUES: Dict[str, ConfirmMode] = {
    "": ConfirmMode.AUTO,
    "c": ConfirmMode.CONFIRM,
    "confirm": ConfirmMode.CONFIRM,
}


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentParsingError(f"{self.prog}: {message}")


def build_parser() -> OptionParser:
    """Create the parser for the five operations plus --version."""
    parser = OptionParser(prog="spindec", add_help=False)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-c", "--compile", nargs="?", const="", default=None, metavar="DEBUG")
    group.add_argument("-C", "--clean", nargs="?", const="", default=None, metavar="CONFIRM")
    group.add_argument("-t", "--test", action="store_true")
    group.add_argument("-e", "--example", action="store_true")
    group.add_argument("-h", "--help", action="store_true")
    group.add_argument("-V", "--version", action="store_true")
    return parser


def parse_operation(argv: Sequence[str]) -> Operation:
    """
    Turn the argument vector (without the program name) into an Operation.

    Raises:
        UsageError: More than one argument, or an unknown compile/clean value.
        ArgumentParsingError: The single argument is not a recognised flag.
    """
    if not argv:
        return Operation(OperationKind.HELP)

    if len(argv) > 1:
        raise UsageError("Only 1 argument may be specified")

    args = build_parser().parse_args(list(argv))

    if args.compile is not None:
        if args.compile not in COMPILE_VALUES:
            raise UsageError(f"{args.compile} is not a valid option for -c/--compile", option="compile")
        return Operation(OperationKind.COMPILE, compile_mode=COMPILE_VALUES[args.compile])

    if args.clean is not None:
        if args.clean not in CLEAN_VALUES:
            raise UsageError(f"{args.clean} is not a valid option for -C/--clean", option="clean")
        return Operation(OperationKind.CLEAN, confirm_mode=CLEAN_VALUES[args.clean])

    if args.test:
        return Operation(OperationKind.TEST)
    if args.example:
        return Operation(OperationKind.EXAMPLE)
    if args.help:
        return Operation(OperationKind.HELP)
    if args.version:
        return Operation(OperationKind.VERSION)

    raise ArgumentParsingError(f"spindec: unrecognized argument: {argv[0]}")


class Dispatcher:
    """
    Routes an Operation to its handler and returns the exit code.

    Settings are loaded only for operations that touch the repository, so
    help and usage errors never depend on configuration.
    """

    def __init__(
        self,
        settings: Optional[BuildSettings] = None,
        console: Optional[Console] = None,
        reader: Optional[LineReader] = None,
        runner: Optional[CommandRunner] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._settings: Optional[BuildSettings] = None
        self.console = console or Console()
        self.reader = reader
        self.runner = runner
        self.environ = os.environ if environ is None else environ
        if settings is not None:
            self._use(settings)

    def _use(self, settings: BuildSettings) -> None:
        self._settings = settings
        setup_logging(settings.log_level, settings.log_file)

    @property
    def settings(self) -> BuildSettings:
        if self._settings is None:
            self._use(BuildSettings.load(environ=self.environ))
        return self._settings

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def _prompt(self) -> YesNoPrompt:
        return YesNoPrompt(reader=self.reader, console=self.console)

    def print_help(self, with_banner: bool = False) -> None:
        if with_banner:
            self._say(banner())
        self._say(HELP_TEXT)

    def dispatch(self, operation: Operation) -> int:
        logger.debug(f"Dispatching {operation}")
        match operation.kind:
            case OperationKind.COMPILE:
                return self.compile(operation.compile_mode)
            case OperationKind.CLEAN:
                return self.clean(operation.confirm_mode)
            case OperationKind.TEST:
                run_tests(self.settings)
                return 0
            case OperationKind.EXAMPLE:
                run_examples(self.settings)
                return 0
            case OperationKind.VERSION:
                self._say(f"spindec-build {__version__}")
                return 0
            case _:
                self.print_help(with_banner=True)
                return 0

    def compile(self, mode: CompileMode) -> int:
        settings = self.settings
        adapter = ToolchainAdapter(settings, runner=self.runner, console=self.console)
        adapter.compile(mode).raise_for_status(settings.compiler)

        installer = PathInstaller.from_settings(
            settings, prompt=self._prompt(), console=self.console, environ=self.environ
        )
        outcome = installer.install()
        logger.debug(f"PATH installer finished: {outcome.name}")
        return 0

    def clean(self, mode: ConfirmMode) -> int:
        cleaner = Cleaner.from_settings(self.settings, prompt=self._prompt(), console=self.console)
        cleaner.clean(mode)
        return 0

    def report(self, error: SpinDecError) -> int:
        """Print a failure the way the user should see it and return its exit code."""
        if isinstance(error, UsageError):
            self._say(f"{error.message}\n")
            self.print_help()
        elif isinstance(error, ArgumentParsingError):
            Console(stderr=True).print(error.message, markup=False, highlight=False)
        elif isinstance(error, ExternalToolFailure):
            self._say(f"error: {error.message}")
            if error.stderr:
                self._say(error.stderr)
        elif isinstance(error, ArtifactRemovalError):
            self._say(f"error: {error.message}")
            for failure in error.failures:
                self._say(f"  {failure}")
        else:
            self._say(error.message)
        return error.exit_code

    def run(self, argv: Sequence[str]) -> int:
        try:
            operation = parse_operation(argv)
            return self.dispatch(operation)
        except SpinDecError as e:
            return self.report(e)


def main(
    argv: Optional[List[str]] = None,
    *,
    console: Optional[Console] = None,
    reader: Optional[LineReader] = None,
    runner: Optional[CommandRunner] = None,
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[BuildSettings] = None,
) -> int:
    """Main function to run the build front-end from the command line."""
    setup_logging()
    args = sys.argv[1:] if argv is None else argv

    dispatcher = Dispatcher(
        settings=settings, console=console, reader=reader, runner=runner, environ=environ
    )
    try:
        return dispatcher.run(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
