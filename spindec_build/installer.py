#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Offer to put the compiled binary's directory on the user's PATH.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

from loguru import logger
from rich.console import Console

from .config import BuildSettings
from .core.errors import ErrorContext, handle_error
from .core.models import InstallOutcome
from .prompt import YesNoPrompt

PATH_QUESTION = "Add binary to $PATH? [Y/n] "


def profile_contains(profile: Path, marker: str) -> bool:
    """Check a shell profile for the marker substring. A missing file has none."""
    try:
        return marker in profile.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return False


def append_if_marker_absent(profile: Path, marker: str, lines: Sequence[str]) -> bool:
    """
    Append ``lines`` to ``profile`` unless it already contains ``marker``.

    The file is read before any write decision and is never rewritten.
    Returns True when the lines were appended.
    """
    if profile_contains(profile, marker):
        return False

    prefix = ""
    if profile.exists() and profile.stat().st_size > 0:
        with profile.open("rb") as f:
            f.seek(-1, os.SEEK_END)
            if f.read(1) != b"\n":
                prefix = "\n"

    profile.parent.mkdir(parents=True, exist_ok=True)
    with profile.open("a", encoding="utf-8") as f:
        f.write(prefix + "\n".join(lines) + "\n")
    return True


def export_lines(bin_dir: Path, marker: str) -> list[str]:
    """Lines appended to the profile. The comment carries the marker."""
    return [f"# {marker}", f'export PATH="{bin_dir}:$PATH"']


class PathInstaller:
    """
    Interactive PATH installation run after a successful compile.

    Attributes:
        profile: Shell startup file that receives the export line.
        marker: Substring identifying a previous installation.
        bin_dir: Absolute directory holding the compiled binary.
        supported_shell: Shell name that must appear in ``$SHELL``.
    """

    def __init__(
        self,
        profile: Path,
        bin_dir: Path,
        marker: str = "spindec",
        supported_shell: str = "bash",
        environ: Optional[Mapping[str, str]] = None,
        prompt: Optional[YesNoPrompt] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.profile = Path(profile)
        self.bin_dir = Path(bin_dir).resolve()
        self.marker = marker
        self.supported_shell = supported_shell
        self.environ = os.environ if environ is None else environ
        self.console = console or Console()
        self.prompt = prompt or YesNoPrompt(console=self.console)

    @classmethod
    def from_settings(
        cls,
        settings: BuildSettings,
        prompt: Optional[YesNoPrompt] = None,
        console: Optional[Console] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> PathInstaller:
        return cls(
            profile=settings.shell_profile,
            bin_dir=settings.output_path,
            marker=settings.marker,
            supported_shell=settings.supported_shell,
            environ=environ,
            prompt=prompt,
            console=console,
        )

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    @property
    def shell_supported(self) -> bool:
        return self.supported_shell in self.environ.get("SHELL", "")

    def install(self) -> InstallOutcome:
        """Ask, then add the export line if it is not already there."""
        if not self.prompt.ask(PATH_QUESTION):
            self._say("Not added to $PATH")
            return InstallOutcome.DECLINED

        try:
            already_present = profile_contains(self.profile, self.marker)
        except OSError as e:
            raise handle_error(
                "install", e, context=ErrorContext(additional_info={"profile": str(self.profile)})
            )

        if already_present:
            logger.debug(f"Marker '{self.marker}' already present in {self.profile}")
            self._say("The binary is already in your $PATH")
            return InstallOutcome.ALREADY_PRESENT

        if not self.shell_supported:
            logger.info(f"Skipping PATH install for shell {self.environ.get('SHELL', '')!r}")
            self._say(
                f"Unable to add to $PATH as {self.supported_shell} is not your default shell"
            )
            return InstallOutcome.UNSUPPORTED_SHELL

        try:
            append_if_marker_absent(
                self.profile, self.marker, export_lines(self.bin_dir, self.marker)
            )
        except OSError as e:
            raise handle_error(
                "install", e, context=ErrorContext(additional_info={"profile": str(self.profile)})
            )

        logger.info(f"Appended PATH export for {self.bin_dir} to {self.profile}")
        self._say(f"Binary added to $PATH and written to {self.profile}")
        self._say(f"You will need to restart your shell with 'source {self.profile}'")
        return InstallOutcome.ADDED
