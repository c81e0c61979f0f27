#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Remove previously compiled binaries, module files and object files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console

from .artifacts import list_artifacts
from .config import BuildSettings
from .core.errors import ArtifactRemovalError, ErrorContext, PreconditionError
from .core.models import CleanReport, ConfirmMode
from .prompt import YesNoPrompt

CONFIRM_QUESTION = "Proceed? [Y/n] "


class Cleaner:
    """
    Matches build artifacts in the output directory and removes them.

    Removal is best-effort: a failure on one artifact is reported and the
    remaining artifacts are still attempted.
    """

    def __init__(
        self,
        output_dir: Path,
        binary_name: str = "spindec",
        prompt: Optional[YesNoPrompt] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.binary_name = binary_name
        self.console = console or Console()
        self.prompt = prompt or YesNoPrompt(console=self.console)

    @classmethod
    def from_settings(
        cls,
        settings: BuildSettings,
        prompt: Optional[YesNoPrompt] = None,
        console: Optional[Console] = None,
    ) -> Cleaner:
        return cls(settings.output_path, settings.binary_name, prompt=prompt, console=console)

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def _display_name(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.output_dir.parent))
        except ValueError:
            return str(path)

    def clean(self, confirm_mode: ConfirmMode = ConfirmMode.AUTO) -> CleanReport:
        """
        Remove every matched artifact after confirmation.

        Raises:
            PreconditionError: If there is nothing to remove.
            ArtifactRemovalError: If any artifact could not be removed.
        """
        artifacts = list_artifacts(self.output_dir, self.binary_name)
        if not artifacts:
            raise PreconditionError(
                "No binaries found",
                context=ErrorContext(working_directory=self.output_dir),
            )

        report = CleanReport(matched=artifacts)

        self._say("Removing the following compiled binaries:\n")
        for artifact in artifacts:
            self._say(self._display_name(artifact.path))
        self._say("")

        if confirm_mode is ConfirmMode.CONFIRM and not self.prompt.ask(CONFIRM_QUESTION):
            report.declined = True
            self._say("Binaries not removed")
            return report

        errors = []
        for artifact in artifacts:
            try:
                artifact.path.unlink()
                report.removed.append(artifact)
                logger.debug(f"Removed {artifact.path}")
            except FileNotFoundError:
                # Already gone, which is the goal of the operation
                report.removed.append(artifact)
                logger.debug(f"Already removed: {artifact.path}")
            except OSError as e:
                report.failed.append(artifact)
                errors.append(f"Error removing {artifact.path}: {e}")
                logger.warning(f"Failed to remove {artifact.path}: {e}")

        if errors:
            raise ArtifactRemovalError(
                f"Failed to remove {len(errors)} of {len(artifacts)} artifact(s)",
                failures=errors,
                context=ErrorContext(
                    working_directory=self.output_dir,
                    additional_info={"removed": [a.name for a in report.removed]},
                ),
            )

        logger.info(f"Removed {len(report.removed)} artifact(s) from {self.output_dir}")
        self._say("Cleaned successfully")
        return report
