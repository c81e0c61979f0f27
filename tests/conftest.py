"""Shared fixtures for the spindec build front-end tests."""

import io
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from rich.console import Console

from spindec_build.config import BuildSettings
from spindec_build.core.models import CommandResult

LINK_FLAGS = "-L/opt/netcdf/lib -lnetcdff -lnetcdf"
COMPILE_FLAGS = "-I/opt/netcdf/include"


class ScriptedReader:
    """Line reader returning canned answers, then raising EOFError."""

    def __init__(self, answers: List[str]) -> None:
        self.answers = list(answers)
        self.questions: List[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class FakeRunner:
    """Command runner standing in for nf-config and gfortran."""

    def __init__(
        self,
        settings: BuildSettings,
        compile_code: int = 0,
        helper_code: int = 0,
        write_binary: bool = True,
        link_flags: str = LINK_FLAGS,
        compile_flags: str = COMPILE_FLAGS,
    ) -> None:
        self.settings = settings
        self.link_flags = link_flags
        self.compile_flags = compile_flags
        self.compile_code = compile_code
        self.helper_code = helper_code
        self.write_binary = write_binary
        self.calls: List[List[str]] = []

    @property
    def compile_calls(self) -> List[List[str]]:
        return [c for c in self.calls if c[0] == self.settings.compiler]

    def __call__(self, command: List[str], capture: bool = True) -> CommandResult:
        self.calls.append(list(command))
        if command[0] == self.settings.config_helper:
            output = {"--flibs": self.link_flags, "--fflags": self.compile_flags}[command[1]]
            return CommandResult(
                success=self.helper_code == 0,
                stdout=output if self.helper_code == 0 else "",
                stderr="" if self.helper_code == 0 else "nf-config: not configured",
                return_code=self.helper_code,
                command=command,
            )

        if self.write_binary:
            self.settings.binary_path.write_text("binary")
        return CommandResult(
            success=self.compile_code == 0,
            return_code=self.compile_code,
            command=command,
        )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project checkout with three source files and an empty bin/."""
    root = tmp_path / "SpinDec2"
    src = root / "src"
    src.mkdir(parents=True)
    for name in ("main.f90", "params.f90", "cahn_hilliard.f90"):
        (src / name).write_text("! fortran\n")
    (root / "bin").mkdir()
    return root


@pytest.fixture
def settings(project: Path, tmp_path: Path) -> BuildSettings:
    return BuildSettings(project_root=project, shell_profile=tmp_path / "home" / ".bashrc")


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=400, color_system=None)


def output_of(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def bash_env() -> Dict[str, str]:
    return {"SHELL": "/bin/bash"}


@pytest.fixture
def runner(settings: BuildSettings) -> FakeRunner:
    return FakeRunner(settings)
