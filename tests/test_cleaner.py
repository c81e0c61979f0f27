"""Tests for artifact removal."""

from pathlib import Path

import pytest

from spindec_build.cleaner import CONFIRM_QUESTION, Cleaner
from spindec_build.core.errors import ArtifactRemovalError, PreconditionError
from spindec_build.core.models import ConfirmMode
from spindec_build.prompt import YesNoPrompt

from conftest import ScriptedReader, output_of


@pytest.fixture
def built(settings):
    """Output directory holding a.mod, b.o, the binary and an unrelated file."""
    for name in ("a.mod", "b.o", "spindec", "README.txt"):
        (settings.output_path / name).write_text("x")
    return settings.output_path


def make_cleaner(settings, console, answers=()):
    reader = ScriptedReader(list(answers))
    prompt = YesNoPrompt(reader=reader, console=console)
    return Cleaner.from_settings(settings, prompt=prompt, console=console), reader


def test_nothing_to_clean(settings, console):
    cleaner, reader = make_cleaner(settings, console)

    with pytest.raises(PreconditionError) as exc_info:
        cleaner.clean(ConfirmMode.CONFIRM)

    assert exc_info.value.exit_code == 1
    assert reader.questions == []
    assert "Removing" not in output_of(console)


def test_auto_confirm_removes_everything_then_is_idempotent(settings, console, built):
    cleaner, reader = make_cleaner(settings, console)

    report = cleaner.clean(ConfirmMode.AUTO)

    assert report.success
    assert sorted(a.name for a in report.removed) == ["a.mod", "b.o", "spindec"]
    assert reader.questions == []
    assert [p.name for p in built.iterdir()] == ["README.txt"]
    out = output_of(console)
    assert "Removing the following compiled binaries:" in out
    assert "bin/a.mod" in out
    assert "Cleaned successfully" in out

    with pytest.raises(PreconditionError):
        cleaner.clean(ConfirmMode.AUTO)


def test_confirm_mode_declined(settings, console, built):
    cleaner, reader = make_cleaner(settings, console, ["?", "n"])

    report = cleaner.clean(ConfirmMode.CONFIRM)

    assert report.declined
    assert report.removed == []
    assert reader.questions == [CONFIRM_QUESTION, CONFIRM_QUESTION]
    assert (built / "spindec").exists()
    assert "Binaries not removed" in output_of(console)


def test_confirm_mode_accepted(settings, console, built):
    cleaner, _ = make_cleaner(settings, console, ["y"])

    report = cleaner.clean(ConfirmMode.CONFIRM)

    assert len(report.removed) == 3
    assert not (built / "a.mod").exists()


def test_removal_failure_is_best_effort(settings, console, built, monkeypatch):
    original_unlink = Path.unlink

    def flaky_unlink(self, missing_ok=False):
        if self.name == "b.o":
            raise PermissionError("read-only")
        return original_unlink(self, missing_ok=missing_ok)

    monkeypatch.setattr(Path, "unlink", flaky_unlink)
    cleaner, _ = make_cleaner(settings, console)

    with pytest.raises(ArtifactRemovalError) as exc_info:
        cleaner.clean()

    assert exc_info.value.exit_code == 1
    assert len(exc_info.value.failures) == 1
    assert "b.o" in exc_info.value.failures[0]
    assert not (built / "a.mod").exists()
    assert not (built / "spindec").exists()
    assert (built / "b.o").exists()
    assert "Cleaned successfully" not in output_of(console)
