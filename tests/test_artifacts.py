"""Tests for source and artifact enumeration."""

from pathlib import Path

import pytest

from spindec_build.artifacts import classify, list_artifacts, list_sources
from spindec_build.core.errors import SpinDecError
from spindec_build.core.models import ArtifactKind


def test_list_sources_sorted_and_not_recursive(project):
    nested = project / "src" / "legacy"
    nested.mkdir()
    (nested / "old.f90").write_text("")

    names = [p.name for p in list_sources(project / "src")]

    assert names == ["cahn_hilliard.f90", "main.f90", "params.f90"]


def test_list_sources_missing_directory(tmp_path):
    assert list_sources(tmp_path / "nope") == []


def test_classify():
    assert classify(Path("bin/params.mod"), "spindec") is ArtifactKind.MODULE_FILE
    assert classify(Path("bin/main.o"), "spindec") is ArtifactKind.OBJECT_FILE
    assert classify(Path("bin/spindec"), "spindec") is ArtifactKind.COMPILED_BINARY
    assert classify(Path("bin/README"), "spindec") is None


def test_list_artifacts_classifies_by_suffix(project):
    bin_dir = project / "bin"
    for name in ("a.mod", "b.o", "spindec", "notes.txt"):
        (bin_dir / name).write_text("")
    (bin_dir / "sub.mod").mkdir()

    artifacts = list_artifacts(bin_dir)

    assert [(a.name, a.kind) for a in artifacts] == [
        ("a.mod", ArtifactKind.MODULE_FILE),
        ("b.o", ArtifactKind.OBJECT_FILE),
        ("spindec", ArtifactKind.COMPILED_BINARY),
    ]


def test_list_artifacts_empty_or_missing(project, tmp_path):
    assert list_artifacts(project / "bin") == []
    assert list_artifacts(tmp_path / "missing") == []


def test_unlistable_directory_raises_build_error(project, monkeypatch):
    def denied(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "iterdir", denied)

    with pytest.raises(SpinDecError) as exc_info:
        list_artifacts(project / "bin")
    assert exc_info.value.context.working_directory == project / "bin"

    with pytest.raises(SpinDecError):
        list_sources(project / "src")
