"""Tests for the PATH installer."""

import pytest

from spindec_build.core.errors import SpinDecError
from spindec_build.core.models import InstallOutcome
from spindec_build.installer import (
    PATH_QUESTION,
    PathInstaller,
    append_if_marker_absent,
    export_lines,
    profile_contains,
)
from spindec_build.prompt import YesNoPrompt

from conftest import ScriptedReader, output_of


def make_installer(settings, console, answers, environ):
    reader = ScriptedReader(answers)
    prompt = YesNoPrompt(reader=reader, console=console)
    installer = PathInstaller.from_settings(settings, prompt=prompt, console=console, environ=environ)
    return installer, reader


def test_profile_contains_missing_file(tmp_path):
    assert profile_contains(tmp_path / ".bashrc", "spindec") is False


def test_append_if_marker_absent_is_idempotent(tmp_path):
    profile = tmp_path / ".bashrc"
    profile.write_text("alias ll='ls -l'")
    lines = export_lines(tmp_path / "bin", "spindec")

    assert append_if_marker_absent(profile, "spindec", lines) is True
    first = profile.read_text()
    assert append_if_marker_absent(profile, "spindec", lines) is False

    assert profile.read_text() == first
    assert first.startswith("alias ll='ls -l'\n# spindec\n")
    assert first.endswith(f'export PATH="{tmp_path / "bin"}:$PATH"\n')


def test_added_for_bash(settings, console, bash_env):
    installer, reader = make_installer(settings, console, [""], bash_env)

    assert installer.install() is InstallOutcome.ADDED
    assert reader.questions == [PATH_QUESTION]

    content = settings.shell_profile.read_text()
    assert "spindec" in content
    assert str(settings.output_path.resolve()) in content
    assert "Binary added to $PATH" in output_of(console)
    assert "source" in output_of(console)


def test_already_present_leaves_profile_untouched(settings, console, bash_env):
    settings.shell_profile.parent.mkdir(parents=True)
    settings.shell_profile.write_text("export PATH=/opt/spindec/bin:$PATH\n")
    before = settings.shell_profile.read_bytes()

    installer, _ = make_installer(settings, console, ["y"], bash_env)

    assert installer.install() is InstallOutcome.ALREADY_PRESENT
    assert settings.shell_profile.read_bytes() == before
    assert "already in your $PATH" in output_of(console)


@pytest.mark.parametrize("shell", ["/usr/bin/zsh", "/bin/fish", ""])
def test_unsupported_shell(settings, console, shell):
    installer, _ = make_installer(settings, console, ["Y"], {"SHELL": shell} if shell else {})

    assert installer.install() is InstallOutcome.UNSUPPORTED_SHELL
    assert not settings.shell_profile.exists()
    assert "bash is not your default shell" in output_of(console)


def test_declined(settings, console, bash_env):
    installer, _ = make_installer(settings, console, ["nope", "n"], bash_env)

    assert installer.install() is InstallOutcome.DECLINED
    assert not settings.shell_profile.exists()
    assert "Not added to $PATH" in output_of(console)


def test_second_install_after_add_is_already_present(settings, console, bash_env):
    first, _ = make_installer(settings, console, ["y"], bash_env)
    assert first.install() is InstallOutcome.ADDED
    content = settings.shell_profile.read_text()

    second, _ = make_installer(settings, console, ["y"], bash_env)
    assert second.install() is InstallOutcome.ALREADY_PRESENT
    assert settings.shell_profile.read_text() == content


def test_unreadable_profile_raises_build_error(settings, console, bash_env):
    settings.shell_profile.mkdir(parents=True)
    installer, _ = make_installer(settings, console, ["y"], bash_env)

    with pytest.raises(SpinDecError) as exc_info:
        installer.install()

    assert exc_info.value.exit_code == 1
    assert isinstance(exc_info.value.cause, IsADirectoryError)
    assert exc_info.value.context.additional_info["profile"] == str(settings.shell_profile)
    assert settings.shell_profile.is_dir()
