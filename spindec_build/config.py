#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Settings for the spindec build front-end.

Defaults describe the standard repository layout (sources in ``src/``,
outputs in ``bin/``, gfortran with nf-config). A ``spindec.toml`` or
``spindec.json`` in the project root, a file named by ``SPINDEC_CONFIG``
and ``SPINDEC_<FIELD>`` environment variables can override them.
"""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.errors import ConfigurationError, ErrorContext

CONFIG_ENV_VAR = "SPINDEC_CONFIG"
ENV_PREFIX = "SPINDEC_"
DEFAULT_CONFIG_NAMES = ("spindec.toml", "spindec.json")

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class BuildSettings(BaseModel):
    """Validated layout and toolchain settings for one project checkout."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    project_root: Path = Field(
        default_factory=Path.cwd, description="Repository root all relative paths resolve against"
    )
    source_dir: Path = Field(default=Path("src"), description="Directory of compilable units")
    output_dir: Path = Field(default=Path("bin"), description="Directory receiving binary, module and object files")
    binary_name: str = Field(default="spindec", min_length=1, description="File name of the compiled program")
    compiler: str = Field(default="gfortran", min_length=1, description="Fortran compiler executable")
    config_helper: str = Field(default="nf-config", min_length=1, description="NetCDF-Fortran configuration helper")
    marker: str = Field(default="spindec", min_length=1, description="Substring marking a prior PATH install")
    shell_profile: Path = Field(
        default_factory=lambda: Path.home() / ".bashrc", description="Shell startup file receiving the PATH export"
    )
    supported_shell: str = Field(default="bash", min_length=1, description="Shell the PATH export is written for")
    test_dir: Path = Field(default=Path("test"), description="Automated test directory")
    example_dir: Path = Field(default=Path("test"), description="Example initialisation states directory")
    log_level: str = Field(default="WARNING", description="Loguru level for diagnostics on stderr")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating diagnostic log file")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("shell_profile", "log_file")
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else None

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else (self.project_root / path)

    @property
    def source_path(self) -> Path:
        return self._resolve(self.source_dir)

    @property
    def output_path(self) -> Path:
        return self._resolve(self.output_dir)

    @property
    def binary_path(self) -> Path:
        return self.output_path / self.binary_name

    @property
    def test_path(self) -> Path:
        return self._resolve(self.test_dir)

    @property
    def example_path(self) -> Path:
        return self._resolve(self.example_dir)

    @classmethod
    def load(
        cls,
        project_root: Optional[Union[Path, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> BuildSettings:
        """
        Build settings from defaults, an optional config file and the environment.

        Args:
            project_root: Directory to resolve relative paths against. Defaults
                to the current working directory.
            environ: Environment mapping, ``os.environ`` when omitted.

        Returns:
            BuildSettings: Validated settings.

        Raises:
            ConfigurationError: If a config file is unreadable or a value is invalid.
        """
        env = os.environ if environ is None else environ
        root = Path(project_root) if project_root is not None else Path.cwd()

        data: Dict[str, Any] = {"project_root": root}

        config_file = cls._find_config_file(root, env)
        if config_file is not None:
            data.update(load_config_file(config_file))

        data.update(cls._env_overrides(env))

        try:
            settings = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings: {e}",
                config_file=config_file,
                context=ErrorContext(working_directory=root),
                cause=e,
            )

        logger.bind(config_file=str(config_file) if config_file else None).debug("Loaded settings")
        return settings

    @staticmethod
    def _find_config_file(root: Path, env: Mapping[str, str]) -> Optional[Path]:
        explicit = env.get(CONFIG_ENV_VAR)
        if explicit:
            path = Path(explicit).expanduser()
            return path if path.is_absolute() else root / path

        for name in DEFAULT_CONFIG_NAMES:
            candidate = root / name
            if candidate.is_file():
                logger.debug(f"Auto-discovered configuration file: {candidate}")
                return candidate
        return None

    @classmethod
    def _env_overrides(cls, env: Mapping[str, str]) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in env:
                overrides[name] = env[key]
        return overrides


def load_config_file(file_path: Union[Path, str]) -> Dict[str, Any]:
    """
    Read a TOML or JSON settings file into a plain dictionary.

    A TOML file may hold its keys at the top level or in a ``[spindec]`` table.

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed.
    """
    config_path = Path(file_path)

    if not config_path.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            config_file=config_path,
        )

    suffix = config_path.suffix.lower()
    try:
        content = config_path.read_text(encoding="utf-8")
        match suffix:
            case ".toml":
                data = tomllib.loads(content)
                data = data.get("spindec", data)
            case ".json":
                data = json.loads(content)
            case _:
                raise ConfigurationError(
                    f"Unsupported configuration file format: {suffix}. Supported formats: .toml, .json",
                    config_file=config_path,
                )
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Invalid configuration file {config_path}: {e}",
            config_file=config_path,
            cause=e,
        )
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            config_file=config_path,
            cause=e,
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration must be a table/object of settings",
            config_file=config_path,
        )

    logger.debug(f"Loaded {suffix[1:].upper()} configuration from {config_path}")
    return data
