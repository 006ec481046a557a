#!/usr/bin/env python3

"""Configuration of a backup run."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from volumebot.errors import ConfigError
from volumebot.logger import LOG_LEVELS
from volumebot.utils import load_yaml_file

IMAGE_ENV_VARIABLE = "VOLUMEBOT_IMAGE"


class BackupConfig(BaseModel):
    """All settings of a backup run, including their defaults."""

    model_config = ConfigDict(extra="forbid", validate_default=True)

    docker: str = "/usr/bin/docker"  # engine executable
    image: str = "ubuntu"  # image of the helper containers
    stop_start: bool = False  # stop containers during their backup
    loglevel: str = "info"
    destination: Path = Field(default_factory=Path.cwd)  # host directory receiving the tar files
    log_file: Optional[Path] = None

    @field_validator("loglevel")
    @classmethod
    def known_loglevel(cls, value: str) -> str:
        if value.lower() not in LOG_LEVELS:
            raise ValueError(f"must be one of {list(LOG_LEVELS)}")
        return value.lower()

    @field_validator("destination")
    @classmethod
    def absolute_destination(cls, value: Path) -> Path:
        # the engine only accepts absolute host paths for bind mounts, ":" separates the -v fields
        value = value.absolute()
        if ":" in str(value):
            raise ValueError("must not contain ':'")
        return value


def load_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BackupConfig:
    """Builds the configuration of a backup run.

    Sources, from lowest to highest priority: defaults of BackupConfig, the VOLUMEBOT_IMAGE environment variable,
    the YAML config file, explicit overrides (command line). Overrides set to None are ignored.

    Args:
        config_file (Optional[Path], optional): YAML file. Defaults to None.
        overrides (Optional[Dict[str, Any]], optional): Explicitly set values. Defaults to None.
        environ (Optional[Mapping[str, str]], optional): Environment. Defaults to os.environ.

    Raises:
        ConfigError: If the config file cannot be read, a value is invalid or the destination is no directory.

    Returns:
        BackupConfig: Validated configuration.
    """
    if environ is None:
        environ = os.environ

    values: Dict[str, Any] = {}

    if environ.get(IMAGE_ENV_VARIABLE):
        values["image"] = environ[IMAGE_ENV_VARIABLE]

    if config_file is not None:
        try:
            values.update(load_yaml_file(config_file))
        except (OSError, ValueError) as error:
            raise ConfigError(f"Failed to load config file: {error}") from error

    if overrides:
        values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = BackupConfig.model_validate(values)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration: {error}") from error

    if not config.destination.is_dir():
        raise ConfigError(f"Backup destination is not a directory: '{config.destination}'.")

    return config
