#!/usr/bin/env python3

"""Testing fixtures."""

import stat
from pathlib import Path
from typing import Callable, Generator, List

import pytest
from docker import DockerClient, from_env
from docker.errors import DockerException

from volumebot.config import BackupConfig
from volumebot.logger import logger


def _docker_available() -> bool:
    try:
        from_env().ping()
    except (DockerException, OSError):
        return False
    return True


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    docker_items = [item for item in items if item.get_closest_marker("docker") is not None]
    if not docker_items or _docker_available():
        return

    skip_docker = pytest.mark.skip(reason="no Docker daemon available")
    for item in docker_items:
        item.add_marker(skip_docker)


@pytest.fixture(autouse=True)
def reset_logger() -> Generator:
    """Restores level and handlers of the volumebot logger after tests which reconfigure logging."""
    handler_levels = {handler: handler.level for handler in logger.handlers}
    level = logger.level
    yield None
    for handler in list(logger.handlers):
        if handler not in handler_levels:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    for handler, handler_level in handler_levels.items():
        handler.setLevel(handler_level)


@pytest.fixture
def resources_dir() -> Path:
    return Path(__file__).parent.joinpath("resources")


@pytest.fixture
def sample_config_file() -> Path:
    """Returns the path to the sample YAML configuration located in /tests/resources.

    Returns:
        Path: Path instance.
    """
    return Path(__file__).parent.joinpath("resources", "volumebot.yaml")


@pytest.fixture
def backup_config(tmp_path: Path) -> BackupConfig:
    return BackupConfig(docker="docker", image="busybox", destination=tmp_path)


@pytest.fixture
def fake_engine(tmp_path: Path) -> Callable[[str], Path]:
    """Returns a callable which writes an executable shell script that stands in for the engine.

    Returns:
        Callable[[str], Path]: Takes the script body, returns the script path.
    """

    def func(body: str) -> Path:
        script = tmp_path.joinpath("fake-docker")
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return func


@pytest.fixture(scope="session")
def docker_client() -> DockerClient:
    """Returns the host's docker client.

    Returns:
        DockerClient: Docker client instance.
    """
    return from_env()
