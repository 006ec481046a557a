#!/usr/bin/env python3

"""Decides which containers are backed up and brackets their backup with a stop and a start."""

from contextlib import contextmanager
from typing import Generator

from volumebot.data_structures import ContainerDetail
from volumebot.engine import DockerCli
from volumebot.errors import EngineError, LifecycleError
from volumebot.logger import logger

HELPER_LABEL_KEY = "type"
TYPE_BACKUPCONTAINER = "backupcontainer"


def is_backup_helper(detail: ContainerDetail) -> bool:
    """Checks whether the container is a helper container started by volumebot itself."""
    return detail.labels.get(HELPER_LABEL_KEY) == TYPE_BACKUPCONTAINER


@contextmanager
def stopped_container(engine: DockerCli, detail: ContainerDetail, name: str, enabled: bool) -> Generator:
    """Context manager which stops the container before and starts it after the enclosed block.

    Nothing happens if 'enabled' is False. If the container cannot be stopped the block is not executed. Once the
    container has been stopped it is started again exactly once, whatever happens inside the block.

    Args:
        engine (DockerCli): Engine to run 'stop' and 'start' with.
        detail (ContainerDetail): Inspected container.
        name (str): Container name, used for logging.
        enabled (bool): Whether to stop and start the container at all.

    Raises:
        LifecycleError: If stopping or starting the container fails.

    Yields:
        Generator: Yields None while the container is stopped.
    """
    if not enabled:
        yield None
        return

    logger.info(f"[{name}] Stopping container")
    try:
        engine.stop(detail.id)
    except EngineError as error:
        raise LifecycleError("stop", name, error) from error

    try:
        yield None
    finally:
        logger.info(f"[{name}] Restarting container")
        try:
            engine.start(detail.id)
        except EngineError as error:
            raise LifecycleError("start", name, error) from error
