#!/usr/bin/env python3

"""Archives the mounts of a container with short lived helper containers."""

from pathlib import Path
from typing import List

from volumebot.config import BackupConfig
from volumebot.data_structures import ContainerDetail, MountInfo
from volumebot.engine import DockerCli
from volumebot.errors import EngineError
from volumebot.logger import logger
from volumebot.policy import HELPER_LABEL_KEY, TYPE_BACKUPCONTAINER
from volumebot.utils import path_to_string

HELPER_BACKUP_DIR = "/backupdest"  # mount point of the destination inside the helper container


def sanitize(path: str) -> str:
    return path_to_string(path, delim="_")


def archive_filename(name: str, mount: str) -> str:
    """Returns the tar file name for a mount, e.g. 'web' and '/data' result in 'web_data.tar'."""
    return f"{name}{sanitize(mount)}.tar"


def helper_run_args(detail: ContainerDetail, name: str, mount: MountInfo, image: str, destination: Path) -> List[str]:
    """Creates the arguments of 'run' for a helper container which tars a single mount.

    The helper container removes itself on exit, carries the backup container label, mounts all volumes of the
    container to back up and the host destination directory under /backupdest.

    Args:
        detail (ContainerDetail): Inspected container to back up.
        name (str): Container name, used in the file name.
        mount (MountInfo): Mount to archive.
        image (str): Image of the helper container. It must provide 'tar'.
        destination (Path): Absolute host directory receiving the tar file.

    Returns:
        List[str]: Arguments following 'run'.
    """
    return [
        "--rm",
        "--label",
        f"{HELPER_LABEL_KEY}={TYPE_BACKUPCONTAINER}",
        "-v",
        f"{destination}:{HELPER_BACKUP_DIR}",
        "--volumes-from",
        detail.id,
        image,
        "tar",
        "cvf",
        f"{HELPER_BACKUP_DIR}/{archive_filename(name, mount.destination)}",
        mount.destination,
    ]


def archive_mount(engine: DockerCli, detail: ContainerDetail, name: str, mount: MountInfo, config: BackupConfig) -> None:
    """Archives a single mount.

    Raises:
        EngineError: If the helper container could not be run or tar failed.
    """
    engine.run(helper_run_args(detail, name, mount, config.image, config.destination))


def archive_mounts(engine: DockerCli, detail: ContainerDetail, name: str, config: BackupConfig) -> int:
    """Archives all mounts of a container in the order reported by the engine.

    A failing mount is logged and counted, the remaining mounts are archived anyway.

    Returns:
        int: Number of mounts which failed.
    """
    logger.info(f"[{name}] Start backup of volumes")

    errors = 0
    for mount in detail.mounts:
        logger.info(f"[{name}] - backing up '{mount.destination}'")
        try:
            archive_mount(engine, detail, name, mount, config)
        except EngineError as error:
            logger.error(f"[{name}] Error in backup of volume '{mount.destination}': {error}")
            errors += 1

    return errors
