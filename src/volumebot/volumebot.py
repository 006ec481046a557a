#!/usr/bin/env python3

"""Main VolumeBot class."""

from typing import List, Optional

from volumebot.archiver import archive_mounts
from volumebot.config import BackupConfig
from volumebot.data_structures import BackupOutcome, BackupReport, ContainerSummary
from volumebot.engine import DockerCli
from volumebot.errors import (
    DecodeError,
    EngineError,
    LifecycleError,
    ListContainersError,
    MissingDataError,
)
from volumebot.logger import logger
from volumebot.policy import is_backup_helper, stopped_container


class VolumeBot:
    """Class which backs up the mounts of all running containers."""

    def __init__(self, config: BackupConfig, engine: Optional[DockerCli] = None) -> None:
        """Constructor.

        Args:
            config (BackupConfig): Backup configuration.
            engine (Optional[DockerCli], optional): Engine to use. Defaults to a DockerCli running 'config.docker'.
        """
        self.config = config
        self.engine = engine if engine is not None else DockerCli(config.docker)
        self._stop_requested = False

    def request_stop(self) -> None:
        """Ends the batch after the container currently being backed up, including its restart."""
        self._stop_requested = True

    def list_containers(self) -> List[ContainerSummary]:
        try:
            containers = self.engine.list_running()
        except (EngineError, DecodeError) as error:
            logger.error(f"Failed to list running containers: {error}")
            raise ListContainersError(str(error)) from error

        logger.info(f"Found containers: {[container.name for container in containers]}")
        return containers

    def run(self) -> BackupReport:
        """Backs up all running containers one after another.

        Steps for every container, in the order the engine lists them:
        1) Inspect the container to get its id, mounts and labels.
        2) Skip it if it is a backup helper container.
        3) Stop the container if configured.
        4) Archive every mount into the destination directory.
        5) Restart the container if it was stopped.

        Failures of a single container are logged and recorded in the report, they never abort the batch. Only a
        failure to list the running containers does.

        Raises:
            ListContainersError: If the running containers cannot be listed.

        Returns:
            BackupReport: Outcome of every processed container.
        """
        report = BackupReport()

        for container in self.list_containers():
            if self._stop_requested:
                logger.warning("Stop requested, skipping remaining containers.")
                break
            report.add(self.backup_container(container.name))

        stats = report.stats()
        stat_message = f"{stats['success']} successful, {stats['error']} errors, {stats['skipped']} skipped"
        if stats["error"] == 0:
            logger.info(stat_message)
        else:
            logger.warning(stat_message)

        return report

    def backup_container(self, name: str) -> BackupOutcome:
        outcome = BackupOutcome(name=name)
        logger.info(f"[{name}] Getting container information")

        try:
            detail = self.engine.inspect(name)
        except MissingDataError as missing_error:
            logger.error(f"[{name}] Response from inspect is wrong (no data returned)")
            outcome.error = str(missing_error)
            return outcome
        except DecodeError as decode_error:
            logger.error(f"[{name}] Failed to decode inspect response: {decode_error}")
            outcome.error = str(decode_error)
            return outcome
        except EngineError as engine_error:
            logger.error(f"[{name}] Failed to inspect container: {engine_error}")
            outcome.error = str(engine_error)
            return outcome

        logger.debug(f"[{name}] Inspect: {detail}")

        if is_backup_helper(detail):
            logger.info(f"[{name}] Skipping this container as it is a backup container")
            outcome.skipped = True
            return outcome

        try:
            with stopped_container(self.engine, detail, name, self.config.stop_start):
                outcome.failed_mounts = archive_mounts(self.engine, detail, name, self.config)
                outcome.archived_mounts = len(detail.mounts) - outcome.failed_mounts
        except LifecycleError as lifecycle_error:
            logger.error(f"[{name}] {lifecycle_error}")
            outcome.error = str(lifecycle_error)

        if outcome.succeeded:
            logger.info(f"[{name}] Backup of container done.")
        else:
            logger.error(f"[{name}] Error backing up container")

        return outcome
