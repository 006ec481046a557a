#!/usr/bin/env python3

"""Invocation of the container engine command line tool."""

from subprocess import DEVNULL, PIPE, CompletedProcess, run
from typing import List, Sequence

from volumebot.data_structures import ContainerDetail, ContainerSummary
from volumebot.decoder import decode_json_array, decode_json_lines
from volumebot.errors import MissingDataError, NonZeroExitError, SpawnFailedError
from volumebot.logger import logger


class DockerCli:
    """Runs commands of a docker compatible engine executable.

    Standard error of the engine is inherited. There is no timeout: every call blocks until the engine exits.
    """

    def __init__(self, executable: str = "docker") -> None:
        self.executable = executable

    def run_outputless(self, args: Sequence[str]) -> None:
        """Runs an engine command and discards its output.

        Args:
            args (Sequence[str]): Arguments passed to the engine executable.

        Raises:
            SpawnFailedError: If the executable cannot be started.
            NonZeroExitError: If the command exits with a non-zero status.
        """
        self._execute(args, capture=False)

    def run_captured(self, args: Sequence[str]) -> bytes:
        """Runs an engine command and returns everything it wrote to stdout.

        Args:
            args (Sequence[str]): Arguments passed to the engine executable.

        Raises:
            SpawnFailedError: If the executable cannot be started.
            NonZeroExitError: If the command exits with a non-zero status.

        Returns:
            bytes: Standard output of the command.
        """
        return self._execute(args, capture=True)

    def list_running(self) -> List[ContainerSummary]:
        """Lists the running containers.

        docker prints one JSON object per line, podman a single JSON array. Both are accepted.
        """
        output = self.run_captured(["ps", "--format=json"])
        if output.lstrip().startswith(b"["):
            return decode_json_array(output, ContainerSummary)
        return decode_json_lines(output, ContainerSummary)

    def inspect(self, name: str) -> ContainerDetail:
        """Inspects a single container.

        Raises:
            MissingDataError: If the engine returned an empty array.
        """
        details = decode_json_array(self.run_captured(["inspect", name, "--format=json"]), ContainerDetail)
        if len(details) == 0:
            raise MissingDataError(f"Inspect returned no data for container '{name}'.")
        return details[0]

    def stop(self, container_id: str) -> None:
        self.run_outputless(["stop", container_id])

    def start(self, container_id: str) -> None:
        self.run_outputless(["start", container_id])

    def run(self, args: Sequence[str]) -> None:
        self.run_outputless(["run", *args])

    def _execute(self, args: Sequence[str], capture: bool) -> bytes:
        cmd_args = [self.executable, *args]
        logger.debug(f"Execute {cmd_args}")

        try:
            # own session: a terminal Ctrl-C reaches volumebot only, the running command completes
            result: CompletedProcess = run(cmd_args, stdout=PIPE if capture else DEVNULL, start_new_session=True)
        except OSError as error:
            raise SpawnFailedError(cmd_args, f"Failed to start '{self.executable}': {error}") from error

        if result.returncode != 0:
            raise NonZeroExitError(cmd_args, result.returncode)

        return result.stdout if capture else b""
