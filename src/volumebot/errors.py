"""Exceptions raised by volumebot."""

from typing import Optional, Sequence


class VolumeBotError(Exception):
    def __init__(self, msg: Optional[str] = None):
        super().__init__(msg)


class EngineError(VolumeBotError):
    """An engine command did not succeed."""

    def __init__(self, args: Sequence[str], msg: Optional[str] = None):
        self.args_used = list(args)
        super().__init__(msg)


class SpawnFailedError(EngineError):
    """The engine executable could not be started."""


class NonZeroExitError(EngineError):
    """The engine executable exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int):
        self.returncode = returncode
        super().__init__(args, f"'{' '.join(args)}' exited with status {returncode}")


class DecodeError(VolumeBotError):
    """Engine output could not be decoded."""


class MissingDataError(VolumeBotError):
    """The engine returned no record where one was expected."""


class LifecycleError(VolumeBotError):
    """Stopping or starting a container failed."""

    def __init__(self, action: str, container: str, cause: Optional[Exception] = None):
        self.action = action
        self.container = container
        super().__init__(f"Failed to {action} container '{container}': {cause}")


class ListContainersError(VolumeBotError):
    """Running containers could not be listed."""


class ConfigError(VolumeBotError):
    """Invalid configuration."""
