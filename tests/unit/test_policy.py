"""Unit tests for module volumebot.policy."""

import pytest

from tests.utils.dummies import RecordingDockerCli, command_is
from volumebot.data_structures import ContainerDetail
from volumebot.errors import LifecycleError
from volumebot.policy import is_backup_helper, stopped_container


def test_is_backup_helper() -> None:
    assert is_backup_helper(ContainerDetail(id="abc", labels={"type": "backupcontainer"}))

    assert not is_backup_helper(ContainerDetail(id="abc"))
    assert not is_backup_helper(ContainerDetail(id="abc", labels={"type": "database"}))
    assert not is_backup_helper(ContainerDetail(id="abc", labels={"role": "backupcontainer"}))


def test_stopped_container_does_nothing_when_disabled() -> None:
    engine = RecordingDockerCli()

    with stopped_container(engine, ContainerDetail(id="abc"), "web", enabled=False):
        engine.run(["body"])

    assert engine.calls == [["run", "body"]]


def test_stopped_container_stops_before_and_starts_after_block() -> None:
    engine = RecordingDockerCli()

    with stopped_container(engine, ContainerDetail(id="abc"), "web", enabled=True):
        engine.run(["body"])

    assert engine.calls == [["stop", "abc"], ["run", "body"], ["start", "abc"]]


def test_stopped_container_skips_block_when_stop_fails() -> None:
    engine = RecordingDockerCli(fail_when=[command_is("stop")])
    executed = []

    with pytest.raises(LifecycleError) as error:
        with stopped_container(engine, ContainerDetail(id="abc"), "web", enabled=True):
            executed.append(True)

    assert executed == []
    assert error.value.action == "stop"
    assert engine.verbs() == ["stop"]


def test_stopped_container_starts_container_when_block_raises() -> None:
    engine = RecordingDockerCli()

    with pytest.raises(KeyError):
        with stopped_container(engine, ContainerDetail(id="abc"), "web", enabled=True):
            raise KeyError("unexpected")

    assert engine.verbs() == ["stop", "start"]


def test_stopped_container_raises_lifecycle_error_when_start_fails() -> None:
    engine = RecordingDockerCli(fail_when=[command_is("start")])

    with pytest.raises(LifecycleError) as error:
        with stopped_container(engine, ContainerDetail(id="abc"), "web", enabled=True):
            engine.run(["body"])

    assert error.value.action == "start"
    assert error.value.container == "web"
    assert engine.verbs() == ["stop", "run", "start"]
