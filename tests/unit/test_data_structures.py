from volumebot.data_structures import BackupOutcome, BackupReport, ContainerDetail, ContainerSummary, MountInfo


def test_container_summary_maps_names_field() -> None:
    assert ContainerSummary.model_validate({"Names": "web"}).name == "web"


def test_container_summary_uses_first_of_several_names() -> None:
    assert ContainerSummary.model_validate({"Names": "web,proxy/web"}).name == "web"
    assert ContainerSummary.model_validate({"Names": ["web", "alias"]}).name == "web"


def test_container_detail_lifts_config_labels() -> None:
    detail = ContainerDetail.model_validate(
        {
            "Id": "abc",
            "Name": "/web",
            "Mounts": [{"Type": "bind", "Source": "/srv/web", "Destination": "/data"}],
            "Config": {"Labels": {"type": "backupcontainer"}, "Image": "ubuntu"},
        }
    )

    assert detail.id == "abc"
    assert detail.mounts == [MountInfo(destination="/data")]
    assert detail.labels == {"type": "backupcontainer"}


def test_container_detail_treats_null_as_empty() -> None:
    detail = ContainerDetail.model_validate({"Id": "abc", "Mounts": None, "Config": {"Labels": None}})

    assert detail.mounts == []
    assert detail.labels == {}


def test_container_detail_without_config() -> None:
    assert ContainerDetail.model_validate({"Id": "abc", "Mounts": []}).labels == {}


def test_backup_outcome_succeeded() -> None:
    assert BackupOutcome("web").succeeded
    assert BackupOutcome("web", skipped=True).succeeded
    assert not BackupOutcome("web", failed_mounts=1).succeeded
    assert not BackupOutcome("web", error="stop failed").succeeded


def test_backup_report_success_and_stats() -> None:
    report = BackupReport()
    assert report.success

    report.add(BackupOutcome("web", archived_mounts=2))
    report.add(BackupOutcome("helper", skipped=True))
    assert report.success

    report.add(BackupOutcome("db", archived_mounts=1, failed_mounts=1))
    report.add(BackupOutcome("cache", error="no data"))

    assert not report.success
    assert report.failed == ["db", "cache"]
    assert report.stats() == {"success": 1, "error": 2, "skipped": 1}
