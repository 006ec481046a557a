#!/usr/bin/env python3

"""Module that provides data structures needed throughout the project.

Engine records are pydantic models. Field aliases follow the capitalized names the engine uses in its JSON output,
the attribute names are the ones used inside volumebot.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class EngineRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ContainerSummary(EngineRecord):
    name: str = Field(alias="Names")

    @field_validator("name", mode="before")
    @classmethod
    def first_name(cls, value: Any) -> Any:
        # docker: "name" or "name,alias"; podman: ["name", "alias"]
        if isinstance(value, list):
            if len(value) == 0:
                raise ValueError("container has no name")
            value = value[0]
        if isinstance(value, str):
            value = value.split(",")[0]
        return value


class MountInfo(EngineRecord):
    destination: str = Field(alias="Destination")


class ContainerDetail(EngineRecord):
    id: str = Field(alias="Id")
    mounts: List[MountInfo] = Field(alias="Mounts", default_factory=list)
    labels: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def lift_config_labels(cls, data: Any) -> Any:
        if isinstance(data, dict) and "Config" in data:
            data = dict(data)
            config = data.pop("Config")
            if isinstance(config, dict):
                data["labels"] = config.get("Labels")
        return data

    @field_validator("mounts", "labels", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "mounts" else {}
        return value


@dataclass
class BackupOutcome:
    name: str  # container name as listed by the engine
    skipped: bool = False  # backup helper containers are skipped
    archived_mounts: int = 0
    failed_mounts: int = 0
    error: Optional[str] = None  # inspection or lifecycle failure

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.failed_mounts == 0


@dataclass
class BackupReport:
    outcomes: List[BackupOutcome] = field(default_factory=list)

    def add(self, outcome: BackupOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def success(self) -> bool:
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def failed(self) -> List[str]:
        return [outcome.name for outcome in self.outcomes if not outcome.succeeded]

    def stats(self) -> Dict[str, int]:
        stats: Dict[str, int] = {"success": 0, "error": 0, "skipped": 0}
        for outcome in self.outcomes:
            if not outcome.succeeded:
                stats["error"] += 1
            elif outcome.skipped:
                stats["skipped"] += 1
            else:
                stats["success"] += 1
        return stats
