"""Group project containers into stacks and summarise their state."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

PROJECT_LABEL = "com.docker.compose.project"
CONFIG_FILES_LABEL = "com.docker.compose.project.config_files"


class MissingLabelError(KeyError):
    """A container lacks a label that a compose project container must carry."""

    def __init__(self, label: str, container_id: str) -> None:
        self.label = label
        self.container_id = container_id
        super().__init__(label)

    def __str__(self) -> str:
        return (
            f"No label {json.dumps(self.label)} set on container "
            f"{json.dumps(self.container_id)} of compose project"
        )


@dataclass
class Container:
    """The parts of a listed container that stacks are built from."""

    id: str
    state: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Stack:
    """A compose project as seen from its containers."""

    id: str
    name: str
    status: str
    config_files: str


def group_containers_by_label(
    containers: Iterable[Container], label_name: str
) -> dict[str, list[Container]]:
    """Group containers by the value of a label, keys in sorted order."""
    groups: dict[str, list[Container]] = {}
    for c in containers:
        if label_name not in c.labels:
            raise MissingLabelError(label_name, c.id)
        groups.setdefault(c.labels[label_name], []).append(c)
    return {key: groups[key] for key in sorted(groups)}


def combined_config_files(containers: Iterable[Container]) -> str:
    """Join the distinct config files of the containers, in first-seen order."""
    files: dict[str, None] = {}
    for c in containers:
        if CONFIG_FILES_LABEL not in c.labels:
            raise MissingLabelError(CONFIG_FILES_LABEL, c.id)
        files.update(dict.fromkeys(c.labels[CONFIG_FILES_LABEL].split(",")))
    return ",".join(files)


def combined_status(statuses: Sequence[str]) -> str:
    """Summarise states as ``state(count)`` entries, sorted by state."""
    counts = Counter(statuses)
    return ", ".join(f"{status}({counts[status]})" for status in sorted(counts))


def containers_to_stacks(containers: Iterable[Container]) -> list[Stack]:
    """Build one stack per project found among the containers."""
    stacks = []
    for project, members in group_containers_by_label(containers, PROJECT_LABEL).items():
        stacks.append(
            Stack(
                id=project,
                name=project,
                status=combined_status([c.state for c in members]),
                config_files=combined_config_files(members),
            )
        )
    return stacks


def _labels(mapping: Mapping[str, str]) -> dict[str, str]:
    return dict(mapping)