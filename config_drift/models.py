"""
Report models shared by the diff engine, the scanner and the CLI.

A comparison always has a "left" and a "right" side. Temporal scans call
them old/new, cross-environment scans call them pt/prod; ``SideLabels``
carries those names into the JSON payload so the core stays mode-agnostic.
"""

import json
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

PropertyMap = Dict[str, str]


class ChangeKind(str, Enum):
    ADDED = "added"      # only on the right side
    REMOVED = "removed"  # only on the left side
    CHANGED = "changed"  # both sides, different values


class SideLabels(NamedTuple):
    """Names used in the JSON payload for each side and one-sided kinds."""
    left: str
    right: str
    added: str
    removed: str

    def kind_label(self, kind: ChangeKind) -> str:
        if kind is ChangeKind.ADDED:
            return self.added
        if kind is ChangeKind.REMOVED:
            return self.removed
        return kind.value


TEMPORAL_LABELS = SideLabels(left="old", right="new", added="added", removed="removed")
CROSS_ENV_LABELS = SideLabels(left="pt", right="prod", added="added_in_prod", removed="added_in_pt")


class ChangeRecord(BaseModel):
    """One key that differs between the two sides."""
    model_config = ConfigDict(frozen=True)

    key: str
    left: Optional[str] = None
    right: Optional[str] = None
    kind: ChangeKind

    def to_payload(self, labels: SideLabels) -> Dict[str, Any]:
        # A side missing for this key is omitted rather than written as null
        payload: Dict[str, Any] = {"key": self.key}
        if self.left is not None:
            payload[labels.left] = self.left
        if self.right is not None:
            payload[labels.right] = self.right
        payload["type"] = labels.kind_label(self.kind)
        return payload


class FileDiff(BaseModel):
    """Both parsed sides of one property file plus its surviving changes."""

    left: Optional[PropertyMap] = None
    right: Optional[PropertyMap] = None
    diffs: List[ChangeRecord] = Field(default_factory=list)

    @property
    def is_reportable(self) -> bool:
        """True when the file has key-level changes or one side is missing entirely."""
        return bool(self.diffs) or self.left is None or self.right is None

    def to_payload(self, labels: SideLabels) -> Dict[str, Any]:
        return {
            labels.left: self.left,
            labels.right: self.right,
            "diffs": [record.to_payload(labels) for record in self.diffs],
        }


EnvironmentReport = Dict[str, FileDiff]


class TemporalResult(BaseModel):
    """Changes between two revisions, per environment then per file."""

    mode: Literal["temporal"] = "temporal"
    envs: Dict[str, EnvironmentReport] = Field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "envs": {
                env: {name: diff.to_payload(TEMPORAL_LABELS) for name, diff in files.items()}
                for env, files in self.envs.items()
            }
        }

    @property
    def total_changes(self) -> int:
        return sum(len(diff.diffs) for files in self.envs.values() for diff in files.values())


class CrossEnvResult(BaseModel):
    """Differences between pt and prod at one revision, per file."""

    mode: Literal["cross_env"] = "cross_env"
    diffs: Dict[str, FileDiff] = Field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "diffs": {name: diff.to_payload(CROSS_ENV_LABELS) for name, diff in self.diffs.items()}
        }

    @property
    def total_changes(self) -> int:
        return sum(len(diff.diffs) for diff in self.diffs.values())


ComparisonResult = Annotated[Union[TemporalResult, CrossEnvResult], Field(discriminator="mode")]

comparison_result_adapter = TypeAdapter(ComparisonResult)


def render_result(result: ComparisonResult) -> str:
    """Serialize a comparison result as pretty-printed JSON."""
    return json.dumps(result.to_payload(), indent=2, ensure_ascii=False)
