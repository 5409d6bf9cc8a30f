from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

SourceKind = Literal["runtime", "name_list"]


class RankedEntry(TypedDict):
    name: str
    count: int


class MetricRecord(TypedDict):
    label: str
    title: str
    entries: list[RankedEntry]


class Metadata(TypedDict):
    schema_version: str
    generated_at: str
    source: SourceKind
    input_path: str | None
    limit: int
    types_analyzed: int
    config_effective: dict[str, Any]


class StatsReport(TypedDict):
    meta: Metadata
    metrics: list[MetricRecord]


@dataclass
class SourceOutcome:
    """What a type source produced, and what it had to leave out."""

    kind: SourceKind
    types_found: int = 0
    skipped: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    read_error: str | None = None


@dataclass
class RunReport:
    """Summary of one analysis run."""

    source: SourceOutcome
    types_processed: int = 0
    lines: list[str] = field(default_factory=list)
    document: StatsReport | None = None

    @property
    def has_results(self) -> bool:
        return bool(self.lines)
