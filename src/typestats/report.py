from __future__ import annotations

import datetime
import sys
from pathlib import Path
from typing import Any, TextIO

import yaml

from . import models
from .aggregate import HierarchyStats
from .errors import SinkWriteError
from .ranking import format_ranking, rank

REPORT_LABELS = ("1a", "1b", "2a", "2b", "3", "4")

METRIC_TITLES = {
    "1a": "Declared fields",
    "1b": "All fields",
    "2a": "Declared methods",
    "2b": "All methods",
    "3": "Subtypes",
    "4": "Supertypes",
}

SCHEMA_VERSION = "1.0"


def build_report_lines(stats: HierarchyStats, limit: int) -> list[str]:
    """One ``"<label>: <ranking>"`` line per metric, in label order."""
    metrics = stats.metrics()
    return [
        f"{label}: {format_ranking(rank(metrics[label], limit))}"
        for label in REPORT_LABELS
    ]


def build_report_document(
    stats: HierarchyStats,
    limit: int,
    *,
    source: models.SourceKind,
    input_path: str | None = None,
    config: dict[str, Any] | None = None,
) -> models.StatsReport:
    metrics = stats.metrics()
    records = [
        models.MetricRecord(
            label=label,
            title=METRIC_TITLES[label],
            entries=[
                models.RankedEntry(name=name, count=count)
                for name, count in rank(metrics[label], limit)
            ],
        )
        for label in REPORT_LABELS
    ]

    generated = datetime.datetime.now(datetime.timezone.utc)
    meta = models.Metadata(
        schema_version=SCHEMA_VERSION,
        generated_at=generated.isoformat().replace("+00:00", "Z"),
        source=source,
        input_path=input_path,
        limit=limit,
        types_analyzed=len(stats.fields_declared),
        config_effective=dict(config or {}),
    )
    return models.StatsReport(meta=meta, metrics=records)


# --- Sinks ---


def write_lines(lines: list[str], path: str | Path) -> Path:
    """Writes the report lines to ``path``, creating parent directories."""
    out_p = Path(path)
    try:
        out_p.parent.mkdir(parents=True, exist_ok=True)
        with open(out_p, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
    except OSError as e:
        raise SinkWriteError(f"Error writing to output file {out_p}: {e}") from e
    return out_p.resolve()


def write_yaml(document: models.StatsReport, path: str | Path) -> Path:
    out_p = Path(path)
    try:
        out_p.parent.mkdir(parents=True, exist_ok=True)
        with open(out_p, "w", encoding="utf-8") as f:
            _yaml_dump_no_alias(dict(document), f)
    except OSError as e:
        raise SinkWriteError(f"Error writing to output file {out_p}: {e}") from e
    return out_p.resolve()


def print_lines(lines: list[str], stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    for line in lines:
        print(line, file=stream)


def dump_yaml(document: models.StatsReport, stream: TextIO | None = None) -> None:
    _yaml_dump_no_alias(dict(document), stream or sys.stdout)


def _yaml_dump_no_alias(data: Any, stream: Any) -> None:
    class NoAliasDumper(yaml.SafeDumper):
        def ignore_aliases(self, data):
            return True

    yaml.dump(data, stream, Dumper=NoAliasDumper, sort_keys=False, allow_unicode=True)
