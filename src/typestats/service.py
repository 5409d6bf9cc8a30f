from __future__ import annotations

from pathlib import Path
from typing import Any

from . import models
from .aggregate import HierarchyStats, aggregate
from .console import ConsoleManager
from .descriptors import DescriptorFactory, TypeDescriptor
from .errors import SourceReadError
from .hierarchy import HierarchyWalker
from .ranking import validate_limit
from .report import build_report_document, build_report_lines, write_lines, write_yaml
from .sources import NameListTypeSource, RuntimeTypeSource


class TypeStatsService:
    """
    Runs one analysis: collect types, aggregate, rank, assemble the report.

    Every run builds its own descriptor cache and accumulator, so running the
    same service twice on unchanged input yields identical output.
    """

    def __init__(
        self,
        *,
        app_config: dict[str, Any],
        logger: ConsoleManager,
        input_path: str | Path | None = None,
    ) -> None:
        self._app_config = app_config
        self._logger = logger
        self._input_path = Path(input_path) if input_path is not None else None

    def collect_types(
        self, factory: DescriptorFactory
    ) -> tuple[list[TypeDescriptor], models.SourceOutcome]:
        if self._input_path is None:
            runtime_source = RuntimeTypeSource(
                app_config=self._app_config, factory=factory, logger=self._logger
            )
            found, outcome = runtime_source.load()
            return list(found), outcome

        name_source = NameListTypeSource(
            self._input_path,
            app_config=self._app_config,
            factory=factory,
            logger=self._logger,
        )
        try:
            types, outcome = name_source.load()
        except SourceReadError as e:
            self._logger.error(str(e))
            return [], models.SourceOutcome(kind="name_list", read_error=str(e))
        return list(types), outcome

    def analyze(self, types: list[TypeDescriptor]) -> HierarchyStats:
        walker = HierarchyWalker(max_depth=self._app_config.get("max_depth", 512))
        self._logger.debug(
            f"Walking {len(types)} hierarchies (depth guard {walker.max_depth})"
        )
        return aggregate(types, walker=walker)

    def run(self, limit: int) -> models.RunReport:
        validate_limit(limit)
        factory = DescriptorFactory(
            ignored_members=self._app_config.get("ignored_members") or ()
        )
        types, outcome = self.collect_types(factory)
        report = models.RunReport(source=outcome)

        if not types:
            return report

        self._logger.info(f"Found {len(types)} types")
        stats = self.analyze(types)
        report.types_processed = stats.types_processed

        # Both renderings are complete before any sink is touched.
        report.lines = build_report_lines(stats, limit)
        report.document = build_report_document(
            stats,
            limit,
            source=outcome.kind,
            input_path=str(self._input_path) if self._input_path else None,
            config=self._app_config,
        )
        return report

    def write_report(self, report: models.RunReport, path: str | Path) -> Path:
        if self._app_config.get("format") == "yaml" and report.document is not None:
            written = write_yaml(report.document, path)
        else:
            written = write_lines(report.lines, path)
        self._logger.info(f"Output written to {written}")
        return written
