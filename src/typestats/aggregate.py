from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .descriptors import TypeDescriptor
from .hierarchy import HierarchyWalker, WalkResult


@dataclass
class HierarchyStats:
    """Per-run accumulator for the six structural metrics."""

    fields_declared: dict[str, int] = field(default_factory=dict)
    fields_all: dict[str, int] = field(default_factory=dict)
    methods_declared: dict[str, int] = field(default_factory=dict)
    methods_all: dict[str, int] = field(default_factory=dict)
    subtypes_total: Counter[str] = field(default_factory=Counter)
    supertypes_total: dict[str, int] = field(default_factory=dict)
    types_processed: int = 0

    def record(self, result: WalkResult) -> None:
        """Stores one type's counts, replacing any earlier entry for it."""
        self.fields_declared[result.name] = len(result.declared_fields)
        self.methods_declared[result.name] = len(result.declared_methods)
        self.fields_all[result.name] = len(result.fields)
        self.methods_all[result.name] = len(result.methods)
        self.supertypes_total[result.name] = len(result.supertypes)
        self.types_processed += 1

    def metrics(self) -> dict[str, dict[str, int]]:
        """The six mappings keyed by report label, in report order."""
        return {
            "1a": self.fields_declared,
            "1b": self.fields_all,
            "2a": self.methods_declared,
            "2b": self.methods_all,
            "3": dict(self.subtypes_total),
            "4": self.supertypes_total,
        }


def aggregate(
    types: Iterable[TypeDescriptor],
    *,
    walker: HierarchyWalker | None = None,
    stats: HierarchyStats | None = None,
) -> HierarchyStats:
    """
    Runs the hierarchy walker over every type, in order.

    A type listed twice is walked twice: its own counts are overwritten by the
    later walk while its ancestors' subtype counts grow on both.
    """
    walker = walker or HierarchyWalker()
    stats = stats if stats is not None else HierarchyStats()

    for desc in types:
        result = walker.walk(desc, stats.subtypes_total)
        stats.record(result)

    return stats
