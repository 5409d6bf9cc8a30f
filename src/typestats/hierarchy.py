"""
Hierarchy walker: collects the members visible from a type and the ancestors
it inherits from.

Ancestors are reached by following both superclass and interface edges. The
walk enumerates paths, not nodes: an ancestor reachable along two paths (a
diamond) is counted once in the type's ancestor set but bumps its subtype
counter once per path. Reported subtype totals therefore mean "inheritance
paths ending at this type", which is the established meaning of metric 3.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .descriptors import TypeDescriptor
from .errors import CorruptHierarchyError

DEFAULT_MAX_DEPTH = 512


@dataclass
class WalkResult:
    """Member and ancestor sets computed for a single starting type."""

    name: str
    declared_fields: set[str] = field(default_factory=set)
    declared_methods: set[str] = field(default_factory=set)
    fields: set[str] = field(default_factory=set)
    methods: set[str] = field(default_factory=set)
    supertypes: set[str] = field(default_factory=set)


class HierarchyWalker:
    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def walk(
        self, start: TypeDescriptor, subtypes_total: Counter[str]
    ) -> WalkResult:
        """
        Walks every ancestor path of ``start``.

        ``subtypes_total`` is incremented once for each path that reaches an
        ancestor; the returned sets are deduplicated by name.
        """
        declared_fields = start.declared_field_names()
        declared_methods = start.declared_method_names()

        result = WalkResult(
            name=start.name,
            declared_fields=declared_fields,
            declared_methods=declared_methods,
            fields=set(declared_fields),
            methods=set(declared_methods),
        )

        stack: list[tuple[TypeDescriptor, int]] = [(start, 0)]
        while stack:
            current, depth = stack.pop()
            parents = self._parents_of(current)
            if parents and depth >= self._max_depth:
                raise CorruptHierarchyError(start.name, self._max_depth)

            for parent in parents:
                self._absorb(parent, result)
                subtypes_total[parent.name] += 1
                stack.append((parent, depth + 1))

        return result

    @staticmethod
    def _parents_of(desc: TypeDescriptor) -> list[TypeDescriptor]:
        parents: list[TypeDescriptor] = []
        superclass = desc.direct_superclass()
        if superclass is not None:
            parents.append(superclass)
        parents.extend(desc.direct_interfaces())
        return parents

    @staticmethod
    def _absorb(ancestor: TypeDescriptor, result: WalkResult) -> None:
        # Fields are inherited whatever their visibility; private methods are not.
        result.fields.update(ancestor.declared_field_names())
        result.methods.update(
            m
            for m in ancestor.declared_method_names()
            if not ancestor.is_member_private(m)
        )
        result.supertypes.add(ancestor.name)
