from __future__ import annotations

import inspect
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

Visibility = Literal["public", "private", "dunder"]


def get_visibility(name: str) -> Visibility:
    if name.startswith("__") and name.endswith("__") and len(name) > 4:
        return "dunder"
    if name.startswith("_"):
        return "private"
    return "public"


@runtime_checkable
class TypeDescriptor(Protocol):
    """
    Read-only view of one type: its declared members and direct ancestors.

    The hierarchy walker only ever talks to this interface.
    """

    name: str

    def declared_field_names(self) -> set[str]: ...

    def declared_method_names(self) -> set[str]: ...

    def direct_superclass(self) -> TypeDescriptor | None: ...

    def direct_interfaces(self) -> Sequence[TypeDescriptor]: ...

    def is_member_private(self, name: str) -> bool: ...


@dataclass(eq=False)
class StaticType:
    """A type graph node described by plain data."""

    name: str
    fields: set[str] = field(default_factory=set)
    methods: set[str] = field(default_factory=set)
    superclass: StaticType | None = None
    interfaces: list[StaticType] = field(default_factory=list)
    private: set[str] = field(default_factory=set)

    def declared_field_names(self) -> set[str]:
        return set(self.fields)

    def declared_method_names(self) -> set[str]:
        return set(self.methods)

    def direct_superclass(self) -> StaticType | None:
        return self.superclass

    def direct_interfaces(self) -> Sequence[StaticType]:
        return tuple(self.interfaces)

    def is_member_private(self, name: str) -> bool:
        return name in self.private


class ClassDescriptor:
    """
    Adapter exposing a live Python class as a TypeDescriptor.

    The primary base (``__bases__[0]``) plays the superclass role, the
    remaining bases play the interface role. Member sets are read from the
    class's own ``__dict__`` and annotations; inherited members are left to
    the walker.
    """

    def __init__(self, cls: type, factory: DescriptorFactory) -> None:
        self._cls = cls
        self._factory = factory
        self.name = qualified_name(cls)
        self._fields: set[str] | None = None
        self._methods: set[str] | None = None

    def __repr__(self) -> str:
        return f"ClassDescriptor({self.name})"

    def declared_field_names(self) -> set[str]:
        if self._fields is None:
            self._split_members()
        return set(self._fields or ())

    def declared_method_names(self) -> set[str]:
        if self._methods is None:
            self._split_members()
        return set(self._methods or ())

    def direct_superclass(self) -> ClassDescriptor | None:
        bases = self._cls.__bases__
        if not bases:
            return None
        return self._factory.describe(bases[0])

    def direct_interfaces(self) -> Sequence[ClassDescriptor]:
        return tuple(self._factory.describe(b) for b in self._cls.__bases__[1:])

    def is_member_private(self, name: str) -> bool:
        return get_visibility(name) == "private"

    def _split_members(self) -> None:
        ignored = self._factory.ignored_members
        fields: set[str] = set()
        methods: set[str] = set()

        for name, value in vars(self._cls).items():
            if name in ignored:
                continue
            # A dunder set to None (``__hash__`` next to ``__eq__``) disables
            # the protocol rather than declaring a member.
            if value is None and get_visibility(name) == "dunder":
                continue
            if inspect.isroutine(value):
                methods.add(name)
            else:
                fields.add(name)

        # Annotation-only attributes (dataclass fields, protocols) have no
        # __dict__ entry of their own.
        try:
            annotations = inspect.get_annotations(self._cls)
        except Exception:
            annotations = {}
        fields.update(n for n in annotations if n not in ignored)

        self._fields = fields
        self._methods = methods


class DescriptorFactory:
    """
    Builds ClassDescriptors, memoized by class identity, so a class shared by
    many hierarchies has its members enumerated once per run.
    """

    def __init__(self, *, ignored_members: Iterable[str] = ()) -> None:
        self.ignored_members = frozenset(ignored_members)
        self._cache: dict[type, ClassDescriptor] = {}

    def describe(self, cls: type) -> ClassDescriptor:
        desc = self._cache.get(cls)
        if desc is None:
            desc = ClassDescriptor(cls, self)
            self._cache[cls] = desc
        return desc

    def describe_all(self, classes: Iterable[type]) -> list[ClassDescriptor]:
        return [self.describe(c) for c in classes]


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
