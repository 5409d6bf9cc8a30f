"""
Type sources: produce the list of descriptors to analyze.

RuntimeTypeSource walks the interpreter's already-imported modules.
NameListTypeSource resolves fully-qualified names read from a text file.
"""

from __future__ import annotations

import pkgutil
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType
from typing import Any

import pathspec

from .console import ConsoleManager
from .descriptors import ClassDescriptor, DescriptorFactory
from .errors import SourceReadError, TypeResolutionError
from .models import SourceOutcome


def build_module_matcher(patterns: Iterable[str] | None) -> pathspec.PathSpec | None:
    patterns = list(patterns or ())
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def module_path(module_name: str) -> str:
    return module_name.replace(".", "/")


def is_private_module(module_name: str) -> bool:
    return any(part.startswith("_") for part in module_name.split("."))


def resolve_type_name(name: str) -> type:
    """
    Resolves ``pkg.module.Class`` (or ``pkg.module:Class.Inner``) to a class.

    Raises TypeResolutionError when the name does not import or does not
    denote a class.
    """
    try:
        obj = pkgutil.resolve_name(name)
    except (ImportError, AttributeError, ValueError) as e:
        raise TypeResolutionError(name, str(e) or type(e).__name__) from e
    except Exception as e:
        # Importing arbitrary modules runs their top-level code.
        raise TypeResolutionError(name, f"{type(e).__name__}: {e}") from e

    if not isinstance(obj, type):
        raise TypeResolutionError(name, f"not a class ({type(obj).__name__})")
    return obj


class RuntimeTypeSource:
    """Collects classes defined in the currently loaded modules."""

    def __init__(
        self,
        *,
        app_config: dict[str, Any],
        factory: DescriptorFactory,
        logger: ConsoleManager,
        modules: dict[str, ModuleType] | None = None,
    ) -> None:
        self._config = app_config
        self._factory = factory
        self._logger = logger
        self._modules = modules
        self._prefixes = tuple(app_config.get("module_prefixes") or ())
        self._matcher = build_module_matcher(app_config.get("exclude"))

    def load(self) -> tuple[list[ClassDescriptor], SourceOutcome]:
        outcome = SourceOutcome(kind="runtime")
        seen: set[type] = set()
        classes: list[type] = []

        # Snapshot: describing classes must not see modules imported meanwhile.
        snapshot = dict(self._modules if self._modules is not None else sys.modules)

        for mod_name in sorted(snapshot):
            module = snapshot[mod_name]
            if module is None or not self.should_scan(mod_name):
                continue
            try:
                found = self._classes_in(module)
            except Exception as e:
                self._logger.warning(f"Could not scan module {mod_name}: {e}")
                continue

            for cls in found:
                if cls in seen:
                    continue
                seen.add(cls)
                classes.append(cls)
                self._logger.debug(f"Loaded: {cls.__module__}.{cls.__qualname__}")

        outcome.types_found = len(classes)
        return self._factory.describe_all(classes), outcome

    def should_scan(self, mod_name: str) -> bool:
        top = mod_name.partition(".")[0]
        if self._prefixes:
            if not any(
                mod_name == p or mod_name.startswith(p.rstrip(".") + ".")
                for p in self._prefixes
            ):
                return False
        elif top not in sys.stdlib_module_names:
            return False

        if not self._config.get("include_private_modules") and is_private_module(
            mod_name
        ):
            return False

        if self._matcher and self._matcher.match_file(module_path(mod_name)):
            return False
        return True

    @staticmethod
    def _classes_in(module: ModuleType) -> list[type]:
        """
        Classes defined in ``module``, plus classes it re-exports from a
        private implementation module (``io.StringIO`` lives in ``_io``).
        """
        mod_name = module.__name__
        return [
            value
            for value in list(vars(module).values())
            if isinstance(value, type)
            and (
                value.__module__ == mod_name
                or is_private_module(value.__module__)
            )
        ]


class NameListTypeSource:
    """Resolves fully-qualified type names listed one per line in a file."""

    def __init__(
        self,
        path: str | Path,
        *,
        app_config: dict[str, Any],
        factory: DescriptorFactory,
        logger: ConsoleManager,
    ) -> None:
        self._path = Path(path)
        self._factory = factory
        self._logger = logger
        self._skip_suffixes = tuple(app_config.get("skip_suffixes") or ())
        self._skip_substrings = tuple(app_config.get("skip_substrings") or ())
        self._matcher = build_module_matcher(app_config.get("exclude"))

    def read_names(self) -> list[str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(
                f"An error occurred while reading {self._path}: {e}"
            ) from e

        names = []
        for line in raw:
            name = line.strip()
            if name and not name.startswith("#"):
                names.append(name)
        return names

    def is_skipped(self, name: str) -> bool:
        if name.endswith(self._skip_suffixes):
            return True
        if any(s in name for s in self._skip_substrings):
            return True
        return bool(self._matcher and self._matcher.match_file(module_path(name)))

    def load(self) -> tuple[list[ClassDescriptor], SourceOutcome]:
        outcome = SourceOutcome(kind="name_list")
        descriptors: list[ClassDescriptor] = []

        for name in self.read_names():
            if self.is_skipped(name):
                outcome.skipped.append(name)
                self._logger.info(f"Skipped non-type entry: {name}")
                continue

            try:
                cls = resolve_type_name(name)
            except TypeResolutionError as e:
                outcome.unresolved.append(name)
                self._logger.warning(f"Type not found: {e}")
                continue

            descriptors.append(self._factory.describe(cls))
            self._logger.debug(f"Loaded: {descriptors[-1].name}")

        outcome.types_found = len(descriptors)
        return descriptors, outcome
