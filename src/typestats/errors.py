class TypeStatsError(Exception):
    """Base class for all typestats failures."""


class TypeResolutionError(TypeStatsError, LookupError):
    """A type name could not be resolved to a class."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class SourceReadError(TypeStatsError, OSError):
    """The input resource listing type names could not be read."""


class SinkWriteError(TypeStatsError, OSError):
    """The report destination could not be written."""


class UsageError(TypeStatsError, ValueError):
    """Invalid command-line arguments."""


class InvalidArgumentError(TypeStatsError, ValueError):
    """An argument outside the accepted domain (e.g. a negative limit)."""


class CorruptHierarchyError(TypeStatsError, RuntimeError):
    """The ancestor graph is deeper than allowed, most likely cyclic."""

    def __init__(self, start: str, depth: int) -> None:
        super().__init__(
            f"Ancestor chain of '{start}' exceeds depth {depth}; "
            "the hierarchy is cyclic or corrupt."
        )
        self.start = start
        self.depth = depth


class ConfigError(TypeStatsError, ValueError):
    """Configuration file missing or malformed."""
