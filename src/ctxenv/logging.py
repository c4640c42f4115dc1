"""Audit trail for context-local environment changes.

When a test or request handler overrides ``DATABASE_URL`` five calls
deep, it is hard to tell afterwards where the override came from.
Attach a ``Logger`` to a context with ``with_logger`` and every
``with_environ`` / ``setenv`` / ``clearenv`` made *below* that point
appends an entry to it.

The logger is opt-in and never global: a context chain without one
records nothing.  Entries name the variable involved but never its
value, since environment values are often credentials.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from ctxenv.context import ContextKey

if TYPE_CHECKING:
    from ctxenv.context import Context

_LOGGER_KEY = ContextKey("ctxenv.logger")


class LogLevel(IntEnum):
    """How noteworthy an environment change is.

    DEBUG covers single-variable edits, INFO whole-table replacement,
    WARNING entries that can never be looked up.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One recorded environment change.

    Attributes:
        level: How noteworthy the change is.
        message: What changed, without any variable value.
        source: Which component recorded it (``"ctxenv"`` for ours).
        key: The variable name, when the change concerns one variable.

    """

    level: LogLevel
    message: str
    source: str
    key: str | None = None

    def __str__(self) -> str:
        """Render as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Collects ``LogEntry`` records for one context chain.

    Appending is the only mutation; readers get copies.
    """

    def __init__(self) -> None:
        """Start with no entries."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every entry, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        key: str | None = None,
    ) -> None:
        """Record one change; *key* names the variable, if there is one."""
        self._entries.append(LogEntry(level=level, message=message, source=source, key=key))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        key: str | None = None,
    ) -> list[LogEntry]:
        """Return the entries satisfying every criterion that is given."""
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
            and (key is None or entry.key == key)
        ]

    def clear(self) -> None:
        """Forget every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return how many entries have been recorded."""
        return len(self._entries)


def with_logger(ctx: Context, logger: Logger) -> Context:
    """Return a child of *ctx* whose environment changes go to *logger*.

    Unlike the rest of a context, *logger* is mutable: derivations made
    from the returned context (or its descendants) append to it.  Share
    it between threads only if interleaved entries are acceptable.
    """
    return ctx.with_value(_LOGGER_KEY, logger)


def logger_from(ctx: Context) -> Logger | None:
    """Return the nearest logger attached above *ctx*, or None."""
    found = ctx.value(_LOGGER_KEY)
    return found if isinstance(found, Logger) else None
