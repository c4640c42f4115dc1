"""Context-local environment variables.

``os.environ`` is one table shared by the whole process.  Tests that
tweak it step on each other, and a library that reads it cannot be
given a different value for one call without changing it for everyone.

This module lets a ``Context`` carry its own environment table:

    - **Fallback** — a context with no local table reads the real
      process environment, so callers that don't care about contexts
      keep working unchanged.
    - **Override** — ``setenv`` / ``with_environ`` / ``clearenv`` return a
      *new* context carrying a local table.  The parent is untouched.
    - **Empty is not absent** — after ``clearenv`` every lookup returns
      ``""``; it does *not* fall back to the real environment.

Both sides only cooperate when they share a context, so this suits
callers and callees that already know about each other, such as a unit
test and the function it tests.

The real process environment is only ever read, never written.

One exception to "derivation never mutates shared state": when a
``Logger`` has been attached with ``with_logger``, ``with_environ``,
``setenv`` and ``clearenv`` append audit entries to it.  That logger is
the only mutable object reachable from a context, and only callers who
attach one opt into it.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ctxenv.context import ContextKey
from ctxenv.logging import LogLevel, logger_from
from ctxenv.table import EnvironTable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ctxenv.context import Context

_ENVIRON_KEY = ContextKey("ctxenv.environ")

_SOURCE = "ctxenv"


def _local_table(ctx: Context) -> EnvironTable | None:
    """Return the table attached to *ctx* or an ancestor, or None."""
    found = ctx.value(_ENVIRON_KEY)
    return found if isinstance(found, EnvironTable) else None


def _effective_table(ctx: Context) -> EnvironTable:
    """Return the local table, or a snapshot of the real environment."""
    table = _local_table(ctx)
    if table is None:
        return EnvironTable.from_process()
    return table


def _attach(ctx: Context, table: EnvironTable) -> Context:
    return ctx.with_value(_ENVIRON_KEY, table)


def environ(ctx: Context) -> list[str]:
    """Return the effective environment as ``NAME=value`` strings.

    The list is always a fresh copy owned by the caller.
    """
    return _effective_table(ctx).entries()


def getenv(ctx: Context, key: str) -> str:
    """Return the value of *key* in the effective environment.

    Missing keys give ``""``, so an unset variable and one set to the
    empty string look the same, just like ``os.getenv(key, "")``.
    """
    table = _local_table(ctx)
    if table is None:
        return os.environ.get(key, "")
    return table.get(key)


def with_environ(ctx: Context, entries: Iterable[str]) -> Context:
    """Return a child context whose environment is exactly *entries*.

    Any local environment further up the chain is ignored rather than
    merged.  *entries* is copied, so the caller may keep mutating it.
    """
    table = EnvironTable(entries)
    logger = logger_from(ctx)
    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"replaced local environment ({len(table)} entries)",
            source=_SOURCE,
        )
        for entry in table:
            if "=" not in entry:
                logger.log(
                    LogLevel.WARNING,
                    f"entry {entry!r} has no '=' and will never match a lookup",
                    source=_SOURCE,
                )
    return _attach(ctx, table)


def setenv(ctx: Context, key: str, value: str) -> Context:
    """Return a child context with *key* set to *value*.

    The child starts from the parent's effective environment.  Setting
    a variable to ``""`` removes it instead of storing an empty value.

    Every call copies the whole table, so this is meant for a few
    overrides at start-up, not for use in a tight loop.
    """
    table = _effective_table(ctx)
    present = table.index(key) != -1
    logger = logger_from(ctx)

    if not present and value == "":
        # Nothing to remove; the child shares the parent's (or the
        # snapshotted process) table unchanged.
        return _attach(ctx, table)

    if value == "":
        # Removing the last entry leaves an empty table, the same
        # state clearenv produces.
        if logger is not None:
            logger.log(LogLevel.DEBUG, f"unset {key}", source=_SOURCE, key=key)
        return _attach(ctx, table.unset(key))

    if logger is not None:
        action = "overrode" if present else "set"
        logger.log(LogLevel.DEBUG, f"{action} {key}", source=_SOURCE, key=key)
    return _attach(ctx, table.set(key, value))


def clearenv(ctx: Context) -> Context:
    """Return a child context whose environment is empty.

    Lookups on the child never fall back to the real environment.
    """
    logger = logger_from(ctx)
    if logger is not None:
        logger.log(LogLevel.INFO, "cleared local environment", source=_SOURCE)
    return _attach(ctx, EnvironTable())
