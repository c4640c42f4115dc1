"""Scoped current context — for code that can't take a ``ctx`` argument.

Threading a context through every call is the clearest option, but
some call sites (callbacks, plugin hooks, third-party code) have fixed
signatures.  ``activate`` pushes a context for the duration of a
``with`` block and ``current`` reads it back:

    with activate(setenv(background(), "MODE", "test")):
        assert getenv(current(), "MODE") == "test"

The stack lives in a ``ContextVar``, so every thread and every asyncio
task sees its own current context.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from ctxenv.context import Context, background

if TYPE_CHECKING:
    from collections.abc import Iterator

_current: ContextVar[Context | None] = ContextVar("ctxenv_current", default=None)


def current() -> Context:
    """Return the innermost active context, or the background context."""
    ctx = _current.get()
    return background() if ctx is None else ctx


@contextmanager
def activate(ctx: Context) -> Iterator[Context]:
    """Make *ctx* the current context until the ``with`` block exits."""
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)
