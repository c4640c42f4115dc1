"""Tests for the scoped current context.

``activate`` pushes a context for a ``with`` block; ``current`` reads
the innermost one back.
"""

import asyncio
import threading

import pytest

from ctxenv.context import background
from ctxenv.environ import getenv, setenv
from ctxenv.scope import activate, current


class TestCurrent:
    """Verify push/pop behaviour."""

    def test_defaults_to_background(self) -> None:
        """With nothing active, current is the root."""
        assert current() is background()

    def test_activate_sets_current(self) -> None:
        """Inside the block the activated context is current."""
        ctx = setenv(background(), "MODE", "test")
        with activate(ctx) as active:
            assert active is ctx
            assert getenv(current(), "MODE") == "test"
        assert current() is background()

    def test_nesting_restores_outer(self) -> None:
        """Leaving an inner block brings back the outer context."""
        outer = setenv(background(), "LEVEL", "outer")
        inner = setenv(outer, "LEVEL", "inner")
        with activate(outer):
            with activate(inner):
                assert getenv(current(), "LEVEL") == "inner"
            assert getenv(current(), "LEVEL") == "outer"

    def test_restored_after_exception(self) -> None:
        """An exception inside the block still pops the context."""
        ctx = setenv(background(), "X", "1")
        with pytest.raises(RuntimeError), activate(ctx):
            msg = "boom"
            raise RuntimeError(msg)
        assert current() is background()


class TestScopeIsolation:
    """Verify that threads and tasks keep separate current contexts."""

    def test_other_thread_sees_background(self) -> None:
        """A new thread does not inherit this thread's active context."""
        seen: list[str] = []

        def read() -> None:
            seen.append(getenv(current(), "WHO"))

        with activate(setenv(background(), "WHO", "main")):
            thread = threading.Thread(target=read)
            thread.start()
            thread.join()
        assert seen == [""]

    def test_tasks_are_isolated(self) -> None:
        """Concurrent asyncio tasks each see their own context."""

        async def run(name: str) -> str:
            with activate(setenv(background(), "WHO", name)):
                await asyncio.sleep(0)
                return getenv(current(), "WHO")

        async def main() -> list[str]:
            return await asyncio.gather(run("a"), run("b"))

        assert asyncio.run(main()) == ["a", "b"]
