"""Context carrier — an immutable chain of key-scoped values.

A context is a small linked list pointing *up* towards its parent.
Deriving a child never touches the parent, so a context can be shared
freely between threads and handed down through a call chain:

    root ──► child (key A) ──► grandchild (key B)

Looking up a key walks from the current node towards the root and
returns the nearest binding.  A child binding therefore *shadows* the
same key further up the chain without replacing it.

Design choices:
    - **Slots, no setters** — once built, a node cannot be reassigned.
    - **One key per node** — derivation is cheap and the chain stays
      short in practice (a handful of values per request).
    - **Identity keys** — ``ContextKey`` compares by identity, so two
      modules can never collide even if they pick the same name.
"""

from __future__ import annotations


class ContextError(Exception):
    """Raise when a context is used incorrectly."""


class ContextKey:
    """A sentinel key for storing values in a context.

    The name is only used in ``repr``; two keys with the same name are
    still distinct.
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        """Create a key labelled *name*."""
        self._name = name

    def __eq__(self, other: object) -> bool:
        """Match only this exact key object."""
        return self is other

    def __hash__(self) -> int:
        """Hash by identity, consistent with ``__eq__``."""
        return id(self)

    def __repr__(self) -> str:
        """Return ``ContextKey('name')``."""
        return f"ContextKey({self._name!r})"


class Context:
    """An immutable node in a chain of context values."""

    __slots__ = ("_key", "_parent", "_value")

    def __init__(
        self,
        parent: Context | None = None,
        key: object = None,
        value: object = None,
    ) -> None:
        """Create a node binding *key* to *value* below *parent*."""
        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute assignment — contexts are immutable."""
        msg = f"Context is immutable; cannot set {name!r}"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        """Reject attribute deletion — contexts are immutable."""
        msg = f"Context is immutable; cannot delete {name!r}"
        raise AttributeError(msg)

    @property
    def parent(self) -> Context | None:
        """Return the context this one was derived from."""
        return self._parent

    def with_value(self, key: object, value: object) -> Context:
        """Return a child context that maps *key* to *value*.

        Raises:
            ContextError: If *key* is None.

        """
        if key is None:
            msg = "Context key must not be None"
            raise ContextError(msg)
        return Context(self, key, value)

    def value(self, key: object) -> object | None:
        """Return the nearest value bound to *key*, or None.

        ``ContextKey`` lookups match by identity only, so a stored key
        with a permissive ``__eq__`` can never shadow them.
        """
        node: Context | None = self
        while node is not None:
            if isinstance(key, ContextKey):
                matched = node._key is key
            else:
                matched = node._key is not None and key == node._key
            if matched:
                return node._value
            node = node._parent
        return None

    def __repr__(self) -> str:
        """Return a short description including the chain depth."""
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        if self._key is None:
            return f"Context(depth={depth})"
        return f"Context(depth={depth}, key={self._key!r})"


_BACKGROUND = Context()


def background() -> Context:
    """Return the empty root context shared by all callers."""
    return _BACKGROUND
