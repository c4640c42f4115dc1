"""Environment tables — ordered ``NAME=value`` assignment lists.

A process environment block is not really a dictionary.  It is a list
of ``NAME=value`` strings inherited from the parent process, and the C
library's ``getenv`` simply scans it from the front.  That has two
consequences we keep here:

    - **First match wins** — if ``PATH`` appears twice, the earlier
      entry is the one that lookups see.
    - **Order is preserved** — enumerating the table gives entries back
      in exactly the order they were supplied.

Entries that lack an ``=`` after the name are not rejected.  They are
simply never matched by a lookup, and they show up verbatim when the
table is enumerated.

Our ``EnvironTable`` is immutable: ``set`` and ``unset`` return a new
table and leave the original alone.  That is what lets a table be
shared between contexts without any locking.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping


def find_in_environ(entries: Iterable[str], key: str) -> tuple[int, str]:
    """Return ``(index, value)`` of the first assignment of *key*.

    Returns ``(-1, "")`` when *key* has no assignment.
    """
    prefix = key + "="
    for index, entry in enumerate(entries):
        if entry.startswith(prefix):
            return index, entry[len(prefix) :]
    return -1, ""


class EnvironTable:
    """An immutable, ordered environment block.

    Each instance owns its own tuple of entries, so handing one out can
    never expose another table's storage.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[str] = ()) -> None:
        """Create a table from *entries* (copied, not referenced).

        Raises:
            TypeError: If *entries* is a single string rather than a
                sequence of ``NAME=value`` strings.

        """
        if isinstance(entries, str):
            msg = "entries must be a sequence of 'NAME=value' strings, not a str"
            raise TypeError(msg)
        self._entries: tuple[str, ...] = tuple(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> EnvironTable:
        """Build a table from a ``{name: value}`` mapping."""
        return cls(f"{name}={value}" for name, value in mapping.items())

    @classmethod
    def from_process(cls) -> EnvironTable:
        """Snapshot the real process environment."""
        return cls.from_mapping(os.environ)

    def get(self, key: str) -> str:
        """Return the value of the first assignment of *key*, or ``""``."""
        _, value = find_in_environ(self._entries, key)
        return value

    def index(self, key: str) -> int:
        """Return the position of the first assignment of *key*, or -1."""
        index, _ = find_in_environ(self._entries, key)
        return index

    def set(self, key: str, value: str) -> EnvironTable:
        """Return a copy with *key* set to *value*.

        An existing assignment is overwritten where it stands; otherwise
        the new assignment goes on the end.
        """
        entries = list(self._entries)
        index = self.index(key)
        if index == -1:
            entries.append(f"{key}={value}")
        else:
            entries[index] = f"{key}={value}"
        return EnvironTable(entries)

    def unset(self, key: str) -> EnvironTable:
        """Return a copy without the first assignment of *key*."""
        index = self.index(key)
        if index == -1:
            return EnvironTable(self._entries)
        return EnvironTable(self._entries[:index] + self._entries[index + 1 :])

    def entries(self) -> list[str]:
        """Return all entries as a new list, in order."""
        return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        """Iterate over the entries in order."""
        return iter(self._entries)

    def __len__(self) -> int:
        """Return the number of entries (duplicates included)."""
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        """Compare entry-for-entry with another table."""
        if not isinstance(other, EnvironTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        """Hash by entries, consistent with ``__eq__``."""
        return hash(self._entries)

    def __repr__(self) -> str:
        """Return ``EnvironTable([...])``."""
        return f"EnvironTable({list(self._entries)!r})"
