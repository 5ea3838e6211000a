"""Closed catalogs of tech and notable strategies.

Catalog entries are interned into stable integer indices in catalog order. The
preset compiler works on those indices and keeps the string/display forms only
for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, TypeVar

NotableKey = tuple[int, int]

_K = TypeVar("_K", bound=Hashable)


def _intern(keys: Iterable[_K], *, label: str) -> dict[_K, int]:
    """Assign catalog indices and guard against duplicate entries."""

    index: dict[_K, int] = {}
    for key in keys:
        if key in index:
            raise ValueError(f"Duplicate {label} catalog entry: {key!r}")
        index[key] = len(index)
    return index


class TechCatalog:
    """Ordered, duplicate-free list of tech identifiers."""

    def __init__(self, names: Iterable[str]) -> None:
        """Initialize a catalog from tech names in canonical order."""

        self._keys: tuple[str, ...] = tuple(names)
        self._index = _intern(self._keys, label="tech")

    @property
    def keys(self) -> tuple[str, ...]:
        """Return tech names in catalog order."""

        return self._keys

    def index_of(self, name: str) -> int | None:
        """Return the catalog index for a tech name, or None when unknown."""

        return self._index.get(name)

    def name_at(self, index: int) -> str:
        """Return the tech name stored at a catalog index."""

        return self._keys[index]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)


@dataclass(frozen=True, slots=True)
class NotableEntry:
    """Catalog entry for a notable strategy.

    Attributes:
        room_id: Room identifier from the game data.
        notable_id: Notable identifier, unique within its room.
        room_name: Room display name.
        notable_name: Notable strategy display name.
    """

    room_id: int
    notable_id: int
    room_name: str
    notable_name: str

    @property
    def key(self) -> NotableKey:
        """Return the composite `(room_id, notable_id)` key."""

        return (self.room_id, self.notable_id)

    @property
    def label(self) -> str:
        """Return the `room: notable` label used in diagnostics."""

        return f"{self.room_name}: {self.notable_name}"


class NotableCatalog:
    """Ordered, duplicate-free list of notable strategies."""

    def __init__(self, entries: Iterable[NotableEntry]) -> None:
        """Initialize a catalog from entries in canonical order."""

        self._entries: tuple[NotableEntry, ...] = tuple(entries)
        self._index = _intern((entry.key for entry in self._entries), label="notable")

    @property
    def entries(self) -> tuple[NotableEntry, ...]:
        """Return entries in catalog order."""

        return self._entries

    @property
    def keys(self) -> tuple[NotableKey, ...]:
        """Return `(room_id, notable_id)` keys in catalog order."""

        return tuple(entry.key for entry in self._entries)

    def index_of(self, key: NotableKey) -> int | None:
        """Return the catalog index for a notable key, or None when unknown."""

        return self._index.get(key)

    def entry_at(self, index: int) -> NotableEntry:
        """Return the entry stored at a catalog index."""

        return self._entries[index]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[NotableEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True, slots=True)
class GameCatalog:
    """Read-only catalog provider consumed by the preset compiler.

    Attributes:
        tech: Canonical tech catalog.
        notables: Canonical notable strategy catalog.
    """

    tech: TechCatalog
    notables: NotableCatalog
