"""Backing store contract.

The cache never evicts anything. Whether and when a key is forgotten is up
to the store.
"""

from typing import Any, Hashable, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Store(Protocol):
    """Anything with ``add`` and ``get`` can back a cache."""

    def add(self, key: Hashable, value: Any) -> None:
        """Associate ``key`` with ``value``, overwriting any previous value."""
        ...

    def get(self, key: Hashable) -> Tuple[Any, bool]:
        """Return ``(value, True)`` if ``key`` is present, else ``(None, False)``."""
        ...


class NullStore:
    """A store that never remembers anything."""

    def add(self, key: Hashable, value: Any) -> None:
        return None

    def get(self, key: Hashable) -> Tuple[Any, bool]:
        return None, False
