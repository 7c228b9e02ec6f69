"""Ordered bindings from names to values."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class MissingBindingError(LookupError):
    """Raised when a name has no binding."""


class Binding(Generic[T]):
    """An insertion-ordered map from names to values.

    Re-inserting an existing name updates its value and moves it to the end.
    """

    __slots__ = ("_map",)

    def __init__(self, items: Iterable[tuple[str, T]] = ()) -> None:
        self._map: dict[str, T] = {}
        self.extend(items)

    def insert(self, name: str, value: T) -> None:
        """Bind ``name`` to ``value``."""
        self._map.pop(name, None)
        self._map[name] = value

    def find(self, name: str) -> T | None:
        """Return the value bound to ``name``, or None."""
        return self._map.get(name)

    def get(self, name: str) -> T:
        """Return the value bound to ``name`` or raise MissingBindingError."""
        try:
            return self._map[name]
        except KeyError:
            raise MissingBindingError(
                f"No binding for `{name}'. Binding: {self!r}"
            ) from None

    def values(self) -> Iterator[T]:
        """Iterate over the bound values in order."""
        return iter(self._map.values())

    def extend(self, other: Iterable[tuple[str, T]]) -> None:
        """Insert every pair from ``other``."""
        for name, value in other:
            self.insert(name, value)

    def is_empty(self) -> bool:
        """True when nothing is bound."""
        return not self._map

    def __getitem__(self, name: str) -> T:
        return self.get(name)

    def __iter__(self) -> Iterator[tuple[str, T]]:
        return iter(list(self._map.items()))

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, name: object) -> bool:
        return name in self._map

    def __repr__(self) -> str:
        body = ", ".join(f"{k}->{v}" for k, v in self._map.items())
        return f"[{body}]"