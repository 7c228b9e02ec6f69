"""Values annotated with a source position."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(eq=False)
class Loc(Generic[T]):
    """A value together with the position it came from.

    Equality, ordering and hashing look only at the wrapped value; the
    position is carried along for diagnostics.
    """

    inner: T
    pos: int | None = None

    @classmethod
    def unknown(cls, inner: T) -> "Loc[T]":
        """Wrap a value that has no position information."""
        return cls(inner, None)

    def map(self, func: Callable[[T], U]) -> "Loc[U]":
        """Apply ``func`` to the wrapped value, keeping the position."""
        return Loc(func(self.inner), self.pos)

    def split(self) -> tuple[T, int | None]:
        """Return the wrapped value and its position."""
        return self.inner, self.pos

    def take(self) -> T:
        """Return the wrapped value, dropping the position."""
        return self.inner

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Loc):
            return self.inner == other.inner
        return NotImplemented

    def __lt__(self, other: "Loc[Any]") -> bool:
        if isinstance(other, Loc):
            return self.inner < other.inner
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.inner)

    def __str__(self) -> str:
        return str(self.inner)