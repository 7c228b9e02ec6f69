"""Guarded constraints of the form ``guard => cons``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .constraint import OrderConstraint

if TYPE_CHECKING:
    from .binding import Binding
    from .expr import Expr

T = TypeVar("T")


@dataclass(frozen=True)
class Implication(Generic[T]):
    """A constraint that holds whenever its optional guard holds."""

    cons: OrderConstraint[T]
    guard: OrderConstraint[T] | None = None

    @classmethod
    def implies(cls, guard: OrderConstraint[T], cons: OrderConstraint[T]) -> "Implication[T]":
        """The implication ``guard => cons``."""
        return cls(cons, guard)

    @classmethod
    def fact(cls, cons: OrderConstraint[T]) -> "Implication[T]":
        """An unguarded constraint that must always hold."""
        return cls(cons, None)

    @classmethod
    def iff(
        cls, left: OrderConstraint[T], right: OrderConstraint[T]
    ) -> tuple["Implication[T]", "Implication[T]"]:
        """The pair of implications for ``left <=> right``."""
        return cls.implies(left, right), cls.implies(right, left)

    def resolve_expr(self, binding: "Binding[Expr]") -> "Implication[T]":
        """Substitute parameters in the guard and the consequent."""
        guard = None if self.guard is None else self.guard.resolve_expr(binding)
        return Implication(self.cons.resolve_expr(binding), guard)

    def exprs(self) -> list[Any]:
        """Expressions of the guard, then of the consequent."""
        guard = [] if self.guard is None else self.guard.exprs()
        return guard + self.cons.exprs()