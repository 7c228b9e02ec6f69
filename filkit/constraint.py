"""Ordering constraints over expressions, times and time differences."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .expr import Expr
from .time import TimeSub

if TYPE_CHECKING:
    from .binding import Binding
    from .time import Time

T = TypeVar("T")


class OrderOp(enum.Enum):
    """Ordering operator of a constraint."""

    GT = ">"
    GTE = ">="
    EQ = "="

    def __str__(self) -> str:
        return self.value


def _resolve_expr_in(value: Any, binding: "Binding[Expr]") -> Any:
    if isinstance(value, Expr):
        return value.resolve(binding)
    return value.resolve_expr(binding)


@dataclass(frozen=True)
class OrderConstraint(Generic[T]):
    """The constraint ``left op right``."""

    left: T
    right: T
    op: OrderOp

    def is_eq(self) -> bool:
        """True for an equality constraint."""
        return self.op is OrderOp.EQ

    @classmethod
    def gt(cls, left: T, right: T) -> "OrderConstraint[T]":
        return cls(left, right, OrderOp.GT)

    @classmethod
    def lt(cls, left: T, right: T) -> "OrderConstraint[T]":
        """``left < right``, stored as ``right > left``."""
        return cls(right, left, OrderOp.GT)

    @classmethod
    def eq(cls, left: T, right: T) -> "OrderConstraint[T]":
        return cls(left, right, OrderOp.EQ)

    @classmethod
    def gte(cls, left: T, right: T) -> "OrderConstraint[T]":
        return cls(left, right, OrderOp.GTE)

    @classmethod
    def lte(cls, left: T, right: T) -> "OrderConstraint[T]":
        """``left <= right``, stored as ``right >= left``."""
        return cls(right, left, OrderOp.GTE)

    def resolve_expr(self, binding: "Binding[Expr]") -> "OrderConstraint[T]":
        """Substitute parameters on both sides."""
        return OrderConstraint(
            _resolve_expr_in(self.left, binding),
            _resolve_expr_in(self.right, binding),
            self.op,
        )

    def resolve_event(self, bindings: "Binding[Time]") -> "OrderConstraint[T]":
        """Substitute events on both sides; only for time constraints."""
        if isinstance(self.left, Expr) or isinstance(self.right, Expr):
            raise TypeError("expression constraints do not mention events")
        return OrderConstraint(
            self.left.resolve_event(bindings),
            self.right.resolve_event(bindings),
            self.op,
        )

    def exprs(self) -> list[T]:
        """Both sides of the constraint."""
        return [self.left, self.right]

    def __str__(self) -> str:
        return f"{self.left}{self.op}{self.right}"


@dataclass(frozen=True)
class Constraint:
    """An ordering over time expressions or over time differences."""

    base: OrderConstraint[Any]

    @property
    def is_sub(self) -> bool:
        """True when the constraint orders time differences."""
        return isinstance(self.base.left, TimeSub)

    @classmethod
    def lt(cls, left: "Time", right: "Time") -> "Constraint":
        """The constraint ``left < right``."""
        return cls(OrderConstraint.lt(left, right))

    def resolve_event(self, bindings: "Binding[Time]") -> "Constraint":
        return Constraint(self.base.resolve_event(bindings))

    def resolve_expr(self, binding: "Binding[Expr]") -> "Constraint":
        return Constraint(self.base.resolve_expr(binding))