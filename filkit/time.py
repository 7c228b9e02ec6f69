"""Time expressions of the form ``G+n`` and differences between them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .expr import Concrete, Expr

if TYPE_CHECKING:
    from .binding import Binding


@dataclass(frozen=True)
class Time:
    """An event shifted by an offset expression, e.g. ``G+1+k``."""

    event: str
    offset: Expr = field(default_factory=Concrete)

    @classmethod
    def unit(cls, event: str, state: int) -> "Time":
        """The time ``state`` cycles after ``event``."""
        return cls(event, Concrete(state))

    def resolve_event(self, bindings: "Binding[Time]") -> "Time":
        """Replace the event with its binding and add this offset to it."""
        bound = bindings.get(self.event)
        return Time(bound.event, bound.offset + self.offset)

    def resolve_expr(self, binding: "Binding[Expr]") -> "Time":
        """Substitute parameters in the offset."""
        return Time(self.event, self.offset.resolve(binding))

    def __sub__(self, other: "Time") -> "TimeSub":
        if not isinstance(other, Time):
            return NotImplemented
        if self.event == other.event:
            return TimeUnit(self.offset - other.offset)
        return TimeSym(self, other)

    def __str__(self) -> str:
        return f"{self.event}+{self.offset}"


class TimeSub:
    """The difference between two time expressions."""

    __slots__ = ()

    def resolve_event(self, bindings: "Binding[Time]") -> "TimeSub":
        """Resolve the events mentioned in the difference."""
        raise NotImplementedError

    def resolve_expr(self, binding: "Binding[Expr]") -> "TimeSub":
        """Resolve the parameters mentioned in the difference."""
        raise NotImplementedError


@dataclass(frozen=True)
class TimeUnit(TimeSub):
    """A difference known as an expression over parameters."""

    expr: Expr

    def resolve_event(self, bindings: "Binding[Time]") -> "TimeUnit":
        return self

    def resolve_expr(self, binding: "Binding[Expr]") -> "TimeUnit":
        return TimeUnit(self.expr.resolve(binding))


@dataclass(frozen=True)
class TimeSym(TimeSub):
    """A symbolic difference between times over distinct events."""

    l: Time
    r: Time

    def resolve_event(self, bindings: "Binding[Time]") -> TimeSub:
        return self.l.resolve_event(bindings) - self.r.resolve_event(bindings)

    def resolve_expr(self, binding: "Binding[Expr]") -> TimeSub:
        return self.l.resolve_expr(binding) - self.r.resolve_expr(binding)