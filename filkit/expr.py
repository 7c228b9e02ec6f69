"""Integer expressions over abstract parameters."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

from .loc import Loc

if TYPE_CHECKING:
    from .binding import Binding

Id = str

_U64_MAX = 2**64 - 1


class ConcretizeError(ValueError):
    """Raised when an expression is not a concrete number."""


class Op(enum.Enum):
    """Binary operations over expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    def __str__(self) -> str:
        return self.value


class Fn(enum.Enum):
    """Built-in functions over integers."""

    POW2 = "pow2"
    LOG2 = "log2"
    SIN_BITS = "sin_bits"
    COS_BITS = "cos_bits"
    BIT_REV = "bit_rev"

    def __str__(self) -> str:
        return self.value

    def eval(self, args: Sequence[int]) -> int:
        """Evaluate the function on concrete arguments."""
        args = list(args)
        if len(args) != _ARITY[self]:
            raise ValueError(
                f"Function {self} did not expect {len(args)} arguments."
            )
        match self:
            case Fn.POW2:
                (n,) = args
                if n >= 64:
                    raise OverflowError(f"pow2({n}) does not fit in 64 bits")
                return 2**n
            case Fn.LOG2:
                (n,) = args
                return 0 if n == 0 else math.ceil(math.log2(float(n)))
            case Fn.SIN_BITS:
                num, den = args
                return _f32_bits(math.sin(2.0 * math.pi * num / den))
            case Fn.COS_BITS:
                num, den = args
                return _f32_bits(math.cos(2.0 * math.pi * num / den))
            case Fn.BIT_REV:
                n, numbits = args
                rev = 0
                for _ in range(numbits):
                    rev = ((rev << 1) | (n & 1)) & _U64_MAX
                    n >>= 1
                return rev
        raise AssertionError(f"unhandled function {self}")


_ARITY = {
    Fn.POW2: 1,
    Fn.LOG2: 1,
    Fn.SIN_BITS: 2,
    Fn.COS_BITS: 2,
    Fn.BIT_REV: 2,
}


def _f32_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _coerce(value: Any) -> "Expr | None":
    if isinstance(value, Expr):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Concrete(value)
    return None


def _is_const(expr: "Expr", n: int) -> bool:
    return isinstance(expr, Concrete) and expr.value == n


class Expr:
    """An expression over integers and abstract parameters."""

    __slots__ = ()

    def resolve(self, binding: "Binding[Expr]") -> "Expr":
        """Substitute bound abstract variables and simplify."""
        return self

    def to_int(self) -> int:
        """Return the concrete value or raise ConcretizeError."""
        raise ConcretizeError(f"Cannot concretize `{self}'")

    def __add__(self, other: Any) -> "Expr":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        if _is_const(self, 0):
            return rhs
        if _is_const(rhs, 0):
            return self
        if isinstance(self, Concrete) and isinstance(rhs, Concrete):
            return Concrete(self.value + rhs.value)
        return BinOp(Op.ADD, self, rhs)

    def __sub__(self, other: Any) -> "Expr":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        if _is_const(rhs, 0):
            return self
        if isinstance(self, Concrete) and isinstance(rhs, Concrete):
            if self.value >= rhs.value:
                return Concrete(self.value - rhs.value)
            return BinOp(Op.SUB, Concrete(self.value), Concrete(rhs.value))
        return BinOp(Op.SUB, self, rhs)

    def __mul__(self, other: Any) -> "Expr":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        if _is_const(self, 0) or _is_const(rhs, 0):
            return Concrete(0)
        if _is_const(self, 1):
            return rhs
        if _is_const(rhs, 1):
            return self
        if isinstance(self, Concrete) and isinstance(rhs, Concrete):
            return Concrete(self.value * rhs.value)
        return BinOp(Op.MUL, self, rhs)

    def __truediv__(self, other: Any) -> "Expr":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        if _is_const(self, 0):
            return Concrete(0)
        if _is_const(rhs, 1):
            return self
        if isinstance(self, Concrete) and isinstance(rhs, Concrete):
            return Concrete(self.value // rhs.value)
        return BinOp(Op.DIV, self, rhs)

    def __mod__(self, other: Any) -> "Expr":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        if _is_const(self, 0) or _is_const(rhs, 1):
            return Concrete(0)
        if isinstance(self, Concrete) and isinstance(rhs, Concrete):
            return Concrete(self.value % rhs.value)
        return BinOp(Op.MOD, self, rhs)

    def __str__(self) -> str:
        return _render(self, _Ctx.ADD)


@dataclass(frozen=True)
class Concrete(Expr):
    """A 64-bit unsigned constant."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _U64_MAX:
            raise OverflowError(f"{self.value} is outside the 64-bit unsigned range")

    def to_int(self) -> int:
        return self.value


@dataclass(frozen=True)
class Abstract(Expr):
    """A named abstract parameter."""

    name: Loc[Id]

    def resolve(self, binding: "Binding[Expr]") -> Expr:
        found = binding.find(self.name.inner)
        return self if found is None else found


@dataclass(frozen=True)
class ParamAccess(Expr):
    """Access to a parameter of an instance: ``inst::param``."""

    inst: Loc[Id]
    param: Loc[Id]


@dataclass(frozen=True)
class App(Expr):
    """Application of a built-in function."""

    func: Fn
    args: tuple[Expr, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def resolve(self, binding: "Binding[Expr]") -> Expr:
        return App(self.func, tuple(arg.resolve(binding) for arg in self.args))


@dataclass(frozen=True)
class BinOp(Expr):
    """A binary operation that could not be simplified."""

    op: Op
    left: Expr
    right: Expr

    def resolve(self, binding: "Binding[Expr]") -> Expr:
        return make_op(self.op, self.left.resolve(binding), self.right.resolve(binding))


_OPERATORS: dict[Op, Callable[[Expr, Expr], Expr]] = {
    Op.ADD: Expr.__add__,
    Op.SUB: Expr.__sub__,
    Op.MUL: Expr.__mul__,
    Op.DIV: Expr.__truediv__,
    Op.MOD: Expr.__mod__,
}


def make_op(op: Op, left: Expr, right: Expr) -> Expr:
    """Combine two expressions with ``op``, simplifying where possible."""
    return _OPERATORS[op](left, right)


def from_sum(values: Iterable[int]) -> Concrete:
    """A constant holding the sum of ``values``."""
    return Concrete(sum(values))


class _Ctx(enum.IntEnum):
    ADD = 0
    MUL = 1
    FUNC = 2


_OP_CTX = {
    Op.ADD: _Ctx.ADD,
    Op.SUB: _Ctx.ADD,
    Op.MUL: _Ctx.MUL,
    Op.DIV: _Ctx.MUL,
    Op.MOD: _Ctx.MUL,
}


def _render(expr: Expr, ctx: _Ctx) -> str:
    match expr:
        case Concrete(value=value):
            return str(value)
        case Abstract(name=name):
            return str(name)
        case ParamAccess(inst=inst, param=param):
            return f"{inst}::{param}"
        case App(func=func, args=args):
            inner = ", ".join(_render(arg, _Ctx.FUNC) for arg in args)
            return f"{func}({inner})"
        case BinOp(op=op, left=left, right=right):
            inner_ctx = _OP_CTX[op]
            text = f"{_render(left, inner_ctx)}{op}{_render(right, inner_ctx)}"
            return f"({text})" if inner_ctx < ctx else text
    raise TypeError(f"cannot render {expr!r}")