import pytest

from filkit.binding import Binding
from filkit.constraint import Constraint, OrderConstraint, OrderOp
from filkit.expr import Abstract, Concrete
from filkit.loc import Loc
from filkit.time import Time, TimeSym, TimeUnit


def _param(name):
    return Abstract(Loc.unknown(name))


@pytest.mark.parametrize(
    "build, symbol",
    [
        (OrderConstraint.gt, ">"),
        (OrderConstraint.lt, ">"),
        (OrderConstraint.gte, ">="),
        (OrderConstraint.lte, ">="),
        (OrderConstraint.eq, "="),
    ],
)
def test_constructors_choose_operator(build, symbol):
    con = build(Concrete(1), _param("N"))
    assert str(con.op) == symbol


def test_lt_swaps_sides():
    a, b = Concrete(1), _param("N")
    assert OrderConstraint.lt(a, b) == OrderConstraint(b, a, OrderOp.GT)


def test_lte_swaps_sides():
    a, b = Concrete(1), _param("N")
    assert OrderConstraint.lte(a, b) == OrderConstraint(b, a, OrderOp.GTE)


def test_gt_gte_keep_sides():
    a, b = Concrete(1), _param("N")
    assert OrderConstraint.gt(a, b) == OrderConstraint(a, b, OrderOp.GT)
    assert OrderConstraint.gte(a, b) == OrderConstraint(a, b, OrderOp.GTE)


def test_is_eq():
    a, b = Concrete(1), Concrete(2)
    assert OrderConstraint.eq(a, b).is_eq()
    assert not OrderConstraint.gt(a, b).is_eq()


def test_resolve_expr_on_expressions():
    con = OrderConstraint.gt(_param("N"), Concrete(0))
    resolved = con.resolve_expr(Binding([("N", Concrete(8))]))
    assert resolved == OrderConstraint.gt(Concrete(8), Concrete(0))


def test_resolve_expr_on_times():
    con = OrderConstraint.gte(Time("G", _param("N")), Time("G"))
    resolved = con.resolve_expr(Binding([("N", Concrete(2))]))
    assert resolved.left == Time.unit("G", 2)
    assert resolved.op is OrderOp.GTE


def test_resolve_event_on_times():
    con = OrderConstraint.gt(Time.unit("G", 1), Time("G"))
    resolved = con.resolve_event(Binding([("G", Time("H"))]))
    assert resolved == OrderConstraint.gt(Time.unit("H", 1), Time("H"))


def test_resolve_event_on_expressions_raises():
    con = OrderConstraint.gt(Concrete(1), Concrete(0))
    with pytest.raises(TypeError):
        con.resolve_event(Binding())


def test_exprs_lists_both_sides():
    a, b = _param("A"), _param("B")
    assert OrderConstraint.eq(a, b).exprs() == [a, b]


def test_equal_constraints_hash_equal():
    cons = {OrderConstraint.gt(_param("N"), Concrete(0)) for _ in range(3)}
    assert len(cons) == 1


def test_constraint_lt_wraps_order_constraint():
    a, b = Time("G"), Time.unit("G", 1)
    con = Constraint.lt(a, b)
    assert con.base == OrderConstraint.lt(a, b)
    assert not con.is_sub


def test_constraint_sub_resolve_event():
    con = Constraint(OrderConstraint.gte(TimeSym(Time.unit("G", 3), Time("H")), TimeUnit(Concrete(1))))
    assert con.is_sub
    resolved = con.resolve_event(Binding([("G", Time("K")), ("H", Time("K"))]))
    assert resolved.base.left == TimeUnit(Concrete(3))


def test_constraint_sub_resolve_expr():
    con = Constraint(OrderConstraint.gt(TimeUnit(_param("N")), TimeUnit(Concrete(1))))
    resolved = con.resolve_expr(Binding([("N", Concrete(4))]))
    assert resolved.base.left == TimeUnit(Concrete(4))