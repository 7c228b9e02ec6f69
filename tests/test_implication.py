from filkit.binding import Binding
from filkit.constraint import OrderConstraint
from filkit.expr import Abstract, Concrete
from filkit.implication import Implication
from filkit.loc import Loc


def _param(name):
    return Abstract(Loc.unknown(name))


def test_implies_sets_guard():
    guard = OrderConstraint.gt(_param("N"), Concrete(0))
    cons = OrderConstraint.gte(_param("M"), Concrete(1))
    imp = Implication.implies(guard, cons)
    assert imp.guard == guard
    assert imp.cons == cons


def test_fact_has_no_guard():
    cons = OrderConstraint.eq(_param("N"), Concrete(2))
    assert Implication.fact(cons).guard is None


def test_iff_gives_both_directions():
    a = OrderConstraint.gt(_param("A"), Concrete(0))
    b = OrderConstraint.gt(_param("B"), Concrete(0))
    forward, backward = Implication.iff(a, b)
    assert forward == Implication.implies(a, b)
    assert backward == Implication.implies(b, a)


def test_resolve_expr_resolves_guard_and_cons():
    imp = Implication.implies(
        OrderConstraint.gt(_param("N"), Concrete(0)),
        OrderConstraint.eq(_param("N"), Concrete(5)),
    )
    resolved = imp.resolve_expr(Binding([("N", Concrete(5))]))
    assert resolved.guard == OrderConstraint.gt(Concrete(5), Concrete(0))
    assert resolved.cons == OrderConstraint.eq(Concrete(5), Concrete(5))


def test_resolve_expr_keeps_missing_guard():
    imp = Implication.fact(OrderConstraint.gt(_param("N"), Concrete(0)))
    assert imp.resolve_expr(Binding([("N", Concrete(1))])).guard is None


def test_exprs_guard_first():
    a, b, c, d = (_param(n) for n in "ABCD")
    imp = Implication.implies(OrderConstraint.gt(a, b), OrderConstraint.eq(c, d))
    assert imp.exprs() == [a, b, c, d]


def test_exprs_without_guard():
    a, b = _param("A"), _param("B")
    assert Implication.fact(OrderConstraint.gte(a, b)).exprs() == [a, b]