import pytest

from filkit.loc import Loc


def test_unknown_has_no_position():
    loc = Loc.unknown("x")
    assert loc.pos is None
    assert loc.split() == ("x", None)


def test_equality_ignores_position():
    a = Loc("a", 3)
    b = Loc("a", 7)
    assert a == b
    assert hash(a) == hash(b)


def test_different_values_are_not_equal():
    assert (Loc("a", 1) == Loc("b", 1)) is False
    assert Loc("a", 1) == Loc.unknown("a")


def test_map_keeps_position():
    mapped = Loc(2, 5).map(str)
    assert mapped.split() == ("2", 5)


def test_take_returns_inner():
    assert Loc([1, 2], 9).take() == [1, 2]


def test_str_delegates_to_inner():
    assert str(Loc("abc", 1)) == "abc"


def test_ordering_uses_inner():
    assert Loc(1, 9) < Loc(2, 0)
    assert not (Loc(2, 0) < Loc(1, 9))


def test_position_can_be_updated():
    loc = Loc.unknown("w")
    loc.pos = 4
    assert loc.split() == ("w", 4)


def test_usable_as_dict_key_regardless_of_position():
    table = {Loc("k", 1): "value"}
    assert table[Loc("k", 99)] == "value"
    with pytest.raises(KeyError):
        table[Loc("other", 1)]