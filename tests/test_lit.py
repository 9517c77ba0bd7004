from hypothesis import given
from hypothesis import strategies as st

from jigsat.lit import UNASSIGNED, Assignments, Lit

indices = st.integers(min_value=0, max_value=100_000)


@given(indices, st.booleans())
def test_new_round_trips_index_and_polarity(idx, polarity):
    lit = Lit.new(idx, polarity)
    assert lit.index() == idx
    assert lit.is_positive() == polarity


@given(indices, st.booleans())
def test_invert_is_involution_and_flips_polarity(idx, polarity):
    lit = Lit.new(idx, polarity)
    neg = ~lit
    assert ~neg == lit
    assert neg.index() == idx
    assert neg.is_positive() != polarity


@given(indices, st.booleans())
def test_neg_watchidx_is_watchidx_of_negation(idx, polarity):
    lit = Lit.new(idx, polarity)
    assert lit.to_neg_watchidx() == (~lit).to_watchidx()
    assert lit.to_watchidx() != lit.to_neg_watchidx()


@given(indices, st.booleans(), indices, st.booleans())
def test_select_other(i, p, j, q):
    a = Lit.new(i, p)
    b = Lit.new(j, q)
    assert a.select_other(a, b) == b
    assert b.select_other(a, b) == a


def test_check_lit_invariant():
    lit = Lit.new(4, True)
    assert lit.check_lit_invariant(5)
    assert not lit.check_lit_invariant(4)


def test_fresh_assignments_are_unset():
    a = Assignments(3)
    assert len(a) == 3
    lit = Lit.new(1, True)
    assert lit.lit_unset(a)
    assert (~lit).lit_unset(a)
    assert not lit.lit_set(a)
    assert not lit.lit_sat(a)
    assert not lit.lit_unsat(a)
    assert lit.get_curr_assigned_state(a) == UNASSIGNED
    assert not a.is_assigned(1)


@given(st.booleans())
def test_set_assignment_satisfies_literal(polarity):
    a = Assignments(4)
    lit = Lit.new(2, polarity)
    a.set_assignment(lit)
    assert a.is_assigned(2)
    assert lit.lit_sat(a)
    assert lit.lit_set(a)
    assert (~lit).lit_unsat(a)
    assert not (~lit).lit_sat(a)
    assert a[2] == int(polarity)
    assert not a.is_assigned(0)


def test_setitem_and_iter():
    a = Assignments(2)
    a[0] = 0
    assert list(a) == [0, UNASSIGNED]
    assert Lit.new(0, False).lit_sat(a)


@given(st.integers(min_value=0, max_value=10_000))
def test_abstract_level_depends_on_level_mod_32(level):
    lit = Lit.new(0, True)
    assert lit.abstract_level([level]) == lit.abstract_level([level % 32])
    assert lit.abstract_level([level]).bit_count() == 1


def test_abstract_level_of_zero_is_one():
    assert Lit.new(1, False).abstract_level([7, 0]) == 1


def test_lit_in_clause():
    lits = [Lit.new(0, True), Lit.new(2, False)]
    assert Lit.new(2, False).lit_in_clause(lits)
    assert not Lit.new(2, True).lit_in_clause(lits)
    assert not Lit.new(1, True).lit_in_clause(lits)


def test_display_format():
    assert str(Lit.new(4, False)) == "¬   4"
    assert str(Lit.new(4, True)) == "   4"
    assert repr(Lit.new(4, True)) == str(Lit.new(4, True))