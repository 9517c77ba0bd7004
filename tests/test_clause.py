from types import SimpleNamespace

import pytest

from jigsat.clause import Clause, SubsumptionKind
from jigsat.lit import Lit


def pos(i):
    return Lit.new(i, True)


def neg(i):
    return Lit.new(i, False)


def test_new_clause_defaults():
    c = Clause([pos(0), neg(1)])
    assert not c.deleted
    assert c.can_be_deleted
    assert c.mark == 0
    assert c.lbd == 0
    assert c.search == 1
    assert not c.is_marked()
    assert c.abstraction == Clause.calc_abstraction([pos(0), neg(1)])


@pytest.mark.parametrize("idx", [0, 5, 31, 32, 70])
def test_abstraction_matches_abstract_level(idx):
    lit = pos(idx)
    levels = list(range(idx + 1))
    assert Clause.calc_abstraction([lit]) == lit.abstract_level(levels)


def test_abstraction_wraps_at_32():
    assert Clause.calc_abstraction([pos(33)]) == Clause.calc_abstraction([neg(1)])


def test_len_getitem_setitem_iter_swap():
    c = Clause([pos(0), neg(1), pos(2)])
    assert len(c) == 3
    assert c[1] == neg(1)
    c[1] = pos(5)
    assert list(c) == [pos(0), pos(5), pos(2)]
    c.swap(0, 2)
    assert list(c) == [pos(2), pos(5), pos(0)]


def test_display():
    assert str(Clause([pos(0), neg(1)])) == "(   0 ∧ ¬   1)"
    assert str(Clause([])) == "()"


def _clause(n, lbd):
    c = Clause([pos(i) for i in range(n)])
    c.lbd = lbd
    return c


def test_less_than_binary_first():
    assert _clause(2, 9).less_than(_clause(5, 1)) == -1
    assert _clause(5, 1).less_than(_clause(2, 9)) == 1
    assert _clause(2, 1).less_than(_clause(2, 7)) == 0


def test_less_than_lbd_then_length():
    assert _clause(5, 2).less_than(_clause(3, 4)) == -1
    assert _clause(3, 4).less_than(_clause(5, 2)) == 1
    assert _clause(3, 4).less_than(_clause(5, 4)) == -1
    assert _clause(5, 4).less_than(_clause(3, 4)) == 1
    assert _clause(4, 4).less_than(_clause(4, 4)) == 0


def test_check_clause_invariant():
    assert Clause([pos(0), neg(2)]).check_clause_invariant(3)
    assert not Clause([pos(0), neg(3)]).check_clause_invariant(3)
    assert not Clause([pos(0), neg(0)]).check_clause_invariant(3)
    assert not Clause([pos(1), pos(1)]).no_duplicates()
    assert Clause([pos(1), pos(2)]).no_duplicates()


def test_subsumes_subset():
    small = Clause([pos(0), neg(1)])
    big = Clause([neg(1), pos(2), pos(0)])
    assert small.subsumes(big).kind is SubsumptionKind.SUBSUMED


def test_subsumes_with_one_negated_literal():
    small = Clause([pos(0), neg(1)])
    big = Clause([pos(0), pos(1), pos(2)])
    res = small.subsumes(big)
    assert res.kind is SubsumptionKind.REMOVE_LIT
    assert res.lit == neg(1)


def test_subsumes_two_negated_is_no_subsumption():
    small = Clause([neg(0), neg(1)])
    big = Clause([pos(0), pos(1), pos(2)])
    assert small.subsumes(big).kind is SubsumptionKind.NO_SUBSUMPTION


def test_no_subsumption_when_other_shorter_or_disjoint():
    a = Clause([pos(0), pos(1), pos(2)])
    b = Clause([pos(0), pos(1)])
    assert a.subsumes(b).kind is SubsumptionKind.NO_SUBSUMPTION
    c = Clause([pos(3), pos(4), pos(5)])
    assert b.subsumes(c).kind is SubsumptionKind.NO_SUBSUMPTION


def test_remove_swaps_last_in():
    c = Clause([pos(0), pos(1), pos(2), pos(3)])
    c.remove(pos(1))
    assert c.lits == [pos(0), pos(3), pos(2)]
    c.remove(pos(9))
    assert c.lits == [pos(0), pos(3), pos(2)]


def test_strengthen_updates_abstraction():
    c = Clause([pos(0), neg(1), pos(2)])
    c.strengthen(neg(1))
    assert neg(1) not in c.lits
    assert len(c) == 2
    assert c.abstraction == Clause.calc_abstraction(c.lits)


def test_calc_lbd_counts_distinct_levels():
    levels = [1, 1, 3, 0]
    c = Clause([pos(0), neg(1), pos(2), pos(3)])
    perm_diff = [0] * 4
    lbd = c.calc_lbd(levels, perm_diff, 7)
    assert lbd == len(set(levels))
    assert all(perm_diff[level] == 7 for level in levels)
    # A second pass with the same conflict count finds nothing new.
    assert c.calc_lbd(levels, perm_diff, 7) == 0


def test_calc_and_set_lbd():
    trail = SimpleNamespace(lit_to_level=[2, 2, 4])
    solver = SimpleNamespace(perm_diff=[0] * 5, num_conflicts=1)
    c = Clause([pos(0), pos(1), neg(2)])
    c.calc_and_set_lbd(trail, solver)
    assert c.lbd == len({2, 4})