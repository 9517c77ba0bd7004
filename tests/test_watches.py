from jigsat.clause import Clause
from jigsat.formula import Formula
from jigsat.lit import Lit
from jigsat.watches import Watcher, Watches, update_watch


def lit(n):
    return Lit.new(abs(n) - 1, n > 0)


def make_formula(num_vars, *clauses):
    formula = Formula(num_vars)
    for c in clauses:
        formula.add_unwatched_clause(Clause(lit(n) for n in c))
    return formula


def all_watchers(watches):
    return [(idx, w.cref, w.blocker) for idx in range(len(watches)) for w in watches[idx]]


def test_new_has_two_empty_lists_per_variable():
    watches = Watches(3)
    assert len(watches) == 6
    assert all(watches[i] == [] for i in range(6))


def test_init_watches_watches_negation_of_first_two_literals():
    formula = make_formula(3, [1, -2, 3], [2])
    watches = Watches(3)
    watches.init_watches(formula)
    assert watches[lit(1).to_neg_watchidx()] == [Watcher(0, lit(-2))]
    assert watches[lit(-2).to_neg_watchidx()] == [Watcher(0, lit(1))]
    assert len(all_watchers(watches)) == 2


def test_unwatch_removes_only_matching_clause():
    formula = make_formula(3, [1, 2], [1, 3])
    watches = Watches(3)
    watches.init_watches(formula)
    watches.unwatch(0, lit(1))
    assert [w.cref for w in watches[lit(1).to_neg_watchidx()]] == [1]
    assert [w.cref for w in watches[lit(2).to_neg_watchidx()]] == [0]


def test_unwatch_missing_clause_leaves_lists_alone():
    formula = make_formula(2, [1, 2])
    watches = Watches(2)
    watches.init_watches(formula)
    before = all_watchers(watches)
    watches.unwatch(5, lit(1))
    assert all_watchers(watches) == before


def test_unwatch_all_lemmas_keeps_original_clauses():
    formula = make_formula(4, [1, 2], [2, 3], [-1, 4])
    watches = Watches(4)
    watches.init_watches(formula)
    watches.unwatch_all_lemmas(1)
    remaining = all_watchers(watches)
    assert {cref for _, cref, _ in remaining} == {0}
    assert len(remaining) == 2


def test_update_watch_moves_watcher_to_new_literal():
    formula = make_formula(3, [1, 2, 3])
    watches = Watches(3)
    watches.init_watches(formula)
    false_lit = lit(-1)
    update_watch(formula, watches, 0, 0, 2, false_lit)
    assert watches[false_lit.to_watchidx()] == []
    assert watches[lit(3).to_neg_watchidx()] == [Watcher(0, lit(2))]
    assert len(all_watchers(watches)) == 2


def test_reset_clears_and_resizes():
    formula = make_formula(2, [1, 2])
    watches = Watches(2)
    watches.init_watches(formula)
    watches.reset(5)
    assert len(watches) == 10
    assert all_watchers(watches) == []