import pytest

from jigsat.clause import Clause
from jigsat.formula import Formula
from jigsat.lit import UNASSIGNED, Lit
from jigsat.trail import UNIT, UNSET_LEVEL, UNSET_REASON, Trail
from jigsat.watches import Watches


def lit(n):
    return Lit.new(abs(n) - 1, n > 0)


def make_formula(num_vars, *clauses):
    formula = Formula(num_vars)
    for c in clauses:
        formula.add_unwatched_clause(Clause(lit(n) for n in c))
    return formula


class RecordingDecisions:
    def __init__(self):
        self.inserted = []

    def insert(self, var):
        self.inserted.append(var)


class FixedPhase:
    def __init__(self, polarity):
        self.polarity = polarity
        self.saved = {}

    def choose_polarity(self, idx, mode_is_focus):
        return self.polarity

    def set_polarity(self, idx, polarity):
        self.saved[idx] = polarity


def test_new_trail_is_empty():
    trail = Trail(3)
    assert trail.decision_level() == 0
    assert trail.trail == []
    assert trail.lit_to_level == [UNSET_LEVEL] * 3
    assert trail.lit_to_reason == [UNSET_REASON] * 3
    assert all(not trail.assignments.is_assigned(i) for i in range(3))


def test_enq_assignment_records_everything():
    trail = Trail(3)
    trail.enq_assignment(lit(-2), 7)
    assert trail.trail == [lit(-2)]
    assert trail.lit_to_reason[1] == 7
    assert trail.lit_to_level[1] == 0
    assert lit(-2).lit_sat(trail.assignments)


def test_enq_decision_opens_level_with_chosen_polarity():
    trail = Trail(3)
    trail.enq_assignment(lit(1), UNIT)
    trail.enq_decision(2, FixedPhase(True), True)
    assert trail.decision_level() == 1
    assert trail.decisions == [1]
    assert trail.trail[-1] == lit(3)
    assert trail.lit_to_level[2] == 1
    assert lit(3).lit_sat(trail.assignments)


def test_backtrack_to_undoes_higher_levels():
    trail = Trail(3)
    phase = FixedPhase(False)
    trail.enq_assignment(lit(1), UNIT)
    trail.enq_decision(1, phase, True)
    trail.enq_assignment(lit(3), 0)
    assert trail.lit_to_level[2] == 1
    decisions = RecordingDecisions()
    trail.backtrack_to(0, decisions, phase)
    assert trail.trail == [lit(1)]
    assert trail.decision_level() == 0
    assert trail.curr_i == 1
    assert sorted(decisions.inserted) == [1, 2]
    assert trail.assignments[1] == UNASSIGNED
    assert trail.assignments[2] == UNASSIGNED
    assert trail.lit_to_reason[2] == UNSET_REASON
    assert phase.saved == {1: False, 2: True}
    assert lit(1).lit_sat(trail.assignments)


def test_backtrack_safe_ignores_current_or_higher_level():
    trail = Trail(2)
    phase = FixedPhase(True)
    trail.enq_decision(0, phase, True)
    decisions = RecordingDecisions()
    trail.backtrack_safe(1, decisions, phase)
    assert trail.decision_level() == 1
    assert decisions.inserted == []


def test_backtrack_to_missing_level_raises():
    trail = Trail(2)
    with pytest.raises(IndexError):
        trail.backtrack_to(0, RecordingDecisions(), FixedPhase(True))


def test_learn_units_assigns_and_removes_units():
    formula = make_formula(2, [1], [1, 2], [-2])
    trail = Trail(2)
    assert trail.learn_units(formula) is None
    assert trail.trail == [lit(1), lit(-2)]
    assert len(formula) == 1
    assert [l for l in formula[0]] == [lit(1), lit(2)]
    assert trail.lit_to_reason[0] == UNIT


def test_learn_units_reports_conflicting_unit():
    formula = make_formula(1, [1], [-1])
    trail = Trail(1)
    assert trail.learn_units(formula) == 0
    assert trail.trail == [lit(1)]


def test_learn_unit_restarts_then_asserts():
    formula = make_formula(3, [1, 2], [-1, 3])
    watches = Watches(3)
    watches.init_watches(formula)
    trail = Trail(3)
    phase = FixedPhase(True)
    decisions = RecordingDecisions()
    trail.enq_decision(0, phase, True)
    trail.enq_assignment(lit(3), 1)
    trail.learn_unit(lit(-2), formula, decisions, watches, len(formula), phase)
    assert trail.decision_level() == 0
    assert trail.trail == [lit(-2)]
    assert trail.lit_to_level[1] == 0
    assert trail.lit_to_reason[1] == UNIT
    assert sorted(decisions.inserted) == [0, 2]
    assert len(formula) == 2


def test_learn_unit_in_preprocessing_uses_unit_reason():
    trail = Trail(2)
    trail.learn_unit_in_preprocessing(lit(2))
    assert trail.trail == [lit(2)]
    assert trail.lit_to_reason[1] == UNIT
    assert trail.lit_to_level[1] == 0