"""The assignment trail with decision levels and reasons."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jigsat.lit import UNASSIGNED, Assignments, Lit
from jigsat.results import Cref
from jigsat.util import USIZE_MAX

if TYPE_CHECKING:
    from jigsat.formula import Formula
    from jigsat.watches import Watches

logger = logging.getLogger(__name__)

UNSET_LEVEL = 2**32 - 1
UNSET_REASON = USIZE_MAX
UNIT = USIZE_MAX
"""Reason recorded for literals implied at the top level by a unit clause."""


class Trail:
    """Assigned literals in order, with the level and reason of each variable."""

    def __init__(self, num_vars: int) -> None:
        self.assignments = Assignments(num_vars)
        self.lit_to_level: list[int] = [UNSET_LEVEL] * num_vars
        self.lit_to_reason: list[int] = [UNSET_REASON] * num_vars
        self.trail: list[Lit] = []
        self.curr_i = 0
        self.decisions: list[int] = []

    def decision_level(self) -> int:
        return len(self.decisions)

    def _backstep(self, target_phase) -> int:
        lit = self.trail.pop()
        idx = lit.index()
        target_phase.set_polarity(idx, lit.is_positive())
        self.assignments[idx] = UNASSIGNED
        self.lit_to_reason[idx] = UNSET_REASON
        return idx

    def restart(self, formula: Formula, decisions, watches: Watches, initial_len: int, target_phase) -> None:
        """Backtrack to level 0 and collect garbage in the clause database."""
        self.backtrack_safe(0, decisions, target_phase)
        formula.collect_garbage_on_empty_trail(watches, initial_len)

    def backtrack_safe(self, level: int, decisions, target_phase) -> None:
        if level < self.decision_level():
            self.backtrack_to(level, decisions, target_phase)

    def backtrack_to(self, level: int, decisions, target_phase) -> None:
        """Undo every assignment above ``level``, handing the variables back to ``decisions``."""
        how_many = len(self.trail) - self.decisions[level]
        for _ in range(how_many):
            decisions.insert(self._backstep(target_phase))
        del self.decisions[level:]
        self.curr_i = len(self.trail)

    def enq_assignment(self, lit: Lit, reason: Cref) -> None:
        idx = lit.index()
        self.lit_to_reason[idx] = reason
        self.lit_to_level[idx] = self.decision_level()
        self.assignments.set_assignment(lit)
        self.trail.append(lit)

    def enq_decision(self, idx: int, target_phase, mode_is_focus: bool) -> None:
        """Open a new decision level and assign ``idx`` the polarity chosen by the phase."""
        self.decisions.append(len(self.trail))
        self.lit_to_level[idx] = self.decision_level()
        polarity = target_phase.choose_polarity(idx, mode_is_focus)
        self.assignments[idx] = int(polarity)
        self.trail.append(Lit.new(idx, polarity))

    def learn_unit(self, lit: Lit, formula: Formula, decisions, watches: Watches, initial_len: int,
                   target_phase) -> None:
        """Restart and assert ``lit`` at the top level."""
        self.restart(formula, decisions, watches, initial_len, target_phase)
        self.enq_assignment(lit, UNIT)

    def learn_units(self, formula: Formula) -> int | None:
        """Assign and remove every unit clause; return the index of a conflicting unit, if any."""
        i = 0
        while i < len(formula):
            clause = formula[i]
            if len(clause) == 1:
                lit = clause[0]
                if lit.lit_unsat(self.assignments):
                    return i
                self.enq_assignment(lit, UNIT)
                formula.remove_clause_in_preprocessing(i)
            else:
                i += 1
        return None

    def learn_unit_in_preprocessing(self, lit: Lit) -> None:
        logger.debug("Learned unit: %s in preproc", lit)
        self.enq_assignment(lit, UNIT)