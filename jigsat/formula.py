"""The clause database: original clauses followed by learnt ones."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import TYPE_CHECKING

from jigsat.clause import Clause
from jigsat.lit import Assignments
from jigsat.results import Cref, SatResult
from jigsat.util import USIZE_MAX
from jigsat.watches import Watcher, Watches

if TYPE_CHECKING:
    from jigsat.trail import Trail

logger = logging.getLogger(__name__)


def _swap_remove(items: list, i: int) -> None:
    last = items.pop()
    if i < len(items):
        items[i] = last


class Formula:
    """Clauses over ``num_vars`` variables plus the state driving database reduction."""

    def __init__(self, num_vars: int) -> None:
        self.clauses: list[Clause] = []
        self.learnt_core: list[Cref] = []
        self.num_vars = num_vars
        self.cur_restart = 1
        self.num_clauses_before_reduce = 2000
        self.special_inc_reduce_db = 1000
        self.num_deleted_clauses = 0

    def __len__(self) -> int:
        return len(self.clauses)

    def __getitem__(self, idx: int) -> Clause:
        return self.clauses[idx]

    def check_formula_invariant(self) -> SatResult:
        """Report an error, a trivial answer, or unknown when the formula is well formed."""
        if self.num_vars >= USIZE_MAX // 2:
            return SatResult.error()
        if not self.clauses:
            return SatResult.sat(())
        if self.num_vars == 0:
            return SatResult.error()
        for clause in self.clauses:
            if not clause.check_clause_invariant(self.num_vars):
                return SatResult.error()
            if len(clause) == 0:
                return SatResult.unsat()
        return SatResult.unknown()

    def is_clause_sat(self, idx: int, a: Assignments) -> bool:
        return any(lit.lit_sat(a) for lit in self.clauses[idx])

    def _watch(self, cref: Cref, watches: Watches) -> None:
        clause = self.clauses[cref]
        first, second = clause[0], clause[1]
        watches[first.to_neg_watchidx()].append(Watcher(cref, second))
        watches[second.to_neg_watchidx()].append(Watcher(cref, first))

    def learn_clause(self, clause: Clause, watches: Watches) -> Cref:
        """Add a learnt clause, watch its first two literals and return its reference."""
        cref = len(self.clauses)
        self.clauses.append(clause)
        self._watch(cref, watches)
        self.learnt_core.append(cref)
        return cref

    def add_unwatched_clause(self, clause: Clause) -> Cref:
        cref = len(self.clauses)
        self.clauses.append(clause)
        return cref

    def remove_clause_in_preprocessing(self, cref: Cref) -> None:
        """Remove a clause outright; only valid before watches exist."""
        _swap_remove(self.clauses, cref)

    def mark_clause_as_deleted(self, cref: Cref) -> None:
        self.clauses[cref].deleted = True
        self.num_deleted_clauses += 1

    def remove_deleted(self) -> None:
        """Physically drop every clause marked as deleted."""
        i = 0
        while i < len(self.clauses):
            if self.clauses[i].deleted:
                _swap_remove(self.clauses, i)
            else:
                i += 1
        self.num_deleted_clauses = 0

    def _unwatch_and_mark_as_deleted(self, cref: Cref, watches: Watches) -> None:
        clause = self.clauses[cref]
        watches.unwatch(cref, clause[0])
        watches.unwatch(cref, clause[1])
        self.mark_clause_as_deleted(cref)

    def delete_clauses(self, watches: Watches, trail: Trail) -> None:
        """Unwatch and delete every watched clause already satisfied by the trail."""
        for cref, clause in enumerate(self.clauses):
            if not clause.deleted and len(clause) > 1 and self.is_clause_sat(cref, trail.assignments):
                self._unwatch_and_mark_as_deleted(cref, watches)

    def simplify_formula(self, watches: Watches, trail: Trail) -> None:
        """Remove satisfied clauses; to be called on an empty trail."""
        self.delete_clauses(watches, trail)

    def reduce_db(self, watches: Watches) -> None:
        """Delete up to half of the learnt clauses, worst first."""
        core = self.learnt_core
        if not core:
            return
        clauses = self.clauses
        core.sort(key=cmp_to_key(lambda a, b: clauses[a].less_than(clauses[b])))
        if clauses[core[len(core) // 2]].lbd <= 3:
            self.num_clauses_before_reduce += self.special_inc_reduce_db
        if clauses[core[-1]].lbd <= 5:
            self.num_clauses_before_reduce += self.special_inc_reduce_db

        limit = len(core) // 2
        i = 0
        while i < len(core) and limit > 0:
            cref = core[i]
            clause = clauses[cref]
            if clause.lbd > 2 and len(clause) > 2 and clause.can_be_deleted:
                self._unwatch_and_mark_as_deleted(cref, watches)
                _swap_remove(core, i)
                limit -= 1
            else:
                clause.can_be_deleted = True
                i += 1

    def collect_garbage_on_empty_trail(self, watches: Watches, initial_len: int) -> None:
        """Compact the learnt clauses and rebuild their watches when enough are deleted."""
        if self.learnt_core and self.num_deleted_clauses / len(self.learnt_core) < 0.20:
            return

        watches.unwatch_all_lemmas(initial_len)

        self.learnt_core.clear()
        i = initial_len
        while i < len(self.clauses):
            if self.clauses[i].deleted:
                _swap_remove(self.clauses, i)
            else:
                self.learnt_core.append(i)
                i += 1

        for cref in range(initial_len, len(self.clauses)):
            self._watch(cref, watches)

    def mark_clauses_as_deleted(self, crefs: list[Cref]) -> None:
        """Mark every clause in ``crefs`` deleted; ``crefs`` is left sorted in descending order."""
        logger.debug("Marking %s as deleted", crefs)
        crefs.sort(reverse=True)
        for cref in crefs:
            self.mark_clause_as_deleted(cref)

    def trigger_reduce(self, num_conflicts: int, initial_len: int) -> bool:
        if num_conflicts >= self.cur_restart * self.num_clauses_before_reduce and len(self.clauses) > initial_len:
            self.cur_restart = num_conflicts // self.num_clauses_before_reduce + 1
            return True
        return False