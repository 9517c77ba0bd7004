"""Clause database simplification before search.

Variable elimination by clause distribution, backward subsumption and
self-subsuming resolution, run on a formula that is not yet watched for
search.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from jigsat.clause import Clause, SubsumptionKind
from jigsat.lit import Lit
from jigsat.results import Cref
from jigsat.unit_prop import unit_propagate

if TYPE_CHECKING:
    from jigsat.decision import Decisions
    from jigsat.formula import Formula
    from jigsat.trail import Trail
    from jigsat.watches import Watches

logger = logging.getLogger(__name__)

_MAX_CLAUSES = 50_000_000


def _swap_remove(items: list, i: int) -> None:
    last = items.pop()
    if i < len(items):
        items[i] = last


def _remove_value(items: list, value) -> bool:
    """Swap-remove the first occurrence of ``value``; report whether it was found."""
    try:
        idx = items.index(value)
    except ValueError:
        return False
    _swap_remove(items, idx)
    return True


class Preprocess:
    """One-shot simplifier; :meth:`preprocess` sets up all of its state."""

    def __init__(self) -> None:
        self.touched: list[bool] = []
        # Indexed by variable: the clauses in which the variable occurs.
        self.occurs: list[list[Cref]] = []
        # Indexed by literal code: the number of occurrences of the literal.
        self.n_occ: list[int] = []
        # (variable, score) pairs, sorted so that the smallest score is popped first.
        self.elim_heap: list[tuple[int, int]] = []
        self.subsumption_queue: deque[Cref] = deque()
        self.eliminated: list[bool] = []
        self.bwdsub_assigns = 0
        self.n_touched = 0
        self.grow = 0
        self.clause_lim = 20
        self.subsumption_lim = 1000
        self.merges = 0
        self.eliminated_vars = 0

    # -- setup -------------------------------------------------------------

    def _populate_occurs_and_n_occ(self, formula: Formula) -> None:
        self.occurs = [[] for _ in range(formula.num_vars * 2)]
        self.n_occ = [0] * (formula.num_vars * 2)
        for cref, clause in enumerate(formula.clauses):
            for lit in clause:
                self.occurs[lit.index()].append(cref)
                self.n_occ[lit.to_watchidx()] += 1

    def _populate_elim(self) -> None:
        self.elim_heap.extend(
            (var, self.n_occ[2 * var] * self.n_occ[2 * var + 1]) for var in range(len(self.n_occ) // 2)
        )
        self.elim_heap.sort(key=lambda k: k[1])
        self.elim_heap.reverse()

    def _init(self, formula: Formula) -> None:
        self.touched = [False] * formula.num_vars
        self._populate_occurs_and_n_occ(formula)
        self._populate_elim()
        self.eliminated = [False] * formula.num_vars

    # -- main loop ---------------------------------------------------------

    def preprocess(self, formula: Formula, trail: Trail, decisions: Decisions, watches: Watches) -> bool:
        """Simplify ``formula`` in place; False means the formula was found unsatisfiable.

        On success deleted clauses are dropped, eliminated variables are no
        longer decision candidates and ``watches`` is rebuilt for the result.
        """
        self._init(formula)

        if len(formula) >= _MAX_CLAUSES:
            print("c Too many clauses. No preprocessing.")
            return False

        while self.n_touched > 0 or self.bwdsub_assigns < len(trail.trail) or self.elim_heap:
            self._gather_touched_clauses(formula)

            if self.subsumption_queue or self.bwdsub_assigns < len(trail.trail):
                outcome = self._backward_subsumption_check(formula, trail, watches)
                if outcome is False:
                    return False
                if outcome is None:
                    break

            while self.elim_heap:
                elim, _ = self.elim_heap.pop()
                if self.eliminated[elim] or trail.assignments.is_assigned(elim):
                    continue
                outcome = self._eliminate_var(elim, formula, trail, watches)
                if outcome is False:
                    return False
                if outcome is None:
                    break

        for idx, eliminated in enumerate(self.eliminated):
            if eliminated:
                decisions.turn_off_decision_for_idx(idx)
        formula.remove_deleted()

        watches.reset(formula.num_vars)
        watches.init_watches(formula)
        return True

    def _gather_touched_clauses(self, formula: Formula) -> None:
        if self.n_touched == 0:
            return

        for cref in self.subsumption_queue:
            if formula[cref].mark == 0:
                formula[cref].mark = 2

        for var, touched in enumerate(self.touched):
            if not touched:
                continue
            cs = self.occurs[var]
            j = 0
            while j < len(cs):
                clause = formula[cs[j]]
                if not clause.deleted:
                    _swap_remove(cs, j)
                elif clause.mark == 0:
                    self.subsumption_queue.append(cs[j])
                    clause.mark = 2
                    j += 1
                else:
                    j += 1
            self.touched[var] = False

        for cref in self.subsumption_queue:
            if formula[cref].mark == 2:
                formula[cref].mark = 0

        self.n_touched = 0

    # -- clause bookkeeping ------------------------------------------------

    def _add_clause(self, formula: Formula, lits: list[Lit]) -> bool:
        """Add a resolvent; an empty one means the formula is unsatisfiable."""
        logger.debug("Adding: %s", lits)
        if not lits:
            return False
        cref = formula.add_unwatched_clause(Clause(lits))
        logger.debug("Added: %d", cref)
        self.subsumption_queue.append(cref)
        for lit in formula[cref]:
            self.occurs[lit.index()].append(cref)
            self.n_occ[lit.to_watchidx()] += 1
            self.touched[lit.index()] = True
            self.n_touched += 1
        return True

    def _remove_clause(self, formula: Formula, cref: Cref) -> None:
        clause = formula[cref]
        if clause.deleted:
            raise RuntimeError(f"clause {cref} is already deleted")
        logger.debug("Removing cref: %d, %s", cref, clause.lits)
        for lit in clause:
            self.n_occ[lit.to_watchidx()] -= 1
            if not _remove_value(self.occurs[lit.index()], cref):
                raise RuntimeError(f"{lit} not found in occurs: {self.occurs[lit.index()]}")
        formula.mark_clause_as_deleted(cref)

    def _remove_clauses(self, formula: Formula, v: int) -> None:
        """Delete every clause containing variable ``v`` and forget its occurrences."""
        logger.debug("Removing %d", v)
        occ = self.occurs[v]
        formula.mark_clauses_as_deleted(occ)
        while occ:
            cref = occ.pop()
            for lit in formula[cref]:
                self.n_occ[lit.to_watchidx()] -= 1
                _remove_value(self.occurs[lit.index()], cref)

    # -- subsumption -------------------------------------------------------

    def _backward_subsumption_check(self, formula: Formula, trail: Trail, watches: Watches) -> bool | None:
        """Run subsumption over the queue; None means top-level assignments are pending."""
        queue = self.subsumption_queue
        while queue or self.bwdsub_assigns < len(trail.trail):
            if not queue and self.bwdsub_assigns < len(trail.trail):
                print("c sub_q.len() == 0 and bwdsub_assigns < trail.len()")
                return None

            cr = queue.popleft()
            candidate = formula[cr]
            if candidate.is_marked() or candidate.deleted:
                continue
            if len(candidate) == 0:
                return False

            best = candidate[0].index()
            for lit in candidate.lits[1:]:
                if len(self.occurs[lit.index()]) < len(self.occurs[best]):
                    best = lit.index()

            j = 0
            while j < len(self.occurs[best]):
                other_ref = self.occurs[best][j]
                other = formula[other_ref]
                if candidate.is_marked():
                    break
                if other.is_marked() or other_ref == cr or len(other) >= self.subsumption_lim:
                    j += 1
                    continue
                res = candidate.subsumes(other)
                if res.kind is SubsumptionKind.NO_SUBSUMPTION:
                    j += 1
                elif res.kind is SubsumptionKind.SUBSUMED:
                    self._remove_clause(formula, other_ref)
                    j += 1
                else:
                    lit = res.lit
                    if not self._strengthen_clause(other_ref, ~lit, formula, trail, watches):
                        return False
                    # The candidate at j was dropped from this list; look at j again.
                    if lit.index() != best:
                        j += 1

        return True

    def _strengthen_clause(self, cref: Cref, lit: Lit, formula: Formula, trail: Trail, watches: Watches) -> bool:
        """Remove ``lit`` from clause ``cref``; False means a conflict was found."""
        clause = formula[cref]
        self.subsumption_queue.append(cref)

        if len(clause) == 1:
            return False
        if len(clause) == 2:
            clause.strengthen(lit)
            unit_lit = clause[0]
            formula.mark_clause_as_deleted(cref)
            trail.learn_unit_in_preprocessing(unit_lit)
            return unit_propagate(formula, trail, watches, 0).conflict is None

        clause.strengthen(lit)
        _remove_value(self.occurs[lit.index()], cref)
        self.n_occ[lit.to_watchidx()] -= 1
        return True

    # -- variable elimination ----------------------------------------------

    def _eliminate_var(self, v: int, formula: Formula, trail: Trail, watches: Watches) -> bool | None:
        positive, negative = Lit.new(v, True), Lit.new(v, False)
        pos: list[Cref] = []
        neg: list[Cref] = []
        for cref in self.occurs[v]:
            lits = formula[cref].lits
            if positive.lit_in_clause(lits):
                pos.append(cref)
            elif negative.lit_in_clause(lits):
                neg.append(cref)
            else:
                raise RuntimeError(f"clause {cref} listed for variable {v} does not contain it")

        limit = len(self.occurs[v]) + self.grow
        cnt = 0
        for p in pos:
            for n in neg:
                cnt += 1
                fits, clause_size = self._merge(formula[p], formula[n], v)
                if fits and (cnt > limit or clause_size > self.clause_lim):
                    return True

        logger.debug("Eliminated: %d", v)
        self.eliminated[v] = True
        self.eliminated_vars += 1

        for p in pos:
            for n in neg:
                if formula[p].deleted or formula[n].deleted:
                    raise RuntimeError("Deleted clauses used in the DP procedure")
                resolvent = self._merge_and_get(formula[p], formula[n], v)
                if resolvent is not None:
                    logger.debug("Resolved %s and %s to get %s", formula[p], formula[n], resolvent)
                    if not self._add_clause(formula, resolvent):
                        return False

        self._remove_clauses(formula, v)
        if self.occurs[v]:
            raise RuntimeError(f"occurrences of variable {v} remain after elimination")

        return self._backward_subsumption_check(formula, trail, watches)

    def _merge(self, first: Clause, second: Clause, v: int) -> tuple[bool, int]:
        """Estimate the resolvent on ``v``: (not tautological, size)."""
        self.merges += 1
        ps, qs = (second, first) if len(first) < len(second) else (first, second)
        size = len(ps) - 1
        for q in qs:
            if q.index() == v:
                continue
            for p in ps:
                if p.index() != q.index():
                    if p == ~q:
                        return False, size
                    break
            else:
                size += 1
        return True, size

    def _merge_and_get(self, first: Clause, second: Clause, v: int) -> list[Lit] | None:
        """The resolvent on ``v``, or None when it is a tautology."""
        self.merges += 1
        ps, qs = (second, first) if len(first) < len(second) else (first, second)
        out: list[Lit] = []
        for q in qs:
            if q.index() == v:
                continue
            for p in ps:
                if p.index() == q.index():
                    if p == ~q:
                        return None
                    break
            else:
                out.append(q)
        out.extend(p for p in ps if p.index() != v)
        return out