"""Unit propagation over two watched literals."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, NamedTuple

from jigsat.lit import Assignments, Lit
from jigsat.watches import Watches, update_watch

if TYPE_CHECKING:
    from jigsat.formula import Formula
    from jigsat.trail import Trail


class Propagation(NamedTuple):
    """Outcome of propagation: the conflicting clause, if any, and the updated tick count."""

    conflict: int | None
    ticks: int


class _Outcome(enum.Enum):
    BLOCKED = enum.auto()
    MOVED = enum.auto()
    PROPAGATED = enum.auto()
    CONFLICT = enum.auto()


def _try_new_watch(formula: Formula, a: Assignments, watches: Watches, cref: int, j: int, k: int,
                   lit: Lit) -> bool:
    clause = formula[cref]
    if clause[k].lit_unsat(a):
        return False
    if clause[0].index() == lit.index():
        clause.swap(k, 0)
    else:
        clause.swap(k, 1)
        clause.swap(1, 0)
    update_watch(formula, watches, cref, j, 0, lit)
    return True


def _visit_clause(formula: Formula, trail: Trail, watches: Watches, cref: int, lit: Lit, j: int) -> _Outcome:
    clause = formula[cref]
    a = trail.assignments
    other_lit = (~lit).select_other(clause[0], clause[1])
    if other_lit.lit_sat(a):
        watches[lit.to_watchidx()][j].blocker = other_lit
        return _Outcome.BLOCKED

    length = len(clause)
    search = clause.search
    for _ in range(2, length):
        search += 1
        if search == length:
            search = 2
        if _try_new_watch(formula, a, watches, cref, j, search, lit):
            clause.search = search
            return _Outcome.MOVED

    if other_lit.lit_unsat(a):
        return _Outcome.CONFLICT
    if clause[0].lit_unset(a):
        trail.enq_assignment(clause[0], cref)
    else:
        trail.enq_assignment(clause[1], cref)
        clause.swap(0, 1)
    return _Outcome.PROPAGATED


def _propagate_lit(formula: Formula, trail: Trail, watches: Watches, lit: Lit, ticks: int) -> Propagation:
    watchidx = lit.to_watchidx()
    j = 0
    while j < len(watches[watchidx]):
        watcher = watches[watchidx][j]
        if watcher.blocker.lit_sat(trail.assignments):
            j += 1
            continue
        cref = watcher.cref
        outcome = _visit_clause(formula, trail, watches, cref, lit, j)
        if outcome is _Outcome.CONFLICT:
            return Propagation(cref, ticks + 1)
        if outcome is _Outcome.PROPAGATED:
            ticks += 1
            j += 1
        elif outcome is _Outcome.BLOCKED:
            j += 1
    return Propagation(None, ticks)


def unit_propagate(formula: Formula, trail: Trail, watches: Watches, ticks: int) -> Propagation:
    """Propagate every trail literal not yet processed, stopping at the first conflict."""
    i = trail.curr_i
    while i < len(trail.trail):
        result = _propagate_lit(formula, trail, watches, trail.trail[i], ticks)
        if result.conflict is not None:
            return result
        ticks = result.ticks
        i += 1
    trail.curr_i = i
    return Propagation(None, ticks)