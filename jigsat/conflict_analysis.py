"""First-UIP conflict analysis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from jigsat.clause import Clause
from jigsat.lit import Lit
from jigsat.minimize import recursive_minimization
from jigsat.modes import SearchMode
from jigsat.trail import UNSET_REASON

if TYPE_CHECKING:
    from jigsat.formula import Formula
    from jigsat.trail import Trail


@dataclass(frozen=True)
class Ground:
    """The conflict happened at decision level 0: the formula is unsatisfiable."""


@dataclass(frozen=True)
class Unit:
    """The learnt clause is the single literal ``lit``."""

    lit: Lit


@dataclass(frozen=True)
class Learned:
    """A learnt clause and the level to backtrack to."""

    level: int
    clause: Clause


Conflict = Union[Ground, Unit, Learned]


def analyze_conflict(formula: Formula, trail: Trail, cref: int, decisions, solver) -> Conflict:
    """Derive the first-UIP clause from the conflicting clause ``cref``."""
    decision_level = trail.decision_level()
    if decision_level == 0:
        return Ground()

    stable = solver.search_mode in (SearchMode.STABLE, SearchMode.ONLY_STABLE)
    to_bump: list[int] = []
    seen = [False] * formula.num_vars
    out_learnt: list[Lit] = [Lit.new(0, True)]
    path_c = 0
    confl = cref
    i = len(trail.trail)
    while True:
        clause = formula[confl]
        start = 0 if confl == cref else 1
        for lit in clause.lits[start:]:
            idx = lit.index()
            if seen[idx]:
                continue
            level = trail.lit_to_level[idx]
            if level == 0:
                continue
            decisions.bump_variable(idx)
            if stable:
                decisions.bump_reason_literals(idx, trail, formula)
            seen[idx] = True
            if level >= decision_level:
                path_c += 1
                reason = trail.lit_to_reason[idx]
                if reason != UNSET_REASON and reason >= solver.initial_len:
                    to_bump.append(idx)
            else:
                out_learnt.append(lit)

        i -= 1
        while not seen[trail.trail[i].index()]:
            i -= 1
        nxt = trail.trail[i]
        seen[nxt.index()] = False
        path_c -= 1
        if path_c == 0:
            out_learnt[0] = ~nxt
            break
        confl = trail.lit_to_reason[nxt.index()]

    recursive_minimization(out_learnt, trail, formula, solver, seen)

    if len(out_learnt) == 1:
        return Unit(out_learnt[0])

    max_i = max(range(1, len(out_learnt)), key=lambda k: trail.lit_to_level[out_learnt[k].index()])
    max_level = trail.lit_to_level[out_learnt[max_i].index()]
    out_learnt[1], out_learnt[max_i] = out_learnt[max_i], out_learnt[1]
    learnt = Clause(out_learnt)
    learnt.calc_and_set_lbd(trail, solver)

    if solver.search_mode in (SearchMode.FOCUS, SearchMode.ONLY_FOCUS):
        for var in to_bump:
            if formula[trail.lit_to_reason[var]].lbd < learnt.lbd:
                decisions.bump_variable(var)

    return Learned(max_level, learnt)