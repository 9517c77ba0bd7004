"""Minimisation of learnt clauses by removing implied literals."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jigsat.lit import Lit
from jigsat.trail import UNSET_REASON

if TYPE_CHECKING:
    from jigsat.formula import Formula
    from jigsat.trail import Trail


def lit_redundant(solver, trail: Trail, formula: Formula, lit: Lit, abstract_levels: int,
                  seen: list[bool]) -> bool:
    """Whether ``lit`` is implied by the literals already marked in ``seen``.

    Literals found redundant along the way are marked in ``seen`` and recorded
    in ``solver.analyze_toclear``; on failure those marks are undone.
    """
    stack = solver.analyze_stack
    toclear = solver.analyze_toclear
    stack.clear()
    stack.append(lit)
    top = len(toclear)
    while stack:
        clause = formula.clauses[trail.lit_to_reason[stack.pop().index()]]
        for p2 in clause.lits[1:]:
            idx = p2.index()
            if seen[idx] or trail.lit_to_level[idx] == 0:
                continue
            if (trail.lit_to_reason[idx] != UNSET_REASON
                    and p2.abstract_level(trail.lit_to_level) & abstract_levels != 0):
                seen[idx] = True
                stack.append(p2)
                toclear.append(p2)
            else:
                for cleared in toclear[top:]:
                    seen[cleared.index()] = False
                del toclear[top:]
                return False
    return True


def recursive_minimization(out_learnt: list[Lit], trail: Trail, formula: Formula, solver,
                           seen: list[bool]) -> None:
    """Drop, in place, every literal after the first that the others imply; ``seen`` is consumed."""
    abstract_levels = 0
    for lit in out_learnt[1:]:
        abstract_levels |= lit.abstract_level(trail.lit_to_level)
    kept = out_learnt[:1]
    for lit in out_learnt[1:]:
        if (trail.lit_to_reason[lit.index()] == UNSET_REASON
                or not lit_redundant(solver, trail, formula, lit, abstract_levels, seen)):
            kept.append(lit)
    out_learnt[:] = kept


def local_minimization(out_learnt: list[Lit], trail: Trail, formula: Formula, seen: list[bool]) -> None:
    """Drop, in place, literals whose reason clause only contains marked or top-level literals."""
    kept = out_learnt[:1]
    for lit in out_learnt[1:]:
        reason = trail.lit_to_reason[lit.index()]
        if reason == UNSET_REASON:
            kept.append(lit)
            continue
        ante = formula.clauses[reason]
        start = 0 if len(ante) == 2 else 1
        if any(not seen[a.index()] and trail.lit_to_level[a.index()] > 0 for a in ante.lits[start:]):
            kept.append(lit)
    out_learnt[:] = kept