"""A naive exhaustive SAT solver, useful as a reference oracle."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Literal:
    var: int
    value: bool

    def is_sat(self, assignment: Sequence[bool]) -> bool:
        return assignment[self.var] == self.value


@dataclass(frozen=True)
class NaiveClause:
    literals: tuple[Literal, ...] = field(default=())

    def vars_in_range(self, n: int) -> bool:
        return all(lit.var < n for lit in self.literals)

    def evaluate(self, assignment: Sequence[bool]) -> bool:
        return any(lit.is_sat(assignment) for lit in self.literals)


@dataclass(frozen=True)
class NaiveFormula:
    clauses: tuple[NaiveClause, ...]
    num_vars: int

    def is_valid(self) -> bool:
        """Every literal names a variable below ``num_vars``."""
        return all(clause.vars_in_range(self.num_vars) for clause in self.clauses)

    def evaluate(self, assignment: Sequence[bool]) -> bool:
        return all(clause.evaluate(assignment) for clause in self.clauses)


def solve_naive(formula: NaiveFormula) -> bool:
    """Try every assignment, true before false, and report whether one satisfies the formula."""
    if not formula.is_valid():
        raise ValueError("formula refers to a variable outside its range")
    return any(
        formula.evaluate(assignment)
        for assignment in itertools.product((True, False), repeat=formula.num_vars)
    )