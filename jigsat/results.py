"""Outcome of a solver run, and the clause reference type."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

Cref = int
"""Index of a clause inside a formula."""


class Status(enum.Enum):
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"
    ERR = "error"


@dataclass(frozen=True)
class SatResult:
    """What the solver concluded; a satisfiable result carries its assignment."""

    status: Status
    assignment: tuple[int, ...] = field(default=())

    @staticmethod
    def sat(assignment) -> SatResult:
        return SatResult(Status.SAT, tuple(assignment))

    @staticmethod
    def unsat() -> SatResult:
        return SatResult(Status.UNSAT)

    @staticmethod
    def unknown() -> SatResult:
        return SatResult(Status.UNKNOWN)

    @staticmethod
    def error() -> SatResult:
        return SatResult(Status.ERR)

    def is_sat(self) -> bool:
        return self.status is Status.SAT