"""Literals and the partial assignment they are evaluated against."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

UNASSIGNED = 2
"""Assignment value meaning "no value yet"; 0 is false and 1 is true."""

_CODE_MASK = 0xFFFF_FFFF


@dataclass(frozen=True, order=True, slots=True)
class Lit:
    """A literal encoded as ``2 * variable + polarity``."""

    code: int

    @staticmethod
    def new(idx: int, polarity: bool) -> Lit:
        """Build the literal for variable ``idx`` with the given polarity."""
        return Lit(((idx << 1) | int(bool(polarity))) & _CODE_MASK)

    def index(self) -> int:
        """The variable this literal refers to."""
        return self.code >> 1

    def is_positive(self) -> bool:
        return self.code & 1 != 0

    def check_lit_invariant(self, n: int) -> bool:
        """True when the variable is below ``n``."""
        return self.index() < n

    def lit_sat(self, a: Assignments) -> bool:
        return a[self.index()] == int(self.is_positive())

    def lit_unsat(self, a: Assignments) -> bool:
        return a[self.index()] == int(not self.is_positive())

    def lit_unset(self, a: Assignments) -> bool:
        return a[self.index()] >= UNASSIGNED

    def lit_set(self, a: Assignments) -> bool:
        return a[self.index()] < UNASSIGNED

    def get_curr_assigned_state(self, a: Assignments) -> int:
        return a[self.index()]

    def to_watchidx(self) -> int:
        return self.code

    def to_neg_watchidx(self) -> int:
        return (~self).code

    def select_other(self, a: Lit, b: Lit) -> Lit:
        """Given that ``self`` is one of ``a`` and ``b``, return the other one."""
        return Lit(self.code ^ a.code ^ b.code)

    def abstract_level(self, t: Sequence[int]) -> int:
        """One bit standing for the decision level ``t`` gives this variable."""
        return 1 << (t[self.index()] & 31)

    def lit_in_clause(self, c: Iterable[Lit]) -> bool:
        return any(lit == self for lit in c)

    def __invert__(self) -> Lit:
        return Lit(self.code ^ 1)

    def __str__(self) -> str:
        sign = "" if self.is_positive() else "¬"
        return f"{sign}   {self.index()}"

    def __repr__(self) -> str:
        return str(self)


class Assignments:
    """Per-variable values: 0 (false), 1 (true) or 2 (unassigned)."""

    __slots__ = ("values",)

    def __init__(self, num_vars: int) -> None:
        self.values: list[int] = [UNASSIGNED] * num_vars

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, idx: int) -> int:
        return self.values[idx]

    def __setitem__(self, idx: int, value: int) -> None:
        self.values[idx] = value

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def set_assignment(self, lit: Lit) -> None:
        """Give the literal's variable the value that makes the literal true."""
        self.values[lit.index()] = int(lit.is_positive())

    def is_assigned(self, idx: int) -> bool:
        return self.values[idx] < UNASSIGNED