"""Clauses with the bookkeeping used by search and preprocessing."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, MutableSequence, Sequence
from dataclasses import dataclass

from jigsat.lit import Lit


class SubsumptionKind(enum.Enum):
    NO_SUBSUMPTION = enum.auto()
    SUBSUMED = enum.auto()
    REMOVE_LIT = enum.auto()


@dataclass(frozen=True)
class SubsumptionRes:
    """Result of a subsumption check; ``lit`` is set for ``REMOVE_LIT``."""

    kind: SubsumptionKind
    lit: Lit | None = None


_NO_SUBSUMPTION = SubsumptionRes(SubsumptionKind.NO_SUBSUMPTION)
_SUBSUMED = SubsumptionRes(SubsumptionKind.SUBSUMED)


class Clause:
    """A disjunction of literals.

    ``lbd`` is not computed on construction; ``search`` starts at 1 and
    ``mark`` at 0.
    """

    __slots__ = ("deleted", "can_be_deleted", "mark", "lbd", "search", "abstraction", "lits")

    def __init__(self, lits: Iterable[Lit]) -> None:
        self.lits: list[Lit] = list(lits)
        self.deleted = False
        self.can_be_deleted = True
        self.mark = 0
        self.lbd = 0
        self.search = 1
        self.abstraction = Clause.calc_abstraction(self.lits)

    @staticmethod
    def calc_abstraction(lits: Iterable[Lit]) -> int:
        abstraction = 0
        for lit in lits:
            abstraction |= 1 << (lit.index() & 31)
        return abstraction

    def __len__(self) -> int:
        return len(self.lits)

    def __getitem__(self, i: int) -> Lit:
        return self.lits[i]

    def __setitem__(self, i: int, lit: Lit) -> None:
        self.lits[i] = lit

    def __iter__(self) -> Iterator[Lit]:
        return iter(self.lits)

    def __str__(self) -> str:
        return "(" + " ∧ ".join(str(lit) for lit in self.lits) + ")"

    def __repr__(self) -> str:
        return str(self)

    def swap(self, i: int, j: int) -> None:
        self.lits[i], self.lits[j] = self.lits[j], self.lits[i]

    def less_than(self, other: Clause) -> int:
        """Three-way comparison: binaries first, then by LBD, then by length."""
        if len(self) == 2:
            return 0 if len(other) == 2 else -1
        if len(other) == 2:
            return 1
        if self.lbd != other.lbd:
            return -1 if self.lbd < other.lbd else 1
        if len(self) != len(other):
            return -1 if len(self) < len(other) else 1
        return 0

    def check_clause_invariant(self, n: int) -> bool:
        """All variables are below ``n`` and no variable occurs twice."""
        return all(lit.check_lit_invariant(n) for lit in self.lits) and self.no_duplicates()

    def no_duplicates(self) -> bool:
        seen: set[int] = set()
        for lit in self.lits:
            if lit.index() in seen:
                return False
            seen.add(lit.index())
        return True

    def calc_lbd(self, lit_to_level: Sequence[int], perm_diff: MutableSequence[int], num_conflicts: int) -> int:
        """Count distinct decision levels, stamping ``perm_diff`` with ``num_conflicts``."""
        lbd = 0
        for lit in self.lits:
            level = lit_to_level[lit.index()]
            if perm_diff[level] != num_conflicts:
                perm_diff[level] = num_conflicts
                lbd += 1
        return lbd

    def calc_and_set_lbd(self, trail, solver) -> None:
        self.lbd = self.calc_lbd(trail.lit_to_level, solver.perm_diff, solver.num_conflicts)

    def _incompatible_abstract_levels(self, other: Clause) -> bool:
        return self.abstraction & ~other.abstraction != 0

    def subsumes(self, other: Clause) -> SubsumptionRes:
        """Check whether this clause subsumes ``other``, possibly after removing one literal."""
        if len(other) < len(self) or self._incompatible_abstract_levels(other):
            return _NO_SUBSUMPTION

        ret = _SUBSUMED
        for s in self.lits:
            for o in other.lits:
                if s == o:
                    break
                if ret.kind is SubsumptionKind.SUBSUMED and s == ~o:
                    ret = SubsumptionRes(SubsumptionKind.REMOVE_LIT, s)
                    break
            else:
                return _NO_SUBSUMPTION
        return ret

    def is_marked(self) -> bool:
        return self.mark > 0

    def remove(self, lit: Lit) -> None:
        """Remove the first occurrence of ``lit``, moving the last literal into its place."""
        try:
            i = self.lits.index(lit)
        except ValueError:
            return
        last = self.lits.pop()
        if i < len(self.lits):
            self.lits[i] = last

    def strengthen(self, p: Lit) -> None:
        self.remove(p)
        self.abstraction = Clause.calc_abstraction(self.lits)