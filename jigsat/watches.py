"""Two-watched-literal lists, indexed by literal code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jigsat.lit import Lit

if TYPE_CHECKING:
    from jigsat.formula import Formula


@dataclass(slots=True)
class Watcher:
    """A clause reference together with a literal that, when true, satisfies the clause."""

    cref: int
    blocker: Lit


def _swap_remove(items: list, i: int) -> None:
    last = items.pop()
    if i < len(items):
        items[i] = last


class Watches:
    """One watcher list per literal code: ``2 * var`` is negative, ``2 * var + 1`` positive."""

    __slots__ = ("watches",)

    def __init__(self, num_vars: int) -> None:
        self.watches: list[list[Watcher]] = [[] for _ in range(2 * num_vars)]

    def __len__(self) -> int:
        return len(self.watches)

    def __getitem__(self, idx: int) -> list[Watcher]:
        return self.watches[idx]

    def reset(self, num_vars: int) -> None:
        """Drop every watcher and size the lists for ``num_vars`` variables."""
        self.watches = [[] for _ in range(2 * num_vars)]

    def init_watches(self, formula: Formula) -> None:
        """Watch the first two literals of every clause longer than one literal."""
        for cref, clause in enumerate(formula.clauses):
            if len(clause) > 1:
                first, second = clause[0], clause[1]
                self.watches[first.to_neg_watchidx()].append(Watcher(cref, second))
                self.watches[second.to_neg_watchidx()].append(Watcher(cref, first))

    def unwatch(self, cref: int, lit: Lit) -> None:
        """Remove the watcher of ``cref`` from the list watching ``lit``, if present."""
        bucket = self.watches[lit.to_neg_watchidx()]
        for i, watcher in enumerate(bucket):
            if watcher.cref == cref:
                _swap_remove(bucket, i)
                return

    def unwatch_all_lemmas(self, initial_len: int) -> None:
        """Remove every watcher of a clause at or after ``initial_len``."""
        for bucket in self.watches:
            j = 0
            while j < len(bucket):
                if bucket[j].cref >= initial_len:
                    _swap_remove(bucket, j)
                else:
                    j += 1


def update_watch(formula: Formula, watches: Watches, cref: int, j: int, k: int, lit: Lit) -> None:
    """Move watcher ``j`` of ``lit``'s list to the list watching literal ``k`` of clause ``cref``."""
    bucket = watches[lit.to_watchidx()]
    end = len(bucket) - 1
    bucket[j], bucket[end] = bucket[end], bucket[j]
    new_lit = formula[cref][k]
    watcher = bucket.pop()
    watches[new_lit.to_neg_watchidx()].append(watcher)