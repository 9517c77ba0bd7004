"""Decision heuristics: a move-to-front queue (VMTF) and an activity heap (VSIDS)."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jigsat.lit import UNASSIGNED, Assignments
from jigsat.util import USIZE_MAX, sort_reverse

if TYPE_CHECKING:
    from jigsat.formula import Formula
    from jigsat.trail import Trail

INVALID = USIZE_MAX
"""Marks a missing link, an absent heap position, or an unset reason."""


class Decisions(abc.ABC):
    """Chooses the next variable to branch on and learns from conflicts."""

    @classmethod
    @abc.abstractmethod
    def from_formula(cls, formula: Formula) -> Decisions:
        """Build the heuristic for the variables of ``formula``."""

    @abc.abstractmethod
    def bump_vec_of_vars(self, v: Sequence[int]) -> None: ...

    @abc.abstractmethod
    def bump_reason_literals(self, var: int, trail: Trail, formula: Formula) -> None: ...

    @abc.abstractmethod
    def get_next(self, a: Assignments) -> int | None: ...

    @abc.abstractmethod
    def bump_variable(self, var: int) -> None: ...

    @abc.abstractmethod
    def decay_var_inc(self) -> None: ...

    @abc.abstractmethod
    def set_var_decay(self, new_val: float) -> None: ...

    @abc.abstractmethod
    def insert(self, var: int) -> None: ...

    @abc.abstractmethod
    def turn_off_decision_for_idx(self, var: int) -> None: ...


@dataclass(slots=True)
class Node:
    """A link of the VMTF queue together with its timestamp."""

    next: int = INVALID
    prev: int = INVALID
    ts: int = 0


class Vmtf(Decisions):
    """Variable-move-to-front: a doubly linked queue ordered by bump time."""

    def __init__(self, linked_list: list[Node], timestamp: int, start: int) -> None:
        self.linked_list = linked_list
        self.timestamp = timestamp
        self.start = start
        self.search = start

    def __getitem__(self, idx: int) -> Node:
        return self.linked_list[idx]

    @classmethod
    def from_formula(cls, formula: Formula) -> Vmtf:
        """Order variables by descending number of occurrences in the formula."""
        counts = [0] * formula.num_vars
        for clause in formula.clauses:
            for lit in clause:
                counts[lit.index()] += 1
        counts_with_index = [(count, idx) for idx, count in enumerate(counts)]
        sort_reverse(counts_with_index)
        return cls.from_order([idx for _, idx in counts_with_index])

    @classmethod
    def from_order(cls, lit_order: Sequence[int]) -> Vmtf:
        """Link the variables in the given order, the first one at the front."""
        n = len(lit_order)
        linked_list = [Node() for _ in range(n)]
        for i, var in enumerate(lit_order):
            node = linked_list[var]
            node.next = lit_order[i + 1] if i + 1 < n else INVALID
            node.prev = lit_order[i - 1] if i > 0 else INVALID
            node.ts = n - i
        head = lit_order[0] if n else 0
        return cls(linked_list, n + 1, head)

    def rescore(self) -> None:
        """Renumber timestamps along the queue, front highest."""
        curr_score = len(self.linked_list)
        curr = self.start
        while curr != INVALID:
            self.linked_list[curr].ts = curr_score
            if curr_score == 0:
                break
            curr_score -= 1
            curr = self.linked_list[curr].next
        self.timestamp = len(self.linked_list) + 1

    def move_to_front(self, tomove: int) -> None:
        if tomove == self.start:
            return
        moving = self.linked_list[tomove]
        prev, old_next = moving.prev, moving.next
        moving.prev = INVALID
        moving.next = self.start
        moving.ts = self.timestamp
        self.linked_list[self.start].prev = tomove
        self.start = tomove
        self.linked_list[prev].next = old_next
        if old_next != INVALID:
            self.linked_list[old_next].prev = prev
        if self.timestamp == USIZE_MAX:
            self.rescore()
        else:
            self.timestamp += 1

    def bump_vec_of_vars(self, v: Sequence[int]) -> None:
        """Move the variables to the front, oldest timestamp first."""
        by_age = sorted(((self.linked_list[var].ts, var) for var in v), key=lambda k: k[0])
        for _, var in by_age:
            self.move_to_front(var)

    def get_next(self, a: Assignments) -> int | None:
        curr = self.search
        while curr != INVALID:
            node = self.linked_list[curr]
            if a[curr] >= UNASSIGNED:
                self.search = node.next
                return curr
            curr = node.next
        if any(value >= UNASSIGNED for value in a):
            raise RuntimeError("an unassigned variable is missing from the decision queue")
        return None

    def turn_off_decision_for_idx(self, var: int) -> None:
        """Decision toggling is not tracked by this heuristic."""

    def bump_reason_literals(self, var: int, trail: Trail, formula: Formula) -> None:
        """Reason literals are not bumped by this heuristic."""

    def bump_variable(self, var: int) -> None:
        """Single bumps are ignored; only whole vectors are bumped."""

    def decay_var_inc(self) -> None:
        """There is no activity to decay."""

    def set_var_decay(self, new_val: float) -> None:
        """There is no activity to decay."""

    def insert(self, var: int) -> None:
        """Variables never leave the queue."""


class Heap:
    """A binary heap of variables, highest activity at the top."""

    def __init__(self, n: int) -> None:
        self.activity: list[float] = [0.0] * n
        self.heap: list[int] = []
        self.indices: list[int] = [INVALID] * n

    def build(self, n: int) -> None:
        """Fill the heap with variables ``0..n``; requires ``n`` within the size given at creation."""
        if n == 0:
            return
        for var in self.heap:
            self.indices[var] = INVALID
        self.heap.clear()
        for i in range(n):
            self.indices[i] = i
            self.heap.append(i)
        if n == 1:
            return
        for i in reversed(range(len(self.heap) // 2)):
            self._percolate_down(i)

    @staticmethod
    def _left(idx: int) -> int:
        return idx * 2 + 1

    @staticmethod
    def _right(idx: int) -> int:
        return (idx + 1) * 2

    @staticmethod
    def _parent(idx: int) -> int:
        return (idx - 1) >> 1

    def __len__(self) -> int:
        return len(self.heap)

    def in_heap(self, var: int) -> bool:
        return var < len(self.indices) and self.indices[var] < INVALID

    def decrease(self, var: int) -> None:
        """Restore order after ``var``'s activity went up."""
        self._percolate_up(self.indices[var])

    def increase(self, var: int) -> None:
        """Restore order after ``var``'s activity went down."""
        self._percolate_down(self.indices[var])

    def _less_than(self, x: int, y: int) -> bool:
        return self.activity[x] > self.activity[y]

    def insert(self, var: int) -> None:
        if var >= len(self.indices):
            raise IndexError(f"variable {var} is outside the heap")
        self.indices[var] = len(self.heap)
        self.heap.append(var)
        self._percolate_up(self.indices[var])

    def _percolate_up(self, idx: int) -> None:
        heap, indices = self.heap, self.indices
        x = heap[idx]
        while idx != 0:
            p = self._parent(idx)
            if not self._less_than(x, heap[p]):
                break
            heap[idx] = heap[p]
            indices[heap[idx]] = idx
            idx = p
        heap[idx] = x
        indices[x] = idx

    def _percolate_down(self, idx: int) -> None:
        heap, indices = self.heap, self.indices
        x = heap[idx]
        size = len(heap)
        while self._left(idx) < size:
            left, right = self._left(idx), self._right(idx)
            child = right if right < size and self._less_than(heap[right], heap[left]) else left
            if not self._less_than(heap[child], x):
                break
            heap[idx] = heap[child]
            indices[heap[idx]] = idx
            idx = child
        heap[idx] = x
        indices[x] = idx

    def remove_min(self) -> int:
        """Pop and return the variable with the highest activity."""
        if not self.heap:
            raise IndexError("remove_min on an empty heap")
        x = self.heap[0]
        self.heap[0] = self.heap[-1]
        self.indices[self.heap[0]] = 0
        self.indices[x] = INVALID
        self.heap.pop()
        if len(self.heap) > 1:
            self._percolate_down(0)
        return x


class Vsids(Decisions):
    """Variable state independent decaying sum, backed by an activity heap."""

    def __init__(self, num_vars: int = 0) -> None:
        self.order_heap = Heap(num_vars)
        self.order_heap.build(num_vars)
        self.var_inc = 1.0
        self.var_decay = 0.95
        self.decision: list[bool] = [True] * num_vars

    @classmethod
    def from_formula(cls, formula: Formula) -> Vsids:
        return cls(formula.num_vars)

    def get_next(self, a: Assignments) -> int | None:
        while len(self.order_heap):
            var = self.order_heap.remove_min()
            if self.decision[var] and a[var] >= UNASSIGNED:
                return var
        return None

    def bump_variable(self, var: int) -> None:
        activity = self.order_heap.activity
        activity[var] += self.var_inc
        if activity[var] > 1e100:
            for i, value in enumerate(activity):
                activity[i] = value * 1e-100
            self.var_inc *= 1e-100
        if self.order_heap.in_heap(var):
            self.order_heap.decrease(var)

    def decay_var_inc(self) -> None:
        self.var_inc *= 1.0 / self.var_decay

    def set_var_decay(self, new_val: float) -> None:
        self.var_decay = new_val

    def insert(self, var: int) -> None:
        if not self.order_heap.in_heap(var) and self.decision[var]:
            self.order_heap.insert(var)

    def bump_reason_literals(self, var: int, trail: Trail, formula: Formula) -> None:
        """Bump every literal of ``var``'s reason clause except the first."""
        reason = trail.lit_to_reason[var]
        if reason == INVALID:
            return
        for lit in formula.clauses[reason].lits[1:]:
            self.bump_variable(lit.index())

    def turn_off_decision_for_idx(self, var: int) -> None:
        self.decision[var] = False

    def bump_vec_of_vars(self, v: Sequence[int]) -> None:
        """Vector bumps are ignored; variables are bumped one by one."""