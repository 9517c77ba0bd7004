"""Small sorting and averaging helpers."""

from __future__ import annotations

from collections.abc import MutableSequence

USIZE_MAX = 2**64 - 1


def sort_reverse(v: MutableSequence[tuple[int, int]]) -> None:
    """Selection sort in place, largest first element first."""
    n = len(v)
    for i in range(n):
        best = max(range(i, n), key=lambda j: v[j][0])
        v[i], v[best] = v[best], v[i]


def sort_by_first(v: MutableSequence[tuple[int, int]]) -> None:
    """Selection sort in place, smallest first element first."""
    n = len(v)
    for i in range(n):
        best = min(range(i, n), key=lambda j: v[j][0])
        v[i], v[best] = v[best], v[i]


def update_fast(fast: int, lbd: int) -> int:
    """Fast moving average of LBDs, scaled by 2**15; returns the new value."""
    fast -= fast // 32
    scaled = lbd * 32768 if lbd < USIZE_MAX // 32768 else lbd
    if USIZE_MAX - fast > scaled:
        fast += scaled
    return fast


def update_slow(slow: int, lbd: int) -> int:
    """Slow moving average of LBDs, scaled by 2**5; returns the new value."""
    slow -= slow // 32768
    scaled = lbd * 32 if lbd < USIZE_MAX // 32 else lbd
    if USIZE_MAX - slow > scaled:
        slow += scaled
    return slow


def min_of(a: int, b: int) -> int:
    return a if a <= b else b


def max_of(a: int, b: int) -> int:
    return a if a >= b else b