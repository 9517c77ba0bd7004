"""Target and best phases, and the rephasing cycle used in stable mode."""

from __future__ import annotations

import enum
import random
from typing import TYPE_CHECKING

from jigsat.lit import UNASSIGNED

if TYPE_CHECKING:
    from jigsat.trail import Trail


class Phase(enum.Enum):
    BEST = "Best"
    FLIPPED = "Flipped"
    ORIGINAL = "Original"
    INVERTED = "Inverted"
    RANDOM = "Random"
    WALK = "Walk"


_DEFAULT_CYCLE = (
    Phase.BEST, Phase.ORIGINAL, Phase.BEST, Phase.INVERTED,
    Phase.BEST, Phase.RANDOM, Phase.BEST, Phase.FLIPPED,
)


class TargetPhase:
    """Saved polarities plus target and best phases (0 false, 1 true, 2 unassigned)."""

    def __init__(self, num_vars: int) -> None:
        self.polarity: list[bool] = [False] * num_vars
        self.target_polarity: list[int] = [0] * num_vars
        self.best_polarity: list[int] = [0] * num_vars
        self.next_rephasing = 1000
        self.best_phase_len = 0
        self.best_of_the_best_phase_len = 0
        self.min_len = num_vars
        self.num_rephases = 0
        self.cycle: list[Phase] = list(_DEFAULT_CYCLE)
        self._rng = random.Random()

    def should_rephase(self, num_conflicts: int) -> bool:
        return self.next_rephasing < num_conflicts

    def update_best_phase(self, trail: Trail) -> None:
        """Remember the trail as the best phase when it is the longest seen since the last reset."""
        length = len(trail.trail)
        if 0 < length < self.min_len:
            self.min_len = length
        if self.best_phase_len < length:
            self.best_polarity = [UNASSIGNED] * len(self.best_polarity)
            for lit in trail.trail:
                self.best_polarity[lit.index()] = int(lit.is_positive())
            self.best_phase_len = length
            self.best_of_the_best_phase_len = max(self.best_of_the_best_phase_len, length)

    def _current_phase(self) -> Phase:
        return self.cycle[self.num_rephases % len(self.cycle)]

    def reset(self) -> None:
        if self._current_phase() is not Phase.BEST:
            self.num_rephases -= 1
        self.best_phase_len = 0

    def rephase(self, num_conflicts: int) -> bool:
        """Apply the next phase of the cycle to the target; returns whether the formula was solved."""
        phase = self._current_phase()
        print(f"c Rephasing to {phase.value}")
        if phase is Phase.BEST:
            self.target_polarity = list(self.best_polarity)
        elif phase is Phase.FLIPPED:
            self.target_polarity = [1 - e if e in (0, 1) else e for e in self.target_polarity]
        elif phase is Phase.ORIGINAL:
            self.target_polarity = [0] * len(self.target_polarity)
        elif phase is Phase.INVERTED:
            self.target_polarity = [1] * len(self.target_polarity)
        elif phase is Phase.RANDOM:
            self.target_polarity = [int(self._rng.random() > 0.5) for _ in self.target_polarity]
        else:
            raise RuntimeError("the walk phase needs a local search engine, which is not available")
        self.num_rephases += 1
        self.next_rephasing = num_conflicts + self.num_rephases * 1000
        self.best_phase_len = 0
        return False

    def choose_polarity(self, idx: int, mode_is_focus: bool) -> bool:
        target = self.target_polarity[idx]
        if mode_is_focus or target == UNASSIGNED:
            return self.polarity[idx]
        if target not in (0, 1):
            raise ValueError(f"invalid target polarity {target} for variable {idx}")
        return target != 0

    def set_polarity(self, idx: int, polarity: bool) -> None:
        self.polarity[idx] = polarity