"""Restart policies: Glucose-style moving averages and the Luby sequence."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class RestartMode(enum.Enum):
    GLUCOSE = "glucose"
    LUBY = "luby"


@dataclass
class Ema:
    """Exponential moving average with a bias-correcting warm-up of ``beta``."""

    alpha: float
    value: float = 1.0
    beta: float = 1.0
    wait: int = 1
    period: int = 1

    def update(self, value: float) -> None:
        self.value += self.beta * (value - self.value)
        self.wait -= 1
        if self.beta > self.alpha and self.wait == 0:
            self.period *= 2
            self.wait = self.period
            self.beta = max(self.beta * 0.5, self.alpha)


@dataclass
class Glucose:
    """Restarts when recent LBDs are high compared to the long-run average."""

    minimum_conflicts: int = 50
    minimum_conflicts_for_blocking_restarts: int = 10000
    ema_lbd_narrow: Ema = field(default_factory=lambda: Ema(3e-2))
    ema_lbd_wide: Ema = field(default_factory=lambda: Ema(1e-5))
    ema_trail_wide: Ema = field(default_factory=lambda: Ema(3e-4))
    last_trail_size: int = 0
    force: float = 1.25
    block: float = 1.4
    num_restarts: int = 0
    num_blocked: int = 0

    def trigger_restart(self, curr_confl: int) -> bool:
        if curr_confl < self.minimum_conflicts:
            return False
        if self.ema_lbd_narrow.value / self.ema_lbd_wide.value > self.force:
            self.num_restarts += 1
            self.minimum_conflicts = curr_confl + 50
            return True
        return False

    def update(self, trail_len: int, lbd: int) -> None:
        self.ema_trail_wide.update(float(trail_len))
        self.last_trail_size = trail_len
        self.ema_lbd_narrow.update(float(lbd))
        self.ema_lbd_wide.update(float(lbd))

    def block_restart(self, curr_confl: int) -> bool:
        """Postpone restarts while the trail is much longer than usual."""
        if (
            self.last_trail_size > self.block * self.ema_trail_wide.value
            and curr_confl >= self.minimum_conflicts_for_blocking_restarts
        ):
            self.minimum_conflicts = curr_confl + 50
            self.num_blocked += 1
            return True
        return False


def luby(y: float, x: int) -> int:
    """The ``x``-th element (from 0) of the Luby sequence with base ``y``."""
    size = 1
    seq = 0
    while size < x + 1:
        seq += 1
        size = 2 * size + 1
    while size - 1 != x:
        size = (size - 1) >> 1
        seq -= 1
        x %= size
    return int(y**seq)


@dataclass
class Luby:
    """Restarts after a number of conflicts following the Luby sequence."""

    num_restarts: int = 0
    step: int = 100
    curr_restarts: int = 0
    limit: int = 100

    def trigger_restart(self, curr_confl: int) -> bool:
        if curr_confl <= self.limit:
            return False
        self.limit = curr_confl + luby(2.0, self.curr_restarts) * self.step
        self.curr_restarts += 1
        self.num_restarts += 1
        return True


@dataclass
class Restart:
    """Dispatches to the active restart policy."""

    mode: RestartMode = RestartMode.GLUCOSE
    luby: Luby = field(default_factory=Luby)
    glucose: Glucose = field(default_factory=Glucose)

    def set_restart_mode(self, mode: RestartMode) -> None:
        self.mode = mode

    def swap_mode(self) -> None:
        self.mode = RestartMode.LUBY if self.mode is RestartMode.GLUCOSE else RestartMode.GLUCOSE

    def trigger_restart(self, curr_confl: int) -> bool:
        if self.mode is RestartMode.GLUCOSE:
            return self.glucose.trigger_restart(curr_confl)
        return self.luby.trigger_restart(curr_confl)

    def block_restart(self, curr_confl: int) -> bool:
        if self.mode is RestartMode.GLUCOSE:
            return self.glucose.block_restart(curr_confl)
        return True