"""Search modes and the switches between them."""

from __future__ import annotations

import enum
import math

from jigsat.restart import RestartMode


class SearchMode(enum.Enum):
    STABLE = "stable"
    FOCUS = "focus"
    ONLY_STABLE = "only_stable"
    ONLY_FOCUS = "only_focus"


def adapt_solver(solver, decisions) -> bool:
    """Fix the strategy for the rest of the run based on early statistics; True if changed."""
    solver.adapt_strategies = False
    if solver.num_conflicts:
        ratio = solver.num_decisions / solver.num_conflicts
    else:
        ratio = math.inf if solver.num_decisions else math.nan
    if ratio <= 1.2:
        print("c Adjusting for low decision levels")
        solver.restart.set_restart_mode(RestartMode.GLUCOSE)
        solver.search_mode = SearchMode.ONLY_FOCUS
        return True

    if solver.stats.no_decision_conflict < 30000:
        print("c Adjusting for low successive conflicts")
        solver.restart.set_restart_mode(RestartMode.LUBY)
        solver.search_mode = SearchMode.ONLY_STABLE
        decisions.set_var_decay(0.999)
        return True
    return False


def change_mode(solver, decisions, target_phase) -> None:
    """Alternate between focus and stable mode and schedule the next change."""
    solver.next_phase_change = solver.ticks + solver.num_phase_changes * 15_000_000
    solver.num_phase_changes += 1
    if solver.search_mode is SearchMode.STABLE:
        print("c Changing mode to Focus mode")
        solver.restart.swap_mode()
        decisions.set_var_decay(0.95)
        solver.search_mode = SearchMode.FOCUS
    elif solver.search_mode is SearchMode.FOCUS:
        print("c Changing mode to Stable mode")
        solver.restart.swap_mode()
        decisions.set_var_decay(0.75)
        solver.search_mode = SearchMode.STABLE
        target_phase.reset()