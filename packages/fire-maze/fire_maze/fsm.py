"""Run-phase state machine: transition table plus named guards."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from fire_maze.types import Phase

Guard = Callable[[Any], bool]


def run_transitions() -> dict[Phase, list[tuple[str, Phase]]]:
    """Transition table for a simulation run.

    A start request leads to ``RUNNING`` from every phase, so a new run can
    interrupt one that is still running or cascading.
    """
    return {
        Phase.IDLE: [("start_requested", Phase.RUNNING)],
        Phase.RUNNING: [
            ("start_requested", Phase.RUNNING),
            ("fire_at_target", Phase.CASCADING),
        ],
        Phase.CASCADING: [
            ("start_requested", Phase.RUNNING),
            ("cascade_done", Phase.SUMMARIZED),
        ],
        Phase.SUMMARIZED: [("start_requested", Phase.RUNNING)],
    }


@dataclass
class PhaseMachine:
    """Current phase and the guard/target pairs leaving each phase.

    Edges are tried in order and the first guard that passes wins.
    """

    state: Phase = Phase.IDLE
    transitions: dict[Phase, list[tuple[str, Phase]]] = field(default_factory=run_transitions)


class PhaseGuards:
    """Maps guard names to predicates over the machine's owner."""

    def __init__(self) -> None:
        self._guards: dict[str, Guard] = {}

    def register(self, name: str, fn: Guard) -> None:
        """Register a named guard. Overwrites if already registered."""
        self._guards[name] = fn

    def check(self, name: str, subject: Any) -> bool:
        """Evaluate a guard. Raises KeyError if not registered."""
        return self._guards[name](subject)


def make_phase_system(
    guards: PhaseGuards,
    on_transition: Callable[[Any, Phase, Phase], None] | None = None,
) -> Callable[[PhaseMachine, Any], Phase | None]:
    """Return a callable that fires at most one transition per evaluation.

    It returns the new phase, or None when no guard passed.
    """

    def phase_system(machine: PhaseMachine, subject: Any) -> Phase | None:
        for guard_name, target in machine.transitions.get(machine.state, ()):
            if guards.check(guard_name, subject):
                old = machine.state
                machine.state = target
                if on_transition is not None:
                    on_transition(subject, old, target)
                return target
        return None

    return phase_system
