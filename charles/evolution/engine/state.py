from enum import Enum

from charles.exceptions import StateTransitionError


class EngineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class EndReason(Enum):
    """Why an evolution run stopped, with its numeric code and message."""

    COMPLETED = (0, "Evolution completed")
    IDEAL_SOLUTION_FOUND = (1, "Ideal solution found")
    POPULATION_PERISHED = (2, "Population perished")

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message


VALID_TRANSITIONS: dict[EngineState, set[EngineState]] = {
    EngineState.IDLE: {
        EngineState.RUNNING,
    },
    EngineState.RUNNING: {
        EngineState.TERMINATED,
        EngineState.IDLE,  # aborted by a caller-contract violation
    },
    EngineState.TERMINATED: {
        EngineState.RUNNING,
        EngineState.IDLE,
    },
}


def is_valid_transition(current: EngineState, new: EngineState) -> bool:
    if current == new:
        return new != EngineState.RUNNING
    return new in VALID_TRANSITIONS.get(current, set())


def validate_transition(current: EngineState, new: EngineState) -> None:
    if not is_valid_transition(current, new):
        valid_next = VALID_TRANSITIONS.get(current, set())
        raise StateTransitionError(
            f"Invalid state transition: {current.value} -> {new.value}. "
            f"Valid transitions from {current.value}: {sorted(s.value for s in valid_next)}"
        )
