from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from ..utils.logging import get_logger
from .errors import StepTransitionError, UnknownStepError
from .models import TERMINAL_STEP_STATES, StepState, StepStatus, StepTransition

StepObserver = Callable[[str, StepState], None]


class StepStatusTracker:
    """Holds the state of a fixed set of bootstrap steps.

    Every step starts Pending and may move once, to Completed or Failed.
    Observers are called synchronously for each change. Single writer only.
    """

    def __init__(self, steps: Iterable[str], *, observers: Optional[List[StepObserver]] = None) -> None:
        self._steps: Dict[str, StepStatus] = {}
        for name in steps:
            if name in self._steps:
                raise ValueError(f"duplicate step {name!r}")
            self._steps[name] = StepStatus(name=name)
        if not self._steps:
            raise ValueError("tracker requires at least one step")
        self._observers: List[StepObserver] = list(observers or [])
        self._transitions: List[StepTransition] = []
        self.log = get_logger(__name__)

    def subscribe(self, observer: StepObserver) -> None:
        self._observers.append(observer)

    def get(self, step_name: str) -> StepStatus:
        try:
            return self._steps[step_name]
        except KeyError:
            raise UnknownStepError(step_name) from None

    def set_status(self, step_name: str, state: StepState) -> None:
        status = self.get(step_name)
        state = StepState(state)
        if status.state is state:
            return
        if status.state in TERMINAL_STEP_STATES:
            raise StepTransitionError(f"{step_name!r} is already {status.state.value}")
        status.state = state
        self._transitions.append(StepTransition(name=step_name, state=state))
        self.log.info("step_status", extra={"step": step_name, "state": state.value})
        for observer in list(self._observers):
            observer(step_name, state)

    def get_all(self) -> List[StepStatus]:
        return [StepStatus(name=s.name, state=s.state) for s in self._steps.values()]

    @property
    def transitions(self) -> List[StepTransition]:
        return list(self._transitions)


__all__ = ["StepStatusTracker", "StepObserver"]
