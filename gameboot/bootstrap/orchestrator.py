from __future__ import annotations

import asyncio
from typing import Callable, Optional, Sequence, Tuple

from ..utils.logging import get_logger
from .errors import BootstrapInProgressError, FundingExhaustedError
from .funding import FundingProvisioner
from .initializer import GameInitializer
from .models import (
    BOOTSTRAP_STEPS,
    STEP_FUNDING,
    STEP_INIT,
    Actor,
    BootstrapOutcome,
    BootstrapResult,
    FundingOutcome,
    ProviderError,
    RunState,
    StepState,
    TERMINAL_RUN_STATES,
)
from .tracker import StepObserver, StepStatusTracker

TriggerObserver = Callable[[bool], None]


class BootstrapOrchestrator:
    """Single entry point for getting a new player into a game.

    ``run`` funds the actor if needed, then initializes the session and
    registers the player. Progress is reported per step; the returned
    ``BootstrapResult`` carries the terminal state and every cause. Only one
    run may be in flight at a time.
    """

    def __init__(
        self,
        *,
        provisioner: FundingProvisioner,
        initializer: GameInitializer,
        min_amount: int,
        faucet_url: Optional[str] = None,
        on_progress: Optional[StepObserver] = None,
        on_trigger: Optional[TriggerObserver] = None,
        steps: Sequence[str] = BOOTSTRAP_STEPS,
    ) -> None:
        self._provisioner = provisioner
        self._initializer = initializer
        self._min_amount = min_amount
        self._faucet_url = faucet_url
        self._on_progress = on_progress
        self._on_trigger = on_trigger
        self._steps = tuple(steps)
        self._guard = asyncio.Lock()
        self._trigger_enabled = True
        self._state = RunState.START
        self.log = get_logger(__name__)

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._guard.locked()

    @property
    def trigger_enabled(self) -> bool:
        return self._trigger_enabled and not self._guard.locked()

    async def run(self, actor: Actor) -> BootstrapResult:
        if self._guard.locked():
            raise BootstrapInProgressError(f"bootstrap already running for {actor.address}")
        async with self._guard:
            self._set_trigger(False)
            observers = [self._on_progress] if self._on_progress else []
            tracker = StepStatusTracker(self._steps, observers=observers)
            self._state = RunState.START
            try:
                result = await self._run(actor, tracker)
            except BaseException:
                # Whatever escaped the run, the orchestrator must stay retryable
                self.log.error("bootstrap_aborted", extra={"address": actor.address, "state": self._state.value})
                if self._state not in TERMINAL_RUN_STATES:
                    self._state = RunState.START
                if not self._trigger_enabled:
                    self._set_trigger(True)
                raise
        self.log.info(
            "bootstrap_done",
            extra={
                "address": actor.address,
                "outcome": result.outcome.value,
                "state": result.state.value,
                "error": result.error_message,
            },
        )
        return result

    async def _run(self, actor: Actor, tracker: StepStatusTracker) -> BootstrapResult:
        self._state = RunState.FUNDING_IN_PROGRESS
        funding: Optional[FundingOutcome] = None
        error: Optional[Exception] = None
        try:
            funding = await self._provisioner.ensure_funded(actor, self._min_amount)
        except Exception as exc:
            self.log.error("funding_failed", extra={"address": actor.address}, exc_info=True)
            error = exc
        else:
            if not funding.ok:
                error = FundingExhaustedError(funding.causes, faucet_url=self._faucet_url)

        if error is not None:
            tracker.set_status(STEP_FUNDING, StepState.FAILED)
            causes = funding.causes if funding is not None else ()
            return self._fail(
                RunState.FUNDING_FAILED,
                tracker,
                error,
                f"Airdrop request failed: {error}",
                causes=causes,
                funding=funding,
            )

        tracker.set_status(STEP_FUNDING, StepState.COMPLETED)
        self._state = RunState.FUNDING_COMPLETE

        self._state = RunState.INIT_IN_PROGRESS
        try:
            await self._initializer.initialize_and_register(actor)
        except Exception as exc:
            self.log.error("init_failed", extra={"address": actor.address}, exc_info=True)
            tracker.set_status(STEP_INIT, StepState.FAILED)
            return self._fail(
                RunState.INIT_FAILED,
                tracker,
                exc,
                f"Initializing game failed: {exc}",
                funding=funding,
            )

        tracker.set_status(STEP_INIT, StepState.COMPLETED)
        self._state = RunState.COMPLETE
        return BootstrapResult(
            outcome=BootstrapOutcome.SUCCESS,
            state=RunState.COMPLETE,
            funding=funding,
            steps=tuple(tracker.get_all()),
            transitions=tuple(tracker.transitions),
        )

    def _fail(
        self,
        state: RunState,
        tracker: StepStatusTracker,
        error: Exception,
        message: str,
        *,
        causes: Tuple[ProviderError, ...] = (),
        funding: Optional[FundingOutcome] = None,
    ) -> BootstrapResult:
        self._state = state
        self._set_trigger(True)
        return BootstrapResult(
            outcome=BootstrapOutcome.FAILURE,
            state=state,
            causes=tuple(causes),
            terminal_error=error,
            error_message=message,
            retry_enabled=True,
            funding=funding,
            steps=tuple(tracker.get_all()),
            transitions=tuple(tracker.transitions),
        )

    def _set_trigger(self, enabled: bool) -> None:
        self._trigger_enabled = enabled
        if self._on_trigger is not None:
            self._on_trigger(enabled)


__all__ = ["BootstrapOrchestrator", "TriggerObserver"]
