from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

STEP_FUNDING = "Requesting airdrop"
STEP_INIT = "Initializing game"
BOOTSTRAP_STEPS: Tuple[str, ...] = (STEP_FUNDING, STEP_INIT)


class StepState(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STEP_STATES = {StepState.COMPLETED, StepState.FAILED}


class FundingStatus(str, Enum):
    SKIPPED = "skipped"
    FUNDED = "funded"
    EXHAUSTED = "exhausted"


class RunState(str, Enum):
    START = "start"
    FUNDING_IN_PROGRESS = "funding_in_progress"
    FUNDING_FAILED = "funding_failed"
    FUNDING_COMPLETE = "funding_complete"
    INIT_IN_PROGRESS = "init_in_progress"
    INIT_FAILED = "init_failed"
    COMPLETE = "complete"


TERMINAL_RUN_STATES = {RunState.FUNDING_FAILED, RunState.INIT_FAILED, RunState.COMPLETE}


class BootstrapOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class Actor:
    """Player identity on the ledger, identified by its base58 public key."""

    address: str

    def __str__(self) -> str:
        return self.address


@dataclass(slots=True)
class StepStatus:
    name: str
    state: StepState = StepState.PENDING


@dataclass(frozen=True, slots=True)
class StepTransition:
    name: str
    state: StepState
    ts: float = field(default_factory=lambda: time.time())


class ProviderError(Exception):
    """One funding strategy failed; carries the provider name and the original cause."""

    def __init__(self, provider: str, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.cause = cause


@dataclass(frozen=True, slots=True)
class FundingOutcome:
    status: FundingStatus
    balance: int
    provider: Optional[str] = None
    causes: Tuple[ProviderError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is not FundingStatus.EXHAUSTED

    @classmethod
    def skipped(cls, balance: int) -> "FundingOutcome":
        return cls(status=FundingStatus.SKIPPED, balance=balance)

    @classmethod
    def funded(cls, balance: int, provider: str, causes: List[ProviderError]) -> "FundingOutcome":
        return cls(status=FundingStatus.FUNDED, balance=balance, provider=provider, causes=tuple(causes))

    @classmethod
    def exhausted(cls, balance: int, causes: List[ProviderError]) -> "FundingOutcome":
        return cls(status=FundingStatus.EXHAUSTED, balance=balance, causes=tuple(causes))


@dataclass(frozen=True, slots=True)
class BootstrapResult:
    outcome: BootstrapOutcome
    state: RunState
    causes: Tuple[ProviderError, ...] = ()
    terminal_error: Optional[BaseException] = None
    error_message: Optional[str] = None
    retry_enabled: bool = False
    funding: Optional[FundingOutcome] = None
    steps: Tuple[StepStatus, ...] = ()
    transitions: Tuple[StepTransition, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome is BootstrapOutcome.SUCCESS


__all__ = [
    "STEP_FUNDING",
    "STEP_INIT",
    "BOOTSTRAP_STEPS",
    "StepState",
    "TERMINAL_STEP_STATES",
    "FundingStatus",
    "RunState",
    "TERMINAL_RUN_STATES",
    "BootstrapOutcome",
    "Actor",
    "StepStatus",
    "StepTransition",
    "ProviderError",
    "FundingOutcome",
    "BootstrapResult",
]
