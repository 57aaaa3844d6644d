from __future__ import annotations

from typing import Iterable, Optional, Tuple

from .models import ProviderError


class BootstrapError(Exception):
    """Base class for terminal bootstrap failures."""


class FundingExhaustedError(BootstrapError):
    """Every funding provider failed; the player has to fund the wallet manually."""

    def __init__(self, causes: Iterable[ProviderError], *, faucet_url: Optional[str] = None) -> None:
        self.causes: Tuple[ProviderError, ...] = tuple(causes)
        self.faucet_url = faucet_url
        message = "All airdrop attempts failed. Please fund your wallet using web faucet:"
        if faucet_url:
            message = f"{message} {faucet_url}"
        super().__init__(message)


class InitError(BootstrapError):
    """The session-initialization transaction failed; registration was not attempted."""


class RegistrationFailedError(BootstrapError):
    """Backend registration failed after the session was created on the ledger."""


class BootstrapInProgressError(BootstrapError):
    """A bootstrap run is already in flight for this orchestrator."""


class UnknownStepError(LookupError):
    """A step name outside the tracker's declared set was used."""


class StepTransitionError(ValueError):
    """A terminal step was asked to change state."""


__all__ = [
    "BootstrapError",
    "FundingExhaustedError",
    "InitError",
    "RegistrationFailedError",
    "BootstrapInProgressError",
    "UnknownStepError",
    "StepTransitionError",
]
