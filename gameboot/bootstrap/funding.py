from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from ..connector.interface import ILedgerClient
from ..utils.logging import get_logger
from .models import Actor, FundingOutcome, ProviderError
from .providers import ProviderStrategy


class FundingProvisioner:
    """Brings an actor up to a minimum balance through an ordered list of providers.

    Providers are tried one at a time in declaration order. The first success
    ends the run; a failure is recorded and the next provider is tried. Each
    provider is attempted at most once per call.
    """

    def __init__(
        self,
        *,
        ledger: ILedgerClient,
        strategies: Sequence[ProviderStrategy] = (),
        airdrop_amount: Optional[int] = None,
        attempt_timeout_secs: Optional[float] = 30.0,
    ) -> None:
        self._ledger = ledger
        self._strategies = list(strategies)
        self._airdrop_amount = airdrop_amount
        self._attempt_timeout = attempt_timeout_secs
        self.log = get_logger(__name__)

    @property
    def strategies(self) -> List[ProviderStrategy]:
        return list(self._strategies)

    async def ensure_funded(
        self,
        actor: Actor,
        min_amount: int,
        strategies: Optional[Sequence[ProviderStrategy]] = None,
    ) -> FundingOutcome:
        chain = list(strategies) if strategies is not None else self._strategies
        if not chain:
            raise ValueError("at least one funding strategy is required")
        if min_amount <= 0:
            raise ValueError(f"min_amount must be positive, got {min_amount}")

        balance = await self._ledger.get_balance(actor.address)
        if balance >= min_amount:
            self.log.info(
                "funding_skipped",
                extra={"address": actor.address, "balance": balance, "min_amount": min_amount},
            )
            return FundingOutcome.skipped(balance)

        amount = self._airdrop_amount or min_amount
        causes: List[ProviderError] = []
        for index, strategy in enumerate(chain, start=1):
            try:
                await self._attempt(strategy, actor, amount)
            except Exception as exc:
                error = _as_provider_error(strategy.name, exc)
                causes.append(error)
                self.log.warning(
                    "funding_attempt_failed",
                    extra={"attempt": index, "provider": strategy.name, "error": error.message},
                )
                continue
            self.log.info(
                "funding_succeeded",
                extra={"attempt": index, "provider": strategy.name, "address": actor.address, "amount": amount},
            )
            return FundingOutcome.funded(balance, strategy.name, causes)

        self.log.error(
            "funding_exhausted",
            extra={"address": actor.address, "causes": [str(c) for c in causes]},
        )
        return FundingOutcome.exhausted(balance, causes)

    async def _attempt(self, strategy: ProviderStrategy, actor: Actor, amount: int) -> None:
        if self._attempt_timeout is None:
            await strategy.attempt(actor, amount)
            return
        try:
            await asyncio.wait_for(strategy.attempt(actor, amount), timeout=self._attempt_timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderError(strategy.name, f"timed out after {self._attempt_timeout}s", cause=exc) from exc


def _as_provider_error(provider: str, exc: Exception) -> ProviderError:
    if isinstance(exc, ProviderError) and exc.provider == provider:
        return exc
    return ProviderError(provider, str(exc) or type(exc).__name__, cause=exc)


__all__ = ["FundingProvisioner"]
