"""Unit tests for FundingProvisioner."""

import pytest

from gameboot.bootstrap.funding import FundingProvisioner
from gameboot.bootstrap.models import Actor, FundingStatus, ProviderError
from gameboot.utils.units import sol_to_lamports
from gameboot.tests.stubs import StubLedger, StubStrategy

ACTOR = Actor("Player1111111111111111111111111111111111111")
MIN_AMOUNT = sol_to_lamports("0.25")


class TestFundingProvisioner:
    """Ordered fallback with short-circuit and aggregated causes."""

    @pytest.mark.asyncio
    async def test_sufficient_balance_skips_all_providers(self):
        ledger = StubLedger(balance_sol=0.30)
        strategies = [StubStrategy("a"), StubStrategy("b")]
        provisioner = FundingProvisioner(ledger=ledger, strategies=strategies)

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.status is FundingStatus.SKIPPED
        assert outcome.ok
        assert outcome.balance == sol_to_lamports("0.30")
        assert all(s.attempts == [] for s in strategies)
        assert ledger.balance_queries == [ACTOR.address]

    @pytest.mark.asyncio
    async def test_balance_equal_to_threshold_is_enough(self):
        ledger = StubLedger(balance_sol=0.25)
        strategy = StubStrategy("a")
        provisioner = FundingProvisioner(ledger=ledger, strategies=[strategy])

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.status is FundingStatus.SKIPPED
        assert strategy.attempts == []

    @pytest.mark.asyncio
    async def test_first_success_stops_the_chain(self):
        calls = []
        first = StubStrategy("first", calls=calls)
        second = StubStrategy("second", calls=calls)
        provisioner = FundingProvisioner(ledger=StubLedger(balance_sol=0.10), strategies=[first, second])

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.status is FundingStatus.FUNDED
        assert outcome.provider == "first"
        assert outcome.causes == ()
        assert calls == ["first"]
        assert len(second.attempts) == 0

    @pytest.mark.asyncio
    async def test_failures_fall_through_in_declared_order(self):
        calls = []
        strategies = [
            StubStrategy("rpc", error=RuntimeError("rate limited"), calls=calls),
            StubStrategy("alt_rpc", error=RuntimeError("faucet dry"), calls=calls),
            StubStrategy("backend", calls=calls),
            StubStrategy("never", calls=calls),
        ]
        provisioner = FundingProvisioner(ledger=StubLedger(), strategies=strategies)

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.status is FundingStatus.FUNDED
        assert outcome.provider == "backend"
        assert calls == ["rpc", "alt_rpc", "backend"]
        assert [c.provider for c in outcome.causes] == ["rpc", "alt_rpc"]

    @pytest.mark.asyncio
    async def test_exhaustion_keeps_every_cause_in_order(self):
        e1, e2, e3 = RuntimeError("E1"), RuntimeError("E2"), RuntimeError("E3")
        strategies = [
            StubStrategy("s1", error=e1),
            StubStrategy("s2", error=e2),
            StubStrategy("s3", error=e3),
        ]
        provisioner = FundingProvisioner(ledger=StubLedger(balance_sol=0), strategies=strategies)

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.status is FundingStatus.EXHAUSTED
        assert not outcome.ok
        assert len(outcome.causes) == 3
        assert [c.cause for c in outcome.causes] == [e1, e2, e3]
        assert [c.provider for c in outcome.causes] == ["s1", "s2", "s3"]
        assert all(len(s.attempts) == 1 for s in strategies)

    @pytest.mark.asyncio
    async def test_provider_error_raised_by_strategy_is_kept(self):
        err = ProviderError("grant", "backend declined the grant")
        provisioner = FundingProvisioner(ledger=StubLedger(), strategies=[StubStrategy("grant", error=err)])

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.causes == (err,)

    @pytest.mark.asyncio
    async def test_slow_provider_times_out_and_next_is_tried(self):
        slow = StubStrategy("slow", delay=1.0)
        fast = StubStrategy("fast")
        provisioner = FundingProvisioner(
            ledger=StubLedger(), strategies=[slow, fast], attempt_timeout_secs=0.01
        )

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert outcome.provider == "fast"
        assert len(outcome.causes) == 1
        assert outcome.causes[0].provider == "slow"
        assert "timed out" in outcome.causes[0].message

    @pytest.mark.asyncio
    async def test_airdrop_amount_is_passed_to_providers(self):
        strategy = StubStrategy("a")
        provisioner = FundingProvisioner(
            ledger=StubLedger(), strategies=[strategy], airdrop_amount=sol_to_lamports(1)
        )

        await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        assert strategy.attempts == [(ACTOR.address, 1_000_000_000)]

    @pytest.mark.asyncio
    async def test_explicit_strategies_override_defaults(self):
        default = StubStrategy("default")
        override = StubStrategy("override")
        provisioner = FundingProvisioner(ledger=StubLedger(), strategies=[default])

        outcome = await provisioner.ensure_funded(ACTOR, MIN_AMOUNT, [override])

        assert outcome.provider == "override"
        assert default.attempts == []

    @pytest.mark.asyncio
    async def test_preconditions(self):
        provisioner = FundingProvisioner(ledger=StubLedger(), strategies=[])
        with pytest.raises(ValueError):
            await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)

        provisioner = FundingProvisioner(ledger=StubLedger(), strategies=[StubStrategy("a")])
        with pytest.raises(ValueError):
            await provisioner.ensure_funded(ACTOR, 0)

    @pytest.mark.asyncio
    async def test_balance_query_failure_propagates(self):
        ledger = StubLedger(balance_error=ConnectionError("rpc down"))
        strategy = StubStrategy("a")
        provisioner = FundingProvisioner(ledger=ledger, strategies=[strategy])

        with pytest.raises(ConnectionError):
            await provisioner.ensure_funded(ACTOR, MIN_AMOUNT)
        assert strategy.attempts == []
