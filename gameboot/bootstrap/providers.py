from __future__ import annotations

from typing import Protocol

from ..connector.interface import IBackendClient, ILedgerClient
from .models import Actor, ProviderError


class ProviderStrategy(Protocol):
    """One way of funding an actor. ``attempt`` raises on failure."""

    name: str

    async def attempt(self, actor: Actor, amount: int) -> None:  # pragma: no cover - protocol
        ...


class RpcAirdropStrategy:
    """Faucet airdrop through a ledger RPC endpoint."""

    def __init__(self, ledger: ILedgerClient, *, name: str = "rpc_airdrop") -> None:
        self.name = name
        self._ledger = ledger

    async def attempt(self, actor: Actor, amount: int) -> None:
        await self._ledger.request_airdrop(actor.address, amount)

    def __repr__(self) -> str:
        return f"RpcAirdropStrategy(name={self.name!r}, endpoint={self._ledger.endpoint!r})"


class BackendGrantStrategy:
    """Grant issued by the game backend; the amount is decided server side."""

    def __init__(self, backend: IBackendClient, *, name: str = "backend_grant") -> None:
        self.name = name
        self._backend = backend

    async def attempt(self, actor: Actor, amount: int) -> None:
        if not await self._backend.request_grant(actor.address):
            raise ProviderError(self.name, "backend declined the grant")

    def __repr__(self) -> str:
        return f"BackendGrantStrategy(name={self.name!r})"


__all__ = ["ProviderStrategy", "RpcAirdropStrategy", "BackendGrantStrategy"]
