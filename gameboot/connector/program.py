from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from solders.pubkey import Pubkey

from ..utils.logging import get_logger
from .interface import ConnectorError, ILedgerClient


class TransactionSource(Protocol):
    """Supplies the wallet-signed session-initialization transaction."""

    async def session_init_tx(self, address: str) -> str:
        """Return the signed transaction for ``address`` as base64."""


class SessionLocator(Protocol):
    """Maps a player address to the address of that player's session account."""

    def session_address(self, address: str) -> str:
        """Return the base58 session account address owned by ``address``."""


class FileTransactionSource:
    """Reads a pre-signed base64 transaction exported by the wallet."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def session_init_tx(self, address: str) -> str:
        if not self._path.exists():
            raise ConnectorError(f"session transaction file not found: {self._path}")
        tx = self._path.read_text(encoding="utf-8").strip()
        if not tx:
            raise ConnectorError(f"session transaction file is empty: {self._path}")
        return tx


class PdaSessionLocator:
    """Session account as a program-derived address seeded by ``seed`` and the player key."""

    def __init__(self, *, program_id: str, seed: str = "game") -> None:
        self._program_id = Pubkey.from_string(program_id)
        self._seed = seed.encode("utf-8")

    def session_address(self, address: str) -> str:
        try:
            player = Pubkey.from_string(address)
        except ValueError as exc:
            raise ConnectorError(f"invalid player address {address!r}") from exc
        pda, _bump = Pubkey.find_program_address([self._seed, bytes(player)], self._program_id)
        return str(pda)


class RpcGameProgram:
    """Game program facade: submits the session-init transaction over ledger RPC."""

    def __init__(
        self,
        *,
        ledger: ILedgerClient,
        tx_source: TransactionSource,
        locator: Optional[SessionLocator] = None,
    ) -> None:
        self._ledger = ledger
        self._tx_source = tx_source
        self._locator = locator
        self.log = get_logger("gameboot.connector.program")

    async def initialize_session(self, address: str) -> str:
        tx = await self._tx_source.session_init_tx(address)
        signature = await self._ledger.send_transaction(tx)
        self.log.info("session_tx_sent", extra={"address": address, "signature": signature})
        await self._ledger.confirm_signature(signature)
        return signature

    async def session_exists(self, address: str) -> bool:
        # Without a locator there is no way to tell; treat every player as new
        if self._locator is None:
            return False
        session = self._locator.session_address(address)
        exists = await self._ledger.account_exists(session)
        self.log.debug("session_lookup", extra={"address": address, "session": session, "exists": exists})
        return exists


__all__ = [
    "TransactionSource",
    "SessionLocator",
    "FileTransactionSource",
    "PdaSessionLocator",
    "RpcGameProgram",
]
