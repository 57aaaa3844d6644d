from __future__ import annotations

from typing import Optional, Protocol


class ConnectorError(Exception):
    """Base error for ledger, program and backend connectors."""


class ConnectorTimeoutError(ConnectorError):
    """Raised when a remote call or a confirmation wait exceeds its budget."""


class RpcError(ConnectorError):
    """JSON-RPC error object returned by a ledger node."""

    def __init__(self, code: Optional[int], message: str) -> None:
        super().__init__(f"rpc error {code}: {message}")
        self.code = code
        self.message = message


class TransactionFailedError(ConnectorError):
    """A submitted transaction reached the ledger but carries an error."""

    def __init__(self, signature: str, err: object) -> None:
        super().__init__(f"transaction {signature} failed: {err}")
        self.signature = signature
        self.err = err


class ILedgerClient(Protocol):
    """Async ledger RPC contract used by funding strategies and the game program."""

    endpoint: str

    async def start(self) -> None:
        """Open the underlying HTTP transport."""

    async def stop(self) -> None:
        """Close the underlying HTTP transport."""

    async def get_balance(self, address: str) -> int:
        """Return the balance of ``address`` in lamports."""

    async def request_airdrop(self, address: str, lamports: int) -> str:
        """Request faucet funds, wait for confirmation and return the signature."""

    async def send_transaction(self, tx_b64: str) -> str:
        """Submit a signed base64 transaction and return its signature."""

    async def confirm_signature(self, signature: str) -> None:
        """Wait until ``signature`` reaches the configured commitment."""

    async def account_exists(self, address: str) -> bool:
        """Return True when an account is allocated at ``address``."""


class IBackendClient(Protocol):
    """Game backend contract: faucet grants and player indexing."""

    async def start(self) -> None:
        """Open the underlying HTTP transport."""

    async def stop(self) -> None:
        """Close the underlying HTTP transport."""

    async def request_grant(self, address: str) -> bool:
        """Ask the backend to fund ``address``; True when the grant was issued."""

    async def register_player(self, address: str) -> None:
        """Record ``address`` with the indexer; raise on failure."""


class IGameProgram(Protocol):
    """On-ledger game program contract consumed by the initializer."""

    async def initialize_session(self, address: str) -> str:
        """Submit the session-initialization transaction and return its signature."""

    async def session_exists(self, address: str) -> bool:
        """Return True when the actor already has an initialized session."""


__all__ = [
    "ConnectorError",
    "ConnectorTimeoutError",
    "RpcError",
    "TransactionFailedError",
    "ILedgerClient",
    "IBackendClient",
    "IGameProgram",
]
