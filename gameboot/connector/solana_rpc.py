from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any, Dict, List, Optional

from ..utils.logging import get_logger
from .base import BaseConnector
from .interface import ConnectorError, ConnectorTimeoutError, RpcError, TransactionFailedError

DEFAULT_PUBLIC_RPC = "https://api.devnet.solana.com"

# processed < confirmed < finalized
_COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}


class SolanaRpcConnector(BaseConnector):
    """Minimal Solana JSON-RPC client covering balance, faucet and transaction calls."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        commitment: str = "confirmed",
        timeout: float = 10.0,
        confirm_timeout_secs: float = 60.0,
        confirm_poll_secs: float = 0.5,
    ) -> None:
        if commitment not in _COMMITMENT_RANK:
            raise ValueError(f"unsupported commitment {commitment}")
        self.endpoint = endpoint or DEFAULT_PUBLIC_RPC
        super().__init__(self.endpoint, timeout=timeout)
        self.commitment = commitment
        self._confirm_timeout = confirm_timeout_secs
        self._confirm_poll = confirm_poll_secs
        self._ids = itertools.count(1)
        self.log = get_logger("gameboot.connector.rpc")

    async def _call(self, method: str, params: List[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        resp = await self._post_json("", payload)
        try:
            body = resp.json()
        except ValueError as exc:
            raise ConnectorError(f"{method}: non-JSON response (HTTP {resp.status_code})") from exc
        if not isinstance(body, dict):
            raise ConnectorError(f"{method}: unexpected response {body!r}")
        err = body.get("error")
        if err:
            if isinstance(err, dict):
                raise RpcError(err.get("code"), str(err.get("message") or err))
            # some proxies return a bare string in place of the error object
            raise RpcError(None, str(err))
        if resp.status_code >= 400:
            raise ConnectorError(f"{method}: HTTP {resp.status_code}")
        return body.get("result")

    async def get_balance(self, address: str) -> int:
        result = await self._call("getBalance", [address, {"commitment": self.commitment}])
        value = result.get("value") if isinstance(result, dict) else result
        return int(value)

    async def request_airdrop(self, address: str, lamports: int) -> str:
        signature = await self._call(
            "requestAirdrop", [address, int(lamports), {"commitment": self.commitment}]
        )
        self.log.info(
            "airdrop_requested",
            extra={"endpoint": self.endpoint, "address": address, "lamports": lamports, "signature": signature},
        )
        await self.confirm_signature(signature)
        return signature

    async def send_transaction(self, tx_b64: str) -> str:
        return await self._call(
            "sendTransaction",
            [tx_b64, {"encoding": "base64", "preflightCommitment": self.commitment}],
        )

    async def _signature_status(self, signature: str) -> Optional[Dict[str, Any]]:
        result = await self._call(
            "getSignatureStatuses", [[signature], {"searchTransactionHistory": True}]
        )
        values = (result or {}).get("value") or [None]
        return values[0]

    async def confirm_signature(self, signature: str) -> None:
        wanted = _COMMITMENT_RANK[self.commitment]
        deadline = time.monotonic() + self._confirm_timeout
        while True:
            status = await self._signature_status(signature)
            if status is not None:
                if status.get("err") is not None:
                    raise TransactionFailedError(signature, status["err"])
                reached = _COMMITMENT_RANK.get(status.get("confirmationStatus") or "processed", 0)
                if reached >= wanted:
                    return
            if time.monotonic() >= deadline:
                raise ConnectorTimeoutError(
                    f"signature {signature} not {self.commitment} after {self._confirm_timeout}s"
                )
            await asyncio.sleep(self._confirm_poll)

    async def account_exists(self, address: str) -> bool:
        result = await self._call(
            "getAccountInfo", [address, {"encoding": "base64", "commitment": self.commitment}]
        )
        return bool(result and result.get("value"))


__all__ = ["SolanaRpcConnector", "DEFAULT_PUBLIC_RPC"]
