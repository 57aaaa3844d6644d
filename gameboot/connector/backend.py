from __future__ import annotations

from typing import Any, Dict

from ..utils.logging import get_logger
from .base import BaseConnector
from .interface import ConnectorError


class BackendConnector(BaseConnector):
    """HTTP client for the game backend (faucet grants and player registry)."""

    def __init__(
        self,
        base_url: str,
        *,
        grant_path: str = "/airdrop",
        register_path: str = "/players",
        timeout: float = 10.0,
    ) -> None:
        super().__init__(base_url, timeout=timeout)
        self._grant_path = grant_path
        self._register_path = register_path
        self.log = get_logger("gameboot.connector.backend")

    async def request_grant(self, address: str) -> bool:
        try:
            resp = await self._post_json(self._grant_path, {"address": address})
        except ConnectorError as exc:
            self.log.warning("backend_grant_unreachable", extra={"address": address, "error": str(exc)})
            return False
        if not resp.is_success:
            self.log.warning(
                "backend_grant_rejected",
                extra={"address": address, "status": resp.status_code, "body": resp.text[:200]},
            )
            return False
        body = _json_or_empty(resp)
        # Some deployments answer with an empty 200, others with {"success": bool}
        return bool(body.get("success", True))

    async def register_player(self, address: str) -> None:
        resp = await self._post_json(self._register_path, {"address": address})
        if not resp.is_success:
            raise ConnectorError(
                f"player registration rejected (HTTP {resp.status_code}): {resp.text[:200]}"
            )


def _json_or_empty(resp) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


__all__ = ["BackendConnector"]
