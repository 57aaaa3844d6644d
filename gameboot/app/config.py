from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..connector.solana_rpc import DEFAULT_PUBLIC_RPC
from ..utils.units import sol_to_lamports

DEFAULT_FAUCET_URL = "https://faucet.solana.com"


@dataclass(slots=True)
class AppConfig:
    backend_url: str
    rpc_url: str = DEFAULT_PUBLIC_RPC
    alternate_rpc_url: str = DEFAULT_PUBLIC_RPC
    grant_path: str = "/airdrop"
    register_path: str = "/players"
    min_balance_sol: float = 0.25
    airdrop_sol: float = 1.0
    attempt_timeout_secs: float = 30.0
    http_timeout_secs: float = 10.0
    confirm_timeout_secs: float = 60.0
    confirm_poll_secs: float = 0.5
    commitment: str = "confirmed"
    faucet_url: str = DEFAULT_FAUCET_URL
    session_program_id: Optional[str] = None
    session_seed: str = "game"
    check_existing_session: bool = True

    @property
    def min_balance_lamports(self) -> int:
        return sol_to_lamports(self.min_balance_sol)

    @property
    def airdrop_lamports(self) -> int:
        return sol_to_lamports(self.airdrop_sol)


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _read_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _pick(payload: Dict[str, Any], key: str, default: Any) -> Any:
    value = payload.get(key)
    return default if value is None else value


def load_config(
    *,
    backend_url: Optional[str] = None,
    rpc_url: Optional[str] = None,
    alternate_rpc_url: Optional[str] = None,
    min_balance_sol: float = 0.25,
    airdrop_sol: float = 1.0,
    config_path: Optional[str] = None,
) -> AppConfig:
    payload: Dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(config_path)
        if path.suffix in {".yaml", ".yml"}:
            payload = _read_yaml(path)
        elif path.suffix == ".json":
            payload = _read_json(path)
        else:
            raise ValueError(f"unsupported config extension: {path.suffix}")

    backend = _pick(payload, "backend_url", backend_url)
    if not backend:
        raise ValueError("backend_url is required")
    endpoints = payload.get("rpc") or {}
    primary = _pick(endpoints, "url", rpc_url) or DEFAULT_PUBLIC_RPC
    # Without an explicit alternate the fallback faucet uses the public endpoint
    alternate = _pick(endpoints, "alternate_url", alternate_rpc_url) or DEFAULT_PUBLIC_RPC
    funding = payload.get("funding") or {}
    timeouts = payload.get("timeouts") or {}
    session = payload.get("session") or {}

    cfg = AppConfig(
        backend_url=str(backend).rstrip("/"),
        rpc_url=primary,
        alternate_rpc_url=alternate,
        grant_path=_pick(payload, "grant_path", "/airdrop"),
        register_path=_pick(payload, "register_path", "/players"),
        min_balance_sol=float(_pick(funding, "min_balance_sol", min_balance_sol)),
        airdrop_sol=float(_pick(funding, "airdrop_sol", airdrop_sol)),
        attempt_timeout_secs=float(_pick(timeouts, "attempt_secs", 30.0)),
        http_timeout_secs=float(_pick(timeouts, "http_secs", 10.0)),
        confirm_timeout_secs=float(_pick(timeouts, "confirm_secs", 60.0)),
        confirm_poll_secs=float(_pick(timeouts, "confirm_poll_secs", 0.5)),
        commitment=str(_pick(endpoints, "commitment", "confirmed")).lower(),
        faucet_url=_pick(funding, "faucet_url", DEFAULT_FAUCET_URL),
        session_program_id=session.get("program_id"),
        session_seed=str(_pick(session, "seed", "game")),
        check_existing_session=bool(_pick(session, "check_existing", True)),
    )
    if cfg.min_balance_sol <= 0:
        raise ValueError("min_balance_sol must be positive")
    return cfg


__all__ = ["AppConfig", "load_config", "DEFAULT_FAUCET_URL"]
