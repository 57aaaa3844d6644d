from __future__ import annotations

from typing import List

from ..app.config import AppConfig
from ..bootstrap.providers import BackendGrantStrategy, ProviderStrategy, RpcAirdropStrategy
from .backend import BackendConnector
from .solana_rpc import SolanaRpcConnector


def build_ledger(cfg: AppConfig, *, alternate: bool = False) -> SolanaRpcConnector:
    endpoint = cfg.alternate_rpc_url if alternate else cfg.rpc_url
    return SolanaRpcConnector(
        endpoint,
        commitment=cfg.commitment,
        timeout=cfg.http_timeout_secs,
        confirm_timeout_secs=cfg.confirm_timeout_secs,
        confirm_poll_secs=cfg.confirm_poll_secs,
    )


def build_backend(cfg: AppConfig) -> BackendConnector:
    return BackendConnector(
        cfg.backend_url,
        grant_path=cfg.grant_path,
        register_path=cfg.register_path,
        timeout=cfg.http_timeout_secs,
    )


def build_strategies(
    *,
    primary: SolanaRpcConnector,
    alternate: SolanaRpcConnector,
    backend: BackendConnector,
) -> List[ProviderStrategy]:
    # Priority order: primary faucet, alternate faucet, backend grant.
    return [
        RpcAirdropStrategy(primary, name="rpc_airdrop"),
        RpcAirdropStrategy(alternate, name="alternate_rpc_airdrop"),
        BackendGrantStrategy(backend),
    ]


__all__ = ["build_ledger", "build_backend", "build_strategies"]
