from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from gameboot.bootstrap import (
    Actor,
    BootstrapOrchestrator,
    BootstrapResult,
    FundingProvisioner,
    GameInitializer,
    StepState,
)
from gameboot.connector.factory import build_backend, build_ledger, build_strategies
from gameboot.connector.program import FileTransactionSource, PdaSessionLocator, RpcGameProgram
from gameboot.core.lifecycle import LifecycleController
from gameboot.utils.logging import get_logger, setup_logging
from gameboot.utils.units import lamports_to_sol
from .config import AppConfig, load_config


async def run(cfg: AppConfig, *, address: str, session_tx: Path, log_level: str = "INFO") -> BootstrapResult:
    setup_logging(log_level)
    logger = get_logger(__name__)
    primary = build_ledger(cfg)
    alternate = build_ledger(cfg, alternate=True)
    backend = build_backend(cfg)
    strategies = build_strategies(primary=primary, alternate=alternate, backend=backend)
    provisioner = FundingProvisioner(
        ledger=primary,
        strategies=strategies,
        airdrop_amount=cfg.airdrop_lamports,
        attempt_timeout_secs=cfg.attempt_timeout_secs,
    )
    locator = None
    if cfg.session_program_id:
        locator = PdaSessionLocator(program_id=cfg.session_program_id, seed=cfg.session_seed)
    program = RpcGameProgram(
        ledger=primary,
        tx_source=FileTransactionSource(session_tx),
        locator=locator,
    )
    initializer = GameInitializer(
        program=program,
        backend=backend,
        check_existing_session=cfg.check_existing_session,
    )

    def on_progress(step: str, state: StepState) -> None:
        print(f"  [{state.value:>9}] {step}")

    orchestrator = BootstrapOrchestrator(
        provisioner=provisioner,
        initializer=initializer,
        min_amount=cfg.min_balance_lamports,
        faucet_url=cfg.faucet_url,
        on_progress=on_progress,
    )
    lifecycle = LifecycleController(connectors=[primary, alternate, backend])
    logger.info(
        "bootstrap_start",
        extra={"address": address, "rpc": cfg.rpc_url, "alternate_rpc": cfg.alternate_rpc_url},
    )
    async with lifecycle:
        return await orchestrator.run(Actor(address))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="gameboot player bootstrap runner")
    parser.add_argument("--address", required=True, help="player public key (base58)")
    parser.add_argument("--session-tx", required=True, type=Path, help="file holding the signed base64 session-init transaction")
    parser.add_argument("--backend-url", help="game backend base URL")
    parser.add_argument("--rpc-url", help="primary ledger RPC endpoint")
    parser.add_argument("--alternate-rpc-url", help="fallback ledger RPC endpoint")
    parser.add_argument("--min-balance-sol", type=float, default=0.25)
    parser.add_argument("--airdrop-sol", type=float, default=1.0)
    parser.add_argument("--config", dest="config_path")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config(
        backend_url=args.backend_url,
        rpc_url=args.rpc_url,
        alternate_rpc_url=args.alternate_rpc_url,
        min_balance_sol=args.min_balance_sol,
        airdrop_sol=args.airdrop_sol,
        config_path=args.config_path,
    )
    result = asyncio.run(
        run(cfg, address=args.address, session_tx=args.session_tx, log_level=args.log_level)
    )
    if result.ok:
        if result.funding is not None:
            print(f"starting balance: {lamports_to_sol(result.funding.balance)} SOL")
        print("bootstrap complete")
        return 0
    print(result.error_message)
    for cause in result.causes:
        print(f"  - {cause}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
