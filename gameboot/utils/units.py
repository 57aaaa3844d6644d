from __future__ import annotations

from decimal import Decimal
from typing import Union

LAMPORTS_PER_SOL = 1_000_000_000


def sol_to_lamports(amount: Union[str, float, int, Decimal]) -> int:
    return int(Decimal(str(amount)) * LAMPORTS_PER_SOL)


def lamports_to_sol(lamports: int) -> Decimal:
    return Decimal(lamports) / LAMPORTS_PER_SOL


__all__ = ["LAMPORTS_PER_SOL", "sol_to_lamports", "lamports_to_sol"]
