# Connector package exports

from .interface import (
    IBackendClient,
    IGameProgram,
    ILedgerClient,
    ConnectorError,
    ConnectorTimeoutError,
    RpcError,
    TransactionFailedError,
)

from .backend import BackendConnector
from .program import FileTransactionSource, PdaSessionLocator, RpcGameProgram, SessionLocator, TransactionSource
from .solana_rpc import DEFAULT_PUBLIC_RPC, SolanaRpcConnector

__all__ = [
    # Interface
    "IBackendClient",
    "IGameProgram",
    "ILedgerClient",

    # Exceptions
    "ConnectorError",
    "ConnectorTimeoutError",
    "RpcError",
    "TransactionFailedError",

    # Implementations
    "BackendConnector",
    "FileTransactionSource",
    "PdaSessionLocator",
    "SessionLocator",
    "RpcGameProgram",
    "TransactionSource",
    "SolanaRpcConnector",
    "DEFAULT_PUBLIC_RPC",
]
