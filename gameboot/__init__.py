"""Player bootstrap for the on-chain game: funding fallback, session init, registration."""

__version__ = "0.1.0"
