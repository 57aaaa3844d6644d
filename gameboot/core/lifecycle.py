from __future__ import annotations

from typing import List, Protocol, Sequence


class Startable(Protocol):
    async def start(self) -> None: ...

    async def stop(self) -> None: ...


class LifecycleController:
    """Coordinates startup/shutdown for connector-scoped resources."""

    def __init__(self, *, connectors: Sequence[Startable]) -> None:
        self._connectors = list(connectors)
        self._started: List[Startable] = []

    @property
    def started(self) -> bool:
        return bool(self._started)

    async def start(self) -> None:
        if self._started:
            return
        try:
            for connector in self._connectors:
                await connector.start()
                self._started.append(connector)
        except Exception:
            await self.stop()
            raise

    async def stop(self) -> None:
        # Reverse order; every started connector gets a stop even if one fails
        first_error: Exception | None = None
        while self._started:
            connector = self._started.pop()
            try:
                await connector.stop()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    async def __aenter__(self) -> "LifecycleController":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


__all__ = ["LifecycleController", "Startable"]
