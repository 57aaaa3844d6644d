from __future__ import annotations

from ..connector.interface import IBackendClient, IGameProgram
from ..utils.logging import get_logger
from .errors import InitError, RegistrationFailedError
from .models import Actor


class GameInitializer:
    """Creates the on-ledger game session, then registers the player with the backend.

    Registration runs only after the session transaction is confirmed. A
    failed registration leaves the session in place; nothing is rolled back.
    With ``check_existing_session`` an actor that already owns a session skips
    the transaction and goes straight to registration.
    """

    def __init__(
        self,
        *,
        program: IGameProgram,
        backend: IBackendClient,
        check_existing_session: bool = True,
    ) -> None:
        self._program = program
        self._backend = backend
        self._check_existing = check_existing_session
        self.log = get_logger(__name__)

    async def initialize_and_register(self, actor: Actor) -> None:
        await self._initialize(actor)
        try:
            await self._backend.register_player(actor.address)
        except Exception as exc:
            raise RegistrationFailedError(f"registration failed: {exc}") from exc
        self.log.info("player_registered", extra={"address": actor.address})

    async def _initialize(self, actor: Actor) -> None:
        try:
            if self._check_existing and await self._program.session_exists(actor.address):
                self.log.info("session_exists", extra={"address": actor.address})
                return
            signature = await self._program.initialize_session(actor.address)
        except Exception as exc:
            raise InitError(f"session initialization failed: {exc}") from exc
        self.log.info("session_initialized", extra={"address": actor.address, "signature": signature})


__all__ = ["GameInitializer"]
