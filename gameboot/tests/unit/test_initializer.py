"""Unit tests for GameInitializer."""

import pytest
from unittest.mock import AsyncMock, Mock

from gameboot.bootstrap.errors import InitError, RegistrationFailedError
from gameboot.bootstrap.initializer import GameInitializer
from gameboot.bootstrap.models import Actor
from gameboot.tests.stubs import StubBackend, StubProgram

ACTOR = Actor("Player1111111111111111111111111111111111111")


class TestGameInitializer:

    @pytest.mark.asyncio
    async def test_initializes_then_registers(self):
        order = []
        program = Mock()
        program.session_exists = AsyncMock(return_value=False)
        program.initialize_session = AsyncMock(side_effect=lambda a: order.append("init") or "sig")
        backend = Mock()
        backend.register_player = AsyncMock(side_effect=lambda a: order.append("register"))
        initializer = GameInitializer(program=program, backend=backend)

        await initializer.initialize_and_register(ACTOR)

        assert order == ["init", "register"]
        program.initialize_session.assert_awaited_once_with(ACTOR.address)
        backend.register_player.assert_awaited_once_with(ACTOR.address)

    @pytest.mark.asyncio
    async def test_transaction_failure_skips_registration(self):
        program = StubProgram(error=RuntimeError("blockhash not found"))
        backend = StubBackend()
        initializer = GameInitializer(program=program, backend=backend)

        with pytest.raises(InitError) as excinfo:
            await initializer.initialize_and_register(ACTOR)

        assert "blockhash not found" in str(excinfo.value)
        assert backend.registered == []

    @pytest.mark.asyncio
    async def test_registration_failure_keeps_session(self):
        program = StubProgram()
        backend = StubBackend(register_error=RuntimeError("HTTP 503"))
        initializer = GameInitializer(program=program, backend=backend)

        with pytest.raises(RegistrationFailedError):
            await initializer.initialize_and_register(ACTOR)

        assert program.initialized == [ACTOR.address]
        assert ACTOR.address in program.existing

    @pytest.mark.asyncio
    async def test_existing_session_is_not_initialized_twice(self):
        program = StubProgram(existing=[ACTOR.address])
        backend = StubBackend()
        initializer = GameInitializer(program=program, backend=backend)

        await initializer.initialize_and_register(ACTOR)

        assert program.initialized == []
        assert backend.registered == [ACTOR.address]

    @pytest.mark.asyncio
    async def test_existing_session_check_can_be_disabled(self):
        program = StubProgram(existing=[ACTOR.address])
        initializer = GameInitializer(program=program, backend=StubBackend(), check_existing_session=False)

        await initializer.initialize_and_register(ACTOR)

        assert program.checked == []
        assert program.initialized == [ACTOR.address]

    @pytest.mark.asyncio
    async def test_session_lookup_failure_is_an_init_error(self):
        program = Mock()
        program.session_exists = AsyncMock(side_effect=ConnectionError("rpc down"))
        program.initialize_session = AsyncMock()
        backend = StubBackend()
        initializer = GameInitializer(program=program, backend=backend)

        with pytest.raises(InitError):
            await initializer.initialize_and_register(ACTOR)

        program.initialize_session.assert_not_awaited()
        assert backend.registered == []
