"""
Users Auth API - Auth Service Tests

bcrypt and token work must not run on the event loop thread.
"""

import asyncio
import threading

import pytest

from app.auth import service as service_module
from app.auth.passwords import hash_password, verify_password
from app.auth.service import AuthService
from app.auth.tokens import TokenIssuer
from tests.conftest import InMemoryUserRepository


@pytest.fixture
def recorded_threads(monkeypatch):
    """Record the thread each bcrypt call runs on."""
    threads = {"hash": [], "verify": []}

    def recording_hash(password, rounds=None):
        threads["hash"].append(threading.get_ident())
        return hash_password(password, rounds)

    def recording_verify(password, password_hash):
        threads["verify"].append(threading.get_ident())
        return verify_password(password, password_hash)

    monkeypatch.setattr(service_module, "hash_password", recording_hash)
    monkeypatch.setattr(service_module, "verify_password", recording_verify)
    return threads


def _service() -> AuthService:
    return AuthService(InMemoryUserRepository(), TokenIssuer("service-secret"), bcrypt_rounds=4)


class TestThreadpoolOffload:
    """Tests that hashing runs in the threadpool."""

    def test_register_hashes_off_loop(self, recorded_threads):
        async def scenario():
            user = await _service().register_user("frank@mail.com", "pw-1234")
            return threading.get_ident(), user

        loop_thread, user = asyncio.run(scenario())
        assert user.password_hash.split("$")[2] == "04"
        assert recorded_threads["hash"]
        assert loop_thread not in recorded_threads["hash"]
        assert loop_thread not in recorded_threads["verify"]

    def test_login_verifies_off_loop(self, recorded_threads):
        async def scenario():
            service = _service()
            await service.register_user("frank@mail.com", "pw-1234")
            user = await service.authenticate_user("frank@mail.com", "pw-1234")
            return threading.get_ident(), user

        loop_thread, user = asyncio.run(scenario())
        assert user is not None
        assert len(recorded_threads["verify"]) == 2
        assert loop_thread not in recorded_threads["verify"]

    def test_other_requests_progress_while_hashing(self):
        async def scenario():
            ticks = 0

            async def ticker():
                nonlocal ticks
                while True:
                    ticks += 1
                    await asyncio.sleep(0)

            task = asyncio.create_task(ticker())
            await AuthService(
                InMemoryUserRepository(), TokenIssuer("service-secret"), bcrypt_rounds=12
            ).register_user("gina@mail.com", "pw-1234")
            task.cancel()
            return ticks

        assert asyncio.run(scenario()) > 1

    def test_access_token_round_trips(self):
        async def scenario():
            service = _service()
            user = await service.register_user("hal@mail.com", "pw-1234")
            return await service.create_access_token(user)

        token = asyncio.run(scenario())
        assert TokenIssuer("service-secret").verify(token) == "hal@mail.com"
