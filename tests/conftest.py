import os
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENV", "test")
os.environ.setdefault("ORACLE_DECIMALS", "8")
os.environ.setdefault("INITIAL_PRICE", "200000000000")

from stability.core.config import Settings
from stability.models.address import new_address
from stability.services.deployment import Deployment, deploy
from stability.services.oracle import MockPriceFeed

ONE = 10**18
NOW = 1_700_000_000


def _build(price: int = 2000 * 10**8, holders: int = 2, balance: int = 100 * ONE, decimals: int = 8):
    feed = MockPriceFeed(decimals=decimals, initial_answer=price, clock=lambda: NOW)
    users = [new_address() for _ in range(holders)]
    d = deploy(Settings(), price_feed=feed, genesis={u: balance for u in users})
    return d, users


@pytest.fixture(scope="session")
def make_system() -> Callable:
    """Factory usable inside hypothesis tests: returns (deployment, [holder addresses])."""
    return _build


@pytest.fixture
def system():
    return _build()


@pytest.fixture
def deployment(system) -> Deployment:
    return system[0]


@pytest.fixture
def alice(system) -> str:
    return system[1][0]


@pytest.fixture
def bob(system) -> str:
    return system[1][1]


@pytest.fixture
def engine(deployment):
    return deployment.engine


@pytest.fixture
def token(deployment):
    return deployment.token


@pytest.fixture
def feed(deployment) -> MockPriceFeed:
    return deployment.price_feed


@pytest.fixture
def approve_and_deposit(engine, token) -> Callable[[str, int], int]:
    def _do(user: str, amount: int) -> int:
        token.approve(user, engine.address, amount)
        return engine.deposit_collateral(user, amount)
    return _do


@pytest_asyncio.fixture
async def client(deployment) -> AsyncGenerator[AsyncClient, None]:
    from stability.deps import get_deployment
    from stability.main import app
    app.dependency_overrides[get_deployment] = lambda: deployment
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
