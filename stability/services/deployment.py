"""Wire a price feed, the collateral token and the engine together."""

from dataclasses import dataclass

from stability.core.config import Settings, get_settings
from stability.core.logging import get_logger
from stability.models import new_address, normalize_address
from stability.services.engine import StabilityEngine
from stability.services.oracle import MockPriceFeed, PriceFeed
from stability.services.token import CollateralToken

log = get_logger(__name__)


@dataclass
class Deployment:
    engine: StabilityEngine
    token: CollateralToken
    price_feed: PriceFeed
    operator: str


def deploy(
    settings: Settings | None = None,
    price_feed: PriceFeed | None = None,
    genesis: dict[str, int] | None = None,
) -> Deployment:
    """The engine address is reserved first so the token can name it as its controller."""
    settings = settings or get_settings()
    operator = normalize_address(settings.operator_address, allow_null=False) if settings.operator_address else new_address()
    feed = price_feed or MockPriceFeed(decimals=settings.oracle_decimals, initial_answer=settings.initial_price)
    engine_address = new_address()
    token = CollateralToken(
        controller=engine_address,
        name=settings.token_name,
        symbol=settings.token_symbol,
        decimals=settings.token_decimals,
        genesis=settings.genesis_allocations if genesis is None else genesis,
    )
    engine = StabilityEngine(token, feed, address=engine_address, owner=operator)
    log.info(
        "deployed",
        engine=engine.address,
        token=token.address,
        price_feed=feed.address,
        operator=operator,
        feed_decimals=feed.decimals(),
    )
    return Deployment(engine=engine, token=token, price_feed=feed, operator=operator)
