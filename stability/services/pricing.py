"""Fixed-point conversions between token units and USD base units.

Both directions multiply first and divide last at PRECISION, so
tokens_for_value(value_in_usd(x)) never exceeds x. Truncation always
rounds toward the protocol. Prices are not validated: a zero answer
raises ZeroDivisionError in tokens_for_value, a negative answer yields
negative results.
"""

from stability.core.exceptions import UnsupportedFeed

PRECISION_DECIMALS = 18
PRECISION = 10**PRECISION_DECIMALS
ADDITIONAL_FEED_PRECISION = 10**10  # 8-decimal feed -> 18 decimals


def scale_factor(feed_decimals: int) -> int:
    if feed_decimals < 0 or feed_decimals > PRECISION_DECIMALS:
        raise UnsupportedFeed(feed_decimals)
    return 10 ** (PRECISION_DECIMALS - feed_decimals)


def token_value(price: int, scale: int = ADDITIONAL_FEED_PRECISION) -> int:
    """USD value of one whole token at PRECISION."""
    return price * scale


def value_in_usd(amount: int, price: int, scale: int = ADDITIONAL_FEED_PRECISION) -> int:
    return amount * (price * scale) // PRECISION


def tokens_for_value(usd_value: int, price: int, scale: int = ADDITIONAL_FEED_PRECISION) -> int:
    return usd_value * PRECISION // (price * scale)
