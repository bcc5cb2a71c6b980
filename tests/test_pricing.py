"""Fixed-point conversion between token units and USD base units."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stability.core.exceptions import UnsupportedFeed
from stability.services import pricing

prices = st.integers(min_value=1, max_value=10**14)
amounts = st.integers(min_value=0, max_value=10**30)


def test_constants():
    assert pricing.PRECISION == 10**18
    assert pricing.ADDITIONAL_FEED_PRECISION == 10**10
    assert pricing.scale_factor(8) == pricing.ADDITIONAL_FEED_PRECISION


@pytest.mark.parametrize("decimals,expected", [(0, 10**18), (6, 10**12), (8, 10**10), (18, 1)])
def test_scale_factor(decimals, expected):
    assert pricing.scale_factor(decimals) == expected


@pytest.mark.parametrize("decimals", [19, 36, -1])
def test_scale_factor_rejects_out_of_range(decimals):
    with pytest.raises(UnsupportedFeed):
        pricing.scale_factor(decimals)


def test_unit_price_keeps_amounts():
    assert pricing.value_in_usd(10, 10**8) == 10
    assert pricing.tokens_for_value(10, 10**8) == 10


def test_cent_price_multiplies_tokens():
    # 0.01 per token: 10 USD units buy 1000 tokens
    assert pricing.tokens_for_value(10, 10**6) == 1000
    assert pricing.value_in_usd(1000, 10**6) == 10


def test_token_value_is_price_at_full_precision():
    assert pricing.token_value(2000 * 10**8) == 2000 * 10**18


def test_truncation_rounds_down():
    # 10 USD at 3.00 per token -> 3 tokens worth 9 USD
    assert pricing.tokens_for_value(10, 3 * 10**8) == 3
    assert pricing.value_in_usd(3, 3 * 10**8) == 9
    # 1 token unit at 0.5 is worth nothing in whole USD units
    assert pricing.value_in_usd(1, 5 * 10**7) == 0


def test_zero_price_is_not_masked():
    assert pricing.value_in_usd(10, 0) == 0
    with pytest.raises(ZeroDivisionError):
        pricing.tokens_for_value(10, 0)


@given(amount=amounts, price=prices)
def test_round_trip_through_usd_never_gains_tokens(amount, price):
    assert pricing.tokens_for_value(pricing.value_in_usd(amount, price), price) <= amount


@given(usd=amounts, price=prices)
def test_round_trip_through_tokens_never_gains_value(usd, price):
    assert pricing.value_in_usd(pricing.tokens_for_value(usd, price), price) <= usd


@given(amount=amounts, price=prices)
def test_value_matches_exact_floor(amount, price):
    assert pricing.value_in_usd(amount, price) == (amount * price * 10**10) // 10**18
