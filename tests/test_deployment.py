import pytest

from stability import models
from stability.core.config import Settings, _parse_genesis
from stability.models import address, events, price
from stability.models.address import new_address
from stability.services.deployment import deploy
from stability.services.oracle import MockPriceFeed


def test_parse_genesis_forms():
    a, b = new_address(), new_address()
    assert _parse_genesis(f"{a}:10, {b}:5") == {a: 10, b: 5}
    assert _parse_genesis(f'{{"{a}": 7}}') == {a: 7}
    assert _parse_genesis(f"{a}:3,{a}:4,") == {a: 7}
    assert _parse_genesis("") == {}


@pytest.mark.parametrize("raw", ["{a}:3,{b}", "{a}:3,{b}:0", "{a}:-1", ":5", '{{"{a}": 0}}'])
def test_parse_genesis_rejects_malformed_entries(raw):
    a, b = new_address(), new_address()
    with pytest.raises(ValueError):
        _parse_genesis(raw.format(a=a, b=b))


def test_deploy_fails_on_bad_genesis(monkeypatch):
    monkeypatch.setenv("GENESIS_ALLOCATIONS", f"{new_address()}:0")
    with pytest.raises(ValueError):
        deploy(Settings())


def test_models_package_reexports():
    assert models.Transfer is events.Transfer
    assert models.PriceSample is price.PriceSample
    assert models.normalize_address is address.normalize_address
    assert set(models.__all__) <= set(dir(models))


def test_deploy_from_settings(monkeypatch):
    holder, operator = new_address(), new_address()
    monkeypatch.setenv("GENESIS_ALLOCATIONS", f"{holder}:1000")
    monkeypatch.setenv("OPERATOR_ADDRESS", operator)
    monkeypatch.setenv("INITIAL_PRICE", "150000000")
    monkeypatch.setenv("TOKEN_SYMBOL", "WETH")
    d = deploy(Settings())
    assert d.operator == operator
    assert d.engine.owner == operator
    assert d.token.controller == d.engine.address
    assert d.token.symbol == "WETH"
    assert d.token.balance_of(holder) == 1000
    assert d.price_feed.latest_round_data().answer == 150_000_000
    assert d.engine.scale == 10**10


def test_deploy_with_injected_feed():
    feed = MockPriceFeed(decimals=6, initial_answer=1_000_000)
    d = deploy(Settings(), price_feed=feed, genesis={})
    assert d.engine.price_feed is feed
    assert d.engine.scale == 10**12
    assert d.token.total_supply == 0
