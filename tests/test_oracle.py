import pytest
from pydantic import ValidationError

from stability.core.exceptions import NotFoundError
from stability.services.oracle import MockPriceFeed, PriceFeed


def _feed(**kw) -> MockPriceFeed:
    ticks = iter(range(1000, 10_000, 10))
    return MockPriceFeed(clock=lambda: next(ticks), **kw)


def test_initial_round():
    feed = _feed(decimals=8, initial_answer=2000 * 10**8)
    assert isinstance(feed, PriceFeed)
    sample = feed.latest_round_data()
    assert sample.round_id == 1
    assert sample.answer == 2000 * 10**8
    assert sample.answered_in_round == 1
    assert sample.started_at == sample.updated_at == 1000
    assert feed.decimals() == 8
    assert feed.version() == 0


def test_update_answer_opens_new_round():
    feed = _feed()
    feed.update_answer(123)
    sample = feed.latest_round_data()
    assert sample.round_id == 2
    assert sample.answer == 123
    assert sample.updated_at == 1010
    assert feed.latest_answer == 123
    assert feed.latest_timestamp == 1010
    # earlier rounds stay readable
    assert feed.get_round_data(1).answer == 100_000_000


def test_update_round_data_sets_explicit_round():
    feed = _feed()
    feed.update_round_data(round_id=42, answer=-5, timestamp=77, started_at=70)
    sample = feed.latest_round_data()
    assert sample.as_tuple() == (42, -5, 70, 77, 42)


def test_unknown_round():
    feed = _feed()
    with pytest.raises(NotFoundError):
        feed.get_round_data(99)


def test_samples_are_immutable():
    sample = _feed().latest_round_data()
    with pytest.raises(ValidationError):
        sample.answer = 1
