"""Price feed interface consumed by the engine, and a controllable in-process feed."""

import time
from abc import ABC, abstractmethod
from typing import Callable

from stability.core.exceptions import NotFoundError
from stability.models import PriceSample, new_address


class PriceFeed(ABC):
    """Read side of an aggregator-style oracle. Answers are trusted as-is."""

    address: str

    @abstractmethod
    def decimals(self) -> int:
        ...

    @abstractmethod
    def description(self) -> str:
        ...

    @abstractmethod
    def version(self) -> int:
        ...

    @abstractmethod
    def latest_round_data(self) -> PriceSample:
        """Latest (round_id, answer, started_at, updated_at, answered_in_round)."""
        ...

    @abstractmethod
    def get_round_data(self, round_id: int) -> PriceSample:
        ...


class MockPriceFeed(PriceFeed):
    """Deterministic feed: every update opens a new round with the given answer."""

    VERSION = 0

    def __init__(
        self,
        decimals: int = 8,
        initial_answer: int = 100_000_000,
        clock: Callable[[], float] = time.time,
        address: str | None = None,
    ):
        self.address = address or new_address()
        self._decimals = decimals
        self._clock = clock
        self.latest_round = 0
        self._answers: dict[int, int] = {}
        self._timestamps: dict[int, int] = {}
        self._started: dict[int, int] = {}
        self.update_answer(initial_answer)

    def decimals(self) -> int:
        return self._decimals

    def description(self) -> str:
        return "MockPriceFeed"

    def version(self) -> int:
        return self.VERSION

    @property
    def latest_answer(self) -> int:
        return self._answers[self.latest_round]

    @property
    def latest_timestamp(self) -> int:
        return self._timestamps[self.latest_round]

    def update_answer(self, answer: int) -> PriceSample:
        now = int(self._clock())
        self.latest_round += 1
        self._answers[self.latest_round] = int(answer)
        self._timestamps[self.latest_round] = now
        self._started[self.latest_round] = now
        return self.latest_round_data()

    def update_round_data(self, round_id: int, answer: int, timestamp: int, started_at: int) -> PriceSample:
        """Write an explicit round and make it the latest one."""
        self.latest_round = round_id
        self._answers[round_id] = int(answer)
        self._timestamps[round_id] = int(timestamp)
        self._started[round_id] = int(started_at)
        return self.latest_round_data()

    def get_round_data(self, round_id: int) -> PriceSample:
        if round_id not in self._answers:
            raise NotFoundError(f"Round {round_id} not found")
        return PriceSample(
            round_id=round_id,
            answer=self._answers[round_id],
            started_at=self._started[round_id],
            updated_at=self._timestamps[round_id],
            answered_in_round=round_id,
        )

    def latest_round_data(self) -> PriceSample:
        return self.get_round_data(self.latest_round)
