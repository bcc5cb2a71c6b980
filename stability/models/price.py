from pydantic import BaseModel, ConfigDict


class PriceSample(BaseModel):
    """One oracle round. `answer` is signed and scaled by the feed's decimals."""

    model_config = ConfigDict(frozen=True)

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        return (self.round_id, self.answer, self.started_at, self.updated_at, self.answered_in_round)
