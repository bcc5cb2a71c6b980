"""Event records appended by the token and the engine on successful operations."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    seq: int = 0  # position in the emitting component's journal


class CollateralDeposited(Event):
    name: Literal["CollateralDeposited"] = "CollateralDeposited"
    user: str
    token_amount: int


class CollateralRedeemed(Event):
    name: Literal["CollateralRedeemed"] = "CollateralRedeemed"
    user: str
    token_amount: int


class Minted(Event):
    name: Literal["Minted"] = "Minted"
    to: str
    amount: int


class Burned(Event):
    name: Literal["Burned"] = "Burned"
    amount: int


class Transfer(Event):
    name: Literal["Transfer"] = "Transfer"
    sender: str
    recipient: str
    amount: int


class Approval(Event):
    name: Literal["Approval"] = "Approval"
    owner: str
    spender: str
    amount: int


class Paused(Event):
    name: Literal["Paused"] = "Paused"
    account: str


class Unpaused(Event):
    name: Literal["Unpaused"] = "Unpaused"
    account: str
