from stability.models.address import NULL_ADDRESS, Address, new_address, normalize_address
from stability.models.events import (
    Approval,
    Burned,
    CollateralDeposited,
    CollateralRedeemed,
    Event,
    Minted,
    Paused,
    Transfer,
    Unpaused,
)
from stability.models.price import PriceSample

__all__ = [
    "NULL_ADDRESS",
    "Address",
    "new_address",
    "normalize_address",
    "Event",
    "CollateralDeposited",
    "CollateralRedeemed",
    "Minted",
    "Burned",
    "Transfer",
    "Approval",
    "Paused",
    "Unpaused",
    "PriceSample",
]
