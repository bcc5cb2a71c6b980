"""Stability engine: burn collateral for USD credit, redeem credit for freshly minted collateral.

Deposit pulls tokens from the caller, burns them, and credits
value_in_usd(amount) at the current oracle price. Redemption converts the
requested USD value to whole tokens at the current price, mints them, and
debits only the USD value of what was minted, so truncation never leaks
value out of the protocol. The engine holds no collateral between calls.
"""

from stability.core.audit import EventJournal
from stability.core.exceptions import (
    InsufficientBalance,
    MustBeMoreThanZero,
    NotOwner,
    TokenError,
    TransferFailed,
)
from stability.core.logging import get_logger
from stability.core.state import ReentrancyGuard, Stateful, non_reentrant
from stability.models import CollateralDeposited, CollateralRedeemed, PriceSample, normalize_address
from stability.services import pricing
from stability.services.oracle import PriceFeed
from stability.services.token import CollateralToken

log = get_logger(__name__)


class StabilityEngine(Stateful):
    def __init__(
        self,
        token: CollateralToken,
        price_feed: PriceFeed,
        address: str | None = None,
        owner: str | None = None,
    ):
        self.address = normalize_address(address or token.controller, allow_null=False)
        self.owner = normalize_address(owner, allow_null=False) if owner else None
        self.token = token
        self.price_feed = price_feed
        self.scale = pricing.scale_factor(price_feed.decimals())
        self._credits: dict[str, int] = {}
        self._guard = ReentrancyGuard()
        self.events = EventJournal("engine")

    # state

    def snapshot(self):
        return dict(self._credits), self.events.snapshot()

    def restore(self, state) -> None:
        credits, mark = state
        self._credits = credits
        self.events.restore(mark)

    def participants(self) -> tuple[Stateful, ...]:
        return (self.token, self)

    # entry points

    @non_reentrant
    def deposit_collateral(self, sender: str, amount: int) -> int:
        """Burn `amount` tokens of the sender; return the USD value credited."""
        if amount <= 0:
            raise MustBeMoreThanZero()
        user = normalize_address(sender, allow_null=False)
        try:
            ok = self.token.transfer_from(self.address, user, self.address, amount)
        except TokenError as exc:
            raise TransferFailed(exc.message, details={"reason": exc.code, **exc.details}) from exc
        if not ok:
            raise TransferFailed()
        self.token.burn(self.address, amount)

        price = self._price()
        usd_value = pricing.value_in_usd(amount, price, self.scale)
        if usd_value < 0:
            # credit is unsigned; a negative feed answer cannot be booked
            raise ArithmeticError(f"negative USD value {usd_value} at price {price}")
        self._credits[user] = self._credits.get(user, 0) + usd_value

        self.events.emit(CollateralDeposited, user=user, token_amount=amount)
        log.info("collateral_deposited", user=user, token_amount=amount, usd_value=usd_value, price=price)
        return usd_value

    @non_reentrant
    def redeem_collateral(self, sender: str, usd_value: int) -> int:
        """Mint collateral worth at most `usd_value` to the sender; return tokens minted."""
        if usd_value <= 0:
            raise MustBeMoreThanZero()
        user = normalize_address(sender, allow_null=False)
        available = self._credits.get(user, 0)
        if available < usd_value:
            raise InsufficientBalance(usd_value, available)

        price = self._price()
        token_amount = pricing.tokens_for_value(usd_value, price, self.scale)
        # below one token unit nothing is minted and nothing is debited
        if token_amount != 0:
            self.token.mint(self.address, user, token_amount)
        debit = pricing.value_in_usd(token_amount, price, self.scale)
        if debit > available:
            raise InsufficientBalance(debit, available)
        self._credits[user] = available - debit

        self.events.emit(CollateralRedeemed, user=user, token_amount=token_amount)
        log.info(
            "collateral_redeemed",
            user=user,
            token_amount=token_amount,
            usd_requested=usd_value,
            usd_debited=debit,
            price=price,
        )
        return token_amount

    # issuance control

    def pause_issuance(self, sender: str) -> None:
        self._only_owner(sender)
        self.token.pause(self.address)

    def unpause_issuance(self, sender: str) -> None:
        self._only_owner(sender)
        self.token.unpause(self.address)

    def _only_owner(self, sender: str) -> None:
        if self.owner is None or sender.lower() != self.owner:
            raise NotOwner(sender)

    # reads

    def _price(self) -> int:
        return self.price_feed.latest_round_data().answer

    def get_dollars_amount(self, user: str) -> int:
        return self._credits.get(user.lower(), 0)

    def get_token_value(self) -> int:
        """USD value of one token at 18-decimal precision."""
        return pricing.token_value(self._price(), self.scale)

    def get_full_token_value(self) -> PriceSample:
        return self.price_feed.latest_round_data()

    def get_collateral_token_address(self) -> str:
        return self.token.address

    def get_price_feed_address(self) -> str:
        return self.price_feed.address

    def preview_deposit(self, amount: int) -> int:
        return pricing.value_in_usd(amount, self._price(), self.scale)

    def preview_redeem(self, usd_value: int) -> int:
        return pricing.tokens_for_value(usd_value, self._price(), self.scale)

    def total_credit(self) -> int:
        return sum(self._credits.values())

    def accounts(self) -> dict[str, int]:
        return dict(self._credits)
