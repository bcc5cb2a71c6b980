"""Collateral token: balance ledger whose supply only the controller can change."""

from typing import Callable

from stability.core.audit import EventJournal
from stability.core.exceptions import (
    BadRequestError,
    EnforcedPause,
    ExpectedPause,
    InsufficientAllowance,
    InsufficientTokenBalance,
    InvalidAddress,
    MustBeMoreThanZero,
    NotController,
)
from stability.core.logging import get_logger
from stability.core.state import Stateful, atomic
from stability.models import (
    NULL_ADDRESS,
    Approval,
    Burned,
    Minted,
    Paused,
    Transfer,
    Unpaused,
    new_address,
    normalize_address,
)

log = get_logger(__name__)

# (sender, recipient, amount); NULL_ADDRESS stands for mint source / burn sink
TransferHook = Callable[[str, str, int], None]


def _require_uint(amount: int) -> int:
    if amount < 0:
        raise BadRequestError("Amount must not be negative", code="NEGATIVE_AMOUNT")
    return amount


class CollateralToken(Stateful):
    def __init__(
        self,
        controller: str,
        name: str = "Collateral",
        symbol: str = "CLT",
        decimals: int = 18,
        genesis: dict[str, int] | None = None,
        address: str | None = None,
    ):
        self.address = address or new_address()
        # set once; compared on every privileged call
        self.controller = normalize_address(controller, allow_null=False)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self.paused = False
        self._balances: dict[str, int] = {}
        self._allowances: dict[str, dict[str, int]] = {}
        self._hooks: list[TransferHook] = []
        self.events = EventJournal(f"token:{symbol}")
        for holder, amount in (genesis or {}).items():
            holder = normalize_address(holder, allow_null=False)
            if amount <= 0:
                raise MustBeMoreThanZero()
            self._balances[holder] = self._balances.get(holder, 0) + amount
            self.total_supply += amount
            self.events.emit(Transfer, sender=NULL_ADDRESS, recipient=holder, amount=amount)

    # state

    def snapshot(self):
        return (
            self.total_supply,
            self.paused,
            dict(self._balances),
            {owner: dict(spenders) for owner, spenders in self._allowances.items()},
            self.events.snapshot(),
        )

    def restore(self, state) -> None:
        self.total_supply, self.paused, balances, allowances, mark = state
        self._balances = balances
        self._allowances = allowances
        self.events.restore(mark)

    def add_transfer_hook(self, hook: TransferHook) -> None:
        self._hooks.append(hook)

    def remove_transfer_hook(self, hook: TransferHook) -> None:
        self._hooks.remove(hook)

    def _notify(self, sender: str, recipient: str, amount: int) -> None:
        for hook in list(self._hooks):
            hook(sender, recipient, amount)

    # reads

    def balance_of(self, account: str) -> int:
        return self._balances.get(account.lower(), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get(owner.lower(), {}).get(spender.lower(), 0)

    def holders(self) -> dict[str, int]:
        return {a: b for a, b in self._balances.items() if b}

    # transfers

    def approve(self, sender: str, spender: str, amount: int) -> bool:
        owner = normalize_address(sender, allow_null=False)
        spender = normalize_address(spender, allow_null=False)
        _require_uint(amount)
        self._allowances.setdefault(owner, {})[spender] = amount
        self.events.emit(Approval, owner=owner, spender=spender, amount=amount)
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        sender = normalize_address(sender, allow_null=False)
        recipient = normalize_address(recipient, allow_null=False)
        _require_uint(amount)
        with atomic(self):
            self._move(sender, recipient, amount)
            self._notify(sender, recipient, amount)
        return True

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool:
        spender = normalize_address(spender, allow_null=False)
        owner = normalize_address(owner, allow_null=False)
        recipient = normalize_address(recipient, allow_null=False)
        _require_uint(amount)
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowance(spender, current, amount)
        with atomic(self):
            self._allowances.setdefault(owner, {})[spender] = current - amount
            self._move(owner, recipient, amount)
            self._notify(owner, recipient, amount)
        return True

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientTokenBalance(sender, balance, amount)
        self._balances[sender] = balance - amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount
        self.events.emit(Transfer, sender=sender, recipient=recipient, amount=amount)

    # issuance

    def _only_controller(self, sender: str) -> None:
        if sender.lower() != self.controller:
            raise NotController(sender)

    def _when_not_paused(self) -> None:
        if self.paused:
            raise EnforcedPause()

    def mint(self, sender: str, to: str, amount: int) -> bool:
        self._only_controller(sender)
        self._when_not_paused()
        if not isinstance(to, str) or to.lower() == NULL_ADDRESS:
            raise InvalidAddress(to if isinstance(to, str) else None)
        to = normalize_address(to)
        if amount <= 0:
            raise MustBeMoreThanZero()
        with atomic(self):
            self._balances[to] = self._balances.get(to, 0) + amount
            self.total_supply += amount
            self.events.emit(Transfer, sender=NULL_ADDRESS, recipient=to, amount=amount)
            self.events.emit(Minted, to=to, amount=amount)
            log.debug("token_mint", token=self.symbol, to=to, amount=amount, total_supply=self.total_supply)
            self._notify(NULL_ADDRESS, to, amount)
        return True

    def burn(self, sender: str, amount: int) -> None:
        """Destroy `amount` from the controller's own balance."""
        self._only_controller(sender)
        self._when_not_paused()
        if amount <= 0:
            raise MustBeMoreThanZero()
        balance = self._balances.get(self.controller, 0)
        if balance < amount:
            raise InsufficientTokenBalance(self.controller, balance, amount)
        with atomic(self):
            self._balances[self.controller] = balance - amount
            self.total_supply -= amount
            self.events.emit(Transfer, sender=self.controller, recipient=NULL_ADDRESS, amount=amount)
            self.events.emit(Burned, amount=amount)
            log.debug("token_burn", token=self.symbol, amount=amount, total_supply=self.total_supply)
            self._notify(self.controller, NULL_ADDRESS, amount)

    def pause(self, sender: str) -> None:
        self._only_controller(sender)
        if self.paused:
            raise EnforcedPause()
        self.paused = True
        self.events.emit(Paused, account=sender.lower())
        log.info("token_paused", token=self.symbol)

    def unpause(self, sender: str) -> None:
        self._only_controller(sender)
        if not self.paused:
            raise ExpectedPause()
        self.paused = False
        self.events.emit(Unpaused, account=sender.lower())
        log.info("token_unpaused", token=self.symbol)
