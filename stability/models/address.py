"""Account addresses: 0x-prefixed, 20 bytes, lower-cased."""

import re
import secrets
from typing import Annotated

from pydantic import StringConstraints

from stability.core.exceptions import InvalidAddress

NULL_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

Address = Annotated[str, StringConstraints(pattern=r"^0x[0-9a-fA-F]{40}$", to_lower=True)]


def new_address() -> str:
    return "0x" + secrets.token_hex(20)


def is_address(value: object) -> bool:
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def normalize_address(value: str, allow_null: bool = True) -> str:
    """Return the lower-cased address or raise InvalidAddress."""
    if not is_address(value):
        raise InvalidAddress(value if isinstance(value, str) else None)
    addr = value.lower()
    if not allow_null and addr == NULL_ADDRESS:
        raise InvalidAddress(addr)
    return addr
