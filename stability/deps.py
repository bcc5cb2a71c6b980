"""Shared FastAPI dependencies."""

from fastapi import Header, Request

from stability.core.exceptions import InvalidAddress, UnauthorizedError
from stability.core.logging import bind_caller
from stability.models import normalize_address
from stability.services.deployment import Deployment

ACCOUNT_HEADER = "X-Account"


def get_deployment(request: Request) -> Deployment:
    """Dependency: the running feed/token/engine set, created at startup."""
    return request.app.state.deployment


async def get_caller(x_account: str | None = Header(default=None, alias=ACCOUNT_HEADER)) -> str:
    """Dependency: acting account from the X-Account header (development network, unsigned)."""
    if not x_account:
        raise UnauthorizedError("Missing X-Account header")
    try:
        address = normalize_address(x_account.strip(), allow_null=False)
    except InvalidAddress:
        raise UnauthorizedError("Invalid X-Account header") from None
    bind_caller(address)
    return address
