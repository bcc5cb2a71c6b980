from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, StrictInt

from stability.deps import get_caller, get_deployment
from stability.models import Address, normalize_address
from stability.services.deployment import Deployment

router = APIRouter()


class ApproveRequest(BaseModel):
    spender: Address
    amount: StrictInt = Field(..., ge=0)


class TransferRequest(BaseModel):
    recipient: Address
    amount: StrictInt = Field(..., ge=0)


@router.get("/info")
async def token_info(d: Deployment = Depends(get_deployment)):
    t = d.token
    return {
        "address": t.address,
        "name": t.name,
        "symbol": t.symbol,
        "decimals": t.decimals,
        "total_supply": t.total_supply,
        "paused": t.paused,
    }


@router.get("/supply")
async def supply(d: Deployment = Depends(get_deployment)):
    return {"total_supply": d.token.total_supply}


@router.get("/balance/{address}")
async def balance(address: str, d: Deployment = Depends(get_deployment)):
    address = normalize_address(address)
    return {"address": address, "balance": d.token.balance_of(address)}


@router.get("/allowance")
async def allowance(owner: str, spender: str, d: Deployment = Depends(get_deployment)):
    owner, spender = normalize_address(owner), normalize_address(spender)
    return {"owner": owner, "spender": spender, "allowance": d.token.allowance(owner, spender)}


@router.post("/approve")
async def approve(
    body: ApproveRequest,
    caller: str = Depends(get_caller),
    d: Deployment = Depends(get_deployment),
):
    """Authorize `spender` (usually the engine) to pull up to `amount` from the caller."""
    d.token.approve(caller, body.spender, body.amount)
    return {"owner": caller, "spender": body.spender, "allowance": d.token.allowance(caller, body.spender)}


@router.post("/transfer")
async def transfer(
    body: TransferRequest,
    caller: str = Depends(get_caller),
    d: Deployment = Depends(get_deployment),
):
    d.token.transfer(caller, body.recipient, body.amount)
    return {"sender": caller, "recipient": body.recipient, "amount": body.amount}
