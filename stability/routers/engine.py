from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, StrictInt

from stability.core.pagination import Page, paginate
from stability.deps import get_caller, get_deployment
from stability.models import PriceSample, normalize_address
from stability.services.deployment import Deployment

router = APIRouter()


class DepositRequest(BaseModel):
    amount: StrictInt = Field(..., description="Collateral token units to burn")


class RedeemRequest(BaseModel):
    usd_value: StrictInt = Field(..., description="USD base units of credit to redeem")


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    caller: str = Depends(get_caller),
    d: Deployment = Depends(get_deployment),
):
    """Burn collateral from the caller (requires prior approval) and credit USD."""
    credited = d.engine.deposit_collateral(caller, body.amount)
    return {
        "user": caller,
        "token_amount": body.amount,
        "usd_credited": credited,
        "credit": d.engine.get_dollars_amount(caller),
    }


@router.post("/redeem")
async def redeem(
    body: RedeemRequest,
    caller: str = Depends(get_caller),
    d: Deployment = Depends(get_deployment),
):
    """Mint collateral worth the requested USD value at the current price."""
    minted = d.engine.redeem_collateral(caller, body.usd_value)
    return {
        "user": caller,
        "token_amount": minted,
        "credit": d.engine.get_dollars_amount(caller),
    }


@router.get("/credits/{address}")
async def credits(address: str, d: Deployment = Depends(get_deployment)):
    address = normalize_address(address)
    return {"address": address, "credit": d.engine.get_dollars_amount(address)}


@router.get("/token-value")
async def token_value(d: Deployment = Depends(get_deployment)):
    """USD value of one collateral token, 18-decimal fixed point."""
    return {"value": d.engine.get_token_value(), "precision": 18}


@router.get("/full-token-value", response_model=PriceSample)
async def full_token_value(d: Deployment = Depends(get_deployment)):
    return d.engine.get_full_token_value()


@router.get("/addresses")
async def addresses(d: Deployment = Depends(get_deployment)):
    return {
        "engine": d.engine.address,
        "collateral_token": d.engine.get_collateral_token_address(),
        "price_feed": d.engine.get_price_feed_address(),
    }


@router.get("/events", response_model=Page[dict])
async def events(
    d: Deployment = Depends(get_deployment),
    name: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """Engine events, newest first."""
    limit, offset = paginate(limit, offset)
    page, total = d.engine.events.find(name=name, limit=limit, offset=offset)
    return Page[dict](items=[e.model_dump() for e in page], limit=limit, offset=offset, total=total)
