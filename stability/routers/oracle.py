from fastapi import APIRouter, Depends

from stability.deps import get_deployment
from stability.models import PriceSample
from stability.services.deployment import Deployment

router = APIRouter()


@router.get("/info")
async def feed_info(d: Deployment = Depends(get_deployment)):
    feed = d.price_feed
    return {
        "address": feed.address,
        "decimals": feed.decimals(),
        "description": feed.description(),
        "version": feed.version(),
    }


@router.get("/latest", response_model=PriceSample)
async def latest(d: Deployment = Depends(get_deployment)):
    return d.price_feed.latest_round_data()


@router.get("/rounds/{round_id}", response_model=PriceSample)
async def round_data(round_id: int, d: Deployment = Depends(get_deployment)):
    return d.price_feed.get_round_data(round_id)
