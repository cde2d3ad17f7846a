"""
Fare Routes
Fare policy listing and quotes for the fare selector
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from models.errors import InvalidDistance, UnrecognizedFarePolicy
from models.events import FareQuote, FareQuoteRequest
from models.fare_strategy import FARE_STRATEGIES
from routes.dependencies import get_context
from services.app_context import AppContext

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/policies")
async def list_fare_policies():
    """Known fare policies and their per-km rates"""
    return {
        "success": True,
        "policies": [
            {"policy": policy, "strategy": strategy.__name__, "rate_per_km": strategy.rate_per_km}
            for policy, strategy in FARE_STRATEGIES.items()
        ],
    }


@router.post("/quote", response_model=FareQuote)
async def quote_fare(data: FareQuoteRequest, context: AppContext = Depends(get_context)):
    """
    Select the strategy for data.policy and compute the fare.
    Unknown policies use the normal fare unless STRICT_FARE_POLICY is on.
    """
    distance = (
        context.settings.default_distance_km if data.distance_km is None else data.distance_km
    )

    try:
        fare = context.quote_fare(data.policy, distance)
    except (UnrecognizedFarePolicy, InvalidDistance) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    currency = context.settings.currency_symbol
    return FareQuote(
        policy=data.policy,
        strategy=type(context.fare_calculator.strategy).__name__,
        distance_km=distance,
        fare=fare,
        currency=currency,
        message=f"Fare calculated: {currency}{fare}",
    )
