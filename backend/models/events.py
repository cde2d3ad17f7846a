"""
Wire Models
Request, response and WebSocket event payloads
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt


class RideStatusEvent(BaseModel):
    """Event emitted when ride status changes"""

    event_type: str = "ride_status_update"
    status: str
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class RideActionResponse(BaseModel):
    success: bool = True
    action: str
    status: str
    message: Optional[str] = None


class RideStatusResponse(BaseModel):
    status: str
    message: Optional[str] = None
    subscribers: int


class RiderSubscription(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class FareQuoteRequest(BaseModel):
    policy: str = Field(default="normal", max_length=50)
    # Strict types keep JSON booleans out; range checks happen in the fare calculator
    distance_km: Optional[Union[StrictInt, StrictFloat]] = Field(
        default=None, description="Defaults to the configured demo distance"
    )


class FareQuote(BaseModel):
    """Fare computed for one policy selection"""

    policy: str
    strategy: str
    distance_km: Union[int, float]
    fare: Union[int, float]
    currency: str
    message: str
