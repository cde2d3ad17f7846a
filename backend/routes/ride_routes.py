"""
Ride Routes
Book, cancel and rate triggers plus rider subscriptions
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from models.errors import InvalidStatusTransition, UnknownRideAction
from models.events import (
    RideActionResponse,
    RideStatusResponse,
    RiderSubscription,
)
from routes.dependencies import get_context, get_notifier
from services.app_context import AppContext
from sockets.status_socket import StatusNotifier

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/status", response_model=RideStatusResponse)
async def get_ride_status(context: AppContext = Depends(get_context)):
    """Current ride status and the text last rendered for the rider"""
    return RideStatusResponse(
        status=context.ride_request.status,
        message=context.status_board.text,
        subscribers=len(context.ride_request.observers),
    )


@router.post("/riders", status_code=status.HTTP_201_CREATED)
async def subscribe_rider(
    data: RiderSubscription, context: AppContext = Depends(get_context)
):
    """Subscribe an extra rider to status updates"""
    rider = context.add_rider(data.name)
    return {
        "success": True,
        "rider": rider.name,
        "subscribers": len(context.ride_request.observers),
    }


@router.get("/riders/{name}")
async def get_rider(name: str, context: AppContext = Depends(get_context)):
    rider = context.rider if name == context.rider.name else context.extra_riders.get(name)
    if rider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rider not found")
    return {"success": True, "rider": rider.name, "last_message": rider.last_message}


@router.delete("/riders/{name}")
async def unsubscribe_rider(name: str, context: AppContext = Depends(get_context)):
    """Unsubscribe a rider added through POST /riders"""
    if not context.remove_rider(name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rider not found")
    return {"success": True, "subscribers": len(context.ride_request.observers)}


@router.post("/{action}", response_model=RideActionResponse)
async def run_ride_action(
    action: str,
    context: AppContext = Depends(get_context),
    notifier: StatusNotifier = Depends(get_notifier),
):
    """
    Execute the ride command for a trigger: book, cancel or rate.
    Status updates are pushed to the WebSocket feed before responding.
    """
    try:
        new_status = context.dispatch(action)
    except UnknownRideAction as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    finally:
        await notifier.flush()

    logger.info(f"Ride action {action} -> {new_status}")
    return RideActionResponse(
        action=action, status=new_status, message=context.status_board.text
    )
