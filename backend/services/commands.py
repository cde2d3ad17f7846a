"""
Ride Commands
Each command binds one RideService operation to a RideRequest
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from models.errors import UnknownRideAction
from models.ride_request import BOOKED, CANCELED, RATED, RideRequest, TransitionPolicy
from services.ride_service import RideService

logger = logging.getLogger(__name__)


class Command(ABC):
    @abstractmethod
    def execute(self) -> None:
        ...


class RideCommand(Command):
    """
    Invoke a service operation, then store its result as the request status.

    Args:
        service: Shared ride service
        request: Shared ride request receiving the new status
        policy: Optional transition rules checked before the service is called
    """

    target_status = ""

    def __init__(
        self,
        service: RideService,
        request: RideRequest,
        policy: Optional[TransitionPolicy] = None,
    ):
        self.service = service
        self.request = request
        self.policy = policy

    @abstractmethod
    def perform(self) -> str:
        """Call the bound service operation and return its status."""

    def execute(self) -> None:
        if self.policy is not None:
            self.policy.check(self.request.status, self.target_status)

        logger.debug(f"Executing {self.__class__.__name__}")
        result = self.perform()
        self.request.set_status(result)


class BookRideCommand(RideCommand):
    target_status = BOOKED

    def perform(self) -> str:
        return self.service.book_ride()


class CancelRideCommand(RideCommand):
    target_status = CANCELED

    def perform(self) -> str:
        return self.service.cancel_ride()


class RateRideCommand(RideCommand):
    target_status = RATED

    def perform(self) -> str:
        return self.service.rate_ride()


RIDE_COMMANDS: Dict[str, Type[RideCommand]] = {
    "book": BookRideCommand,
    "cancel": CancelRideCommand,
    "rate": RateRideCommand,
}


def command_for_trigger(
    trigger: str,
    service: RideService,
    request: RideRequest,
    policy: Optional[TransitionPolicy] = None,
) -> RideCommand:
    """
    Build a fresh command for a UI trigger name

    Raises:
        UnknownRideAction: trigger is not "book", "cancel" or "rate"
    """
    command_class = RIDE_COMMANDS.get(trigger)
    if command_class is None:
        raise UnknownRideAction(trigger)
    return command_class(service, request, policy)
