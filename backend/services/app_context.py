"""
Application Context
Everything the UI host needs, built once at startup and passed around explicitly
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from config import Settings
from models.fare_strategy import FareCalculator, strategy_for_policy
from models.ride_request import RideRequest, TransitionPolicy
from models.rider import Rider
from services.commands import command_for_trigger
from services.ride_service import RideService

logger = logging.getLogger(__name__)


class StatusBoard:
    """Text target the rider renders into (the page's status line)."""

    def __init__(self):
        self.text: Optional[str] = None
        self.renders = 0

    def __call__(self, message: str) -> None:
        self.text = message
        self.renders += 1


@dataclass
class AppContext:
    settings: Settings
    status_board: StatusBoard
    rider: Rider
    ride_request: RideRequest
    service: RideService
    fare_calculator: FareCalculator
    transition_policy: Optional[TransitionPolicy] = None
    extra_riders: Dict[str, Rider] = field(default_factory=dict)

    def dispatch(self, trigger: str) -> str:
        """
        Run the command bound to a UI trigger ("book", "cancel", "rate")

        Returns:
            Ride status after the command ran
        """
        command = command_for_trigger(
            trigger, self.service, self.ride_request, self.transition_policy
        )
        command.execute()
        return self.ride_request.status

    def quote_fare(self, policy: str, distance=None):
        """
        Select the strategy for a fare policy and price a distance with it

        Args:
            policy: Fare policy identifier from the fare selector
            distance: Distance in km, defaults to settings.default_distance_km

        Returns:
            Fare as computed by the selected strategy
        """
        if distance is None:
            distance = self.settings.default_distance_km

        self.fare_calculator.set_strategy(
            strategy_for_policy(policy, strict=self.settings.strict_fare_policy)
        )
        return self.fare_calculator.calculate_fare(distance)

    def add_rider(self, name: str) -> Rider:
        """Subscribe another rider; the same name is subscribed only once."""
        rider = self.extra_riders.get(name)
        if rider is None:
            rider = Rider(name)
            self.extra_riders[name] = rider
            self.ride_request.subscribe(rider)
            logger.info(f"Rider {name} subscribed to ride updates")
        return rider

    def remove_rider(self, name: str) -> bool:
        rider = self.extra_riders.pop(name, None)
        if rider is None:
            return False
        self.ride_request.unsubscribe(rider)
        logger.info(f"Rider {name} unsubscribed from ride updates")
        return True


def build_context(settings: Settings) -> AppContext:
    """Wire the demo: one rider rendering to the status board, subscribed to one request."""
    status_board = StatusBoard()
    rider = Rider(settings.rider_name, display=status_board)

    ride_request = RideRequest()
    ride_request.subscribe(rider)

    policy = TransitionPolicy() if settings.enforce_status_transitions else None

    logger.info(
        f"Ride context ready: rider={settings.rider_name}, "
        f"strict_fares={settings.strict_fare_policy}, "
        f"enforce_transitions={policy is not None}"
    )
    return AppContext(
        settings=settings,
        status_board=status_board,
        rider=rider,
        ride_request=ride_request,
        service=RideService(),
        fare_calculator=FareCalculator(),
        transition_policy=policy,
    )
