"""
Ride Request - Subject side of the ride status notifications
Holds the current status and pushes every change to its observers
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from models.errors import InvalidStatusTransition

logger = logging.getLogger(__name__)


PENDING = "Pending"
BOOKED = "Booked"
CANCELED = "Canceled"
RATED = "Rated"

# Used only when a TransitionPolicy is requested; RideRequest itself accepts any status
VALID_STATE_TRANSITIONS = {
    PENDING: [BOOKED, CANCELED],
    BOOKED: [CANCELED, RATED],
    CANCELED: [],  # Terminal state
    RATED: [],  # Terminal state
}


class Observer(ABC):
    """Anything that wants to hear about ride status changes"""

    @abstractmethod
    def update(self, status: str) -> None:
        ...


class RideRequest:
    """
    Ride request whose status changes are broadcast to observers.

    Observers are notified synchronously, in subscription order. The same
    observer may be subscribed more than once and is then notified once per
    subscription.
    """

    def __init__(self, status: str = PENDING):
        self._status = status
        self._observers: List[Observer] = []

    @property
    def status(self) -> str:
        return self._status

    @property
    def observers(self) -> Tuple[Observer, ...]:
        return tuple(self._observers)

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)
        logger.debug(f"Observer subscribed: {observer!r} ({len(self._observers)} total)")

    def unsubscribe(self, observer: Observer) -> None:
        """Remove every subscription of this exact observer object."""
        before = len(self._observers)
        self._observers = [o for o in self._observers if o is not observer]
        logger.debug(f"Observer unsubscribed: {observer!r} ({before - len(self._observers)} removed)")

    def set_status(self, status: str) -> None:
        self._status = status
        logger.info(f"Ride status changed to {status}")
        self.notify()

    def notify(self) -> None:
        # Snapshot: (un)subscribing from inside update() applies to the next cycle
        for observer in list(self._observers):
            observer.update(self._status)

    def __repr__(self):
        return f"RideRequest({self._status}, observers={len(self._observers)})"


class TransitionPolicy:
    """Optional ordering rules for ride commands"""

    def __init__(self, transitions: Optional[Dict[str, Iterable[str]]] = None):
        source = VALID_STATE_TRANSITIONS if transitions is None else transitions
        self.transitions = {state: list(targets) for state, targets in source.items()}

    def allows(self, current_status: str, new_status: str) -> bool:
        return new_status in self.transitions.get(current_status, [])

    def check(self, current_status: str, new_status: str) -> None:
        """
        Raise if the move is not allowed

        Raises:
            InvalidStatusTransition: new_status is not reachable from current_status
        """
        if not self.allows(current_status, new_status):
            logger.warning(f"Refused ride transition {current_status} -> {new_status}")
            raise InvalidStatusTransition(current_status, new_status)
