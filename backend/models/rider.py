"""
Rider - Observer that renders ride status updates for a person
"""

import logging
from typing import Callable, Optional

from models.ride_request import Observer

logger = logging.getLogger(__name__)

STATUS_MESSAGE_TEMPLATE = "Hello {name}, your ride is now: {status}"


class Rider(Observer):
    """
    Rider subscribed to a ride request

    Args:
        name: Rider display name
        display: Callable receiving the rendered text. When omitted the
            text only goes to the log.
    """

    def __init__(self, name: str, display: Optional[Callable[[str], None]] = None):
        self.name = name
        self.display = display
        self.last_message: Optional[str] = None

    def update(self, status: str) -> None:
        message = STATUS_MESSAGE_TEMPLATE.format(name=self.name, status=status)
        self.last_message = message

        if self.display is None:
            logger.info(message)
            return

        self.display(message)

    def __repr__(self):
        return f"Rider({self.name})"
