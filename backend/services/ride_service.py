"""
Ride Service
Receiver for ride commands; each operation returns the resulting ride status
"""

import logging

from models.ride_request import BOOKED, CANCELED, RATED

logger = logging.getLogger(__name__)


class RideService:
    def book_ride(self) -> str:
        logger.info("Ride booked")
        return BOOKED

    def cancel_ride(self) -> str:
        logger.info("Ride canceled")
        return CANCELED

    def rate_ride(self) -> str:
        logger.info("Ride rated")
        return RATED
