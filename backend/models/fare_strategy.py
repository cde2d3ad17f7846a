"""
Fare Strategies
Interchangeable per-kilometre pricing policies and the calculator that uses them
"""

import logging
import math
from numbers import Real
from typing import Dict, Optional, Type

from models.errors import InvalidDistance, NoStrategySelected, UnrecognizedFarePolicy

logger = logging.getLogger(__name__)

DEFAULT_FARE_POLICY = "normal"


class FareStrategy:
    """Pricing policy: fare = distance * rate_per_km"""

    rate_per_km = None

    def calculate(self, distance):
        if self.rate_per_km is None:
            raise NotImplementedError(f"{self.__class__.__name__} has no rate_per_km")
        return distance * self.rate_per_km

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class NormalFare(FareStrategy):
    rate_per_km = 10


class SurgePricing(FareStrategy):
    rate_per_km = 15


class DiscountedFare(FareStrategy):
    rate_per_km = 8


FARE_STRATEGIES: Dict[str, Type[FareStrategy]] = {
    "normal": NormalFare,
    "surge": SurgePricing,
    "discount": DiscountedFare,
}


def strategy_for_policy(policy: str, strict: bool = False) -> FareStrategy:
    """
    Create the fare strategy for a policy identifier

    Args:
        policy: One of "normal", "surge", "discount" (exact match)
        strict: Raise for unknown identifiers instead of using normal fare

    Returns:
        New strategy instance

    Raises:
        UnrecognizedFarePolicy: policy is unknown and strict is set
    """
    strategy_class = FARE_STRATEGIES.get(policy)
    if strategy_class is None:
        if strict:
            raise UnrecognizedFarePolicy(policy)
        logger.warning(f"Unknown fare policy {policy!r}, using {DEFAULT_FARE_POLICY} fare")
        strategy_class = FARE_STRATEGIES[DEFAULT_FARE_POLICY]
    return strategy_class()


def validate_distance(distance) -> None:
    """Reject distances that cannot produce a meaningful fare."""
    if isinstance(distance, bool) or not isinstance(distance, Real):
        raise InvalidDistance(distance)
    if not math.isfinite(distance) or distance < 0:
        raise InvalidDistance(distance)


class FareCalculator:
    """Holds the selected fare strategy and delegates fare calculation to it"""

    def __init__(self, strategy: Optional[FareStrategy] = None):
        self.strategy = strategy

    def set_strategy(self, strategy: FareStrategy) -> None:
        self.strategy = strategy
        logger.debug(f"Fare strategy set to {strategy!r}")

    def calculate_fare(self, distance):
        """
        Calculate the fare for a distance with the active strategy

        Raises:
            NoStrategySelected: set_strategy was never called
            InvalidDistance: distance is negative, NaN, infinite or not a number
        """
        if self.strategy is None:
            raise NoStrategySelected()
        validate_distance(distance)

        fare = self.strategy.calculate(distance)
        logger.info(f"Fare for {distance} km with {self.strategy!r}: {fare}")
        return fare
