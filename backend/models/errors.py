"""
Domain Errors
Exceptions raised by the ride workflow and the fare calculator
"""


class RideDemoError(Exception):
    """Base class for every error raised by the ride workflow"""


class NoStrategySelected(RideDemoError):
    """Fare requested before any fare strategy was chosen"""

    def __init__(self):
        super().__init__("No fare strategy selected")


class UnrecognizedFarePolicy(RideDemoError, ValueError):
    """Fare policy identifier is not one of the known policies"""

    def __init__(self, policy: str):
        self.policy = policy
        super().__init__(f"Unrecognized fare policy: {policy!r}")


class InvalidDistance(RideDemoError, ValueError):
    """Distance is negative, not finite or not a number"""

    def __init__(self, distance):
        self.distance = distance
        super().__init__(f"Invalid distance: {distance!r}")


class InvalidStatusTransition(RideDemoError):
    """Ride command refused by the status transition policy"""

    def __init__(self, current_status: str, new_status: str):
        self.current_status = current_status
        self.new_status = new_status
        super().__init__(f"Cannot move ride from {current_status} to {new_status}")


class UnknownRideAction(RideDemoError, ValueError):
    """Trigger name does not map to a ride command"""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unknown ride action: {action!r}")
