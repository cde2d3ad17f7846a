"""Unit tests for ride commands (Command Pattern)."""

import pytest

from models.errors import InvalidStatusTransition, UnknownRideAction
from models.ride_request import BOOKED, CANCELED, PENDING, RATED, RideRequest, TransitionPolicy
from models.rider import Rider
from services.commands import (
    BookRideCommand,
    CancelRideCommand,
    RateRideCommand,
    command_for_trigger,
)
from services.ride_service import RideService


class CountingRider(Rider):
    def __init__(self, name):
        super().__init__(name, display=lambda message: None)
        self.updates = 0

    def update(self, status):
        self.updates += 1
        super().update(status)


@pytest.fixture
def service():
    return RideService()


@pytest.fixture
def request_and_rider():
    ride_request = RideRequest()
    rider = CountingRider("Alice")
    ride_request.subscribe(rider)
    return ride_request, rider


class TestRideService:
    def test_operations_return_fixed_statuses(self, service):
        assert service.book_ride() == "Booked"
        assert service.cancel_ride() == "Canceled"
        assert service.rate_ride() == "Rated"

    def test_operations_are_logged(self, service, caplog):
        with caplog.at_level("INFO", logger="services.ride_service"):
            service.book_ride()
            service.cancel_ride()
            service.rate_ride()

        assert [r.getMessage() for r in caplog.records] == [
            "Ride booked",
            "Ride canceled",
            "Ride rated",
        ]


class TestRideCommands:
    @pytest.mark.parametrize(
        "command_class, expected",
        [
            (BookRideCommand, BOOKED),
            (CancelRideCommand, CANCELED),
            (RateRideCommand, RATED),
        ],
    )
    def test_execute_sets_status_and_notifies_once(
        self, service, request_and_rider, command_class, expected
    ):
        ride_request, rider = request_and_rider

        command_class(service, ride_request).execute()

        assert ride_request.status == expected
        assert rider.updates == 1
        assert rider.last_message == f"Hello Alice, your ride is now: {expected}"

    def test_repeated_execute_renotifies(self, service, request_and_rider):
        ride_request, rider = request_and_rider
        command = BookRideCommand(service, ride_request)

        command.execute()
        command.execute()

        assert ride_request.status == BOOKED
        assert rider.updates == 2

    def test_no_ordering_constraint_by_default(self, service, request_and_rider):
        ride_request, _ = request_and_rider

        RateRideCommand(service, ride_request).execute()
        assert ride_request.status == RATED

        CancelRideCommand(service, ride_request).execute()
        assert ride_request.status == CANCELED

        BookRideCommand(service, ride_request).execute()
        assert ride_request.status == BOOKED

    def test_policy_refuses_rate_before_book(self, service, request_and_rider):
        ride_request, rider = request_and_rider

        with pytest.raises(InvalidStatusTransition):
            RateRideCommand(service, ride_request, TransitionPolicy()).execute()

        assert ride_request.status == PENDING
        assert rider.updates == 0

    def test_policy_allows_book_then_rate(self, service, request_and_rider):
        ride_request, _ = request_and_rider
        policy = TransitionPolicy()

        BookRideCommand(service, ride_request, policy).execute()
        RateRideCommand(service, ride_request, policy).execute()

        assert ride_request.status == RATED


class TestCommandForTrigger:
    @pytest.mark.parametrize(
        "trigger, command_class",
        [("book", BookRideCommand), ("cancel", CancelRideCommand), ("rate", RateRideCommand)],
    )
    def test_known_triggers(self, service, trigger, command_class):
        command = command_for_trigger(trigger, service, RideRequest())
        assert isinstance(command, command_class)

    def test_unknown_trigger(self, service):
        with pytest.raises(UnknownRideAction):
            command_for_trigger("refund", service, RideRequest())
