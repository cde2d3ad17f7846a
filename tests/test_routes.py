from pathlib import Path

from fastapi.testclient import TestClient

from config import Settings
from main import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["ride_status"] == "Pending"


def test_demo_page(client):
    response = client.get("/demo")
    assert response.status_code == 200
    assert 'id="bookBtn"' in response.text
    assert 'id="fareType"' in response.text


def test_booking_scenario(client):
    response = client.post("/rides/book")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "action": "book",
        "status": "Booked",
        "message": "Hello Alice, your ride is now: Booked",
    }

    response = client.post("/fares/quote", json={"policy": "surge", "distance_km": 5})
    assert response.status_code == 200
    body = response.json()
    assert body["fare"] == 75
    assert body["strategy"] == "SurgePricing"
    assert body["message"] == "Fare calculated: ₹75"

    response = client.post("/fares/quote", json={"policy": "xyz"})
    assert response.status_code == 200
    assert response.json()["fare"] == 50
    assert response.json()["strategy"] == "NormalFare"


def test_ride_status(client):
    client.post("/rides/cancel")

    response = client.get("/rides/status")
    assert response.json() == {
        "status": "Canceled",
        "message": "Hello Alice, your ride is now: Canceled",
        "subscribers": 2,
    }


def test_unknown_action(client):
    response = client.post("/rides/refund")
    assert response.status_code == 404


def test_fare_policies(client):
    policies = client.get("/fares/policies").json()["policies"]
    assert {p["policy"]: p["rate_per_km"] for p in policies} == {
        "normal": 10,
        "surge": 15,
        "discount": 8,
    }


def test_negative_distance_rejected(client):
    response = client.post("/fares/quote", json={"policy": "normal", "distance_km": -1})
    assert response.status_code == 400


def test_non_numeric_distance_rejected(client):
    response = client.post("/fares/quote", json={"policy": "normal", "distance_km": "far"})
    assert response.status_code == 422


def test_rider_subscriptions(client):
    response = client.post("/rides/riders", json={"name": "Bob"})
    assert response.status_code == 201
    assert response.json()["subscribers"] == 3

    client.post("/rides/book")
    assert client.get("/rides/riders/Bob").json()["last_message"] == (
        "Hello Bob, your ride is now: Booked"
    )

    response = client.delete("/rides/riders/Bob")
    assert response.status_code == 200

    client.post("/rides/rate")
    assert client.get("/rides/riders/Bob").status_code == 404
    assert client.delete("/rides/riders/Bob").status_code == 404


def test_strict_settings():
    app = create_app(Settings(strict_fare_policy=True, enforce_status_transitions=True))
    with TestClient(app) as client:
        assert client.post("/fares/quote", json={"policy": "xyz"}).status_code == 400
        assert client.post("/rides/rate").status_code == 409
        assert client.post("/rides/book").status_code == 200
        assert client.post("/rides/rate").json()["status"] == "Rated"


def test_boolean_distance_rejected(client):
    response = client.post("/fares/quote", json={"policy": "normal", "distance_km": True})
    assert response.status_code == 422


def test_float_distance_accepted(client):
    response = client.post("/fares/quote", json={"policy": "discount", "distance_km": 2.5})
    assert response.status_code == 200
    assert response.json()["fare"] == 20


def test_demo_page_ships_inside_routes_package():
    from routes import ui_routes

    package_dir = Path(ui_routes.__file__).resolve().parent
    assert ui_routes.DEMO_PAGE.is_relative_to(package_dir)
    assert ui_routes.DEMO_PAGE.is_file()
    assert 'id="rideStatus"' in ui_routes.DEMO_HTML


def test_status_feed_observer_subscribed(app):
    context = app.state.context
    assert context.ride_request.observers == (context.rider, app.state.notifier)
