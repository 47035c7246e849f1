import math

import pytest
import requests

from app.client.nearby_client import (
    NearbyClient,
    format_distance_km,
    radar_dots,
    visibility_radius,
)
from app.services.radar import radar_position


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return FakeResponse(self.payload, self.status_code)

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return FakeResponse(self.payload, self.status_code)


NEARBY = [
    {"user": {"user_id": "user_2", "name": "Mila"}, "distance": 400.0, "status": "nearby", "last_seen": "2026-03-01T12:00:00"},
    {"user": {"user_id": "user_4", "name": "Skylar"}, "distance": 4000.0, "status": "recent", "last_seen": "2026-03-01T11:59:40"},
]


def test_visibility_radius():
    assert visibility_radius(True) == 800
    assert visibility_radius(False) == 2500


def test_format_distance_km():
    assert format_distance_km(1234) == "1.2 km"
    assert format_distance_km(50) == "0.1 km"


def test_send_location_posts_payload():
    session = FakeSession({"ok": True, "disabled": False})
    client = NearbyClient("http://api.local/", "tok", session=session)

    assert client.send_location(47.6, -122.3, accuracy=10, precision=True)["ok"] is True

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.local/v1/presence/location")
    assert kwargs["json"]["precision"] is True
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


def test_disable_sharing():
    session = FakeSession({"ok": True, "disabled": True})
    NearbyClient("http://api.local", "tok", session=session).disable_sharing()
    assert session.calls[0][2]["json"] == {"share": False}


def test_fetch_nearby_only_sends_override_with_both_coordinates():
    session = FakeSession([])
    client = NearbyClient("http://api.local", "tok", session=session)

    client.fetch_nearby(lat=47.6, radius=800)
    assert session.calls[-1][2]["params"] == {"radius": 800}

    client.fetch_nearby(lat=47.6, lng=-122.3)
    assert session.calls[-1][2]["params"] == {"lat": 47.6, "lng": -122.3}


def test_fetch_nearby_raises_on_error():
    client = NearbyClient("http://api.local", "tok", session=FakeSession({"detail": "x"}, 400))
    with pytest.raises(requests.HTTPError):
        client.fetch_nearby()


def test_radar_keeps_server_order_and_projects():
    session = FakeSession(NEARBY)
    client = NearbyClient("http://api.local", "tok", session=session)

    dots = client.radar(display_radius=100, precision=False)

    assert [d.user_id for d in dots] == ["user_2", "user_4"]
    assert session.calls[0][2]["params"] == {"radius": 2500}
    assert (dots[0].x, dots[0].y) == radar_position("user_2", 400.0, 2500, 100)
    assert math.hypot(dots[1].x, dots[1].y) == pytest.approx(100)


def test_radar_dots_are_stable_across_renders():
    assert radar_dots(NEARBY, 2500, 90) == radar_dots(NEARBY, 2500, 90)
