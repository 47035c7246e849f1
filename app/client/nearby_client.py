from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from app.core.proximity_config import (
    PRECISE_VISIBILITY_METERS,
    STANDARD_VISIBILITY_METERS,
)
from app.services.radar import radar_position


@dataclass
class RadarDot:
    user_id: str
    name: str
    status: str
    distance: float
    x: float
    y: float


def visibility_radius(precision: bool) -> int:
    return PRECISE_VISIBILITY_METERS if precision else STANDARD_VISIBILITY_METERS


def format_distance_km(distance_meters: float) -> str:
    return f"{distance_meters / 1000:.1f} km"


class NearbyClient:
    """
    Thin HTTP consumer of the presence API.

    Ranking and nearby/recent classification come from the server; the client
    only lays the returned list out on a radar.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {"Authorization": f"Bearer {token}"}

    def _url(self, path: str) -> str:
        return f"{self.base_url}/v1/presence{path}"

    def send_location(
        self,
        lat: float,
        lng: float,
        accuracy: Optional[float] = None,
        precision: bool = False,
        share: bool = True,
    ) -> Dict[str, Any]:
        resp = self.session.post(
            self._url("/location"),
            json={
                "lat": lat,
                "lng": lng,
                "accuracy": accuracy,
                "precision": precision,
                "share": share,
            },
            headers=self.headers,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def disable_sharing(self) -> Dict[str, Any]:
        resp = self.session.post(
            self._url("/location"),
            json={"share": False},
            headers=self.headers,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def fetch_nearby(
        self,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if radius is not None:
            params["radius"] = radius
        if lat is not None and lng is not None:
            params["lat"] = lat
            params["lng"] = lng

        resp = self.session.get(
            self._url("/nearby"),
            params=params,
            headers=self.headers,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        logger.debug(f"[client] fetched {len(data)} nearby profile(s)")
        return data

    def radar(
        self,
        display_radius: float,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        precision: bool = False,
    ) -> List[RadarDot]:
        max_distance = visibility_radius(precision)
        profiles = self.fetch_nearby(lat=lat, lng=lng, radius=max_distance)
        return radar_dots(profiles, max_distance, display_radius)


def radar_dots(
    profiles: List[Dict[str, Any]],
    max_distance: float,
    display_radius: float,
) -> List[RadarDot]:
    dots: List[RadarDot] = []
    for p in profiles:
        user = p["user"]
        x, y = radar_position(user["user_id"], p["distance"], max_distance, display_radius)
        dots.append(
            RadarDot(
                user_id=user["user_id"],
                name=user.get("name", ""),
                status=p["status"],
                distance=p["distance"],
                x=x,
                y=y,
            )
        )
    return dots
