from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, List, Optional, Protocol, Tuple

from loguru import logger

from app.core.errors import InputError, NotFoundError
from app.core.proximity_config import (
    DEFAULT_RADIUS_METERS,
    EARTH_RADIUS_METERS,
    RECENT_WINDOW,
    STALE_THRESHOLD,
)
from app.schemas.enums import NearbyStatus
from app.services.location_store import LocationStore, coerce_coordinate, utcnow

STATUS_RANK = {NearbyStatus.nearby: 0, NearbyStatus.recent: 1}


class ProfileResolver(Protocol):
    def get(self, user_id: str) -> Any: ...

    def set_share_location(self, user_id: str, share: bool) -> Any: ...


@dataclass
class NearbyResult:
    user: Any
    distance: float
    status: NearbyStatus
    last_seen: datetime


@dataclass
class LocationSubmitResult:
    disabled: bool
    updated_at: Optional[datetime] = None


# ------------------------------------------------------------------
# Utils
# ------------------------------------------------------------------

def haversine_m(lat1, lng1, lat2, lng2) -> float:
    R = EARTH_RADIUS_METERS
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    return 2 * R * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def classify(
    distance: float,
    age: timedelta,
    radius_meters: float,
    recent_window: timedelta = RECENT_WINDOW,
) -> Optional[NearbyStatus]:
    if distance <= radius_meters:
        return NearbyStatus.nearby
    if age < recent_window:
        return NearbyStatus.recent
    return None


def resolve_radius(radius) -> float:
    """Zero, negative, missing or unparseable radii fall back to the default."""
    try:
        value = float(radius)
    except (TypeError, ValueError):
        return DEFAULT_RADIUS_METERS
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_RADIUS_METERS
    return value


# ------------------------------------------------------------------
# Resolver
# ------------------------------------------------------------------

class ProximityResolver:
    def __init__(
        self,
        store: LocationStore,
        profiles: ProfileResolver,
        stale_threshold: timedelta = STALE_THRESHOLD,
        recent_window: timedelta = RECENT_WINDOW,
    ) -> None:
        self.store = store
        self.profiles = profiles
        self.stale_threshold = stale_threshold
        self.recent_window = recent_window

    def submit_location(
        self,
        user_id: str,
        lat=None,
        lng=None,
        accuracy: Optional[float] = None,
        precision: Optional[bool] = False,
        share: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> LocationSubmitResult:
        # unknown users are a hard failure here (raises NotFoundError)
        self.profiles.get(user_id)

        if share is False:
            self.profiles.set_share_location(user_id, False)
            self.store.remove(user_id)
            logger.info(f"[proximity] sharing disabled user_id={user_id}")
            return LocationSubmitResult(disabled=True)

        if lat is None or lng is None:
            raise InputError("lat and lng are required")

        record = self.store.upsert(
            user_id,
            lat,
            lng,
            accuracy=accuracy,
            precision=bool(precision),
            timestamp=now or utcnow(),
        )
        self.profiles.set_share_location(user_id, True if share is None else share)

        return LocationSubmitResult(disabled=False, updated_at=record.updated_at)

    def find_nearby(
        self,
        requester_id: str,
        base_position: Optional[Tuple[Any, Any]] = None,
        radius_meters=None,
        now: Optional[datetime] = None,
    ) -> List[NearbyResult]:
        now = now or utcnow()
        radius = resolve_radius(radius_meters)

        with self.store.lock:
            self.store.prune_older_than(self.stale_threshold, now)

            if base_position is not None:
                base_lat = coerce_coordinate("lat", base_position[0])
                base_lng = coerce_coordinate("lng", base_position[1])
            else:
                own = self.store.get(requester_id)
                if own is None:
                    raise InputError("base location unavailable")
                base_lat, base_lng = own.lat, own.lng

            candidates = self.store.all_except(requester_id)

        results: List[NearbyResult] = []
        for loc in candidates:
            try:
                profile = self.profiles.get(loc.user_id)
            except NotFoundError:
                logger.debug(f"[proximity] skipping unknown user_id={loc.user_id}")
                continue

            if not getattr(profile, "share_location", False):
                continue

            distance = haversine_m(base_lat, base_lng, loc.lat, loc.lng)
            status = classify(distance, now - loc.updated_at, radius, self.recent_window)
            if status is None:
                continue

            results.append(
                NearbyResult(
                    user=profile,
                    distance=distance,
                    status=status,
                    last_seen=loc.updated_at,
                )
            )

        results.sort(key=lambda r: (STATUS_RANK[r.status], r.distance))

        logger.debug(
            f"[proximity] nearby requester={requester_id} radius={radius} "
            f"scanned={len(candidates)} returned={len(results)}"
        )
        return results
