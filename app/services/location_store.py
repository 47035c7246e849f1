from __future__ import annotations

import math
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, List, Optional

from loguru import logger

from app.core.errors import InputError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UserLocation:
    user_id: str
    lat: float
    lng: float
    accuracy: Optional[float]
    precision: bool
    updated_at: datetime


def coerce_coordinate(name: str, value) -> float:
    if value is None or isinstance(value, bool):
        raise InputError(f"{name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InputError(f"{name} must be a number")
    if not math.isfinite(number):
        raise InputError(f"{name} must be a finite number")
    return number


class LocationStore:
    """
    Last known position per user, held in memory.

    Every operation takes the same lock, so a prune never interleaves with an
    upsert or a scan. Callers that need several steps to see one consistent
    snapshot (prune then scan) can hold ``store.lock`` around them; the lock
    is re-entrant.
    """

    def __init__(self) -> None:
        self._locations: Dict[str, UserLocation] = {}
        self.lock = threading.RLock()

    def upsert(
        self,
        user_id: str,
        lat,
        lng,
        accuracy: Optional[float] = None,
        precision: bool = False,
        timestamp: Optional[datetime] = None,
    ) -> UserLocation:
        record = UserLocation(
            user_id=str(user_id),
            lat=coerce_coordinate("lat", lat),
            lng=coerce_coordinate("lng", lng),
            accuracy=float(accuracy) if accuracy is not None else None,
            precision=bool(precision),
            updated_at=timestamp or utcnow(),
        )

        with self.lock:
            prev = self._locations.get(record.user_id)
            # position is last-applied-wins; updated_at never moves backwards
            if prev is not None and prev.updated_at > record.updated_at:
                record = replace(record, updated_at=prev.updated_at)
            self._locations[record.user_id] = record

        logger.debug(f"[location] upsert user_id={record.user_id} precision={record.precision}")
        return record

    def remove(self, user_id: str) -> bool:
        with self.lock:
            removed = self._locations.pop(str(user_id), None) is not None

        if removed:
            logger.debug(f"[location] removed user_id={user_id}")
        return removed

    def prune_older_than(self, max_age: timedelta, now: Optional[datetime] = None) -> int:
        now = now or utcnow()

        with self.lock:
            stale = [
                uid for uid, loc in self._locations.items()
                if now - loc.updated_at >= max_age
            ]
            for uid in stale:
                del self._locations[uid]

        if stale:
            logger.debug(f"[location] pruned {len(stale)} stale record(s)")
        return len(stale)

    def get(self, user_id: str) -> Optional[UserLocation]:
        with self.lock:
            return self._locations.get(str(user_id))

    def all_except(self, user_id: str) -> List[UserLocation]:
        with self.lock:
            return [loc for uid, loc in self._locations.items() if uid != str(user_id)]

    def __len__(self) -> int:
        with self.lock:
            return len(self._locations)


@lru_cache(maxsize=1)
def get_location_store() -> LocationStore:
    return LocationStore()
