from __future__ import annotations

from datetime import datetime
from typing import List, Tuple

from loguru import logger
from sqlalchemy.orm import Session

from app.models.profile import Profile
from app.schemas.enums import ProfileMode
from app.services.location_store import LocationStore, utcnow
from app.services.profiles import create_profile

# Seattle downtown
BASE_LAT = 47.6062
BASE_LNG = -122.3321

DEMO_USERS = [
    ("user_1", "Avery Chen", "avery.chen", "Product Lead at Flowline", ProfileMode.pro),
    ("user_2", "Mila Ortiz", "mila.ortiz", "Creative Director", ProfileMode.social),
    ("user_3", "Rohan Patel", "rohan.patel", "Backend Engineer", ProfileMode.pro),
    ("user_4", "Skylar Nguyen", "sky.nguyen", "Photographer", ProfileMode.social),
    ("user_5", "Lena Park", "lena.park", "Close Friends Only", ProfileMode.private),
]


def demo_position(index: int) -> Tuple[float, float]:
    lat = BASE_LAT + (index % 3) * 0.003 + index * 0.0006
    lng = BASE_LNG - (index % 2) * 0.002 - index * 0.0004
    return lat, lng


def seed_demo_data(db: Session, store: LocationStore, now: datetime | None = None) -> List[str]:
    """Insert the demo profiles (sharing on) and drop each one into the store."""
    now = now or utcnow()
    seeded: List[str] = []

    for index, (user_id, name, handle, title, mode) in enumerate(DEMO_USERS):
        profile = db.query(Profile).filter(Profile.handle == handle).first()
        if profile is None:
            profile = create_profile(
                db,
                name=name,
                handle=handle,
                title=title,
                mode=mode,
                share_location=True,
                user_id=user_id,
            )
            seeded.append(profile.user_id)

        lat, lng = demo_position(index)
        store.upsert(profile.user_id, lat, lng, precision=False, timestamp=now)

    logger.info(f"Demo seed: {len(seeded)} new profile(s), {len(DEMO_USERS)} location(s)")
    return seeded
