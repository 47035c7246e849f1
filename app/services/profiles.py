from __future__ import annotations

import uuid
from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.profile import Profile
from app.schemas.enums import ProfileMode

DEFAULT_AVATAR = "https://i.pravatar.cc/150?img=16"


class HandleTakenError(ValueError):
    pass


class ProfileDirectory:
    """Resolves user ids to profiles for the proximity resolver."""

    def __init__(self, db: Session):
        self.db = db

    def find(self, user_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == str(user_id)).first()

    def get(self, user_id: str) -> Profile:
        profile = self.find(user_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    def set_share_location(self, user_id: str, share: bool) -> Profile:
        profile = self.get(user_id)
        if profile.share_location != share:
            profile.share_location = share
            self.db.commit()
            self.db.refresh(profile)
            logger.debug(f"[profiles] share_location={share} user_id={user_id}")
        return profile


def create_profile(
    db: Session,
    name: str,
    handle: str,
    title: str = "",
    bio: str = "",
    avatar: Optional[str] = None,
    mode: ProfileMode = ProfileMode.pro,
    share_location: bool = False,
    user_id: Optional[str] = None,
) -> Profile:
    existing = db.query(Profile).filter(Profile.handle == handle).first()
    if existing:
        raise HandleTakenError("Handle already in use")

    profile = Profile(
        user_id=user_id or f"user_{uuid.uuid4().hex[:8]}",
        name=name,
        handle=handle,
        title=title,
        bio=bio,
        avatar=avatar or DEFAULT_AVATAR,
        mode=mode,
        share_location=share_location,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)

    logger.info(f"[profiles] created user_id={profile.user_id} handle={handle}")
    return profile
