from sqlalchemy import Column, String, Boolean, Enum, DateTime, func
from app.core.db import Base
from app.schemas.enums import ProfileMode


class Profile(Base):
    __tablename__ = "profile"

    user_id = Column(String, primary_key=True)

    name = Column(String, nullable=False)
    handle = Column(String, nullable=False, unique=True, index=True)

    title = Column(String, nullable=False, default="")
    bio = Column(String, nullable=False, default="")
    avatar = Column(String, nullable=True)

    mode = Column(
        Enum(ProfileMode, name="profile_mode_enum"),
        nullable=False,
        default=ProfileMode.pro
    )

    # gates whether this user's location is ever surfaced to others
    share_location = Column(Boolean, nullable=False, default=False)

    updated_at = Column(
        DateTime,
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
