from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from app.schemas.base import BaseSchema
from app.schemas.enums import NearbyStatus
from app.schemas.profile import UserProfileOut

class LocationSubmitRequest(BaseModel):
    # validated by the location store (InputError), not by pydantic
    lat: Optional[float | str] = None
    lng: Optional[float | str] = None
    accuracy: Optional[float] = None
    precision: Optional[bool] = None
    share: Optional[bool] = None

class LocationSubmitResponse(BaseModel):
    ok: bool = True
    disabled: bool = False
    updated_at: Optional[datetime] = None

class NearbyUserOut(BaseSchema):
    user: UserProfileOut
    distance: float
    status: NearbyStatus
    last_seen: datetime

