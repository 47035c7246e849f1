from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.base import BaseSchema
from app.schemas.enums import ProfileMode

class ProfileCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    handle: str = Field(..., min_length=1)
    title: str = ""
    bio: str = ""
    avatar: Optional[str] = None
    mode: ProfileMode = ProfileMode.pro

class UserProfileOut(BaseSchema):
    user_id: str
    name: str
    handle: str
    title: str
    bio: str
    avatar: Optional[str] = None
    mode: ProfileMode
    share_location: bool

class ProfileCreateResponse(BaseModel):
    profile: UserProfileOut
    access_token: str
    token_type: str = "bearer"
