from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.auth import create_access_token, get_current_user_id
from app.schemas.profile import (
    ProfileCreateRequest,
    ProfileCreateResponse,
    UserProfileOut,
)
from app.services.profiles import HandleTakenError, ProfileDirectory, create_profile

router = APIRouter()


@router.post("", response_model=ProfileCreateResponse, status_code=201)
def profile_create(
    payload: ProfileCreateRequest,
    db: Session = Depends(get_db),
):
    try:
        profile = create_profile(db, **payload.model_dump())
    except HandleTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {
        "profile": UserProfileOut.model_validate(profile),
        "access_token": create_access_token(profile.user_id),
    }


@router.get("/me", response_model=UserProfileOut)
def profile_me(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ProfileDirectory(db).get(user_id)
