from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.auth import get_current_user_id
from app.schemas.presence import (
    LocationSubmitRequest,
    LocationSubmitResponse,
    NearbyUserOut,
)
from app.services.location_store import LocationStore, get_location_store
from app.services.profiles import ProfileDirectory
from app.services.proximity import ProximityResolver

router = APIRouter()


def get_resolver(
    db: Session = Depends(get_db),
    store: LocationStore = Depends(get_location_store),
) -> ProximityResolver:
    return ProximityResolver(store, ProfileDirectory(db))


# ------------------------------------------------------------------
# SUBMIT LOCATION
# ------------------------------------------------------------------

@router.post("/location", response_model=LocationSubmitResponse)
def submit_location(
    payload: LocationSubmitRequest,
    resolver: ProximityResolver = Depends(get_resolver),
    user_id: str = Depends(get_current_user_id),
):
    result = resolver.submit_location(
        user_id,
        lat=payload.lat,
        lng=payload.lng,
        accuracy=payload.accuracy,
        precision=payload.precision,
        share=payload.share,
    )
    return {"ok": True, "disabled": result.disabled, "updated_at": result.updated_at}


# ------------------------------------------------------------------
# NEARBY
# ------------------------------------------------------------------

@router.get("/nearby", response_model=List[NearbyUserOut])
def nearby(
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None),
    radius: Optional[str] = Query(None),
    resolver: ProximityResolver = Depends(get_resolver),
    user_id: str = Depends(get_current_user_id),
):
    # the override only applies when both coordinates are given
    base = (lat, lng) if lat not in (None, "") and lng not in (None, "") else None

    results = resolver.find_nearby(user_id, base_position=base, radius_meters=radius)
    return [NearbyUserOut.model_validate(r) for r in results]
