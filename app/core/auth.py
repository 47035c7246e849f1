from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from fastapi import Header, HTTPException
from jose import jwt, JWTError
from loguru import logger

from app.core.config import AUTH_DEBUG, JWT_EXPIRES_DAYS, JWT_SECRET

JWT_ALGORITHM = "HS256"


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------
def _get_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header format")

    token = parts[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing bearer token")

    return token


# ------------------------------------------------------------
# Issue + Verify
# ------------------------------------------------------------
def create_access_token(user_id: str, expires_days: int = JWT_EXPIRES_DAYS) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=expires_days),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def _verify_jwt(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")


# ------------------------------------------------------------
# Main Dependency
# ------------------------------------------------------------
def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
) -> str:

    token = _get_bearer_token(authorization)

    if AUTH_DEBUG:
        logger.debug(f"[auth] token_len={len(token)} token_prefix={token[:20]}...")

    payload = _verify_jwt(token)

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Token missing sub claim")

    if AUTH_DEBUG:
        logger.debug(f"[auth] user_id={sub}")

    return str(sub)
