from datetime import timedelta

from app.core.config import _get_env

# --------------------------------------------------
# STALENESS
# --------------------------------------------------

# Locations older than this are pruned before every nearby query
STALE_THRESHOLD_SECONDS = int(_get_env("STALE_THRESHOLD_SECONDS", "600"))

# --------------------------------------------------
# RECENT WINDOW
# --------------------------------------------------

# Outside the radius, a user still shows as "recent" if seen within this window
RECENT_WINDOW_SECONDS = int(_get_env("RECENT_WINDOW_SECONDS", "60"))

# --------------------------------------------------
# MATCHING
# --------------------------------------------------

DEFAULT_RADIUS_METERS = float(_get_env("DEFAULT_RADIUS_METERS", "2000"))

EARTH_RADIUS_METERS = 6371000

# --------------------------------------------------
# CLIENT VISIBILITY (radius the client asks for)
# --------------------------------------------------

PRECISE_VISIBILITY_METERS = 800
STANDARD_VISIBILITY_METERS = 2500

STALE_THRESHOLD = timedelta(seconds=STALE_THRESHOLD_SECONDS)
RECENT_WINDOW = timedelta(seconds=RECENT_WINDOW_SECONDS)
