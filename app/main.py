from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.logging import setup_logging
from app.core.init_db import init_db
from app.core.config import SEED_DEMO_DATA
from app.core.db import SessionLocal
from app.core.errors import ProximityError
from app.api.router import api_router
from app.services.location_store import get_location_store
from app.services.demo_seed import seed_demo_data

setup_logging()
logger.info("Starting NearMe backend")


app = FastAPI(
    title="NearMe Backend",
    version="0.1.0"
)

# All API routes (profiles + presence via router.py)
app.include_router(api_router)


@app.exception_handler(ProximityError)
async def proximity_error_handler(request: Request, exc: ProximityError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Init DB after app is created
init_db()

if SEED_DEMO_DATA:
    with SessionLocal() as db:
        seed_demo_data(db, get_location_store())


@app.get("/health")
def health():
    logger.debug("Health check hit")
    return {"status": "ok"}
