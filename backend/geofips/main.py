import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geofips.api.geocode import router as geocode_router
from geofips.config import get_settings
from geofips.services.geocoder import Geocoder

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    geocoder = getattr(app.state, "geocoder", None)
    if geocoder is None:
        geocoder = Geocoder.from_settings(settings)
        app.state.geocoder = geocoder

    # Load the FIPS reference data before serving; a load failure aborts startup
    await geocoder.fips_tables()
    logger.info(f"Geocoder ready (index {settings.PLACE_INDEX_NAME}, region {settings.AWS_REGION})")

    yield

    await geocoder.aclose()


app = FastAPI(
    title="Geocoding FIPS Service",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(geocode_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "geofips"}
