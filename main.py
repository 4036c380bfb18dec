from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from api.routes import geocoding, locations, nearby
from core.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Set specific log levels
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)  # Reduce noise from access logs


app = FastAPI(
    title="Local Vendor Hub Location API",
    description="Reverse geocoding, nearby sellers and location directory for the vendor marketplace",
    version="1.0.0",
)

allowed_origins = settings.ALLOWED_ORIGINS.split(",") if settings.ALLOWED_ORIGINS else ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(geocoding.router)
app.include_router(nearby.router)
app.include_router(locations.router)


@app.get("/")
async def root():
    return {"message": "Local Vendor Hub Location API", "status": "running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
