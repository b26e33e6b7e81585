"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import places
from settings import settings

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

if not settings.GEOAPIFY_API_KEY:
    logger.warning("GEOAPIFY_API_KEY not set in environment; place searches will return 503.")


# Create app
app = FastAPI(
    title="Nearby Places API",
    description="Find restaurants and hotels near a position or postcode",
    version="0.1.0",
)

# CORS middleware for the mobile/web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(places.router, tags=["places"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Nearby Places API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
