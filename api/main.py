"""
FastAPI backend for the Treatment Plan Assistant.

Accepts patient intake submissions, returns validated treatment analyses
and exposes stored analyses for review.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import get_settings
from api.errors import register_error_handlers
from api.routes import analyses, analyze, health
from treatment_assistant import __version__
from treatment_assistant.utils.logging import setup_logging

load_dotenv()

logger = logging.getLogger("treatment_assistant.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    setup_logging(get_settings())
    logger.info("Treatment Plan Assistant API starting")
    yield
    logger.info("API shutting down")


app = FastAPI(
    title="Treatment Plan Assistant API",
    description="Clinical intake analysis with FDA and RxNorm enrichment",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration for the intake frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router, tags=["Health"])
app.include_router(analyze.router, prefix="/api", tags=["Analysis"])
app.include_router(analyses.router, prefix="/api", tags=["Analyses"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
