"""
FastAPI application for the Progress Tracker API
Work entries, bug knowledge base with similarity search, and AI reports
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import Config
from utils.mongo_helper import get_mongo_database
from services.mongo_store import BugRepository, WorkEntryRepository
from . import bugs, reports, work_entries

logger = logging.getLogger(__name__)

# Audio and PDF reports are served from here
os.makedirs(Config.REPORTS_DIR, exist_ok=True)


def ensure_indexes():
    database = get_mongo_database()
    if database is None:
        logger.warning("MongoDB unavailable at startup - skipping index creation")
        return
    WorkEntryRepository(database[Config.MONGO_WORK_ENTRIES_COLLECTION]).ensure_indexes()
    BugRepository(database[Config.MONGO_BUGS_COLLECTION]).ensure_indexes()
    logger.info("MongoDB indexes ensured")


# ==================== Lifespan ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown"""
    logger.info("Starting Progress Tracker API server...")
    Config.validate()
    ensure_indexes()
    logger.info(f"🚀 Progress Tracker API ready (provider: {Config.AI_PROVIDER})")

    yield

    logger.info("Shutting down Progress Tracker API server...")


# ==================== App Setup ====================

app = FastAPI(
    title="Progress Tracker API",
    description="Track work entries and bug fixes, find similar past bugs, and generate AI reports",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/reports", StaticFiles(directory=Config.REPORTS_DIR), name="reports")

app.include_router(work_entries.router)
app.include_router(bugs.router)
app.include_router(reports.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Something went wrong!", "message": str(exc)},
    )


# ==================== Health Check ====================

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "OK",
        "message": "Progress Tracker API is running",
        "timestamp": datetime.utcnow().isoformat(),
    }
