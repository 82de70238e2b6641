# moodjournal backend api
# fastapi app with an in-memory entry store and gemini mood analysis

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.services.mood_analyzer import MoodAnalyzer
from app.services.storage import MemStorage, seed_default_user
from app.routers import journal, insights, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: build the store, seed the default user, set up the analyzer."""
    logger.info("Starting MoodJournal backend...")
    app.state.store = MemStorage()
    await seed_default_user(app.state.store, settings.SEED_USERNAME, settings.SEED_PASSWORD)
    app.state.analyzer = MoodAnalyzer()
    if not app.state.analyzer.is_configured:
        logger.warning("GEMINI_API_KEY not set, mood analysis will return fallback values")
    logger.info("MoodJournal backend ready")
    yield
    logger.info("Shutting down MoodJournal backend...")


app = FastAPI(
    title="MoodJournal API",
    description="Backend API for MoodJournal: journal entries with AI mood analysis",
    version="0.1.0",
    lifespan=lifespan,
)

# cors: allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_validation_errors(exc: RequestValidationError) -> str:
    """turn pydantic errors into one readable line, e.g. 'body.mood: Input should be ...'"""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", "invalid value"))
    return "Validation error: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """bad input is a 400 with a human-readable message"""
    message = _format_validation_errors(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# register routers
app.include_router(journal.router)
app.include_router(insights.router)
app.include_router(users.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "moodjournal-api"}
