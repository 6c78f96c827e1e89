"""REPLYDESK — FastAPI Application Entry Point.

Restaurant feedback reply desk: versioned fact configurations, prompt
rendering and AI-generated responses.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.config_routes import router as config_router
from app.api.dependencies import get_stores
from app.api.profile_routes import router as profile_router
from app.api.response_routes import router as response_router
from app.api.screenshot_routes import router as screenshot_router
from app.ai.registry import configured_providers
from app.config import settings
from app.core.logging import get_logger

logger = get_logger("main")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 REPLYDESK starting up...")
    logger.info(f"🗄️  Storage backend: {settings.storage_backend}")
    get_stores()
    available = configured_providers()
    if available:
        logger.info(f"🤖 AI providers available: {', '.join(available)}")
    else:
        logger.warning(
            "⚠️  No AI provider configured. Set OPENAI_API_KEY, ANTHROPIC_API_KEY "
            "or SARVAM_API_KEY — generation endpoints will fail"
        )
    yield
    logger.info("REPLYDESK shut down")


app = FastAPI(
    title="REPLYDESK",
    description="Restaurant feedback reply desk — render fact-driven prompts and generate customer responses with an LLM.",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(config_router)
app.include_router(response_router)
app.include_router(screenshot_router)
app.include_router(profile_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "replydesk",
        "version": VERSION,
        "storage_backend": settings.storage_backend,
    }
