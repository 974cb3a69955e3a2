"""Chatbot Microservice - Main Application Module.

This module initializes the FastAPI application with configuration,
middleware, routing, and lifecycle management for the conversation and
message API.
"""

import logging
import sys
import uuid
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

# Add the project root to Python path if running directly
if __name__ == "__main__":
    project_root = Path(__file__).parent.parent
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_config_summary, settings
from app.core.dependencies import close_completion_client
from app.core.logging import setup_logging
from app.database import engine
from app.exceptions.base import BaseAppException
from app.schemas.base import ErrorResponse
from models import Base


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifecycle events."""
    # Startup
    logger.info(f"🚀 Starting {settings.app_name} ({settings.environment.value})...")
    logger.info(f"Configuration: {get_config_summary()}")

    if settings.auto_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Database tables created/verified")

    if not settings.has_ai_enabled:
        logger.warning("OPENROUTER_API_KEY is not set; message endpoints will answer 503")

    yield

    # Shutdown
    logger.info(f"🛑 Shutting down {settings.app_name}...")
    await close_completion_client()
    await engine.dispose()
    logger.info("✅ Database connections closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        description="AI-powered chatbot service with OpenRouter integration",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Add middleware
    setup_middleware(app)

    # Add exception handlers
    setup_exception_handlers(app)

    # Include routers
    setup_routers(app)

    return app


def setup_middleware(app: FastAPI):
    """Configure application middleware."""
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def error_body(error: str, details=None) -> dict:
    return ErrorResponse(error=error, details=details or None).model_dump(exclude_none=True)


def setup_exception_handlers(app: FastAPI):
    """Configure global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, BaseAppException):
            message = exc.message if settings.is_development else exc.public_message
            details = exc.details if settings.is_development else exc.public_details
        elif exc.status_code == 404:
            message = "Route not found"
            details = None
        else:
            message = str(exc.detail) if exc.detail else "An error occurred"
            details = None

        log = logger.error if exc.status_code >= 500 else logger.info
        logged = exc.message if isinstance(exc, BaseAppException) else message
        log(f"{request.method} {request.url.path} -> {exc.status_code}: {logged}")

        return JSONResponse(status_code=exc.status_code, content=error_body(message, details))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        messages = []
        for error in exc.errors():
            loc = ".".join(str(part) for part in error.get("loc", []))
            messages.append(f"{loc}: {error.get('msg', 'Validation error')}")

        logger.info(f"Validation error on {request.url.path}: {messages}")
        return JSONResponse(
            status_code=400,
            content=error_body("Validation error", "; ".join(messages)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Application error on {request.method} {request.url.path}")
        details = str(exc) if settings.is_development else None
        return JSONResponse(status_code=500, content=error_body("Internal server error", details))


def setup_routers(app: FastAPI):
    """Configure application routers."""
    # Import routers
    from app.domains.conversation.controller import router as conversation_router
    from app.domains.message.controller import router as message_router
    from app.domains.prompt.controller import router as prompt_router

    @app.get("/health")
    async def health_check():
        """Liveness check."""
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "environment": settings.environment.value,
        }

    @app.get("/")
    async def root():
        """Service and route directory."""
        return {
            "service": settings.app_name,
            "version": settings.version,
            "description": "AI-powered chatbot service with OpenRouter integration",
            "endpoints": {
                "health": "GET /health",
                "conversations": {
                    "create": "POST /v1/chatbot/conversations",
                    "list": "GET /v1/chatbot/conversations?user_id={user_id}",
                    "get": "GET /v1/chatbot/conversations/:id",
                    "update": "PATCH /v1/chatbot/conversations/:id",
                    "delete": "DELETE /v1/chatbot/conversations/:id",
                },
                "messages": {
                    "send": "POST /v1/chatbot/conversations/:id/messages",
                    "regenerate": "POST /v1/chatbot/messages/:id/regenerate",
                    "regenerations": "GET /v1/chatbot/messages/:id/regenerations",
                },
                "prompts": {
                    "list": "GET /v1/chatbot/prompts/templates?category={category}",
                    "get": "GET /v1/chatbot/prompts/templates/:id",
                    "render": "POST /v1/chatbot/prompts/templates/:id/render",
                },
            },
        }

    # Include domain routers
    app.include_router(conversation_router)
    app.include_router(message_router)
    app.include_router(prompt_router)


# Create the application instance
app = create_app()


def main():
    """Entry point for running the application directly."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
