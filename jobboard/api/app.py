"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from jobboard.api.limiter import limiter
from jobboard.api.responses import fail, service_error_response
from jobboard.config import Settings, settings
from jobboard.db import Database
from jobboard.errors import ServiceError
from jobboard.identity import Identity
from jobboard.logger import configure_logging
from jobboard.storage import ResumeBucket

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


def create_app(
    config: Settings = settings,
    database: Database | None = None,
    identity: Identity | None = None,
    bucket: ResumeBucket | None = None,
) -> FastAPI:
    """Build the app. Collaborators not passed in are built from settings at startup."""
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect collaborators on startup and release the engine on shutdown."""
        if app.state.database is None:
            app.state.database = Database(config.database_url)
        if app.state.identity is None:
            app.state.identity = Identity.from_settings(config)
        if app.state.bucket is None:
            app.state.bucket = ResumeBucket.from_settings(config)
        app.state.database.create_all()
        logger.info("Job board API ready")
        yield
        app.state.database.dispose()

    app = FastAPI(
        title="Job Board API",
        description="Job postings, applications and resume storage",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.database = database
    app.state.identity = identity
    app.state.bucket = bucket
    app.state.limiter = limiter

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return service_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return fail(400, "Invalid request", error=_describe_validation_error(exc))

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Return 429 with a clear message when rate limit is exceeded."""
        return fail(429, f"Rate limit exceeded: {exc.detail}")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return fail(500, "Internal server error", error=str(exc))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Import and include routers
    from jobboard.api.routes import auth, jobs, resume

    app.include_router(auth.router, prefix="/auth", tags=["Auth"])
    app.include_router(jobs.router, prefix="/api", tags=["Jobs"])
    app.include_router(resume.router, prefix="/resume", tags=["Resume"])

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
