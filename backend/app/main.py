"""FastAPI application entry point"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError

from backend.app.core.config import settings
from backend.app.core.database import engine
from backend.app.core.logging import setup_logging, get_logger
from backend.app.core.middleware import RequestIDMiddleware, LoggingMiddleware
from backend.app.core.exceptions import PageantryException
from backend.app.scoring.weights import get_weights

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown tasks"""
    weights = get_weights()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Scoring scheme: {weights.name} {weights.as_dict()}")
    yield
    logger.info("Shutting down application")
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## Pageantry Tabulation

Scoring and tabulation backend for beauty pageants.

### Features

* **Score submission**: judges score each candidate once per category (0-100, two decimals)
* **Weighted totals**: category averages combined with configurable percentage weights
* **Rankings**: overall and per-category leaderboards
* **Progress tracking**: per judge and per category completion
* **Result tables**: export-ready ranked rows

### Scoring

Each category average is the mean of all judges' scores for a candidate.
The total is the sum of every average multiplied by its category weight,
divided by 100. Categories nobody scored yet count as 0.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    openapi_tags=[
        {
            "name": "Candidates",
            "description": "Candidate registration and management"
        },
        {
            "name": "Judges",
            "description": "Judge accounts, judging sheets and progress"
        },
        {
            "name": "Scores",
            "description": "Score submission, progress and analytics"
        },
        {
            "name": "Results",
            "description": "Ranked result tables for export"
        },
    ],
    lifespan=lifespan,
)

# Last added runs first: RequestIDMiddleware wraps LoggingMiddleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(PageantryException)
async def pageantry_exception_handler(request: Request, exc: PageantryException):
    """Handle domain exceptions raised by services"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "request_id": request_id,
            "status_code": exc.status_code,
            "details": exc.details,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": jsonable_encoder(exc.details),
            "request_id": request_id,
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        f"Validation error: {exc.errors()}",
        extra={"request_id": request_id}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "details": jsonable_encoder(exc.errors()),
            "request_id": request_id,
        }
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Handle database integrity errors"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        f"Database integrity error: {str(exc.orig)}",
        extra={"request_id": request_id}
    )

    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Database constraint violation",
            "details": {"message": "The operation violates a database constraint"},
            "request_id": request_id,
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": {"message": "An unexpected error occurred"},
            "request_id": request_id,
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# API routers
from backend.app.api import candidates, judges, scores, results  # noqa: E402

app.include_router(candidates.router, prefix=f"{settings.API_V1_PREFIX}/candidates", tags=["Candidates"])
app.include_router(judges.router, prefix=f"{settings.API_V1_PREFIX}/judges", tags=["Judges"])
app.include_router(scores.router, prefix=f"{settings.API_V1_PREFIX}/scores", tags=["Scores"])
app.include_router(results.router, prefix=f"{settings.API_V1_PREFIX}/results", tags=["Results"])
