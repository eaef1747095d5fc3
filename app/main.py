"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from app.config import settings
from app.database import create_tables, test_database_connection, close_db_connection
from app.routers import (
    auth_router,
    properties_router,
    analytics_router,
    locations_router,
    admin_router,
    favorites_router,
    saved_searches_router,
    uploads_router,
    testimonials_router,
    user_router,
)
from app.utils.exceptions import APIException
from app.services.error_handler import ErrorHandlerService
from app.services.market_data import MarketDataClient
from app.middleware.logging import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the shared market-data client and the schema on startup,
    releases both connection pools on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    app.state.market_data = MarketDataClient.from_settings(settings)

    if await test_database_connection():
        await create_tables()
    else:
        logger.error("Failed to connect to database on startup")

    if not settings.cloudinary_configured:
        logger.warning("Cloudinary credentials missing; image uploads will fail")

    yield

    logger.info("Shutting down application")
    await app.state.market_data.aclose()
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Real-estate listings backend.

    ## Features

    * **Listings**: search by city, state, neighborhood, price range, bedrooms and type
    * **Analytics**: average prices, listing counts and monthly trends, optionally
      enhanced with EstateIntel market prices
    * **Engagement**: favorites, saved searches and testimonials
    * **Admin panel**: user and listing management, dashboard stats, image uploads

    ## Authentication

    Register or log in under `/api/auth`, then send the access token as
    `Authorization: Bearer <token>`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and token management"},
        {"name": "Properties", "description": "Listing search and admin listing management"},
        {"name": "Analytics", "description": "Aggregated listing statistics and market prices"},
        {"name": "Locations", "description": "Supported-location catalog"},
        {"name": "Admin", "description": "Admin panel"},
        {"name": "Favorites", "description": "Bookmarked listings of the signed-in user"},
        {"name": "Saved Searches", "description": "Saved filters of the signed-in user"},
        {"name": "Testimonials", "description": "User testimonials and moderation"},
        {"name": "Uploads", "description": "Image uploads"},
        {"name": "User Listings", "description": "Listings owned by the signed-in user"},
        {"name": "Health", "description": "Service health"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_origin],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.add_middleware(RequestLoggingMiddleware)

# Include API routers
for router in (
    auth_router,
    properties_router,
    analytics_router,
    locations_router,
    admin_router,
    favorites_router,
    saved_searches_router,
    uploads_router,
    testimonials_router,
    user_router,
):
    app.include_router(router, prefix=settings.api_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle Pydantic validation errors raised inside handlers."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle unknown routes, wrong methods and other plain HTTP errors."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    if not await test_database_connection():
        raise HTTPException(status_code=503, detail="Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
