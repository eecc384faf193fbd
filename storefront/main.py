"""
Storefront order-and-payment service.

``create_app`` wires explicitly constructed handles (database, identity
verifier, payment processor) into ``app.state``. Serve the production instance with
``uvicorn storefront.main:build_default_app --factory`` or the ``storefront``
console script.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import os
import uvicorn

from storefront.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from storefront.core_settings import Settings, get_settings
from storefront.application.errors import StorefrontError
from storefront.infrastructure.db import Database
from storefront.infrastructure.identity import IdentityVerifier, JWTIdentityVerifier
from storefront.infrastructure.payment_processor import PaymentProcessor, StripePaymentProcessor
from storefront.api import orders, products, users, payments, admin

SERVICE_NAME = "storefront"
SERVICE_DESCRIPTION = "Garment storefront orders, checkout and payments"

logger = get_logger(__name__)


def create_app(
    settings: Settings = None,
    database: Database = None,
    verifier: IdentityVerifier = None,
    processor: PaymentProcessor = None,
) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    verifier = verifier or JWTIdentityVerifier(settings.JWT_SECRET, settings.JWT_ALG)
    processor = processor or StripePaymentProcessor(settings.STRIPE_SECRET_KEY)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {SERVICE_NAME} version {settings.SERVICE_VERSION}")
        try:
            database.init_models()
            logger.info("Database models initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database models: {e}")
            raise
        logger.info(f"{SERVICE_NAME} started successfully")

        yield

        logger.info(f"Shutting down {SERVICE_NAME}")
        database.dispose()

    app = FastAPI(
        title=SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.state.settings = settings
    app.state.database = database
    app.state.verifier = verifier
    app.state.processor = processor

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    health_service = ServiceHealth(SERVICE_NAME, settings.SERVICE_VERSION)
    app.include_router(health_service.create_health_router())

    app.include_router(orders.router)
    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(payments.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root():
        return {
            "service": SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "status": "running",
            "docs": "/api/docs",
        }

    return app


def build_default_app() -> FastAPI:
    settings = get_settings()
    setup_logging(
        service_name=SERVICE_NAME,
        level=settings.LOG_LEVEL,
        version=settings.SERVICE_VERSION,
        environment=os.getenv("ENVIRONMENT", "development"),
    )
    return create_app(settings)


def run():
    uvicorn.run(
        "storefront.main:build_default_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
