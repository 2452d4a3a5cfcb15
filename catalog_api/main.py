"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_api.config import settings
from catalog_api.database import init_db
from catalog_api.errors import register_exception_handlers
from catalog_api.logging_config import configure_logging
from catalog_api.routes import auth, users, products
from catalog_api.schemas.common import ERROR_RESPONSES

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    init_db()
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started")
    yield


def create_app() -> FastAPI:
    """Build the FastAPI app with middleware, error handlers and routers."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Users, products and token authentication with role-based access control",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, responses=ERROR_RESPONSES)
    app.include_router(users.router, responses=ERROR_RESPONSES)
    app.include_router(products.router, responses=ERROR_RESPONSES)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
