"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from panelcut import __version__
from panelcut.application.config import PanelcutSettings, configure_logging
from panelcut.application.factory import ServiceFactory, set_factory
from panelcut.web.exceptions import register_exception_handlers
from panelcut.web.routers import (
    catalog_router,
    orders_router,
    pricing_router,
    quotes_router,
)


def create_app(settings: PanelcutSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to serve with. When given, they replace the
            default service factory and set the log level; otherwise the
            factory is configured from the environment on first use.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is not None:
        configure_logging(settings.log_level)
        set_factory(ServiceFactory(settings))

    app = FastAPI(
        title="Panelcut API",
        description="Quoting, price list, catalog and orders for cut-to-size panels",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware for the configurator front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(quotes_router, prefix="/api/v1")
    app.include_router(pricing_router, prefix="/api/v1")
    app.include_router(catalog_router, prefix="/api/v1")
    app.include_router(orders_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Application instance for ASGI servers (uvicorn)
app = create_app()
