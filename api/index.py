"""
Storefront - Main FastAPI Application

Single entry point for the storefront webapp API. The app owns exactly
one ShopSession (catalog, cart, wishlist, auth) on app.state.shop.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.logging import configure_logging, get_logger
from storefront.routers.webapp import router as webapp_router
from storefront.session import ShopSession

logger = get_logger(__name__)


def create_app(shop: Optional[ShopSession] = None) -> FastAPI:
    """Build the FastAPI app around a ShopSession (a fresh one by default)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler"""
        logger.info("Storefront started (catalog: %s)", app.state.shop.settings.catalog_base_url)
        yield
        # Shutdown
        await app.state.shop.aclose()

    app = FastAPI(
        title="Storefront",
        description="Product catalog, cart and wishlist API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.shop = shop or ShopSession()
    settings = app.state.shop.settings
    configure_logging(settings.log_level, production=settings.is_production)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(webapp_router)

    # ==================== HEALTH CHECK ====================

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok", "service": "storefront", "badges": app.state.shop.badges()}

    return app


app = create_app()
