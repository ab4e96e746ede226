"""
FastAPI application entrypoint for the product scraper API.

This module sets up the FastAPI app, configures logging, and registers
route handlers. Run it directly to serve with uvicorn on $PORT.
"""

from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import products
from api.services.scrape_service import ScrapeService
from shared.config import AppConfig, get_config
from shared.logging import configure_logging

load_dotenv()


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or get_config()

    configure_logging(
        level=config.log_level,
        log_file=config.log_file,
        log_stdout=config.log_stdout,
    )

    app = FastAPI(
        title="Product Scraper API",
        description="Search results and product descriptions scraped with a headless browser",
        version="0.1.0",
    )

    # CORS middleware (permissive; the API is read-only)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.scrape_service = ScrapeService(config)

    app.include_router(products.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=app.state.scrape_service.config.port,
        log_config=None,
    )
