"""FastAPI application factory.

Hosts the health endpoint; the NiceGUI page is mounted on the same app.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from knowledge_search import __version__

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting KnowledgeSearch...")
    yield
    logger.info("Shutting down KnowledgeSearch...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="KnowledgeSearch",
        description=(
            "Research assistant that answers questions about uploaded PDF documents "
            "through a hosted retrieval-augmented generation agent."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "knowledge-search"}

    return application


app = create_app()
