"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the research interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from knowledge_search.api.app import create_app
    from knowledge_search.config import get_config
    from knowledge_search.ui.research_page import research_page  # noqa: F401 - Registers the page

    # Raises if AGENT_ID or RAG_ID is missing
    config = get_config()
    logger.info(f"Using agent {config.agent_id} and knowledge base {config.rag_id}")

    app = create_app()

    ui.run_with(
        app,
        title="KnowledgeSearch",
        favicon="📚",
        dark=True,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "knowledge-search-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Research assistant available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point."""
    run_integrated()


if __name__ == "__main__":
    main()
