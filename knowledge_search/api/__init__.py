"""HTTP host for the research assistant.

Endpoints:
    - GET /health: Service health status
    - /: NiceGUI research page (mounted by main.run_integrated)
"""

from knowledge_search.api.app import app, create_app

__all__ = ["app", "create_app"]
