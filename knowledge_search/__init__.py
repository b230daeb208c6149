"""KnowledgeSearch - research assistant over a hosted RAG agent.

Combines NiceGUI for the interface, httpx for the hosted agent and ingestion
services, FastAPI for hosting, and Pydantic for data validation.

Components:
    - agent: Hosted agent client
    - ingestion: PDF upload pipeline
    - conversation: Session transcript
    - documents: Uploaded document registry
    - assistant: Controller tying the above together
    - ui: Web interface
    - api: HTTP host
    - models: Data schemas and display helpers
"""

__version__ = "0.1.0"
