"""Registry of documents uploaded during this session."""

from knowledge_search.documents.registry import DocumentRegistry, documents_from_files

__all__ = ["DocumentRegistry", "documents_from_files"]
