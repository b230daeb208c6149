"""Document ingestion into the hosted RAG knowledge base.

Responsibilities:
    - PDF-only filtering of picked and dropped files
    - Multipart upload to the ingestion endpoint
    - Upload/indexing progress tracking for the upload dialog
"""

from knowledge_search.ingestion.pipeline import UploadPipeline, UploadStatus, is_pdf

__all__ = ["UploadPipeline", "UploadStatus", "is_pdf"]
