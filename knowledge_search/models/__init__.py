"""Pydantic models for the assistant's conversation, agent and upload data.

Provides type safety and validation for hosted agent payloads, plus pure
display helpers for loosely-typed answer sources.
"""

from knowledge_search.models.formatting import (
    SourceView,
    confidence_level,
    describe_source,
    describe_sources,
    format_confidence,
)
from knowledge_search.models.schemas import (
    AgentResponse,
    AgentResult,
    AgentServiceError,
    AgentSuccess,
    AgentTransportError,
    CandidateFile,
    ResponseMetadata,
    Role,
    Session,
    StructuredAnswer,
    Turn,
    UploadedDocument,
)

__all__ = [
    "AgentResponse",
    "AgentResult",
    "AgentServiceError",
    "AgentSuccess",
    "AgentTransportError",
    "CandidateFile",
    "ResponseMetadata",
    "Role",
    "Session",
    "SourceView",
    "StructuredAnswer",
    "Turn",
    "UploadedDocument",
    "confidence_level",
    "describe_source",
    "describe_sources",
    "format_confidence",
]
