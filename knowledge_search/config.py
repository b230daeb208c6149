"""Application configuration with environment variable loading.

Pydantic-based configuration for the hosted agent and RAG ingestion services.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_AGENT_API_URL = "https://agent-prod.studio.lyzr.ai/v3/inference/chat/"
DEFAULT_RAG_BASE_URL = "https://rag-prod.studio.lyzr.ai"


class AssistantConfig(BaseModel):
    """Configuration for the research assistant.

    Attributes:
        agent_api_url: Hosted agent inference endpoint.
        agent_id: Identifier of the RAG agent answering questions.
        agent_api_key: API key sent with agent calls (None to omit).
        rag_base_url: Base URL of the RAG ingestion service.
        rag_id: Identifier of the knowledge base receiving uploads.
        rag_upload_url: Full upload URL (derived from base URL and RAG id if unset).
        agent_timeout: Seconds before an agent call is abandoned.
        upload_timeout: Seconds before an upload request is abandoned.
        indexing_delay: Seconds to wait for server-side indexing after upload.
        success_display_delay: Seconds the upload success state stays visible.
        max_file_size_mb: Advisory per-file size shown in the upload dialog.
    """

    agent_api_url: str = Field(
        default_factory=lambda: os.getenv("AGENT_API_URL", DEFAULT_AGENT_API_URL),
        description="Hosted agent inference endpoint",
    )
    agent_id: str = Field(
        default_factory=lambda: os.getenv("AGENT_ID", ""),
        description="RAG agent identifier",
    )
    agent_api_key: str | None = Field(
        default_factory=lambda: os.getenv("AGENT_API_KEY") or None,
        description="API key for the agent service (None to omit)",
    )
    rag_base_url: str = Field(
        default_factory=lambda: os.getenv("RAG_BASE_URL", DEFAULT_RAG_BASE_URL),
        description="RAG ingestion service base URL",
    )
    rag_id: str = Field(
        default_factory=lambda: os.getenv("RAG_ID", ""),
        description="Knowledge base identifier",
    )
    rag_upload_url: str | None = Field(
        default_factory=lambda: os.getenv("RAG_UPLOAD_URL") or None,
        description="Upload endpoint (derived when not set)",
    )
    agent_timeout: float = Field(
        default_factory=lambda: float(os.getenv("AGENT_TIMEOUT", "60")),
        gt=0.0,
        description="Agent call timeout in seconds",
    )
    upload_timeout: float = Field(
        default_factory=lambda: float(os.getenv("UPLOAD_TIMEOUT", "300")),
        gt=0.0,
        description="Upload request timeout in seconds",
    )
    indexing_delay: float = Field(
        default_factory=lambda: float(os.getenv("INDEXING_DELAY", "2.0")),
        ge=0.0,
        description="Fixed wait for server-side indexing",
    )
    success_display_delay: float = Field(
        default=1.5,
        ge=0.0,
        description="How long the upload success state is shown",
    )
    max_file_size_mb: int = Field(
        default=50,
        ge=1,
        description="Advisory per-file size limit (not enforced)",
    )

    @field_validator("agent_id", "rag_id")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Validate that service identifiers are provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("Identifier required. Set AGENT_ID and RAG_ID in .env")
        return v.strip()

    @model_validator(mode="after")
    def derive_upload_url(self) -> "AssistantConfig":
        """Build the upload URL from the RAG base URL when not given explicitly."""
        if not self.rag_upload_url:
            base = self.rag_base_url.rstrip("/")
            self.rag_upload_url = f"{base}/v2/rag/{self.rag_id}/upload"
        return self


def get_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If AGENT_ID or RAG_ID is not set.
    """
    return AssistantConfig()
