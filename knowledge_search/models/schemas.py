"""Pydantic models shared by the assistant's core components.

Models:
    - Session: Conversation scope sent with every agent call
    - StructuredAnswer / ResponseMetadata / AgentResponse: Hosted agent payload
    - AgentSuccess / AgentServiceError / AgentTransportError: Agent call results
    - Turn: A single entry of the conversation transcript
    - CandidateFile / UploadedDocument: Upload selection and registry entries
"""

import logging
import math
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone()


class Session(BaseModel):
    """Opaque conversation scope for the hosted agent.

    Created once per UI instance and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=_now)


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class StructuredAnswer(BaseModel):
    """Answer produced by a successful agent call.

    Only ``answer`` is required to be well-formed. The remaining fields are
    display hints and fall back to their defaults when the agent sends
    something unusable.

    Attributes:
        answer: The answer text.
        sources: Loosely-typed source records cited by the answer.
        context_maintained: Whether the agent used earlier turns as context.
        follow_up_suggestions: Suggested next questions.
        confidence: Agent confidence, clamped to [0, 1].
    """

    answer: str
    sources: list[Any] = Field(default_factory=list)
    context_maintained: bool = False
    follow_up_suggestions: list[str] = Field(default_factory=list)
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)

    @field_validator("sources", mode="before")
    @classmethod
    def coerce_sources(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]

    @field_validator("context_maintained", mode="wrap")
    @classmethod
    def default_context_flag(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> bool:
        try:
            return handler(value)
        except ValidationError:
            logger.debug(f"Ignoring unreadable context_maintained: {value!r}")
            return False

    @field_validator("follow_up_suggestions", mode="before")
    @classmethod
    def keep_text_suggestions(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        # Numbers are stringified, structured entries dropped
        return [
            item if isinstance(item, str) else str(item)
            for item in value
            if isinstance(item, (str, int, float)) and not isinstance(item, bool)
        ]

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            confidence = float(value)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring unreadable confidence: {value!r}")
            return None
        if math.isnan(confidence):
            return None
        return min(max(confidence, 0.0), 1.0)


class ResponseMetadata(BaseModel):
    """Retrieval details attached to an agent answer.

    Fields the agent sends with an unexpected type are dropped to None.
    """

    agent_name: str | None = None
    timestamp: str | None = None
    documents_searched: int | None = None
    retrieval_method: str | None = None

    @field_validator("*", mode="wrap")
    @classmethod
    def drop_unreadable(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.debug(f"Ignoring unreadable metadata value: {value!r}")
            return None


class AgentResponse(BaseModel):
    """Wire format of the hosted agent's response body."""

    status: Literal["success", "error"]
    result: StructuredAnswer | None = None
    metadata: ResponseMetadata | None = None
    message: str | None = None

    @field_validator("metadata", mode="wrap")
    @classmethod
    def drop_unreadable_metadata(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> ResponseMetadata | None:
        try:
            return handler(value)
        except ValidationError:
            logger.debug(f"Ignoring unreadable metadata: {value!r}")
            return None

    @field_validator("message", mode="before")
    @classmethod
    def stringify_message(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class AgentSuccess(BaseModel):
    """The agent answered the question."""

    status: Literal["success"] = "success"
    result: StructuredAnswer
    metadata: ResponseMetadata | None = None


class AgentServiceError(BaseModel):
    """The agent was reachable but reported a failure."""

    status: Literal["error"] = "error"
    message: str | None = None


class AgentTransportError(BaseModel):
    """The agent could not be reached or its response was unusable."""

    status: Literal["transport_error"] = "transport_error"
    message: str


AgentResult = AgentSuccess | AgentServiceError | AgentTransportError


class Turn(BaseModel):
    """A single turn of the conversation transcript.

    Attributes:
        id: Unique identifier within the session.
        role: Who produced the turn.
        content: Text shown for the turn.
        response: Full structured answer (successful assistant turns only).
        metadata: Retrieval metadata (successful assistant turns only).
        timestamp: When the turn was appended.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str
    response: StructuredAnswer | None = None
    metadata: ResponseMetadata | None = None
    timestamp: datetime = Field(default_factory=_now)


class CandidateFile(BaseModel):
    """A file picked or dropped into the upload dialog."""

    model_config = ConfigDict(frozen=True)

    name: str
    content_type: str = ""
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)


class UploadedDocument(BaseModel):
    """A document accepted by the knowledge base.

    Local mirror only; nothing ties it to the indexed content remotely.
    """

    name: str
    upload_date: datetime = Field(default_factory=_now)
    size: int = Field(default=0, ge=0)
