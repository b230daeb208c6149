"""PDF upload pipeline for the RAG knowledge base.

Tracks one upload run through its phases:

    idle -> uploading -> indexing -> success -> idle
    uploading | indexing -> error

Only this module talks to the ingestion endpoint. Accepted documents reach the
registry solely through the on_complete callback of a successful run.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from enum import Enum

import httpx

from knowledge_search.config import AssistantConfig, get_config
from knowledge_search.models.schemas import CandidateFile

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

# Coarse progress markers, not byte-level progress
UPLOAD_STARTED_PROGRESS = 30
UPLOAD_SENT_PROGRESS = 70
UPLOAD_DONE_PROGRESS = 100


class UploadStatus(str, Enum):
    """Phases of an upload run."""

    IDLE = "idle"
    UPLOADING = "uploading"
    INDEXING = "indexing"
    SUCCESS = "success"
    ERROR = "error"


def is_pdf(file: CandidateFile) -> bool:
    """Check whether a candidate file is declared as a PDF."""
    media_type = file.content_type.split(";", 1)[0].strip().lower()
    return media_type == PDF_CONTENT_TYPE


class UploadPipeline:
    """Upload state machine backing the upload dialog.

    Attributes:
        status: Current phase of the run.
        progress: Coarse progress percentage (0-100).
        error_message: Reason for the last failure, if in error.
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        on_complete: Callable[[list[CandidateFile]], None] | None = None,
        on_close: Callable[[], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Optional configuration. Loads from environment if not provided.
            http_client: Optional shared HTTP client for the ingestion call.
            on_complete: Receives the uploaded files when a run succeeds.
            on_close: Called once the success state has been displayed.
            on_change: Called after every state change.
        """
        self._config = config or get_config()
        self._http_client = http_client
        self._on_complete = on_complete
        self._on_close = on_close
        self._on_change = on_change

        self._selected: list[CandidateFile] = []
        self._task: asyncio.Task | None = None
        self.status = UploadStatus.IDLE
        self.progress = 0
        self.error_message: str | None = None

    @property
    def selected_files(self) -> tuple[CandidateFile, ...]:
        return tuple(self._selected)

    @property
    def in_flight(self) -> bool:
        """Whether a run is between confirmation and its final reset."""
        return self._task is not None

    @property
    def can_upload(self) -> bool:
        return bool(self._selected) and not self.in_flight

    def select_files(self, candidates: Iterable[CandidateFile]) -> int:
        """Replace the selection with the PDF files among candidates.

        Non-PDF files are dropped silently. If no PDF remains the current
        selection is left as it is.

        Args:
            candidates: Files picked or dropped by the user.

        Returns:
            Number of files accepted.
        """
        if self.in_flight:
            logger.debug("Ignoring file selection while an upload is running")
            return 0

        pdfs = [f for f in candidates if is_pdf(f)]
        if not pdfs:
            return 0

        self._selected = pdfs
        self._notify()
        return len(pdfs)

    async def upload(self) -> None:
        """Upload the selected files and wait for indexing.

        No-op without a selection or while a run is already in flight. A run
        in error can be retried by calling this again.
        """
        if not self.can_upload:
            return

        self._task = asyncio.current_task()
        files = list(self._selected)
        try:
            self.error_message = None
            self._transition(UploadStatus.UPLOADING, UPLOAD_STARTED_PROGRESS)

            try:
                await self._send(files)
            except httpx.HTTPStatusError as e:
                self._fail(f"Upload failed (HTTP {e.response.status_code})")
                return
            except httpx.RequestError as e:
                self._fail(f"Upload failed: {str(e) or type(e).__name__}")
                return

            self._transition(UploadStatus.INDEXING, UPLOAD_SENT_PROGRESS)
            await self._wait_for_indexing()

            self._transition(UploadStatus.SUCCESS, UPLOAD_DONE_PROGRESS)
            logger.info(f"Uploaded {len(files)} document(s) to the knowledge base")
            if self._on_complete is not None:
                self._on_complete(files)

            await asyncio.sleep(self._config.success_display_delay)
            self._reset()
            if self._on_close is not None:
                self._on_close()
        except asyncio.CancelledError:
            logger.info("Upload cancelled")
            self._reset()
            raise
        finally:
            self._task = None

    def dismiss(self) -> None:
        """Close the dialog.

        A run in flight keeps going and still reports its result; otherwise
        the selection and any error are cleared.
        """
        if self.in_flight:
            return
        self._reset()

    def cancel(self) -> None:
        """Abort an in-flight run. Nothing is reported for a cancelled run."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _send(self, files: list[CandidateFile]) -> None:
        parts = [("files", (f.name, f.content, PDF_CONTENT_TYPE)) for f in files]
        url = self._config.rag_upload_url

        if self._http_client is not None:
            response = await self._http_client.post(
                url, files=parts, timeout=self._config.upload_timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self._config.upload_timeout) as client:
                response = await client.post(url, files=parts)

        response.raise_for_status()

    async def _wait_for_indexing(self) -> None:
        # Fixed wait; the ingestion service offers no readiness signal
        await asyncio.sleep(self._config.indexing_delay)

    def _transition(self, status: UploadStatus, progress: int) -> None:
        logger.debug(f"Upload {self.status.value} -> {status.value} ({progress}%)")
        self.status = status
        self.progress = progress
        self._notify()

    def _fail(self, message: str) -> None:
        logger.warning(message)
        self.status = UploadStatus.ERROR
        self.error_message = message
        self._notify()

    def _reset(self) -> None:
        self._selected = []
        self.status = UploadStatus.IDLE
        self.progress = 0
        self.error_message = None
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
