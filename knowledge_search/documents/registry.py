"""Local mirror of the documents uploaded to the knowledge base."""

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime

from knowledge_search.models.schemas import CandidateFile, UploadedDocument

logger = logging.getLogger(__name__)


def documents_from_files(
    files: Iterable[CandidateFile],
    uploaded_at: datetime | None = None,
) -> list[UploadedDocument]:
    """Build registry entries for a batch of uploaded files.

    Args:
        files: Files accepted by the ingestion endpoint, in upload order.
        uploaded_at: Shared upload timestamp. Defaults to now.

    Returns:
        One UploadedDocument per file, in the same order.
    """
    uploaded_at = uploaded_at or datetime.now().astimezone()
    return [
        UploadedDocument(name=f.name, upload_date=uploaded_at, size=f.size)
        for f in files
    ]


class DocumentRegistry:
    """Ordered collection of uploaded documents.

    Nothing here is synchronized with the ingestion service; removing an entry
    only forgets it locally.
    """

    def __init__(self) -> None:
        self._documents: list[UploadedDocument] = []

    def add(self, entries: Iterable[UploadedDocument]) -> None:
        entries = list(entries)
        self._documents.extend(entries)
        logger.debug(f"Registered {len(entries)} documents ({len(self._documents)} total)")

    def remove_at(self, index: int) -> bool:
        """Remove the entry at index.

        Args:
            index: Zero-based position. Negative values count as out of range.

        Returns:
            True if an entry was removed, False if the index was out of range.
        """
        if not 0 <= index < len(self._documents):
            return False
        removed = self._documents.pop(index)
        logger.debug(f"Removed document {removed.name}")
        return True

    @property
    def documents(self) -> tuple[UploadedDocument, ...]:
        return tuple(self._documents)

    @property
    def last_updated(self) -> datetime | None:
        """Most recent upload time, for display only."""
        if not self._documents:
            return None
        return max(doc.upload_date for doc in self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[UploadedDocument]:
        return iter(self.documents)
