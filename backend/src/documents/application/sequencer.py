from uuid import UUID

from documents.domain.repository import DocumentRepository
from shared.exceptions import NotFoundError


class VersionSequencer:
    """Allocates per-document version numbers.

    The number is read from the document row under the caller's row lock, so
    it must be used inside the same transaction that writes the new version.
    There is no counter outside the database.
    """

    def __init__(self, documents: DocumentRepository):
        self.documents = documents

    async def next_version_number(self, document_id: UUID) -> int:
        current = await self.documents.lock_version_counter(document_id)
        if current is None:
            raise NotFoundError("Document", str(document_id))
        return current + 1
