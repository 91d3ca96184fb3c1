from typing import Protocol
from uuid import UUID

from documents.domain.entities import Document, DocumentVersion


class DocumentRepository(Protocol):
    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def get_for_update(self, document_id: UUID) -> Document | None: ...

    async def lock_version_counter(self, document_id: UUID) -> int | None: ...

    async def list_by_owner(self, owner_id: UUID) -> list[Document]: ...

    async def add(self, document: Document) -> Document: ...

    async def update_metadata(self, document: Document) -> Document: ...

    async def update_versioned(self, document: Document, expected_version: int) -> Document: ...


class VersionRepository(Protocol):
    async def append(self, version: DocumentVersion) -> DocumentVersion: ...

    async def get_by_number(
        self, document_id: UUID, version_number: int
    ) -> DocumentVersion | None: ...

    async def list_for_document(
        self,
        document_id: UUID,
        offset: int,
        limit: int,
        include_content: bool = False,
    ) -> list[DocumentVersion]: ...

    async def count_for_document(self, document_id: UUID) -> int: ...


class UnitOfWork(Protocol):
    """Documents and their versions, written through one transaction."""

    documents: DocumentRepository
    versions: VersionRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
