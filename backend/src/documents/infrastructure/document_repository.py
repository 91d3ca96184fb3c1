from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import Document, DocumentStatus
from documents.infrastructure.models import DocumentModel
from shared.exceptions import SequencingConflictError
from shared.infrastructure.database import sequencing_guard


class DbDocumentRepository:
    """Document rows. Writes are flushed, never committed; the unit of work commits."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: UUID) -> Document | None:
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_for_update(self, document_id: UUID) -> Document | None:
        with sequencing_guard(f"Could not lock document {document_id}"):
            result = await self.session.execute(
                select(DocumentModel)
                .where(DocumentModel.id == document_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def lock_version_counter(self, document_id: UUID) -> int | None:
        with sequencing_guard(f"Could not lock version counter of document {document_id}"):
            result = await self.session.execute(
                select(DocumentModel.version_number)
                .where(DocumentModel.id == document_id)
                .with_for_update()
            )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UUID) -> list[Document]:
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.updated_at.desc(), DocumentModel.created_at.desc())
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def add(self, document: Document) -> Document:
        model = DocumentModel(
            owner_id=document.owner_id,
            title=document.title,
            content=document.content,
            rendered_html=document.rendered_html,
            folder_id=document.folder_id,
            tags=list(document.tags),
            status=document.status.value,
            version_number=document.version_number,
            size=document.size,
            word_count=document.word_count,
            character_count=document.character_count,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return _to_entity(model)

    async def update_metadata(self, document: Document) -> Document:
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document.id)
            .values(
                folder_id=document.folder_id,
                tags=list(document.tags),
                status=document.status.value,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        return await self._reload(document.id)

    async def update_versioned(self, document: Document, expected_version: int) -> Document:
        """Write every field, provided the row still sits at ``expected_version``."""
        with sequencing_guard(f"Could not write document {document.id}"):
            result = await self.session.execute(
                update(DocumentModel)
                .where(
                    DocumentModel.id == document.id,
                    DocumentModel.version_number == expected_version,
                )
                .values(
                    title=document.title,
                    content=document.content,
                    rendered_html=document.rendered_html,
                    folder_id=document.folder_id,
                    tags=list(document.tags),
                    status=document.status.value,
                    version_number=document.version_number,
                    size=document.size,
                    word_count=document.word_count,
                    character_count=document.character_count,
                    updated_at=func.now(),
                )
                .execution_options(synchronize_session=False)
            )
        if result.rowcount == 0:
            raise SequencingConflictError(
                f"Document {document.id} is no longer at version {expected_version}"
            )
        return await self._reload(document.id)

    async def _reload(self, document_id: UUID) -> Document:
        document = await self.get_by_id(document_id)
        assert document is not None
        return document


def _to_entity(model: DocumentModel) -> Document:
    return Document(
        id=model.id,
        owner_id=model.owner_id,
        title=model.title,
        content=model.content,
        rendered_html=model.rendered_html,
        folder_id=model.folder_id,
        tags=list(model.tags or []),
        status=DocumentStatus(model.status),
        version_number=model.version_number,
        size=model.size,
        word_count=model.word_count,
        character_count=model.character_count,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
