from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from documents.domain.entities import DocumentVersion, VersionOperation
from documents.infrastructure.models import DocumentVersionModel
from shared.infrastructure.database import sequencing_guard


class DbVersionRepository:
    """Append-only snapshot store. Versions are never updated or deleted."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, version: DocumentVersion) -> DocumentVersion:
        model = DocumentVersionModel(
            document_id=version.document_id,
            author_id=version.author_id,
            version_number=version.version_number,
            title=version.title,
            content=version.content or "",
            rendered_html=version.rendered_html,
            size=version.size,
            word_count=version.word_count,
            character_count=version.character_count,
            change_summary=version.change_summary,
            operation=version.operation.value,
            is_auto_save=version.is_auto_save,
        )
        self.session.add(model)
        with sequencing_guard(
            f"Version {version.version_number} already exists for document {version.document_id}"
        ):
            await self.session.flush()
        await self.session.refresh(model)
        return _to_entity(model)

    async def get_by_number(
        self, document_id: UUID, version_number: int
    ) -> DocumentVersion | None:
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(
                DocumentVersionModel.document_id == document_id,
                DocumentVersionModel.version_number == version_number,
            )
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_for_document(
        self,
        document_id: UUID,
        offset: int,
        limit: int,
        include_content: bool = False,
    ) -> list[DocumentVersion]:
        query = (
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_number.desc())
            .offset(offset)
            .limit(limit)
        )
        if not include_content:
            query = query.options(
                defer(DocumentVersionModel.content, raiseload=True),
                defer(DocumentVersionModel.rendered_html, raiseload=True),
            )
        result = await self.session.execute(query)
        return [_to_entity(m, include_content) for m in result.scalars().all()]

    async def count_for_document(self, document_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
        )
        return result.scalar_one()


def _to_entity(model: DocumentVersionModel, include_content: bool = True) -> DocumentVersion:
    return DocumentVersion(
        id=model.id,
        document_id=model.document_id,
        author_id=model.author_id,
        version_number=model.version_number,
        title=model.title,
        content=model.content if include_content else None,
        rendered_html=model.rendered_html if include_content else None,
        size=model.size,
        word_count=model.word_count,
        character_count=model.character_count,
        change_summary=model.change_summary,
        operation=VersionOperation(model.operation),
        is_auto_save=model.is_auto_save,
        created_at=model.created_at,
    )
