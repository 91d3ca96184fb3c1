import logging
from uuid import UUID

from documents.application.mutations import snapshot_of
from documents.domain.entities import (
    TITLE_MAX_LENGTH,
    Document,
    DocumentChanges,
    DocumentStatus,
    VersionOperation,
)
from documents.domain.metrics import compute_metrics
from documents.domain.repository import UnitOfWork
from shared.exceptions import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

INITIAL_CHANGE_SUMMARY = "Initial version"


async def _create_with_first_version(
    uow: UnitOfWork,
    document: Document,
    author_id: UUID,
    change_summary: str,
) -> Document:
    try:
        created = await uow.documents.add(document)
        await uow.versions.append(
            snapshot_of(created, author_id, VersionOperation.CREATE, change_summary)
        )
        await uow.commit()
    except Exception:
        await uow.rollback()
        raise

    logger.info("Created document %s with version 1", created.id)
    return created


async def create_document(
    uow: UnitOfWork,
    owner_id: UUID,
    title: str,
    content: str = "",
    folder_id: UUID | None = None,
    tags: list[str] | None = None,
    status: DocumentStatus = DocumentStatus.DRAFT,
    rendered_html: str | None = None,
) -> Document:
    DocumentChanges(title=title, content=content).validate()
    metrics = compute_metrics(content)
    doc = Document(
        title=title,
        owner_id=owner_id,
        content=content,
        rendered_html=rendered_html if rendered_html is not None else content,
        folder_id=folder_id,
        tags=list(tags or []),
        status=status,
        version_number=1,
        size=metrics.size,
        word_count=metrics.word_count,
        character_count=metrics.character_count,
    )
    return await _create_with_first_version(uow, doc, owner_id, INITIAL_CHANGE_SUMMARY)


async def duplicate_document(
    uow: UnitOfWork,
    document_id: UUID,
    owner_id: UUID,
    title: str | None = None,
    folder_id: UUID | None = None,
) -> Document:
    """Copy a document into a fresh one with its own history starting at version 1."""
    source = await get_document(uow, document_id)
    new_title = title or f"Copy of {source.title}"[:TITLE_MAX_LENGTH]
    DocumentChanges(title=new_title).validate()

    doc = Document(
        title=new_title,
        owner_id=owner_id,
        content=source.content,
        rendered_html=source.rendered_html,
        folder_id=folder_id or source.folder_id,
        tags=list(source.tags),
        status=DocumentStatus.DRAFT,
        version_number=1,
        size=source.size,
        word_count=source.word_count,
        character_count=source.character_count,
    )
    return await _create_with_first_version(
        uow, doc, owner_id, f"Duplicated from document: {source.title}"
    )


async def get_document(uow: UnitOfWork, document_id: UUID) -> Document:
    doc = await uow.documents.get_by_id(document_id)
    if not doc:
        raise NotFoundError("Document", str(document_id))
    return doc


async def get_owned_document(uow: UnitOfWork, document_id: UUID, user_id: UUID) -> Document:
    doc = await get_document(uow, document_id)
    if doc.owner_id != user_id:
        raise AuthorizationError("Only the document owner can access it")
    return doc


async def list_documents(uow: UnitOfWork, owner_id: UUID) -> list[Document]:
    return await uow.documents.list_by_owner(owner_id)
