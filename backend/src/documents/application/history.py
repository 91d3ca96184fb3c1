from dataclasses import replace
from uuid import UUID

from documents.domain.diff import compare_texts
from documents.domain.entities import (
    Document,
    DocumentVersion,
    VersionComparison,
    VersionOperation,
    VersionPage,
)
from documents.domain.repository import UnitOfWork
from shared.config import settings
from shared.exceptions import NotFoundError


async def _require_document(uow: UnitOfWork, document_id: UUID) -> Document:
    document = await uow.documents.get_by_id(document_id)
    if not document:
        raise NotFoundError("Document", str(document_id))
    return document


async def list_versions(
    uow: UnitOfWork,
    document_id: UUID,
    page: int = 1,
    per_page: int | None = None,
    include_content: bool = False,
) -> VersionPage:
    """Newest-first page of a document's history."""
    await _require_document(uow, document_id)
    page = max(page, 1)
    per_page = min(max(per_page or settings.VERSIONS_PAGE_SIZE, 1), settings.VERSIONS_MAX_PAGE_SIZE)

    total = await uow.versions.count_for_document(document_id)
    items = await uow.versions.list_for_document(
        document_id,
        offset=(page - 1) * per_page,
        limit=per_page,
        include_content=include_content,
    )
    return VersionPage(items=items, page=page, per_page=per_page, total=total)


async def recent_versions(
    uow: UnitOfWork, document_id: UUID, limit: int | None = None
) -> list[DocumentVersion]:
    return await uow.versions.list_for_document(
        document_id, offset=0, limit=limit or settings.RECENT_VERSIONS_LIMIT
    )


async def get_version(
    uow: UnitOfWork, document_id: UUID, version_number: int
) -> DocumentVersion:
    await _require_document(uow, document_id)
    version = await uow.versions.get_by_number(document_id, version_number)
    if not version:
        raise NotFoundError("Version", f"{version_number} of document {document_id}")
    return version


async def get_current_version(uow: UnitOfWork, document_id: UUID) -> DocumentVersion:
    """The live document dressed up as a version, for comparisons."""
    document = await _require_document(uow, document_id)
    live = {
        "title": document.title,
        "content": document.content,
        "rendered_html": document.rendered_html,
        "size": document.size,
        "word_count": document.word_count,
        "character_count": document.character_count,
        "is_current": True,
    }

    stored = await uow.versions.get_by_number(document_id, document.version_number)
    if stored:
        return replace(stored, **live)

    return DocumentVersion(
        document_id=document.id,
        author_id=document.owner_id,
        version_number=document.version_number,
        change_summary=None,
        operation=VersionOperation.UPDATE,
        created_at=document.updated_at,
        **live,
    )


async def compare_versions(
    uow: UnitOfWork,
    document_id: UUID,
    from_version: int,
    to_version: int | None = None,
) -> VersionComparison:
    """Compare two versions; ``to_version=None`` compares against the live document."""
    old = await get_version(uow, document_id, from_version)
    if to_version is None:
        new = await get_current_version(uow, document_id)
    else:
        new = await get_version(uow, document_id, to_version)

    return VersionComparison(
        old=old,
        new=new,
        diff=compare_texts(old.content or "", new.content or ""),
    )
