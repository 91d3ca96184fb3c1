from uuid import UUID

from fastapi import APIRouter, Depends, Query

from auth.domain.entities import User
from documents.application.history import (
    compare_versions,
    get_current_version,
    get_version,
    list_versions,
)
from documents.application.restore import restore_version
from documents.application.services import get_owned_document
from documents.infrastructure.unit_of_work import DbUnitOfWork
from documents.interfaces.schemas import (
    DiffLineResponse,
    DiffStatsResponse,
    DocumentResponse,
    PageMeta,
    RestoreVersionRequest,
    VersionComparisonResponse,
    VersionListResponse,
    VersionResponse,
    VersionSummaryResponse,
)
from shared.config import settings
from shared.dependencies import get_current_user, get_uow

router = APIRouter(prefix="/api/documents/{document_id}/versions", tags=["versions"])


@router.get("", response_model=VersionListResponse)
async def list_all(
    document_id: UUID,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(
        default=settings.VERSIONS_PAGE_SIZE, ge=1, le=settings.VERSIONS_MAX_PAGE_SIZE
    ),
    include_content: bool = False,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    result = await list_versions(
        uow, document_id, page=page, per_page=per_page, include_content=include_content
    )
    return VersionListResponse(
        data=[VersionResponse.model_validate(v) for v in result.items],
        meta=PageMeta(
            current_page=result.page,
            last_page=result.last_page,
            per_page=result.per_page,
            total=result.total,
        ),
    )


# Registered before "/{version_number}" so the literal paths win.
@router.get("/current", response_model=VersionResponse)
async def get_current(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    return await get_current_version(uow, document_id)


@router.get("/compare", response_model=VersionComparisonResponse)
async def compare(
    document_id: UUID,
    from_version: int = Query(alias="from", ge=1),
    to_version: int | None = Query(default=None, alias="to", ge=1),
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    comparison = await compare_versions(uow, document_id, from_version, to_version)
    stats = comparison.diff.stats
    return VersionComparisonResponse(
        old_version=VersionSummaryResponse.model_validate(comparison.old),
        new_version=VersionSummaryResponse.model_validate(comparison.new),
        title_changed=comparison.title_changed,
        content_changed=comparison.content_changed,
        word_count_diff=comparison.word_count_diff,
        character_count_diff=comparison.character_count_diff,
        lines=[DiffLineResponse.model_validate(line) for line in comparison.diff.lines],
        stats=DiffStatsResponse(
            added=stats.added,
            removed=stats.removed,
            unchanged=stats.unchanged,
            total=stats.total,
        ),
    )


@router.get("/{version_number}", response_model=VersionResponse)
async def get_one(
    document_id: UUID,
    version_number: int,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    return await get_version(uow, document_id, version_number)


@router.post("/{version_number}/restore", response_model=DocumentResponse)
async def restore(
    document_id: UUID,
    version_number: int,
    body: RestoreVersionRequest | None = None,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    return await restore_version(
        uow,
        document_id=document_id,
        author_id=current_user.id,
        target_version_number=version_number,
        change_summary=body.change_summary if body else None,
    )
