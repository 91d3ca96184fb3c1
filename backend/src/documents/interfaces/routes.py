from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends

from auth.domain.entities import User
from documents.application.history import recent_versions
from documents.application.mutations import apply_mutation
from documents.application.services import (
    create_document,
    duplicate_document,
    get_owned_document,
    list_documents,
)
from documents.infrastructure.unit_of_work import DbUnitOfWork
from documents.interfaces.schemas import (
    CreateDocumentRequest,
    DocumentDetailResponse,
    DocumentResponse,
    DuplicateDocumentRequest,
    UpdateDocumentRequest,
    VersionSummaryResponse,
)
from shared.dependencies import get_current_user, get_uow

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("/", response_model=DocumentResponse, status_code=201)
async def create(
    body: CreateDocumentRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await create_document(
        uow,
        owner_id=current_user.id,
        title=body.title,
        content=body.content,
        folder_id=body.folder_id,
        tags=body.tags,
        status=body.status,
        rendered_html=body.rendered_html,
    )


@router.get("/", response_model=list[DocumentResponse])
async def list_all(
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await list_documents(uow, owner_id=current_user.id)


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_one(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    doc = await get_owned_document(uow, document_id, current_user.id)
    versions = await recent_versions(uow, document_id)
    return DocumentDetailResponse(
        **asdict(doc),
        recent_versions=[VersionSummaryResponse.model_validate(v) for v in versions],
    )


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update(
    document_id: UUID,
    body: UpdateDocumentRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    return await apply_mutation(
        uow,
        document_id=document_id,
        author_id=current_user.id,
        changes=body.to_changes(),
        is_auto_save=body.is_auto_save,
        change_summary=body.change_summary,
    )


@router.post("/{document_id}/duplicate", response_model=DocumentResponse, status_code=201)
async def duplicate(
    document_id: UUID,
    body: DuplicateDocumentRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await get_owned_document(uow, document_id, current_user.id)
    return await duplicate_document(
        uow,
        document_id=document_id,
        owner_id=current_user.id,
        title=body.title,
        folder_id=body.folder_id,
    )
