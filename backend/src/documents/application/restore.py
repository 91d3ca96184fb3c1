import logging
from uuid import UUID

from documents.application.mutations import apply_mutation
from documents.domain.entities import Document, DocumentChanges, VersionOperation
from documents.domain.repository import UnitOfWork
from shared.exceptions import NotFoundError

logger = logging.getLogger(__name__)


async def restore_version(
    uow: UnitOfWork,
    document_id: UUID,
    author_id: UUID,
    target_version_number: int,
    change_summary: str | None = None,
) -> Document:
    """Copy a historical version back onto the document as a new version.

    History is never rewritten: restoring always appends, even when the
    target is the current version.
    """
    if await uow.documents.get_by_id(document_id) is None:
        raise NotFoundError("Document", str(document_id))

    target = await uow.versions.get_by_number(document_id, target_version_number)
    if target is None:
        raise NotFoundError("Version", f"{target_version_number} of document {document_id}")

    changes = DocumentChanges(
        title=target.title,
        content=target.content,
        rendered_html=target.rendered_html,
    )
    restored = await apply_mutation(
        uow,
        document_id,
        author_id,
        changes,
        is_auto_save=False,
        change_summary=change_summary or f"Restored from version {target_version_number}",
        operation=VersionOperation.RESTORE,
    )
    logger.info(
        "Restored document %s from version %d as version %d",
        document_id,
        target_version_number,
        restored.version_number,
    )
    return restored
