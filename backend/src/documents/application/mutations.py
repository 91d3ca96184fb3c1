import logging
from uuid import UUID

from documents.application.sequencer import VersionSequencer
from documents.domain.entities import (
    Document,
    DocumentChanges,
    DocumentVersion,
    VersionOperation,
)
from documents.domain.metrics import compute_metrics
from documents.domain.repository import UnitOfWork
from shared.config import settings
from shared.exceptions import NotFoundError, SequencingConflictError

logger = logging.getLogger(__name__)

DEFAULT_CHANGE_SUMMARY = "Document updated"


def snapshot_of(
    document: Document,
    author_id: UUID,
    operation: VersionOperation,
    change_summary: str,
    is_auto_save: bool = False,
) -> DocumentVersion:
    return DocumentVersion(
        document_id=document.id,
        author_id=author_id,
        version_number=document.version_number,
        title=document.title,
        content=document.content,
        rendered_html=document.rendered_html,
        size=document.size,
        word_count=document.word_count,
        character_count=document.character_count,
        change_summary=change_summary,
        operation=operation,
        is_auto_save=is_auto_save,
    )


async def apply_mutation(
    uow: UnitOfWork,
    document_id: UUID,
    author_id: UUID,
    changes: DocumentChanges,
    is_auto_save: bool = False,
    change_summary: str | None = None,
    *,
    operation: VersionOperation = VersionOperation.UPDATE,
    max_attempts: int | None = None,
) -> Document:
    """Apply ``changes`` to a document, appending a version when title or content change.

    The document write and the version append commit together. A lost race
    for the next version number rolls both back and the whole unit is
    retried, up to ``max_attempts`` times in total.
    """
    changes.validate(change_summary)
    attempts = max_attempts or settings.MUTATION_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        try:
            return await _apply_once(
                uow, document_id, author_id, changes, is_auto_save, change_summary, operation
            )
        except SequencingConflictError:
            await uow.rollback()
            if attempt >= attempts:
                logger.warning(
                    "Giving up on document %s after %d sequencing conflicts",
                    document_id,
                    attempt,
                )
                raise
            logger.info(
                "Sequencing conflict on document %s, retrying (%d/%d)",
                document_id,
                attempt,
                attempts,
            )
        except Exception:
            await uow.rollback()
            raise

    raise AssertionError("unreachable")


async def _apply_once(
    uow: UnitOfWork,
    document_id: UUID,
    author_id: UUID,
    changes: DocumentChanges,
    is_auto_save: bool,
    change_summary: str | None,
    operation: VersionOperation,
) -> Document:
    document = await uow.documents.get_for_update(document_id)
    if document is None:
        raise NotFoundError("Document", str(document_id))

    if changes.folder_id is not None:
        document.folder_id = changes.folder_id
    if changes.tags is not None:
        document.tags = list(changes.tags)
    if changes.status is not None:
        document.status = changes.status

    if not changes.is_versioned:
        updated = await uow.documents.update_metadata(document)
        await uow.commit()
        return updated

    if changes.title is not None:
        document.title = changes.title
    if changes.content is not None:
        metrics = compute_metrics(changes.content)
        document.content = changes.content
        document.rendered_html = (
            changes.rendered_html if changes.rendered_html is not None else changes.content
        )
        document.size = metrics.size
        document.word_count = metrics.word_count
        document.character_count = metrics.character_count

    sequencer = VersionSequencer(uow.documents)
    document.version_number = await sequencer.next_version_number(document_id)

    updated = await uow.documents.update_versioned(
        document, expected_version=document.version_number - 1
    )
    await uow.versions.append(
        snapshot_of(
            updated,
            author_id,
            operation,
            change_summary or DEFAULT_CHANGE_SUMMARY,
            is_auto_save,
        )
    )
    await uow.commit()

    logger.info(
        "Document %s now at version %d (%s%s)",
        document_id,
        updated.version_number,
        operation.value,
        ", auto-save" if is_auto_save else "",
    )
    return updated
