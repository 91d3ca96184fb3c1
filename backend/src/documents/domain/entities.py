from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from documents.domain.diff import LineDiff
from shared.exceptions import InvalidMutationError

TITLE_MAX_LENGTH = 255
CHANGE_SUMMARY_MAX_LENGTH = 500


class DocumentStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class VersionOperation(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    RESTORE = "restore"


@dataclass
class Document:
    title: str
    owner_id: UUID
    content: str = ""
    rendered_html: str | None = None
    folder_id: UUID | None = None
    tags: list[str] = field(default_factory=list)
    status: DocumentStatus = DocumentStatus.DRAFT
    version_number: int = 1
    size: int = 0
    word_count: int = 0
    character_count: int = 0
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)


@dataclass(frozen=True)
class DocumentVersion:
    """Immutable snapshot of a document at one point in its history.

    ``content`` and ``rendered_html`` are ``None`` only when the version was
    loaded for a list view that omits bodies.
    """

    document_id: UUID
    author_id: UUID
    version_number: int
    title: str
    content: str | None
    rendered_html: str | None
    size: int
    word_count: int
    character_count: int
    change_summary: str | None
    operation: VersionOperation
    is_auto_save: bool = False
    is_current: bool = False
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)


@dataclass(frozen=True)
class VersionPage:
    items: list[DocumentVersion]
    page: int
    per_page: int
    total: int

    @property
    def last_page(self) -> int:
        return max(1, -(-self.total // self.per_page))


@dataclass(frozen=True)
class DocumentChanges:
    """Fields a caller wants to change; ``None`` means "leave as is".

    Only ``title`` and ``content`` are versioned. ``rendered_html`` rides along
    with ``content`` and is ignored without it.
    """

    title: str | None = None
    content: str | None = None
    rendered_html: str | None = None
    folder_id: UUID | None = None
    tags: list[str] | None = None
    status: DocumentStatus | None = None

    @property
    def is_versioned(self) -> bool:
        return self.title is not None or self.content is not None

    @property
    def is_empty(self) -> bool:
        return not self.is_versioned and (
            self.folder_id is None and self.tags is None and self.status is None
        )

    def validate(self, change_summary: str | None = None) -> None:
        if self.is_empty:
            raise InvalidMutationError("No recognized fields to change")
        if self.title is not None:
            if not self.title.strip():
                raise InvalidMutationError("Title cannot be blank")
            if len(self.title) > TITLE_MAX_LENGTH:
                raise InvalidMutationError(
                    f"Title cannot exceed {TITLE_MAX_LENGTH} characters"
                )
        if self.content is not None and "\x00" in self.content:
            raise InvalidMutationError("Content contains NUL characters")
        if change_summary is not None and len(change_summary) > CHANGE_SUMMARY_MAX_LENGTH:
            raise InvalidMutationError(
                f"Change summary cannot exceed {CHANGE_SUMMARY_MAX_LENGTH} characters"
            )


@dataclass(frozen=True)
class VersionComparison:
    old: DocumentVersion
    new: DocumentVersion
    diff: LineDiff

    @property
    def title_changed(self) -> bool:
        return self.old.title != self.new.title

    @property
    def content_changed(self) -> bool:
        return self.old.content != self.new.content

    @property
    def word_count_diff(self) -> int:
        return self.new.word_count - self.old.word_count

    @property
    def character_count_diff(self) -> int:
        return self.new.character_count - self.old.character_count
