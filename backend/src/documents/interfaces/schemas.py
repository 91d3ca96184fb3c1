from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from documents.domain.diff import DiffKind
from documents.domain.entities import (
    CHANGE_SUMMARY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    DocumentChanges,
    DocumentStatus,
    VersionOperation,
)


class CreateDocumentRequest(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = ""
    rendered_html: str | None = None
    folder_id: UUID | None = None
    tags: list[str] = Field(default_factory=list)
    status: DocumentStatus = DocumentStatus.DRAFT


class UpdateDocumentRequest(BaseModel):
    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    content: str | None = None
    rendered_html: str | None = None
    folder_id: UUID | None = None
    tags: list[str] | None = None
    status: DocumentStatus | None = None
    is_auto_save: bool = False
    change_summary: str | None = Field(default=None, max_length=CHANGE_SUMMARY_MAX_LENGTH)

    def to_changes(self) -> DocumentChanges:
        return DocumentChanges(
            title=self.title,
            content=self.content,
            rendered_html=self.rendered_html,
            folder_id=self.folder_id,
            tags=self.tags,
            status=self.status,
        )


class DuplicateDocumentRequest(BaseModel):
    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    folder_id: UUID | None = None


class RestoreVersionRequest(BaseModel):
    change_summary: str | None = Field(default=None, max_length=CHANGE_SUMMARY_MAX_LENGTH)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    rendered_html: str | None = None
    owner_id: UUID
    folder_id: UUID | None = None
    tags: list[str]
    status: DocumentStatus
    version_number: int
    size: int
    word_count: int
    character_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VersionSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    version_number: int
    title: str
    author_id: UUID
    word_count: int
    character_count: int
    change_summary: str | None = None
    operation: VersionOperation
    is_auto_save: bool
    is_current: bool = False
    created_at: datetime | None = None


class VersionResponse(VersionSummaryResponse):
    document_id: UUID
    content: str | None = None
    rendered_html: str | None = None
    size: int


class DocumentDetailResponse(DocumentResponse):
    recent_versions: list[VersionSummaryResponse]


class PageMeta(BaseModel):
    current_page: int
    last_page: int
    per_page: int
    total: int


class VersionListResponse(BaseModel):
    data: list[VersionResponse]
    meta: PageMeta


class DiffLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: DiffKind
    text: str
    line_number_a: int | None = None
    line_number_b: int | None = None


class DiffStatsResponse(BaseModel):
    added: int
    removed: int
    unchanged: int
    total: int


class VersionComparisonResponse(BaseModel):
    old_version: VersionSummaryResponse
    new_version: VersionSummaryResponse
    title_changed: bool
    content_changed: bool
    word_count_diff: int
    character_count_diff: int
    lines: list[DiffLineResponse]
    stats: DiffStatsResponse
