from uuid import uuid4

import pytest

from documents.application.history import (
    compare_versions,
    get_current_version,
    get_version,
    list_versions,
    recent_versions,
)
from documents.application.mutations import apply_mutation
from documents.application.services import create_document
from documents.domain.diff import DiffKind
from documents.domain.entities import DocumentChanges, VersionOperation
from shared.exceptions import NotFoundError


@pytest.fixture
async def doc(uow, user):
    doc = await create_document(
        uow, owner_id=user.id, title="Notes", content="line1\nline2\nline3"
    )
    await apply_mutation(uow, doc.id, user.id, DocumentChanges(content="line1\nlineX\nline3"))
    return doc


async def test_list_versions_newest_first_without_content(uow, doc):
    page = await list_versions(uow, doc.id)
    assert [v.version_number for v in page.items] == [2, 1]
    assert all(v.content is None and v.rendered_html is None for v in page.items)
    assert page.items[1].operation == VersionOperation.CREATE
    assert page.total == 2
    assert page.last_page == 1


async def test_list_versions_with_content(uow, doc):
    page = await list_versions(uow, doc.id, include_content=True)
    assert page.items[0].content == "line1\nlineX\nline3"
    assert page.items[1].content == "line1\nline2\nline3"


async def test_list_versions_paginates(uow, doc, user):
    for n in range(3):
        await apply_mutation(uow, doc.id, user.id, DocumentChanges(content=f"v{n}"))

    first = await list_versions(uow, doc.id, page=1, per_page=2)
    second = await list_versions(uow, doc.id, page=2, per_page=2)
    third = await list_versions(uow, doc.id, page=3, per_page=2)

    assert [v.version_number for v in first.items] == [5, 4]
    assert [v.version_number for v in second.items] == [3, 2]
    assert [v.version_number for v in third.items] == [1]
    assert first.total == 5
    assert first.last_page == 3


async def test_list_versions_caps_page_size(uow, doc):
    page = await list_versions(uow, doc.id, per_page=500)
    assert page.per_page == 50


async def test_list_versions_unknown_document(uow):
    with pytest.raises(NotFoundError):
        await list_versions(uow, uuid4())


async def test_content_is_available_after_list_view(uow, doc):
    await list_versions(uow, doc.id)
    version = await get_version(uow, doc.id, 1)
    assert version.content == "line1\nline2\nline3"


async def test_get_version(uow, doc):
    version = await get_version(uow, doc.id, 1)
    assert version.version_number == 1
    assert version.content == "line1\nline2\nline3"
    assert version.is_current is False


async def test_get_version_not_found(uow, doc):
    with pytest.raises(NotFoundError):
        await get_version(uow, doc.id, 3)


async def test_get_current_version(uow, doc, user):
    current = await get_current_version(uow, doc.id)
    assert current.is_current is True
    assert current.version_number == 2
    assert current.content == "line1\nlineX\nline3"
    assert current.author_id == user.id
    assert current.operation == VersionOperation.UPDATE


async def test_current_version_tracks_latest_stored_number(uow, doc, user):
    await apply_mutation(uow, doc.id, user.id, DocumentChanges(content="third"))
    current = await get_current_version(uow, doc.id)
    page = await list_versions(uow, doc.id)
    assert current.version_number == max(v.version_number for v in page.items) == 3


async def test_recent_versions(uow, doc, user):
    for n in range(6):
        await apply_mutation(uow, doc.id, user.id, DocumentChanges(content=f"v{n}"))
    recent = await recent_versions(uow, doc.id)
    assert [v.version_number for v in recent] == [8, 7, 6, 5, 4]


async def test_compare_versions(uow, doc):
    comparison = await compare_versions(uow, doc.id, 1, 2)
    assert [(line.kind, line.text) for line in comparison.diff.lines] == [
        (DiffKind.UNCHANGED, "line1"),
        (DiffKind.REMOVED, "line2"),
        (DiffKind.ADDED, "lineX"),
        (DiffKind.UNCHANGED, "line3"),
    ]
    assert comparison.content_changed is True
    assert comparison.title_changed is False
    assert comparison.word_count_diff == 0
    assert comparison.diff.stats.added == 1


async def test_compare_against_current(uow, doc, user):
    await apply_mutation(
        uow, doc.id, user.id, DocumentChanges(title="Renamed", content="line1\nlineX\nline3\nline4")
    )
    comparison = await compare_versions(uow, doc.id, 1)
    assert comparison.new.is_current is True
    assert comparison.new.version_number == 3
    assert comparison.title_changed is True
    assert comparison.word_count_diff == 1
    assert comparison.character_count_diff == len("\nline4")
    assert comparison.diff.stats.added == 2


async def test_compare_version_with_itself(uow, doc):
    comparison = await compare_versions(uow, doc.id, 2, 2)
    assert comparison.content_changed is False
    assert all(line.kind is DiffKind.UNCHANGED for line in comparison.diff.lines)
    assert all(line.line_number_a == line.line_number_b for line in comparison.diff.lines)
