from uuid import uuid4

import pytest

from documents.domain.entities import DocumentChanges, DocumentStatus, VersionPage
from documents.domain.metrics import compute_metrics, strip_markup
from shared.exceptions import InvalidMutationError


def test_changes_with_title_or_content_are_versioned():
    assert DocumentChanges(title="T").is_versioned
    assert DocumentChanges(content="").is_versioned
    assert not DocumentChanges(status=DocumentStatus.PUBLISHED).is_versioned


def test_empty_changes_are_rejected():
    changes = DocumentChanges()
    assert changes.is_empty
    with pytest.raises(InvalidMutationError, match="No recognized fields"):
        changes.validate()


def test_rendered_html_alone_is_not_a_change():
    with pytest.raises(InvalidMutationError):
        DocumentChanges(rendered_html="<p>x</p>").validate()


def test_metadata_only_changes_are_valid():
    DocumentChanges(folder_id=uuid4()).validate()
    DocumentChanges(tags=[]).validate()


@pytest.mark.parametrize("title", ["", "   ", "x" * 256])
def test_bad_titles_are_rejected(title):
    with pytest.raises(InvalidMutationError):
        DocumentChanges(title=title).validate()


def test_nul_in_content_is_rejected():
    with pytest.raises(InvalidMutationError, match="NUL"):
        DocumentChanges(content="a\x00b").validate()


def test_oversized_change_summary_is_rejected():
    with pytest.raises(InvalidMutationError, match="Change summary"):
        DocumentChanges(content="x").validate(change_summary="s" * 501)


def test_strip_markup():
    assert strip_markup("<p>Hello <b>world</b></p>") == "Hello world"


def test_compute_metrics():
    metrics = compute_metrics("<h1>Title</h1>\nsome  body text")
    assert metrics.word_count == 4
    assert metrics.character_count == len("<h1>Title</h1>\nsome  body text")
    assert metrics.size == metrics.character_count


def test_compute_metrics_counts_bytes_for_size():
    metrics = compute_metrics("héllo wörld")
    assert metrics.character_count == 11
    assert metrics.size == 13
    assert metrics.word_count == 2


def test_compute_metrics_empty():
    metrics = compute_metrics("")
    assert (metrics.size, metrics.word_count, metrics.character_count) == (0, 0, 0)


def test_version_page_last_page():
    assert VersionPage(items=[], page=1, per_page=10, total=0).last_page == 1
    assert VersionPage(items=[], page=1, per_page=10, total=10).last_page == 1
    assert VersionPage(items=[], page=1, per_page=10, total=11).last_page == 2
