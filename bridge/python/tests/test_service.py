"""Tests for practices_mcp.service.PracticeService: both surfaces end to end."""
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from practices import Catalog, Topic, parse

from practices_mcp.errors import ErrorKind, Failure
from practices_mcp.mapper import topic_uri
from practices_mcp.service import PracticeDocument, PracticeService

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "catalog"


@pytest.fixture
def service() -> PracticeService:
    return PracticeService(parse(FIXTURE_DIR / "catalog.yaml"), FIXTURE_DIR.absolute())


def test_get_practice_returns_document(service):
    doc = service.get_practice("nextjs")
    assert isinstance(doc, PracticeDocument)
    assert doc.topic == "nextjs"
    assert doc.uri == "practice://nextjs"
    assert doc.mime_type == "text/markdown"
    assert doc.text == (FIXTURE_DIR / "nextjs.md").read_bytes().decode("utf-8")


def test_uppercase_topic_gives_same_content(service):
    assert service.get_practice("REACT") == service.get_practice("react")


def test_content_is_verbatim(service):
    assert "\r\n" in service.get_practice("react").text


def test_traversal_input_is_validation_failure(service):
    failure = service.get_practice("../../etc/passwd")
    assert isinstance(failure, Failure)
    assert failure.kind is ErrorKind.VALIDATION
    assert "react, nextjs, missing" in failure.message
    assert "/etc/passwd" not in failure.message
    assert str(FIXTURE_DIR) not in failure.message


def test_unknown_topic_is_validation_not_not_found(service):
    failure = service.get_practice("nonexistent")
    assert failure.kind is ErrorKind.VALIDATION


def test_listed_but_missing_file_is_not_found(service):
    failure = service.get_practice("missing")
    assert failure.kind is ErrorKind.NOT_FOUND
    assert failure.message == "Best practice for topic 'missing' not found"


def test_get_practice_never_raises_on_odd_input(service):
    for raw in [None, 0, [], {}, "", "x" * 10_000, "\x00"]:
        assert service.get_practice(raw).kind is ErrorKind.VALIDATION


def test_misconfigured_catalog_entry_is_access_denied(tmp_path):
    (tmp_path / "docs").mkdir()
    (tmp_path / "secret.md").write_text("secret")
    catalog = Catalog(
        name="bad",
        version="",
        topics=(Topic(key="evil", display_name="Evil", description="d", content_ref="../secret.md"),),
    )
    service = PracticeService(catalog, tmp_path / "docs")
    failure = service.get_practice("evil")
    assert failure == Failure(kind=ErrorKind.SECURITY, message="Access denied")


def test_unexpected_errors_are_classified(service, monkeypatch):
    def explode(location):
        raise RuntimeError("disk on fire at /srv/secret")

    monkeypatch.setattr(service.loader, "load", explode)
    failure = service.get_practice("react")
    assert failure == Failure(kind=ErrorKind.UNEXPECTED, message="An unexpected error occurred")


# ── Resource surface ─────────────────────────────────────────────────────────

def test_list_resources(service):
    resources = service.list_resources()
    assert len(resources) == 3
    assert len({r["uri"] for r in resources}) == 3
    assert all(r["name"] and r["description"] for r in resources)
    assert all(r["mimeType"] == "text/markdown" for r in resources)


def test_surfaces_are_equivalent(service):
    for key in ("react", "nextjs"):
        tool = service.get_practice(key)
        resource = service.read_resource(topic_uri(key))
        assert tool.text == resource.text
        assert tool == resource


def test_missing_topic_equivalent_on_both_surfaces(service):
    assert service.read_resource("practice://missing") == service.get_practice("missing")


def test_extra_segment_uri_is_invalid_not_not_found(service):
    failure = service.read_resource("practice://react/extra")
    assert failure.kind is ErrorKind.VALIDATION
    assert "Invalid resource URI" in failure.message


@pytest.mark.parametrize("uri", [
    "practice://REACT",
    "PRACTICE://react",
    "practice://",
    "practice://../../etc/passwd",
    "file:///etc/passwd",
    None,
])
def test_bad_uris_are_invalid(service, uri):
    assert service.read_resource(uri).kind is ErrorKind.VALIDATION


# ── Concurrency ───────────────────────────────────────────────────────────────

def test_parallel_retrievals_return_their_own_content(service):
    expected = {
        "react": service.get_practice("react").text,
        "nextjs": service.get_practice("nextjs").text,
    }
    topics = ["react", "nextjs"] * 50
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(service.get_practice, topics))
    for topic, doc in zip(topics, results):
        assert doc.topic == topic
        assert doc.text == expected[topic]
