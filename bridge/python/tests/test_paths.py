"""Tests for practices_mcp.paths.PathGuard: the storage-root containment check."""
import os
from pathlib import Path

import pytest
from structlog.testing import capture_logs
from practices import Catalog, Topic

from practices_mcp.errors import PathSecurityError
from practices_mcp.paths import PathGuard, ResolvedLocation

TRAVERSAL_PAYLOADS = [
    "../secret.md",
    "../../etc/passwd",
    "../../../../../../etc/shadow",
    "docs/../../outside.md",
    "docs/../react.md",
    "./../../package.json",
    "..\\..\\windows\\system32",
    "..",
    "...",
    "react..md",
    "/etc/passwd",
    "/root/.ssh/id_rsa",
    "\\\\server\\share\\file.md",
    "\\windows\\win.ini",
    "C:\\Windows\\System32\\config\\SAM",
    "c:/boot.ini",
    "Z:relative.md",
    "react\x00.md",
    "\x00",
    "docs/\x00/../../etc/passwd",
    "",
]


def catalog_with(*refs: str) -> Catalog:
    return Catalog(
        name="test",
        version="",
        topics=tuple(
            Topic(key=f"t{i}", display_name=f"T{i}", description="d", content_ref=ref)
            for i, ref in enumerate(refs)
        ),
    )


@pytest.fixture
def storage(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    root.mkdir()
    (root / "react.md").write_text("# React")
    (root / "nested").mkdir()
    (root / "nested" / "deep.md").write_text("# Deep")
    return root


def test_resolves_file_inside_root(storage):
    guard = PathGuard(catalog_with("react.md"), storage)
    location = guard.resolve("t0")
    assert isinstance(location, ResolvedLocation)
    assert location.topic == "t0"
    assert location.path == Path(os.path.realpath(storage / "react.md"))


def test_resolves_nested_file(storage):
    guard = PathGuard(catalog_with("nested/deep.md"), storage)
    assert guard.resolve("t0").path.name == "deep.md"


def test_resolves_missing_file_without_io_failure(storage):
    guard = PathGuard(catalog_with("absent.md"), storage)
    assert guard.resolve("t0").path.name == "absent.md"


@pytest.mark.parametrize("payload", TRAVERSAL_PAYLOADS)
def test_rejects_every_traversal_payload(storage, payload):
    guard = PathGuard(catalog_with(payload), storage)
    with pytest.raises(PathSecurityError):
        guard.resolve("t0")


def test_rejects_unknown_topic(storage):
    guard = PathGuard(catalog_with("react.md"), storage)
    with pytest.raises(PathSecurityError):
        guard.resolve("nope")


def test_sibling_with_shared_prefix_is_rejected(tmp_path):
    root = tmp_path / "docs"
    sibling = tmp_path / "docs-private"
    root.mkdir()
    sibling.mkdir()
    (sibling / "secret.md").write_text("secret")
    # Symlink inside root pointing at the sibling: string prefix "docs" matches, containment must not
    os.symlink(sibling, root / "link")
    guard = PathGuard(catalog_with("link/secret.md"), root)
    with pytest.raises(PathSecurityError):
        guard.resolve("t0")


def test_symlinked_file_escaping_root_is_rejected(tmp_path):
    root = tmp_path / "docs"
    root.mkdir()
    outside = tmp_path / "outside.md"
    outside.write_text("outside")
    os.symlink(outside, root / "react.md")
    guard = PathGuard(catalog_with("react.md"), root)
    with pytest.raises(PathSecurityError):
        guard.resolve("t0")


def test_symlink_within_root_is_allowed(storage):
    os.symlink(storage / "react.md", storage / "alias.md")
    guard = PathGuard(catalog_with("alias.md"), storage)
    assert guard.resolve("t0").path == Path(os.path.realpath(storage / "react.md"))


def test_symlinked_root_is_canonicalized(tmp_path, storage):
    link = tmp_path / "root-link"
    os.symlink(storage, link)
    guard = PathGuard(catalog_with("react.md"), link)
    assert guard.root == Path(os.path.realpath(storage))
    assert guard.resolve("t0").path == Path(os.path.realpath(storage / "react.md"))


def test_root_must_be_absolute():
    with pytest.raises(ValueError, match="absolute"):
        PathGuard(catalog_with("react.md"), "relative/docs")


def test_root_with_null_byte_rejected(storage):
    with pytest.raises(ValueError):
        PathGuard(catalog_with("react.md"), f"{storage}\x00")


def test_rechecks_on_every_call(storage):
    guard = PathGuard(catalog_with("react.md"), storage)
    guard.resolve("t0")
    (storage / "react.md").unlink()
    os.symlink("/etc/hostname", storage / "react.md")
    with pytest.raises(PathSecurityError):
        guard.resolve("t0")


def test_security_error_message_has_no_path(storage):
    guard = PathGuard(catalog_with("../../etc/passwd"), storage)
    with pytest.raises(PathSecurityError) as exc_info:
        guard.resolve("t0")
    assert "etc" not in str(exc_info.value)
    assert str(storage) not in str(exc_info.value)
    assert exc_info.value.detail["content_ref"] == "../../etc/passwd"


def test_rejection_is_logged_at_error(storage):
    with capture_logs() as logs:
        guard = PathGuard(catalog_with("../../etc/passwd"), storage)
        with pytest.raises(PathSecurityError):
            guard.resolve("t0")
    assert logs[0]["log_level"] == "error"
    assert logs[0]["content_ref"] == "../../etc/passwd"
