import re
from pathlib import Path, PurePosixPath
from typing import Union

import yaml

from .model import Catalog, Topic

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


def _validate_content_ref(raw: str) -> str:
    """Validate that a topic's content path stays inside the storage root.

    Raises ValueError for absolute paths, drive letters, NUL bytes and any
    '..' component.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"Topic path must be a non-empty string: {raw!r}")
    if "\0" in raw:
        raise ValueError(f"Topic path contains a NUL byte: {raw!r}")
    if raw.startswith("/") or raw.startswith("\\") or _DRIVE_PATTERN.match(raw):
        raise ValueError(f"Topic path must be relative: {raw!r}")
    # Backslashes count as separators so Windows-style refs are caught too
    parts = PurePosixPath(raw.replace("\\", "/")).parts
    if ".." in parts:
        raise ValueError(f"Topic path escapes storage root: {raw!r}")
    return raw


def _text(value) -> str:
    """Coerce an optional scalar to str; YAML null becomes the empty string."""
    return "" if value is None else str(value)


def parse(path: Union[str, Path]) -> Catalog:
    """Parse a catalog YAML file from disk."""
    with Path(path).open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Catalog file must contain a mapping: {path}")
    return parse_dict(data)


def parse_dict(data: dict) -> Catalog:
    """Parse a catalog from a pre-loaded dict."""
    topics = tuple(
        Topic(
            key=_text(t["key"]),
            display_name=_text(t.get("name")),
            description=_text(t.get("description")),
            content_ref=_validate_content_ref(t["path"]),
        )
        for t in data.get("topics") or []
    )
    version = data.get("catalog_version")
    return Catalog(
        name=_text(data["catalog"]),
        version=_text(data.get("version")),
        catalog_version=str(version) if version is not None else None,
        topics=topics,
    )
