"""
Catalog → MCP resource mapping.

Pure functions with no file I/O and no MCP SDK imports.
URIs are bijective with catalog keys: ``practice://<key>``.
"""
import re
from typing import Any, Optional

from practices.model import Catalog, Topic

URI_SCHEME = "practice"
MARKDOWN_MIME = "text/markdown"

_URI_PATTERN = re.compile(rf"{URI_SCHEME}://([^/]+)")


# ── Slug / URI ────────────────────────────────────────────────────────────────

def topic_uri(key: str) -> str:
    return f"{URI_SCHEME}://{key}"


def parse_topic_uri(uri: Any, catalog: Catalog) -> Optional[str]:
    """Return the catalog key a resource URI names, or None.

    Only ``practice://<key>`` with a single non-empty segment that exactly
    matches a catalog key is accepted. Malformed input never raises.
    """
    if not isinstance(uri, str):
        return None
    match = _URI_PATTERN.fullmatch(uri)
    if match is None:
        return None
    key = match.group(1)
    if key not in catalog:
        return None
    return key


# ── Per-topic resource descriptor ────────────────────────────────────────────

def topic_resource_dict(topic: Topic) -> dict:
    """Return a plain dict of MCP Resource fields for a single topic."""
    return {
        "uri":         topic_uri(topic.key),
        "name":        topic.display_name,
        "description": topic.description,
        "mimeType":    MARKDOWN_MIME,
    }


def catalog_resource_dicts(catalog: Catalog) -> list[dict]:
    return [topic_resource_dict(t) for t in catalog]
