import re
from pathlib import Path
from typing import NamedTuple, Optional, Union

from .model import MAX_TOPIC_LENGTH, Catalog

KNOWN_CATALOG_VERSIONS = {"1"}
_KEY_PATTERN = re.compile(r"^[a-z0-9][a-z0-9\-]*$")


class ValidationResult(NamedTuple):
    """Result of linting a topic catalog.

    ``errors``   : conditions that make the catalog unusable (MUST fix).
    ``warnings`` : conditions that are permitted but suspicious (SHOULD fix).
    """
    errors: list[str]
    warnings: list[str]

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


def validate(catalog: Catalog, storage_dir: Optional[Union[str, Path]] = None) -> ValidationResult:
    """Lint a parsed Catalog.

    Args:
        catalog: The parsed catalog to check.
        storage_dir: Optional storage root. When provided, the linter checks
            that every topic's content file exists and warns for missing ones.

    Returns a :class:`ValidationResult` with separate ``errors`` and ``warnings`` lists.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not catalog.catalog_version:
        warnings.append("catalog: 'catalog_version' not declared; assuming 1")
    elif catalog.catalog_version not in KNOWN_CATALOG_VERSIONS:
        warnings.append(
            f"catalog: unknown catalog_version '{catalog.catalog_version}'; "
            f"processing as {max(KNOWN_CATALOG_VERSIONS)}"
        )

    if not catalog.name:
        errors.append("catalog: 'catalog' name is required")
    if not catalog.topics:
        errors.append("catalog: 'topics' must not be empty")

    seen_refs: dict[str, str] = {}

    for topic in catalog.topics:
        p = f"topic '{topic.key}'"
        if not topic.key:
            errors.append("topic: 'key' is required")
            continue

        # Callers' input is lower-cased before lookup, so anything else is unreachable
        if not _KEY_PATTERN.match(topic.key):
            errors.append(
                f"{p}: 'key' must contain only lowercase a-z, digits and hyphens"
            )
        if len(topic.key) > MAX_TOPIC_LENGTH:
            errors.append(f"{p}: 'key' exceeds {MAX_TOPIC_LENGTH} characters")

        if not topic.display_name:
            errors.append(f"{p}: 'name' is required")
        if not topic.description:
            errors.append(f"{p}: 'description' is required")

        if not topic.content_ref:
            errors.append(f"{p}: 'path' is required")
            continue

        if topic.content_ref in seen_refs:
            warnings.append(
                f"{p}: 'path' is shared with topic '{seen_refs[topic.content_ref]}'"
            )
        else:
            seen_refs[topic.content_ref] = topic.key

        if storage_dir is not None:
            resolved = Path(storage_dir) / topic.content_ref
            if not resolved.is_file():
                warnings.append(f"{p}: path '{topic.content_ref}' does not exist")

    return ValidationResult(errors=errors, warnings=warnings)
