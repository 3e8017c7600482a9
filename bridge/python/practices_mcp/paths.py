"""
Containment check between a topic's content path and the storage root.

A ResolvedLocation is only ever produced after the canonical candidate path
(symlinks, '.' and '..' resolved) has been proven to be the root itself or a
descendant of it. Comparison is on whole path components, so a sibling such
as ``/srv/docs-private`` never passes for root ``/srv/docs``.
"""
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn, Optional, Union

import structlog

from practices.model import Catalog

from .errors import PathSecurityError

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


@dataclass(frozen=True)
class ResolvedLocation:
    topic: str
    path: Path


def _is_within(root: str, candidate: str) -> bool:
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def _unsafe_reason(content_ref: str) -> Optional[str]:
    if not content_ref:
        return "empty content path"
    if "\0" in content_ref:
        return "null byte in content path"
    if ".." in content_ref:
        return "directory traversal sequence in content path"
    if content_ref.startswith(("/", "\\")) or _DRIVE_PATTERN.match(content_ref):
        return "absolute content path"
    return None


class PathGuard:
    """Derives storage locations for catalog topics and proves their containment."""

    def __init__(
        self,
        catalog: Catalog,
        storage_root: Union[str, Path],
        logger: Optional[Any] = None,
    ) -> None:
        if "\0" in str(storage_root):
            raise ValueError("Storage root contains a null byte")
        if not Path(storage_root).is_absolute():
            raise ValueError(f"Storage root must be an absolute path: {storage_root}")
        self._catalog = catalog
        self._root = os.path.realpath(storage_root)
        self._log = logger if logger is not None else structlog.get_logger(__name__)

    @property
    def root(self) -> Path:
        return Path(self._root)

    def resolve(self, key: str) -> ResolvedLocation:
        """Resolve a validated topic key to a location inside the storage root.

        Raises PathSecurityError if the topic is unknown or its content path
        does not stay inside the root. Nothing is read.
        """
        topic = self._catalog.get(key)
        if topic is None:
            self._deny("Unknown topic reached path resolution", topic=key)

        reason = _unsafe_reason(topic.content_ref)
        if reason is not None:
            self._deny(reason, topic=key, content_ref=topic.content_ref)

        candidate = os.path.realpath(os.path.join(self._root, topic.content_ref))
        if not _is_within(self._root, candidate):
            self._deny(
                "Path traversal attempt detected",
                topic=key,
                content_ref=topic.content_ref,
                candidate=candidate,
            )

        return ResolvedLocation(topic=key, path=Path(candidate))

    def _deny(self, reason: str, **fields: Any) -> NoReturn:
        self._log.error(reason, root=self._root, **fields)
        raise PathSecurityError("Invalid topic path", reason=reason, root=self._root, **fields)
