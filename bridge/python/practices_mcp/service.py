"""
Topic retrieval shared by the tool and resource surfaces.

Both surfaces go through ``PracticeService.retrieve``: validate the topic,
resolve it inside the storage root, then read it. The surface methods never
raise; every failure comes back as a classified ``Failure``.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from practices.model import Catalog

from .content import ContentLoader
from .errors import Failure, TopicValidationError, classify
from .mapper import MARKDOWN_MIME, catalog_resource_dicts, parse_topic_uri, topic_uri
from .paths import PathGuard
from .validation import TopicValidator


@dataclass(frozen=True)
class PracticeDocument:
    topic: str
    uri: str
    text: str
    mime_type: str = MARKDOWN_MIME


class PracticeService:
    def __init__(
        self,
        catalog: Catalog,
        storage_root: Union[str, Path],
        logger: Optional[Any] = None,
    ) -> None:
        """
        Args:
            catalog:      The fixed topic catalog.
            storage_root: Absolute directory the topic documents live under.
            logger:       structlog-style logger; one is created if omitted.
        """
        self._log = logger if logger is not None else structlog.get_logger(__name__)
        self.catalog = catalog
        self.validator = TopicValidator(catalog)
        self.guard = PathGuard(catalog, storage_root, logger=self._log)
        self.loader = ContentLoader(logger=self._log)

    def retrieve(self, raw_topic: Any) -> PracticeDocument:
        """Validate, resolve and read a topic. Raises PracticeError subclasses."""
        key = self.validator.validate(raw_topic)
        location = self.guard.resolve(key)
        text = self.loader.load(location)
        return PracticeDocument(topic=key, uri=topic_uri(key), text=text)

    # ── Tool surface ─────────────────────────────────────────────────────────

    def get_practice(self, raw_topic: Any) -> Union[PracticeDocument, Failure]:
        try:
            return self.retrieve(raw_topic)
        except Exception as e:
            return classify(e, self._log)

    # ── Resource surface ─────────────────────────────────────────────────────

    def list_resources(self) -> list[dict]:
        return catalog_resource_dicts(self.catalog)

    def read_resource(self, uri: Any) -> Union[PracticeDocument, Failure]:
        try:
            key = parse_topic_uri(uri, self.catalog)
            if key is None:
                raise TopicValidationError(
                    "Invalid resource URI, expected practice://<topic>",
                    self.validator.valid_topics,
                    uri=str(uri),
                )
            return self.retrieve(key)
        except Exception as e:
            return classify(e, self._log)
