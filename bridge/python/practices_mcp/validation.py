"""Caller input validation against the topic whitelist."""
from typing import Any

from practices.model import MAX_TOPIC_LENGTH, Catalog

from .errors import TopicValidationError


class TopicValidator:
    """Normalizes a raw topic request and accepts it only if it names a catalog key.

    Pure: no I/O and no logging.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._valid_topics = catalog.keys()

    @property
    def valid_topics(self) -> tuple[str, ...]:
        return self._valid_topics

    def validate(self, raw: Any) -> str:
        if not isinstance(raw, str):
            raise self._reject("Topic must be a string")
        if not raw:
            raise self._reject("Topic cannot be empty")
        if len(raw) > MAX_TOPIC_LENGTH:
            raise self._reject("Topic too long")

        key = raw.lower()
        if key not in self._catalog:
            raise self._reject("Unknown topic")
        return key

    def _reject(self, problem: str) -> TopicValidationError:
        return TopicValidationError(problem, self._valid_topics)
