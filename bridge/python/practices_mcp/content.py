"""
File content reading for topic documents.
Distinguishes missing documents from every other read failure.
"""
from typing import Any, Optional

import structlog

from .errors import ContentReadError, TopicNotFoundError
from .paths import ResolvedLocation


class ContentLoader:
    def __init__(self, logger: Optional[Any] = None) -> None:
        self._log = logger if logger is not None else structlog.get_logger(__name__)

    def load(self, location: ResolvedLocation) -> str:
        """
        Read a topic document verbatim.

        Raises TopicNotFoundError if the file does not exist.
        Raises ContentReadError for any other I/O or decoding failure.
        """
        self._log.debug("Reading practice file", topic=location.topic)
        try:
            data = location.path.read_bytes()
        except FileNotFoundError as e:
            raise TopicNotFoundError(location.topic, path=str(location.path)) from e
        except OSError as e:
            raise ContentReadError(
                "Failed to read best practice file",
                topic=location.topic,
                path=str(location.path),
                os_error=repr(e),
            ) from e

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ContentReadError(
                "Best practice file is not valid UTF-8",
                topic=location.topic,
                path=str(location.path),
                decode_error=str(e),
            ) from e

        self._log.info("Successfully read practice file", topic=location.topic)
        return text
