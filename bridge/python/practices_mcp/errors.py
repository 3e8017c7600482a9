"""
Closed error taxonomy shared by the tool and resource surfaces.

Every failure leaving the retrieval service is one of the ``ErrorKind``
values below, rendered to a caller-safe ``Failure``. Internal detail (paths,
OS errors, tracebacks) only ever goes to the log.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import structlog


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    SECURITY = "security_error"
    READ = "read_error"
    UNEXPECTED = "unexpected_error"


class PracticeError(Exception):
    """Base for classified retrieval failures.

    ``detail`` holds internal context for logging and is never rendered.
    """
    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.detail = detail


class TopicValidationError(PracticeError):
    kind = ErrorKind.VALIDATION

    def __init__(self, problem: str, valid_topics: tuple[str, ...], **detail: Any) -> None:
        super().__init__(problem, **detail)
        self.problem = problem
        self.valid_topics = tuple(valid_topics)


class TopicNotFoundError(PracticeError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, topic: str, **detail: Any) -> None:
        super().__init__(f"Best practice for topic '{topic}' not found", **detail)
        self.topic = topic


class PathSecurityError(PracticeError):
    kind = ErrorKind.SECURITY


class ContentReadError(PracticeError):
    kind = ErrorKind.READ


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


# ── Rendering ─────────────────────────────────────────────────────────────────

def _render_validation(exc: BaseException) -> str:
    problem = getattr(exc, "problem", str(exc))
    valid_topics = getattr(exc, "valid_topics", ())
    return f"Invalid input: {problem}. Valid topics: {', '.join(valid_topics)}"


def _render_not_found(exc: BaseException) -> str:
    return f"Best practice for topic '{getattr(exc, 'topic', '')}' not found"


_RENDERERS: dict[ErrorKind, Callable[[BaseException], str]] = {
    ErrorKind.VALIDATION: _render_validation,
    ErrorKind.NOT_FOUND:  _render_not_found,
    ErrorKind.SECURITY:   lambda exc: "Access denied",
    ErrorKind.READ:       lambda exc: "An error occurred while retrieving the best practice",
    ErrorKind.UNEXPECTED: lambda exc: "An unexpected error occurred",
}


def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, PracticeError):
        return exc.kind
    return ErrorKind.UNEXPECTED


def classify(exc: BaseException, logger: Optional[Any] = None) -> Failure:
    """Log ``exc`` at the severity its kind calls for and return a caller-safe Failure."""
    log = logger if logger is not None else structlog.get_logger(__name__)
    kind = error_kind(exc)
    detail = exc.detail if isinstance(exc, PracticeError) else {}

    if kind is ErrorKind.VALIDATION:
        log.warning("Validation error", error=str(exc), **detail)
    elif kind is ErrorKind.NOT_FOUND:
        log.info("Resource not found", error=str(exc), **detail)
    elif kind is ErrorKind.SECURITY:
        log.error("Security violation", error=str(exc), **detail)
    elif kind is ErrorKind.READ:
        log.error("File read error", error=str(exc), **detail)
    else:
        log.error("Unexpected error", error=repr(exc), exc_info=exc)

    return Failure(kind=kind, message=_RENDERERS[kind](exc))
