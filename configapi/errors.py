"""Error taxonomy for the control-plane API.

Every failure that reaches the response-writing step carries exactly one
:class:`ErrorKind`. Errors raised without a kind are treated as internal.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from fastapi import Response


class ErrorKind(str, Enum):
    """Error classification and the HTTP status it renders as."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class ClassifiedError(Exception):
    """An error tagged with exactly one :class:`ErrorKind`."""

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.kind.value}: {self.message}: {self.cause}"
        return f"{self.kind.value}: {self.message}"


def bad_request(message: str, cause: Optional[BaseException] = None) -> ClassifiedError:
    return ClassifiedError(ErrorKind.BAD_REQUEST, message, cause)


def not_found(message: str, cause: Optional[BaseException] = None) -> ClassifiedError:
    return ClassifiedError(ErrorKind.NOT_FOUND, message, cause)


def internal(message: str, cause: Optional[BaseException] = None) -> ClassifiedError:
    return ClassifiedError(ErrorKind.INTERNAL, message, cause)


def classify(exc: BaseException) -> ErrorKind:
    """Return the kind carried by ``exc``, defaulting to INTERNAL."""
    if isinstance(exc, ClassifiedError):
        return exc.kind
    return ErrorKind.INTERNAL


def render_error(exc: BaseException, log: logging.Logger) -> Response:
    """Log ``exc`` once at error level and build a status-only response.

    The body is always empty so that error details stay server-side.
    """
    kind = classify(exc)
    with_trace = kind is ErrorKind.INTERNAL or exc.__cause__ is not None
    log.error(f"[{kind.value}] {exc}", exc_info=exc if with_trace else None)
    return Response(status_code=kind.status_code)
