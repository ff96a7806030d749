# ------------------------------------------------------------
# Module: completion_client/errors.py
# Purpose: Define typed client exceptions for clear, fail-fast error handling.
# ------------------------------------------------------------

"""Exception types for completion calls.

Every failure is terminal for the call in progress; the caller decides whether
to issue a new call. Each error carries the raw material needed to diagnose it.

Responsibilities
----------------
- Provide a base `CompletionError` for catch-all handling.
- Surface non-success HTTP responses as `TransportError`.
- Surface unparseable bodies/lines as `DecodeError`.
- Surface responses without choices as `EmptyResultError`.
"""

from __future__ import annotations


class CompletionError(Exception):
    """Base class for completion client failures."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(CompletionError):
    """Raised when the initial HTTP response has a non-success status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        request_body: str,
        response_text: str | None = None,
    ):
        super().__init__(
            f"{operation} failed! HTTP status code: {status_code}. "
            f"Request body: {request_body}",
            status_code=status_code,
        )
        self.operation = operation
        self.request_body = request_body
        self.response_text = response_text


class DecodeError(CompletionError):
    """Raised when a body or streamed line is not the expected JSON shape."""

    def __init__(self, payload: str, *, status_code: int | None = None, reason: str = ""):
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"could not decode completion payload{detail}: {payload[:500]}",
            status_code=status_code,
        )
        self.payload = payload


class EmptyResultError(CompletionError):
    """Raised when a parsed response contains zero choices."""

    def __init__(self, body: str, *, status_code: int | None = None):
        super().__init__(
            f"no completions! HTTP status code: {status_code}. Response body: {body}",
            status_code=status_code,
        )
        self.body = body
