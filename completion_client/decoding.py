# ------------------------------------------------------------
# Module: completion_client/decoding.py
# Purpose: Decode completion bodies and line-delimited streamed responses.
# ------------------------------------------------------------

"""Turn raw response text into validated `CompletionResult` objects.

Responsibilities
----------------
- Parse one JSON document into a result; reject bad JSON and empty choices.
- Walk a streamed body line by line: strip the `data: ` frame, stop on `[DONE]`,
  skip blanks, decode everything else.
- Offer the same line rules as a generator and as a handler callback.

Notes
-----
- The prefix is stripped before the sentinel comparison, so both
  `data: [DONE]` and a bare `[DONE]` end the stream.
- Any failure is raised immediately; results already yielded stay valid.
- Reading stops at the sentinel; closing the source is the caller's job.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping

from pydantic import ValidationError

from .errors import DecodeError, EmptyResultError
from .models import CompletionResult
from .utils.logging_extras import log_adapter

log = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def decode_result(
    payload: str,
    *,
    status_code: int | None = None,
    headers: Mapping[str, str] | None = None,
) -> CompletionResult:
    """Parse + validate one JSON document and attach response metadata."""
    try:
        result = CompletionResult.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(
            payload, status_code=status_code, reason=f"{e.error_count()} error(s)"
        ) from e

    if not result.choices:
        raise EmptyResultError(payload, status_code=status_code)

    result.attach_response(status_code, headers)
    return result


class StreamingLineDecoder:
    """Line-at-a-time decoder for one streamed response.

    One instance per response; the headers and status captured when the
    stream was opened are attached to every result it produces.
    """

    def __init__(
        self,
        *,
        status_code: int | None = None,
        headers: Mapping[str, str] | None = None,
        prefix: str = DATA_PREFIX,
        sentinel: str = DONE_SENTINEL,
        lad: logging.LoggerAdapter | None = None,
    ):
        self.status_code = status_code
        self.headers = headers
        self.prefix = prefix
        self.sentinel = sentinel
        self.lad = lad or log_adapter(log, None)
        self.emitted = 0
        self.skipped = 0
        self.terminated = False

    def _frame(self, line: str | bytes) -> str:
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(
                    line.decode("utf-8", "replace"),
                    status_code=self.status_code,
                    reason="invalid utf-8",
                ) from e
        if line.startswith(self.prefix):
            line = line[len(self.prefix) :]
        return line

    def _failed(self, e: Exception) -> None:
        self.lad.error(
            "completion.stream.decode_failed",
            extra={"emitted": self.emitted, "error": str(e)[:200]},
        )

    def iter_results(self, lines: Iterable[str | bytes]) -> Iterator[CompletionResult]:
        """Yield one result per data line until the sentinel or end of input."""
        for raw in lines:
            try:
                line = self._frame(raw)
            except DecodeError as e:
                self._failed(e)
                raise

            if line == self.sentinel:
                self.terminated = True
                self.lad.debug(
                    "completion.stream.sentinel", extra={"emitted": self.emitted}
                )
                return

            if not line.strip():
                self.skipped += 1
                continue

            try:
                result = decode_result(
                    line.strip(), status_code=self.status_code, headers=self.headers
                )
            except (DecodeError, EmptyResultError) as e:
                self._failed(e)
                raise
            self.emitted += 1
            yield result

    def feed(
        self,
        lines: Iterable[str | bytes],
        handler: Callable[[CompletionResult], object],
    ) -> int:
        """Callback form of `iter_results`; returns how many results were delivered."""
        delivered = 0
        for result in self.iter_results(lines):
            handler(result)
            delivered += 1
        return delivered
