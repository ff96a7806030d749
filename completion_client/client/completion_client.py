# ------------------------------------------------------------
# Module: completion_client/client/completion_client.py
# Purpose: Completions endpoint client: one-shot and streamed (generator or callback).
# ------------------------------------------------------------

"""Interface to the remote text-completion API.

Responsibilities
----------------
- Build the JSON body from a `CompletionRequest` (or keyword parameters).
- POST it to the engine-specific completions endpoint.
- Decode one-shot bodies via `decode_result`, streamed bodies via
  `StreamingLineDecoder`.
- Log structured open/ok/error records per call.

Notes
-----
- No retries, no fallback engine: every failure is raised to the caller.
- Streamed responses are opened inside the generator's `with` block, so they
  are closed on completion, on `[DONE]`, on error, and when the consumer stops
  iterating early (generator `close()`).
- Network calls use `requests`; the session is injectable for tests.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

import requests

from completion_client.core.config import Settings
from completion_client.core.config import settings as _settings
from completion_client.decoding import StreamingLineDecoder, decode_result
from completion_client.errors import CompletionError, TransportError
from completion_client.models import CompletionRequest, CompletionResult
from completion_client.utils.logging_extras import log_adapter, new_request_id

from .http import auth_headers, base_url, completions_url, is_success

log = logging.getLogger(__name__)


class CompletionEndpoint:
    """Client for `POST {base}engines/{engine}/completions`."""

    def __init__(
        self,
        base: str,
        api_key: str | None = None,
        *,
        organization: str | None = None,
        default_engine: str = "davinci",
        timeout: float = 60.0,
        stream_connect_timeout: float = 5.0,
        session: requests.Session | None = None,
    ):
        self.base = base_url(base)
        self.default_engine = default_engine
        self.timeout = timeout
        self.stream_connect_timeout = stream_connect_timeout
        self.headers = auth_headers(api_key, organization)
        self.session = session or requests.Session()

    @classmethod
    def from_settings(
        cls, settings: Settings = _settings, session: requests.Session | None = None
    ) -> CompletionEndpoint:
        """Construct a `CompletionEndpoint` from validated settings."""
        return cls(
            settings.API_BASE_URL,
            settings.API_KEY,
            organization=settings.ORGANIZATION,
            default_engine=settings.DEFAULT_ENGINE,
            timeout=settings.REQUEST_TIMEOUT,
            stream_connect_timeout=settings.STREAM_CONNECT_TIMEOUT,
            session=session,
        )

    def endpoint(self, engine: str | None = None) -> str:
        return completions_url(self.base, engine or self.default_engine)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> CompletionEndpoint:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # Accept either a prebuilt request or the same fields as keywords.
    @staticmethod
    def _build_request(request: CompletionRequest | None, params: dict) -> CompletionRequest:
        if request is not None and params:
            raise TypeError(
                f"pass a CompletionRequest or keyword parameters, not both: {sorted(params)}"
            )
        return request if request is not None else CompletionRequest(**params)

    def create_completion(
        self,
        request: CompletionRequest | None = None,
        *,
        engine: str | None = None,
        **params,
    ) -> CompletionResult:
        """One-shot completion; waits for the full body."""
        req = self._build_request(request, params).with_stream(False)
        body = req.to_json()
        url = self.endpoint(engine)
        lad = log_adapter(log, new_request_id())
        t0 = time.perf_counter()

        r = self.session.post(url, data=body, headers=self.headers, timeout=self.timeout)
        if not is_success(r.status_code):
            lad.warning(
                "completion.create.http_error",
                extra={"status": r.status_code, "url": url},
            )
            raise TransportError("create_completion", r.status_code, body, r.text)

        try:
            result = decode_result(r.text, status_code=r.status_code, headers=r.headers)
        except CompletionError as e:
            lad.error("completion.create.decode_failed", extra={"error": str(e)[:200]})
            raise
        lad.info(
            "completion.create.ok",
            extra={
                "choices": len(result.completions),
                "ms": round((time.perf_counter() - t0) * 1000, 1),
            },
        )
        return result

    def stream_completion(
        self,
        request: CompletionRequest | None = None,
        *,
        engine: str | None = None,
        **params,
    ) -> Iterator[CompletionResult]:
        """Streamed completion; yields one result per `data:` line as it arrives.

        Nothing is sent until the first `next()`; the returned iterator is
        single-use.
        """
        req = self._build_request(request, params).with_stream(True)
        body = req.to_json()
        url = self.endpoint(engine)
        lad = log_adapter(log, new_request_id())

        with self.session.post(
            url,
            data=body,
            headers=self.headers,
            stream=True,
            timeout=(self.stream_connect_timeout, None),
        ) as r:
            lad.info(
                "completion.stream.open",
                extra={"status": r.status_code, "url": url},
            )
            if not is_success(r.status_code):
                lad.warning(
                    "completion.stream.http_error",
                    extra={"status": r.status_code, "url": url},
                )
                raise TransportError("stream_completion", r.status_code, body, r.text)

            # text/event-stream without a charset would otherwise decode as latin-1
            if "charset" not in r.headers.get("Content-Type", "").lower():
                r.encoding = "utf-8"

            decoder = StreamingLineDecoder(
                status_code=r.status_code, headers=r.headers, lad=lad
            )
            try:
                yield from decoder.iter_results(r.iter_lines(decode_unicode=True))
            finally:
                lad.info(
                    "completion.stream.done",
                    extra={
                        "emitted": decoder.emitted,
                        "skipped": decoder.skipped,
                        "sentinel": decoder.terminated,
                    },
                )

    def stream_completion_to(
        self,
        handler: Callable[[CompletionResult], object],
        request: CompletionRequest | None = None,
        *,
        engine: str | None = None,
        **params,
    ) -> int:
        """Callback form of `stream_completion`; returns how many results were delivered."""
        delivered = 0
        stream = self.stream_completion(request, engine=engine, **params)
        try:
            for result in stream:
                handler(result)
                delivered += 1
        finally:
            stream.close()
        return delivered
