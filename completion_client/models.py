# ------------------------------------------------------------
# Module: completion_client/models.py
# Purpose: Wire contracts for completion requests, choices, and results.
# ------------------------------------------------------------

"""Typed contracts for the completions endpoint.

Responsibilities
----------------
- Define the immutable `CompletionRequest` and its JSON body (absent fields omitted).
- Define `Choice`, `Logprobs`, and `CompletionResult` for decoded responses.
- Capture response headers as `ResponseMetadata` attached after decoding.

Notes
-----
- `None` means "absent" on the request; absent fields never go out as `null`.
- Response models ignore unknown keys so new server fields do not break decoding.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator

log = logging.getLogger(__name__)


# JSON request body for POST .../engines/{engine}/completions.
class CompletionRequest(BaseModel):
    """Parameter bag for one completion call; immutable once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    prompt: str | list[str] | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    logprobs: int | None = None
    echo: bool | None = None
    stop: str | list[str] | None = None
    stream: bool | None = None

    # Advisory only: the API recommends one of temperature/top_p, not both.
    @model_validator(mode="after")
    def _warn_temperature_and_top_p(self) -> CompletionRequest:
        if self.temperature is not None and self.top_p is not None:
            log.warning(
                "completion.request.sampling",
                extra={"temperature": self.temperature, "top_p": self.top_p},
            )
        return self

    def to_payload(self) -> dict:
        """Present fields only, keyed by wire name."""
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        """Exact JSON text sent on the wire."""
        return self.model_dump_json(exclude_none=True)

    def with_stream(self, stream: bool) -> CompletionRequest:
        return self.model_copy(update={"stream": stream})


class Logprobs(BaseModel):
    """Per-token log probabilities, present when the request set `logprobs`."""

    model_config = ConfigDict(extra="ignore")

    tokens: list[str] | None = None
    token_logprobs: list[float | None] | None = None
    top_logprobs: list[dict[str, float] | None] | None = None
    text_offset: list[int] | None = None


class Choice(BaseModel):
    """One generated completion candidate."""

    model_config = ConfigDict(extra="ignore")

    text: str = ""
    index: int = 0
    logprobs: Logprobs | None = None
    finish_reason: str | None = None

    def __str__(self) -> str:
        return f"{self.index}|{self.finish_reason}|{self.text}"


class ResponseMetadata(BaseModel):
    """HTTP details of the response a result was decoded from."""

    status_code: int | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    organization: str | None = None
    processing_ms: int | None = None
    request_id: str | None = None
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_response(
        cls, status_code: int | None, headers: Mapping[str, str] | None
    ) -> ResponseMetadata:
        flat = {str(k).lower(): str(v) for k, v in (headers or {}).items()}
        processing = flat.get("openai-processing-ms")
        try:
            processing_ms = int(float(processing)) if processing else None
        except (ValueError, OverflowError):
            processing_ms = None
        return cls(
            status_code=status_code,
            headers=flat,
            organization=flat.get("openai-organization"),
            processing_ms=processing_ms,
            request_id=flat.get("x-request-id"),
        )


class CompletionResult(BaseModel):
    """One decoded response unit (a whole body, or one streamed line)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    choices: list[Choice] | None = None

    # Set by the decoder before the result is handed to the caller.
    response: ResponseMetadata | None = Field(default=None, exclude=True)

    @property
    def completions(self) -> list[Choice]:
        return self.choices or []

    @property
    def first_text(self) -> str:
        return self.completions[0].text if self.completions else ""

    @property
    def created_at(self) -> datetime | None:
        if self.created is None:
            return None
        return datetime.fromtimestamp(self.created, tz=timezone.utc)

    def attach_response(
        self, status_code: int | None, headers: Mapping[str, str] | None
    ) -> None:
        self.response = ResponseMetadata.from_response(status_code, headers)

    def __str__(self) -> str:
        return self.first_text
