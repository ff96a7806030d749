# ------------------------------------------------------------
# Module: completion_client/client/protocols.py
# Purpose: Minimal protocol for completion clients (one-shot and streaming).
# ------------------------------------------------------------

"""Typed protocol for completion client implementations.

Lets callers (the CLI, applications, tests) depend on the call surface rather
than on `CompletionEndpoint` itself, so a fake or alternate transport can be
swapped in.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Protocol

from completion_client.models import CompletionRequest, CompletionResult


class CompletionClient(Protocol):
    """Contract shared by every completion client."""

    def create_completion(
        self, request: CompletionRequest | None = None, *, engine: str | None = None, **params
    ) -> CompletionResult: ...

    def stream_completion(
        self, request: CompletionRequest | None = None, *, engine: str | None = None, **params
    ) -> Iterator[CompletionResult]: ...

    def stream_completion_to(
        self,
        handler: Callable[[CompletionResult], object],
        request: CompletionRequest | None = None,
        *,
        engine: str | None = None,
        **params,
    ) -> int: ...
