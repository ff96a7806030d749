# ------------------------------------------------------------
# Module: completion_client/utils/logging_extras.py
# Purpose: Logger adapters that tag records with a per-call request id.
# ------------------------------------------------------------

"""Per-call logging context for completion requests.

Every call to the endpoint gets a short client-side request id so the
open/decode/close records of one stream can be correlated in mixed logs,
including when several calls run concurrently.

Notes
-----
- The id is generated locally; the server's own id (`x-request-id`) is
  available on `ResponseMetadata.request_id` once headers arrive.
"""

import logging
import uuid


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


class RequestLogAdapter(logging.LoggerAdapter):
    """`LoggerAdapter` that merges per-call `extra=` fields with the adapter's own.

    The stdlib adapter replaces the call's `extra` with `self.extra`, which
    would drop event fields such as `status` or `emitted`.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def log_adapter(logger: logging.Logger, request_id: str | None) -> logging.LoggerAdapter:
    """Return a `RequestLogAdapter` that injects `request_id` when one is given.

    Example
    -------
    >>> lad = log_adapter(logging.getLogger(__name__), request_id="3f2a9c01b7de")
    >>> lad.info("completion.create.start", extra={"engine": "davinci"})
    """
    return RequestLogAdapter(logger, {"request_id": request_id} if request_id else {})
