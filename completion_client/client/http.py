# ------------------------------------------------------------
# Module: completion_client/client/http.py
# Purpose: Small HTTP/URL helpers for the completion client.
# ------------------------------------------------------------

from __future__ import annotations

DEFAULT_BASE_URL = "https://api.openai.com/v1/"


def base_url(val: str | None) -> str:
    """Normalize an API root to `scheme://host[:port]/path/` (trailing slash)."""
    v = (val or "").strip().rstrip("/")
    if not v:
        return DEFAULT_BASE_URL
    if not v.startswith(("http://", "https://")):
        # bare host or host:port, e.g. 127.0.0.1:8000/v1
        v = f"https://{v}" if ":" not in v.split("/", 1)[0] else f"http://{v}"
    return v + "/"


def completions_url(base: str, engine: str) -> str:
    """Endpoint for one engine: `{base}engines/{engine}/completions`."""
    name = (engine or "").strip().strip("/")
    if not name:
        raise ValueError("engine name must be a non-empty string")
    return f"{base}engines/{name}/completions"


def auth_headers(api_key: str | None, organization: str | None = None) -> dict[str, str]:
    """JSON content headers plus bearer auth / organization when configured."""
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    if organization:
        headers["OpenAI-Organization"] = organization
    return headers


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300
