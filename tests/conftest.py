"""Shared fixtures: a fake `requests.Session` that records calls and replays canned responses."""

from __future__ import annotations

import json

import pytest

from completion_client.client.completion_client import CompletionEndpoint


class FakeResponse:
    """Just enough of `requests.Response` for the client: status, headers, text, lines."""

    def __init__(self, status_code=200, text="", lines=None, headers=None):
        self.status_code = status_code
        self.text = text
        self.headers = headers if headers is not None else {"Content-Type": "application/json"}
        self.encoding = None
        self.closed = False
        self.lines_read = 0
        self._lines = list(lines or [])

    def iter_lines(self, decode_unicode=False):
        for line in self._lines:
            self.lines_read += 1
            yield line

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    def __init__(self):
        self.responses: list[FakeResponse] = []
        self.calls: list[dict] = []
        self.closed = False

    def queue(self, response: FakeResponse) -> FakeResponse:
        self.responses.append(response)
        return response

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        return self.responses.pop(0)

    def close(self):
        self.closed = True

    @property
    def last_body(self) -> dict:
        return json.loads(self.calls[-1]["data"])


def data_line(text: str, index: int = 0, finish_reason=None) -> str:
    chunk = {
        "id": "cmpl-1",
        "object": "text_completion",
        "created": 1_600_000_000,
        "model": "davinci:2020-05-03",
        "choices": [
            {"text": text, "index": index, "logprobs": None, "finish_reason": finish_reason}
        ],
    }
    return "data: " + json.dumps(chunk)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def endpoint(session) -> CompletionEndpoint:
    return CompletionEndpoint(
        "https://api.example.test/v1/",
        "sk-test",
        organization="org-test",
        default_engine="davinci",
        session=session,
    )
