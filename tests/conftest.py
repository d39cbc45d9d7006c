"""
Shared fixtures: a fake requests session backed by an in-memory entries API.
"""

import json
import logging
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from favorites.config import ApiClientConfig
from favorites.ui.utils.api_client import EntryApiClient


def make_response(request: requests.PreparedRequest, status: int, body=None) -> requests.Response:
    """Build a requests.Response the way the transport would return it."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = request.url
    resp.request = request
    if body is None:
        resp._content = b""
    else:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    return resp


class InMemoryEntriesBackend:
    """Stub of the /entries endpoints, paginating into {items, total}."""

    def __init__(self, prefix: str = "/api"):
        self.prefix = prefix
        self.entries = {}
        self._next_id = 1

    def __call__(self, request: requests.PreparedRequest) -> requests.Response:
        parts = urlsplit(request.url)
        path = parts.path[len(self.prefix):]

        if path == "/entries":
            if request.method == "GET":
                query = parse_qs(parts.query)
                page = int(query["page"][0])
                limit = int(query["limit"][0])
                items = list(self.entries.values())
                start = (page - 1) * limit
                return make_response(
                    request, 200, {"items": items[start:start + limit], "total": len(items)}
                )
            if request.method == "POST":
                entry_id = str(self._next_id)
                self._next_id += 1
                self.entries[entry_id] = {**json.loads(request.body), "_id": entry_id}
                return make_response(request, 201, self.entries[entry_id])

        entry_id = path.rsplit("/", 1)[-1]
        if entry_id not in self.entries:
            return make_response(request, 404, {"message": "Entry not found"})
        if request.method == "PUT":
            self.entries[entry_id] = {**json.loads(request.body), "_id": entry_id}
            return make_response(request, 200, self.entries[entry_id])
        if request.method == "DELETE":
            del self.entries[entry_id]
            return make_response(request, 204)
        return make_response(request, 405, {"message": "Method not allowed"})


class FakeSession:
    """Records prepared requests and answers them with a handler."""

    def __init__(self, handler):
        self.handler = handler
        self.sent = []
        self.timeouts = []
        self.closed = False

    def request(self, method, url, params=None, json=None, timeout=None):
        prepared = requests.Request(method, url, params=params, json=json).prepare()
        self.sent.append(prepared)
        self.timeouts.append(timeout)
        return self.handler(prepared)

    def close(self):
        self.closed = True


@pytest.fixture
def backend():
    """Empty in-memory entries backend mounted under /api."""
    return InMemoryEntriesBackend()


@pytest.fixture
def fake_session(backend):
    """Fake session answering from the in-memory backend."""
    return FakeSession(backend)


@pytest.fixture
def client(fake_session):
    """Entry client pointed at the default base URL through the fake session."""
    return EntryApiClient(ApiClientConfig(), session=fake_session)


@pytest.fixture
def respond():
    """Expose make_response to tests that install their own handlers."""
    return make_response


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest left it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
