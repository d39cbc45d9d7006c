"""
Entry API client for the favorites backend.

Each operation maps to one REST call under ``/entries`` and hands back the
raw ``requests.Response``. Transport errors and non-2xx statuses propagate
to the caller as the ``requests`` exceptions that raised them.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from favorites.config import ApiClientConfig

logger = logging.getLogger(__name__)

ENTRIES_PATH = "/entries"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class PageRequest:
    """One page of the entry list."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        for name in ("page", "limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be an integer >= 1, got {value!r}")

    def as_params(self) -> dict[str, int]:
        return {"page": self.page, "limit": self.limit}


def _entry_path(entry_id: Any) -> str:
    if entry_id is None or str(entry_id) == "":
        raise ValueError("entry_id is required")
    return f"{ENTRIES_PATH}/{quote(str(entry_id), safe='')}"


class EntryApiClient:
    """
    Blocking client for the entry endpoints.

    Args:
        config: Base URL and timeout of the backend
        session: requests.Session (or compatible) to send through; when
            omitted the client creates one and closes it in close()
    """

    def __init__(self, config: ApiClientConfig, session: requests.Session | None = None):
        self.config = config
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def __enter__(self) -> "EntryApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def owns_session(self) -> bool:
        """True when the session was created here rather than injected."""
        return self._owns_session

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self._session.close()

    def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: Any = None,
    ) -> requests.Response:
        url = f"{self.config.base_url}{path}"
        logger.debug(f"{method} {url} params={params}")
        try:
            r = self._session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.config.timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise
        return r

    def list_entries(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> requests.Response:
        """Fetch one page of entries."""
        page_request = PageRequest(page=page, limit=limit)
        return self._request("GET", ENTRIES_PATH, params=page_request.as_params())

    def create_entry(self, data: dict) -> requests.Response:
        """Create an entry from a caller-built payload."""
        return self._request("POST", ENTRIES_PATH, json=data)

    def update_entry(self, entry_id: Any, data: dict) -> requests.Response:
        """Replace an entry with the given payload."""
        return self._request("PUT", _entry_path(entry_id), json=data)

    def delete_entry(self, entry_id: Any) -> requests.Response:
        """Delete an entry."""
        return self._request("DELETE", _entry_path(entry_id))


class DeferredEntryApiClient:
    """
    Future-returning wrapper around EntryApiClient.

    Every operation is submitted to a thread pool. The returned future
    resolves to the response, or fails with the exception the blocking
    client raised. Calls submitted together complete in no particular order.

    requests.Session is not guaranteed to be thread-safe. When the wrapped
    client created its own session, each pool thread gets a client with a
    session of its own. A session the caller injected is shared by all
    threads, so it must tolerate concurrent use.
    """

    def __init__(
        self,
        client: EntryApiClient,
        executor: ThreadPoolExecutor | None = None,
        max_workers: int = 4,
    ):
        self.client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="entry-api"
        )
        self._local = threading.local()
        self._lock = threading.Lock()
        self._worker_clients: list[EntryApiClient] = []

    def __enter__(self) -> "DeferredEntryApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the thread pool if this wrapper created it and close per-thread sessions."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
        with self._lock:
            worker_clients, self._worker_clients = self._worker_clients, []
        for worker_client in worker_clients:
            worker_client.close()

    def _worker_client(self) -> EntryApiClient:
        if not self.client.owns_session:
            return self.client
        worker_client = getattr(self._local, "client", None)
        if worker_client is None:
            worker_client = EntryApiClient(self.client.config)
            self._local.client = worker_client
            with self._lock:
                self._worker_clients.append(worker_client)
        return worker_client

    def _call(self, operation: str, *args) -> requests.Response:
        return getattr(self._worker_client(), operation)(*args)

    def list_entries(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Future:
        return self._executor.submit(self._call, "list_entries", page, limit)

    def create_entry(self, data: dict) -> Future:
        return self._executor.submit(self._call, "create_entry", data)

    def update_entry(self, entry_id: Any, data: dict) -> Future:
        return self._executor.submit(self._call, "update_entry", entry_id, data)

    def delete_entry(self, entry_id: Any) -> Future:
        return self._executor.submit(self._call, "delete_entry", entry_id)
