"""
Async API client for the fitness API.

Wraps httpx with:
- endpoint normalization ("exercises" -> "/api/exercises")
- response envelope unwrapping ({"success": ..., "data": ...} -> data)
- a shared in-flight request counter (LoadingState) driving a loading indicator
- cooperative cancellation via CancelToken

Usage:
    async with ApiClient(base_url="http://localhost:8001") as api:
        exercises = await api.get("exercises")
        await api.delete(f"exercises/{exercise_id}")
"""

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import httpx

from core.config import settings
from core.logging import get_logger

logger = get_logger(__name__)

BODY_METHODS = {"POST", "PUT", "PATCH"}


# ============================================================
# Errors
# ============================================================

class ApiError(Exception):
    """
    Any failed API call: HTTP error status, transport failure or bad JSON.
    `message` is always human-readable.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class RequestCancelledError(ApiError):
    """The caller cancelled the request through its CancelToken."""

    def __init__(self, url: str):
        super().__init__(f"Request to {url} was cancelled")
        self.url = url


# ============================================================
# Loading state
# ============================================================

class LoadingState:
    """
    Counter of in-flight requests.
    Increments and decrements are atomic; the count never goes below zero.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0
        self._listeners: List[Callable[[bool], None]] = []

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def is_loading(self) -> bool:
        return self.count > 0

    def subscribe(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        """
        Call `listener(is_loading)` whenever loading starts or stops.

        Returns:
            Function removing the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def start_loading(self) -> None:
        with self._lock:
            self._count += 1
            changed = self._count == 1
            listeners = list(self._listeners)
        if changed:
            self._notify(listeners, True)

    def stop_loading(self) -> None:
        with self._lock:
            if self._count == 0:
                logger.warning("stop_loading() called with no request in flight")
                return
            self._count -= 1
            changed = self._count == 0
            listeners = list(self._listeners)
        if changed:
            self._notify(listeners, False)

    @staticmethod
    def _notify(listeners: List[Callable[[bool], None]], is_loading: bool) -> None:
        # A failing listener must not leave the counter out of step
        for listener in listeners:
            try:
                listener(is_loading)
            except Exception:
                logger.exception(f"Loading listener {listener!r} failed")


_loading_state = LoadingState()


def get_loading_state() -> LoadingState:
    """Process-wide loading state shared by clients that don't inject one."""
    return _loading_state


# ============================================================
# Cancellation
# ============================================================

class CancelToken:
    """
    Cooperative cancellation for a single request (or a group of them).
    cancel() must be called from the event loop thread.
    """

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


# ============================================================
# Helpers
# ============================================================

@dataclass
class RequestConfig:
    method: str = "GET"
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    cancel_token: Optional[CancelToken] = None
    skip_loading: bool = False


def resolve_url(endpoint: str, api_root: str = "/api") -> str:
    """
    Normalize an endpoint:
    - absolute http(s) URLs are kept
    - paths already under the API root are kept
    - "/path" -> "<root>/path", "path" -> "<root>/path"
    """
    if endpoint.startswith(("http://", "https://")):
        return endpoint
    root = "/" + api_root.strip("/")
    if endpoint == root or endpoint.startswith(root + "/"):
        return endpoint
    return f"{root}/{endpoint.lstrip('/')}"


def extract_response_data(payload: Any) -> Any:
    """
    Unwrap {"success": ..., "data": ...}; anything else is returned unchanged.
    """
    if isinstance(payload, dict) and "success" in payload and "data" in payload:
        return payload["data"]
    return payload


def _error_message(response: httpx.Response) -> tuple:
    """
    Best-effort message from an error response.

    Returns:
        (message, parsed payload or {})
    """
    try:
        payload = response.json()
    except ValueError:
        payload = {}

    message = None
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            if isinstance(payload.get(key), str) and payload[key]:
                message = payload[key]
                break
    return message or f"API error: {response.reason_phrase}", payload


# ============================================================
# Client
# ============================================================

class ApiClient:
    """
    Single entry point (`request`) plus method shortcuts.
    Every shortcut goes through `request`, so loading tracking,
    URL normalization and error handling are uniform.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_root: Optional[str] = None,
        loading: Optional[LoadingState] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_root = api_root or settings.api_root
        self.loading = loading or get_loading_state()
        self._client = httpx.AsyncClient(
            base_url=base_url if base_url is not None else settings.api_base_url,
            headers=headers,
            timeout=timeout if timeout is not None else settings.api_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def set_session_token(self, token: Optional[str]) -> None:
        """Attach (or drop) the bearer token sent with every request."""
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    async def request(self, endpoint: str, config: Optional[RequestConfig] = None) -> Any:
        """
        Issue a request and return the unwrapped payload.

        Raises:
            RequestCancelledError if the cancel token fires
            ApiError on HTTP error status, transport failure or invalid JSON
        """
        config = config or RequestConfig()
        method = config.method.upper()
        url = resolve_url(endpoint, self.api_root)
        headers = {"Content-Type": "application/json", **config.headers}
        body = config.body if method in BODY_METHODS and config.body is not None else None

        loading = None if config.skip_loading else self.loading
        if loading is not None:
            loading.start_loading()
        try:
            response = await self._send(method, url, headers, body, config.cancel_token)

            if not response.is_success:
                message, payload = _error_message(response)
                logger.warning(f"{method} {url} failed with {response.status_code}: {message}")
                raise ApiError(message, status_code=response.status_code, payload=payload)

            if not response.content:
                return None
            try:
                data = response.json()
            except ValueError as e:
                raise ApiError(f"Invalid JSON in response from {url}: {e}", status_code=response.status_code)
            return extract_response_data(data)
        finally:
            if loading is not None:
                loading.stop_loading()

    async def _send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]],
        cancel_token: Optional[CancelToken],
    ) -> httpx.Response:
        logger.debug(f"→ {method} {url}")
        if cancel_token is not None and cancel_token.cancelled:
            raise RequestCancelledError(url)

        request = self._client.request(method, url, headers=headers, json=body)
        try:
            if cancel_token is None:
                return await request

            request_task = asyncio.ensure_future(request)
            cancel_task = asyncio.ensure_future(cancel_token.wait())
            try:
                done, _ = await asyncio.wait(
                    {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                cancel_task.cancel()
                if not request_task.done():
                    request_task.cancel()

            if cancel_task in done:
                await asyncio.gather(request_task, return_exceptions=True)
                logger.info(f"{method} {url} cancelled by caller")
                raise RequestCancelledError(url)
            return request_task.result()
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} transport error: {e}")
            raise ApiError(f"Network error: {e}") from e

    # === Shortcuts ===

    async def get(self, endpoint: str, cancel_token: Optional[CancelToken] = None, skip_loading: bool = False) -> Any:
        return await self.request(endpoint, RequestConfig("GET", cancel_token=cancel_token, skip_loading=skip_loading))

    async def post(self, endpoint: str, body: Dict[str, Any], cancel_token: Optional[CancelToken] = None, skip_loading: bool = False) -> Any:
        return await self.request(endpoint, RequestConfig("POST", body, cancel_token=cancel_token, skip_loading=skip_loading))

    async def put(self, endpoint: str, body: Dict[str, Any], cancel_token: Optional[CancelToken] = None, skip_loading: bool = False) -> Any:
        return await self.request(endpoint, RequestConfig("PUT", body, cancel_token=cancel_token, skip_loading=skip_loading))

    async def patch(self, endpoint: str, body: Dict[str, Any], cancel_token: Optional[CancelToken] = None, skip_loading: bool = False) -> Any:
        return await self.request(endpoint, RequestConfig("PATCH", body, cancel_token=cancel_token, skip_loading=skip_loading))

    async def delete(self, endpoint: str, cancel_token: Optional[CancelToken] = None, skip_loading: bool = False) -> Any:
        return await self.request(endpoint, RequestConfig("DELETE", cancel_token=cancel_token, skip_loading=skip_loading))

    async def get_multiple(self, endpoints: List[str]) -> List[Any]:
        """GET several endpoints concurrently; fails if any of them fails."""
        return list(await asyncio.gather(*(self.get(endpoint) for endpoint in endpoints)))

    async def fetch_with_error_handling(
        self,
        endpoint: str,
        on_error: Optional[Callable[[ApiError], None]] = None,
        config: Optional[RequestConfig] = None,
    ) -> Optional[Any]:
        """
        Like `request`, but logs the failure, reports it to `on_error`
        and returns None instead of raising.
        """
        try:
            return await self.request(endpoint, config)
        except ApiError as e:
            logger.error(f"Failed to fetch {endpoint}: {e.message}")
            if on_error is not None:
                on_error(e)
            return None
