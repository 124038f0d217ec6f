"""Thin HTTP layer beneath every resource client.

Every call is a fresh round-trip: no cache, no retry, no explicit timeout
beyond the httpx default.
"""
import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

import httpx

from interview_tracker.errors import NotFoundError, TransportError, ValidationError

logger = logging.getLogger(__name__)

_VALIDATION_STATUSES = {400, 409, 422}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_path(path: str, query: Optional[Mapping[str, Any]] = None) -> str:
    """Append non-empty query parameters to path as key=value pairs joined by '&'."""
    if not query:
        return path
    params = [(k, _query_value(v)) for k, v in query.items() if v is not None and v != ""]
    if not params:
        return path
    return f"{path}?{urlencode(params)}"


def _error_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_for(operation: str, response: httpx.Response) -> TransportError:
    body = _error_body(response)
    message = f"HTTP {response.status_code}"
    if isinstance(body, str) and body:
        message += f" ({body[:200]})"
    if response.status_code == 404:
        return NotFoundError(operation, message, response.status_code, body)
    if response.status_code in _VALIDATION_STATUSES:
        return ValidationError(operation, message, response.status_code, body)
    return TransportError(operation, message, response.status_code, body)


class Transport:
    """Issues JSON requests against a fixed base URL."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url + "/",
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        operation: Optional[str],
        body: Any = None,
        send_body: bool = False,
    ) -> httpx.Response:
        operation = operation or f"{method} {path}"
        logger.debug("%s %s/%s", method, self.base_url, path.lstrip("/"))
        try:
            if send_body:
                response = await self._client.request(method, path.lstrip("/"), json=body)
            else:
                response = await self._client.request(method, path.lstrip("/"))
        except httpx.HTTPError as e:
            logger.warning("%s failed: %s", operation, e)
            raise TransportError(operation, f"network error: {e}") from e
        if not response.is_success:
            error = _error_for(operation, response)
            logger.warning("%s", error)
            raise error
        return response

    @staticmethod
    def _decode(response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                operation, "malformed JSON response", response.status_code, response.text
            ) from e

    async def get(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        *,
        operation: Optional[str] = None,
    ) -> Any:
        full_path = build_path(path, query)
        operation = operation or f"GET {full_path}"
        response = await self._send("GET", full_path, operation)
        return self._decode(response, operation)

    async def post(self, path: str, body: Any = None, *, operation: Optional[str] = None) -> Any:
        operation = operation or f"POST {path}"
        response = await self._send(
            "POST", path, operation, {} if body is None else body, send_body=True
        )
        return self._decode(response, operation)

    async def put(self, path: str, body: Any, *, operation: Optional[str] = None) -> None:
        await self._send("PUT", path, operation, body, send_body=True)

    async def delete(self, path: str, *, operation: Optional[str] = None) -> Any:
        operation = operation or f"DELETE {path}"
        response = await self._send("DELETE", path, operation)
        if not response.content:
            return None
        return self._decode(response, operation)
