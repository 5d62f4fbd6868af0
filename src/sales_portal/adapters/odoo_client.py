"""Odoo JSON-RPC client adapter."""

import logging
import time
from dataclasses import dataclass
from typing import Protocol

import httpx

from sales_portal.config import normalize_base_url
from sales_portal.domain.coercion import integer_of, string_of
from sales_portal.domain.models import AuthenticatedSession
from sales_portal.errors import ProtocolError, RemoteError, TransportError

AUTHENTICATE_PATH = "/web/session/authenticate"
CALL_KW_PATH = "/web/dataset/call_kw"
SESSION_COOKIE = "session_id"
SESSION_HEADER = "X-Openerp-Session-Id"

_GENERIC_REMOTE_ERROR = "Remote server reported an error"
_NOT_JSON = object()

_logger = logging.getLogger(__name__)


class OdooClient(Protocol):
    """Interface for Odoo JSON-RPC interactions."""

    async def authenticate(
        self, database: str, login: str, password: str
    ) -> AuthenticatedSession:
        """Log in and return the issued session."""

    async def call_kw(
        self,
        session: AuthenticatedSession,
        model: str,
        method: str,
        args: list[object],
        kwargs: dict[str, object] | None = None,
    ) -> object:
        """Invoke a model method and return the raw ``result`` value."""

    async def close(self) -> None:
        """Release the connection and its cookie jar."""


@dataclass
class HttpxOdooClient(OdooClient):
    """Odoo client implemented with httpx.

    One instance carries one cookie jar, so it is meant to live for a single
    login plus the calls that follow it.
    """

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxOdooClient":
        """Create an Odoo client with a managed httpx session."""
        return cls(
            base_url=normalize_base_url(base_url), http_client=httpx.AsyncClient()
        )

    async def authenticate(
        self, database: str, login: str, password: str
    ) -> AuthenticatedSession:
        """Call ``/web/session/authenticate`` and read the session cookie."""
        payload = _envelope({"db": database, "login": login, "password": password})
        response = await self._post(AUTHENTICATE_PATH, payload)
        result = _unwrap(response, action="authentication", include_body=False)

        uid = integer_of(result.get("uid")) if isinstance(result, dict) else None
        if uid is None:
            raise RemoteError("Authentication rejected: no user id returned")
        # Odoo delivers the token only through Set-Cookie, never in the body.
        token = response.cookies.get(SESSION_COOKIE)
        if not token:
            raise RemoteError("Authentication succeeded but no session token issued")
        _logger.info("Authenticated against %s as uid=%s", self.base_url, uid)
        return AuthenticatedSession(uid=uid, session_token=token)

    async def call_kw(
        self,
        session: AuthenticatedSession,
        model: str,
        method: str,
        args: list[object],
        kwargs: dict[str, object] | None = None,
    ) -> object:
        """Call ``/web/dataset/call_kw`` with the session attached."""
        payload = _envelope(
            {
                "model": model,
                "method": method,
                "args": list(args),
                "kwargs": dict(kwargs or {}),
            }
        )
        headers = {
            "Cookie": f"{SESSION_COOKIE}={session.session_token}",
            SESSION_HEADER: session.session_token,
        }
        _logger.debug("Odoo call_kw: model=%s method=%s", model, method)
        response = await self._post(CALL_KW_PATH, payload, headers=headers)
        return _unwrap(response, action="call_kw", include_body=True)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(
        self,
        path: str,
        payload: dict[str, object],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            return await self.http_client.post(url, json=payload, headers=headers)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"HTTP request to {url} failed: {exc}") from exc


def _envelope(params: dict[str, object]) -> dict[str, object]:
    """Wrap params in a JSON-RPC 2.0 ``call`` request."""
    return {
        "jsonrpc": "2.0",
        "method": "call",
        "params": params,
        "id": time.time_ns() // 1_000_000,
    }


def _unwrap(response: httpx.Response, *, action: str, include_body: bool) -> object:
    """Return the ``result`` of a JSON-RPC response or raise a portal error.

    An ``error`` member wins over the HTTP status, since Odoo sometimes
    reports application errors with a failure status.
    """
    document = _parse_json(response)
    if isinstance(document, dict) and "error" in document:
        raise RemoteError(_error_message(document["error"]))

    if not response.is_success:
        message = (
            f"HTTP error ({action}): {response.status_code} {response.reason_phrase}"
        )
        if include_body:
            message = f"{message} - {response.text}"
        raise TransportError(
            message,
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.text,
        )

    if not isinstance(document, dict) or "result" not in document:
        raise ProtocolError(f"Malformed JSON-RPC response ({action})")
    return document["result"]


def _parse_json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return _NOT_JSON


def _error_message(error: object) -> str:
    """Extract a human-readable message from a JSON-RPC error member."""
    if not isinstance(error, dict):
        return _GENERIC_REMOTE_ERROR
    data = error.get("data")
    if isinstance(data, dict):
        message = string_of(data.get("message"))
        if message:
            return message
    return string_of(error.get("message")) or _GENERIC_REMOTE_ERROR
