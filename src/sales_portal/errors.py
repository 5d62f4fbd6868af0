"""Error taxonomy for portal and remote-call failures."""


class PortalError(Exception):
    """Base error for every failure surfaced by the portal core."""


class ValidationError(PortalError):
    """Raised when required input is missing before any remote call."""


class TransportError(PortalError):
    """Raised when the remote server answers with a non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str = "",
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class RemoteError(PortalError):
    """Raised when the remote server reports a JSON-RPC error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PortalError):
    """Raised when a required remote record does not exist."""


class ProtocolError(PortalError):
    """Raised when a remote response does not have the expected shape."""
