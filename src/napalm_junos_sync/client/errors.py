"""Custom exceptions for napalm-junos-sync."""

from __future__ import annotations

from dataclasses import dataclass

from napalm_junos_sync.model.statement import ConfigStatement


class JunosSyncError(Exception):
    """Base exception for all napalm-junos-sync errors."""


# ---------------------------------------------------------------------------
# Transport: the device round trip itself failed.  Never retried here.
# ---------------------------------------------------------------------------

class JunosTransportError(JunosSyncError):
    """Raised when a query, edit or commit round trip to the device fails."""


class JunosRequestError(JunosTransportError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class JunosResponseError(JunosTransportError):
    """Raised when the REST API returns a non-2xx HTTP status code."""

    def __init__(self, status_code: int, url: str, body: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"HTTP {status_code} for {url!r}")


class JunosAuthError(JunosResponseError):
    """Raised when the REST API rejects the credentials (HTTP 401)."""


class JunosParseError(JunosTransportError):
    """Raised when an RPC reply cannot be parsed or lacks expected elements."""


@dataclass
class JunosRPCError(JunosTransportError):
    """Raised when the device answers an RPC with an ``<rpc-error>``.

    Attributes:
        message: Text of the ``<error-message>`` element(s).
        rpc: The RPC or CLI command that was rejected.
    """

    message: str
    rpc: str

    def __post_init__(self) -> None:
        super().__init__(f"RPC error for {self.rpc!r}: {self.message}")


# ---------------------------------------------------------------------------
# Conflict / validation / state
# ---------------------------------------------------------------------------

class JunosConflictError(JunosSyncError):
    """Raised when an entity exists (or not) contrary to what the operation needs."""


class JunosValidationError(JunosSyncError):
    """Raised for invalid structured input; fatal to the current operation."""


@dataclass
class JunosDecodeError(JunosValidationError):
    """Raised when a numeric field in a statement cannot be parsed.

    Attributes:
        statement: The offending statement.
        reason: Why the value was rejected.
    """

    statement: ConfigStatement
    reason: str

    def __post_init__(self) -> None:
        super().__init__(
            f"failed to convert value from {self.statement.line!r} to integer: {self.reason}"
        )


@dataclass
class JunosStateError(JunosConflictError):
    """Raised when post-commit verification finds an unexpected device state.

    The commit itself succeeded; the resulting configuration was coerced or
    changed out of band.

    Attributes:
        entity: Name of the verified entity.
        detail: What was expected and what was found.
    """

    entity: str
    detail: str

    def __post_init__(self) -> None:
        super().__init__(f"{self.entity}: {self.detail} after commit => check your config")
