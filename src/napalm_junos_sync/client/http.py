"""HTTP transport for the Junos REST API ``/rpc`` endpoint."""

from __future__ import annotations

import importlib.metadata
import logging

import requests

from napalm_junos_sync.client.errors import (
    JunosAuthError,
    JunosRequestError,
    JunosResponseError,
)
from napalm_junos_sync.vendor.junos.commands import RPC

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("napalm-junos-sync")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_HEADERS: dict[str, str] = {
    "User-Agent": f"napalm-junos-sync/{_VERSION}",
    "Accept": "application/xml",
    "Content-Type": "application/xml",
}


def _normalise_base_url(url: str) -> str:
    """Default to plain HTTP and drop any trailing slash."""
    if "://" not in url:
        url = f"http://{url}"
    return url.rstrip("/")


class JunosHTTP:
    """Basic-auth XML client bound to one device's REST API.

    Every call is an independent management session on the device; nothing
    is kept between calls except the pooled TCP connection.

    Args:
        base_url: REST API base URL, e.g. ``http://192.0.2.1:3000``.
        username: Login username.
        password: Login password.
        timeout_s: Per-request timeout in seconds.
        verify_tls: Verify the device certificate over HTTPS.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
    ) -> None:
        self.base_url = _normalise_base_url(base_url)
        self.timeout_s = timeout_s
        self.verify_tls = verify_tls
        self._client = requests.Session()
        self._client.auth = (username, password)
        self._client.headers.update(_HEADERS)

    def post_xml(
        self,
        body: str,
        *,
        path: str = RPC,
        params: dict[str, str] | None = None,
    ) -> requests.Response:
        """POST one or more XML RPC elements.

        Args:
            body: RPC elements, concatenated.
            path: Endpoint below :attr:`base_url` (``/rpc``).
            params: Query-string parameters such as ``stop-on-error``.

        Raises:
            JunosRequestError: Connection failure or timeout.
            JunosAuthError: The device answered 401.
            JunosResponseError: Any other non-2xx answer; the body is kept
                because Junos reports rpc-errors this way.
        """
        url = f"{self.base_url}{path}"
        logger.debug("POST %s params=%s body=%s", url, params, body)
        try:
            resp = self._client.post(
                url,
                data=body.encode("utf-8"),
                params=params,
                timeout=self.timeout_s,
                verify=self.verify_tls,
            )
        except requests.exceptions.RequestException as exc:
            raise JunosRequestError(url, exc) from exc
        if resp.status_code == 401:
            raise JunosAuthError(resp.status_code, url)
        if not resp.ok:
            raise JunosResponseError(resp.status_code, url, resp.text)
        return resp

    def close(self) -> None:
        self._client.close()
