"""Authenticated Junos REST API session.

Implements the narrow command/query interface the synchronization core
depends on: read-only queries, staged edits, and the lock / commit / discard
transaction primitives.

Each REST request is its own management session on the device, so a
configuration lock cannot outlive a single HTTP call.  Edits are therefore
staged client-side and sent in one ``stop-on-error`` batch::

    <lock-configuration/>
    <load-configuration action="set" format="text">
      <configuration-set>set ...</configuration-set>
    </load-configuration>
    <commit-configuration><log>...</log></commit-configuration>
    <unlock-configuration/>

Nothing reaches the candidate configuration before :meth:`JunosSession.commit`,
so discarding is a purely local operation.

The device lock is only held for the duration of the commit batch.  Between
:meth:`JunosSession.lock` and the commit, sessions in this process that
target the same device are serialized by a shared per-device mutex; writers
in other processes are caught by the read-back checks the driver runs after
commit.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from xml.sax.saxutils import unescape

from bs4 import BeautifulSoup
from lxml import etree

from napalm_junos_sync.client.errors import (
    JunosConflictError,
    JunosParseError,
    JunosResponseError,
    JunosRPCError,
    JunosSyncError,
)
from napalm_junos_sync.client.http import JunosHTTP
from napalm_junos_sync.model.statement import ConfigStatement
from napalm_junos_sync.vendor.junos.commands import (
    GET_INTERFACE_INFORMATION,
    GET_SOFTWARE_INFORMATION,
)

logger = logging.getLogger(__name__)

_STOP_ON_ERROR: dict[str, str] = {"stop-on-error": "1"}

# Matches <xnm:warning> whether or not the parser keeps the prefix.
_WARNING_TAG_RE: re.Pattern[str] = re.compile(r"(^|:)warning$")

_ENTITIES: dict[str, str] = {"&quot;": '"', "&apos;": "'"}

# One staging mutex per device URL, shared by every session in the process.
_DEVICE_MUTEXES: dict[str, threading.Lock] = {}
_DEVICE_MUTEXES_GUARD: threading.Lock = threading.Lock()


def _device_mutex(base_url: str) -> threading.Lock:
    with _DEVICE_MUTEXES_GUARD:
        return _DEVICE_MUTEXES.setdefault(base_url, threading.Lock())


@dataclass(frozen=True)
class JunosCredentials:
    """Immutable credential pair for the Junos REST API.

    Args:
        username: Login username.
        password: Login password.
    """

    username: str
    password: str


class JunosSession:
    """Manages configuration reads and staged edits against one device.

    Mutation is serialized per device: :meth:`lock` holds the device mutex
    until :meth:`commit` succeeds or :meth:`discard_pending` is called.

    Args:
        base_url: REST API base URL, e.g. ``http://192.0.2.1:3000``.
        credentials: Username/password pair.
        timeout_s: Request timeout in seconds (default 30).
        verify_tls: Whether to verify TLS certificates (default True).
        lock_timeout_s: How long :meth:`lock` waits for another session on
            the same device (default 60).
    """

    def __init__(
        self,
        base_url: str,
        credentials: JunosCredentials,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
        lock_timeout_s: float = 60.0,
    ) -> None:
        self._http: JunosHTTP = JunosHTTP(
            base_url=base_url,
            username=credentials.username,
            password=credentials.password,
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        self.lock_timeout_s = lock_timeout_s
        self._mutex: threading.Lock = _device_mutex(self._http.base_url)
        self._staged: list[ConfigStatement] | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def run_query(self, command: str) -> str:
        """Run a read-only CLI command and return its raw text output.

        The output keeps its ``<configuration-output>`` framing.

        Raises:
            JunosRPCError: If the device rejects the command.
        """
        body = _serialize(_element("command", command, format="text"))
        text = self.rpc(body, label=command)
        return unescape(text.strip(), _ENTITIES)

    def interface_exists(self, name: str) -> bool:
        """Return ``True`` if *name* exists as a physical or logical device.

        Raises:
            JunosRPCError: For any rpc-error other than "not found".
        """
        request = _element(GET_INTERFACE_INFORMATION)
        request.append(_element("interface-name", name))
        body = _serialize(request)
        try:
            self.rpc(body, label=GET_INTERFACE_INFORMATION)
        except JunosRPCError as exc:
            if "not found" in exc.message:
                return False
            raise
        return True

    def software_information(self) -> dict[str, str]:
        """Return ``hostname``, ``model`` and ``version`` of the device.

        Raises:
            JunosParseError: If the reply lacks a ``<product-model>`` element.
        """
        text = self.rpc(
            _serialize(_element(GET_SOFTWARE_INFORMATION)), label=GET_SOFTWARE_INFORMATION
        )
        soup = BeautifulSoup(text, "lxml")
        model = soup.find("product-model")
        if model is None:
            raise JunosParseError(
                f"No <product-model> in {GET_SOFTWARE_INFORMATION} reply: {text[:200]!r}"
            )
        hostname = soup.find("host-name")
        version = soup.find("junos-version")
        return {
            "hostname": hostname.get_text(strip=True) if hostname is not None else "",
            "model": model.get_text(strip=True),
            "version": version.get_text(strip=True) if version is not None else "",
        }

    # ------------------------------------------------------------------
    # Transaction primitives
    # ------------------------------------------------------------------

    def lock(self) -> None:
        """Acquire the device mutex and open a staging buffer.

        Waits up to :attr:`lock_timeout_s` for another session of this
        process working on the same device, then probes the device-wide
        exclusive lock so that a configuration held by another user fails
        fast, before anything is read or staged.

        Raises:
            JunosConflictError: If another session keeps the device mutex
                past :attr:`lock_timeout_s`.
            JunosRPCError: If the configuration database is locked elsewhere.
        """
        if not self._mutex.acquire(timeout=self.lock_timeout_s):
            raise JunosConflictError(
                f"configuration of {self._http.base_url} is being changed by another session"
            )
        try:
            self.rpc(
                _serialize(_element("lock-configuration"), _element("unlock-configuration")),
                label="lock-configuration",
                params=_STOP_ON_ERROR,
            )
        except Exception:
            self._mutex.release()
            raise
        self._staged = []
        logger.debug("Configuration locked on %s", self._http.base_url)

    def apply_statements(self, statements: list[ConfigStatement]) -> None:
        """Stage *statements* for the next :meth:`commit`.

        Raises:
            JunosSyncError: If :meth:`lock` has not been called.
        """
        if self._staged is None:
            raise JunosSyncError("Configuration not locked; call lock() first.")
        for statement in statements:
            logger.debug("Staged: %s", statement.line)
        self._staged.extend(statements)

    def commit(self, description: str) -> list[str]:
        """Load and commit every staged statement in one batch.

        Args:
            description: Commit log message.

        Returns:
            Warning messages reported by the device.

        Raises:
            JunosSyncError: If :meth:`lock` has not been called.
            JunosRPCError: If load or commit fails; staged edits are kept
                until :meth:`discard_pending` is called.
        """
        if self._staged is None:
            raise JunosSyncError("Configuration not locked; call lock() first.")
        if not self._staged:
            self._release()
            return []
        config_set = "\n".join(s.line for s in self._staged)
        load = _element("load-configuration", action="set", format="text")
        load.append(_element("configuration-set", config_set))
        commit = _element("commit-configuration")
        commit.append(_element("log", description))
        body = _serialize(
            _element("lock-configuration"),
            load,
            commit,
            _element("unlock-configuration"),
        )
        text = self.rpc(body, label="commit-configuration", params=_STOP_ON_ERROR)
        warnings = _rpc_warnings(text)
        logger.info(
            "Committed %d statement(s) on %s: %s",
            len(self._staged),
            self._http.base_url,
            description,
        )
        self._release()
        return warnings

    def discard_pending(self) -> None:
        """Drop staged statements and release the session mutex (never raises)."""
        if self._staged is None:
            return
        if self._staged:
            logger.debug("Discarding %d staged statement(s)", len(self._staged))
        self._release()

    def close(self) -> None:
        """Discard pending edits and close the underlying HTTP session."""
        self.discard_pending()
        self._http.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def rpc(
        self,
        body: str,
        *,
        label: str,
        params: dict[str, str] | None = None,
    ) -> str:
        """POST *body* to ``/rpc`` and return the reply text.

        Raises:
            JunosRPCError: If the reply carries an error-severity rpc-error.
        """
        try:
            text = self._http.post_xml(body, params=params).text
        except JunosResponseError as exc:
            if "rpc-error" in exc.body:
                errors = _rpc_errors(exc.body)
                raise JunosRPCError(message="; ".join(errors) or exc.body[:200], rpc=label) from exc
            raise
        if "rpc-error" in text:
            errors = _rpc_errors(text)
            if errors:
                raise JunosRPCError(message="; ".join(errors), rpc=label)
        return text

    def _release(self) -> None:
        self._staged = None
        self._mutex.release()


def _rpc_errors(text: str) -> list[str]:
    """Messages of every error-severity ``<rpc-error>`` in *text*."""
    soup = BeautifulSoup(text, "lxml")
    messages: list[str] = []
    for err in soup.find_all("rpc-error"):
        severity = err.find("error-severity")
        if severity is not None and severity.get_text(strip=True) == "warning":
            continue
        message = err.find("error-message")
        messages.append(message.get_text(strip=True) if message is not None else "unknown error")
    return messages


def _rpc_warnings(text: str) -> list[str]:
    """Messages of every warning in *text* (``xnm:warning`` or warning rpc-error)."""
    soup = BeautifulSoup(text, "lxml")
    warnings: list[str] = []
    for err in soup.find_all("rpc-error"):
        severity = err.find("error-severity")
        if severity is not None and severity.get_text(strip=True) == "warning":
            message = err.find("error-message")
            if message is not None:
                warnings.append(message.get_text(strip=True))
    for warn in soup.find_all(_WARNING_TAG_RE):
        message = warn.find("message")
        if message is not None:
            warnings.append(message.get_text(strip=True))
    return warnings


def _element(tag: str, text: str | None = None, **attrs: str) -> etree._Element:
    element = etree.Element(tag, **attrs)
    element.text = text
    return element


def _serialize(*elements: etree._Element) -> str:
    """Concatenate *elements* into one RPC request body."""
    return "".join(etree.tostring(e, encoding="unicode") for e in elements)
