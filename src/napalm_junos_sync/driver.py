"""Junos sync NAPALM driver: top-level NetworkDriver implementation."""

from __future__ import annotations

import logging
from typing import Any

from napalm.base.base import NetworkDriver

from napalm_junos_sync.client.errors import (
    JunosConflictError,
    JunosStateError,
    JunosSyncError,
    JunosValidationError,
)
from napalm_junos_sync.client.interface_ops import (
    delete_interface_statements,
    delete_option_statements,
    encode_interface_physical,
    park_statements,
    unpark_statements,
    validate_interface_name,
)
from napalm_junos_sync.client.session import JunosCredentials, JunosSession
from napalm_junos_sync.client.transaction import VERIFY_LOCK, ConfigSession, ConfigTransaction
from napalm_junos_sync.client.utm_policy_ops import (
    delete_utm_policy_statements,
    encode_utm_policy,
)
from napalm_junos_sync.model.interface import InterfaceLifecycleState, InterfacePhysicalOptions
from napalm_junos_sync.model.statement import ConfigStatement
from napalm_junos_sync.model.utm_policy import UtmPolicyOptions
from napalm_junos_sync.parser.interface import classify_interface, decode_interface_physical
from napalm_junos_sync.parser.lines import has_foreign_units, is_unit_noise, normalize_output
from napalm_junos_sync.parser.utm_policy import decode_utm_policy
from napalm_junos_sync.utils.aggregated import (
    configured_device_count,
    device_count_changes,
    device_count_on_delete,
    required_device_count,
)
from napalm_junos_sync.utils.option_diff import (
    OptionChange,
    plan_interface_change,
    plan_utm_policy_change,
)
from napalm_junos_sync.utils.render import render_diff, render_statements
from napalm_junos_sync.vendor.junos.commands import (
    AE_DEVICE_COUNT,
    SECURITY_MODEL_PREFIXES,
    SHOW_AE_DEVICES,
    SHOW_INTERFACES,
    show_interface,
    show_utm_policy,
)

logger = logging.getLogger(__name__)

_VENDOR: str = "Juniper"


class JunosSyncDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver synchronizing Junos interfaces and UTM policies.

    Talks to the device through the Junos REST API.  The device's live
    configuration is the only source of truth: every operation re-reads it,
    and nothing is cached between operations.

    Args:
        hostname: IP address or hostname of the device, optionally including
            the URL scheme (e.g. ``https://192.0.2.1``).
        username: Login username.
        password: Login password.
        timeout: Default request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``port`` (int): REST API port (default 3000; 3443 when use_tls=True).
            - ``use_tls`` (bool): Use HTTPS (default ``False``).
            - ``verify_tls`` (bool): Verify TLS certificates (default ``False``).
            - ``group_interface_delete`` (str): apply-group used to park
              interfaces instead of ``disable`` + ``description NC``.
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}

        self._use_tls: bool = bool(self.optional_args.get("use_tls", False))
        self._verify_tls: bool = bool(self.optional_args.get("verify_tls", False))
        self._port: int = int(
            self.optional_args.get(
                "port",
                3443 if self._use_tls else 3000,
            )
        )
        self.group_interface_delete: str = str(
            self.optional_args.get("group_interface_delete", "")
        )
        self._session: ConfigSession | None = None

        logger.debug(
            "JunosSyncDriver initialised: host=%s port=%d user=%s",
            self.hostname,
            self._port,
            self.username,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Create the REST session and check that the device answers.

        Raises:
            JunosAuthError: If the credentials are rejected.
        """
        base_url = self._build_base_url()
        logger.info("Opening connection to %s", base_url)
        creds = JunosCredentials(username=self.username, password=self.password)
        session = JunosSession(
            base_url=base_url,
            credentials=creds,
            timeout_s=float(self.timeout),
            verify_tls=self._verify_tls,
        )
        session.software_information()
        self._session = session

    def close(self) -> None:
        """Close the REST session (best-effort; never raises)."""
        if self._session is not None:
            logger.info("Closing connection to %s", self.hostname)
            try:
                self._session.close()  # type: ignore[attr-defined]
            except Exception:  # noqa: BLE001
                logger.debug("Session close failed (ignored)", exc_info=True)
            finally:
                self._session = None

    def is_alive(self) -> dict[str, bool]:
        """Return liveness status of the REST session."""
        return {"is_alive": self._session is not None}

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def get_facts(self) -> dict[str, Any]:
        """Return general device facts conforming to the NAPALM schema."""
        session = self._require_session()
        info = session.software_information()
        hostname = info["hostname"] or self.hostname
        return {
            "hostname": hostname,
            "fqdn": hostname,
            "vendor": _VENDOR,
            "model": info["model"] or "unknown",
            "serial_number": "",
            "os_version": info["version"],
            "uptime": -1.0,
            "interface_list": [],
        }

    # ------------------------------------------------------------------
    # Physical / aggregated interfaces
    # ------------------------------------------------------------------

    def get_interface_state(self, name: str) -> InterfaceLifecycleState:
        """Return the lifecycle state of interface *name*."""
        validate_interface_name(name)
        session = self._require_session()
        with VERIFY_LOCK:
            return self._interface_state(session, name)

    def read_interface_physical(self, name: str) -> InterfacePhysicalOptions | None:
        """Return the current options of *name*, or ``None`` if it is not managed.

        ``None`` is returned for a parked interface and for a name with no
        configuration that does not exist on the device.
        """
        validate_interface_name(name)
        session = self._require_session()
        with VERIFY_LOCK:
            state = self._interface_state(session, name)
            if state is InterfaceLifecycleState.NOT_CONFIGURED:
                return None
            if state is InterfaceLifecycleState.EMPTY and not session.interface_exists(name):
                return None
            return self._read_interface(session, name)

    def import_interface_physical(self, name: str) -> InterfacePhysicalOptions:
        """Read an existing interface by name for adoption.

        Raises:
            JunosConflictError: If the interface is parked or does not exist.
        """
        validate_interface_name(name)
        session = self._require_session()
        with VERIFY_LOCK:
            state = self._interface_state(session, name)
            if state is InterfaceLifecycleState.NOT_CONFIGURED:
                raise JunosConflictError(f"interface {name!r} is disabled, import is not possible")
            if state is InterfaceLifecycleState.EMPTY and not session.interface_exists(name):
                raise JunosConflictError(f"don't find interface with id {name!r}")
            return self._read_interface(session, name)

    def create_interface_physical(
        self,
        name: str,
        desired: InterfacePhysicalOptions,
        *,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Configure a not-yet-managed interface.

        A parked interface first has its parking markers removed.  For an
        aggregated parent or member, the chassis device count is recomputed
        from the whole interfaces hierarchy.

        Returns:
            A dict with keys ``changed``, ``diff``, ``commands``,
            ``warnings`` and ``current`` (options read back after commit,
            ``None`` in dry-run).

        Raises:
            JunosValidationError: If *desired* cannot be encoded for *name*.
            JunosConflictError: If the interface is already configured.
            JunosStateError: If the commit did not leave the interface present,
                or left the aggregated device count out of step.
        """
        statements = encode_interface_physical(name, desired)
        session = self._require_session()
        change = plan_interface_change(name, None, desired)

        with ConfigTransaction(session, f"create interface {name}", dry_run=dry_run) as tx:
            state = self._interface_state(session, name)
            if state is InterfaceLifecycleState.PRESENT:
                raise JunosConflictError(f"interface {name} already configured")
            if state is InterfaceLifecycleState.NOT_CONFIGURED:
                tx.stage(unpark_statements(name, self.group_interface_delete))
            tx.stage(statements)
            config_text = session.run_query(SHOW_INTERFACES)
            tx.stage(device_count_changes(name, desired.ether802_3ad, None, config_text))

        current = None
        if not dry_run:
            current = self._verify_interface(session, name)
            self._verify_device_count(session, name, tx)
        return self._result(tx, [change] if change else [], current)

    def update_interface_physical(
        self,
        name: str,
        desired: InterfacePhysicalOptions,
        *,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Bring a configured interface to *desired*.

        The managed option containers are deleted and re-applied.  Nothing
        is staged or committed when the device already matches.

        Raises:
            JunosValidationError: If *desired* cannot be encoded for *name*.
            JunosConflictError: If the interface is not configured.
            JunosStateError: If the commit did not leave the interface present.
        """
        statements = encode_interface_physical(name, desired)
        session = self._require_session()

        with ConfigTransaction(session, f"update interface {name}", dry_run=dry_run) as tx:
            lines = self._interface_statements(session, name)
            if classify_interface(lines, self.group_interface_delete) is not (
                InterfaceLifecycleState.PRESENT
            ):
                raise JunosConflictError(f"interface {name} is not configured")
            current = decode_interface_physical(lines)
            change = plan_interface_change(name, current, desired)
            if change is not None:
                tx.stage(delete_option_statements(name))
                tx.stage(statements)
                config_text = session.run_query(SHOW_INTERFACES)
                tx.stage(
                    device_count_changes(
                        name, desired.ether802_3ad, current.ether802_3ad, config_text
                    )
                )

        if change is None:
            logger.info("Interface %s already up to date", name)
            return self._result(tx, [], current)
        after = None
        if not dry_run:
            after = self._verify_interface(session, name)
            self._verify_device_count(session, name, tx)
        return self._result(tx, [change], after)

    def delete_interface_physical(
        self,
        name: str,
        *,
        disable_on_destroy: bool = True,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Remove the configuration of *name*.

        When *disable_on_destroy* is set and the interface still exists on
        the device, it is parked in a second commit.

        Raises:
            JunosConflictError: If the interface still carries logical units
                other than ethernet-switching.
            JunosStateError: If the aggregated device count is out of step
                after commit.
        """
        validate_interface_name(name)
        session = self._require_session()

        with ConfigTransaction(session, f"delete interface {name}", dry_run=dry_run) as tx:
            raw = session.run_query(show_interface(name))
            if has_foreign_units(normalize_output(raw)):
                raise JunosConflictError(
                    f"interface {name} is used for other son unit interface"
                )
            current = decode_interface_physical(normalize_output(raw, drop=is_unit_noise))
            tx.stage(delete_interface_statements(name))
            config_text = session.run_query(SHOW_INTERFACES)
            tx.stage(device_count_on_delete(name, current.ether802_3ad, config_text))

        change = OptionChange(kind="delete", key=f"interface:{name}")
        if not dry_run:
            self._verify_device_count(session, name, tx)
        result = self._result(tx, [change], None)
        if disable_on_destroy and not dry_run and session.interface_exists(name):
            with ConfigTransaction(session, f"disable(NC) interface {name}") as park_tx:
                park_tx.stage(park_statements(name, self.group_interface_delete))
            result["commands"] += render_statements(park_tx.statements)
            result["warnings"] += park_tx.warnings
        return result

    # ------------------------------------------------------------------
    # Security UTM policies
    # ------------------------------------------------------------------

    def read_utm_policy(self, name: str) -> UtmPolicyOptions | None:
        """Return the current UTM policy *name*, or ``None`` if it does not exist."""
        session = self._require_session()
        return self._read_utm_policy(session, name)

    def import_utm_policy(self, name: str) -> UtmPolicyOptions:
        """Read an existing UTM policy by name for adoption.

        Raises:
            JunosConflictError: If the policy does not exist.
        """
        policy = self.read_utm_policy(name)
        if policy is None:
            raise JunosConflictError(f"don't find security utm utm-policy with id {name!r}")
        return policy

    def create_utm_policy(
        self,
        desired: UtmPolicyOptions,
        *,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Create UTM policy *desired.name*.

        Raises:
            JunosValidationError: If the device is not an SRX, or *desired*
                has an empty sub-block.
            JunosConflictError: If the policy already exists.
            JunosStateError: If the policy is missing after commit.
        """
        statements = encode_utm_policy(desired)
        session = self._require_session()
        self._require_security_platform(session)
        change = plan_utm_policy_change(None, desired)

        with ConfigTransaction(
            session, f"create utm-policy {desired.name}", dry_run=dry_run
        ) as tx:
            if self._read_utm_policy(session, desired.name) is not None:
                raise JunosConflictError(
                    f"security utm utm-policy {desired.name} already exists"
                )
            tx.stage(statements)

        current = None
        if not dry_run:
            current = self._read_utm_policy(session, desired.name)
            if current is None:
                raise JunosStateError(
                    entity=desired.name,
                    detail="security utm utm-policy not exists",
                )
        return self._result(tx, [change] if change else [], current)

    def update_utm_policy(
        self,
        desired: UtmPolicyOptions,
        *,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Replace UTM policy *desired.name*; no-op when the device already matches.

        Raises:
            JunosConflictError: If the policy does not exist.
        """
        statements = encode_utm_policy(desired)
        session = self._require_session()

        with ConfigTransaction(
            session, f"update utm-policy {desired.name}", dry_run=dry_run
        ) as tx:
            current = self._read_utm_policy(session, desired.name)
            if current is None:
                raise JunosConflictError(
                    f"security utm utm-policy {desired.name} does not exist"
                )
            change = plan_utm_policy_change(current, desired)
            if change is not None:
                tx.stage(delete_utm_policy_statements(desired.name))
                tx.stage(statements)

        if change is None:
            return self._result(tx, [], current)
        after = None if dry_run else self._read_utm_policy(session, desired.name)
        if not dry_run and after is None:
            raise JunosStateError(
                entity=desired.name,
                detail="security utm utm-policy not exists",
            )
        return self._result(tx, [change], after)

    def delete_utm_policy(self, name: str, *, dry_run: bool = False) -> dict[str, Any]:
        """Delete UTM policy *name*."""
        session = self._require_session()
        with ConfigTransaction(session, f"delete utm-policy {name}", dry_run=dry_run) as tx:
            tx.stage(delete_utm_policy_statements(name))
        change = OptionChange(kind="delete", key=f"utm-policy:{name}")
        return self._result(tx, [change], None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _interface_statements(
        self, session: ConfigSession, name: str
    ) -> list[ConfigStatement]:
        raw = session.run_query(show_interface(name))
        return normalize_output(raw, drop=is_unit_noise)

    def _interface_state(self, session: ConfigSession, name: str) -> InterfaceLifecycleState:
        return classify_interface(
            self._interface_statements(session, name),
            self.group_interface_delete,
        )

    def _read_interface(self, session: ConfigSession, name: str) -> InterfacePhysicalOptions:
        return decode_interface_physical(self._interface_statements(session, name))

    def _verify_interface(self, session: ConfigSession, name: str) -> InterfacePhysicalOptions:
        """Re-read *name* after commit and check that it is present.

        Raises:
            JunosStateError: If the interface is still parked, or has no
                configuration and does not exist.
        """
        with VERIFY_LOCK:
            lines = self._interface_statements(session, name)
            state = classify_interface(lines, self.group_interface_delete)
            if state is InterfaceLifecycleState.NOT_CONFIGURED:
                raise JunosStateError(entity=name, detail="interface always disable")
            if state is InterfaceLifecycleState.EMPTY and not session.interface_exists(name):
                raise JunosStateError(
                    entity=name,
                    detail="interface not exists and config can't found",
                )
            return decode_interface_physical(lines)

    def _verify_device_count(
        self, session: ConfigSession, name: str, tx: ConfigTransaction
    ) -> None:
        """Re-read the aggregated device count after a commit that changed it.

        Raises:
            JunosStateError: If the count is not one more than the highest
                ``ae<N>`` still referenced, or is set while none is.
        """
        if not any(s.startswith(AE_DEVICE_COUNT) for s in tx.statements):
            return
        with VERIFY_LOCK:
            expected = required_device_count(session.run_query(SHOW_INTERFACES))
            actual = configured_device_count(
                normalize_output(session.run_query(SHOW_AE_DEVICES))
            )
        if actual != expected:
            raise JunosStateError(
                entity=name,
                detail=(
                    f"aggregated device-count is {actual or 'unset'}, "
                    f"expected {expected or 'unset'}"
                ),
            )

    def _read_utm_policy(self, session: ConfigSession, name: str) -> UtmPolicyOptions | None:
        raw = session.run_query(show_utm_policy(name))
        return decode_utm_policy(name, normalize_output(raw))

    def _require_security_platform(self, session: ConfigSession) -> None:
        """Raise :exc:`.JunosValidationError` unless the device is an SRX."""
        model = session.software_information()["model"]
        if not model.lower().startswith(SECURITY_MODEL_PREFIXES):
            raise JunosValidationError(
                f"security utm utm-policy not compatible with Junos device {model}"
            )

    @staticmethod
    def _result(
        tx: ConfigTransaction,
        changes: list[OptionChange],
        current: Any,
    ) -> dict[str, Any]:
        return {
            "changed": bool(tx.statements),
            "diff": render_diff(changes),
            "commands": render_statements(tx.statements),
            "warnings": list(tx.warnings),
            "current": current,
        }

    def _build_base_url(self) -> str:
        """Construct the REST API base URL from hostname / port / TLS settings."""
        if "://" in self.hostname:
            return self.hostname.rstrip("/")
        scheme = "https" if self._use_tls else "http"
        return f"{scheme}://{self.hostname}:{self._port}"

    def _require_session(self) -> ConfigSession:
        """Return the active session or raise :exc:`.JunosSyncError`."""
        if self._session is None:
            raise JunosSyncError("Session not open; call open() first.")
        return self._session
