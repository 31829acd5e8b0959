"""Unit tests for napalm_junos_sync.driver.JunosSyncDriver."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock, patch

import pytest

from napalm_junos_sync.client.errors import (
    JunosConflictError,
    JunosRPCError,
    JunosStateError,
    JunosSyncError,
    JunosValidationError,
)
from napalm_junos_sync.driver import JunosSyncDriver
from napalm_junos_sync.model.interface import (
    InterfaceLifecycleState,
    InterfacePhysicalOptions,
)
from napalm_junos_sync.model.statement import ConfigStatement
from napalm_junos_sync.model.utm_policy import (
    SessionsPerClient,
    UtmPolicyOptions,
    UtmProtocolProfiles,
)
from napalm_junos_sync.parser.lines import EMPTY_OUTPUT
from napalm_junos_sync.vendor.junos.commands import (
    SHOW_AE_DEVICES,
    SHOW_INTERFACES,
    UTM_POLICY,
)

_COUNT = "chassis aggregated-devices ethernet device-count"
_PARKED = [("disable",), ("description", "NC")]

Words = tuple[str, ...]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class FakeJunosSession:
    """In-memory device: applies committed statements to a tiny config tree."""

    def __init__(
        self,
        interfaces: dict[str, list[Words]] | None = None,
        policies: dict[str, list[Words]] | None = None,
        existing: tuple[str, ...] = ("ge-0/0/1", "ge-0/0/2", "ge-0/0/3", "ge-0/0/5"),
        model: str = "srx300",
    ) -> None:
        self.interfaces: dict[str, list[Words]] = interfaces or {}
        self.policies: dict[str, list[Words]] = policies or {}
        self.existing = set(existing)
        self.model = model
        self.device_count: str | None = None
        self.warnings: list[str] = []
        self.after_commit: Callable[[], None] | None = None
        self.commits: list[tuple[str, list[str]]] = []
        self.discards = 0
        self.locks = 0
        self.closed = False
        self._staged: list[ConfigStatement] | None = None

    # -- queries -----------------------------------------------------------

    def run_query(self, command: str) -> str:
        if command == SHOW_INTERFACES:
            return _framed(
                [
                    ConfigStatement("set", (name, *rest)).line
                    for name, lines in self.interfaces.items()
                    for rest in lines
                ]
            )
        if command == SHOW_AE_DEVICES:
            if self.device_count is None:
                return EMPTY_OUTPUT
            return _framed([f"set device-count {self.device_count}"])
        if command.startswith("show configuration interfaces "):
            name = command.split()[3]
            return _framed([ConfigStatement("set", r).line for r in self.interfaces.get(name, [])])
        if command.startswith("show configuration security utm utm-policy "):
            name = command.split('"')[1]
            return _framed([ConfigStatement("set", r).line for r in self.policies.get(name, [])])
        raise AssertionError(f"unexpected query {command!r}")

    def interface_exists(self, name: str) -> bool:
        return name in self.existing or (name.startswith("ae") and name in self.interfaces)

    def software_information(self) -> dict[str, str]:
        return {"hostname": "fw1", "model": self.model, "version": "21.4R3"}

    # -- transaction -------------------------------------------------------

    def lock(self) -> None:
        self.locks += 1
        self._staged = []

    def apply_statements(self, statements: list[ConfigStatement]) -> None:
        assert self._staged is not None, "apply without lock"
        self._staged.extend(statements)

    def commit(self, description: str) -> list[str]:
        assert self._staged is not None, "commit without lock"
        self.commits.append((description, [s.line for s in self._staged]))
        for statement in self._staged:
            self._apply(statement)
        self._staged = None
        if self.after_commit is not None:
            self.after_commit()
        return list(self.warnings)

    def discard_pending(self) -> None:
        if self._staged is not None:
            self.discards += 1
        self._staged = None

    def close(self) -> None:
        self.closed = True

    # -- internals ---------------------------------------------------------

    def _apply(self, statement: ConfigStatement) -> None:
        words = statement.words
        if words[0] == "interfaces":
            _edit(self.interfaces, words[1], words[2:], statement.action)
        elif words[: len(UTM_POLICY)] == UTM_POLICY:
            _edit(self.policies, words[3], words[4:], statement.action)
        elif statement.action == "set":
            self.device_count = words[-1]
        else:
            self.device_count = None


def _edit(tree: dict[str, list[Words]], key: str, rest: Words, action: str) -> None:
    if action == "set":
        lines = tree.setdefault(key, [])
        if rest and rest not in lines:
            lines.append(rest)
    elif key in tree:
        if not rest:
            del tree[key]
        else:
            tree[key] = [line for line in tree[key] if line[: len(rest)] != rest]


def _framed(lines: list[str]) -> str:
    if not lines:
        return EMPTY_OUTPUT
    return "\n".join(["<configuration-output>", *lines, "</configuration-output>"])


def _driver(session: FakeJunosSession, **optional_args: object) -> JunosSyncDriver:
    driver = JunosSyncDriver("192.0.2.1", "admin", "secret", optional_args=optional_args)
    driver._session = session
    return driver


# ---------------------------------------------------------------------------
# Construction / lifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_default_base_url(self) -> None:
        driver = JunosSyncDriver("192.0.2.1", "admin", "secret")
        assert driver._build_base_url() == "http://192.0.2.1:3000"

    def test_tls_base_url(self) -> None:
        driver = JunosSyncDriver("192.0.2.1", "a", "b", optional_args={"use_tls": True})
        assert driver._build_base_url() == "https://192.0.2.1:3443"

    def test_explicit_port(self) -> None:
        driver = JunosSyncDriver("192.0.2.1", "a", "b", optional_args={"port": 8080})
        assert driver._build_base_url() == "http://192.0.2.1:8080"

    def test_hostname_with_scheme(self) -> None:
        driver = JunosSyncDriver("https://fw1.example.net/", "a", "b")
        assert driver._build_base_url() == "https://fw1.example.net"

    def test_open_probes_device(self) -> None:
        with patch("napalm_junos_sync.driver.JunosSession") as session_cls:
            session = MagicMock()
            session_cls.return_value = session
            driver = JunosSyncDriver("192.0.2.1", "admin", "secret", timeout=10)
            driver.open()
        session.software_information.assert_called_once()
        kwargs = session_cls.call_args.kwargs
        assert kwargs["base_url"] == "http://192.0.2.1:3000"
        assert kwargs["timeout_s"] == 10.0
        assert kwargs["verify_tls"] is False
        assert driver.is_alive() == {"is_alive": True}

    def test_close(self) -> None:
        session = FakeJunosSession()
        driver = _driver(session)
        driver.close()
        assert session.closed is True
        assert driver.is_alive() == {"is_alive": False}

    def test_operation_before_open_raises(self) -> None:
        driver = JunosSyncDriver("192.0.2.1", "admin", "secret")
        with pytest.raises(JunosSyncError, match="open"):
            driver.get_facts()

    def test_get_facts(self) -> None:
        facts = _driver(FakeJunosSession()).get_facts()
        assert facts["hostname"] == "fw1"
        assert facts["vendor"] == "Juniper"
        assert facts["model"] == "srx300"
        assert facts["os_version"] == "21.4R3"


# ---------------------------------------------------------------------------
# Interface state and reads
# ---------------------------------------------------------------------------

class TestInterfaceRead:
    def test_states(self) -> None:
        session = FakeJunosSession(
            interfaces={
                "ge-0/0/1": list(_PARKED),
                "ge-0/0/2": [("description", "uplink")],
            }
        )
        driver = _driver(session)
        assert driver.get_interface_state("ge-0/0/1") is InterfaceLifecycleState.NOT_CONFIGURED
        assert driver.get_interface_state("ge-0/0/2") is InterfaceLifecycleState.PRESENT
        assert driver.get_interface_state("ge-0/0/3") is InterfaceLifecycleState.EMPTY

    def test_apply_group_parking(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/1": [("apply-groups", "parked")]})
        driver = _driver(session, group_interface_delete="parked")
        assert driver.get_interface_state("ge-0/0/1") is InterfaceLifecycleState.NOT_CONFIGURED

    def test_read_parked_is_none(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/1": list(_PARKED)})
        assert _driver(session).read_interface_physical("ge-0/0/1") is None

    def test_read_missing_is_none(self) -> None:
        assert _driver(FakeJunosSession()).read_interface_physical("ge-0/0/99") is None

    def test_read_existing_without_config(self) -> None:
        options = _driver(FakeJunosSession()).read_interface_physical("ge-0/0/3")
        assert options == InterfacePhysicalOptions()

    def test_read_ignores_foreign_units(self) -> None:
        session = FakeJunosSession(
            interfaces={
                "ge-0/0/2": [
                    ("description", "uplink"),
                    ("unit", "100", "family", "inet", "address", "192.0.2.1/24"),
                ]
            }
        )
        options = _driver(session).read_interface_physical("ge-0/0/2")
        assert options == InterfacePhysicalOptions(description="uplink")

    def test_read_rejects_dotted_name(self) -> None:
        with pytest.raises(JunosValidationError):
            _driver(FakeJunosSession()).read_interface_physical("ge-0/0/1.0")

    def test_import_parked_rejected(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/1": list(_PARKED)})
        with pytest.raises(JunosConflictError, match="disabled"):
            _driver(session).import_interface_physical("ge-0/0/1")

    def test_import_missing_rejected(self) -> None:
        with pytest.raises(JunosConflictError):
            _driver(FakeJunosSession()).import_interface_physical("ge-0/0/99")

    def test_import_present(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/2": [("ether-options", "802.3ad", "ae3")]})
        options = _driver(session).import_interface_physical("ge-0/0/2")
        assert options.ether802_3ad == "ae3"


# ---------------------------------------------------------------------------
# Interface create
# ---------------------------------------------------------------------------

class TestInterfaceCreate:
    def test_create_plain(self) -> None:
        session = FakeJunosSession()
        desired = InterfacePhysicalOptions(description="to server", vlan_tagging=True)
        result = _driver(session).create_interface_physical("ge-0/0/3", desired)
        assert result["changed"] is True
        assert result["commands"] == [
            "set interfaces ge-0/0/3",
            'set interfaces ge-0/0/3 description "to server"',
            "set interfaces ge-0/0/3 vlan-tagging",
        ]
        assert result["current"] == desired
        assert result["diff"]["total_changes"] == 1
        assert session.commits[0][0] == "create interface ge-0/0/3"
        assert session.device_count is None

    def test_create_on_parked_unparks_first(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/1": list(_PARKED)})
        desired = InterfacePhysicalOptions(description="uplink")
        result = _driver(session).create_interface_physical("ge-0/0/1", desired)
        assert result["commands"][:2] == [
            "delete interfaces ge-0/0/1 description",
            "delete interfaces ge-0/0/1 disable",
        ]
        assert session.interfaces["ge-0/0/1"] == [("description", "uplink")]

    def test_create_on_present_rejected(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/2": [("description", "uplink")]})
        with pytest.raises(JunosConflictError, match="already configured"):
            _driver(session).create_interface_physical("ge-0/0/2", InterfacePhysicalOptions())
        assert session.commits == []
        assert session.discards == 1

    def test_create_aggregated_parent_sets_device_count(self) -> None:
        session = FakeJunosSession()
        desired = InterfacePhysicalOptions(ae_minimum_links=2)
        result = _driver(session).create_interface_physical("ae1", desired)
        assert result["commands"] == [
            "set interfaces ae1",
            "set interfaces ae1 aggregated-ether-options minimum-links 2",
            f"set {_COUNT} 2",
        ]
        assert session.device_count == "2"
        assert result["current"] == desired

    def test_create_member_uses_highest_group(self) -> None:
        session = FakeJunosSession(
            interfaces={
                "ge-0/0/1": [("ether-options", "802.3ad", "ae1")],
                "ge-0/0/2": [("ether-options", "802.3ad", "ae3")],
                "ae7": [("aggregated-ether-options", "lacp", "active")],
            }
        )
        desired = InterfacePhysicalOptions(ether802_3ad="ae3")
        result = _driver(session).create_interface_physical("ge-0/0/5", desired)
        assert result["commands"][-1] == f"set {_COUNT} 8"
        assert session.device_count == "8"

    def test_create_rejects_ae_fields_on_physical(self) -> None:
        session = FakeJunosSession()
        with pytest.raises(JunosValidationError):
            _driver(session).create_interface_physical(
                "ge-0/0/3", InterfacePhysicalOptions(ae_lacp="active")
            )
        assert session.locks == 0

    def test_create_still_parked_after_commit(self) -> None:
        session = FakeJunosSession()

        def repark() -> None:
            session.interfaces["ge-0/0/3"] = list(_PARKED)

        session.after_commit = repark
        with pytest.raises(JunosStateError, match="always disable"):
            _driver(session).create_interface_physical(
                "ge-0/0/3", InterfacePhysicalOptions(description="x")
            )
        assert len(session.commits) == 1

    def test_create_missing_interface_without_config(self) -> None:
        session = FakeJunosSession()
        with pytest.raises(JunosStateError, match="not exists"):
            _driver(session).create_interface_physical("ge-0/0/99", InterfacePhysicalOptions())

    def test_create_dry_run(self) -> None:
        session = FakeJunosSession()
        desired = InterfacePhysicalOptions(description="x")
        result = _driver(session).create_interface_physical("ge-0/0/3", desired, dry_run=True)
        assert session.commits == []
        assert session.discards == 1
        assert result["commands"] == [
            "set interfaces ge-0/0/3",
            "set interfaces ge-0/0/3 description x",
        ]
        assert result["current"] is None

    def test_commit_warnings_reported(self) -> None:
        session = FakeJunosSession()
        session.warnings = ["statement has no effect"]
        result = _driver(session).create_interface_physical(
            "ge-0/0/3", InterfacePhysicalOptions(description="x")
        )
        assert result["warnings"] == ["statement has no effect"]

    def test_lock_failure_propagates(self) -> None:
        session = FakeJunosSession()
        session.lock = MagicMock(side_effect=JunosRPCError(message="locked", rpc="lock"))
        with pytest.raises(JunosRPCError):
            _driver(session).create_interface_physical(
                "ge-0/0/3", InterfacePhysicalOptions(description="x")
            )
        assert session.commits == []


# ---------------------------------------------------------------------------
# Interface update
# ---------------------------------------------------------------------------

class TestInterfaceUpdate:
    def test_no_change_no_commit(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/2": [("description", "uplink")]})
        result = _driver(session).update_interface_physical(
            "ge-0/0/2", InterfacePhysicalOptions(description="uplink")
        )
        assert result["changed"] is False
        assert result["commands"] == []
        assert result["diff"]["total_changes"] == 0
        assert session.commits == []

    def test_unbind_last_member_removes_device_count(self) -> None:
        session = FakeJunosSession(
            interfaces={"ge-0/0/2": [("ether-options", "802.3ad", "ae3")]}
        )
        session.device_count = "4"
        desired = InterfacePhysicalOptions(description="spare")
        result = _driver(session).update_interface_physical("ge-0/0/2", desired)
        commands = result["commands"]
        assert "delete interfaces ge-0/0/2 ether-options 802.3ad" in commands
        assert "delete interfaces ge-0/0/2 description" in commands
        assert commands[-1] == f"delete {_COUNT}"
        assert commands.index("set interfaces ge-0/0/2 description spare") > commands.index(
            "delete interfaces ge-0/0/2 description"
        )
        assert session.interfaces["ge-0/0/2"] == [("description", "spare")]
        assert session.device_count is None
        assert result["current"] == desired
        assert result["diff"]["changes"][0]["details"]["ether802_3ad"] == {
            "from": "ae3",
            "to": None,
        }

    def test_update_not_configured_rejected(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/1": list(_PARKED)})
        with pytest.raises(JunosConflictError):
            _driver(session).update_interface_physical(
                "ge-0/0/1", InterfacePhysicalOptions(description="x")
            )
        assert session.commits == []


# ---------------------------------------------------------------------------
# Interface delete
# ---------------------------------------------------------------------------

class TestInterfaceDelete:
    def test_delete_last_member_then_park(self) -> None:
        session = FakeJunosSession(
            interfaces={"ge-0/0/2": [("ether-options", "802.3ad", "ae3")]}
        )
        session.device_count = "4"
        result = _driver(session).delete_interface_physical("ge-0/0/2")
        assert [description for description, _ in session.commits] == [
            "delete interface ge-0/0/2",
            "disable(NC) interface ge-0/0/2",
        ]
        assert result["commands"] == [
            "delete interfaces ge-0/0/2",
            f"delete {_COUNT}",
            "set interfaces ge-0/0/2 disable",
            "set interfaces ge-0/0/2 description NC",
        ]
        assert session.device_count is None
        assert session.interfaces["ge-0/0/2"] == _PARKED
        driver = _driver(session)
        assert driver.get_interface_state("ge-0/0/2") is InterfaceLifecycleState.NOT_CONFIGURED

    def test_delete_without_parking(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/2": [("description", "x")]})
        _driver(session).delete_interface_physical("ge-0/0/2", disable_on_destroy=False)
        assert len(session.commits) == 1
        assert "ge-0/0/2" not in session.interfaces

    def test_delete_parks_with_apply_group(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/2": [("description", "x")]})
        _driver(session, group_interface_delete="parked").delete_interface_physical("ge-0/0/2")
        assert session.interfaces["ge-0/0/2"] == [("apply-groups", "parked")]

    def test_delete_aggregated_parent_not_parked(self) -> None:
        session = FakeJunosSession(
            interfaces={
                "ae7": [("aggregated-ether-options", "lacp", "active")],
                "ge-0/0/1": [("ether-options", "802.3ad", "ae1")],
            }
        )
        result = _driver(session).delete_interface_physical("ae7")
        assert result["commands"] == ["delete interfaces ae7", f"set {_COUNT} 2"]
        assert len(session.commits) == 1

    def test_delete_with_foreign_units_rejected(self) -> None:
        inet = ("unit", "100", "family", "inet", "address", "192.0.2.1/24")
        session = FakeJunosSession(interfaces={"ge-0/0/3": [inet]})
        with pytest.raises(JunosConflictError, match="unit"):
            _driver(session).delete_interface_physical("ge-0/0/3")
        assert session.commits == []
        assert session.discards == 1

    def test_delete_dry_run(self) -> None:
        session = FakeJunosSession(interfaces={"ge-0/0/2": [("description", "x")]})
        result = _driver(session).delete_interface_physical("ge-0/0/2", dry_run=True)
        assert session.commits == []
        assert result["commands"] == ["delete interfaces ge-0/0/2"]


# ---------------------------------------------------------------------------
# Aggregated device count read back after commit
# ---------------------------------------------------------------------------

class TestDeviceCountVerification:
    def test_concurrent_higher_group_detected(self) -> None:
        session = FakeJunosSession(
            interfaces={"ge-0/0/2": [("ether-options", "802.3ad", "ae3")]}
        )

        def other_writer() -> None:
            session.interfaces["ge-0/0/9"] = [("ether-options", "802.3ad", "ae9")]

        session.after_commit = other_writer
        with pytest.raises(JunosStateError, match="device-count is 4, expected 10"):
            _driver(session).create_interface_physical(
                "ge-0/0/5", InterfacePhysicalOptions(ether802_3ad="ae1")
            )
        assert len(session.commits) == 1

    def test_stale_count_after_last_member_delete_detected(self) -> None:
        session = FakeJunosSession(
            interfaces={"ge-0/0/2": [("ether-options", "802.3ad", "ae3")]}
        )
        session.device_count = "4"

        def restore_count() -> None:
            session.device_count = "4"

        session.after_commit = restore_count
        with pytest.raises(JunosStateError, match="expected unset"):
            _driver(session).delete_interface_physical("ge-0/0/2")
        assert [description for description, _ in session.commits] == [
            "delete interface ge-0/0/2",
        ]

    def test_update_rebinding_checks_count(self) -> None:
        session = FakeJunosSession(
            interfaces={
                "ge-0/0/1": [("ether-options", "802.3ad", "ae3")],
                "ge-0/0/2": [("ether-options", "802.3ad", "ae3")],
            }
        )
        session.device_count = "4"
        result = _driver(session).update_interface_physical(
            "ge-0/0/2", InterfacePhysicalOptions(ether802_3ad="ae5")
        )
        assert result["commands"][-1] == f"set {_COUNT} 6"
        assert session.device_count == "6"

    def test_no_check_without_device_count_change(self) -> None:
        session = FakeJunosSession()
        session.device_count = "12"
        _driver(session).create_interface_physical(
            "ge-0/0/3", InterfacePhysicalOptions(description="x")
        )
        assert session.device_count == "12"


# ---------------------------------------------------------------------------
# UTM policies
# ---------------------------------------------------------------------------

class TestUtmPolicy:
    def test_create(self) -> None:
        session = FakeJunosSession()
        desired = UtmPolicyOptions(
            name="p1",
            anti_virus=UtmProtocolProfiles(http_profile="av1"),
            traffic_sessions_per_client=SessionsPerClient(limit=0, over_limit="block"),
        )
        result = _driver(session).create_utm_policy(desired)
        assert result["commands"] == [
            "set security utm utm-policy p1 anti-virus http-profile av1",
            "set security utm utm-policy p1 traffic-options sessions-per-client limit 0",
            "set security utm utm-policy p1 traffic-options sessions-per-client over-limit block",
        ]
        assert result["current"] == desired

    def test_create_requires_security_platform(self) -> None:
        session = FakeJunosSession(model="ex4300-48t")
        with pytest.raises(JunosValidationError, match="not compatible"):
            _driver(session).create_utm_policy(
                UtmPolicyOptions(name="p1", web_filtering_profile="wf1")
            )
        assert session.locks == 0

    def test_create_on_vsrx(self) -> None:
        session = FakeJunosSession(model="VSRX")
        _driver(session).create_utm_policy(UtmPolicyOptions(name="p1", web_filtering_profile="w"))
        assert session.policies["p1"] == [("web-filtering", "http-profile", "w")]

    def test_create_existing_rejected(self) -> None:
        session = FakeJunosSession(policies={"p1": [("web-filtering", "http-profile", "w")]})
        with pytest.raises(JunosConflictError):
            _driver(session).create_utm_policy(
                UtmPolicyOptions(name="p1", web_filtering_profile="w")
            )

    def test_create_empty_policy_not_present_after_commit(self) -> None:
        session = FakeJunosSession()
        with pytest.raises(JunosStateError):
            _driver(session).create_utm_policy(UtmPolicyOptions(name="p1"))

    def test_read_and_import(self) -> None:
        session = FakeJunosSession(policies={"p1": [("anti-spam", "smtp-profile", "as1")]})
        driver = _driver(session)
        assert driver.read_utm_policy("p1") == UtmPolicyOptions(
            name="p1", anti_spam_smtp_profile="as1"
        )
        assert driver.read_utm_policy("p2") is None
        assert driver.import_utm_policy("p1").anti_spam_smtp_profile == "as1"
        with pytest.raises(JunosConflictError):
            driver.import_utm_policy("p2")

    def test_update_replaces_policy(self) -> None:
        session = FakeJunosSession(
            policies={
                "p1": [
                    ("anti-virus", "http-profile", "av1"),
                    ("web-filtering", "http-profile", "w"),
                ]
            }
        )
        desired = UtmPolicyOptions(name="p1", web_filtering_profile="w2")
        result = _driver(session).update_utm_policy(desired)
        assert result["commands"] == [
            "delete security utm utm-policy p1",
            "set security utm utm-policy p1 web-filtering http-profile w2",
        ]
        assert session.policies["p1"] == [("web-filtering", "http-profile", "w2")]
        assert result["current"] == desired

    def test_update_no_change(self) -> None:
        session = FakeJunosSession(policies={"p1": [("web-filtering", "http-profile", "w")]})
        result = _driver(session).update_utm_policy(
            UtmPolicyOptions(name="p1", web_filtering_profile="w")
        )
        assert result["changed"] is False
        assert session.commits == []

    def test_update_missing_rejected(self) -> None:
        with pytest.raises(JunosConflictError):
            _driver(FakeJunosSession()).update_utm_policy(
                UtmPolicyOptions(name="p1", web_filtering_profile="w")
            )

    def test_delete(self) -> None:
        session = FakeJunosSession(policies={"p1": [("web-filtering", "http-profile", "w")]})
        result = _driver(session).delete_utm_policy("p1")
        assert result["commands"] == ["delete security utm utm-policy p1"]
        assert "p1" not in session.policies
