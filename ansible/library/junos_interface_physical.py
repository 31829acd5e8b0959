#!/usr/bin/python3
# Copyright: (c) 2024, napalm-junos-sync contributors
# SPDX-License-Identifier: Apache-2.0
"""Ansible module: junos_interface_physical, physical and aggregated Junos interfaces."""

from __future__ import annotations

import dataclasses
from typing import Any

DOCUMENTATION = r"""
---
module: junos_interface_physical
short_description: Manage physical and aggregated interfaces on Junos devices
description:
  - Idempotent configuration of one physical (C(ge-), C(xe-) ...) or aggregated
    (C(aeN)) interface through the Junos REST API.
  - Keeps C(chassis aggregated-devices ethernet device-count) in step with the
    aggregated groups referenced on the device.
  - Removing an interface leaves it parked (C(disable) + C(description NC), or
    the apply-group named by I(group_interface_delete)) unless
    I(disable_on_destroy=false).
  - Supports Ansible check mode (dry-run) natively.
options:
  host:
    description: IP address or hostname of the device.
    required: true
    type: str
  username:
    description: Login username.
    required: true
    type: str
  password:
    description: Login password.
    required: true
    type: str
    no_log: true
  port:
    description: REST API port override. Defaults to 3000 (or 3443 when use_tls=true).
    type: int
  use_tls:
    description: Connect to the REST API over HTTPS.
    type: bool
    default: false
  verify_tls:
    description: Verify TLS certificates when connecting over HTTPS.
    type: bool
    default: false
  group_interface_delete:
    description: Apply-group used to park interfaces instead of C(disable) + C(description NC).
    type: str
    default: ""
  name:
    description: Interface name, without unit (C(ge-0/0/3), C(ae1)).
    required: true
    type: str
  state:
    description: Whether the interface should be configured or removed.
    type: str
    choices: [present, absent]
    default: present
  disable_on_destroy:
    description: Park the interface after removing its configuration.
    type: bool
    default: true
  ae_lacp:
    description: LACP mode of an aggregated parent.
    type: str
  ae_link_speed:
    description: Link speed of an aggregated parent.
    type: str
  ae_minimum_links:
    description: Minimum member links of an aggregated parent.
    type: int
  description:
    description: Interface description.
    type: str
  esi:
    description: Ethernet Segment Identifier block.
    type: dict
    suboptions:
      mode:
        type: str
        choices: [all-active, single-active]
      auto_derive_lacp:
        type: bool
        default: false
      df_election_type:
        type: str
        choices: [mod, preference]
      identifier:
        type: str
      source_bmac:
        type: str
  ether802_3ad:
    description: Aggregated parent this interface is a member of (C(ae3)).
    type: str
  trunk:
    description: Ethernet-switching trunk mode on unit 0.
    type: bool
    default: false
  vlan_members:
    description: Ethernet-switching VLAN members on unit 0.
    type: list
    elements: str
  vlan_native:
    description: Native VLAN ID.
    type: int
  vlan_tagging:
    description: Enable 802.1Q VLAN tagging.
    type: bool
    default: false
notes:
  - Run this module on the Ansible controller (C(connection: local)).
  - napalm-junos-sync must be installed in the Python environment used by Ansible.
requirements:
  - napalm-junos-sync >= 0.1.0
author:
  - napalm-junos-sync contributors
"""

EXAMPLES = r"""
- name: Aggregated parent with two minimum links
  junos_interface_physical:
    host: 192.0.2.1
    username: admin
    password: secret
    name: ae1
    ae_lacp: active
    ae_minimum_links: 2

- name: Member of ae1
  junos_interface_physical:
    host: 192.0.2.1
    username: admin
    password: secret
    name: ge-0/0/3
    description: to core-1
    ether802_3ad: ae1

- name: Release an access port
  junos_interface_physical:
    host: 192.0.2.1
    username: admin
    password: secret
    name: ge-0/0/4
    state: absent
"""

RETURN = r"""
changed:
  description: Whether any configuration change was made (or would be in check mode).
  type: bool
  returned: always
diff:
  description: Structured diff with C(total_changes) and C(changes) list.
  type: dict
  returned: always
commands:
  description: Configuration statements committed (or staged in check mode).
  type: list
  elements: str
  returned: always
warnings:
  description: Warnings reported by the device on commit.
  type: list
  elements: str
  returned: always
interface:
  description: Interface options read back after the change, or null.
  type: dict
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule  # noqa: E402

_ESI_SPEC = dict(
    mode=dict(type="str", choices=["all-active", "single-active"]),
    auto_derive_lacp=dict(type="bool", default=False),
    df_election_type=dict(type="str", choices=["mod", "preference"]),
    identifier=dict(type="str"),
    source_bmac=dict(type="str"),
)


def _build_desired(p: dict[str, Any]) -> object:
    """Convert module params into an InterfacePhysicalOptions instance."""
    from napalm_junos_sync.model.interface import EsiOptions, InterfacePhysicalOptions

    esi = EsiOptions(**p["esi"]) if p["esi"] is not None else None
    return InterfacePhysicalOptions(
        ae_lacp=p["ae_lacp"],
        ae_link_speed=p["ae_link_speed"],
        ae_minimum_links=p["ae_minimum_links"],
        description=p["description"],
        esi=esi,
        ether802_3ad=p["ether802_3ad"],
        trunk=p["trunk"],
        vlan_members=list(p["vlan_members"] or []),
        vlan_native=p["vlan_native"],
        vlan_tagging=p["vlan_tagging"],
    )


def run_module() -> None:
    argument_spec = dict(
        host=dict(type="str", required=True),
        username=dict(type="str", required=True),
        password=dict(type="str", required=True, no_log=True),
        port=dict(type="int"),
        use_tls=dict(type="bool", default=False),
        verify_tls=dict(type="bool", default=False),
        group_interface_delete=dict(type="str", default=""),
        name=dict(type="str", required=True),
        state=dict(type="str", choices=["present", "absent"], default="present"),
        disable_on_destroy=dict(type="bool", default=True),
        ae_lacp=dict(type="str"),
        ae_link_speed=dict(type="str"),
        ae_minimum_links=dict(type="int"),
        description=dict(type="str"),
        esi=dict(type="dict", options=_ESI_SPEC),
        ether802_3ad=dict(type="str"),
        trunk=dict(type="bool", default=False),
        vlan_members=dict(type="list", elements="str"),
        vlan_native=dict(type="int"),
        vlan_tagging=dict(type="bool", default=False),
    )

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True,
    )

    p = module.params

    optional_args: dict[str, Any] = {
        "use_tls": p["use_tls"],
        "verify_tls": p["verify_tls"],
        "group_interface_delete": p["group_interface_delete"],
    }
    if p["port"] is not None:
        optional_args["port"] = p["port"]

    try:
        from napalm_junos_sync.driver import JunosSyncDriver
        from napalm_junos_sync.model.interface import InterfaceLifecycleState
        from napalm_junos_sync.utils.render import render_diff

        desired = _build_desired(p)

        driver = JunosSyncDriver(
            hostname=p["host"],
            username=p["username"],
            password=p["password"],
            optional_args=optional_args,
        )
        driver.open()
        try:
            name = p["name"]
            present = driver.get_interface_state(name) is InterfaceLifecycleState.PRESENT
            if p["state"] == "absent":
                if present:
                    result = driver.delete_interface_physical(
                        name,
                        disable_on_destroy=p["disable_on_destroy"],
                        dry_run=module.check_mode,
                    )
                else:
                    result = dict(
                        changed=False, diff=render_diff([]), commands=[], warnings=[], current=None
                    )
            elif present:
                result = driver.update_interface_physical(
                    name, desired, dry_run=module.check_mode
                )
            else:
                result = driver.create_interface_physical(
                    name, desired, dry_run=module.check_mode
                )
        finally:
            driver.close()

    except Exception as exc:
        module.fail_json(msg=str(exc))
        return

    current = result["current"]
    module.exit_json(
        changed=result["changed"],
        diff=result["diff"],
        commands=result["commands"],
        warnings=result["warnings"],
        interface=dataclasses.asdict(current) if current is not None else None,
    )


def main() -> None:
    run_module()


if __name__ == "__main__":
    main()
