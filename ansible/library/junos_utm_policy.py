#!/usr/bin/python3
# Copyright: (c) 2024, napalm-junos-sync contributors
# SPDX-License-Identifier: Apache-2.0
"""Ansible module: junos_utm_policy, security UTM policies on Junos SRX devices."""

from __future__ import annotations

import dataclasses
from typing import Any

DOCUMENTATION = r"""
---
module: junos_utm_policy
short_description: Manage security UTM policies on Junos SRX devices
description:
  - Idempotent configuration of one C(security utm utm-policy) through the
    Junos REST API.
  - An update replaces the whole policy; nothing is committed when the device
    already matches.
  - Only SRX and vSRX platforms carry the UTM hierarchy.
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
  name:
    description: Policy name.
    required: true
    type: str
  state:
    description: Whether the policy should exist.
    type: str
    choices: [present, absent]
    default: present
  anti_spam_smtp_profile:
    description: Anti-spam SMTP profile.
    type: str
  anti_virus:
    description: Anti-virus profile per protocol.
    type: dict
  content_filtering:
    description: Content-filtering profile per protocol.
    type: dict
  traffic_sessions_per_client:
    description: Session limit per client (C(limit), C(over_limit)).
    type: dict
  web_filtering_profile:
    description: Web-filtering HTTP profile.
    type: str
notes:
  - Run this module on the Ansible controller (C(connection: local)).
  - Protocol profile dicts accept C(ftp_download_profile), C(ftp_upload_profile),
    C(http_profile), C(imap_profile), C(pop3_profile) and C(smtp_profile).
requirements:
  - napalm-junos-sync >= 0.1.0
author:
  - napalm-junos-sync contributors
"""

EXAMPLES = r"""
- name: UTM policy with anti-virus and session limit
  junos_utm_policy:
    host: 192.0.2.1
    username: admin
    password: secret
    name: office
    anti_virus:
      http_profile: junos-av-defaults
    traffic_sessions_per_client:
      limit: 200
      over_limit: log-and-permit
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
policy:
  description: Policy read back after the change, or null.
  type: dict
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule  # noqa: E402

_PROFILES_SPEC = dict(
    ftp_download_profile=dict(type="str"),
    ftp_upload_profile=dict(type="str"),
    http_profile=dict(type="str"),
    imap_profile=dict(type="str"),
    pop3_profile=dict(type="str"),
    smtp_profile=dict(type="str"),
)

_SESSIONS_SPEC = dict(
    limit=dict(type="int"),
    over_limit=dict(type="str", choices=["block", "log-and-permit"]),
)


def _build_desired(p: dict[str, Any]) -> object:
    """Convert module params into a UtmPolicyOptions instance."""
    from napalm_junos_sync.model.utm_policy import (
        SessionsPerClient,
        UtmPolicyOptions,
        UtmProtocolProfiles,
    )

    def profiles(entry: dict[str, Any] | None) -> UtmProtocolProfiles | None:
        return UtmProtocolProfiles(**entry) if entry is not None else None

    spc = p["traffic_sessions_per_client"]
    return UtmPolicyOptions(
        name=p["name"],
        anti_spam_smtp_profile=p["anti_spam_smtp_profile"],
        anti_virus=profiles(p["anti_virus"]),
        content_filtering=profiles(p["content_filtering"]),
        traffic_sessions_per_client=SessionsPerClient(**spc) if spc is not None else None,
        web_filtering_profile=p["web_filtering_profile"],
    )


def run_module() -> None:
    argument_spec = dict(
        host=dict(type="str", required=True),
        username=dict(type="str", required=True),
        password=dict(type="str", required=True, no_log=True),
        port=dict(type="int"),
        use_tls=dict(type="bool", default=False),
        verify_tls=dict(type="bool", default=False),
        name=dict(type="str", required=True),
        state=dict(type="str", choices=["present", "absent"], default="present"),
        anti_spam_smtp_profile=dict(type="str"),
        anti_virus=dict(type="dict", options=_PROFILES_SPEC),
        content_filtering=dict(type="dict", options=_PROFILES_SPEC),
        traffic_sessions_per_client=dict(type="dict", options=_SESSIONS_SPEC),
        web_filtering_profile=dict(type="str"),
    )

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True,
    )

    p = module.params

    optional_args: dict[str, Any] = {
        "use_tls": p["use_tls"],
        "verify_tls": p["verify_tls"],
    }
    if p["port"] is not None:
        optional_args["port"] = p["port"]

    try:
        from napalm_junos_sync.driver import JunosSyncDriver
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
            current = driver.read_utm_policy(p["name"])
            if p["state"] == "absent":
                if current is not None:
                    result = driver.delete_utm_policy(p["name"], dry_run=module.check_mode)
                else:
                    result = dict(
                        changed=False, diff=render_diff([]), commands=[], warnings=[], current=None
                    )
            elif current is not None:
                result = driver.update_utm_policy(desired, dry_run=module.check_mode)
            else:
                result = driver.create_utm_policy(desired, dry_run=module.check_mode)
        finally:
            driver.close()

    except Exception as exc:
        module.fail_json(msg=str(exc))
        return

    policy = result["current"]
    module.exit_json(
        changed=result["changed"],
        diff=result["diff"],
        commands=result["commands"],
        warnings=result["warnings"],
        policy=dataclasses.asdict(policy) if policy is not None else None,
    )


def main() -> None:
    run_module()


if __name__ == "__main__":
    main()
