#!/usr/bin/env python3
"""Print the lifecycle state and managed options of interfaces and UTM policies.

Nothing is changed on the device.

Usage::

    JUNOS_HOST=192.0.2.1 python examples/show_interfaces.py ae1 ge-0/0/3
    JUNOS_HOST=192.0.2.1 JUNOS_UTM_POLICY=branch python examples/show_interfaces.py

Environment variables:
    JUNOS_HOST        Device IP or hostname (required).
    JUNOS_USERNAME    Login username (default: admin).
    JUNOS_PASSWORD    Login password (default: admin).
    JUNOS_UTM_POLICY  Also print this UTM policy (SRX only).
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import sys

from napalm_junos_sync.driver import JunosSyncDriver


def _dump(options: object) -> str:
    if options is None:
        return "  (not managed)"
    fields = {
        k: v
        for k, v in dataclasses.asdict(options).items()
        if v is not None and v is not False and v != []
    }
    return "\n".join(f"  {line}" for line in json.dumps(fields, indent=2).splitlines())


def main(names: list[str]) -> int:
    host = os.environ.get("JUNOS_HOST", "")
    if not host:
        print("ERROR: JUNOS_HOST environment variable is required.", file=sys.stderr)
        return 1
    policy = os.environ.get("JUNOS_UTM_POLICY", "")

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    driver = JunosSyncDriver(
        hostname=host,
        username=os.environ.get("JUNOS_USERNAME", "admin"),
        password=os.environ.get("JUNOS_PASSWORD", "admin"),
    )
    try:
        driver.open()
        facts = driver.get_facts()
        print(f"{facts['hostname']} ({facts['model']}, Junos {facts['os_version']})")
        for name in names:
            state = driver.get_interface_state(name)
            print(f"\n{name}: {state.value}")
            print(_dump(driver.read_interface_physical(name)))
        if policy:
            print(f"\nutm-policy {policy}:")
            print(_dump(driver.read_utm_policy(policy)))
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        driver.close()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
