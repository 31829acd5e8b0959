#!/usr/bin/env python3
"""Example: bind an access port to an aggregated group on a Junos device.

The aggregated parent ``ae1`` and member ``ge-0/0/3`` are created when not yet
configured, or brought in line when they already are.  The chassis
``device-count`` follows automatically.

Usage (dry run, default):

    JUNOS_HOST=192.0.2.1 python examples/apply_interface.py

Usage (live apply):

    APPLY=1 JUNOS_HOST=192.0.2.1 python examples/apply_interface.py

Environment variables:
    JUNOS_HOST        Device IP or hostname (required).
    JUNOS_USERNAME    Login username (default: admin).
    JUNOS_PASSWORD    Login password (default: admin).
    APPLY             Set to "1" to actually commit changes (default: dry-run).
"""

from __future__ import annotations

import logging
import os
import sys

from napalm_junos_sync.driver import JunosSyncDriver
from napalm_junos_sync.model.interface import InterfaceLifecycleState, InterfacePhysicalOptions

# ---------------------------------------------------------------------------
# Desired interfaces, parents first.
# ---------------------------------------------------------------------------
DESIRED: dict[str, InterfacePhysicalOptions] = {
    "ae1": InterfacePhysicalOptions(ae_lacp="active", ae_minimum_links=1),
    "ge-0/0/3": InterfacePhysicalOptions(description="to core-1", ether802_3ad="ae1"),
}

# ---------------------------------------------------------------------------
# Read configuration from environment
# ---------------------------------------------------------------------------
host = os.environ.get("JUNOS_HOST", "")
if not host:
    print("ERROR: JUNOS_HOST environment variable is required.", file=sys.stderr)
    sys.exit(1)

username = os.environ.get("JUNOS_USERNAME", "admin")
password = os.environ.get("JUNOS_PASSWORD", "admin")
apply_changes = os.environ.get("APPLY", "0") == "1"

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

print(f"Target device : {host}")
print(f"Apply changes : {apply_changes}")
print()

driver = JunosSyncDriver(hostname=host, username=username, password=password)

try:
    driver.open()
    for name, desired in DESIRED.items():
        state = driver.get_interface_state(name)
        if state is InterfaceLifecycleState.PRESENT:
            result = driver.update_interface_physical(name, desired, dry_run=not apply_changes)
        else:
            result = driver.create_interface_physical(name, desired, dry_run=not apply_changes)
        print(f"=== {name} ({state.value}) ===")
        for command in result["commands"]:
            print(f"  {command}")
        for warning in result["warnings"]:
            print(f"  warning: {warning}")
        print()

    if not apply_changes:
        print("Dry-run only -- set APPLY=1 to commit changes.")

except Exception as exc:  # noqa: BLE001
    print(f"ERROR: {exc}", file=sys.stderr)
    sys.exit(1)
finally:
    driver.close()
