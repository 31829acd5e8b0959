"""Option change planner.

Compares the *current* options decoded from the device against the
*desired* options and reports which fields differ.  An empty result means
the device already matches and no statement needs to be staged.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Literal

from napalm_junos_sync.model.interface import InterfacePhysicalOptions
from napalm_junos_sync.model.utm_policy import UtmPolicyOptions
from napalm_junos_sync.utils.normalize import (
    normalize_interface_options,
    normalize_utm_policy_options,
)

ChangeKind = Literal["create", "update", "delete"]


@dataclass
class OptionChange:
    """A single planned entity change.

    Attributes:
        kind: Category of change.
        key: Unique string key (e.g. ``"interface:ge-0/0/1"``).
        details: Per-field ``{"from": ..., "to": ...}`` differences.
    """

    kind: ChangeKind
    key: str
    details: dict[str, Any] = field(default_factory=dict)


def diff_fields(current: Any, desired: Any) -> dict[str, Any]:
    """Return ``{field: {"from": ..., "to": ...}}`` for every differing field.

    Both arguments must be instances of the same (normalized) dataclass.
    Nested dataclasses are rendered as plain dicts.
    """
    diffs: dict[str, Any] = {}
    for f in dataclasses.fields(desired):
        cur = getattr(current, f.name)
        des = getattr(desired, f.name)
        if cur != des:
            diffs[f.name] = {"from": _plain(cur), "to": _plain(des)}
    return diffs


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return list(value)
    return value


def plan_interface_change(
    name: str,
    current: InterfacePhysicalOptions | None,
    desired: InterfacePhysicalOptions,
) -> OptionChange | None:
    """Plan the change moving interface *name* from *current* to *desired*.

    Returns:
        ``None`` when normalized *current* already equals normalized *desired*.
    """
    key = f"interface:{name}"
    des = normalize_interface_options(desired)
    if current is None:
        blank = InterfacePhysicalOptions()
        return OptionChange(kind="create", key=key, details=diff_fields(blank, des))
    details = diff_fields(normalize_interface_options(current), des)
    if not details:
        return None
    return OptionChange(kind="update", key=key, details=details)


def plan_utm_policy_change(
    current: UtmPolicyOptions | None,
    desired: UtmPolicyOptions,
) -> OptionChange | None:
    """Plan the change moving a UTM policy from *current* to *desired*."""
    key = f"utm-policy:{desired.name}"
    des = normalize_utm_policy_options(desired)
    if current is None:
        blank = UtmPolicyOptions(name="")
        return OptionChange(kind="create", key=key, details=diff_fields(blank, des))
    details = diff_fields(normalize_utm_policy_options(current), des)
    if not details:
        return None
    return OptionChange(kind="update", key=key, details=details)
