"""Typed models for physical and aggregated interfaces."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class InterfaceLifecycleState(enum.Enum):
    """Lifecycle state of an interface, derived from its configuration text.

    - ``NOT_CONFIGURED``: only the administrative "parked" markers remain.
    - ``EMPTY``: no configuration lines at all for the name.
    - ``PRESENT``: functional configuration exists.
    """

    NOT_CONFIGURED = "not-configured"
    EMPTY = "empty"
    PRESENT = "present"


@dataclass
class EsiOptions:
    """Ethernet Segment Identifier block of an interface.

    Attributes:
        mode: ``"all-active"`` or ``"single-active"``.
        auto_derive_lacp: Derive the identifier from LACP.
        df_election_type: ``"mod"`` or ``"preference"``.
        identifier: 10-octet ESI (``00:11:...:99``).
        source_bmac: Unicast source B-MAC address.
    """

    mode: str | None = None
    auto_derive_lacp: bool = False
    df_election_type: str | None = None
    identifier: str | None = None
    source_bmac: str | None = None


@dataclass
class InterfacePhysicalOptions:
    """Desired or current configuration of one physical / ``ae`` interface.

    Any field left at ``None`` (or ``False`` / empty list) is unset and emits
    no statement.

    Attributes:
        ae_lacp: LACP mode for an aggregated parent (``"active"``/``"passive"``).
        ae_link_speed: Link speed for an aggregated parent (e.g. ``"10g"``).
        ae_minimum_links: Minimum member links for an aggregated parent.
        description: Free-form interface description.
        esi: ESI block, ``None`` when absent.
        ether802_3ad: Aggregated parent this interface is a member of (``"ae3"``).
        trunk: Ethernet-switching trunk mode on unit 0.
        vlan_members: Ethernet-switching VLAN members on unit 0.
        vlan_native: Native VLAN ID (1-4094).
        vlan_tagging: 802.1Q VLAN tagging.
    """

    ae_lacp: str | None = None
    ae_link_speed: str | None = None
    ae_minimum_links: int | None = None
    description: str | None = None
    esi: EsiOptions | None = None
    ether802_3ad: str | None = None
    trunk: bool = False
    vlan_members: list[str] = field(default_factory=list)
    vlan_native: int | None = None
    vlan_tagging: bool = False
