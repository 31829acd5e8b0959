"""Statement builders for ``interfaces <name>``.

Each function translates a strongly-typed request into the exact ordered
list of configuration statements staged on the device.  Nothing here talks
to the device; the driver stages the result inside a
:class:`~napalm_junos_sync.client.transaction.ConfigTransaction`.

Example (aggregated parent ``ae1`` with two minimum links)::

    set interfaces ae1
    set interfaces ae1 aggregated-ether-options minimum-links 2

Example (member of ``ae1``)::

    set interfaces ge-0/0/3
    set interfaces ge-0/0/3 ether-options 802.3ad ae1
    set interfaces ge-0/0/3 gigether-options 802.3ad ae1
"""

from __future__ import annotations

import logging

from napalm_junos_sync.client.errors import JunosValidationError
from napalm_junos_sync.model.interface import EsiOptions, InterfacePhysicalOptions
from napalm_junos_sync.model.statement import (
    ConfigStatement,
    delete_statement,
    set_statement,
)
from napalm_junos_sync.utils.fields import encode_fields
from napalm_junos_sync.utils.normalize import normalize_esi, normalize_interface_options
from napalm_junos_sync.vendor.junos.commands import INTERFACES
from napalm_junos_sync.vendor.junos.mappings import (
    AE_PARENT_FIELDS,
    APPLY_GROUPS,
    DESCRIPTION,
    DISABLE,
    ESI,
    ETHER_802_3AD,
    INTERFACE_FIELDS,
    INTERFACE_OPTION_CONTAINERS,
    INTERFACE_SWITCHING_FIELDS,
    PARK_DESCRIPTION,
)

logger = logging.getLogger(__name__)


def is_aggregated(name: str) -> bool:
    """Return ``True`` for aggregated parent names (``ae<N>``)."""
    return name.startswith("ae")


def validate_interface_name(name: str) -> None:
    """Reject logical unit names such as ``ge-0/0/0.0``.

    Raises:
        JunosValidationError: If *name* is empty or contains a dot.
    """
    if not name:
        raise JunosValidationError("interface name is empty")
    if "." in name:
        raise JunosValidationError(f"interface name {name!r} cannot have a dot")


def encode_interface_physical(
    name: str,
    desired: InterfacePhysicalOptions,
) -> list[ConfigStatement]:
    """Build the ``set`` statements for *desired* on interface *name*.

    The aggregated device count is not part of the result; it depends on the
    whole device configuration and is computed by
    :mod:`napalm_junos_sync.utils.aggregated`.

    Args:
        name: Interface name (``ge-0/0/1``, ``ae3`` ...).
        desired: Desired options.

    Returns:
        Ordered statements, starting with the bare ``set interfaces <name>``.

    Raises:
        JunosValidationError: On a dotted name, an ``esi`` block without
            content, aggregation-only attributes on a non-``ae`` name, or an
            802.3ad binding on an ``ae`` name.
    """
    validate_interface_name(name)
    if desired.esi is not None and normalize_esi(desired.esi) is None:
        raise JunosValidationError("esi block is empty")

    opts = normalize_interface_options(desired)
    aggregated = is_aggregated(name)
    if not aggregated:
        for fp in AE_PARENT_FIELDS:
            if getattr(opts, fp.name) is not None:
                raise JunosValidationError(f"{fp.name} invalid for this interface")
    elif opts.ether802_3ad is not None:
        raise JunosValidationError("ether802_3ad invalid for an aggregated interface")

    prefix = (*INTERFACES, name)
    statements: list[ConfigStatement] = [set_statement(*prefix)]
    statements += encode_fields(prefix, INTERFACE_FIELDS, opts)
    statements += _encode_esi(prefix, opts.esi)
    if opts.ether802_3ad is not None:
        for path in ETHER_802_3AD:
            statements.append(set_statement(*prefix, *path, opts.ether802_3ad))
    statements += encode_fields(prefix, INTERFACE_SWITCHING_FIELDS, opts)
    logger.debug("Encoded %d statement(s) for interface %s", len(statements), name)
    return statements


def _encode_esi(prefix: tuple[str, ...], esi: EsiOptions | None) -> list[ConfigStatement]:
    if esi is None:
        return []
    esi_prefix = (*prefix, *ESI)
    statements: list[ConfigStatement] = []
    if esi.mode is not None:
        statements.append(set_statement(*esi_prefix, esi.mode))
    if esi.auto_derive_lacp:
        statements.append(set_statement(*esi_prefix, "auto-derive", "lacp"))
    if esi.df_election_type is not None:
        statements.append(set_statement(*esi_prefix, "df-election-type", esi.df_election_type))
    if esi.identifier is not None:
        statements.append(set_statement(*esi_prefix, esi.identifier))
    if esi.source_bmac is not None:
        statements.append(set_statement(*esi_prefix, "source-bmac", esi.source_bmac))
    return statements


def delete_option_statements(name: str) -> list[ConfigStatement]:
    """Statements clearing every managed option container of *name*."""
    prefix = (*INTERFACES, name)
    return [delete_statement(*prefix, *container) for container in INTERFACE_OPTION_CONTAINERS]


def delete_interface_statements(name: str) -> list[ConfigStatement]:
    return [delete_statement(*INTERFACES, name)]


def park_statements(name: str, group_interface_delete: str = "") -> list[ConfigStatement]:
    """Statements that leave *name* administratively parked (NotConfigured)."""
    prefix = (*INTERFACES, name)
    if group_interface_delete:
        return [set_statement(*prefix, *APPLY_GROUPS, group_interface_delete)]
    return [
        set_statement(*prefix, *DISABLE),
        set_statement(*prefix, *DESCRIPTION, PARK_DESCRIPTION),
    ]


def unpark_statements(name: str, group_interface_delete: str = "") -> list[ConfigStatement]:
    """Statements removing the parked markers before new configuration is applied."""
    prefix = (*INTERFACES, name)
    statements: list[ConfigStatement] = []
    if group_interface_delete:
        statements.append(delete_statement(*prefix, *APPLY_GROUPS, group_interface_delete))
    statements.append(delete_statement(*prefix, *DESCRIPTION))
    statements.append(delete_statement(*prefix, *DISABLE))
    return statements
