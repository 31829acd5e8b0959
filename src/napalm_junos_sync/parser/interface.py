"""Decoder and lifecycle classifier for ``interfaces <name>`` statements."""

from __future__ import annotations

import re

from napalm_junos_sync.model.interface import (
    EsiOptions,
    InterfaceLifecycleState,
    InterfacePhysicalOptions,
)
from napalm_junos_sync.model.statement import ConfigStatement
from napalm_junos_sync.utils.fields import apply_field, match_field
from napalm_junos_sync.vendor.junos.mappings import (
    APPLY_GROUPS,
    DESCRIPTION,
    DISABLE,
    ESI,
    ESI_MODES,
    ETHER_802_3AD,
    INTERFACE_FIELDS,
    INTERFACE_SWITCHING_FIELDS,
    PARK_DESCRIPTION,
)

# Matches a 10-octet ESI value (e.g. "00:11:22:33:44:55:66:77:88:99").
_ESI_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^([\da-zA-Z]{2}:){9}[\da-zA-Z]{2}$")

_ALL_FIELDS = INTERFACE_FIELDS + INTERFACE_SWITCHING_FIELDS

_PARKED: frozenset[ConfigStatement] = frozenset(
    {
        ConfigStatement("set", DISABLE),
        ConfigStatement("set", (*DESCRIPTION, PARK_DESCRIPTION)),
    }
)


def classify_interface(
    statements: list[ConfigStatement],
    group_interface_delete: str = "",
) -> InterfaceLifecycleState:
    """Classify an interface from its normalized statements.

    Args:
        statements: Statements relative to ``interfaces <name>``, already
            filtered of unit noise.
        group_interface_delete: Name of the apply-group used to park
            interfaces, or ``""`` when parking uses ``disable`` +
            ``description NC``.

    Returns:
        :attr:`~.InterfaceLifecycleState.EMPTY` for no statements,
        :attr:`~.InterfaceLifecycleState.NOT_CONFIGURED` for exactly the
        parked pattern, :attr:`~.InterfaceLifecycleState.PRESENT` otherwise.
    """
    if not statements:
        return InterfaceLifecycleState.EMPTY
    if len(statements) == 2 and set(statements) == _PARKED:
        return InterfaceLifecycleState.NOT_CONFIGURED
    if (
        group_interface_delete
        and len(statements) == 1
        and statements[0] == ConfigStatement("set", (*APPLY_GROUPS, group_interface_delete))
    ):
        return InterfaceLifecycleState.NOT_CONFIGURED
    return InterfaceLifecycleState.PRESENT


def decode_interface_physical(statements: list[ConfigStatement]) -> InterfacePhysicalOptions:
    """Rebuild :class:`InterfacePhysicalOptions` from relative ``set`` statements.

    Unknown statements are ignored.  The ``esi`` block is created on the
    first ``esi ...`` line.

    Raises:
        JunosDecodeError: If ``minimum-links`` or ``native-vlan-id`` is not
            an integer.
    """
    opts = InterfacePhysicalOptions()
    for statement in statements:
        if statement.action != "set":
            continue
        words = statement.words
        if words[: len(ESI)] == ESI and len(words) > len(ESI):
            if opts.esi is None:
                opts.esi = EsiOptions()
            _decode_esi(opts.esi, words[len(ESI):])
            continue
        binding = _match_802_3ad(words)
        if binding is not None:
            opts.ether802_3ad = binding
            continue
        match = match_field(words, _ALL_FIELDS)
        if match is not None:
            fp, value_words = match
            apply_field(opts, fp, value_words, statement)
    return opts


def _match_802_3ad(words: tuple[str, ...]) -> str | None:
    for path in ETHER_802_3AD:
        if words[: len(path)] == path and len(words) == len(path) + 1:
            return words[-1]
    return None


def _decode_esi(esi: EsiOptions, words: tuple[str, ...]) -> None:
    """Project one ``esi ...`` line (without the ``esi`` word) into *esi*."""
    head = words[0]
    if len(words) == 1 and _ESI_IDENTIFIER_RE.match(head):
        esi.identifier = head
    elif len(words) == 1 and head in ESI_MODES:
        esi.mode = head
    elif head == "df-election-type" and len(words) > 1:
        esi.df_election_type = " ".join(words[1:])
    elif head == "source-bmac" and len(words) > 1:
        esi.source_bmac = " ".join(words[1:])
    elif words == ("auto-derive", "lacp"):
        esi.auto_derive_lacp = True
