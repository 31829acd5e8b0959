"""Aggregated-interface device-count allocator.

``chassis aggregated-devices ethernet device-count`` must always be one more
than the highest ``ae<N>`` referenced anywhere under ``interfaces``, and must
be removed entirely once no aggregated interface is referenced.  The count is
never remembered between operations: every structural change re-derives it
from a full ``show configuration interfaces | display set relative`` dump,
because concurrent operations on other interfaces may have changed group
memberships since the last read.

Lines of interest in the dump::

    set ae3 aggregated-ether-options lacp active        <- declared parent
    set ge-0/0/1 ether-options 802.3ad ae3              <- child binding
    set xe-0/0/2 gigether-options 802.3ad ae3           <- child binding
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from napalm_junos_sync.client.errors import JunosDecodeError, JunosValidationError
from napalm_junos_sync.client.interface_ops import is_aggregated
from napalm_junos_sync.model.statement import (
    ConfigStatement,
    delete_statement,
    set_statement,
)
from napalm_junos_sync.vendor.junos.commands import AE_DEVICE_COUNT

# Placeholder meaning "no aggregated binding" (index -1).
NO_AE: str = "ae-1"

_AE_NAME_RE: re.Pattern[str] = re.compile(r"^ae(\d+)$")
_CHILD_RE: re.Pattern[str] = re.compile(r"ether-options 802\.3ad (ae\d+)$")
_PARENT_RE: re.Pattern[str] = re.compile(r"^set (ae\d+) ")


@dataclass
class AggregatedGroupIndex:
    """Every ``ae<N>`` reference found in an interfaces dump.

    Attributes:
        parents: Declared aggregated parents, in first-seen order.
        memberships: ``(child, ae)`` pairs, one per 802.3ad binding line.
    """

    parents: list[str] = field(default_factory=list)
    memberships: list[tuple[str, str]] = field(default_factory=list)

    def children_of(self, ae: str) -> set[str]:
        return {child for child, bound in self.memberships if bound == ae}


def ae_index(name: str) -> int:
    """Return ``N`` for ``ae<N>``; ``-1`` for :data:`NO_AE`.

    Raises:
        JunosValidationError: If *name* is not an ``ae<N>`` name.
    """
    if name == NO_AE:
        return -1
    m = _AE_NAME_RE.match(name)
    if not m:
        raise JunosValidationError(f"failed to convert ae interface {name!r} to integer")
    return int(m.group(1))


def scan_aggregated(config_text: str) -> AggregatedGroupIndex:
    """Collect declared parents and child bindings from *config_text*."""
    index = AggregatedGroupIndex()
    for line in config_text.splitlines():
        line = line.rstrip()
        child = _CHILD_RE.search(line)
        if child:
            words = line.split()
            index.memberships.append((words[1] if len(words) > 1 else "", child.group(1)))
            continue
        parent = _PARENT_RE.match(line)
        if parent and parent.group(1) not in index.parents:
            index.parents.append(parent.group(1))
    return index


def is_last_child(ae: str, interface: str, config_text: str) -> bool:
    """Return ``True`` if no interface other than *interface* is bound to *ae*."""
    return _is_last_child(scan_aggregated(config_text), ae, interface)


def _is_last_child(index: AggregatedGroupIndex, ae: str, interface: str) -> bool:
    return not (index.children_of(ae) - {interface})


def compute_device_count(
    new_ae: str,
    old_ae: str,
    interface: str,
    config_text: str,
) -> int:
    """Compute the device count required after the current operation.

    Args:
        new_ae: Aggregated parent requested by the operation, or
            :data:`NO_AE`.
        old_ae: Binding being replaced or removed, or :data:`NO_AE`.  When
            *interface* equals *old_ae* the parent itself is being deleted.
        interface: Interface the operation acts on.
        config_text: Full interfaces dump, freshly read.

    Returns:
        ``max(N) + 1`` over all remaining references and *new_ae*; ``0``
        means the device-count setting must be removed.
    """
    new_index = ae_index(new_ae)
    index = scan_aggregated(config_text)
    deleting_parent = interface == old_ae

    found: set[int] = set()
    for _child, ae in index.memberships:
        # Bindings to the group being left do not count, unless it is the
        # parent itself that goes away.
        if deleting_parent or ae != old_ae:
            found.add(ae_index(ae))
    for parent in index.parents:
        if not deleting_parent or parent != old_ae:
            found.add(ae_index(parent))
    if not _is_last_child(index, old_ae, interface):
        found.add(ae_index(old_ae))

    if found:
        highest = sorted(found, reverse=True)[0]
        if highest > new_index:
            return highest + 1
    return new_index + 1


def required_device_count(config_text: str) -> int:
    """Return ``max(N) + 1`` over every ``ae<N>`` referenced in *config_text*.

    ``0`` means no aggregated interface is referenced and the device-count
    setting must be absent.
    """
    index = scan_aggregated(config_text)
    found = [ae_index(ae) for _child, ae in index.memberships]
    found += [ae_index(parent) for parent in index.parents]
    return max(found) + 1 if found else 0


def configured_device_count(statements: list[ConfigStatement]) -> int:
    """Read ``device-count`` from statements relative to the aggregated chassis settings.

    Returns ``0`` when the setting is absent.

    Raises:
        JunosDecodeError: If the value is not an integer.
    """
    for statement in statements:
        words = statement.words
        if statement.action == "set" and len(words) == 2 and words[0] == AE_DEVICE_COUNT[-1]:
            try:
                return int(words[1])
            except ValueError as exc:
                raise JunosDecodeError(statement=statement, reason=str(exc)) from exc
    return 0


def device_count_statements(count: int) -> list[ConfigStatement]:
    """``set ... device-count N``, or ``delete ... device-count`` for ``0``."""
    if count <= 0:
        return [delete_statement(*AE_DEVICE_COUNT)]
    return [set_statement(*AE_DEVICE_COUNT, str(count))]


def device_count_changes(
    interface: str,
    new_binding: str | None,
    old_binding: str | None,
    config_text: str,
) -> list[ConfigStatement]:
    """Device-count statements for creating or updating *interface*.

    Args:
        interface: Interface being configured.
        new_binding: Desired 802.3ad parent, or ``None``.
        old_binding: 802.3ad parent currently on the device, or ``None``.
        config_text: Full interfaces dump, freshly read.
    """
    if is_aggregated(interface):
        return device_count_statements(
            compute_device_count(interface, NO_AE, interface, config_text)
        )
    if new_binding:
        previous = old_binding if old_binding and old_binding != new_binding else NO_AE
        return device_count_statements(
            compute_device_count(new_binding, previous, interface, config_text)
        )
    if old_binding and is_last_child(old_binding, interface, config_text):
        return device_count_statements(
            compute_device_count(NO_AE, old_binding, interface, config_text)
        )
    return []


def device_count_on_delete(
    interface: str,
    binding: str | None,
    config_text: str,
) -> list[ConfigStatement]:
    """Device-count statements for deleting *interface*.

    A deleted child only changes the count when it was the last member of
    its group.
    """
    if is_aggregated(interface):
        return device_count_statements(
            compute_device_count(NO_AE, interface, interface, config_text)
        )
    if binding and is_last_child(binding, interface, config_text):
        return device_count_statements(
            compute_device_count(NO_AE, binding, interface, config_text)
        )
    return []
