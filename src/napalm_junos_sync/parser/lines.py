"""Normalizer for raw ``| display set`` query output.

Turns the text returned by a configuration query into an ordered list of
:class:`~napalm_junos_sync.model.statement.ConfigStatement`: framing markers
and blank lines are removed, the query's common prefix is stripped and
caller-declared noise is filtered out.  Statements of unknown shape are kept
so that the decoders can decide what to do with them.
"""

from __future__ import annotations

from collections.abc import Callable

from napalm_junos_sync.model.statement import ConfigStatement, parse_statement

_OPEN_MARKER: str = "<configuration-output>"
_CLOSE_MARKER: str = "</configuration-output>"

# What the device returns for a hierarchy that holds no configuration.
EMPTY_OUTPUT: str = f"{_OPEN_MARKER}\n{_CLOSE_MARKER}"

StatementFilter = Callable[[ConfigStatement], bool]


def normalize_output(
    raw: str,
    *,
    prefix: tuple[str, ...] = (),
    drop: StatementFilter | None = None,
) -> list[ConfigStatement]:
    """Normalize a raw configuration dump into statements.

    Args:
        raw: Text returned by a ``show configuration ... | display set`` query.
        prefix: Path words common to every line (stripped when present).
        drop: Predicate selecting statements to discard.

    Returns:
        Statements in device order; ``[]`` for the empty sentinel.
    """
    if raw.strip() == EMPTY_OUTPUT:
        return []

    statements: list[ConfigStatement] = []
    for line in raw.splitlines():
        if _CLOSE_MARKER in line:
            break
        if _OPEN_MARKER in line or not line.strip():
            continue
        statement = parse_statement(line.strip()).relative_to(prefix)
        if drop is not None and drop(statement):
            continue
        statements.append(statement)
    return statements


def is_unit_noise(statement: ConfigStatement) -> bool:
    """Match ``unit <n>`` lines that are not about ethernet-switching."""
    return (
        bool(statement.words)
        and statement.words[0] == "unit"
        and "ethernet-switching" not in statement.words
    )


def has_foreign_units(statements: list[ConfigStatement]) -> bool:
    """Return ``True`` if an interface still carries non-switching logical units."""
    return any(is_unit_noise(s) for s in statements)
