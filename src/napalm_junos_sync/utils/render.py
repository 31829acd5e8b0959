"""Diff renderer for planned changes."""

from __future__ import annotations

from typing import Any

from napalm_junos_sync.model.statement import ConfigStatement
from napalm_junos_sync.utils.option_diff import OptionChange


def render_diff(changes: list[OptionChange]) -> dict[str, Any]:
    """Serialize *changes* to a JSON-serializable dict.

    Returns:
        A dict with keys:

        - ``"total_changes"``: number of changes.
        - ``"changes"``: list of change dicts (``kind``, ``key``, ``details``).
    """
    return {
        "total_changes": len(changes),
        "changes": [
            {"kind": c.kind, "key": c.key, "details": c.details}
            for c in changes
        ],
    }


def render_statements(statements: list[ConfigStatement]) -> list[str]:
    """Render statements as configuration lines, in order."""
    return [s.line for s in statements]
