"""Configuration transaction coordinator.

Sequences every mutating operation as lock → stage → commit, discarding all
staged statements if anything fails before the commit completes::

    with ConfigTransaction(session, "create interface ge-0/0/1") as tx:
        tx.stage(statements)
    # committed here; tx.warnings holds device warnings

Post-commit verification of interface state runs under :data:`VERIFY_LOCK`,
because interface lifecycle and the aggregated device count are derived
from the whole interfaces hierarchy rather than from the edited entity.
"""

from __future__ import annotations

import logging
import threading
from types import TracebackType
from typing import Protocol

from napalm_junos_sync.model.statement import ConfigStatement

logger = logging.getLogger(__name__)

# Process-wide single-writer region for configuration-wide read-after-commit checks.
VERIFY_LOCK: threading.Lock = threading.Lock()


class ConfigSession(Protocol):
    """Device collaborator interface consumed by the core."""

    def run_query(self, command: str) -> str: ...

    def interface_exists(self, name: str) -> bool: ...

    def software_information(self) -> dict[str, str]: ...

    def lock(self) -> None: ...

    def apply_statements(self, statements: list[ConfigStatement]) -> None: ...

    def commit(self, description: str) -> list[str]: ...

    def discard_pending(self) -> None: ...


class ConfigTransaction:
    """Context manager wrapping one lock → stage → commit cycle.

    Args:
        session: Device collaborator.
        description: Human-readable commit log message.
        dry_run: Stage and record statements, then discard instead of
            committing.

    Attributes:
        statements: Every statement staged so far, in order.
        warnings: Warnings returned by the commit.
        committed: ``True`` once the commit succeeded.
    """

    def __init__(
        self,
        session: ConfigSession,
        description: str,
        *,
        dry_run: bool = False,
    ) -> None:
        self._session = session
        self.description = description
        self.dry_run = dry_run
        self.statements: list[ConfigStatement] = []
        self.warnings: list[str] = []
        self.committed: bool = False

    def __enter__(self) -> ConfigTransaction:
        self._session.lock()
        return self

    def stage(self, statements: list[ConfigStatement]) -> None:
        """Stage *statements* on the device session."""
        if not statements:
            return
        self._session.apply_statements(statements)
        self.statements.extend(statements)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            logger.info("Discarding %r after %s", self.description, exc_type.__name__)
            self._session.discard_pending()
            return
        if self.dry_run or not self.statements:
            self._session.discard_pending()
            return
        try:
            self.warnings = self._session.commit(self.description)
        except Exception:
            self._session.discard_pending()
            raise
        self.committed = True
        for warning in self.warnings:
            logger.warning("Commit %r: %s", self.description, warning)
