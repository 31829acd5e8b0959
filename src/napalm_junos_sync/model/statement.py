"""Typed model for a single line of ``display set`` configuration."""

from __future__ import annotations

import shlex
from dataclasses import dataclass

# Characters that force a token to be double-quoted when rendered.
_RESERVED: frozenset[str] = frozenset(" \t\\\"';{}#")


@dataclass(frozen=True)
class ConfigStatement:
    """One ``<action> <path...> <value>`` configuration statement.

    Attributes:
        action: Leading keyword, normally ``"set"`` or ``"delete"``.  Lines
            with any other leading word are kept as-is so that callers can
            decide whether to ignore them.
        words: Path and value tokens, with quoting removed.
    """

    action: str
    words: tuple[str, ...]

    @property
    def line(self) -> str:
        """Render the statement as a configuration line."""
        return " ".join([self.action, *(quote_token(w) for w in self.words)])

    def startswith(self, prefix: tuple[str, ...]) -> bool:
        """Return ``True`` if :attr:`words` begins with *prefix*."""
        return self.words[: len(prefix)] == prefix

    def relative_to(self, prefix: tuple[str, ...]) -> ConfigStatement:
        """Return a copy with *prefix* stripped from :attr:`words` (if present)."""
        if prefix and self.startswith(prefix):
            return ConfigStatement(self.action, self.words[len(prefix):])
        return self


def set_statement(*words: str) -> ConfigStatement:
    """Shorthand for ``ConfigStatement("set", words)``."""
    return ConfigStatement("set", tuple(words))


def delete_statement(*words: str) -> ConfigStatement:
    """Shorthand for ``ConfigStatement("delete", words)``."""
    return ConfigStatement("delete", tuple(words))


def quote_token(token: str) -> str:
    """Double-quote *token* if it is empty or contains a reserved character."""
    if token and not any(ch in _RESERVED for ch in token):
        return token
    escaped = token.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_statement(line: str) -> ConfigStatement:
    """Parse one configuration line into a :class:`ConfigStatement`.

    Quoted tokens are unquoted.  Never raises: a line with unbalanced quotes
    falls back to plain whitespace splitting.
    """
    try:
        tokens = shlex.split(line, posix=True)
    except ValueError:
        tokens = line.split()
    if not tokens:
        return ConfigStatement("", ())
    return ConfigStatement(tokens[0], tuple(tokens[1:]))
