"""Field-path projection shared by the statement encoders and decoders."""

from __future__ import annotations

from typing import Any

from napalm_junos_sync.client.errors import JunosDecodeError
from napalm_junos_sync.model.statement import ConfigStatement, set_statement
from napalm_junos_sync.vendor.junos.mappings import FieldPath


def encode_fields(
    prefix: tuple[str, ...],
    fields: tuple[FieldPath, ...],
    record: Any,
) -> list[ConfigStatement]:
    """Emit one ``set`` statement per populated field of *record*, in table order."""
    statements: list[ConfigStatement] = []
    for fp in fields:
        value = getattr(record, fp.name)
        if fp.kind == "flag":
            if value:
                statements.append(set_statement(*prefix, *fp.words))
        elif fp.kind == "list":
            for item in value or ():
                statements.append(set_statement(*prefix, *fp.words, str(item)))
        elif value is not None and value != "":
            statements.append(set_statement(*prefix, *fp.words, str(value)))
    return statements


def match_field(
    words: tuple[str, ...],
    fields: tuple[FieldPath, ...],
) -> tuple[FieldPath, tuple[str, ...]] | None:
    """Find the longest field path matching *words*.

    Returns:
        ``(field, value_words)``, or ``None`` when nothing matches.  Flags
        only match the exact path; other kinds need at least one value word.
    """
    for fp in sorted(fields, key=lambda f: len(f.words), reverse=True):
        n = len(fp.words)
        if fp.kind == "flag":
            if words == fp.words:
                return fp, ()
        elif words[:n] == fp.words and len(words) > n:
            return fp, words[n:]
    return None


def apply_field(
    record: Any,
    fp: FieldPath,
    value_words: tuple[str, ...],
    statement: ConfigStatement,
) -> None:
    """Project *value_words* into ``record.<fp.name>``.

    Raises:
        JunosDecodeError: If an ``int`` field value is not an integer.
    """
    value = " ".join(value_words)
    if fp.kind == "flag":
        setattr(record, fp.name, True)
    elif fp.kind == "list":
        getattr(record, fp.name).append(value)
    elif fp.kind == "int":
        try:
            setattr(record, fp.name, int(value))
        except ValueError as exc:
            raise JunosDecodeError(statement=statement, reason=str(exc)) from exc
    else:
        setattr(record, fp.name, value)
