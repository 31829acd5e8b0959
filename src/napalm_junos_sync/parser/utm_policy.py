"""Decoder for ``security utm utm-policy "<name>"`` statements."""

from __future__ import annotations

from napalm_junos_sync.model.statement import ConfigStatement
from napalm_junos_sync.model.utm_policy import (
    SessionsPerClient,
    UtmPolicyOptions,
    UtmProtocolProfiles,
)
from napalm_junos_sync.utils.fields import apply_field, match_field
from napalm_junos_sync.vendor.junos.mappings import (
    ANTI_VIRUS,
    CONTENT_FILTERING,
    SESSIONS_PER_CLIENT,
    SESSIONS_PER_CLIENT_FIELDS,
    UTM_POLICY_HEAD_FIELDS,
    UTM_POLICY_TAIL_FIELDS,
    UTM_PROFILE_FIELDS,
    FieldPath,
)

_TOP_FIELDS = UTM_POLICY_HEAD_FIELDS + UTM_POLICY_TAIL_FIELDS


def decode_utm_policy(name: str, statements: list[ConfigStatement]) -> UtmPolicyOptions | None:
    """Rebuild :class:`UtmPolicyOptions` from statements relative to the policy.

    Args:
        name: Policy name.
        statements: Normalized statements for the policy.

    Returns:
        The decoded policy, or ``None`` if *statements* is empty (the policy
        does not exist).

    Raises:
        JunosDecodeError: If ``sessions-per-client limit`` is not an integer.
    """
    if not statements:
        return None

    opts = UtmPolicyOptions(name=name)
    for statement in statements:
        if statement.action != "set":
            continue
        words = statement.words
        if statement.startswith(ANTI_VIRUS):
            if opts.anti_virus is None:
                opts.anti_virus = UtmProtocolProfiles()
            _project(opts.anti_virus, words[len(ANTI_VIRUS):], UTM_PROFILE_FIELDS, statement)
        elif statement.startswith(CONTENT_FILTERING):
            if opts.content_filtering is None:
                opts.content_filtering = UtmProtocolProfiles()
            _project(
                opts.content_filtering,
                words[len(CONTENT_FILTERING):],
                UTM_PROFILE_FIELDS,
                statement,
            )
        elif statement.startswith(SESSIONS_PER_CLIENT):
            if opts.traffic_sessions_per_client is None:
                opts.traffic_sessions_per_client = SessionsPerClient()
            _project(
                opts.traffic_sessions_per_client,
                words[len(SESSIONS_PER_CLIENT):],
                SESSIONS_PER_CLIENT_FIELDS,
                statement,
            )
        else:
            _project(opts, words, _TOP_FIELDS, statement)
    return opts


def _project(
    record: object,
    words: tuple[str, ...],
    fields: tuple[FieldPath, ...],
    statement: ConfigStatement,
) -> None:
    match = match_field(words, fields)
    if match is not None:
        fp, value_words = match
        apply_field(record, fp, value_words, statement)
