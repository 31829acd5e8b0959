"""Statement builders for ``security utm utm-policy "<name>"``."""

from __future__ import annotations

import logging

from napalm_junos_sync.client.errors import JunosValidationError
from napalm_junos_sync.model.statement import ConfigStatement, delete_statement
from napalm_junos_sync.model.utm_policy import UtmPolicyOptions
from napalm_junos_sync.utils.fields import encode_fields
from napalm_junos_sync.utils.normalize import (
    normalize_profiles,
    normalize_sessions_per_client,
    normalize_utm_policy_options,
)
from napalm_junos_sync.vendor.junos.commands import UTM_POLICY
from napalm_junos_sync.vendor.junos.mappings import (
    ANTI_VIRUS,
    CONTENT_FILTERING,
    SESSIONS_PER_CLIENT,
    SESSIONS_PER_CLIENT_FIELDS,
    UTM_POLICY_HEAD_FIELDS,
    UTM_POLICY_TAIL_FIELDS,
    UTM_PROFILE_FIELDS,
)

logger = logging.getLogger(__name__)


def encode_utm_policy(desired: UtmPolicyOptions) -> list[ConfigStatement]:
    """Build the ordered ``set`` statements for *desired*.

    Raises:
        JunosValidationError: If the name is empty or a sub-block is present
            without any content.
    """
    if not desired.name:
        raise JunosValidationError("utm-policy name is empty")
    if desired.anti_virus is not None and normalize_profiles(desired.anti_virus) is None:
        raise JunosValidationError("anti_virus block is empty")
    if (
        desired.content_filtering is not None
        and normalize_profiles(desired.content_filtering) is None
    ):
        raise JunosValidationError("content_filtering block is empty")
    if (
        desired.traffic_sessions_per_client is not None
        and normalize_sessions_per_client(desired.traffic_sessions_per_client) is None
    ):
        raise JunosValidationError("traffic_sessions_per_client block is empty")

    opts = normalize_utm_policy_options(desired)
    prefix = (*UTM_POLICY, opts.name)
    statements = encode_fields(prefix, UTM_POLICY_HEAD_FIELDS, opts)
    if opts.anti_virus is not None:
        statements += encode_fields((*prefix, *ANTI_VIRUS), UTM_PROFILE_FIELDS, opts.anti_virus)
    if opts.content_filtering is not None:
        statements += encode_fields(
            (*prefix, *CONTENT_FILTERING), UTM_PROFILE_FIELDS, opts.content_filtering
        )
    if opts.traffic_sessions_per_client is not None:
        statements += encode_fields(
            (*prefix, *SESSIONS_PER_CLIENT),
            SESSIONS_PER_CLIENT_FIELDS,
            opts.traffic_sessions_per_client,
        )
    statements += encode_fields(prefix, UTM_POLICY_TAIL_FIELDS, opts)
    logger.debug("Encoded %d statement(s) for utm-policy %s", len(statements), opts.name)
    return statements


def delete_utm_policy_statements(name: str) -> list[ConfigStatement]:
    return [delete_statement(*UTM_POLICY, name)]
