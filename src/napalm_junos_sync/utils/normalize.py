"""Normalization helpers for structured option models.

Normalization produces a stable, canonical form suitable for reliable diff
comparisons: empty strings and out-of-domain numbers become ``None``, empty
sub-records become absent, VLAN members are de-duplicated.
"""

from __future__ import annotations

from dataclasses import replace

from napalm_junos_sync.model.interface import EsiOptions, InterfacePhysicalOptions
from napalm_junos_sync.model.utm_policy import (
    SessionsPerClient,
    UtmPolicyOptions,
    UtmProtocolProfiles,
)


def _text(value: str | None) -> str | None:
    return value or None


def _positive(value: int | None) -> int | None:
    """Fields whose valid domain starts at 1 treat ``0`` as unset."""
    if value is None or value <= 0:
        return None
    return value


def normalize_esi(esi: EsiOptions | None) -> EsiOptions | None:
    """Return a normalized copy of *esi*, or ``None`` if it has no content."""
    if esi is None:
        return None
    out = EsiOptions(
        mode=_text(esi.mode),
        auto_derive_lacp=bool(esi.auto_derive_lacp),
        df_election_type=_text(esi.df_election_type),
        identifier=_text(esi.identifier),
        source_bmac=_text(esi.source_bmac),
    )
    if out == EsiOptions():
        return None
    return out


def normalize_interface_options(opts: InterfacePhysicalOptions) -> InterfacePhysicalOptions:
    """Return a normalized copy of *opts*.

    Normalization rules:

    - Empty strings become ``None``.
    - ``ae_minimum_links`` and ``vlan_native`` of ``0`` or less become ``None``.
    - An ``esi`` block without content becomes ``None``.
    - ``vlan_members`` loses duplicates (first occurrence wins).
    """
    return replace(
        opts,
        ae_lacp=_text(opts.ae_lacp),
        ae_link_speed=_text(opts.ae_link_speed),
        ae_minimum_links=_positive(opts.ae_minimum_links),
        description=_text(opts.description),
        esi=normalize_esi(opts.esi),
        ether802_3ad=_text(opts.ether802_3ad),
        trunk=bool(opts.trunk),
        vlan_members=list(dict.fromkeys(str(m) for m in opts.vlan_members)),
        vlan_native=_positive(opts.vlan_native),
        vlan_tagging=bool(opts.vlan_tagging),
    )


def normalize_profiles(profiles: UtmProtocolProfiles | None) -> UtmProtocolProfiles | None:
    if profiles is None:
        return None
    out = UtmProtocolProfiles(
        ftp_download_profile=_text(profiles.ftp_download_profile),
        ftp_upload_profile=_text(profiles.ftp_upload_profile),
        http_profile=_text(profiles.http_profile),
        imap_profile=_text(profiles.imap_profile),
        pop3_profile=_text(profiles.pop3_profile),
        smtp_profile=_text(profiles.smtp_profile),
    )
    if out == UtmProtocolProfiles():
        return None
    return out


def normalize_sessions_per_client(spc: SessionsPerClient | None) -> SessionsPerClient | None:
    if spc is None:
        return None
    # 0 is a legitimate limit; only negative values mean "unset".
    limit = spc.limit if spc.limit is not None and spc.limit >= 0 else None
    out = SessionsPerClient(limit=limit, over_limit=_text(spc.over_limit))
    if out == SessionsPerClient():
        return None
    return out


def normalize_utm_policy_options(opts: UtmPolicyOptions) -> UtmPolicyOptions:
    """Return a normalized copy of *opts* (same rules as for interfaces)."""
    return replace(
        opts,
        anti_spam_smtp_profile=_text(opts.anti_spam_smtp_profile),
        anti_virus=normalize_profiles(opts.anti_virus),
        content_filtering=normalize_profiles(opts.content_filtering),
        traffic_sessions_per_client=normalize_sessions_per_client(
            opts.traffic_sessions_per_client
        ),
        web_filtering_profile=_text(opts.web_filtering_profile),
    )
