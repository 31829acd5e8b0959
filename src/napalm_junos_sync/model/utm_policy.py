"""Typed model for security UTM policies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class UtmProtocolProfiles:
    """Per-protocol profile names of an ``anti-virus`` or ``content-filtering`` block."""

    ftp_download_profile: str | None = None
    ftp_upload_profile: str | None = None
    http_profile: str | None = None
    imap_profile: str | None = None
    pop3_profile: str | None = None
    smtp_profile: str | None = None


@dataclass
class SessionsPerClient:
    """``traffic-options sessions-per-client`` block.

    Attributes:
        limit: Session limit (0-2000); ``None`` when unset.
        over_limit: ``"block"`` or ``"log-and-permit"``.
    """

    limit: int | None = None
    over_limit: str | None = None


@dataclass
class UtmPolicyOptions:
    """Desired or current configuration of one ``security utm utm-policy``.

    Attributes:
        name: Policy name.
        anti_spam_smtp_profile: Anti-spam SMTP profile name.
        anti_virus: Anti-virus profiles, ``None`` when the block is absent.
        content_filtering: Content-filtering profiles, ``None`` when absent.
        traffic_sessions_per_client: Session limits, ``None`` when absent.
        web_filtering_profile: Web-filtering HTTP profile name.
    """

    name: str
    anti_spam_smtp_profile: str | None = None
    anti_virus: UtmProtocolProfiles | None = None
    content_filtering: UtmProtocolProfiles | None = None
    traffic_sessions_per_client: SessionsPerClient | None = None
    web_filtering_profile: str | None = None
