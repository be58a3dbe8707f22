"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from event_match.privacy.consent import DEFAULT_EMAIL_SALT

DEFAULT_DATABASE_URL = "sqlite:///data/event_match.db"
DEFAULT_TOKEN_TTL_MINUTES = 30


@dataclass
class EmailConfig:
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    sender_email: str = ""
    sender_password: str = ""
    from_name: str = "Event Match"


@dataclass
class MatchingConfig:
    default_limit: int = 5
    max_workers: int = 1
    min_score: int = 0


@dataclass
class PrivacyConfig:
    email_salt: str = DEFAULT_EMAIL_SALT


@dataclass
class InviteConfig:
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES
    base_url: str = ""


@dataclass
class AppConfig:
    email: EmailConfig = field(default_factory=EmailConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    privacy: PrivacyConfig = field(default_factory=PrivacyConfig)
    invites: InviteConfig = field(default_factory=InviteConfig)
    database_url: str = DEFAULT_DATABASE_URL
    log_dir: str = "logs"


def normalize_database_url(url: str) -> str:
    # SQLAlchemy 2.x requires postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def parse_ttl_minutes(value) -> int:
    """Parse a token TTL, falling back to the default for invalid or non-positive values."""
    try:
        ttl = int(value)
    except (TypeError, ValueError):
        return DEFAULT_TOKEN_TTL_MINUTES
    return ttl if ttl > 0 else DEFAULT_TOKEN_TTL_MINUTES


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from a YAML file, with environment overrides.

    With no path, defaults plus environment variables are used.
    """
    raw: dict = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Copy config.example.yaml to config.yaml and fill in your settings."
            )
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # Email
    email_raw = raw.get("email", {})
    config.email = EmailConfig(
        smtp_server=email_raw.get("smtp_server", "smtp.gmail.com"),
        smtp_port=email_raw.get("smtp_port", 587),
        sender_email=email_raw.get("sender_email", ""),
        sender_password=os.environ.get("EVENT_MATCH_EMAIL_PASSWORD", email_raw.get("sender_password", "")),
        from_name=email_raw.get("from_name", "Event Match"),
    )

    # Matching
    matching_raw = raw.get("matching", {})
    config.matching = MatchingConfig(
        default_limit=matching_raw.get("default_limit", 5),
        max_workers=matching_raw.get("max_workers", 1),
        min_score=matching_raw.get("min_score", 0),
    )

    # Privacy (env var takes precedence; read once here and passed to the hasher)
    privacy_raw = raw.get("privacy", {})
    config.privacy = PrivacyConfig(
        email_salt=str(os.environ.get("EMAIL_SALT") or privacy_raw.get("email_salt") or DEFAULT_EMAIL_SALT),
    )

    # Invites
    invites_raw = raw.get("invites", {})
    config.invites = InviteConfig(
        token_ttl_minutes=parse_ttl_minutes(
            os.environ.get("INVITE_TOKEN_TTL_MINUTES", invites_raw.get("token_ttl_minutes", DEFAULT_TOKEN_TTL_MINUTES))
        ),
        base_url=os.environ.get("APP_BASE_URL", invites_raw.get("base_url", "")),
    )

    config.database_url = normalize_database_url(
        os.environ.get("DATABASE_URL", raw.get("database_url", DEFAULT_DATABASE_URL))
    )
    config.log_dir = raw.get("log_dir", "logs")

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if config.privacy.email_salt == DEFAULT_EMAIL_SALT:
        warnings.append("Using the default email salt - set EMAIL_SALT for production")

    if not config.email.sender_email or not config.email.sender_password:
        warnings.append("Email credentials not configured - invites will not be sent")

    if not config.invites.base_url:
        warnings.append("No invite base_url configured - invite links will be relative paths")

    if config.matching.default_limit <= 0:
        warnings.append("Matching default_limit is not positive - no matches will be returned")

    if config.matching.max_workers < 1:
        warnings.append("Matching max_workers below 1 - scoring will run serially")

    return warnings
