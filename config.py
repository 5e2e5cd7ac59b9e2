"""Application configuration module.

Reads settings from environment variables with sane defaults. Campaign
parameters come from ``CAMPAIGN_*`` variables and have no defaults for
the values that define the raffle itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from services.raffle_campaign import CampaignSettings

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


def _require_str(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"{name} must be set")
    return value


def _require_number(name: str, cast=int):
    raw = _require_str(name)
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Config:
    environment: str
    debug: bool
    log_level: str
    log_folder: str
    log_colored: bool
    database_path: str
    db_pool_size: int
    db_busy_timeout: int
    audit_enabled: bool
    minting_service_url: Optional[str]
    minting_timeout: float
    minting_handle: str
    seed_start: int

    @property
    def log_file(self) -> str:
        return os.path.join(self.log_folder, "raffle.log")


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration with validated values
    """
    return Config(
        environment=_get_str("ENVIRONMENT", "development"),
        debug=_get_bool("DEBUG", False),
        log_level=_get_str("LOG_LEVEL", "INFO"),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        log_colored=_get_bool("LOG_COLORED", True),
        database_path=_get_str("DATABASE_PATH", "data/raffle.sqlite"),
        db_pool_size=_get_int("DB_POOL_SIZE", 4),
        db_busy_timeout=_get_int("DB_BUSY_TIMEOUT", 5000),
        audit_enabled=_get_bool("AUDIT_ENABLED", True),
        minting_service_url=_get_str("MINTING_SERVICE_URL") or None,
        minting_timeout=_get_float("MINTING_TIMEOUT", 10.0),
        minting_handle=_get_str("MINTING_HANDLE", "raffle-receipts"),
        seed_start=_get_int("SEED_START", 0),
    )


def load_campaign_settings(minting_handle: Optional[str] = None) -> "CampaignSettings":
    """Build campaign parameters from ``CAMPAIGN_*`` environment variables.

    Args:
        minting_handle: Fallback when ``CAMPAIGN_MINTING_HANDLE`` is unset

    Raises:
        ConfigurationError: If a required variable is missing or not numeric
    """
    from services.raffle_campaign import CampaignSettings

    handle = _get_str("CAMPAIGN_MINTING_HANDLE") or minting_handle
    if not handle:
        raise ConfigurationError("CAMPAIGN_MINTING_HANDLE must be set")

    return CampaignSettings(
        name=_require_str("CAMPAIGN_NAME"),
        organizer=_get_str("CAMPAIGN_ORGANIZER", ""),
        description=_get_str("CAMPAIGN_DESCRIPTION", ""),
        sale_start=_require_number("CAMPAIGN_SALE_START", float),
        sale_end=_require_number("CAMPAIGN_SALE_END", float),
        ticket_price=_require_number("CAMPAIGN_TICKET_PRICE"),
        max_spend=_require_number("CAMPAIGN_MAX_SPEND"),
        total_tickets=_require_number("CAMPAIGN_TOTAL_TICKETS"),
        total_winners=_require_number("CAMPAIGN_TOTAL_WINNERS"),
        minting_handle=handle,
    )
