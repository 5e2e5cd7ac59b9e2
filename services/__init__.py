"""Services package."""

from .campaign_events import (
    CampaignCreated,
    CampaignDeleted,
    CampaignEvent,
    TicketBought,
    TicketDrawn,
)
from .notification_service import CampaignNotifier
from .randomness import (
    ClockSeedSource,
    FixedSeedSource,
    LinearCongruentialGenerator,
    RoundCounterSeedSource,
    SeedSource,
    predict_draw_index,
)
from .minting_service import HttpMintingService, InMemoryMintingService, MintingService
from .raffle_campaign import CampaignSettings, CampaignSnapshot, RaffleCampaign
from .audit_service import AuditService

__all__ = [
    "CampaignCreated",
    "CampaignDeleted",
    "CampaignEvent",
    "TicketBought",
    "TicketDrawn",
    "CampaignNotifier",
    "ClockSeedSource",
    "FixedSeedSource",
    "LinearCongruentialGenerator",
    "RoundCounterSeedSource",
    "SeedSource",
    "predict_draw_index",
    "HttpMintingService",
    "InMemoryMintingService",
    "MintingService",
    "CampaignSettings",
    "CampaignSnapshot",
    "RaffleCampaign",
    "AuditService",
]
