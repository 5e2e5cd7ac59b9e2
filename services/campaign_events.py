"""Notifications emitted by a raffle campaign after each state change."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Union

from core.constants import CampaignEventType


@dataclass(frozen=True, slots=True)
class CampaignCreated:
    event_type: ClassVar[CampaignEventType] = CampaignEventType.CAMPAIGN_CREATED
    finished: bool
    minting_handle: str


@dataclass(frozen=True, slots=True)
class TicketBought:
    event_type: ClassVar[CampaignEventType] = CampaignEventType.TICKET_BOUGHT
    ticket_number: int
    receipt_id: int
    uri: str


@dataclass(frozen=True, slots=True)
class TicketDrawn:
    """``removal_index`` is the ticket's position in the undrawn pool when it was removed."""
    event_type: ClassVar[CampaignEventType] = CampaignEventType.TICKET_DRAWN
    removal_index: int
    ticket_number: int


@dataclass(frozen=True, slots=True)
class CampaignDeleted:
    event_type: ClassVar[CampaignEventType] = CampaignEventType.CAMPAIGN_DELETED
    finished: bool


CampaignEvent = Union[CampaignCreated, TicketBought, TicketDrawn, CampaignDeleted]


def event_payload(event: CampaignEvent) -> Dict[str, Any]:
    """Field values of an event, suitable for JSON serialization."""
    return asdict(event)
