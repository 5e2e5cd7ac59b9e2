"""Persistent journal of every campaign notification."""

from __future__ import annotations

from typing import List, Optional

from core import get_logger, AuditDefaults
from database.models import CampaignEventRecord
from database.repositories import CampaignEventRepository
from services.campaign_events import CampaignEvent, event_payload
from services.notification_service import CampaignNotifier, EventListener

logger = get_logger(__name__)


class AuditService:
    """Writes campaign events to the ``campaign_events`` table."""

    def __init__(self, repository: type[CampaignEventRepository] = CampaignEventRepository) -> None:
        self.repository = repository

    async def log_event(self, campaign: str, event: CampaignEvent) -> int:
        """Persist one event.

        Args:
            campaign: Campaign that emitted the event
            event: Event to store

        Returns:
            ID of the journal entry
        """
        entry_id = await self.repository.add_event(
            campaign, event.event_type.value, event_payload(event)
        )
        logger.debug(f"Journaled {event.event_type.value} of '{campaign}' as #{entry_id}")
        return entry_id

    def attach(self, notifier: CampaignNotifier) -> EventListener:
        """Journal every event the notifier publishes from now on.

        Returns:
            The registered listener, for ``notifier.unsubscribe``
        """
        campaign = notifier.campaign_name

        async def listener(event: CampaignEvent) -> None:
            await self.log_event(campaign, event)

        notifier.subscribe(listener)
        logger.info(f"Audit journal attached to campaign '{campaign}'")
        return listener

    async def get_events(
        self,
        campaign: Optional[str] = None,
        event_type: Optional[str] = None,
        limit: int = AuditDefaults.PAGE_SIZE,
        offset: int = 0,
    ) -> List[CampaignEventRecord]:
        return await self.repository.list_events(
            campaign=campaign, event_type=event_type, limit=limit, offset=offset
        )

    async def count_events(self, campaign: str) -> int:
        return await self.repository.count_events(campaign)
