"""Dispatch of campaign notifications to subscribed listeners."""

from __future__ import annotations

from collections import deque
from typing import Awaitable, Callable, Deque, List

from core import get_logger
from services.campaign_events import CampaignEvent, event_payload

logger = get_logger(__name__)

EventListener = Callable[[CampaignEvent], Awaitable[None]]


class CampaignNotifier:
    """Delivers every event of one campaign to its listeners, in order.

    Emitting is split in two steps. ``enqueue`` records the event and may
    run while the campaign holds its lock. ``flush`` hands pending events
    to listeners and runs after the lock is released, so a listener can
    call back into the campaign. Only one flush delivers at a time; a
    flush started while another is delivering returns at once and leaves
    its events to the running one, which keeps emission order.

    Events are kept in ``history`` so observers attached late, and tests,
    can inspect what was emitted.
    """

    def __init__(self, campaign_name: str) -> None:
        """Initialize notifier.

        Args:
            campaign_name: Name of the campaign whose events are dispatched
        """
        self.campaign_name = campaign_name
        self.history: List[CampaignEvent] = []
        self._listeners: List[EventListener] = []
        self._pending: Deque[CampaignEvent] = deque()
        self._delivering = False

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        self._listeners.remove(listener)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def enqueue(self, event: CampaignEvent) -> None:
        """Record an event and queue it for delivery."""
        self.history.append(event)
        self._pending.append(event)
        logger.info(
            f"[{self.campaign_name}] {event.event_type.value} {event_payload(event)}"
        )

    async def flush(self) -> int:
        """Deliver queued events to every listener, oldest first.

        A failing listener is logged and skipped: the state change behind the
        event is already committed and cannot be undone from here.

        Returns:
            Number of successful listener deliveries made by this call
        """
        if self._delivering:
            return 0

        self._delivering = True
        delivered = 0
        try:
            while self._pending:
                event = self._pending.popleft()
                delivered += await self._deliver(event)
        finally:
            self._delivering = False
        return delivered

    async def publish(self, event: CampaignEvent) -> int:
        """Enqueue an event and deliver everything pending."""
        self.enqueue(event)
        return await self.flush()

    async def _deliver(self, event: CampaignEvent) -> int:
        delivered = 0
        for listener in list(self._listeners):
            try:
                await listener(event)
            except Exception as e:
                logger.error(
                    f"[{self.campaign_name}] Listener {listener!r} failed on "
                    f"{event.event_type.value}: {e}",
                    exc_info=True,
                )
            else:
                delivered += 1
        return delivered
