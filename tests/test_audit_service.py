"""Unit tests for AuditService and the notifier it listens to."""

import pytest

from core.constants import CampaignEventType
from services.audit_service import AuditService
from services.campaign_events import CampaignCreated, TicketBought
from services.notification_service import CampaignNotifier
from tests.conftest import OPERATOR, FakeClock, make_campaign, make_settings


@pytest.mark.asyncio
async def test_notifier_delivers_in_order():
    notifier = CampaignNotifier("spring-raffle")
    received = []

    async def listener(event):
        received.append(event)

    notifier.subscribe(listener)
    events = [
        CampaignCreated(finished=False, minting_handle="h"),
        TicketBought(ticket_number=1, receipt_id=0, uri="ipfs://1"),
    ]
    for event in events:
        assert await notifier.publish(event) == 1

    assert received == events
    assert notifier.history == events


@pytest.mark.asyncio
async def test_failing_listener_does_not_undo_purchase():
    settings = make_settings()
    notifier = CampaignNotifier(settings.name)

    async def broken(event):
        raise RuntimeError("listener down")

    notifier.subscribe(broken)
    campaign = await make_campaign(settings=settings, notifier=notifier)

    await campaign.buy_ticket("alice", 1, "ipfs://1")

    assert campaign.owner_of(1) == "alice"
    assert notifier.history[-1] == TicketBought(ticket_number=1, receipt_id=0, uri="ipfs://1")


@pytest.mark.asyncio
async def test_unsubscribed_listener_is_not_called():
    notifier = CampaignNotifier("c")
    calls = []

    async def listener(event):
        calls.append(event)

    notifier.subscribe(listener)
    notifier.unsubscribe(listener)
    assert await notifier.publish(CampaignCreated(finished=False, minting_handle="h")) == 0
    assert calls == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_campaign_events_are_journaled(db_pool):
    """Every notification lands in the journal with its payload."""
    clock = FakeClock(150)
    settings = make_settings()
    notifier = CampaignNotifier(settings.name)
    audit = AuditService()
    audit.attach(notifier)

    campaign = await make_campaign(clock=clock, settings=settings, notifier=notifier)
    await campaign.buy_ticket("alice", 3, "ipfs://3")
    clock.now = 250
    await campaign.draw_ticket_manual(OPERATOR, 3)

    records = await audit.get_events(campaign=settings.name)

    assert [r.event_type for r in records] == [
        CampaignEventType.CAMPAIGN_CREATED.value,
        CampaignEventType.TICKET_BOUGHT.value,
        CampaignEventType.TICKET_DRAWN.value,
    ]
    assert records[0].payload == {"finished": False, "minting_handle": settings.minting_handle}
    assert records[1].payload == {"ticket_number": 3, "receipt_id": 0, "uri": "ipfs://3"}
    assert records[2].payload == {"removal_index": 0, "ticket_number": 3}
    assert all(r.campaign == settings.name for r in records)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_audit_log_filtering(db_pool):
    audit = AuditService()
    await audit.log_event("a", CampaignCreated(finished=False, minting_handle="h"))
    await audit.log_event("a", TicketBought(ticket_number=1, receipt_id=0, uri="u"))
    await audit.log_event("b", CampaignCreated(finished=False, minting_handle="h"))

    assert len(await audit.get_events()) == 3
    assert len(await audit.get_events(campaign="a")) == 2
    only_created = await audit.get_events(event_type=CampaignEventType.CAMPAIGN_CREATED.value)
    assert {r.campaign for r in only_created} == {"a", "b"}
    page = await audit.get_events(campaign="a", limit=1, offset=1)
    assert [r.event_type for r in page] == [CampaignEventType.TICKET_BOUGHT.value]
    assert await audit.count_events("a") == 2
    assert await audit.count_events("missing") == 0
