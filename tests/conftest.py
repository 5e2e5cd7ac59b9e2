"""Pytest configuration and fixtures."""

import itertools

import pytest
import pytest_asyncio

from core.exceptions import MintingError
from database import close_db_pool, init_db_pool, run_migrations
from services.minting_service import InMemoryMintingService
from services.raffle_campaign import CampaignSettings, RaffleCampaign
from services.randomness import FixedSeedSource

OPERATOR = "0xoperator"
MINTING_HANDLE = "raffle-receipts"

_campaign_ids = itertools.count(1)


class FakeClock:
    """Settable time source."""

    def __init__(self, now: float = 150) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FailingMintingService:
    """Minting service that fails a given number of times before recovering."""

    def __init__(self, failures: int = 1) -> None:
        self.handle = MINTING_HANDLE
        self.failures = failures
        self.calls = 0
        self._delegate = InMemoryMintingService(MINTING_HANDLE)

    async def mint_receipt(self, uri: str) -> int:
        self.calls += 1
        if self.calls <= self.failures:
            raise MintingError("minting service unreachable")
        return await self._delegate.mint_receipt(uri)


def make_settings(**overrides) -> CampaignSettings:
    """Campaign selling 5 tickets at 10 between t=100 and t=200."""
    values = dict(
        name=f"campaign-{next(_campaign_ids)}",
        organizer="Test Organizer",
        description="Raffle used in tests",
        sale_start=100,
        sale_end=200,
        ticket_price=10,
        max_spend=1000,
        total_tickets=5,
        total_winners=2,
        minting_handle=MINTING_HANDLE,
    )
    values.update(overrides)
    return CampaignSettings(**values)


async def make_campaign(clock=None, seed=0, minting=None, **kwargs) -> RaffleCampaign:
    settings = kwargs.pop("settings", None) or make_settings()
    return await RaffleCampaign.create(
        settings,
        OPERATOR,
        minting or InMemoryMintingService(MINTING_HANDLE),
        kwargs.pop("seed_source", None) or FixedSeedSource(seed),
        clock=clock or FakeClock(),
        **kwargs,
    )


@pytest.fixture
def clock():
    return FakeClock(150)


@pytest.fixture
def minting():
    return InMemoryMintingService(MINTING_HANDLE)


@pytest_asyncio.fixture
async def campaign(clock, minting):
    """Campaign in its sale window, nothing sold yet."""
    return await make_campaign(clock=clock, minting=minting)


@pytest_asyncio.fixture
async def db_pool(tmp_path):
    """Temporary audit journal database."""
    pool = await init_db_pool(
        database_path=str(tmp_path / "audit.sqlite"),
        pool_size=2,
        busy_timeout_ms=1000,
    )
    await run_migrations(pool)
    yield pool
    await close_db_pool()
