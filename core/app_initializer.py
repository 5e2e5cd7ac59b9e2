"""Application initialization orchestrator."""

from __future__ import annotations

from contextlib import suppress
from typing import TYPE_CHECKING, Callable, Optional

from core.logger import get_logger, setup_logger

if TYPE_CHECKING:
    from config import Config
    from services.audit_service import AuditService
    from services.minting_service import MintingService
    from services.raffle_campaign import CampaignSettings, RaffleCampaign
    from services.randomness import SeedSource

logger = get_logger(__name__)


class ApplicationInitializer:
    """Wires configuration, audit journal and collaborators into a campaign."""

    def __init__(self, config: Optional["Config"] = None):
        if config is None:
            from config import load_config
            config = load_config()
        self.config = config
        self.db_pool = None
        self.audit_service: Optional["AuditService"] = None
        self.minting_service: Optional["MintingService"] = None
        self.seed_source: Optional["SeedSource"] = None
        self.campaign: Optional["RaffleCampaign"] = None

    async def initialize(self) -> None:
        """Initialize all application components."""
        self._init_logging()

        if self.config.audit_enabled:
            await self._init_database()
        else:
            logger.info("Audit journal disabled")

        self._init_minting()
        self._init_seed_source()

    async def create_campaign(
        self,
        operator: str,
        settings: Optional["CampaignSettings"] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "RaffleCampaign":
        """Create the campaign, journaling its events when auditing is on.

        Args:
            operator: Identity owning the campaign
            settings: Campaign parameters; read from ``CAMPAIGN_*`` if omitted
            clock: Optional time source, wall clock by default
        """
        from config import load_campaign_settings
        from services.notification_service import CampaignNotifier
        from services.raffle_campaign import RaffleCampaign

        if self.minting_service is None or self.seed_source is None:
            raise RuntimeError("ApplicationInitializer.initialize() must run first")

        settings = settings or load_campaign_settings(self.config.minting_handle)
        notifier = CampaignNotifier(settings.name)
        if self.audit_service is not None:
            journaled = await self.audit_service.count_events(settings.name)
            if journaled:
                logger.warning(
                    f"Journal already holds {journaled} events for campaign "
                    f"'{settings.name}', new events will be appended to them"
                )
            self.audit_service.attach(notifier)

        extra = {"clock": clock} if clock is not None else {}
        self.campaign = await RaffleCampaign.create(
            settings,
            operator,
            self.minting_service,
            self.seed_source,
            notifier=notifier,
            **extra,
        )
        logger.info(f"✅ Campaign '{settings.name}' ready")
        return self.campaign

    async def cleanup(self) -> None:
        """Cleanup resources."""
        from database import close_db_pool

        close = getattr(self.minting_service, "close", None)
        if close is not None:
            with suppress(Exception):
                await close()
        with suppress(Exception):
            await close_db_pool()
        self.db_pool = None

    def _init_logging(self) -> None:
        setup_logger(
            name="",
            level="DEBUG" if self.config.debug else self.config.log_level,
            log_file=self.config.log_file,
            colored=self.config.log_colored,
        )

    async def _init_database(self) -> None:
        """Initialize database pool, run migrations and the audit journal."""
        from database import init_db_pool, run_migrations
        from services.audit_service import AuditService

        self.db_pool = await init_db_pool(
            database_path=self.config.database_path,
            pool_size=self.config.db_pool_size,
            busy_timeout_ms=self.config.db_busy_timeout,
        )
        await run_migrations(self.db_pool)
        self.audit_service = AuditService()
        logger.info("✅ Audit journal initialized")

    def _init_minting(self) -> None:
        from services.minting_service import HttpMintingService, InMemoryMintingService

        if self.config.minting_service_url:
            self.minting_service = HttpMintingService(
                self.config.minting_service_url,
                self.config.minting_handle,
                timeout=self.config.minting_timeout,
            )
            logger.info(f"Minting through {self.config.minting_service_url}")
        else:
            self.minting_service = InMemoryMintingService(self.config.minting_handle)
            logger.info("Minting in memory (MINTING_SERVICE_URL not set)")

    def _init_seed_source(self) -> None:
        from services.randomness import RoundCounterSeedSource

        self.seed_source = RoundCounterSeedSource(self.config.seed_start)
