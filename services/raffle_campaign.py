"""Raffle campaign: ticket sales and winner draws for one fixed-size raffle."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from core import get_logger, DrawMode
from core.exceptions import (
    CampaignFinishedError,
    CampaignError,
    CampaignInvariantError,
    CampaignValidationError,
    DuplicateTicketError,
    MintingError,
    NothingToDrawError,
    NotOperatorError,
    NoWinnerError,
    OperatorPurchaseError,
    PurchaseLimitError,
    RemovalIndexError,
    SaleEndedError,
    SaleNotActiveError,
    SaleStillOpenError,
    SoldOutError,
    TicketAlreadyOwnedError,
    TicketNotFoundError,
    TicketsAlreadySoldError,
)
from services.campaign_events import (
    CampaignCreated,
    CampaignDeleted,
    TicketBought,
    TicketDrawn,
)
from services.minting_service import MintingService
from services.notification_service import CampaignNotifier
from services.randomness import LinearCongruentialGenerator, SeedSource
from utils.performance import CampaignMonitor
from utils.validators import campaign_errors

logger = get_logger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CampaignSettings:
    """Immutable campaign parameters. Timestamps are in seconds."""
    name: str
    organizer: str
    description: str
    sale_start: float
    sale_end: float
    ticket_price: int
    max_spend: int
    total_tickets: int
    total_winners: int
    minting_handle: str

    @property
    def max_tickets_per_buyer(self) -> int:
        return self.max_spend // self.ticket_price


@dataclass(frozen=True, slots=True)
class CampaignSnapshot:
    finished: bool
    undrawn: int
    drawn: int
    total_sold: int
    remaining: int
    current_winner: Optional[int]
    revenue_sold: int


class RaffleCampaign:
    """State machine for one raffle.

    Every mutating operation runs under a single ``asyncio.Lock``, so
    purchases, draws and cancellation are applied one at a time. Their
    notifications are queued under the lock, in the same order as the state
    changes, and handed to listeners once the lock is released. Queries
    are synchronous and only ever see committed state.

    The ``owner`` may draw and cancel; the ``manager`` is barred from
    buying. Both default to the operator that created the campaign.
    """

    def __init__(
        self,
        settings: CampaignSettings,
        operator: str,
        minting: MintingService,
        seed_source: SeedSource,
        clock: Clock = time.time,
        notifier: Optional[CampaignNotifier] = None,
        monitor: Optional[CampaignMonitor] = None,
        manager: Optional[str] = None,
        generator: Optional[LinearCongruentialGenerator] = None,
    ) -> None:
        """Validate settings and set up an empty campaign.

        Args:
            settings: Campaign parameters
            operator: Identity that owns the campaign
            minting: Minting collaborator called once per purchase
            seed_source: Seed provider for automatic draws
            clock: Returns the current time in seconds
            notifier: Event dispatcher; a private one is created if omitted
            monitor: Metrics recorder; a default one is created if omitted
            manager: Identity excluded from buying; defaults to ``operator``
            generator: Draw-index generator; defaults to the standard LCG

        Raises:
            CampaignValidationError: If the settings violate a campaign limit
        """
        errors = campaign_errors(
            sale_start=settings.sale_start,
            sale_end=settings.sale_end,
            total_tickets=settings.total_tickets,
            total_winners=settings.total_winners,
            ticket_price=settings.ticket_price,
            max_spend=settings.max_spend,
        )
        if errors:
            logger.warning(f"Rejected campaign '{settings.name}': {'; '.join(errors)}")
            raise CampaignValidationError("; ".join(errors))

        self._settings = settings
        self._owner = operator
        self._manager = manager if manager is not None else operator
        self._minting = minting
        self._seed_source = seed_source
        self._clock = clock
        self._notifier = notifier or CampaignNotifier(settings.name)
        self._monitor = monitor or CampaignMonitor(settings.name)
        self._generator = generator or LinearCongruentialGenerator()

        self._finished = False
        self._undrawn: List[int] = []
        self._drawn: List[int] = []
        self._owners: Dict[int, str] = {}
        self._purchases: Dict[str, int] = {}
        self._uris: Dict[int, str] = {}
        self._receipts: Dict[int, int] = {}
        self._lock = asyncio.Lock()

    @classmethod
    async def create(
        cls,
        settings: CampaignSettings,
        operator: str,
        minting: MintingService,
        seed_source: SeedSource,
        **kwargs,
    ) -> "RaffleCampaign":
        """Create a campaign and announce it with ``CampaignCreated``."""
        campaign = cls(settings, operator, minting, seed_source, **kwargs)
        logger.info(
            f"Created campaign '{settings.name}' by {settings.organizer}: "
            f"{settings.total_tickets} tickets at {settings.ticket_price}, "
            f"sale {settings.sale_start} -> {settings.sale_end}"
        )
        await campaign._notifier.publish(
            CampaignCreated(finished=campaign._finished, minting_handle=settings.minting_handle)
        )
        return campaign

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def settings(self) -> CampaignSettings:
        return self._settings

    @property
    def name(self) -> str:
        return self._settings.name

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def manager(self) -> str:
        return self._manager

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def notifier(self) -> CampaignNotifier:
        return self._notifier

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def buy_ticket(self, buyer: str, ticket_number: int, uri: str) -> int:
        """Sell ``ticket_number`` to ``buyer`` and mint its receipt.

        The receipt is minted before anything is recorded, so a minting
        failure leaves the ticket unsold and the purchase can be retried.

        Args:
            buyer: Identity of the buyer
            ticket_number: Ticket chosen by the buyer
            uri: Metadata URI passed to the minting service

        Returns:
            Receipt id issued by the minting service

        Raises:
            CampaignPreconditionError: If any purchase rule is violated
            MintingError: If the minting service fails
        """
        async with self._lock:
            self._check_purchase(buyer, ticket_number)

            try:
                with self._monitor.track_mint():
                    receipt_id = await self._minting.mint_receipt(uri)
            except MintingError as e:
                self._monitor.record_rejection("buy", "minting_failed")
                logger.error(f"[{self.name}] Minting failed for ticket {ticket_number}: {e}")
                raise

            self._undrawn.append(ticket_number)
            self._uris[ticket_number] = uri
            self._receipts[ticket_number] = receipt_id
            self._owners[ticket_number] = buyer
            self._purchases[buyer] = self._purchases.get(buyer, 0) + 1

            self._monitor.record_sale()
            self._record_pools()
            logger.info(
                f"[{self.name}] {buyer} bought ticket {ticket_number} (receipt {receipt_id})"
            )
            self._notifier.enqueue(
                TicketBought(ticket_number=ticket_number, receipt_id=receipt_id, uri=uri)
            )
        await self._notifier.flush()
        return receipt_id

    async def draw_ticket_manual(self, caller: str, ticket_number: int) -> int:
        """Draw a ticket picked by the operator.

        Raises:
            TicketNotFoundError: If the ticket is not in the undrawn pool
            DuplicateTicketError: If it occurs more than once there
        """
        async with self._lock:
            self._check_draw(caller, "draw_manual")

            matches = [
                index for index, number in enumerate(self._undrawn) if number == ticket_number
            ]
            if not matches:
                raise self._reject(
                    "draw_manual",
                    TicketNotFoundError(f"Ticket {ticket_number} is not in the undrawn pool"),
                )
            if len(matches) > 1:
                raise self._reject(
                    "draw_manual",
                    DuplicateTicketError(
                        f"Ticket {ticket_number} appears {len(matches)} times in the undrawn pool"
                    ),
                )

            ticket = self._draw_at(matches[0], DrawMode.MANUAL, "draw_manual")
        await self._notifier.flush()
        return ticket

    async def draw_ticket_auto(self, caller: str) -> int:
        """Draw the ticket at the index derived from the seed source."""
        async with self._lock:
            self._check_draw(caller, "draw_auto")

            seed = self._seed_source.current_seed()
            index = self._generator.draw_index(seed, len(self._undrawn))
            logger.info(f"[{self.name}] Seed {seed} picked index {index} of {len(self._undrawn)}")

            ticket = self._draw_at(index, DrawMode.AUTO, "draw_auto")
        await self._notifier.flush()
        return ticket

    async def cancel(self, caller: str) -> None:
        """Cancel the campaign before anything has been sold. Irreversible."""
        async with self._lock:
            if caller != self._owner:
                raise self._reject("cancel", NotOperatorError(f"{caller} is not the campaign owner"))
            if self._finished:
                raise self._reject("cancel", CampaignFinishedError())
            sold = self.total_sold()
            if sold > 0:
                raise self._reject(
                    "cancel", TicketsAlreadySoldError(f"{sold} tickets have already been sold")
                )
            if self._clock() >= self._settings.sale_end:
                raise self._reject("cancel", SaleEndedError())

            self._finished = True
            logger.info(f"[{self.name}] Campaign cancelled by {caller}")
            self._notifier.enqueue(CampaignDeleted(finished=self._finished))
        await self._notifier.flush()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_purchase(self, buyer: str, ticket_number: int) -> None:
        now = self._clock()
        if not self._settings.sale_start < now < self._settings.sale_end:
            raise self._reject("buy", SaleNotActiveError(f"Sale is not active at {now}"))
        if self._finished:
            raise self._reject("buy", CampaignFinishedError())
        if ticket_number in self._owners:
            raise self._reject(
                "buy", TicketAlreadyOwnedError(f"Ticket {ticket_number} is already owned")
            )
        if buyer == self._manager:
            raise self._reject("buy", OperatorPurchaseError())
        limit = self._settings.max_tickets_per_buyer
        if self._purchases.get(buyer, 0) >= limit:
            raise self._reject(
                "buy", PurchaseLimitError(f"{buyer} already holds the maximum of {limit} tickets")
            )
        if len(self._undrawn) >= self._settings.total_tickets:
            raise self._reject("buy", SoldOutError())

    def _check_draw(self, caller: str, operation: str) -> None:
        if caller != self._owner:
            raise self._reject(operation, NotOperatorError(f"{caller} is not the campaign owner"))
        if not self._undrawn:
            raise self._reject(operation, NothingToDrawError())
        now = self._clock()
        if now <= self._settings.sale_end:
            raise self._reject(operation, SaleStillOpenError(f"Sale is still open at {now}"))
        if self._finished:
            raise self._reject(operation, CampaignFinishedError())

    def _draw_at(self, index: int, mode: DrawMode, operation: str) -> int:
        ticket_number = self._remove_at(index, operation)
        self._drawn.append(ticket_number)

        self._monitor.record_draw(mode.value)
        self._record_pools()
        logger.info(f"[{self.name}] Drew ticket {ticket_number} ({mode.value}, index {index})")
        self._notifier.enqueue(TicketDrawn(removal_index=index, ticket_number=ticket_number))
        return ticket_number

    def _remove_at(self, index: int, operation: str) -> int:
        """Remove ``index`` from the undrawn pool, shifting later tickets left."""
        if not 0 <= index < len(self._undrawn):
            raise self._reject(
                operation,
                RemovalIndexError(f"Index {index} outside undrawn pool of {len(self._undrawn)}"),
            )
        return self._undrawn.pop(index)

    def _reject(
        self, operation: str, error: CampaignError
    ) -> CampaignError:
        self._monitor.record_rejection(operation, error.reason.value)
        if isinstance(error, CampaignInvariantError):
            logger.error(f"[{self.name}] {operation} aborted, state is inconsistent: {error}")
        else:
            logger.warning(f"[{self.name}] {operation} rejected ({error.reason.value}): {error}")
        return error

    def _record_pools(self) -> None:
        self._monitor.record_pools(len(self._undrawn), len(self._drawn))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_current_winner(self) -> int:
        """Most recently drawn ticket."""
        if not self._drawn:
            raise NoWinnerError("No ticket has been drawn yet")
        return self._drawn[-1]

    def get_current_winner_owner(self) -> str:
        return self._owners[self.get_current_winner()]

    def total_sold(self) -> int:
        return len(self._undrawn) + len(self._drawn)

    def undrawn_count(self) -> int:
        return len(self._undrawn)

    def drawn_count(self) -> int:
        return len(self._drawn)

    def undrawn_tickets(self) -> Tuple[int, ...]:
        return tuple(self._undrawn)

    def drawn_tickets(self) -> Tuple[int, ...]:
        return tuple(self._drawn)

    def tickets_of(self, buyer: str) -> int:
        return self._purchases.get(buyer, 0)

    def spent_by(self, buyer: str) -> int:
        return self.tickets_of(buyer) * self._settings.ticket_price

    def owner_of(self, ticket_number: int) -> str:
        try:
            return self._owners[ticket_number]
        except KeyError:
            raise TicketNotFoundError(f"Ticket {ticket_number} has not been sold") from None

    def ticket_uri(self, ticket_number: int) -> str:
        try:
            return self._uris[ticket_number]
        except KeyError:
            raise TicketNotFoundError(f"Ticket {ticket_number} has not been sold") from None

    def receipt_of(self, ticket_number: int) -> int:
        try:
            return self._receipts[ticket_number]
        except KeyError:
            raise TicketNotFoundError(f"Ticket {ticket_number} has not been sold") from None

    def remaining_tickets(self) -> int:
        return self._settings.total_tickets - self.total_sold()

    def revenue_sold(self) -> int:
        return self.total_sold() * self._settings.ticket_price

    def revenue_all(self) -> int:
        """Revenue if every ticket were sold."""
        return self._settings.total_tickets * self._settings.ticket_price

    def snapshot(self) -> CampaignSnapshot:
        return CampaignSnapshot(
            finished=self._finished,
            undrawn=len(self._undrawn),
            drawn=len(self._drawn),
            total_sold=self.total_sold(),
            remaining=self.remaining_tickets(),
            current_winner=self._drawn[-1] if self._drawn else None,
            revenue_sold=self.revenue_sold(),
        )
