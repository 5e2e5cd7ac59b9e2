"""Application-wide exception classes."""

from __future__ import annotations

from typing import Optional

from core.constants import RejectionReason


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class DatabaseError(ApplicationError):
    """Base exception for database-related errors."""
    pass


class RepositoryError(DatabaseError):
    """Raised when repository operation fails."""
    pass


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class MintingError(ServiceError):
    """Raised when the minting service cannot issue a receipt."""
    pass


class CampaignError(ServiceError):
    """Base exception for raffle campaign operations."""
    pass


class CampaignValidationError(CampaignError):
    """Raised when campaign parameters are out of range."""
    pass


class CampaignPreconditionError(CampaignError):
    """Named rejection of a campaign operation. State is left untouched."""

    reason: RejectionReason

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.reason.value.replace("_", " "))


class SaleNotActiveError(CampaignPreconditionError):
    """Raised when buying outside of the sale window."""
    reason = RejectionReason.SALE_NOT_ACTIVE


class SaleStillOpenError(CampaignPreconditionError):
    """Raised when drawing before the sale window has closed."""
    reason = RejectionReason.SALE_STILL_OPEN


class SaleEndedError(CampaignPreconditionError):
    """Raised when cancelling at or after the end of the sale."""
    reason = RejectionReason.SALE_ENDED


class CampaignFinishedError(CampaignPreconditionError):
    """Raised when the campaign has been cancelled."""
    reason = RejectionReason.CAMPAIGN_FINISHED


class TicketAlreadyOwnedError(CampaignPreconditionError):
    """Raised when the ticket number has already been sold."""
    reason = RejectionReason.TICKET_ALREADY_OWNED


class OperatorPurchaseError(CampaignPreconditionError):
    """Raised when the campaign manager tries to buy a ticket."""
    reason = RejectionReason.OPERATOR_PURCHASE


class PurchaseLimitError(CampaignPreconditionError):
    """Raised when a buyer would exceed the maximum spend."""
    reason = RejectionReason.PURCHASE_LIMIT


class SoldOutError(CampaignPreconditionError):
    """Raised when every ticket has been sold."""
    reason = RejectionReason.SOLD_OUT


class NotOperatorError(CampaignPreconditionError):
    """Raised when a privileged operation is called by someone else."""
    reason = RejectionReason.NOT_OPERATOR


class NothingToDrawError(CampaignPreconditionError):
    """Raised when drawing from an empty pool."""
    reason = RejectionReason.NOTHING_TO_DRAW


class TicketNotFoundError(CampaignPreconditionError):
    """Raised when a ticket number is not where it is expected."""
    reason = RejectionReason.TICKET_NOT_FOUND


class NoWinnerError(CampaignPreconditionError):
    """Raised when no ticket has been drawn yet."""
    reason = RejectionReason.NO_WINNER


class TicketsAlreadySoldError(CampaignPreconditionError):
    """Raised when cancelling a campaign that already sold tickets."""
    reason = RejectionReason.TICKETS_ALREADY_SOLD


class CampaignInvariantError(CampaignError):
    """Internal state is corrupted. The operation is aborted."""

    reason: RejectionReason


class DuplicateTicketError(CampaignInvariantError, TicketNotFoundError):
    """Raised when a ticket number occurs more than once in the undrawn pool."""
    reason = RejectionReason.DUPLICATE_TICKET


class RemovalIndexError(CampaignInvariantError):
    """Raised when removing an index outside of the undrawn pool."""
    reason = RejectionReason.REMOVAL_INDEX
