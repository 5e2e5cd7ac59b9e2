"""Campaign-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


# Campaign limits
class CampaignLimits:
    """Bounds enforced when a campaign is created."""
    MIN_TOTAL_TICKETS = 1  # exclusive
    MAX_TOTAL_TICKETS = 25000  # exclusive


# Draw generator
class LcgDefaults:
    """Linear congruential generator parameters used for automatic draws."""
    MULTIPLIER = 1103515245
    INCREMENT = 12345
    MODULUS = 2 ** 32


# Minting collaborator
class MintingDefaults:
    """Minting service client defaults."""
    RECEIPTS_PATH = "/receipts"
    TIMEOUT = 10  # seconds
    FIRST_RECEIPT_ID = 0


# Audit journal
class AuditDefaults:
    """Audit journal defaults."""
    PAGE_SIZE = 100


class DrawMode(str, Enum):
    """How a winning ticket was selected."""
    MANUAL = "manual"
    AUTO = "auto"


class CampaignEventType(str, Enum):
    """Notification names emitted by a campaign."""
    CAMPAIGN_CREATED = "CampaignCreated"
    TICKET_BOUGHT = "TicketBought"
    TICKET_DRAWN = "TicketDrawn"
    CAMPAIGN_DELETED = "CampaignDeleted"


class RejectionReason(str, Enum):
    """Stable identifiers for rejected campaign operations."""
    SALE_NOT_ACTIVE = "sale_not_active"
    SALE_STILL_OPEN = "sale_still_open"
    SALE_ENDED = "sale_ended"
    CAMPAIGN_FINISHED = "campaign_finished"
    TICKET_ALREADY_OWNED = "ticket_already_owned"
    OPERATOR_PURCHASE = "operator_purchase"
    PURCHASE_LIMIT = "purchase_limit"
    SOLD_OUT = "sold_out"
    NOT_OPERATOR = "not_operator"
    NOTHING_TO_DRAW = "nothing_to_draw"
    TICKET_NOT_FOUND = "ticket_not_found"
    NO_WINNER = "no_winner"
    TICKETS_ALREADY_SOLD = "tickets_already_sold"
    DUPLICATE_TICKET = "duplicate_ticket"
    REMOVAL_INDEX = "removal_index"
