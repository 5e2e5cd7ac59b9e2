"""Input validation helpers."""

from core.constants import CampaignLimits


def validate_sale_window(sale_start: float, sale_end: float) -> bool:
    return sale_start < sale_end


def validate_ticket_supply(total_tickets: int) -> bool:
    """Supply must lie strictly between the campaign limits."""
    return CampaignLimits.MIN_TOTAL_TICKETS < total_tickets < CampaignLimits.MAX_TOTAL_TICKETS


def validate_winner_count(total_tickets: int, total_winners: int) -> bool:
    return total_tickets > total_winners


def validate_pricing(ticket_price: int, max_spend: int) -> bool:
    """Price must be positive so the per-buyer limit can be derived."""
    return ticket_price > 0 and max_spend >= 0


def campaign_errors(
    sale_start: float,
    sale_end: float,
    total_tickets: int,
    total_winners: int,
    ticket_price: int,
    max_spend: int,
) -> list[str]:
    """Collect every violated campaign constraint as a readable message."""
    errors = []
    if not validate_sale_window(sale_start, sale_end):
        errors.append(f"sale_start ({sale_start}) must be before sale_end ({sale_end})")
    if not validate_ticket_supply(total_tickets):
        errors.append(
            f"total_tickets ({total_tickets}) must be between "
            f"{CampaignLimits.MIN_TOTAL_TICKETS} and {CampaignLimits.MAX_TOTAL_TICKETS} (exclusive)"
        )
    if not validate_winner_count(total_tickets, total_winners):
        errors.append(
            f"total_tickets ({total_tickets}) must exceed total_winners ({total_winners})"
        )
    if not validate_pricing(ticket_price, max_spend):
        errors.append(
            f"ticket_price ({ticket_price}) must be positive and max_spend ({max_spend}) non-negative"
        )
    return errors
