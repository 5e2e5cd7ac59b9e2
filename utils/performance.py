"""Campaign monitoring utilities using Prometheus metrics."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Gauge, Histogram


tickets_sold_total = Counter(
    "raffle_tickets_sold_total", "Tickets sold", labelnames=("campaign",)
)
draws_total = Counter(
    "raffle_draws_total", "Tickets drawn", labelnames=("campaign", "mode")
)
rejections_total = Counter(
    "raffle_rejections_total",
    "Rejected campaign operations",
    labelnames=("campaign", "operation", "reason"),
)
undrawn_pool_size = Gauge(
    "raffle_undrawn_pool_size", "Sold tickets waiting to be drawn", labelnames=("campaign",)
)
drawn_pool_size = Gauge(
    "raffle_drawn_pool_size", "Tickets already drawn", labelnames=("campaign",)
)
mint_duration = Histogram(
    "raffle_mint_duration_seconds", "Minting service call duration", labelnames=("campaign",)
)


class CampaignMonitor:
    def __init__(self, campaign: str) -> None:
        self.campaign = campaign

    @contextmanager
    def track_mint(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            mint_duration.labels(campaign=self.campaign).observe(time.perf_counter() - start)

    def record_sale(self) -> None:
        tickets_sold_total.labels(campaign=self.campaign).inc()

    def record_draw(self, mode: str) -> None:
        draws_total.labels(campaign=self.campaign, mode=mode).inc()

    def record_rejection(self, operation: str, reason: str) -> None:
        rejections_total.labels(campaign=self.campaign, operation=operation, reason=reason).inc()

    def record_pools(self, undrawn: int, drawn: int) -> None:
        undrawn_pool_size.labels(campaign=self.campaign).set(undrawn)
        drawn_pool_size.labels(campaign=self.campaign).set(drawn)
