"""Data access layer models implemented with handcrafted queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(slots=True)
class CampaignEventRecord:
    id: int
    campaign: str
    event_type: str
    payload: Dict[str, Any]
    created_at: datetime
