"""Campaign event journal queries."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.constants import AuditDefaults
from database.base_repository import BaseRepository
from database.models import CampaignEventRecord


class CampaignEventRepository(BaseRepository):

    @classmethod
    async def add_event(cls, campaign: str, event_type: str, payload: Dict[str, Any]) -> int:
        return await cls.insert(
            "INSERT INTO campaign_events (campaign, event_type, payload) VALUES (?, ?, ?)",
            (campaign, event_type, json.dumps(payload, sort_keys=True)),
        )

    @classmethod
    async def list_events(
        cls,
        campaign: Optional[str] = None,
        event_type: Optional[str] = None,
        limit: int = AuditDefaults.PAGE_SIZE,
        offset: int = 0,
    ) -> List[CampaignEventRecord]:
        """Events in emission order, optionally filtered."""
        query = "SELECT id, campaign, event_type, payload, created_at FROM campaign_events WHERE 1=1"
        params: List[Any] = []

        if campaign:
            query += " AND campaign = ?"
            params.append(campaign)

        if event_type:
            query += " AND event_type = ?"
            params.append(event_type)

        query += " ORDER BY id ASC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        rows = await cls.fetch_all(query, params)
        return [
            CampaignEventRecord(
                id=row[0],
                campaign=row[1],
                event_type=row[2],
                payload=json.loads(row[3]),
                created_at=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]

    @classmethod
    async def count_events(cls, campaign: str) -> int:
        value = await cls.fetch_value(
            "SELECT COUNT(*) FROM campaign_events WHERE campaign = ?", (campaign,)
        )
        return int(value or 0)
