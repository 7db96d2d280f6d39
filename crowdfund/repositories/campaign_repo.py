"""
Campaign repository.
"""
from typing import Optional, List
from datetime import datetime

from sqlmodel import select
from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.models.campaign import Campaign, CampaignStatus
from crowdfund.repositories.base import BaseRepository, storage_call
from crowdfund.repositories.interfaces import CampaignStore


class CampaignRepository(BaseRepository[Campaign], CampaignStore):
    """PostgreSQL campaign store."""

    def __init__(self, session: AsyncSession):
        super().__init__(Campaign, session)

    @storage_call
    async def list_by_owner(self, owner_id: int) -> List[Campaign]:
        query = select(Campaign).where(
            Campaign.owner_id == owner_id
        ).order_by(Campaign.created_at.desc())
        result = await self.session.exec(query)
        return result.all()

    async def list_by_status(self, status: CampaignStatus, page: int = 1, limit: int = 20) -> dict:
        return await self.list_paginated(filters={"status": status}, page=page, limit=limit)

    @storage_call
    async def transition_status(
        self,
        campaign_id: int,
        expected: CampaignStatus,
        new_status: CampaignStatus
    ) -> Optional[Campaign]:
        """Status write guarded by the status the caller read."""
        stmt = (
            update(Campaign)
            .where(Campaign.id == campaign_id, Campaign.status == expected)
            .values(status=new_status, updated_at=datetime.utcnow())
        )
        result = await self.session.exec(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            return None
        return await self.session.get(Campaign, campaign_id, populate_existing=True)

    @storage_call
    async def complete_if_goal_reached(self, campaign_id: int) -> bool:
        stmt = (
            update(Campaign)
            .where(
                Campaign.id == campaign_id,
                Campaign.status == CampaignStatus.ACTIVE,
                Campaign.collected_amount >= Campaign.target_amount,
            )
            .values(status=CampaignStatus.COMPLETED, updated_at=datetime.utcnow())
        )
        result = await self.session.exec(stmt)
        await self.session.commit()
        return result.rowcount == 1

    @storage_call
    async def set_evidence(self, campaign_id: int, evidence_url: str) -> Optional[Campaign]:
        now = datetime.utcnow()
        stmt = (
            update(Campaign)
            .where(Campaign.id == campaign_id)
            .values(evidence_url=evidence_url, evidence_uploaded_at=now, updated_at=now)
        )
        result = await self.session.exec(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            return None
        return await self.session.get(Campaign, campaign_id, populate_existing=True)
