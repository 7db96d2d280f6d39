"""
Donation repository.
"""
from typing import Optional, List
from datetime import datetime

from sqlmodel import select
from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.models.campaign import Campaign, CampaignStatus
from crowdfund.models.donation import Donation
from crowdfund.repositories.base import BaseRepository, storage_call
from crowdfund.repositories.interfaces import DonationStore


class DonationRepository(BaseRepository[Donation], DonationStore):
    """PostgreSQL donation store."""

    def __init__(self, session: AsyncSession):
        super().__init__(Donation, session)

    @storage_call
    async def record(self, donation: Donation) -> Optional[Donation]:
        """Insert the donation and bump collected_amount atomically."""
        try:
            self.session.add(donation)
            await self.session.flush()

            # Increment in SQL so concurrent donations serialize on the row lock
            stmt = (
                update(Campaign)
                .where(
                    Campaign.id == donation.campaign_id,
                    Campaign.status == CampaignStatus.ACTIVE,
                )
                .values(
                    collected_amount=Campaign.collected_amount + donation.amount,
                    updated_at=datetime.utcnow(),
                )
            )
            result = await self.session.exec(stmt)
            if result.rowcount == 0:
                await self.session.rollback()
                return None

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(donation)
        return donation

    @storage_call
    async def list_by_campaign(self, campaign_id: int) -> List[Donation]:
        query = select(Donation).where(
            Donation.campaign_id == campaign_id
        ).order_by(Donation.created_at.desc())
        result = await self.session.exec(query)
        return result.all()

    @storage_call
    async def list_by_donor(self, donor_id: int) -> List[Donation]:
        query = select(Donation).where(
            Donation.donor_id == donor_id
        ).order_by(Donation.created_at.desc())
        result = await self.session.exec(query)
        return result.all()

    @storage_call
    async def clear_message(self, donation_id: int, donor_id: int) -> int:
        stmt = (
            update(Donation)
            .where(Donation.id == donation_id, Donation.donor_id == donor_id)
            .values(message=None)
        )
        result = await self.session.exec(stmt)
        await self.session.commit()
        return result.rowcount
