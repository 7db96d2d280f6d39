"""
Donation service - records donations and detects campaign completion.
"""
import logging
from typing import List, Optional

from crowdfund.core.exceptions import (
    ForbiddenError, InvalidOperationError, NotFoundError, StorageError, ValidationError
)
from crowdfund.models.campaign import CampaignStatus
from crowdfund.models.donation import Donation
from crowdfund.repositories.interfaces import CampaignStore, DonationStore
from crowdfund.services import campaign_state, notices
from crowdfund.services.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


class DonationService:
    """Service for donation operations."""

    def __init__(
        self,
        donation_store: DonationStore,
        campaign_store: CampaignStore,
        dispatcher: NotificationDispatcher
    ):
        self.donation_store = donation_store
        self.campaign_store = campaign_store
        self.dispatcher = dispatcher

    async def make_donation(
        self,
        donor_id: int,
        campaign_id: int,
        amount: int,
        message: Optional[str] = None
    ) -> Donation:
        """
        Record a donation against an Active campaign.

        The donation insert and the collected_amount increment commit together.
        Completion and fundraiser notifications happen afterwards and never fail
        the donation.
        """
        if amount <= 0:
            raise ValidationError("Donation amount must be positive")

        campaign = await self.campaign_store.get(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign", campaign_id)
        if not campaign_state.accepts_donations(campaign.status):
            raise InvalidOperationError(
                f"Campaign is not accepting donations (status: {campaign.status.value})"
            )

        donation = await self.donation_store.record(Donation(
            donor_id=donor_id,
            campaign_id=campaign_id,
            amount=amount,
            message=message,
        ))
        if donation is None:
            # Completed between our read and the write; nothing was stored
            raise InvalidOperationError("Campaign is no longer accepting donations")

        logger.info(f"Donation {donation.id} of {amount} recorded for campaign {campaign_id}")

        try:
            await self._complete_if_goal_reached(campaign_id)
        except StorageError as e:
            logger.error(f"Completion check failed for campaign {campaign_id}: {e.message}")

        self.dispatcher.submit_all(notices.donation_received(campaign, donation))
        return donation

    async def _complete_if_goal_reached(self, campaign_id: int) -> bool:
        """
        Complete the campaign if the goal is reached.
        Concurrent donors may all see the goal reached; only the one whose
        conditional update changes the row emits the completion notifications.
        """
        campaign = await self.campaign_store.get(campaign_id)
        if not campaign or campaign.status != CampaignStatus.ACTIVE or not campaign.goal_reached:
            return False

        campaign_state.complete(campaign.status)
        if not await self.campaign_store.complete_if_goal_reached(campaign_id):
            logger.info(f"Campaign {campaign_id} already completed by a concurrent donation")
            return False

        campaign.status = CampaignStatus.COMPLETED
        logger.info(
            f"Campaign {campaign_id} completed "
            f"({campaign.collected_amount}/{campaign.target_amount})"
        )
        self.dispatcher.submit_all(notices.campaign_completed(campaign))
        return True

    async def delete_donation_message(self, donation_id: int, requesting_user_id: int) -> None:
        """Clear the message of the caller's own donation."""
        updated = await self.donation_store.clear_message(donation_id, requesting_user_id)
        if updated:
            return

        donation = await self.donation_store.get(donation_id)
        if not donation:
            raise NotFoundError("Donation", donation_id)
        raise ForbiddenError("You cannot delete this donation message")

    async def get_donation(self, donation_id: int) -> Donation:
        donation = await self.donation_store.get(donation_id)
        if not donation:
            raise NotFoundError("Donation", donation_id)
        return donation

    async def get_donations_by_campaign(self, campaign_id: int) -> List[Donation]:
        if not await self.campaign_store.get(campaign_id):
            raise NotFoundError("Campaign", campaign_id)
        return await self.donation_store.list_by_campaign(campaign_id)

    async def get_donations_by_donor(self, donor_id: int) -> List[Donation]:
        return await self.donation_store.list_by_donor(donor_id)
