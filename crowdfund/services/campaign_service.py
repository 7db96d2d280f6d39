"""
Campaign service - campaign creation and review (approve/reject/complete).
"""
import logging
from typing import Optional, List, Tuple
from datetime import datetime

from crowdfund.core.exceptions import (
    ForbiddenError, InvalidOperationError, NotFoundError, ValidationError
)
from crowdfund.models.campaign import Campaign, CampaignStatus
from crowdfund.models.user import User
from crowdfund.repositories.interfaces import CampaignStore
from crowdfund.schemas.campaign import CampaignCreate
from crowdfund.services import campaign_state, notices
from crowdfund.services.campaign_state import CampaignAction
from crowdfund.services.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

# Status writes that lose a race are re-evaluated against the fresh status
TRANSITION_ATTEMPTS = 3


class CampaignService:
    """Service for campaign operations."""

    def __init__(self, campaign_store: CampaignStore, dispatcher: NotificationDispatcher):
        self.campaign_store = campaign_store
        self.dispatcher = dispatcher

    async def create(self, owner_id: int, campaign_data: CampaignCreate) -> Campaign:
        """Create a new campaign awaiting review."""
        if not campaign_data.name.strip():
            raise ValidationError("Campaign name cannot be empty")
        if campaign_data.target_amount <= 0:
            raise ValidationError("Target amount must be positive")

        start_date = campaign_data.start_date or datetime.utcnow()
        if campaign_data.end_date <= start_date:
            raise ValidationError("End date must be after the start date")

        campaign = await self.campaign_store.create({
            "owner_id": owner_id,
            "name": campaign_data.name.strip(),
            "description": campaign_data.description,
            "target_amount": campaign_data.target_amount,
            "collected_amount": 0,
            "status": CampaignStatus.PENDING,
            "start_date": start_date,
            "end_date": campaign_data.end_date,
        })
        logger.info(f"Campaign {campaign.id} '{campaign.name}' created by user {owner_id}")
        return campaign

    async def get(self, campaign_id: int) -> Campaign:
        """Get a campaign by ID."""
        campaign = await self.campaign_store.get(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign", campaign_id)
        return campaign

    async def list_by_owner(self, owner_id: int) -> List[Campaign]:
        return await self.campaign_store.list_by_owner(owner_id)

    async def list_by_status(
        self,
        status: CampaignStatus = CampaignStatus.ACTIVE,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        return await self.campaign_store.list_by_status(status, page, limit)

    async def approve(self, campaign_id: int) -> Campaign:
        """Approve a pending or rejected campaign."""
        campaign = await self._apply(campaign_id, CampaignAction.APPROVE)
        self.dispatcher.submit_all(notices.campaign_approved(campaign))
        return campaign

    async def reject(self, campaign_id: int, reason: Optional[str] = None) -> Campaign:
        """Reject a pending campaign."""
        campaign = await self._apply(campaign_id, CampaignAction.REJECT)
        self.dispatcher.submit_all(notices.campaign_rejected(campaign, reason))
        return campaign

    async def complete(self, campaign_id: int, requester: Optional[User] = None) -> Campaign:
        """
        Close an active campaign.
        With a requester, only admins and the campaign owner may do this.
        """
        campaign = await self._apply(campaign_id, CampaignAction.COMPLETE, requester)
        self.dispatcher.submit_all(notices.campaign_completed(campaign))
        return campaign

    async def upload_evidence(self, campaign_id: int, requester: User, evidence_url: str) -> Campaign:
        """Attach proof of fund usage to an active or completed campaign."""
        campaign = await self.get(campaign_id)
        self._ensure_can_manage(campaign, requester)

        if not evidence_url.strip():
            raise ValidationError("Evidence URL cannot be empty")
        if campaign.status not in (CampaignStatus.ACTIVE, CampaignStatus.COMPLETED):
            raise InvalidOperationError(
                f"Cannot upload evidence for a {campaign.status.value.lower()} campaign"
            )

        updated = await self.campaign_store.set_evidence(campaign_id, evidence_url.strip())
        if not updated:
            raise NotFoundError("Campaign", campaign_id)
        return updated

    async def _apply(
        self,
        campaign_id: int,
        action: CampaignAction,
        requester: Optional[User] = None
    ) -> Campaign:
        for _ in range(TRANSITION_ATTEMPTS):
            campaign = await self.get(campaign_id)
            if requester is not None:
                self._ensure_can_manage(campaign, requester)

            old_status = campaign.status
            new_status = campaign_state.transition(old_status, action)

            updated = await self.campaign_store.transition_status(campaign_id, old_status, new_status)
            if updated is not None:
                logger.info(
                    f"Campaign {campaign_id} {action.value}: "
                    f"{old_status.value} -> {new_status.value}"
                )
                return updated

        raise InvalidOperationError("Campaign status changed concurrently, please retry")

    @staticmethod
    def _ensure_can_manage(campaign: Campaign, requester: User) -> None:
        if requester.is_admin or requester.id == campaign.owner_id:
            return
        raise ForbiddenError("Only the campaign owner or an admin can do this")
