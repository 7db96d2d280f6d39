"""
Notifications emitted by campaign and donation events.
"""
from typing import List, Optional

from crowdfund.models.campaign import Campaign
from crowdfund.models.donation import Donation
from crowdfund.models.notification import NotificationTargetType
from crowdfund.schemas.notification import NotificationCreate


def campaign_approved(campaign: Campaign) -> List[NotificationCreate]:
    return [
        NotificationCreate(
            title=f"New campaign: {campaign.name}",
            content=f"'{campaign.name}' is now open for donations.",
            target_type=NotificationTargetType.NEW_CAMPAIGN,
        ),
        NotificationCreate(
            title="Campaign accepted",
            content=f"Your campaign '{campaign.name}' has been approved and is now active.",
            target_type=NotificationTargetType.FUNDRAISERS,
            detail=campaign.id,
        ),
    ]


def campaign_rejected(campaign: Campaign, reason: Optional[str] = None) -> List[NotificationCreate]:
    content = f"Your campaign '{campaign.name}' has been rejected."
    if reason and reason.strip():
        content = f"{content} Reason: {reason.strip()}"
    return [
        NotificationCreate(
            title="Campaign rejected",
            content=content,
            target_type=NotificationTargetType.FUNDRAISERS,
            detail=campaign.id,
        ),
    ]


def campaign_completed(campaign: Campaign) -> List[NotificationCreate]:
    return [
        NotificationCreate(
            title="Campaign completed",
            content=(
                f"Your campaign '{campaign.name}' is completed with "
                f"{campaign.collected_amount} of {campaign.target_amount} collected."
            ),
            target_type=NotificationTargetType.FUNDRAISERS,
            detail=campaign.id,
        ),
        NotificationCreate(
            title="Campaign completed",
            content=f"'{campaign.name}', a campaign you donated to, is completed. Thank you!",
            target_type=NotificationTargetType.DONORS,
            detail=campaign.id,
        ),
    ]


def donation_received(campaign: Campaign, donation: Donation) -> List[NotificationCreate]:
    return [
        NotificationCreate(
            title="New donation received",
            content=f"Your campaign '{campaign.name}' received a donation of {donation.amount}.",
            target_type=NotificationTargetType.FUNDRAISERS,
            detail=campaign.id,
        ),
    ]
