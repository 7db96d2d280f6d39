"""
Campaign lifecycle state machine.
Pure decision logic: no storage access, no side effects.
"""
from enum import Enum
from typing import Dict, Tuple, Union

from crowdfund.core.exceptions import InvalidOperationError
from crowdfund.models.campaign import CampaignStatus


class CampaignAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    COMPLETE = "complete"


# (status, action) -> next status, or the reason the action is refused.
# Every pair is listed so the table can be checked for completeness.
TRANSITIONS: Dict[Tuple[CampaignStatus, CampaignAction], Union[CampaignStatus, str]] = {
    (CampaignStatus.PENDING, CampaignAction.APPROVE): CampaignStatus.ACTIVE,
    (CampaignStatus.PENDING, CampaignAction.REJECT): CampaignStatus.REJECTED,
    (CampaignStatus.PENDING, CampaignAction.COMPLETE): "Cannot complete a pending campaign",

    (CampaignStatus.ACTIVE, CampaignAction.APPROVE): "Campaign is already active",
    (CampaignStatus.ACTIVE, CampaignAction.REJECT): "Cannot reject an active campaign",
    (CampaignStatus.ACTIVE, CampaignAction.COMPLETE): CampaignStatus.COMPLETED,

    (CampaignStatus.REJECTED, CampaignAction.APPROVE): CampaignStatus.ACTIVE,
    (CampaignStatus.REJECTED, CampaignAction.REJECT): "Campaign is already rejected",
    (CampaignStatus.REJECTED, CampaignAction.COMPLETE): "Cannot complete a rejected campaign",

    (CampaignStatus.COMPLETED, CampaignAction.APPROVE): "Cannot approve a completed campaign",
    (CampaignStatus.COMPLETED, CampaignAction.REJECT): "Cannot reject a completed campaign",
    (CampaignStatus.COMPLETED, CampaignAction.COMPLETE): "Campaign is already completed",
}


def transition(status: CampaignStatus, action: CampaignAction) -> CampaignStatus:
    """
    Apply an action to a campaign status.

    Returns:
        The next status.

    Raises:
        InvalidOperationError: the action is not allowed from `status`.
    """
    outcome = TRANSITIONS[(CampaignStatus(status), CampaignAction(action))]
    if isinstance(outcome, CampaignStatus):
        return outcome
    raise InvalidOperationError(outcome)


def approve(status: CampaignStatus) -> CampaignStatus:
    return transition(status, CampaignAction.APPROVE)


def reject(status: CampaignStatus) -> CampaignStatus:
    return transition(status, CampaignAction.REJECT)


def complete(status: CampaignStatus) -> CampaignStatus:
    return transition(status, CampaignAction.COMPLETE)


def accepts_donations(status: CampaignStatus) -> bool:
    return CampaignStatus(status) == CampaignStatus.ACTIVE
