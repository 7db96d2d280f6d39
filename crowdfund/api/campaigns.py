"""
Campaigns API routes.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from crowdfund.config import settings
from crowdfund.core.pagination import PaginatedResponse
from crowdfund.models.campaign import CampaignStatus
from crowdfund.models.user import User
from crowdfund.schemas.campaign import (
    CampaignCreate, CampaignEvidence, CampaignReject, CampaignResponse
)
from crowdfund.schemas.donation import DonationResponse
from crowdfund.services.campaign_service import CampaignService
from crowdfund.services.donation_service import DonationService
from crowdfund.api.deps import (
    get_campaign_service, get_current_admin, get_current_user, get_donation_service
)

router = APIRouter(prefix=f"{settings.API_PREFIX}/campaigns", tags=["campaigns"])


@router.post("/", response_model=CampaignResponse, status_code=201)
async def create_campaign(
    campaign_data: CampaignCreate,
    current_user: User = Depends(get_current_user),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """Create a new campaign. It stays Pending until an admin reviews it."""
    return await campaign_service.create(current_user.id, campaign_data)


@router.get("/", response_model=PaginatedResponse[CampaignResponse])
async def list_campaigns(
    status: CampaignStatus = CampaignStatus.ACTIVE,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """List campaigns by status (Active by default)."""
    return await campaign_service.list_by_status(status, page, limit)


@router.get("/mine", response_model=List[CampaignResponse])
async def list_my_campaigns(
    current_user: User = Depends(get_current_user),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """List the caller's campaigns."""
    return await campaign_service.list_by_owner(current_user.id)


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: int,
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """Get a campaign by ID."""
    return await campaign_service.get(campaign_id)


@router.put("/{campaign_id}/approve", response_model=CampaignResponse)
async def approve_campaign(
    campaign_id: int,
    admin: User = Depends(get_current_admin),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """Approve a pending or rejected campaign."""
    return await campaign_service.approve(campaign_id)


@router.put("/{campaign_id}/reject", response_model=CampaignResponse)
async def reject_campaign(
    campaign_id: int,
    body: Optional[CampaignReject] = None,
    admin: User = Depends(get_current_admin),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """Reject a pending campaign."""
    reason = body.reason if body else None
    return await campaign_service.reject(campaign_id, reason)


@router.put("/{campaign_id}/complete", response_model=CampaignResponse)
async def complete_campaign(
    campaign_id: int,
    current_user: User = Depends(get_current_user),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """Close an active campaign (owner or admin)."""
    return await campaign_service.complete(campaign_id, requester=current_user)


@router.put("/{campaign_id}/evidence", response_model=CampaignResponse)
async def upload_evidence(
    campaign_id: int,
    evidence: CampaignEvidence,
    current_user: User = Depends(get_current_user),
    campaign_service: CampaignService = Depends(get_campaign_service)
):
    """Attach proof of fund usage."""
    return await campaign_service.upload_evidence(campaign_id, current_user, evidence.evidence_url)


@router.get("/{campaign_id}/donations", response_model=List[DonationResponse])
async def list_campaign_donations(
    campaign_id: int,
    donation_service: DonationService = Depends(get_donation_service)
):
    """List donations made to a campaign."""
    return await donation_service.get_donations_by_campaign(campaign_id)
