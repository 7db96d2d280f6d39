"""
Donations API routes.
"""
from typing import List
from fastapi import APIRouter, Depends, Response

from crowdfund.config import settings
from crowdfund.models.user import User
from crowdfund.schemas.donation import DonationCreate, DonationResponse
from crowdfund.services.donation_service import DonationService
from crowdfund.api.deps import get_current_user, get_donation_service

router = APIRouter(prefix=f"{settings.API_PREFIX}/donations", tags=["donations"])


@router.post("/", response_model=DonationResponse, status_code=201)
async def make_donation(
    donation_data: DonationCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    donation_service: DonationService = Depends(get_donation_service)
):
    """Donate to an active campaign."""
    donation = await donation_service.make_donation(
        donor_id=current_user.id,
        campaign_id=donation_data.campaign_id,
        amount=donation_data.amount,
        message=donation_data.message
    )
    response.headers["Location"] = f"{router.prefix}/{donation.id}"
    return donation


@router.get("/me", response_model=List[DonationResponse])
async def list_my_donations(
    current_user: User = Depends(get_current_user),
    donation_service: DonationService = Depends(get_donation_service)
):
    """List the caller's donations."""
    return await donation_service.get_donations_by_donor(current_user.id)


@router.delete("/{donation_id}/message", status_code=204)
async def delete_donation_message(
    donation_id: int,
    current_user: User = Depends(get_current_user),
    donation_service: DonationService = Depends(get_donation_service)
):
    """Clear the message on one of the caller's donations."""
    await donation_service.delete_donation_message(donation_id, current_user.id)


@router.get("/{donation_id}", response_model=DonationResponse)
async def get_donation(
    donation_id: int,
    current_user: User = Depends(get_current_user),
    donation_service: DonationService = Depends(get_donation_service)
):
    return await donation_service.get_donation(donation_id)
