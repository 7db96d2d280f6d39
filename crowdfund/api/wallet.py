"""
Wallet API routes.
"""
from typing import List
from fastapi import APIRouter, Depends

from crowdfund.config import settings
from crowdfund.models.user import User
from crowdfund.schemas.wallet import (
    TopUpRequest, TransactionResponse, WalletResponse, WithdrawRequest
)
from crowdfund.services.wallet_service import WalletService
from crowdfund.api.deps import get_current_user, get_wallet_service

router = APIRouter(prefix=f"{settings.API_PREFIX}/wallet", tags=["wallet"])


@router.get("/me", response_model=WalletResponse)
async def get_my_wallet(
    current_user: User = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service)
):
    """Get the caller's wallet, opening it on first use."""
    return await wallet_service.get_wallet(current_user.id)


@router.post("/topup", response_model=WalletResponse)
async def top_up_wallet(
    top_up: TopUpRequest,
    current_user: User = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service)
):
    """Top up through GOPAY or DANA."""
    return await wallet_service.top_up(
        user_id=current_user.id,
        method=top_up.method,
        phone_number=top_up.phone_number,
        amount=top_up.amount
    )


@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    current_user: User = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service)
):
    return await wallet_service.get_transactions(current_user.id)


@router.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: int,
    current_user: User = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service)
):
    """Remove a top-up from the caller's history."""
    await wallet_service.delete_transaction(current_user.id, transaction_id)


@router.post("/withdraw", response_model=WalletResponse)
async def withdraw_campaign_funds(
    withdrawal: WithdrawRequest,
    current_user: User = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service)
):
    """Pay a completed campaign's funds into the fundraiser's wallet."""
    return await wallet_service.withdraw_campaign_funds(current_user.id, withdrawal.campaign_id)
