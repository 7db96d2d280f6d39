"""
Wallet schemas.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from crowdfund.models.wallet import TransactionType


class TopUpRequest(BaseModel):
    """Top up through an e-wallet. Amount is in the minor currency unit."""
    method: str
    phone_number: str
    amount: int

    class Config:
        json_schema_extra = {
            "example": {"method": "GOPAY", "phone_number": "081234567890", "amount": 250000}
        }


class WithdrawRequest(BaseModel):
    """Pay a completed campaign out to its fundraiser's wallet."""
    campaign_id: int


class WalletResponse(BaseModel):
    """Wallet response."""
    id: int
    user_id: int
    balance: int
    updated_at: datetime

    class Config:
        from_attributes = True


class TransactionResponse(BaseModel):
    """Wallet transaction response."""
    id: int
    wallet_id: int
    transaction_type: TransactionType
    amount: int
    method: Optional[str]
    phone_number: Optional[str]
    campaign_id: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True
