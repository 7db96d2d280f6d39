"""
Wallet models - a user's balance and the ledger of movements into it.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field


class TransactionType(str, Enum):
    TOPUP = "topup"
    WITHDRAWAL = "withdrawal"


class Wallet(SQLModel, table=True):
    """One wallet per user, created on first use. Balance is in the minor currency unit."""
    __tablename__ = "wallets"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True)
    balance: int = Field(default=0)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class WalletTransaction(SQLModel, table=True):
    """
    Ledger entry.
    Top-ups carry the payment method and phone number; withdrawals carry the campaign.
    Deleting a top-up only hides it from the history.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        # A campaign pays out to its fundraiser once
        Index(
            "uq_transactions_campaign_withdrawal",
            "campaign_id",
            unique=True,
            postgresql_where=text("transaction_type = 'withdrawal'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    wallet_id: int = Field(foreign_key="wallets.id", index=True, ondelete="CASCADE")
    transaction_type: TransactionType
    amount: int

    method: Optional[str] = None
    phone_number: Optional[str] = None
    campaign_id: Optional[int] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    is_deleted: bool = Field(default=False)
