"""
Wallet service - balances, top-ups through a payment method, and campaign payouts.
"""
import logging
import re
from typing import Dict, List, Optional

from crowdfund.core.exceptions import (
    ForbiddenError, InvalidOperationError, NotFoundError, ValidationError
)
from crowdfund.models.campaign import CampaignStatus
from crowdfund.models.wallet import TransactionType, Wallet, WalletTransaction
from crowdfund.repositories.interfaces import CampaignStore, WalletStore
from crowdfund.services.payments.base import PaymentMethod
from crowdfund.services.payments.ewallets import PAYMENT_METHODS, get_payment_method

logger = logging.getLogger(__name__)

PHONE_NUMBER = re.compile(r"^\+?[0-9]{8,15}$")


class WalletService:
    """Service for wallet operations."""

    def __init__(
        self,
        wallet_store: WalletStore,
        campaign_store: CampaignStore,
        payment_methods: Optional[Dict[str, PaymentMethod]] = None
    ):
        self.wallet_store = wallet_store
        self.campaign_store = campaign_store
        self.payment_methods = PAYMENT_METHODS if payment_methods is None else payment_methods

    async def get_wallet(self, user_id: int) -> Wallet:
        """Get the user's wallet, opening an empty one on first use."""
        return await self.wallet_store.get_or_create(user_id)

    async def top_up(self, user_id: int, method: str, phone_number: str, amount: int) -> Wallet:
        """
        Charge the payment method, then credit the wallet.

        Raises:
            ValidationError: bad amount, method or phone number
            InvalidOperationError: the payment method declined the charge
        """
        if amount <= 0:
            raise ValidationError("Amount must be positive")

        payment_method = get_payment_method(method, self.payment_methods)
        if payment_method is None:
            choices = " or ".join(sorted(self.payment_methods))
            raise ValidationError(f"Invalid payment method. Use {choices}")

        phone_number = (phone_number or "").strip()
        if not PHONE_NUMBER.match(phone_number):
            raise ValidationError("Phone number must be 8 to 15 digits")

        if not await payment_method.pay(amount, phone_number):
            logger.warning(f"{payment_method.name} declined a top-up of {amount} for user {user_id}")
            raise InvalidOperationError(f"Payment via {payment_method.name} was declined")

        wallet = await self.wallet_store.top_up(user_id, amount, payment_method.name, phone_number)
        logger.info(f"Wallet {wallet.id} topped up with {amount} via {payment_method.name}")
        return wallet

    async def get_transactions(self, user_id: int) -> List[WalletTransaction]:
        wallet = await self.get_wallet(user_id)
        return await self.wallet_store.list_transactions(wallet.id)

    async def delete_transaction(self, user_id: int, transaction_id: int) -> None:
        """Hide one of the caller's top-ups from their history. The balance is unchanged."""
        wallet = await self.get_wallet(user_id)

        transaction = await self.wallet_store.get_transaction(transaction_id)
        if not transaction or transaction.wallet_id != wallet.id or transaction.is_deleted:
            raise NotFoundError("Transaction", transaction_id)
        if transaction.transaction_type != TransactionType.TOPUP:
            raise ValidationError("Only topup transactions can be deleted")

        if not await self.wallet_store.soft_delete_transaction(transaction_id, wallet.id):
            raise NotFoundError("Transaction", transaction_id)

    async def withdraw_campaign_funds(self, fundraiser_id: int, campaign_id: int) -> Wallet:
        """
        Pay a completed campaign's collected amount into its fundraiser's wallet.
        Each campaign pays out once.
        """
        campaign = await self.campaign_store.get(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign", campaign_id)
        if campaign.owner_id != fundraiser_id:
            raise ForbiddenError("Only the fundraiser can withdraw campaign funds")
        if campaign.status != CampaignStatus.COMPLETED:
            raise InvalidOperationError(
                f"Funds can only be withdrawn from a completed campaign (status: {campaign.status.value})"
            )
        if campaign.collected_amount <= 0:
            raise ValidationError("No funds available for withdrawal")

        wallet = await self.wallet_store.withdraw_campaign(
            fundraiser_id, campaign_id, campaign.collected_amount
        )
        if wallet is None:
            raise InvalidOperationError("Campaign funds have already been withdrawn")

        logger.info(
            f"Campaign {campaign_id} paid out {campaign.collected_amount} to wallet {wallet.id}"
        )
        return wallet
