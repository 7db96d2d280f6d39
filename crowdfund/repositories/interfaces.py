"""
Store interfaces consumed by the services.
Each has one PostgreSQL implementation; tests provide in-memory ones.
"""
from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional

from crowdfund.models.campaign import Campaign, CampaignStatus
from crowdfund.models.donation import Donation
from crowdfund.models.notification import (
    Notification, NotificationMembership, NotificationTargetType, Subscription
)
from crowdfund.models.wallet import Wallet, WalletTransaction


class CampaignStore(ABC):

    @abstractmethod
    async def create(self, obj_in: dict) -> Campaign:
        pass

    @abstractmethod
    async def get(self, campaign_id: int) -> Optional[Campaign]:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> List[Campaign]:
        pass

    @abstractmethod
    async def list_by_status(self, status: CampaignStatus, page: int = 1, limit: int = 20) -> dict:
        """Paginated listing, see core.pagination."""
        pass

    @abstractmethod
    async def transition_status(
        self,
        campaign_id: int,
        expected: CampaignStatus,
        new_status: CampaignStatus
    ) -> Optional[Campaign]:
        """
        Compare-and-swap the status.

        Returns:
            The updated campaign, or None if the stored status was no longer `expected`.
        """
        pass

    @abstractmethod
    async def complete_if_goal_reached(self, campaign_id: int) -> bool:
        """
        Move an Active campaign whose collected amount reached its target to Completed.

        Returns:
            True only for the single caller whose update changed the row.
        """
        pass

    @abstractmethod
    async def set_evidence(self, campaign_id: int, evidence_url: str) -> Optional[Campaign]:
        pass


class DonationStore(ABC):

    @abstractmethod
    async def record(self, donation: Donation) -> Optional[Donation]:
        """
        Insert the donation and add its amount to the campaign in one transaction.
        The increment only applies while the campaign is Active.

        Returns:
            The stored donation, or None (nothing written) if the campaign is not Active.
        """
        pass

    @abstractmethod
    async def get(self, donation_id: int) -> Optional[Donation]:
        pass

    @abstractmethod
    async def list_by_campaign(self, campaign_id: int) -> List[Donation]:
        pass

    @abstractmethod
    async def list_by_donor(self, donor_id: int) -> List[Donation]:
        pass

    @abstractmethod
    async def clear_message(self, donation_id: int, donor_id: int) -> int:
        """Clear the message where id and donor both match. Returns rows affected."""
        pass


class NotificationStore(ABC):

    @abstractmethod
    def transaction(self) -> AsyncContextManager[None]:
        """Commit on clean exit, roll back everything written inside on error."""
        pass

    @abstractmethod
    async def insert_notification(
        self,
        title: str,
        content: str,
        target_type: NotificationTargetType
    ) -> Notification:
        pass

    @abstractmethod
    async def add_member(self, notification_id: int, user_email: str) -> None:
        pass

    @abstractmethod
    async def add_subscribers(self, notification_id: int) -> int:
        """Snapshot every current subscriber into the audience. Returns rows written."""
        pass

    @abstractmethod
    async def add_campaign_owner(self, notification_id: int, campaign_id: int) -> Optional[int]:
        """Returns rows written, or None if the campaign does not exist."""
        pass

    @abstractmethod
    async def add_campaign_donors(self, notification_id: int, campaign_id: int) -> Optional[int]:
        """Returns rows written, or None if the campaign does not exist."""
        pass

    @abstractmethod
    async def get(self, notification_id: int) -> Optional[Notification]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Notification]:
        pass

    @abstractmethod
    async def list_for_user(self, user_email: str) -> List[Notification]:
        """AllUsers notifications plus those the user is a member of, newest first."""
        pass

    @abstractmethod
    async def list_members(self, notification_id: int) -> List[NotificationMembership]:
        pass

    @abstractmethod
    async def delete(self, notification_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_for_user(self, notification_id: int, user_email: str) -> bool:
        pass


class SubscriptionStore(ABC):

    @abstractmethod
    async def subscribe(self, user_email: str) -> Subscription:
        pass

    @abstractmethod
    async def unsubscribe(self, user_email: str) -> bool:
        pass

    @abstractmethod
    async def get(self, user_email: str) -> Optional[Subscription]:
        pass

    @abstractmethod
    async def list_subscribers(self) -> List[Subscription]:
        pass


class WalletStore(ABC):

    @abstractmethod
    async def get_or_create(self, user_id: int) -> Wallet:
        """The user's wallet, created with a zero balance if missing."""
        pass

    @abstractmethod
    async def top_up(self, user_id: int, amount: int, method: str, phone_number: str) -> Wallet:
        """Add `amount` to the balance and record the top-up in one transaction."""
        pass

    @abstractmethod
    async def withdraw_campaign(self, user_id: int, campaign_id: int, amount: int) -> Optional[Wallet]:
        """
        Credit a campaign's funds to the user and record the withdrawal in one transaction.

        Returns:
            The updated wallet, or None (nothing written) if the campaign was already withdrawn.
        """
        pass

    @abstractmethod
    async def get_transaction(self, transaction_id: int) -> Optional[WalletTransaction]:
        pass

    @abstractmethod
    async def list_transactions(self, wallet_id: int) -> List[WalletTransaction]:
        """Entries that are not deleted, newest first."""
        pass

    @abstractmethod
    async def soft_delete_transaction(self, transaction_id: int, wallet_id: int) -> bool:
        pass
