# Models package - database tables
from crowdfund.models.user import User
from crowdfund.models.campaign import Campaign, CampaignStatus
from crowdfund.models.donation import Donation
from crowdfund.models.notification import (
    Notification, NotificationTargetType, NotificationMembership, Subscription
)
from crowdfund.models.wallet import Wallet, WalletTransaction, TransactionType
