"""
Component Test Fixtures

Services wired to in-memory stores and a recording dispatcher.
"""
import pytest

from crowdfund.models.campaign import CampaignStatus
from crowdfund.services.campaign_service import CampaignService
from crowdfund.services.donation_service import DonationService
from crowdfund.services.notification_service import NotificationService
from crowdfund.services.subscription_service import SubscriptionService
from crowdfund.services.wallet_service import WalletService

from tests.component.mocks import (
    InMemoryCampaignStore,
    InMemoryDatabase,
    InMemoryDonationStore,
    InMemoryNotificationStore,
    InMemorySubscriptionStore,
    InMemoryWalletStore,
    RecordingDispatcher,
)


# ====================
# Stores
# ====================


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def campaign_store(db):
    return InMemoryCampaignStore(db)


@pytest.fixture
def donation_store(db):
    return InMemoryDonationStore(db)


@pytest.fixture
def notification_store(db):
    return InMemoryNotificationStore(db)


@pytest.fixture
def subscription_store(db):
    return InMemorySubscriptionStore(db)


@pytest.fixture
def wallet_store(db):
    return InMemoryWalletStore(db)


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


# ====================
# Services
# ====================


@pytest.fixture
def campaign_service(campaign_store, dispatcher):
    return CampaignService(campaign_store, dispatcher)


@pytest.fixture
def donation_service(donation_store, campaign_store, dispatcher):
    return DonationService(donation_store, campaign_store, dispatcher)


@pytest.fixture
def notification_service(notification_store):
    return NotificationService(notification_store)


@pytest.fixture
def subscription_service(subscription_store):
    return SubscriptionService(subscription_store)


@pytest.fixture
def wallet_service(wallet_store, campaign_store):
    return WalletService(wallet_store, campaign_store)


# ====================
# Data
# ====================


@pytest.fixture
def admin(db):
    return db.add_user("admin@example.com", is_admin=True)


@pytest.fixture
def owner(db):
    return db.add_user("owner@example.com", full_name="Olive Owner")


@pytest.fixture
def donor(db):
    return db.add_user("donor@example.com")


@pytest.fixture
def active_campaign(db, owner):
    return db.add_campaign(owner.id, target_amount=1000, status=CampaignStatus.ACTIVE)


@pytest.fixture
def pending_campaign(db, owner):
    return db.add_campaign(owner.id, status=CampaignStatus.PENDING, name="Pending Campaign")
