"""
API Test Fixtures

The FastAPI app with its service dependencies wired to the in-memory stores.
Authentication runs for real: requests carry signed access tokens and the
caller is looked up through UserRepository on a fake session.
"""
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio

from crowdfund.api.deps import (
    get_campaign_service,
    get_donation_service,
    get_notification_service,
    get_subscription_service,
    get_wallet_service,
)
from crowdfund.core.security import create_access_token
from crowdfund.database import get_session
from crowdfund.main import create_app
from crowdfund.models.user import User
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


class UserLookupSession:
    """Answers the primary key lookups UserRepository makes."""

    def __init__(self, db: InMemoryDatabase):
        self.db = db

    async def get(self, model: Any, id: Any, **kwargs) -> Optional[User]:
        user = self.db.users.get(id)
        return User(**user.model_dump()) if user else None


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def app(db, dispatcher):
    app = create_app()

    async def session_override():
        yield UserLookupSession(db)

    app.dependency_overrides[get_session] = session_override
    app.dependency_overrides[get_campaign_service] = lambda: CampaignService(
        InMemoryCampaignStore(db), dispatcher
    )
    app.dependency_overrides[get_donation_service] = lambda: DonationService(
        InMemoryDonationStore(db), InMemoryCampaignStore(db), dispatcher
    )
    app.dependency_overrides[get_notification_service] = lambda: NotificationService(
        InMemoryNotificationStore(db)
    )
    app.dependency_overrides[get_subscription_service] = lambda: SubscriptionService(
        InMemorySubscriptionStore(db)
    )
    app.dependency_overrides[get_wallet_service] = lambda: WalletService(
        InMemoryWalletStore(db), InMemoryCampaignStore(db)
    )
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth():
    """Bearer headers for a user."""
    def headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return headers


@pytest.fixture
def admin(db):
    return db.add_user("admin@example.com", is_admin=True)


@pytest.fixture
def owner(db):
    return db.add_user("owner@example.com")


@pytest.fixture
def donor(db):
    return db.add_user("donor@example.com")
