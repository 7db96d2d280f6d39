"""
Component Tests for concurrent donations

Many donors race for the last part of a campaign's goal. The campaign must
complete exactly once and the collected amount must match the donations that
were actually recorded.
"""
import asyncio

import pytest

from crowdfund.core.exceptions import InvalidOperationError
from crowdfund.models.campaign import CampaignStatus


async def donate_all(donation_service, donors, campaign_id, amount):
    return await asyncio.gather(
        *(donation_service.make_donation(d.id, campaign_id, amount) for d in donors),
        return_exceptions=True,
    )


class TestConcurrentDonations:

    @pytest.mark.asyncio
    async def test_goal_crossed_concurrently_completes_once(self, donation_service, db, owner, dispatcher):
        # Given
        campaign = db.add_campaign(owner.id, target_amount=1000, collected_amount=900)
        donors = [db.add_user(f"donor{i}@example.com") for i in range(20)]

        # When
        results = await donate_all(donation_service, donors, campaign.id, 50)

        # Then
        accepted = [r for r in results if not isinstance(r, Exception)]
        refused = [r for r in results if isinstance(r, Exception)]
        assert all(isinstance(r, InvalidOperationError) for r in refused)
        assert len(accepted) >= 2

        stored = db.campaigns[campaign.id]
        assert stored.status == CampaignStatus.COMPLETED
        assert stored.collected_amount == 900 + sum(d.amount for d in accepted)
        assert stored.collected_amount == 900 + 50 * len(db.donations)

        assert len(dispatcher.titled("Campaign completed")) == 2
        assert len(dispatcher.titled("New donation received")) == len(accepted)

    @pytest.mark.asyncio
    async def test_concurrent_donations_below_goal_all_count(self, donation_service, db, owner, dispatcher):
        campaign = db.add_campaign(owner.id, target_amount=10_000)
        donors = [db.add_user(f"donor{i}@example.com") for i in range(25)]

        results = await donate_all(donation_service, donors, campaign.id, 40)

        assert not any(isinstance(r, Exception) for r in results)
        stored = db.campaigns[campaign.id]
        assert stored.collected_amount == 1000
        assert stored.status == CampaignStatus.ACTIVE
        assert dispatcher.titled("Campaign completed") == []

    @pytest.mark.asyncio
    async def test_completion_check_racing_itself(self, donation_service, db, owner, dispatcher):
        campaign = db.add_campaign(owner.id, target_amount=100, collected_amount=100)

        outcomes = await asyncio.gather(
            *(donation_service._complete_if_goal_reached(campaign.id) for _ in range(10))
        )

        assert outcomes.count(True) == 1
        assert len(dispatcher.titled("Campaign completed")) == 2
