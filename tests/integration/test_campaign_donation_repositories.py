"""
Integration Tests for campaign and donation writes on PostgreSQL

Concurrent callers each hold their own session, the way concurrent requests do.
"""
import asyncio

import pytest

from crowdfund.models.campaign import Campaign, CampaignStatus
from crowdfund.models.donation import Donation
from crowdfund.repositories.campaign_repo import CampaignRepository
from crowdfund.repositories.donation_repo import DonationRepository


pytestmark = [pytest.mark.integration, pytest.mark.requires_db]


async def record(database, donor_id, campaign_id, amount):
    async with database.session() as session:
        return await DonationRepository(session).record(
            Donation(donor_id=donor_id, campaign_id=campaign_id, amount=amount)
        )


async def reload(database, campaign_id) -> Campaign:
    async with database.session() as session:
        return await CampaignRepository(session).get(campaign_id)


class TestDonationRecord:

    @pytest.mark.asyncio
    async def test_concurrent_donations_sum_exactly(self, database, donor, make_campaign, count):
        # Given
        campaign = await make_campaign(target_amount=1_000_000)

        # When
        results = await asyncio.gather(
            *(record(database, donor.id, campaign.id, amount) for amount in range(1, 21))
        )

        # Then
        assert all(donation is not None for donation in results)
        assert (await reload(database, campaign.id)).collected_amount == sum(range(1, 21))
        assert await count(Donation, Donation.campaign_id == campaign.id) == 20

    @pytest.mark.asyncio
    async def test_donation_to_completed_campaign_writes_nothing(
        self, database, donor, make_campaign, count
    ):
        campaign = await make_campaign(collected_amount=1000, status=CampaignStatus.COMPLETED)

        donation = await record(database, donor.id, campaign.id, 50)

        assert donation is None
        assert await count(Donation) == 0
        assert (await reload(database, campaign.id)).collected_amount == 1000


class TestCompletion:

    @pytest.mark.asyncio
    async def test_exactly_one_completer(self, database, make_campaign):
        campaign = await make_campaign(target_amount=500, collected_amount=600)

        async def complete():
            async with database.session() as session:
                return await CampaignRepository(session).complete_if_goal_reached(campaign.id)

        results = await asyncio.gather(*(complete() for _ in range(10)))

        assert results.count(True) == 1
        assert (await reload(database, campaign.id)).status == CampaignStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_goal_not_reached(self, database, make_campaign):
        campaign = await make_campaign(target_amount=500, collected_amount=499)

        async with database.session() as session:
            assert await CampaignRepository(session).complete_if_goal_reached(campaign.id) is False

        assert (await reload(database, campaign.id)).status == CampaignStatus.ACTIVE


class TestTransitionStatus:

    @pytest.mark.asyncio
    async def test_concurrent_approve_and_reject(self, database, make_campaign):
        campaign = await make_campaign(status=CampaignStatus.PENDING)

        async def move(new_status):
            async with database.session() as session:
                return await CampaignRepository(session).transition_status(
                    campaign.id, CampaignStatus.PENDING, new_status
                )

        results = await asyncio.gather(
            move(CampaignStatus.ACTIVE), move(CampaignStatus.REJECTED),
            move(CampaignStatus.ACTIVE), move(CampaignStatus.REJECTED),
        )

        winners = [r for r in results if r is not None]
        assert len(winners) == 1
        assert (await reload(database, campaign.id)).status == winners[0].status

    @pytest.mark.asyncio
    async def test_stale_expected_status(self, database, make_campaign):
        campaign = await make_campaign(status=CampaignStatus.ACTIVE)

        async with database.session() as session:
            result = await CampaignRepository(session).transition_status(
                campaign.id, CampaignStatus.PENDING, CampaignStatus.REJECTED
            )

        assert result is None
        assert (await reload(database, campaign.id)).status == CampaignStatus.ACTIVE
