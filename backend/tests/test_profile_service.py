"""
Tests for profile persistence of earner rates.
"""
import uuid
from unittest.mock import Mock, patch

import pytest

from app.schemas.profile import EarnerProfile, UserType
from app.schemas.rates import RateSet
from app.services.profile_service import (
    ProfileNotFoundError,
    ProfileService,
    ProfileServiceError,
)


PROFILE_ID = str(uuid.uuid4())


def profile_row(**overrides):
    row = {
        "id": PROFILE_ID,
        "name": "Ava",
        "user_type": "earner",
        "video_15min_rate": 250,
        "video_30min_rate": 400,
        "video_60min_rate": 600,
        "video_90min_rate": 800,
    }
    row.update(overrides)
    return row


# ================================================================
# EarnerProfile boundary defaults
# ================================================================

def test_from_row_reads_rates(policy):
    profile = EarnerProfile.from_row(profile_row(), policy)

    assert profile.is_earner is True
    assert profile.rates.by_duration() == {15: 250, 30: 400, 60: 600, 90: 800}


def test_from_row_defaults_missing_rates(policy):
    row = profile_row(video_15min_rate=None, video_90min_rate=0, user_type="seeker")
    del row["video_60min_rate"]

    profile = EarnerProfile.from_row(row, policy)

    assert profile.user_type == UserType.SEEKER
    assert profile.is_earner is False
    assert profile.rates.by_duration() == {15: 200, 30: 400, 60: 500, 90: 700}


# ================================================================
# ProfileService
# ================================================================

@pytest.mark.asyncio
async def test_get_profile(policy, supabase_mock):
    client, chain = supabase_mock([profile_row()])

    with patch("app.services.profile_service.supabase_client", Mock(service_client=client)):
        profile = await ProfileService(policy).get_profile(PROFILE_ID)

    assert profile.id == PROFILE_ID
    client.table.assert_called_once_with("profiles")
    chain.eq.assert_called_once_with("id", PROFILE_ID)


@pytest.mark.asyncio
async def test_get_missing_profile_raises_not_found(policy, supabase_mock):
    client, _ = supabase_mock([])

    with patch("app.services.profile_service.supabase_client", Mock(service_client=client)):
        with pytest.raises(ProfileNotFoundError):
            await ProfileService(policy).get_profile(PROFILE_ID)


@pytest.mark.asyncio
async def test_update_rates_writes_all_four_columns(policy, supabase_mock):
    rates = RateSet(video_15min_rate=200, video_30min_rate=280, video_60min_rate=500, video_90min_rate=700)
    client, chain = supabase_mock([profile_row(**rates.as_columns())])

    with patch("app.services.profile_service.supabase_client", Mock(service_client=client)):
        stored = await ProfileService(policy).update_rates(PROFILE_ID, rates)

    chain.update.assert_called_once_with({
        "video_15min_rate": 200,
        "video_30min_rate": 280,
        "video_60min_rate": 500,
        "video_90min_rate": 700,
    })
    chain.eq.assert_called_once_with("id", PROFILE_ID)
    assert stored == rates


@pytest.mark.asyncio
async def test_update_rates_wraps_client_errors(policy, supabase_mock, default_rates):
    client, chain = supabase_mock([])
    chain.execute.side_effect = ConnectionError("connection reset")

    with patch("app.services.profile_service.supabase_client", Mock(service_client=client)):
        with pytest.raises(ProfileServiceError) as exc_info:
            await ProfileService(policy).update_rates(PROFILE_ID, default_rates)

    assert "connection reset" in str(exc_info.value)
    assert not isinstance(exc_info.value, ProfileNotFoundError)


@pytest.mark.asyncio
async def test_update_matching_no_rows_raises_not_found(policy, supabase_mock, default_rates):
    client, _ = supabase_mock([])

    with patch("app.services.profile_service.supabase_client", Mock(service_client=client)):
        with pytest.raises(ProfileNotFoundError):
            await ProfileService(policy).update_rates(PROFILE_ID, default_rates)
