"""
Shared test configuration.

Settings are read at import time, so the required Supabase/JWT variables
must be present before anything under app is imported.
"""
import os

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-unit-tests")

import uuid
from unittest.mock import Mock

import pytest

from app.core.pricing_policy import DEFAULT_PRICING_POLICY
from app.schemas.auth import UserResponse
from app.schemas.rates import RateSet


@pytest.fixture
def policy():
    """The default pricing policy."""
    return DEFAULT_PRICING_POLICY


@pytest.fixture
def default_rates():
    """Rates a new earner starts with."""
    return RateSet(
        video_15min_rate=200,
        video_30min_rate=300,
        video_60min_rate=500,
        video_90min_rate=700,
    )


@pytest.fixture
def mock_user():
    """Mock authenticated user."""
    return UserResponse(
        id=str(uuid.uuid4()),
        email="earner@example.com",
        full_name="Test Earner",
        created_at="2025-01-01T00:00:00Z"
    )


def make_supabase_mock(data):
    """
    Mock a Supabase service client whose query chain returns data.

    Every builder method (select, update, eq, limit) returns the same chain,
    and execute() returns a response carrying data.
    """
    chain = Mock()
    for method in ("select", "update", "eq", "limit"):
        getattr(chain, method).return_value = chain
    chain.execute.return_value = Mock(data=data)

    client = Mock()
    client.table.return_value = chain
    return client, chain


@pytest.fixture
def supabase_mock():
    """Factory fixture for make_supabase_mock."""
    return make_supabase_mock
