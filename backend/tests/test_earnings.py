"""
Tests for credit to dollar conversions.
"""
import pytest

from app.services.earnings import (
    PricingBreakdown,
    build_earnings_display,
    calculate_all_pricing,
    calculate_creator_earnings,
    calculate_gross_usd,
    calculate_platform_fee,
    format_creator_earnings,
    format_usd,
    validate_earnings_match,
)


def test_two_hundred_credit_split(policy):
    """200 credits -> $20 gross -> $14 to the earner, $6 to the platform."""
    assert calculate_gross_usd(200, policy) == 20.00
    assert calculate_creator_earnings(200, policy) == 14.00
    assert calculate_platform_fee(200, policy) == 6.00


def test_calculate_all_pricing(policy):
    assert calculate_all_pricing(350, policy) == PricingBreakdown(
        credits=350,
        gross_usd=35.00,
        creator_usd=24.50,
        platform_usd=10.50,
    )


def test_creator_earnings_round_half_up_to_cents(policy):
    # 0.5 credits -> $0.035 -> $0.04
    assert calculate_creator_earnings(0.5, policy) == 0.04


def test_creator_earnings_strictly_increase(policy):
    previous = calculate_creator_earnings(0, policy)
    for credits in range(1, 1001):
        current = calculate_creator_earnings(credits, policy)
        assert current > previous
        previous = current


@pytest.mark.parametrize("credits, display", [
    (200, "$14.00"),
    (412, "$28.84"),
    (900, "$63.00"),
    (20000, "$1,400.00"),
])
def test_format_creator_earnings(policy, credits, display):
    assert format_creator_earnings(credits, policy) == display


def test_format_usd():
    assert format_usd(0) == "$0.00"
    assert format_usd(9.5) == "$9.50"


def test_validate_earnings_match(policy):
    assert validate_earnings_match(200, 14.00, policy) is True
    assert validate_earnings_match(200, 14.009, policy) is True
    assert validate_earnings_match(200, 14.01, policy) is False
    assert validate_earnings_match(200, 13.50, policy) is False


def test_build_earnings_display(policy, default_rates):
    display = build_earnings_display(default_rates, policy)

    assert display["video"] == {15: "$14.00", 30: "$21.00", 60: "$35.00", 90: "$49.00"}
    # audio rates 140 / 210 / 350 / 490 credits
    assert display["audio"] == {15: "$9.80", 30: "$14.70", 60: "$24.50", 90: "$34.30"}
    assert sum(len(values) for values in display.values()) == 8
