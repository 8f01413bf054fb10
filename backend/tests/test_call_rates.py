"""
Tests for audio rate derivation and call rate lookups.
"""
import math

import pytest

from app.core.pricing_policy import CallType
from app.schemas.rates import RateSet
from app.services.call_rates import (
    calculate_per_minute_rate,
    derive_audio_rate,
    get_call_rate,
    get_derived_audio_rates,
    get_extension_cost,
    get_starting_price,
)


@pytest.mark.parametrize("video_rate, audio_rate", [
    (200, 140),
    (300, 210),
    (500, 350),
    (700, 490),
    (900, 630),
])
def test_derive_audio_rate(policy, video_rate, audio_rate):
    assert derive_audio_rate(video_rate, policy) == audio_rate


def test_derive_audio_rate_matches_client_rounding_across_range(policy):
    """Audio rate is the float product video * 0.70 rounded half up, like Math.round."""
    for video_rate in range(200, 901):
        assert derive_audio_rate(video_rate, policy) == math.floor(video_rate * 0.70 + 0.5)


@pytest.mark.parametrize("video_rate, audio_rate", [
    (325, 227),
    (675, 472),
    (725, 507),
])
def test_slider_rates_ending_in_five_round_down(policy, video_rate, audio_rate):
    # The float product sits just below .5 for these slider positions
    assert derive_audio_rate(video_rate, policy) == audio_rate


def test_derived_audio_rates_for_all_durations(policy, default_rates):
    assert get_derived_audio_rates(default_rates, policy) == {15: 140, 30: 210, 60: 350, 90: 490}


def test_get_call_rate(policy, default_rates):
    assert get_call_rate(default_rates, CallType.VIDEO, 60, policy) == 500
    assert get_call_rate(default_rates, CallType.AUDIO, 60, policy) == 350
    assert get_call_rate(default_rates, "audio", 15, policy) == 140


def test_get_call_rate_rejects_unknown_call_type(policy, default_rates):
    with pytest.raises(ValueError):
        get_call_rate(default_rates, "chat", 15, policy)


def test_per_minute_rate():
    assert calculate_per_minute_rate(300, 30) == 10
    assert calculate_per_minute_rate(700, 90) == pytest.approx(7.777, rel=1e-3)


def test_starting_price_is_lowest_video_rate():
    rates = RateSet(
        video_15min_rate=450,
        video_30min_rate=630,
        video_60min_rate=900,
        video_90min_rate=900,
    )
    assert get_starting_price(rates) == 450


def test_extension_cost(default_rates):
    assert get_extension_cost(default_rates, 15) == 200
    assert get_extension_cost(default_rates, 30) == 300
    with pytest.raises(ValueError):
        get_extension_cost(default_rates, 60)
