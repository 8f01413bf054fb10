"""
Call rate derivation.

Audio rates are never stored: they are derived from the earner's video rates
whenever they are displayed or charged.
"""
import math
from typing import Dict, Optional

from ..core.pricing_policy import CallType, PricingPolicy, get_pricing_policy
from ..schemas.rates import RateSet

# Durations a live call can be extended by
EXTENSION_DURATIONS = (15, 30)


def derive_audio_rate(video_rate: int, policy: Optional[PricingPolicy] = None) -> int:
    """
    Audio price for a video price (audio_ratio of it, rounded to a whole credit).

    The float product is rounded half up, the same way clients round it, so
    325 credits gives 227 (the product is 227.49999...) rather than 228.
    """
    policy = policy or get_pricing_policy()
    return math.floor(video_rate * policy.audio_ratio + 0.5)


def get_derived_audio_rates(rates: RateSet, policy: Optional[PricingPolicy] = None) -> Dict[int, int]:
    """Audio rates for every duration, keyed by minutes."""
    policy = policy or get_pricing_policy()
    return {
        duration: derive_audio_rate(rates.rate_for(duration), policy)
        for duration in policy.durations
    }


def get_call_rate(
    rates: RateSet,
    call_type: CallType,
    duration: int,
    policy: Optional[PricingPolicy] = None,
) -> int:
    """Credits charged for a call of the given type and duration."""
    video_rate = rates.rate_for(duration)
    if CallType(call_type) == CallType.VIDEO:
        return video_rate
    return derive_audio_rate(video_rate, policy)


def calculate_per_minute_rate(price: float, duration: int) -> float:
    return price / duration


def get_starting_price(rates: RateSet) -> int:
    """Lowest video rate, shown as the "from" price on profile cards."""
    return min(rates.by_duration().values())


def get_extension_cost(rates: RateSet, minutes: int) -> int:
    """Credits needed to extend a live video call by 15 or 30 minutes."""
    if minutes not in EXTENSION_DURATIONS:
        raise ValueError(f"Calls can only be extended by {EXTENSION_DURATIONS} minutes, got {minutes}")
    return rates.rate_for(minutes)
