"""
Credit to dollar conversions and the creator / platform revenue split.

Example for 200 credits at $0.10 per credit:
- gross: $20.00
- creator (70%): $14.00
- platform (30%): $6.00
"""
from dataclasses import dataclass
from typing import Dict, Optional

from ..core.pricing_policy import PricingPolicy, get_pricing_policy
from ..schemas.rates import RateSet
from ..utils.rounding import round_cents, to_decimal
from .call_rates import get_derived_audio_rates


@dataclass(frozen=True)
class PricingBreakdown:
    credits: int
    gross_usd: float
    creator_usd: float
    platform_usd: float


def _usd(credits: float, share: float, policy: PricingPolicy) -> float:
    return round_cents(to_decimal(credits) * to_decimal(policy.credit_to_usd) * to_decimal(share))


def calculate_gross_usd(credits: float, policy: Optional[PricingPolicy] = None) -> float:
    """Dollar value a seeker pays for credits."""
    return _usd(credits, 1, policy or get_pricing_policy())


def calculate_creator_earnings(credits: float, policy: Optional[PricingPolicy] = None) -> float:
    """What the earner receives for credits spent on them."""
    policy = policy or get_pricing_policy()
    return _usd(credits, policy.creator_share, policy)


def calculate_platform_fee(credits: float, policy: Optional[PricingPolicy] = None) -> float:
    policy = policy or get_pricing_policy()
    return _usd(credits, policy.platform_share, policy)


def calculate_all_pricing(credits: int, policy: Optional[PricingPolicy] = None) -> PricingBreakdown:
    policy = policy or get_pricing_policy()
    return PricingBreakdown(
        credits=credits,
        gross_usd=calculate_gross_usd(credits, policy),
        creator_usd=calculate_creator_earnings(credits, policy),
        platform_usd=calculate_platform_fee(credits, policy),
    )


def validate_earnings_match(credits: int, earner_amount: float, policy: Optional[PricingPolicy] = None) -> bool:
    """Check a recorded earner amount against the expected split (1 cent tolerance)."""
    expected = calculate_creator_earnings(credits, policy)
    return abs(to_decimal(expected) - to_decimal(earner_amount)) < to_decimal("0.01")


def format_usd(amount: float) -> str:
    return f"${amount:,.2f}"


def format_creator_earnings(credits: float, policy: Optional[PricingPolicy] = None) -> str:
    """Creator earnings for credits as a display string, e.g. "$14.00"."""
    return format_usd(calculate_creator_earnings(credits, policy))


def build_earnings_display(rates: RateSet, policy: Optional[PricingPolicy] = None) -> Dict[str, Dict[int, str]]:
    """Creator earnings strings for all video and derived audio rates."""
    policy = policy or get_pricing_policy()
    audio_rates = get_derived_audio_rates(rates, policy)
    return {
        "video": {d: format_creator_earnings(rates.rate_for(d), policy) for d in policy.durations},
        "audio": {d: format_creator_earnings(audio_rates[d], policy) for d in policy.durations},
    }
