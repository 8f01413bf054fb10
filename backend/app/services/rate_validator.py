"""
Rate validation for earner call pricing.

Two tiers of checks:
- live clamp (clamp_rate): applied to a single value on every edit, never fails
- full validation (validate_rate_set): applied to all four rates before saving

Every function here is pure and total. Failures are reported through result
objects, never exceptions.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.pricing_policy import PricingPolicy, get_pricing_policy
from ..schemas.rates import RateSet
from ..utils.rounding import round_half_up


@dataclass(frozen=True)
class RateCheckResult:
    """Outcome of a rate check. error is set only when valid is False."""
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "RateCheckResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "RateCheckResult":
        return cls(valid=False, error=error)


@dataclass(frozen=True)
class RateBoundsCheck:
    """Bounds check for a single rate, with the nearest in-bounds value."""
    valid: bool
    clamped_rate: int
    error: Optional[str] = None


@dataclass(frozen=True)
class RateBoundsReport:
    """Bounds check across all durations."""
    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClampResult:
    """A live-clamped rate and whether it differs from what was entered."""
    rate: int
    adjusted: bool


def _ceil(value: float) -> int:
    # Trim float noise so 200 * 2 * 0.7 stays 280 rather than 281
    return math.ceil(round(value, 6))


def calculate_min_rate_for_duration(
    prev_rate: int,
    prev_duration: int,
    duration: int,
    policy: Optional[PricingPolicy] = None,
) -> int:
    """
    Lowest rate a longer duration may have given its shorter neighbour.

    The per-minute price may drop by at most (1 - rate_consistency_factor)
    from one duration to the next. The result never exceeds max_rate, so a
    maximal shorter rate always leaves the longer duration satisfiable, and
    never drops below the duration's own minimum.
    """
    policy = policy or get_pricing_policy()
    implied = _ceil(prev_rate * (duration / prev_duration) * policy.rate_consistency_factor)
    return max(policy.get_min_rate_for_duration(duration), min(implied, policy.max_rate))


def validate_rate_for_duration(
    rate: int,
    duration: int,
    policy: Optional[PricingPolicy] = None,
) -> RateBoundsCheck:
    """Check a rate against [min_rates[duration], max_rate]."""
    policy = policy or get_pricing_policy()
    min_rate = policy.get_min_rate_for_duration(duration)
    max_rate = policy.max_rate

    if rate < min_rate:
        return RateBoundsCheck(
            valid=False,
            clamped_rate=min_rate,
            error=f"{duration} min rate must be at least {min_rate} credits",
        )
    if rate > max_rate:
        return RateBoundsCheck(
            valid=False,
            clamped_rate=max_rate,
            error=f"{duration} min rate cannot exceed {max_rate} credits",
        )
    return RateBoundsCheck(valid=True, clamped_rate=int(rate))


def validate_all_rates(rates: RateSet, policy: Optional[PricingPolicy] = None) -> RateBoundsReport:
    """Bounds-check every duration and collect all errors."""
    policy = policy or get_pricing_policy()
    errors = []
    for duration in policy.durations:
        check = validate_rate_for_duration(rates.rate_for(duration), duration, policy)
        if not check.valid and check.error:
            errors.append(check.error)
    return RateBoundsReport(valid=not errors, errors=errors)


def validate_monotonic_pricing(rates: RateSet, policy: Optional[PricingPolicy] = None) -> RateCheckResult:
    """
    Check each adjacent pair (15->30, 30->60, 60->90).

    The longer duration must not be priced below the minimum implied by the
    shorter duration's rate. The first failing pair is reported.
    """
    policy = policy or get_pricing_policy()
    durations = policy.durations
    for shorter, longer in zip(durations, durations[1:]):
        shorter_rate = rates.rate_for(shorter)
        longer_rate = rates.rate_for(longer)
        required = calculate_min_rate_for_duration(shorter_rate, shorter, longer, policy)
        if longer_rate < required:
            return RateCheckResult.fail(
                f"{longer} min rate ({longer_rate} credits) must be at least {required} credits "
                f"to stay consistent with your {shorter} min rate ({shorter_rate} credits)"
            )
    return RateCheckResult.ok()


def validate_per_minute_floor(rates: RateSet, policy: Optional[PricingPolicy] = None) -> RateCheckResult:
    """Check that no duration drops below the minimum credits-per-minute."""
    policy = policy or get_pricing_policy()
    for duration in policy.durations:
        rate = rates.rate_for(duration)
        per_minute = rate / duration
        if per_minute < policy.min_per_minute_rate:
            return RateCheckResult.fail(
                f"{duration} min rate works out to {per_minute:.2f} credits per minute; "
                f"the minimum is {policy.min_per_minute_rate:g} credits per minute"
            )
    return RateCheckResult.ok()


def validate_rate_set(rates: RateSet, policy: Optional[PricingPolicy] = None) -> RateCheckResult:
    """Full save-time validation: bounds, then consistency, then per-minute floor."""
    policy = policy or get_pricing_policy()

    bounds = validate_all_rates(rates, policy)
    if not bounds.valid:
        return RateCheckResult.fail(bounds.errors[0])

    monotonic = validate_monotonic_pricing(rates, policy)
    if not monotonic.valid:
        return monotonic

    return validate_per_minute_floor(rates, policy)


def clamp_rate(
    value: float,
    duration: int,
    previous_rate: Optional[int] = None,
    policy: Optional[PricingPolicy] = None,
) -> ClampResult:
    """
    Live-clamp one edited rate.

    The value is rounded to a whole credit and forced into
    [max(min_rates[duration], implied minimum from previous_rate), max_rate].
    previous_rate is the current rate of the next shorter duration, if any.
    """
    policy = policy or get_pricing_policy()
    lower = policy.get_min_rate_for_duration(duration)

    prev_duration = policy.previous_duration(duration)
    if prev_duration is not None and previous_rate:
        lower = max(lower, calculate_min_rate_for_duration(previous_rate, prev_duration, duration, policy))

    if math.isnan(value):
        return ClampResult(rate=lower, adjusted=True)
    if math.isinf(value):
        rate = policy.max_rate if value > 0 else lower
        return ClampResult(rate=rate, adjusted=True)

    rate = max(lower, min(policy.max_rate, round_half_up(value)))
    return ClampResult(rate=rate, adjusted=rate != value)
