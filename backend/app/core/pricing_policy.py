"""
Pricing policy for earner call rates.
Single source of truth for rate bounds, revenue split and derived-rate ratios.
"""

from enum import Enum, IntEnum
from functools import lru_cache
from typing import Dict, Mapping, Optional, Tuple
from dataclasses import dataclass, field, replace
from types import MappingProxyType


class CallDuration(IntEnum):
    """Bookable call lengths in minutes."""
    MIN_15 = 15
    MIN_30 = 30
    MIN_60 = 60
    MIN_90 = 90


class CallType(str, Enum):
    """Call media type."""
    AUDIO = "audio"
    VIDEO = "video"


DURATIONS: Tuple[int, ...] = tuple(int(d) for d in CallDuration)

# Profile columns holding the video rate for each duration
RATE_COLUMNS: Dict[int, str] = {
    15: "video_15min_rate",
    30: "video_30min_rate",
    60: "video_60min_rate",
    90: "video_90min_rate",
}


def _frozen(values: Mapping[int, int]) -> Mapping[int, int]:
    return MappingProxyType({int(k): int(v) for k, v in values.items()})


@dataclass(frozen=True)
class PricingPolicy:
    """Rate bounds and ratios applied to every earner."""
    credit_to_usd: float = 0.10  # 1 credit = $0.10
    creator_share: float = 0.70
    platform_share: float = 0.30
    min_rate: int = 200
    max_rate: int = 900
    min_rates: Mapping[int, int] = field(
        default_factory=lambda: {15: 200, 30: 280, 60: 392, 90: 412}
    )
    audio_ratio: float = 0.70  # audio price = 70% of video price
    rate_consistency_factor: float = 0.70
    min_per_minute_rate: float = 4.5
    default_rates: Mapping[int, int] = field(
        default_factory=lambda: {15: 200, 30: 300, 60: 500, 90: 700}
    )
    slider_step: int = 25
    durations: Tuple[int, ...] = DURATIONS

    def __post_init__(self):
        # Freeze the mappings so the policy cannot be mutated after construction
        object.__setattr__(self, "min_rates", _frozen(self.min_rates))
        object.__setattr__(self, "default_rates", _frozen(self.default_rates))
        object.__setattr__(self, "durations", tuple(sorted(int(d) for d in self.durations)))
        self._check()

    def _check(self) -> None:
        if abs(self.creator_share + self.platform_share - 1.0) > 1e-9:
            raise ValueError("creator_share and platform_share must sum to 1")
        for name in ("audio_ratio", "rate_consistency_factor", "creator_share"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if self.credit_to_usd <= 0 or self.min_per_minute_rate < 0:
            raise ValueError("credit_to_usd must be positive and min_per_minute_rate non-negative")
        if not 0 < self.min_rate <= self.max_rate:
            raise ValueError("min_rate must be positive and not exceed max_rate")
        for duration in self.durations:
            if duration not in self.min_rates or duration not in self.default_rates:
                raise ValueError(f"No minimum or default rate configured for {duration} min")
            if not self.min_rate <= self.min_rates[duration] <= self.max_rate:
                raise ValueError(f"Minimum rate for {duration} min is outside [{self.min_rate}, {self.max_rate}]")

    def get_min_rate_for_duration(self, duration: int) -> int:
        """Minimum rate for a duration, falling back to the global minimum."""
        return self.min_rates.get(int(duration), self.min_rate)

    def previous_duration(self, duration: int) -> Optional[int]:
        """The next shorter duration, or None for the shortest one."""
        index = self.durations.index(int(duration))
        return self.durations[index - 1] if index > 0 else None


def column_for_duration(duration: int) -> str:
    """Profile column name for a duration's video rate."""
    try:
        return RATE_COLUMNS[int(duration)]
    except KeyError:
        raise ValueError(f"Unsupported call duration: {duration}")


DEFAULT_PRICING_POLICY = PricingPolicy()


@lru_cache(maxsize=1)
def get_pricing_policy() -> PricingPolicy:
    """
    Get the process-wide pricing policy.

    Defaults come from DEFAULT_PRICING_POLICY; the tunable coefficients are
    read from settings once and the result is cached.
    """
    from .config import settings

    return replace(
        DEFAULT_PRICING_POLICY,
        rate_consistency_factor=settings.rate_consistency_factor,
        min_per_minute_rate=settings.min_per_minute_rate,
    )
