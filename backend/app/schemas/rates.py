"""
Pydantic schemas for earner rates and pricing endpoints.
"""

from typing import Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.pricing_policy import RATE_COLUMNS, CallDuration, column_for_duration


class RateSet(BaseModel):
    """The four video call prices (credits) of one earner."""
    model_config = ConfigDict(frozen=True)

    video_15min_rate: int = Field(..., gt=0, description="15 minute video call rate (credits)")
    video_30min_rate: int = Field(..., gt=0, description="30 minute video call rate (credits)")
    video_60min_rate: int = Field(..., gt=0, description="60 minute video call rate (credits)")
    video_90min_rate: int = Field(..., gt=0, description="90 minute video call rate (credits)")

    @classmethod
    def from_mapping(cls, rates: Mapping[int, int]) -> "RateSet":
        """Build a RateSet from a {duration: rate} mapping."""
        return cls(**{column_for_duration(d): int(v) for d, v in rates.items()})

    def rate_for(self, duration: int) -> int:
        return getattr(self, column_for_duration(duration))

    def with_rate(self, duration: int, value: int) -> "RateSet":
        """Return a copy with one duration's rate replaced."""
        return self.model_copy(update={column_for_duration(duration): int(value)})

    def as_columns(self) -> Dict[str, int]:
        """The four persisted profile fields."""
        return {column: int(getattr(self, column)) for column in RATE_COLUMNS.values()}

    def by_duration(self) -> Dict[int, int]:
        return {duration: getattr(self, column) for duration, column in RATE_COLUMNS.items()}


class PricingPolicyResponse(BaseModel):
    """Pricing policy exposed to clients for slider bounds."""
    credit_to_usd: float
    creator_share: float
    platform_share: float
    min_rate: int
    max_rate: int
    min_rates: Dict[int, int]
    default_rates: Dict[int, int]
    audio_ratio: float
    rate_consistency_factor: float
    min_per_minute_rate: float
    slider_step: int
    durations: List[int]


class PricingBreakdownResponse(BaseModel):
    """Dollar split of a credit amount."""
    credits: int
    gross_usd: float
    creator_usd: float
    platform_usd: float
    creator_display: str


class RateValidationResponse(BaseModel):
    """Result of validating a full RateSet."""
    valid: bool
    errors: List[str] = Field(default_factory=list)


class ClampRequest(BaseModel):
    """A single live edit of one duration's rate."""
    duration: CallDuration = Field(..., description="Edited call duration in minutes")
    value: float = Field(..., description="Raw value entered by the earner")
    rates: RateSet = Field(..., description="Current in-memory rates before the edit")


class NotificationResponse(BaseModel):
    level: str
    message: str
    duration_ms: Optional[int] = None


class ClampResponse(BaseModel):
    """Outcome of a live clamp."""
    duration: CallDuration
    rate: int
    adjusted: bool
    rates: RateSet
    audio_rates: Dict[int, int]
    notifications: List[NotificationResponse] = Field(default_factory=list)


class EarnerRatesResponse(BaseModel):
    """An earner's own rates with derived audio rates and earnings strings."""
    rates: RateSet
    audio_rates: Dict[int, int]
    earnings: Dict[str, Dict[int, str]]


class SaveRatesResponse(EarnerRatesResponse):
    """Response after a successful save."""
    message: str
    notifications: List[NotificationResponse] = Field(default_factory=list)


class RateCardEntry(BaseModel):
    """One bookable option on a public rate card."""
    duration: int
    call_type: str
    credits: int
    usd: float
    per_minute: float


class RateCardResponse(BaseModel):
    """Public rate card shown to seekers."""
    profile_id: str
    name: Optional[str] = None
    starting_price: int
    options: List[RateCardEntry]
