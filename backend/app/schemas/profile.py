"""
Profile record schemas.
"""
from enum import Enum
from typing import Any, Mapping, Optional
from pydantic import BaseModel, Field

from ..core.pricing_policy import RATE_COLUMNS, PricingPolicy, get_pricing_policy
from .rates import RateSet


class UserType(str, Enum):
    """Platform roles stored on the profile row."""
    SEEKER = "seeker"
    EARNER = "earner"


# Columns read from the profiles table
PROFILE_COLUMNS = ", ".join(["id", "name", "user_type", *RATE_COLUMNS.values()])


class EarnerProfile(BaseModel):
    """Typed view of a profiles row with its rates always populated."""
    id: str = Field(..., description="Profile / auth user identifier")
    name: Optional[str] = Field(None, description="Display name")
    user_type: Optional[UserType] = Field(None, description="seeker or earner")
    rates: RateSet

    @property
    def is_earner(self) -> bool:
        return self.user_type == UserType.EARNER

    @classmethod
    def from_row(cls, row: Mapping[str, Any], policy: Optional[PricingPolicy] = None) -> "EarnerProfile":
        """
        Build a profile from a raw Supabase row.

        NULL or missing rate columns take the policy's default rate for that
        duration so callers never deal with absent rates.
        """
        policy = policy or get_pricing_policy()
        rates = {}
        for duration, column in RATE_COLUMNS.items():
            value = row.get(column)
            rates[duration] = value if value else policy.default_rates[duration]

        return cls(
            id=str(row["id"]),
            name=row.get("name"),
            user_type=row.get("user_type"),
            rates=RateSet.from_mapping(rates),
        )
