"""
Profile Service - reads and writes earner rates on the profiles table.
"""
import logging
from typing import Optional

from ..core.pricing_policy import PricingPolicy, get_pricing_policy
from ..core.supabase_client import supabase_client
from ..schemas.profile import PROFILE_COLUMNS, EarnerProfile
from ..schemas.rates import RateSet


logger = logging.getLogger(__name__)


class ProfileServiceError(Exception):
    """Raised when the profiles table cannot be read or updated."""


class ProfileNotFoundError(ProfileServiceError):
    """Raised when no profile row exists for the requested id."""


class ProfileService:
    """
    Persistence collaborator for rate editing.

    Rates are only ever written as a full set of four columns in one update.
    """

    TABLE = "profiles"

    def __init__(self, policy: Optional[PricingPolicy] = None):
        self._policy = policy

    @property
    def supabase(self):
        return supabase_client.service_client

    @property
    def policy(self) -> PricingPolicy:
        return self._policy or get_pricing_policy()

    async def get_profile(self, profile_id: str) -> EarnerProfile:
        """Load a profile with its rates defaulted where unset."""
        try:
            response = self.supabase.table(self.TABLE).select(
                PROFILE_COLUMNS
            ).eq("id", profile_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Error loading profile {profile_id}: {str(e)}")
            raise ProfileServiceError(f"Failed to load profile: {str(e)}") from e

        if not response.data:
            raise ProfileNotFoundError(f"Profile {profile_id} not found")

        return EarnerProfile.from_row(response.data[0], self.policy)

    async def update_rates(self, profile_id: str, rates: RateSet) -> RateSet:
        """
        Persist all four video rates for a profile.

        Returns the rates as stored. Callers are expected to have validated
        the set; this method does no pricing checks of its own.
        """
        updates = rates.as_columns()
        try:
            response = self.supabase.table(self.TABLE).update(
                updates
            ).eq("id", profile_id).execute()
        except Exception as e:
            logger.error(f"Error updating rates for profile {profile_id}: {str(e)}")
            raise ProfileServiceError(f"Failed to save rates: {str(e)}") from e

        if not response.data:
            # RLS or a missing row makes the update match nothing
            raise ProfileNotFoundError(f"Profile {profile_id} not found or not writable")

        logger.info(f"Saved rates for profile {profile_id}: {updates}")
        return EarnerProfile.from_row(response.data[0], self.policy).rates


# Global profile service instance
profile_service = ProfileService()
