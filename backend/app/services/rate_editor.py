"""
Rate edit session - binds the rate settings form to the validator.

A session tracks one earner's in-memory edits:

    IDLE -> EDITING (any number of set_rate calls) -> VALIDATING -> SAVED
                                                              \\-> REJECTED

A REJECTED session keeps its edited rates; the next set_rate moves it back
to EDITING and save() may be retried.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..core.pricing_policy import PricingPolicy, get_pricing_policy
from ..schemas.rates import RateSet
from .call_rates import get_derived_audio_rates
from .earnings import build_earnings_display
from .rate_validator import RateCheckResult, clamp_rate, validate_rate_set


logger = logging.getLogger(__name__)

CLAMP_NOTICE = "Adjusted to keep rates consistent"
CLAMP_NOTICE_MS = 2000
SAVED_NOTICE = "Settings saved!"
SAVE_FAILED_NOTICE = "Failed to save"

PersistRates = Callable[[RateSet], Awaitable[Any]]


class EditState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    VALIDATING = "validating"
    SAVED = "saved"
    REJECTED = "rejected"


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A transient message for the earner (toast)."""
    level: NotificationLevel
    message: str
    duration_ms: Optional[int] = None


class RateEditSession:
    """In-memory edit of one earner's four video rates."""

    def __init__(self, rates: RateSet, policy: Optional[PricingPolicy] = None):
        self.policy = policy or get_pricing_policy()
        self.rates = rates
        self.saved_rates: Optional[RateSet] = None
        self.state = EditState.IDLE
        self.rejection_reason: Optional[str] = None
        self.save_error: Optional[Exception] = None
        self.is_saving = False
        self.notifications: List[Notification] = []

    def _notify(self, level: NotificationLevel, message: str, duration_ms: Optional[int] = None) -> None:
        self.notifications.append(Notification(level=level, message=message, duration_ms=duration_ms))

    def drain_notifications(self) -> List[Notification]:
        """Return pending notifications and clear them."""
        pending, self.notifications = self.notifications, []
        return pending

    def set_rate(self, duration: int, value: float) -> int:
        """
        Apply a live edit to one duration and return the rate actually set.

        The value is clamped against the duration's bounds and the current
        rate of the next shorter duration. An INFO notification is queued
        when the value had to be changed.
        """
        prev_duration = self.policy.previous_duration(duration)
        previous_rate = self.rates.rate_for(prev_duration) if prev_duration else None

        result = clamp_rate(value, duration, previous_rate, self.policy)
        if result.adjusted:
            logger.debug(f"Clamped {duration} min rate from {value} to {result.rate}")
            self._notify(NotificationLevel.INFO, CLAMP_NOTICE, CLAMP_NOTICE_MS)

        self.rates = self.rates.with_rate(duration, result.rate)
        self.state = EditState.EDITING
        self.rejection_reason = None
        return result.rate

    def validate(self) -> RateCheckResult:
        return validate_rate_set(self.rates, self.policy)

    def audio_rates(self) -> Dict[int, int]:
        return get_derived_audio_rates(self.rates, self.policy)

    def earnings_display(self) -> Dict[str, Dict[int, str]]:
        return build_earnings_display(self.rates, self.policy)

    def _reject(self, reason: str) -> bool:
        self.state = EditState.REJECTED
        self.rejection_reason = reason
        self._notify(NotificationLevel.ERROR, reason)
        return False

    async def save(self, persist: PersistRates) -> bool:
        """
        Validate the full rate set and persist it.

        Returns True when the rates were saved. Validation failures never
        reach persist(); persistence failures leave the edited rates in
        place so the earner can retry, and keep the exception in save_error.
        """
        if self.is_saving:
            logger.debug("Save already in progress, ignoring")
            return False

        self.save_error = None
        self.state = EditState.VALIDATING
        check = self.validate()
        if not check.valid:
            logger.info(f"Rate save rejected: {check.error}")
            return self._reject(check.error)

        self.is_saving = True
        try:
            stored = await persist(self.rates)
        except Exception as e:
            logger.warning(f"Rate save failed: {str(e)}")
            self.save_error = e
            return self._reject(SAVE_FAILED_NOTICE)
        finally:
            self.is_saving = False

        if isinstance(stored, RateSet):
            self.rates = stored
        self.saved_rates = self.rates
        self.state = EditState.SAVED
        self.rejection_reason = None
        self._notify(NotificationLevel.SUCCESS, SAVED_NOTICE)
        return True
