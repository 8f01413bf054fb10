"""
Rates API endpoints.

Earners edit their four video call rates; seekers read public rate cards.
Editing is two-tier: /clamp softly corrects each edit, PUT /me validates
the full set before anything is written.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from ...core.config import settings
from ...core.dependencies import get_current_earner
from ...core.pricing_policy import CallType, get_pricing_policy
from ...schemas.profile import EarnerProfile
from ...schemas.rates import (
    ClampRequest,
    ClampResponse,
    EarnerRatesResponse,
    NotificationResponse,
    PricingBreakdownResponse,
    PricingPolicyResponse,
    RateCardEntry,
    RateCardResponse,
    RateSet,
    RateValidationResponse,
    SaveRatesResponse,
)
from ...services.call_rates import (
    calculate_per_minute_rate,
    get_call_rate,
    get_derived_audio_rates,
    get_starting_price,
)
from ...services.earnings import (
    build_earnings_display,
    calculate_all_pricing,
    calculate_gross_usd,
    format_creator_earnings,
)
from ...services.profile_service import (
    ProfileNotFoundError,
    ProfileServiceError,
    profile_service,
)
from ...services.rate_editor import SAVE_FAILED_NOTICE, SAVED_NOTICE, Notification, RateEditSession
from ...services.rate_validator import (
    validate_all_rates,
    validate_monotonic_pricing,
    validate_per_minute_floor,
)


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/rates", tags=["rates"])

# Rate limiter for unauthenticated rate card lookups
limiter = Limiter(key_func=get_remote_address)


def _notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        level=notification.level.value,
        message=notification.message,
        duration_ms=notification.duration_ms,
    )


@router.get("/policy", response_model=PricingPolicyResponse)
async def get_policy():
    """Pricing policy used for slider bounds and client-side previews."""
    policy = get_pricing_policy()
    return PricingPolicyResponse(
        credit_to_usd=policy.credit_to_usd,
        creator_share=policy.creator_share,
        platform_share=policy.platform_share,
        min_rate=policy.min_rate,
        max_rate=policy.max_rate,
        min_rates=dict(policy.min_rates),
        default_rates=dict(policy.default_rates),
        audio_ratio=policy.audio_ratio,
        rate_consistency_factor=policy.rate_consistency_factor,
        min_per_minute_rate=policy.min_per_minute_rate,
        slider_step=policy.slider_step,
        durations=list(policy.durations),
    )


@router.get("/earnings", response_model=PricingBreakdownResponse)
async def get_earnings_breakdown(credits: int = Query(..., ge=0, description="Credit amount")):
    """Gross, creator and platform dollar amounts for a credit amount."""
    breakdown = calculate_all_pricing(credits)
    return PricingBreakdownResponse(
        credits=breakdown.credits,
        gross_usd=breakdown.gross_usd,
        creator_usd=breakdown.creator_usd,
        platform_usd=breakdown.platform_usd,
        creator_display=format_creator_earnings(credits),
    )


@router.post("/validate", response_model=RateValidationResponse)
async def validate_rates(rates: RateSet):
    """
    Run every save-time check on a rate set and report all failures.

    Unlike PUT /me this does not stop at the first failing check.
    """
    errors = list(validate_all_rates(rates).errors)
    for check in (validate_monotonic_pricing(rates), validate_per_minute_floor(rates)):
        if not check.valid:
            errors.append(check.error)
    return RateValidationResponse(valid=not errors, errors=errors)


@router.post("/clamp", response_model=ClampResponse)
async def clamp_rate_edit(request: ClampRequest):
    """
    Live-clamp one edited rate against its bounds and its shorter neighbour.

    Returns the corrected rate set and a notification if the value changed.
    """
    session = RateEditSession(request.rates)
    rate = session.set_rate(request.duration, request.value)
    notifications = session.drain_notifications()

    return ClampResponse(
        duration=request.duration,
        rate=rate,
        adjusted=bool(notifications),
        rates=session.rates,
        audio_rates=session.audio_rates(),
        notifications=[_notification_response(n) for n in notifications],
    )


@router.get("/me", response_model=EarnerRatesResponse)
async def get_my_rates(profile: EarnerProfile = Depends(get_current_earner)):
    """The current earner's rates with derived audio rates and earnings."""
    return EarnerRatesResponse(
        rates=profile.rates,
        audio_rates=get_derived_audio_rates(profile.rates),
        earnings=build_earnings_display(profile.rates),
    )


@router.put("/me", response_model=SaveRatesResponse)
async def save_my_rates(
    rates: RateSet,
    profile: EarnerProfile = Depends(get_current_earner),
):
    """
    Validate and save all four video rates in a single profile update.

    Raises:
        HTTPException: 422 when the set fails validation, 404 when the
            profile row no longer exists, 502 when the profile update fails
    """
    session = RateEditSession(rates)

    async def persist(new_rates: RateSet) -> RateSet:
        return await profile_service.update_rates(profile.id, new_rates)

    saved = await session.save(persist)
    notifications = session.drain_notifications()

    if not saved:
        if session.save_error is None:
            logger.warning(f"Rejected rates for profile {profile.id}: {session.rejection_reason}")
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"error": "invalid_rates", "message": session.rejection_reason},
            )
        if isinstance(session.save_error, ProfileNotFoundError):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "profile_not_found", "message": SAVE_FAILED_NOTICE},
            )
        logger.error(f"Failed to save rates for profile {profile.id}: {session.save_error}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "save_failed", "message": session.rejection_reason},
        )

    return SaveRatesResponse(
        message=SAVED_NOTICE,
        rates=session.saved_rates,
        audio_rates=session.audio_rates(),
        earnings=session.earnings_display(),
        notifications=[_notification_response(n) for n in notifications],
    )


@router.get("/earners/{profile_id}", response_model=RateCardResponse)
@limiter.limit(settings.public_rate_card_limit)
async def get_rate_card(request: Request, profile_id: str):
    """
    Public rate card for an earner, as shown to seekers.

    **Rate Limit**: settings.public_rate_card_limit per IP
    """
    try:
        profile = await profile_service.get_profile(profile_id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Earner not found")
    except ProfileServiceError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to load profile")

    if not profile.is_earner:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Earner not found")

    policy = get_pricing_policy()
    options = []
    for call_type in (CallType.VIDEO, CallType.AUDIO):
        for duration in policy.durations:
            credits = get_call_rate(profile.rates, call_type, duration, policy)
            options.append(RateCardEntry(
                duration=duration,
                call_type=call_type.value,
                credits=credits,
                usd=calculate_gross_usd(credits, policy),
                per_minute=round(calculate_per_minute_rate(credits, duration), 2),
            ))

    return RateCardResponse(
        profile_id=profile.id,
        name=profile.name,
        starting_price=get_starting_price(profile.rates),
        options=options,
    )
