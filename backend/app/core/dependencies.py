"""
FastAPI dependencies for authentication and authorization.

Clients send the Supabase session JWT as an Authorization Bearer header.
"""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..services.auth_service import auth_service
from ..services.profile_service import (
    ProfileNotFoundError,
    ProfileServiceError,
    profile_service,
)
from ..schemas.auth import UserResponse
from ..schemas.profile import EarnerProfile


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserResponse:
    """
    Dependency to get the current authenticated user.

    Raises:
        HTTPException: If authentication fails
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authentication provided. Send a Supabase JWT as a Bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_earner(
    current_user: UserResponse = Depends(get_current_user)
) -> EarnerProfile:
    """
    Dependency to get the current user's profile, which must be an earner.

    Raises:
        HTTPException: 404 if the profile is missing, 403 for non-earners
    """
    try:
        profile = await profile_service.get_profile(current_user.id)
    except ProfileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    except ProfileServiceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load profile",
        )

    if not profile.is_earner:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only earner accounts can set call rates",
        )
    return profile
