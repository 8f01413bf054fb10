"""
Authentication API routes.

Sign-in happens against Supabase Auth on the client; these routes only
expose the identity resolved from the bearer token.
"""
from fastapi import APIRouter, Depends

from ...schemas.auth import UserResponse
from ...core.dependencies import get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Return the user identified by the Supabase JWT."""
    return current_user


@router.get("/health")
async def auth_health():
    """Health check for the authentication routes."""
    return {"status": "healthy", "service": "authentication"}
