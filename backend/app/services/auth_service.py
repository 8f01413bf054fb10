"""
Authentication service for resolving the current user from a Supabase JWT.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from fastapi import HTTPException, status

from ..core.security import verify_token
from ..schemas.auth import UserResponse


logger = logging.getLogger(__name__)


class AuthService:
    """Service class for authentication operations."""

    async def get_current_user(self, token: str) -> UserResponse:
        """
        Get current user from a Supabase JWT.

        Everything comes from the verified claims, so each request reflects
        the token it was sent with.
        """
        payload = verify_token(token)

        if not payload:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token - verification failed"
            )

        user_id = payload.get("sub")
        if not user_id:
            logger.warning("Rejected token without a sub claim")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: missing user ID (sub claim)"
            )

        return self._user_from_claims(user_id, payload)

    @staticmethod
    def _user_from_claims(user_id: str, payload: Dict[str, Any]) -> UserResponse:
        """Build the user from Supabase token claims."""
        user_metadata = payload.get("user_metadata") or {}
        email = payload.get("email") or user_metadata.get("email", "")
        full_name = user_metadata.get("full_name") or user_metadata.get("name")

        issued_at = payload.get("iat")
        issued = datetime.fromtimestamp(issued_at, tz=timezone.utc) if issued_at else datetime.now(timezone.utc)
        created_at = issued.isoformat()

        email_confirmed_at: Optional[str] = created_at if user_metadata.get("email_verified") else None

        return UserResponse(
            id=user_id,
            email=email,
            full_name=full_name,
            created_at=created_at,
            email_confirmed_at=email_confirmed_at
        )


# Global auth service instance
auth_service = AuthService()
