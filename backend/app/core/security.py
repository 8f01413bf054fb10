"""
Security utilities for authentication.

Earners sign in through Supabase Auth on the client; the backend only
verifies the Supabase session JWT it receives as a bearer token.
"""
import logging
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from .config import settings


logger = logging.getLogger(__name__)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a Supabase JWT.

    Returns the claims, or None when the signature, expiry or audience
    check fails.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience
        )
    except JWTError as e:
        logger.debug(f"Token verification failed: {type(e).__name__}: {e}")
        return None


def extract_user_id_from_token(token: str) -> Optional[str]:
    """Extract user ID from JWT token."""
    payload = verify_token(token)
    if payload:
        return payload.get("sub")  # 'sub' is the standard claim for user ID
    return None
