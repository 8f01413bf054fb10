"""
Authentication-related Pydantic schemas.
"""
from typing import Optional
from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Schema for user data response."""
    id: str = Field(..., description="User unique identifier")
    email: str = Field(..., description="User email address")
    full_name: Optional[str] = Field(None, description="User's full name")
    created_at: str = Field(..., description="Token issue timestamp")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation timestamp")
