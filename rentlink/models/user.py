"""User model."""

from pydantic import BaseModel, Field
from rentlink.models.view_state import UserRole


class User(BaseModel):
    """Signed-in user."""
    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    role: UserRole = Field(default=UserRole.RENTER)
    avatar: str = Field(default="", description="Avatar URL")
    email: str = Field(..., description="Email address")
    verified: bool = False
