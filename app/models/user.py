"""
User models for admin authentication.
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """Stored admin account. `password` is the "<hash>.<salt>" string, never plaintext."""
    id: int
    username: str
    password: str

    def public(self) -> "UserResponse":
        return UserResponse(id=self.id, username=self.username)


class UserResponse(BaseModel):
    """User as exposed over the API (no password hash)."""
    id: int = Field(..., description="User id")
    username: str = Field(..., description="Login name")


class LoginRequest(BaseModel):
    """Body of POST /api/login."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)
