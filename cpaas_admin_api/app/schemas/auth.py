"""
Pydantic models for login and impersonation.

Credential fields are optional at the schema level so that the service
can answer missing values with its own 400 message.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .user import UserRead


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["john.doe@example.com"])
    password: Optional[str] = Field(None, examples=["admin123"])


class SessionUserRead(UserRead):
    """The authenticated user as seen by the dashboard."""

    isImpersonating: bool = False
    originalUserId: Optional[str] = None
    originalUserName: Optional[str] = None


class LoginResponse(BaseModel):
    user: SessionUserRead
    token: str
    message: str = "Login successful"


class DemoCredential(BaseModel):
    email: str
    password: str
    role: str
    description: str


class DemoCredentialsResponse(BaseModel):
    message: str = "Demo login credentials"
    credentials: List[DemoCredential]


class ImpersonateRequest(BaseModel):
    userId: Optional[str] = Field(None, examples=["user_2"])


class SessionResponse(BaseModel):
    user: SessionUserRead
    token: str
