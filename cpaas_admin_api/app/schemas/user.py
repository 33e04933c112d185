"""
Pydantic models for platform users.

Users are the accounts of the CPaaS customers and staff.  The stored
record also holds a password hash, which none of these schemas expose.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


Role = Literal["admin", "supervisor", "agent", "user"]
Status = Literal["active", "inactive", "suspended"]


class UserBase(BaseModel):
    name: str = Field(..., examples=["Jane Smith"])
    email: str = Field(..., examples=["jane.smith@example.com"])
    role: Role = Field(..., examples=["user"])
    company: Optional[str] = Field(None, examples=["Tech Solutions Inc"])


class UserCreate(UserBase):
    """Schema for creating a user from the admin console.

    ``password`` is optional; users created without one cannot log in
    until an administrator sets it.
    """

    password: Optional[str] = Field(None, min_length=6)


class UserUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    status: Optional[Status] = None
    company: Optional[str] = None
    project_id: Optional[str] = None
    currency: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: str
    status: Status
    created_at: str
    last_login: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
    balance: float = 0
    currency: str = "USD"
    project_id: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class TopupRequest(BaseModel):
    amount: float = Field(..., examples=[50.0])


class TopupRead(BaseModel):
    balance: float
    transaction_id: str
    amount: float
    user_id: str
    timestamp: str
