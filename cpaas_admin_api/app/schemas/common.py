"""Schemas shared by every list endpoint."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class PageRead(BaseModel, Generic[T]):
    """One page of a list query with its pagination metadata."""

    items: List[T]
    total: int = Field(..., examples=[25])
    page: int = Field(..., examples=[1])
    limit: int = Field(..., examples=[10])
    totalPages: int = Field(..., examples=[3])


class MessageRead(BaseModel):
    """Plain acknowledgement body, also used for every error response."""

    message: str
