"""
Pydantic models for credit transactions.

Transactions record top-ups, per-message charges and refunds against a
user's balance.  Charges carry negative amounts.
"""

from typing import Optional

from pydantic import BaseModel

from .common import PageRead


class TransactionMetadata(BaseModel):
    channel: Optional[str] = None
    recipient: Optional[str] = None


class TransactionRead(BaseModel):
    id: str
    user_id: str
    type: str
    amount: float
    status: str
    description: str
    timestamp: str
    reference_id: Optional[str] = None
    metadata: TransactionMetadata = TransactionMetadata()


class TransactionSummary(BaseModel):
    """Totals over every transaction matching the filters, not just the page."""

    total_transactions: int
    total_topups: float
    total_charges: float
    total_refunds: float
    pending_amount: float


class TransactionPage(PageRead[TransactionRead]):
    summary: TransactionSummary
