"""
Business logic for credit transactions.

Transactions are listed per user.  Besides the requested page, the
service computes a summary over every transaction that matched the
filters.
"""

from typing import Any, Dict, List, Mapping, Tuple

from ..core.query import Page, ResourceQuerySpec, paginate, select_records
from .base import BaseService


TRANSACTION_QUERY = ResourceQuerySpec(
    name="transactions",
    timestamp_field="timestamp",
    search_fields=("description", "reference_id"),
    filters={"type": "type", "status": "status"},
    default_limit=20,
    sort_fields=("timestamp", "amount", "type", "status"),
    default_sort="timestamp",
    default_order="desc",
)


def summarize_transactions(transactions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Totals over ``transactions``; amounts are reported as absolute values."""

    def total(items) -> float:
        return round(sum(abs(float(t.get("amount") or 0)) for t in items), 2)

    return {
        "total_transactions": len(transactions),
        "total_topups": total(t for t in transactions if t.get("type") == "topup"),
        "total_charges": total(t for t in transactions if t.get("type") not in {"topup", "refund"}),
        "total_refunds": total(t for t in transactions if t.get("type") == "refund"),
        "pending_amount": total(t for t in transactions if t.get("status") == "pending"),
    }


class TransactionService(BaseService):

    async def list_for_user(self, user_id: str, params: Mapping[str, Any]) -> Tuple[Page, Dict[str, Any]]:
        """Return a page of the user's transactions and the summary.

        Raises :class:`~..core.errors.NotFoundError` for unknown users.
        """
        self.repositories.users.get(user_id)
        query = self.parse_query(TRANSACTION_QUERY, params)
        owned = [t for t in self.repositories.transactions.list() if t.get("user_id") == user_id]
        matched = select_records(owned, TRANSACTION_QUERY, query)
        return paginate(matched, query), summarize_transactions(matched)
