"""
Points ledger persistence (append-only).
"""
from datetime import datetime
from typing import List

from sqlalchemy import func

from ..models import ChangeType, LedgerEntry


class LedgerStore:
    """Ledger access bound to a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def append(self, entry: LedgerEntry) -> LedgerEntry:
        self.session.add(entry)
        self.session.flush()
        return entry

    def sum_earned_in_range(self, customer_id: str, start: datetime, end: datetime) -> int:
        """
        Sum Earn point changes for a customer with start <= timestamp < end.

        Returns 0 when nothing matches.
        """
        total = self.session.query(
            func.coalesce(func.sum(LedgerEntry.point_change), 0)
        ).filter(
            LedgerEntry.customer_id == customer_id,
            LedgerEntry.change_type == ChangeType.EARN.value,
            LedgerEntry.timestamp >= start,
            LedgerEntry.timestamp < end
        ).scalar()
        return int(total or 0)

    def list_for_customer(self, customer_id: str) -> List[LedgerEntry]:
        return self.session.query(LedgerEntry).filter(
            LedgerEntry.customer_id == customer_id
        ).order_by(LedgerEntry.id).all()

    def delete_all_for_customer(self, customer_id: str) -> int:
        """Administrative bulk delete. Returns number of rows removed."""
        deleted = self.session.query(LedgerEntry).filter(
            LedgerEntry.customer_id == customer_id
        ).delete(synchronize_session=False)
        self.session.flush()
        return deleted
