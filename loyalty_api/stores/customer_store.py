"""
Customer persistence.

The soft-delete boundary is explicit: ``get_active`` / ``list_active`` only
ever see customers with ``is_deleted = False``; ``get_any`` is reserved for
administrative paths (soft delete, re-registration of a deleted ID).
"""
from typing import List, Optional

from ..models import Customer


class CustomerStore:
    """Customer CRUD bound to a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def get_active(self, customer_id: str, for_update: bool = False) -> Optional[Customer]:
        """
        Load an active customer.

        Args:
            customer_id: Customer primary key
            for_update: Take a row lock (SELECT ... FOR UPDATE). SQLite
                ignores the lock; the version_id column still guards
                against lost updates.
        """
        query = self.session.query(Customer).filter_by(
            customer_id=customer_id,
            is_deleted=False
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_any(self, customer_id: str) -> Optional[Customer]:
        """Load a customer regardless of the soft-delete flag."""
        return self.session.get(Customer, customer_id)

    def list_active(self) -> List[Customer]:
        return self.session.query(Customer).filter_by(
            is_deleted=False
        ).order_by(Customer.customer_id).all()

    def save(self, customer: Customer) -> Customer:
        """Stage an insert/update and flush so constraint and version errors surface here."""
        self.session.add(customer)
        self.session.flush()
        return customer
