"""
Explicit transaction boundary for store writes.

Usage:
    with UnitOfWork() as uow:
        customer = uow.customers.get_active(customer_id, for_update=True)
        customer.total_points += 10
        uow.customers.save(customer)
        uow.ledger.append(entry)
    # committed here; any exception inside the block rolls back both writes
"""
import logging

from ..extensions import db
from .customer_store import CustomerStore
from .ledger_store import LedgerStore

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Commit-or-rollback scope shared by CustomerStore and LedgerStore."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session
        self.customers = CustomerStore(self.session)
        self.ledger = LedgerStore(self.session)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.rollback()
            return False

        try:
            self.commit()
        except Exception:
            logger.exception("Commit failed, rolling back unit of work")
            self.rollback()
            raise
        return False

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()
