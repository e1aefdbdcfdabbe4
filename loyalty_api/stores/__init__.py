"""
Persistence layer: customer and ledger stores plus the unit of work that
commits them together.
"""
from .customer_store import CustomerStore
from .ledger_store import LedgerStore
from .unit_of_work import UnitOfWork

__all__ = [
    'CustomerStore',
    'LedgerStore',
    'UnitOfWork',
]
