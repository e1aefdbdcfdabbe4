"""
Database models for the Loyalty Points API.
"""
from .customer import Customer
from .points_ledger import ChangeType, LedgerEntry

__all__ = [
    'Customer',
    'ChangeType',
    'LedgerEntry',
]
