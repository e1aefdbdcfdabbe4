"""
Business logic services for the Loyalty Points API.
"""
from .accounting_service import AccountingService, StatusResult
from .customer_service import CustomerService

__all__ = [
    'AccountingService',
    'StatusResult',
    'CustomerService'
]
