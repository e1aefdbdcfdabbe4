"""
Customer lifecycle service.

Handles registration, profile updates, soft deletion and active-only
lookups. Deleted customers are indistinguishable from unknown IDs for every
operation except soft_delete itself.
"""
import logging
from typing import Callable, List, Optional

from ..models import Customer
from ..stores import UnitOfWork
from ..utils.exceptions import (
    CustomerAlreadyDeletedError,
    CustomerNotFoundError,
    DuplicateCustomerError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer registration and maintenance."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork] = UnitOfWork):
        self.uow_factory = uow_factory

    def list_active(self) -> List[Customer]:
        with self.uow_factory() as uow:
            return uow.customers.list_active()

    def get(self, customer_id: str) -> Customer:
        """
        Get an active customer.

        Raises:
            CustomerNotFoundError: customer absent or soft-deleted
        """
        with self.uow_factory() as uow:
            customer = uow.customers.get_active(customer_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)
            return customer

    def register(self, customer_id: str, name: str, initial_points: int = 0) -> Customer:
        """
        Register a new customer.

        Only an *active* customer with the same ID blocks registration. A
        soft-deleted ID is reused: the stored row becomes a fresh active
        record with the new name and balance. Its ledger history is kept.

        Raises:
            ValidationError: blank id/name or negative initial points
            DuplicateCustomerError: an active customer already has this ID
        """
        customer_id = (customer_id or '').strip()
        name = (name or '').strip()
        if not customer_id:
            raise ValidationError("Customer ID is required.", 'customer_id')
        if not name:
            raise ValidationError("Name is required.", 'name')
        if initial_points is None:
            initial_points = 0
        if initial_points < 0:
            raise ValidationError("Initial points cannot be negative.", 'initial_points')

        with self.uow_factory() as uow:
            if uow.customers.get_active(customer_id) is not None:
                raise DuplicateCustomerError(customer_id)

            customer = uow.customers.get_any(customer_id)
            if customer is None:
                customer = Customer(customer_id=customer_id)
            else:
                logger.info(f"Re-registering previously deleted customer {customer_id}")

            customer.name = name
            customer.total_points = initial_points
            customer.is_deleted = False
            uow.customers.save(customer)

        logger.info(f"Customer registered: {customer_id} with {initial_points} pts")
        return customer

    def update(self, customer_id: str, name: Optional[str] = None, total_points: Optional[int] = None) -> Customer:
        """
        Partially update name and/or balance.

        Raises:
            ValidationError: neither field supplied
            CustomerNotFoundError: customer absent or soft-deleted
        """
        with self.uow_factory() as uow:
            customer = uow.customers.get_active(customer_id, for_update=True)
            if customer is None:
                raise CustomerNotFoundError(customer_id)

            updated = False
            if name is not None:
                customer.name = name
                updated = True
            if total_points is not None:
                customer.total_points = total_points
                updated = True

            if not updated:
                raise ValidationError("No valid fields provided for update.")

            uow.customers.save(customer)

        logger.info(f"Customer updated: {customer_id}")
        return customer

    def soft_delete(self, customer_id: str) -> Customer:
        """
        Mark a customer deleted. Ledger rows are left in place.

        Raises:
            CustomerNotFoundError: no customer with this ID at all
            CustomerAlreadyDeletedError: customer is already deleted
        """
        with self.uow_factory() as uow:
            customer = uow.customers.get_any(customer_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)
            if customer.is_deleted:
                raise CustomerAlreadyDeletedError(customer_id)

            customer.is_deleted = True
            uow.customers.save(customer)

        logger.warning(f"Customer soft-deleted: {customer_id}")
        return customer
