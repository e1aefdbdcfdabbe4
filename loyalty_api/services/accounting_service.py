"""
Accounting Service for the Loyalty Points API.

Points accounting core:
- Points calculation from purchase amounts (1 point per full 50 spent)
- Atomic balance update + ledger append for every accounting event
- Purchase (Earn) and redemption (Redeem) flows
- Points earned in a calendar date range

ARCHITECTURE:
- Customer.total_points is the running balance
- points_ledger is the append-only history; every change to total_points
  made here has exactly one matching ledger row
- Both writes happen inside one UnitOfWork: they commit together or roll
  back together
- Redemption is capped by the current balance, so balances never go
  negative through this service
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable

from ..config import BaseConfig
from ..models import ChangeType, Customer, LedgerEntry
from ..stores import UnitOfWork
from ..utils.exceptions import (
    CustomerNotFoundError,
    InsufficientPointsError,
    ValidationError,
)
from ..utils.time_utils import inclusive_date_range, utcnow

logger = logging.getLogger(__name__)


# ==================== Configuration ====================

POINTS_UNIT_AMOUNT = BaseConfig.POINTS_UNIT_AMOUNT
DEFAULT_CURRENCY_SYMBOL = BaseConfig.CURRENCY_SYMBOL

# Largest point delta a single event may carry (32-bit Integer columns)
MAX_POINTS_PER_EVENT = 2 ** 31 - 1


@dataclass
class StatusResult:
    """Outcome of a purchase or redemption."""
    message: str
    customer_id: str
    new_total_points: int
    points_changed: int = 0

    def to_dict(self):
        return {
            'message': self.message,
            'customerId': self.customer_id,
            'newTotalPoints': self.new_total_points
        }


def _to_decimal(amount, field: str = 'amount') -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field} must be a number", field)
    if not value.is_finite():
        raise ValidationError(f"{field} must be a finite number", field)
    return value


def new_transaction_id() -> str:
    return str(uuid.uuid4())


class AccountingService:
    """
    Central service for all points accounting.

    Usage:
        service = AccountingService()

        # Purchase: award 1 point per full 50 spent
        result = service.process_purchase('CUST-001', Decimal('149.99'))

        # Redeem points for a reward
        result = service.redeem_points('CUST-001', 52, 'Gift Card')

        # Points earned between two calendar dates (inclusive)
        earned = service.points_earned_in_period('CUST-001', start, end)
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork] = UnitOfWork,
        points_unit_amount: int = POINTS_UNIT_AMOUNT,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    ):
        """
        Initialize AccountingService.

        Args:
            uow_factory: Callable returning a fresh UnitOfWork (stores + transaction)
            points_unit_amount: Spend required per point
            currency_symbol: Symbol used in purchase messages
        """
        self.uow_factory = uow_factory
        self.points_unit_amount = points_unit_amount
        self.currency_symbol = currency_symbol

    # ==================== Points Rule ====================

    def calculate_points(self, amount) -> int:
        """
        Points earned for a purchase amount: floor(amount / unit).

        Amounts below one unit, including zero and negative amounts, earn 0.

        Raises:
            ValidationError: amount is not a number, or would earn more than
                MAX_POINTS_PER_EVENT points
        """
        value = _to_decimal(amount)
        if value < self.points_unit_amount:
            return 0
        if value >= self.points_unit_amount * (MAX_POINTS_PER_EVENT + 1):
            raise ValidationError("Amount is too large.", 'amount')
        return int(value // self.points_unit_amount)

    # ==================== Core Ledger Operation ====================

    def record_event(
        self,
        customer_id: str,
        change_type: ChangeType,
        point_change: int,
        transaction_id: str,
        campaign_applied: bool = False
    ) -> Customer:
        """
        Apply a point delta to an active customer and append the ledger row.

        Does not check that the resulting balance stays non-negative; callers
        that debit points (redeem_points) enforce that.

        Raises:
            CustomerNotFoundError: customer absent or soft-deleted
        """
        with self.uow_factory() as uow:
            customer = uow.customers.get_active(customer_id, for_update=True)
            if customer is None:
                raise CustomerNotFoundError(customer_id)

            self._apply_event(uow, customer, change_type, point_change, transaction_id, campaign_applied)

        return customer

    def _apply_event(self, uow, customer, change_type, point_change, transaction_id, campaign_applied):
        change_type = ChangeType(change_type)

        customer.total_points = (customer.total_points or 0) + point_change
        uow.customers.save(customer)

        uow.ledger.append(LedgerEntry(
            customer_id=customer.customer_id,
            change_type=change_type.value,
            point_change=point_change,
            timestamp=utcnow(),
            transaction_id=transaction_id,
            campaign_applied=campaign_applied
        ))

        logger.info(
            f"Points {change_type.value.lower()}: {customer.customer_id} "
            f"{point_change:+d} pts -> {customer.total_points} (txn {transaction_id})"
        )

    # ==================== Flows ====================

    def process_purchase(self, customer_id: str, amount) -> StatusResult:
        """
        Record a purchase and award points if the amount qualifies.

        Purchases below one points unit are acknowledged without touching
        the balance or the ledger.

        Raises:
            ValidationError: amount is not a positive number, or is too large
            CustomerNotFoundError: customer absent or soft-deleted
        """
        value = _to_decimal(amount)
        if value <= 0:
            raise ValidationError("Amount must be greater than zero.", 'amount')
        points = self.calculate_points(value)

        with self.uow_factory() as uow:
            customer = uow.customers.get_active(customer_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)
            current_points = customer.total_points

        formatted = f"{self.currency_symbol}{value:.2f}"

        if points > 0:
            updated = self.record_event(
                customer_id,
                ChangeType.EARN,
                points,
                new_transaction_id(),
                campaign_applied=False
            )
            return StatusResult(
                message=f"Successfully recorded purchase of {formatted}. Points awarded: {points}.",
                customer_id=customer_id,
                new_total_points=updated.total_points,
                points_changed=points
            )

        logger.info(f"Purchase of {formatted} by {customer_id} did not qualify for points")
        return StatusResult(
            message=(
                f"Purchase of {formatted} recorded, but the amount did not qualify for "
                f"loyalty points (must be {self.currency_symbol}{self.points_unit_amount} or more)."
            ),
            customer_id=customer_id,
            new_total_points=current_points
        )

    def redeem_points(self, customer_id: str, points_to_redeem: int, reward_description: str) -> StatusResult:
        """
        Redeem points for a reward.

        The balance check and the debit run under the same row lock and
        unit of work, so two concurrent redemptions cannot both pass the
        check against the same balance.

        Raises:
            ValidationError: non-positive points or blank reward description
            CustomerNotFoundError: customer absent or soft-deleted
            InsufficientPointsError: points_to_redeem exceeds the balance
        """
        if isinstance(points_to_redeem, bool) or not isinstance(points_to_redeem, int):
            raise ValidationError("Points to redeem must be a whole number.", 'points_to_redeem')
        if points_to_redeem <= 0:
            raise ValidationError("Points to redeem must be greater than zero.", 'points_to_redeem')
        if not reward_description or not reward_description.strip():
            raise ValidationError("Reward description is required.", 'reward_description')

        transaction_id = new_transaction_id()

        with self.uow_factory() as uow:
            customer = uow.customers.get_active(customer_id, for_update=True)
            if customer is None:
                raise CustomerNotFoundError(customer_id)

            available = customer.total_points or 0
            if points_to_redeem > available:
                logger.info(
                    f"Redemption rejected for {customer_id}: requested {points_to_redeem}, "
                    f"available {available}"
                )
                raise InsufficientPointsError(available=available, requested=points_to_redeem)

            self._apply_event(
                uow,
                customer,
                ChangeType.REDEEM,
                -points_to_redeem,
                transaction_id,
                campaign_applied=True
            )

        return StatusResult(
            message=f"Successfully redeemed {points_to_redeem} points for '{reward_description}'.",
            customer_id=customer_id,
            new_total_points=customer.total_points,
            points_changed=-points_to_redeem
        )

    # ==================== Queries ====================

    def points_earned_in_period(self, customer_id: str, start_date: date, end_date: date) -> int:
        """
        Gross points earned between two calendar dates, both inclusive.

        Only Earn rows count; redemptions do not reduce the figure.

        Raises:
            CustomerNotFoundError: customer absent or soft-deleted
            ValidationError: start_date is after end_date
        """
        with self.uow_factory() as uow:
            customer = uow.customers.get_active(customer_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)

            if start_date > end_date:
                raise ValidationError("Start date cannot be after end date.", 'start_date')

            start, end = inclusive_date_range(start_date, end_date)
            return uow.ledger.sum_earned_in_range(customer_id, start, end)
