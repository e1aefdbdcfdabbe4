"""
Tests for the Accounting Service.

This test module covers:
- record_event (balance update + ledger append, atomicity)
- Purchase flow (earning)
- Redemption flow (balance cap)
- Points earned in a calendar period
- End-to-end earn/redeem scenario
"""
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import patch

import pytest

from loyalty_api.extensions import db
from loyalty_api.models import ChangeType, Customer, LedgerEntry
from loyalty_api.services.accounting_service import AccountingService
from loyalty_api.stores import LedgerStore
from loyalty_api.utils.time_utils import utcnow
from loyalty_api.utils.exceptions import (
    CustomerNotFoundError,
    InsufficientPointsError,
    ValidationError,
)


def ledger_rows(customer_id):
    return LedgerStore(db.session).list_for_customer(customer_id)


def balance(customer_id):
    db.session.expire_all()
    return db.session.get(Customer, customer_id).total_points


class TestRecordEvent:
    """Tests for AccountingService.record_event."""

    def test_updates_balance_and_appends_entry(self, app, sample_customer):
        service = AccountingService()

        customer = service.record_event('CUST-001', ChangeType.EARN, 7, 'txn-1', False)

        assert customer.total_points == 57
        rows = ledger_rows('CUST-001')
        assert len(rows) == 1
        assert rows[0].change_type == 'Earn'
        assert rows[0].point_change == 7
        assert rows[0].transaction_id == 'txn-1'
        assert rows[0].campaign_applied is False
        assert rows[0].timestamp is not None

    def test_negative_change_is_not_validated(self, app, sample_customer):
        """record_event leaves the non-negative check to the caller."""
        service = AccountingService()

        customer = service.record_event('CUST-001', ChangeType.REDEEM, -80, 'txn-neg', True)

        assert customer.total_points == -30
        assert ledger_rows('CUST-001')[0].campaign_applied is True

    def test_accepts_change_type_string(self, app, sample_customer):
        AccountingService().record_event('CUST-001', 'Earn', 1, 'txn-str')
        assert ledger_rows('CUST-001')[0].change_type == ChangeType.EARN.value

    def test_missing_customer_raises_not_found(self, app):
        with pytest.raises(CustomerNotFoundError):
            AccountingService().record_event('NOPE', ChangeType.EARN, 1, 'txn')
        assert db.session.query(LedgerEntry).count() == 0

    def test_deleted_customer_raises_not_found(self, app, deleted_customer):
        with pytest.raises(CustomerNotFoundError):
            AccountingService().record_event('CUST-999', ChangeType.EARN, 1, 'txn')
        assert balance('CUST-999') == 30
        assert ledger_rows('CUST-999') == []

    def test_ledger_failure_rolls_back_balance(self, app, sample_customer):
        """A failed ledger append must not leave an updated balance behind."""
        service = AccountingService()

        with patch.object(LedgerStore, 'append', side_effect=RuntimeError('ledger unavailable')):
            with pytest.raises(RuntimeError):
                service.record_event('CUST-001', ChangeType.EARN, 10, 'txn-fail')

        assert balance('CUST-001') == 50
        assert ledger_rows('CUST-001') == []

    def test_duplicate_transaction_id_rolls_back(self, app, sample_customer):
        from sqlalchemy.exc import IntegrityError

        service = AccountingService()
        service.record_event('CUST-001', ChangeType.EARN, 5, 'txn-dup')

        with pytest.raises(IntegrityError):
            service.record_event('CUST-001', ChangeType.EARN, 5, 'txn-dup')

        assert balance('CUST-001') == 55
        assert len(ledger_rows('CUST-001')) == 1


class TestProcessPurchase:
    """Tests for AccountingService.process_purchase."""

    def test_qualifying_purchase_awards_points(self, app, sample_customer):
        result = AccountingService().process_purchase('CUST-001', 149.99)

        assert result.new_total_points == 52
        assert result.points_changed == 2
        assert result.customer_id == 'CUST-001'
        assert 'Points awarded: 2' in result.message
        assert '149.99' in result.message

        rows = ledger_rows('CUST-001')
        assert len(rows) == 1
        assert rows[0].change_type == 'Earn'
        assert rows[0].point_change == 2
        assert rows[0].campaign_applied is False

    def test_each_purchase_gets_unique_transaction_id(self, app, sample_customer):
        service = AccountingService()
        service.process_purchase('CUST-001', 100)
        service.process_purchase('CUST-001', 100)

        txn_ids = {row.transaction_id for row in ledger_rows('CUST-001')}
        assert len(txn_ids) == 2

    def test_small_purchase_does_not_mutate(self, app, sample_customer):
        result = AccountingService().process_purchase('CUST-001', Decimal('49.99'))

        assert result.new_total_points == 50
        assert result.points_changed == 0
        assert 'did not qualify' in result.message
        assert ledger_rows('CUST-001') == []
        assert balance('CUST-001') == 50

    def test_message_uses_currency_symbol(self, app, sample_customer):
        result = AccountingService(currency_symbol='$').process_purchase('CUST-001', 20)
        assert '$20.00' in result.message
        assert '$50 or more' in result.message

    @pytest.mark.parametrize('amount', [0, -10, '0.00'])
    def test_non_positive_amount_rejected(self, app, sample_customer, amount):
        with pytest.raises(ValidationError):
            AccountingService().process_purchase('CUST-001', amount)
        assert ledger_rows('CUST-001') == []

    def test_unknown_customer(self, app):
        with pytest.raises(CustomerNotFoundError):
            AccountingService().process_purchase('NOPE', 100)

    def test_deleted_customer(self, app, deleted_customer):
        with pytest.raises(CustomerNotFoundError):
            AccountingService().process_purchase('CUST-999', 100)
        assert balance('CUST-999') == 30


class TestRedeemPoints:
    """Tests for AccountingService.redeem_points."""

    def test_redeem_debits_balance(self, app, sample_customer):
        result = AccountingService().redeem_points('CUST-001', 20, 'Coffee')

        assert result.new_total_points == 30
        assert result.points_changed == -20
        assert result.message == "Successfully redeemed 20 points for 'Coffee'."

        rows = ledger_rows('CUST-001')
        assert len(rows) == 1
        assert rows[0].change_type == 'Redeem'
        assert rows[0].point_change == -20
        assert rows[0].campaign_applied is True

    def test_redeem_exact_balance(self, app, sample_customer):
        result = AccountingService().redeem_points('CUST-001', 50, 'Voucher')
        assert result.new_total_points == 0

    def test_redeem_more_than_balance_rejected(self, app, sample_customer):
        with pytest.raises(InsufficientPointsError) as exc_info:
            AccountingService().redeem_points('CUST-001', 51, 'Voucher')

        error = exc_info.value
        assert error.requested == 51
        assert error.available == 50
        assert '50' in error.message and '51' in error.message
        assert balance('CUST-001') == 50
        assert ledger_rows('CUST-001') == []

    @pytest.mark.parametrize('points', [0, -5])
    def test_non_positive_points_rejected(self, app, sample_customer, points):
        with pytest.raises(ValidationError):
            AccountingService().redeem_points('CUST-001', points, 'Voucher')

    def test_blank_reward_rejected(self, app, sample_customer):
        with pytest.raises(ValidationError):
            AccountingService().redeem_points('CUST-001', 5, '   ')

    def test_deleted_customer(self, app, deleted_customer):
        with pytest.raises(CustomerNotFoundError):
            AccountingService().redeem_points('CUST-999', 5, 'Voucher')


class TestPointsEarnedInPeriod:
    """Tests for AccountingService.points_earned_in_period."""

    def _add(self, change_type, points, timestamp, txn):
        LedgerStore(db.session).append(LedgerEntry(
            customer_id='CUST-001',
            change_type=change_type.value,
            point_change=points,
            timestamp=timestamp,
            transaction_id=txn,
            campaign_applied=False
        ))
        db.session.commit()

    def test_inclusive_calendar_range(self, app, sample_customer):
        self._add(ChangeType.EARN, 1, datetime(2025, 3, 1, 0, 0, 0), 'first-instant')
        self._add(ChangeType.EARN, 2, datetime(2025, 3, 31, 23, 59, 59, 999999), 'last-instant')
        self._add(ChangeType.EARN, 100, datetime(2025, 2, 28, 23, 59, 59), 'before')
        self._add(ChangeType.EARN, 1000, datetime(2025, 4, 1, 0, 0, 0), 'after')

        earned = AccountingService().points_earned_in_period('CUST-001', date(2025, 3, 1), date(2025, 3, 31))
        assert earned == 3

    def test_redeem_entries_never_count(self, app, sample_customer):
        self._add(ChangeType.EARN, 10, datetime(2025, 3, 5), 'earn')
        self._add(ChangeType.REDEEM, -8, datetime(2025, 3, 6), 'redeem')

        earned = AccountingService().points_earned_in_period('CUST-001', date(2025, 3, 1), date(2025, 3, 31))
        assert earned == 10

    def test_single_day_range(self, app, sample_customer):
        self._add(ChangeType.EARN, 4, datetime(2025, 3, 5, 18, 30), 'evening')

        earned = AccountingService().points_earned_in_period('CUST-001', date(2025, 3, 5), date(2025, 3, 5))
        assert earned == 4

    def test_no_entries_returns_zero(self, app, sample_customer):
        earned = AccountingService().points_earned_in_period('CUST-001', date(2025, 1, 1), date(2025, 1, 31))
        assert earned == 0

    def test_start_after_end_rejected(self, app, sample_customer):
        with pytest.raises(ValidationError):
            AccountingService().points_earned_in_period('CUST-001', date(2025, 2, 1), date(2025, 1, 1))

    def test_deleted_customer(self, app, deleted_customer):
        with pytest.raises(CustomerNotFoundError):
            AccountingService().points_earned_in_period('CUST-999', date(2025, 1, 1), date(2025, 1, 31))


class TestEarnRedeemScenario:
    """Customer starts at 50, buys for 149.99, redeems everything, then overdraws."""

    def test_full_cycle(self, app, sample_customer):
        service = AccountingService()

        purchase = service.process_purchase('CUST-001', 149.99)
        assert purchase.new_total_points == 52

        redemption = service.redeem_points('CUST-001', 52, 'Gift Card')
        assert redemption.new_total_points == 0
        assert 'Gift Card' in redemption.message

        with pytest.raises(InsufficientPointsError):
            service.redeem_points('CUST-001', 1, 'Sticker')

        assert balance('CUST-001') == 0
        rows = ledger_rows('CUST-001')
        assert [(r.change_type, r.point_change) for r in rows] == [('Earn', 2), ('Redeem', -52)]

        today = utcnow().date()
        assert service.points_earned_in_period('CUST-001', today, today) == 2
