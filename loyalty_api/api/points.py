"""
Points API endpoints.

Handles:
- Purchases that earn points  (POST /api/transactions/purchase)
- Reward redemptions          (POST /api/points/redeem)
- Points earned in a period   (GET  /api/customers/<id>/points-by-time)
"""
from flask import Blueprint, current_app, jsonify, request

from ..services.accounting_service import AccountingService
from ..utils.exceptions import ValidationError
from ..utils.time_utils import parse_iso_date
from .validation import json_body, required_int, required_str

transactions_bp = Blueprint('transactions', __name__)
points_bp = Blueprint('points', __name__)


def get_accounting_service() -> AccountingService:
    """AccountingService configured from the current app."""
    return AccountingService(
        points_unit_amount=current_app.config['POINTS_UNIT_AMOUNT'],
        currency_symbol=current_app.config['CURRENCY_SYMBOL']
    )


# ==============================================================================
# EARNING
# ==============================================================================

@transactions_bp.route('/purchase', methods=['POST'])
def process_purchase():
    """
    Record a purchase and award points.

    JSON body:
        customerId: Customer ID (required)
        amount: Purchase amount, > 0 (required)

    Returns:
        message, customerId, newTotalPoints
    """
    data = json_body()
    customer_id = required_str(data, 'customerId', 'Customer ID')

    amount = data.get('amount')
    if amount is None or isinstance(amount, bool):
        raise ValidationError("Amount is required.", 'amount')

    result = get_accounting_service().process_purchase(customer_id, amount)
    return jsonify(result.to_dict())


# ==============================================================================
# REDEMPTION
# ==============================================================================

@points_bp.route('/points/redeem', methods=['POST'])
def redeem_points():
    """
    Redeem points for a reward.

    JSON body:
        customerId: Customer ID (required)
        pointsToRedeem: Points to spend, >= 1 (required)
        rewardDescription: What the points were redeemed for (required)
    """
    data = json_body()
    customer_id = required_str(data, 'customerId', 'Customer ID')
    points_to_redeem = required_int(data, 'pointsToRedeem', 'Points to redeem')
    if points_to_redeem < 1:
        raise ValidationError("Points to redeem must be greater than zero.", 'pointsToRedeem')
    reward_description = required_str(data, 'rewardDescription', 'Reward description')

    result = get_accounting_service().redeem_points(customer_id, points_to_redeem, reward_description)
    return jsonify(result.to_dict())


# ==============================================================================
# REPORTING
# ==============================================================================

@points_bp.route('/customers/<customer_id>/points-by-time', methods=['GET'])
def get_points_by_time(customer_id):
    """
    Points earned between two dates (both inclusive).

    Query params:
        startDate: YYYY-MM-DD (required)
        endDate: YYYY-MM-DD (required)
    """
    try:
        start_date = parse_iso_date(request.args.get('startDate', ''))
    except ValueError:
        raise ValidationError("startDate must be a date in YYYY-MM-DD format.", 'startDate')
    try:
        end_date = parse_iso_date(request.args.get('endDate', ''))
    except ValueError:
        raise ValidationError("endDate must be a date in YYYY-MM-DD format.", 'endDate')

    points = get_accounting_service().points_earned_in_period(customer_id, start_date, end_date)

    return jsonify({
        'customerId': customer_id,
        'startDate': start_date.isoformat(),
        'endDate': end_date.isoformat(),
        'pointsEarned': points
    })
