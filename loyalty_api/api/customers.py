"""
Customer API endpoints.

Customer management (active customers only; deleted IDs answer 404):
- GET    /api/customers/all
- POST   /api/customers/register
- GET    /api/customers/<customer_id>
- GET    /api/customers/<customer_id>/balance
- PUT    /api/customers/<customer_id>
- DELETE /api/customers/<customer_id>
"""
from flask import Blueprint, jsonify

from ..services.customer_service import CustomerService
from ..utils.exceptions import ValidationError
from .validation import json_body, optional_int, required_str

customers_bp = Blueprint('customers', __name__)


@customers_bp.route('/all', methods=['GET'])
def list_customers():
    """List all active customers."""
    customers = CustomerService().list_active()
    return jsonify([c.to_dict() for c in customers])


@customers_bp.route('/register', methods=['POST'])
def register_customer():
    """
    Register a new customer.

    JSON body:
        customerId: Unique customer ID (required)
        name: Customer name (required)
        initialPoints: Starting balance, >= 0 (optional, default 0)
    """
    data = json_body()

    customer_id = required_str(data, 'customerId', 'Customer ID')
    name = required_str(data, 'name', 'Name')
    initial_points = optional_int(data, 'initialPoints', 'Initial points')

    customer = CustomerService().register(customer_id, name, initial_points)
    return jsonify(customer.to_dict()), 201


@customers_bp.route('/<customer_id>', methods=['GET'])
def get_customer(customer_id):
    """Get customer details."""
    customer = CustomerService().get(customer_id)
    return jsonify(customer.to_dict())


@customers_bp.route('/<customer_id>/balance', methods=['GET'])
def get_customer_balance(customer_id):
    """Get a customer's current points balance."""
    customer = CustomerService().get(customer_id)
    return jsonify(customer.to_dict())


@customers_bp.route('/<customer_id>', methods=['PUT'])
def update_customer(customer_id):
    """
    Partially update a customer.

    JSON body (at least one):
        name: New name
        totalPoints: New balance
    """
    data = json_body()

    name = data.get('name')
    if name is not None and not isinstance(name, str):
        raise ValidationError("Name must be a string.", 'name')
    total_points = optional_int(data, 'totalPoints', 'Total points')

    customer = CustomerService().update(customer_id, name=name, total_points=total_points)
    return jsonify(customer.to_dict())


@customers_bp.route('/<customer_id>', methods=['DELETE'])
def delete_customer(customer_id):
    """Soft delete a customer. Ledger history is kept."""
    CustomerService().soft_delete(customer_id)
    return '', 204
