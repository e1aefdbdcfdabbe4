"""
Pytest fixtures for the Loyalty Points API tests.

Provides an isolated in-memory database per test, a test client, and
sample customers.
"""
import pytest

from loyalty_api import create_app
from loyalty_api.extensions import db
from loyalty_api.models import Customer


@pytest.fixture(scope='function')
def app():
    """Create application with a fresh in-memory database."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def cli_runner(app):
    """Create CLI runner for flask commands."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def sample_customer(app):
    """Active customer CUST-001 with 50 points."""
    customer = Customer(
        customer_id='CUST-001',
        name='Test Customer',
        total_points=50,
        is_deleted=False
    )
    db.session.add(customer)
    db.session.commit()
    return customer


@pytest.fixture(scope='function')
def deleted_customer(app):
    """Soft-deleted customer CUST-999 with 30 points."""
    customer = Customer(
        customer_id='CUST-999',
        name='Deleted Customer',
        total_points=30,
        is_deleted=True
    )
    db.session.add(customer)
    db.session.commit()
    return customer


@pytest.fixture(scope='function')
def json_headers():
    return {'Content-Type': 'application/json'}
