"""
CLI command for seeding demo data.

Usage:
    flask loyalty seed
"""
from datetime import timedelta

import click
from flask.cli import with_appcontext

from ..extensions import db
from ..models import ChangeType, Customer, LedgerEntry
from ..stores import UnitOfWork
from ..utils.time_utils import utcnow

SEED_CUSTOMER_ID = 'CUST-001'
SEED_CUSTOMER_NAME = 'Arun Kumar (System Seed)'
SEED_POINTS = 50
SEED_TRANSACTION_ID = 'TRANS-INIT-001'
SEED_LEDGER_AGE_DAYS = 100


@click.group('loyalty')
def loyalty_cli():
    """Loyalty program commands."""
    pass


def seed_initial_data(uow: UnitOfWork) -> dict:
    """
    Seed the demo customer and one historical Earn entry.

    Idempotent: the customer is only created when no active CUST-001
    exists, the ledger row only when the ledger is empty.
    """
    created_customer = False
    created_ledger = False

    if uow.customers.get_active(SEED_CUSTOMER_ID) is None:
        customer = uow.customers.get_any(SEED_CUSTOMER_ID) or Customer(customer_id=SEED_CUSTOMER_ID)
        customer.name = SEED_CUSTOMER_NAME
        customer.total_points = SEED_POINTS
        customer.is_deleted = False
        uow.customers.save(customer)
        created_customer = True

    if uow.session.query(LedgerEntry.id).first() is None:
        uow.ledger.append(LedgerEntry(
            customer_id=SEED_CUSTOMER_ID,
            change_type=ChangeType.EARN.value,
            point_change=SEED_POINTS,
            timestamp=utcnow() - timedelta(days=SEED_LEDGER_AGE_DAYS),
            transaction_id=SEED_TRANSACTION_ID,
            campaign_applied=False
        ))
        created_ledger = True

    return {'customer': created_customer, 'ledger': created_ledger}


@loyalty_cli.command('seed')
@with_appcontext
def seed():
    """Seed CUST-001 and an initial ledger entry if missing."""
    click.echo("Checking database for initial data...")
    with UnitOfWork(db.session) as uow:
        result = seed_initial_data(uow)

    if result['customer']:
        click.echo(f"Default {SEED_CUSTOMER_ID} seeded for initial ledger testing.")
    if result['ledger']:
        click.echo("Initial ledger data seeded.")
    if not result['customer'] and not result['ledger']:
        click.echo("Nothing to seed.")
