"""
CLI commands for ledger administration.

Usage:
    flask ledger purge --customer-id CUST-001        # asks for confirmation
    flask ledger purge --customer-id CUST-001 --yes
"""
import logging

import click
from flask.cli import with_appcontext

from ..extensions import db
from ..stores import UnitOfWork

logger = logging.getLogger(__name__)


@click.group('ledger')
def ledger_cli():
    """Points ledger commands."""
    pass


@ledger_cli.command('purge')
@click.option('--customer-id', required=True, help='Customer whose ledger entries are removed')
@click.option('--yes', is_flag=True, help='Skip confirmation prompt')
@with_appcontext
def purge(customer_id, yes):
    """
    Delete every ledger entry for a customer.

    Customer balances are not touched. Soft delete keeps history; this is
    the only path that removes it.
    """
    if not yes:
        click.confirm(
            f"Permanently delete all ledger entries for {customer_id}?",
            abort=True
        )

    with UnitOfWork(db.session) as uow:
        deleted = uow.ledger.delete_all_for_customer(customer_id)

    logger.warning(f"Ledger purged for {customer_id}: {deleted} entries removed")
    click.echo(f"Deleted {deleted} ledger entries for {customer_id}")
