"""
CLI Commands for the Loyalty Points API.

Usage:
    flask loyalty seed                             # Seed CUST-001 demo data
    flask ledger purge --customer-id CUST-001      # Remove a customer's ledger history
"""
from .seed import loyalty_cli
from .ledger import ledger_cli


def init_app(app):
    """Register all CLI commands with the Flask app."""
    app.cli.add_command(loyalty_cli)
    app.cli.add_command(ledger_cli)
