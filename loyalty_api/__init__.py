"""
Loyalty Points API
Flask application factory
"""
import os
import logging
from flask import Flask
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db, migrate
from .config import get_config, validate_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    # Setup logging before anything else
    setup_logging()

    validate_config(config_name)

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata
    from . import models  # noqa: F401

    # Configure CORS - allow the loyalty frontend
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Register blueprints
    register_blueprints(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    # Register error handlers
    register_error_handlers(app)

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'loyalty-api'}

    logger.info(f"Loyalty API created (config={config_name})")
    return app


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    from .api.customers import customers_bp
    from .api.points import points_bp, transactions_bp

    # Customer management
    app.register_blueprint(customers_bp, url_prefix='/api/customers')

    # Points accounting
    app.register_blueprint(transactions_bp, url_prefix='/api/transactions')
    app.register_blueprint(points_bp, url_prefix='/api')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from .utils.errors import (
        ErrorCode,
        bad_request,
        error_response,
        internal_error,
        not_found,
        service_unavailable,
    )
    from .utils.exceptions import LoyaltyError

    @app.errorhandler(LoyaltyError)
    def handle_loyalty_error(error):
        return error_response(error.message, error.code, error.status_code)

    # Store faults are not retried; the unit of work has already rolled back
    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        return service_unavailable(details={'exception': repr(error)})

    @app.errorhandler(400)
    def handle_bad_request(error):
        return bad_request(str(error))

    @app.errorhandler(404)
    def handle_not_found(error):
        return not_found(str(error))

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return error_response(str(error), ErrorCode.METHOD_NOT_ALLOWED, 405, log_error=False)

    @app.errorhandler(500)
    def handle_internal_error(error):
        return internal_error(details={'exception': repr(getattr(error, 'original_exception', error))})
