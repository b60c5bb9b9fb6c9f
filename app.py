"""
PrintShop Desk - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config classes)
2. Configures logging
3. Binds the relational store and creates the schema
4. Creates the services and stores them in app.config
5. Registers route blueprints, JSON error handlers and CLI commands

ARCHITECTURE:
    HTTP request
    └── routes/*        (blueprints: parse request, shape JSON response)
        └── services/*  (validation, pricing, persistence)
            ├── modules/pricing.py     (catalog lookup + calculator, pure)
            ├── modules/pdf_render.py  (ReportLab documents)
            └── models/*               (Flask-SQLAlchemy tables + dataclasses)

Each pricing run works on a catalog snapshot read at the start of its
request. The database is the only shared mutable state.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path

import click
from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from core.exceptions import PrintShopError
from models.db import db
from routes import register_blueprints
from services.catalog_service import CatalogService
from services.ledger_service import LedgerService
from services.order_service import OrderService
from services.report_service import ReportService


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: the directory containing the executable
    In development: the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(config_object: str = "config.Config") -> Flask:
    """
    Application factory - creates and configures the Flask app.

    Args:
        config_object: Import path of the configuration class

    Returns:
        Configured Flask application
    """
    # Load .env from base path; .env always takes precedence over the shell
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintShop Desk in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # RELATIONAL STORE
    # =========================================================================

    db.init_app(app)
    with app.app_context():
        db.create_all()
    logger.info("Database schema ready")

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    catalog_service = CatalogService()
    app.config["CATALOG_SERVICE"] = catalog_service
    app.config["ORDER_SERVICE"] = OrderService(
        catalog_service,
        max_quantity=app.config.get("MAX_QUANTITY", 100000),
        max_notes_length=app.config.get("MAX_NOTES_LENGTH", 1000),
    )
    app.config["LEDGER_SERVICE"] = LedgerService(
        max_quantity=app.config.get("MAX_QUANTITY", 100000),
    )
    app.config["REPORT_SERVICE"] = ReportService()
    logger.info("Services initialized")

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # REQUEST CONTEXT
    # =========================================================================

    @app.before_request
    def assign_request_id():
        """Tag the request so every log line it produces can be correlated."""
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

    @app.after_request
    def echo_request_id(response):
        response.headers["X-Request-ID"] = getattr(g, "request_id", "")
        return response

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(PrintShopError)
    def handle_app_error(e: PrintShopError):
        if e.status_code >= 500:
            logger.error(f"{request.method} {request.path} failed: {e}", exc_info=True)
        else:
            logger.info(f"{request.method} {request.path} rejected ({e.status_code}): {e}")
        return jsonify(e.to_response()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_server_error(e: Exception):
        logger.error(f"500 error on {request.method} {request.path}: {e}", exc_info=True)
        db.session.rollback()
        return jsonify({"error": "Internal server error"}), 500

    # =========================================================================
    # CLI COMMANDS
    # =========================================================================

    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables (no-op for tables that already exist)."""
        db.create_all()
        click.echo("Database schema created.")

    @app.cli.command("seed-catalog")
    def seed_catalog_command():
        """Replace the price list with the default catalog."""
        count = catalog_service.seed_defaults()
        click.echo(f"Seed complete: {count} price list entries.")

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
