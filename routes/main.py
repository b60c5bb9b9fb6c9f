"""
Main routes (index, health).
"""

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from logging_config import get_logger
from models.db import db


# Module logger
logger = get_logger(__name__)

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Short description of the API for anyone hitting the root URL."""
    return jsonify({
        "name": current_app.config.get("SHOP_NAME"),
        "endpoints": [
            "/api/price-lists",
            "/api/orders",
            "/api/receipts/<orderId>",
            "/api/customers",
            "/api/sales",
            "/api/deposits",
            "/api/goodwill",
            "/api/expenses",
            "/api/reports/weekly",
            "/api/reports/monthly",
        ],
    })


@main_bp.route("/health", methods=["GET"])
def health():
    """Liveness plus a round trip to the database."""
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health check database failure: {e}")
        db.session.rollback()
        database = "unavailable"

    status = "ok" if database == "ok" else "degraded"
    return jsonify({"status": status, "database": database}), (200 if status == "ok" else 503)
