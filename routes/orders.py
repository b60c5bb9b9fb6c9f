"""
Order routes.

Handles:
- GET  /api/orders        - All orders, newest first
- GET  /api/orders/<id>   - One order
- POST /api/orders        - Price a job and record order + receipt
- POST /api/orders/quote  - Price a job without recording it (live preview)
"""

from flask import Blueprint, current_app, jsonify, request

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def _orders():
    return current_app.config["ORDER_SERVICE"]


@orders_bp.route("", methods=["GET"])
def list_orders():
    return jsonify([order.to_dict() for order in _orders().list_orders()])


@orders_bp.route("/<int:order_id>", methods=["GET"])
def get_order(order_id: int):
    return jsonify(_orders().get_order(order_id).to_dict())


@orders_bp.route("", methods=["POST"])
def create_order():
    """
    Create an order.

    Returns 201 with the order, including its generated jobNumber and the
    computed subtotal/tax/total. Catalog misses are not errors; the order
    is still created with whatever lines did match.
    """
    order = _orders().create_order(request.get_json(silent=True))
    return jsonify(order.to_dict()), 201


@orders_bp.route("/quote", methods=["POST"])
def quote_order():
    breakdown = _orders().quote(request.get_json(silent=True))
    return jsonify(breakdown.to_dict())
