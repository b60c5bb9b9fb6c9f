"""
Price list routes (catalog administration).

Handles:
- GET    /api/price-lists            - All entries, by category then name
- POST   /api/price-lists            - Create an entry
- GET    /api/price-lists/<id>       - One entry
- PUT    /api/price-lists/<id>       - Partial update
- DELETE /api/price-lists/<id>       - Remove an entry
- GET    /api/price-lists/conflicts  - Overlapping names within a category
"""

from flask import Blueprint, current_app, jsonify, request

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

price_lists_bp = Blueprint("price_lists", __name__, url_prefix="/api/price-lists")


def _catalog():
    return current_app.config["CATALOG_SERVICE"]


@price_lists_bp.route("", methods=["GET"])
def list_price_lists():
    return jsonify([entry.to_dict() for entry in _catalog().list_entries()])


@price_lists_bp.route("", methods=["POST"])
def create_price_list():
    entry = _catalog().create_entry(request.get_json(silent=True))
    return jsonify(entry.to_dict()), 201


@price_lists_bp.route("/conflicts", methods=["GET"])
def price_list_conflicts():
    """
    Name overlaps that make substring lookups ambiguous.

    The lowest id of each pair is the one pricing will use ("winner").
    """
    return jsonify(_catalog().find_conflicts())


@price_lists_bp.route("/<int:entry_id>", methods=["GET"])
def get_price_list(entry_id: int):
    return jsonify(_catalog().get_entry(entry_id).to_dict())


@price_lists_bp.route("/<int:entry_id>", methods=["PUT"])
def update_price_list(entry_id: int):
    entry = _catalog().update_entry(entry_id, request.get_json(silent=True))
    return jsonify(entry.to_dict())


@price_lists_bp.route("/<int:entry_id>", methods=["DELETE"])
def delete_price_list(entry_id: int):
    _catalog().delete_entry(entry_id)
    return "", 204
