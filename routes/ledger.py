"""
Bookkeeping routes.

Handles:
- GET/POST          /api/customers
- GET/PUT/DELETE    /api/customers/<id>
- GET/POST          /api/sales
- GET/POST          /api/deposits      (GET accepts ?customerId=)
- GET/POST          /api/goodwill      (GET accepts ?customerId=)
- GET/POST          /api/expenses
"""

from flask import Blueprint, current_app, jsonify, request

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

ledger_bp = Blueprint("ledger", __name__, url_prefix="/api")


def _ledger():
    return current_app.config["LEDGER_SERVICE"]


def _customer_filter():
    return _ledger().parse_customer_filter(request.args.get("customerId"))


# -------------------- Customers --------------------

@ledger_bp.route("/customers", methods=["GET"])
def list_customers():
    return jsonify([c.to_dict() for c in _ledger().list_customers()])


@ledger_bp.route("/customers", methods=["POST"])
def create_customer():
    customer = _ledger().create_customer(request.get_json(silent=True))
    return jsonify(customer.to_dict()), 201


@ledger_bp.route("/customers/<int:customer_id>", methods=["GET"])
def get_customer(customer_id: int):
    return jsonify(_ledger().get_customer(customer_id).to_dict())


@ledger_bp.route("/customers/<int:customer_id>", methods=["PUT"])
def update_customer(customer_id: int):
    customer = _ledger().update_customer(customer_id, request.get_json(silent=True))
    return jsonify(customer.to_dict())


@ledger_bp.route("/customers/<int:customer_id>", methods=["DELETE"])
def delete_customer(customer_id: int):
    _ledger().delete_customer(customer_id)
    return "", 204


# -------------------- Sales --------------------

@ledger_bp.route("/sales", methods=["GET"])
def list_sales():
    return jsonify([s.to_dict() for s in _ledger().list_sales()])


@ledger_bp.route("/sales", methods=["POST"])
def create_sale():
    sale = _ledger().create_sale(request.get_json(silent=True))
    return jsonify(sale.to_dict()), 201


# -------------------- Deposits --------------------

@ledger_bp.route("/deposits", methods=["GET"])
def list_deposits():
    return jsonify([d.to_dict() for d in _ledger().list_deposits(_customer_filter())])


@ledger_bp.route("/deposits", methods=["POST"])
def create_deposit():
    deposit = _ledger().create_deposit(request.get_json(silent=True))
    return jsonify(deposit.to_dict()), 201


# -------------------- Goodwill --------------------

@ledger_bp.route("/goodwill", methods=["GET"])
def list_goodwill():
    return jsonify([g.to_dict() for g in _ledger().list_goodwill(_customer_filter())])


@ledger_bp.route("/goodwill", methods=["POST"])
def create_goodwill():
    transaction = _ledger().create_goodwill(request.get_json(silent=True))
    return jsonify(transaction.to_dict()), 201


# -------------------- Expenses --------------------

@ledger_bp.route("/expenses", methods=["GET"])
def list_expenses():
    return jsonify([e.to_dict() for e in _ledger().list_expenses()])


@ledger_bp.route("/expenses", methods=["POST"])
def create_expense():
    expense = _ledger().create_expense(request.get_json(silent=True))
    return jsonify(expense.to_dict()), 201
