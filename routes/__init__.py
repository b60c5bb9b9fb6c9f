"""
Flask route blueprints for PrintShop Desk.

All endpoints speak JSON except the PDF downloads:
- main: index and health check
- price_lists: catalog administration
- orders: pricing and order creation
- receipts: receipt snapshots and receipt PDFs
- ledger: customers, sales, deposits, goodwill, expenses
- reports: weekly/monthly income and expense reports (JSON and PDF)

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .price_lists import price_lists_bp
from .orders import orders_bp
from .receipts import receipts_bp
from .ledger import ledger_bp
from .reports import reports_bp

__all__ = [
    "main_bp",
    "price_lists_bp",
    "orders_bp",
    "receipts_bp",
    "ledger_bp",
    "reports_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(price_lists_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(receipts_bp)
    app.register_blueprint(ledger_bp)
    app.register_blueprint(reports_bp)
