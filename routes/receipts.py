"""
Receipt routes.

Handles:
- GET /api/receipts/<orderId>      - Stored receipt snapshot (JSON)
- GET /api/receipts/<orderId>/pdf  - Same snapshot as a PDF download
"""

from flask import Blueprint, Response, current_app, jsonify

from logging_config import get_logger
from modules.pdf_render import Letterhead


# Module logger
logger = get_logger(__name__)

receipts_bp = Blueprint("receipts", __name__, url_prefix="/api/receipts")


@receipts_bp.route("/<int:order_id>", methods=["GET"])
def get_receipt(order_id: int):
    receipt = current_app.config["ORDER_SERVICE"].get_receipt(order_id)
    return jsonify(receipt.to_dict())


@receipts_bp.route("/<int:order_id>/pdf", methods=["GET"])
def receipt_pdf(order_id: int):
    letterhead = Letterhead.from_config(current_app.config)
    filename, pdf = current_app.config["ORDER_SERVICE"].render_receipt_pdf(order_id, letterhead)
    logger.info(f"Receipt PDF generated for order {order_id} ({len(pdf)} bytes)")
    return Response(
        pdf,
        mimetype="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
