"""
Report routes.

Handles:
- GET /api/reports/weekly?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD
- GET /api/reports/monthly?year=YYYY&month=M
- GET /api/reports/pdf/weekly   (same parameters, PDF download)
- GET /api/reports/pdf/monthly  (same parameters, PDF download)
"""

from flask import Blueprint, Response, current_app, jsonify, request

from core.exceptions import RenderError
from logging_config import get_logger
from modules.pdf_render import Letterhead, build_report_pdf_bytes


# Module logger
logger = get_logger(__name__)

reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


def _reports():
    return current_app.config["REPORT_SERVICE"]


def _weekly():
    return _reports().weekly(request.args.get("startDate"), request.args.get("endDate"))


def _monthly():
    return _reports().monthly(request.args.get("year"), request.args.get("month"))


def _pdf_response(summary, title: str, period: str, filename: str) -> Response:
    try:
        pdf = build_report_pdf_bytes(
            summary.to_dict(), title, period, Letterhead.from_config(current_app.config)
        )
    except Exception as e:
        logger.error(f"{title} PDF failed: {e}", exc_info=True)
        raise RenderError("report", e) from e
    return Response(
        pdf,
        mimetype="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@reports_bp.route("/weekly", methods=["GET"])
def weekly_report():
    return jsonify(_weekly().to_dict())


@reports_bp.route("/monthly", methods=["GET"])
def monthly_report():
    return jsonify(_monthly().to_dict())


@reports_bp.route("/pdf/weekly", methods=["GET"])
def weekly_report_pdf():
    summary = _weekly()
    return _pdf_response(
        summary,
        "Weekly Income & Expense Report",
        _reports().period_label(summary),
        "weekly-report.pdf",
    )


@reports_bp.route("/pdf/monthly", methods=["GET"])
def monthly_report_pdf():
    summary = _monthly()
    start = summary.start_date
    return _pdf_response(
        summary,
        "Monthly Income & Expense Report",
        _reports().month_label(summary),
        f"monthly-report-{start.year}-{start.month}.pdf",
    )
