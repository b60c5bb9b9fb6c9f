"""
PDF generation for receipts and income/expense reports.

Both documents are drawn with the ReportLab canvas on US Letter pages and
returned as bytes; the routes stream them as attachments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Dict, List, Sequence

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from core.money import format_money
from models.job import LineItem


@dataclass(frozen=True)
class Letterhead:
    """Shop identity printed at the top of every document."""

    name: str
    tagline: str = ""
    address_lines: Sequence[str] = field(default_factory=tuple)
    contact: str = ""
    currency_symbol: str = "$"

    @classmethod
    def from_config(cls, config) -> "Letterhead":
        return cls(
            name=config.get("SHOP_NAME", "PrintShop Desk"),
            tagline=config.get("SHOP_TAGLINE", ""),
            address_lines=tuple(config.get("SHOP_ADDRESS_LINES", ())),
            contact=config.get("SHOP_CONTACT", ""),
            currency_symbol=config.get("CURRENCY_SYMBOL", "$"),
        )


def _safe(s) -> str:
    if s is None:
        return ""
    return str(s)


def _wrap(text: str, max_chars: int) -> List[str]:
    if len(text) <= max_chars:
        return [text]
    words = text.split()
    lines, cur = [], ""
    for w in words:
        if len(cur) + len(w) + 1 <= max_chars:
            cur = (cur + " " + w).strip()
        else:
            if cur:
                lines.append(cur)
            cur = w
    if cur:
        lines.append(cur)
    return lines


def _draw_letterhead(c: canvas.Canvas, head: Letterhead, width: float, y: float) -> float:
    center = width / 2
    c.setFont("Helvetica-Bold", 22)
    c.drawCentredString(center, y, head.name)
    y -= 0.28 * inch
    if head.tagline:
        c.setFont("Helvetica", 12)
        c.drawCentredString(center, y, head.tagline)
        y -= 0.24 * inch
    c.setFont("Helvetica", 10)
    for line in head.address_lines:
        c.drawCentredString(center, y, line)
        y -= 0.16 * inch
    if head.contact:
        c.drawCentredString(center, y, head.contact)
        y -= 0.16 * inch
    return y - 0.2 * inch


def build_receipt_pdf_bytes(order: Dict[str, Any], receipt: Dict[str, Any],
                            items: List[LineItem], head: Letterhead) -> bytes:
    """
    Returns PDF bytes for a receipt.

    order: Order.to_dict()
    receipt: Receipt.to_dict()
    items: decoded receipt breakdown
    Totals are read from the receipt snapshot, never recomputed.
    """
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setTitle(f"Receipt {_safe(receipt.get('receiptNumber'))}")
    width, height = letter
    money = lambda v: format_money(v, head.currency_symbol)  # noqa: E731

    margin = 0.7 * inch
    y = _draw_letterhead(c, head, width, height - margin)

    c.setFont("Helvetica-Bold", 18)
    c.drawCentredString(width / 2, y, "RECEIPT")
    y -= 0.35 * inch

    c.setFont("Helvetica", 10)
    c.drawRightString(width - margin, y, f"Receipt #: {_safe(receipt.get('receiptNumber'))}")
    y -= 0.16 * inch
    c.drawRightString(width - margin, y, f"Job #: {_safe(order.get('jobNumber'))}")
    y -= 0.16 * inch
    created = _safe(receipt.get("createdAt"))[:10]
    c.drawRightString(width - margin, y, f"Date: {created}")
    y -= 0.35 * inch

    # ---- Job details
    c.setFont("Helvetica-Bold", 13)
    c.drawString(margin, y, "Job Details")
    y -= 0.22 * inch
    c.setFont("Helvetica", 10)

    details = [f"Service Type: {_safe(order.get('serviceType')).title()}"]
    if order.get("serviceName"):
        details.append(f"Service: {order['serviceName']}")
    if order.get("paperSize"):
        details.append(f"Paper Size: {order['paperSize']}")
    details.append(f"Quantity: {_safe(order.get('quantity'))}")
    if order.get("printType"):
        kind = "Color Printing" if order["printType"] == "color" else "Monochrome Printing"
        details.append(f"Print Type: {kind}")
    if order.get("finishingOptions"):
        details.append(f"Finishing Options: {', '.join(order['finishingOptions'])}")
    if order.get("additionalSpecs"):
        details.extend(_wrap(f"Additional Specs: {order['additionalSpecs']}", 95))
    for line in details:
        c.drawString(margin, y, line)
        y -= 0.16 * inch
    y -= 0.2 * inch

    # ---- Itemized table
    c.setFont("Helvetica-Bold", 13)
    c.drawString(margin, y, "Itemized Breakdown")
    y -= 0.24 * inch

    col_service = margin
    col_qty = margin + 2.9 * inch
    col_unit = margin + 4.6 * inch
    right_edge = width - margin

    def table_header(y_pos: float) -> float:
        c.setFont("Helvetica-Bold", 10)
        c.drawString(col_service, y_pos, "Service")
        c.drawString(col_qty, y_pos, "Quantity")
        c.drawString(col_unit, y_pos, "Unit Price")
        c.drawRightString(right_edge, y_pos, "Total")
        y_pos -= 0.1 * inch
        c.setLineWidth(0.5)
        c.line(margin, y_pos, right_edge, y_pos)
        c.setFont("Helvetica", 10)
        return y_pos - 0.18 * inch

    y = table_header(y)
    if not items:
        c.drawString(margin, y, "(No priced items)")
        y -= 0.2 * inch
    for item in items:
        service_lines = _wrap(item.service, 40)
        if y - 0.18 * inch * (len(service_lines) - 1) < margin + 1.6 * inch:
            c.showPage()
            y = height - margin
            y = table_header(y)
        c.drawString(col_qty, y, _safe(item.quantity))
        c.drawString(col_unit, y, money(item.unit_price))
        c.drawRightString(right_edge, y, money(item.total))
        for line in service_lines:
            c.drawString(col_service, y, line)
            y -= 0.18 * inch

    # ---- Totals
    y -= 0.1 * inch
    c.line(col_unit, y, right_edge, y)
    y -= 0.22 * inch
    c.drawString(col_unit, y, "Subtotal:")
    c.drawRightString(right_edge, y, money(receipt.get("subtotal", "0")))
    y -= 0.2 * inch
    c.drawString(col_unit, y, "Tax (10%):")
    c.drawRightString(right_edge, y, money(receipt.get("tax", "0")))
    y -= 0.24 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(col_unit, y, "Grand Total:")
    c.drawRightString(right_edge, y, money(receipt.get("total", "0")))

    # ---- Footer
    c.setFont("Helvetica", 10)
    c.drawCentredString(width / 2, margin + 0.2 * inch, "Thank you for your business!")
    if head.contact:
        c.setFont("Helvetica-Oblique", 8)
        c.drawCentredString(width / 2, margin, f"Questions? Contact us: {head.contact}")

    c.showPage()
    c.save()

    buf.seek(0)
    return buf.read()


def build_report_pdf_bytes(report: Dict[str, Any], title: str, period: str,
                           head: Letterhead) -> bytes:
    """
    Returns PDF bytes for an income/expense report.

    report: ReportSummary.to_dict()
    """
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setTitle(title)
    width, height = letter
    money = lambda v: format_money(v, head.currency_symbol)  # noqa: E731

    margin = 0.8 * inch
    y = height - margin
    c.setFont("Helvetica-Bold", 12)
    c.drawString(margin, y, head.name)
    y -= 0.45 * inch

    c.setFont("Helvetica-Bold", 18)
    c.drawCentredString(width / 2, y, title)
    y -= 0.3 * inch
    c.setFont("Helvetica", 12)
    c.drawCentredString(width / 2, y, period)
    y -= 0.6 * inch

    sections = [
        ("Income Summary:", [
            f"Total Income: {money(report['totalIncome'])}",
            f"Orders: {report.get('orderCount', 0)}    Sales: {report.get('saleCount', 0)}",
        ]),
        ("Expense Summary:", [
            f"Total Expenses: {money(report['totalExpenses'])}",
            f"Expense records: {report.get('expenseCount', 0)}",
        ]),
    ]
    for heading, lines in sections:
        c.setFont("Helvetica-Bold", 14)
        c.drawString(margin, y, heading)
        y -= 0.25 * inch
        c.setFont("Helvetica", 11)
        for line in lines:
            c.drawString(margin, y, line)
            y -= 0.2 * inch
        y -= 0.25 * inch

    c.setFont("Helvetica-Bold", 14)
    c.drawString(margin, y, "Net Income:")
    y -= 0.25 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(margin, y, money(report["netIncome"]))

    c.showPage()
    c.save()

    buf.seek(0)
    return buf.read()
