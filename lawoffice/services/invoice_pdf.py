from __future__ import annotations

import re
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from lawoffice.db.models import Invoice


def _money(value: float) -> str:
    return f"{value:,.2f}"


def _text(value) -> str:
    return escape(str(value)) if value not in (None, "") else "-"


def invoice_filename(invoice: Invoice) -> str:
    number = re.sub(r"[^a-zA-Z0-9_\-]+", "_", invoice.invoice_number or "").strip("_")
    return f"invoice_{number or invoice.id}.pdf"


def render_invoice_pdf(invoice: Invoice, office_name: str = "") -> bytes:
    """Lay out an invoice (header, client block, items, totals) as PDF bytes.

    The built-in Helvetica has no Arabic glyphs, so labels are Latin.
    """
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=18 * mm,
        rightMargin=18 * mm,
        topMargin=24 * mm,
        bottomMargin=20 * mm,
        title=f"Invoice {invoice.invoice_number}",
    )
    styles = getSampleStyleSheet()
    title_style = styles["Title"].clone("InvoiceTitle")
    title_style.alignment = 0
    normal = styles["Normal"]
    right = ParagraphStyle("InvoiceRight", parent=normal, alignment=2)

    story: list = [Paragraph("INVOICE", title_style), Spacer(1, 6)]
    if office_name:
        story.append(Paragraph(_text(office_name), normal))

    meta = Table(
        [
            ["Invoice #", _text(invoice.invoice_number)],
            ["Issue date", invoice.issue_date.isoformat()],
            ["Due date", invoice.due_date.isoformat()],
            ["Status", _text(invoice.status)],
        ],
        colWidths=[35 * mm, 60 * mm],
        hAlign="RIGHT",
    )
    meta.setStyle(TableStyle([("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"), ("FONTSIZE", (0, 0), (-1, -1), 9)]))
    story += [meta, Spacer(1, 12)]

    client = invoice.client
    if client is not None:
        lines = [f"<b>Bill to:</b> {_text(client.display_name)}"]
        for value in (client.address, client.city, client.email, client.phone):
            if value:
                lines.append(_text(value))
        story += [Paragraph("<br/>".join(lines), normal), Spacer(1, 12)]

    rows = [["#", "Description", "Qty", "Unit price", "Amount"]]
    for n, item in enumerate(invoice.items, start=1):
        rows.append(
            [
                str(n),
                Paragraph(_text(item.description), normal),
                f"{item.quantity:g}",
                _money(item.unit_price),
                _money(item.amount),
            ]
        )
    items = Table(rows, colWidths=[10 * mm, 85 * mm, 18 * mm, 30 * mm, 30 * mm], repeatRows=1)
    items.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f3a5f")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ]
        )
    )
    story += [items, Spacer(1, 10)]

    totals = Table(
        [
            ["Subtotal", _money(invoice.amount)],
            [f"Tax ({invoice.tax_rate:g}%)", _money(invoice.tax_amount)],
            ["Total", _money(invoice.total_amount)],
        ],
        colWidths=[40 * mm, 30 * mm],
        hAlign="RIGHT",
    )
    totals.setStyle(
        TableStyle(
            [
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.black),
            ]
        )
    )
    story.append(totals)

    if invoice.notes:
        story += [Spacer(1, 14), Paragraph(_text(invoice.notes), right)]

    doc.build(story)
    return buf.getvalue()
