"""Render the budget dashboard as a downloadable PDF."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from io import BytesIO

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from shared.categories import lookup_category
from shared.models import DashboardSummary, Transaction, TransactionType


TRANSACTIONS_DISPLAY_LIMIT = 250


@dataclass(slots=True)
class DashboardReportData:
    """Input payload for dashboard report rendering."""

    summary: DashboardSummary
    generated_on: date


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _type_label(transaction_type: TransactionType) -> str:
    return "Income" if transaction_type == TransactionType.INCOME else "Expenses"


def _signed_amount(transaction: Transaction) -> str:
    prefix = "+" if transaction.type == TransactionType.INCOME else "-"
    return prefix + format_currency(transaction.amount)


def _build_trend_chart(summary: DashboardSummary) -> bytes:
    days = [point.date for point in summary.series]
    amounts = [point.amount for point in summary.series]
    line_color = "#16A34A" if summary.type == TransactionType.INCOME else "#DC2626"

    fig, ax = plt.subplots(figsize=(6.8, 3.2), dpi=140)
    ax.plot(days, amounts, color=line_color, linewidth=1.6, marker="o", markersize=2.5)
    ax.fill_between(days, amounts, color=line_color, alpha=0.12)
    ax.set_title(f"Daily {_type_label(summary.type).lower()}")
    ax.set_ylabel("Amount (USD)")
    ax.grid(True, linestyle="--", linewidth=0.4, alpha=0.6)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    fig.autofmt_xdate()

    image_buffer = BytesIO()
    fig.savefig(image_buffer, format="png", bbox_inches="tight")
    plt.close(fig)
    image_buffer.seek(0)
    return image_buffer.read()


_BORDER_COLOR = colors.HexColor("#DDE2E8")
_MUTED_TEXT_COLOR = colors.HexColor("#8A8F98")


def _table_style(
    *,
    padding: int,
    background: colors.Color | None = None,
    header_background: colors.Color | None = None,
    striped_rows: int = 0,
) -> TableStyle:
    """Build the boxed grid shared by the KPI cards and the transactions table.

    `striped_rows` is the number of body rows; every second one gets a light fill.
    """

    commands: list[tuple] = [
        ("BOX", (0, 0), (-1, -1), 0.6, _BORDER_COLOR),
        ("INNERGRID", (0, 0), (-1, -1), 0.3, _BORDER_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    for side in ("LEFT", "RIGHT", "TOP", "BOTTOM"):
        commands.append((f"{side}PADDING", (0, 0), (-1, -1), padding))
    if background is not None:
        commands.append(("BACKGROUND", (0, 0), (-1, -1), background))
    if header_background is not None:
        commands.append(("BACKGROUND", (0, 0), (-1, 0), header_background))
        commands.append(("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"))
    commands.extend(
        ("BACKGROUND", (0, row), (-1, row), colors.HexColor("#FAFBFC"))
        for row in range(2, striped_rows + 1, 2)
    )
    return TableStyle(commands)


class _FooterCanvas(Canvas):
    """Canvas that defers page output until the total page count is known."""

    def __init__(self, *args, generated_on: str, **kwargs):
        super().__init__(*args, **kwargs)
        self._footer_label = f"Budget dashboard, generated on {generated_on}"
        self._pending_pages: list[dict] = []

    def showPage(self) -> None:  # noqa: N802 (ReportLab API)
        self._pending_pages.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total_pages = len(self._pending_pages)
        for page_state in self._pending_pages:
            self.__dict__.update(page_state)
            self._draw_footer(total_pages)
            super().showPage()
        super().save()

    def _draw_footer(self, total_pages: int) -> None:
        self.setStrokeColor(_BORDER_COLOR)
        self.setLineWidth(0.4)
        self.line(16 * mm, 12 * mm, 194 * mm, 12 * mm)
        self.setFont("Helvetica", 7.5)
        self.setFillColor(_MUTED_TEXT_COLOR)
        self.drawString(16 * mm, 8 * mm, self._footer_label)
        self.drawRightString(194 * mm, 8 * mm, f"{self._pageNumber} of {total_pages}")


def _build_kpi_cards(summary: DashboardSummary) -> Table:
    styles = getSampleStyleSheet()
    card_style = ParagraphStyle(
        name="KpiCard",
        parent=styles["BodyText"],
        fontSize=10,
        leading=14,
        textColor=colors.HexColor("#1F2937"),
    )
    kpis = (
        (f"Total {_type_label(summary.type).lower()}", format_currency(summary.total)),
        ("Total transactions", str(summary.count)),
        ("Average per transaction", format_currency(summary.average)),
        ("Categories", str(summary.category_count)),
    )
    cells = [[Paragraph(f"<b>{label}</b><br/>{value}", card_style) for label, value in kpis]]
    table = Table(cells, colWidths=[44 * mm] * len(kpis))
    table.setStyle(_table_style(padding=8, background=colors.HexColor("#F4F6F8")))
    return table


def _truncate(value: str, max_length: int = 40) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 1].rstrip() + "…"


def _build_transactions_table(summary: DashboardSummary) -> Table:
    rows = [
        [
            transaction.date.date().isoformat(),
            _truncate(transaction.description),
            lookup_category(transaction.category, transaction.type).name,
            _signed_amount(transaction),
        ]
        for transaction in summary.transactions[:TRANSACTIONS_DISPLAY_LIMIT]
    ]
    if not rows:
        rows = [["-", "No transactions", "-", format_currency(0.0)]]

    table = Table(
        [["Date", "Description", "Category", "Amount"], *rows],
        colWidths=[26 * mm, 70 * mm, 48 * mm, 32 * mm],
        repeatRows=1,
    )
    style = _table_style(
        padding=4,
        header_background=colors.HexColor("#EEF1F4"),
        striped_rows=len(rows),
    )
    style.add("ALIGN", (3, 1), (3, -1), "RIGHT")
    table.setStyle(style)
    return table


def generate_dashboard_report_pdf(data: DashboardReportData) -> bytes:
    """Render summary cards, the daily trend chart and the transaction list."""

    summary = data.summary
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=16 * mm,
        leftMargin=16 * mm,
        topMargin=16 * mm,
        bottomMargin=14 * mm,
    )
    styles = getSampleStyleSheet()
    section_title_style = ParagraphStyle(name="SectionTitle", parent=styles["Heading2"], spaceAfter=4, fontSize=12)
    subtitle_style = ParagraphStyle(name="Subtitle", parent=styles["BodyText"], fontSize=9, textColor=colors.HexColor("#6B7280"))

    story = [
        Paragraph("Budget Dashboard", styles["Title"]),
        Spacer(1, 1 * mm),
        Paragraph(f"View: {_type_label(summary.type)}", styles["BodyText"]),
        Paragraph(f"Generated on {data.generated_on.isoformat()}", subtitle_style),
        Spacer(1, 5 * mm),
        _build_kpi_cards(summary),
        Spacer(1, 6 * mm),
        Paragraph("Trends", section_title_style),
        Spacer(1, 1 * mm),
    ]

    if not summary.series:
        story.append(Paragraph("No transactions to chart.", styles["BodyText"]))
    else:
        chart_bytes = _build_trend_chart(summary)
        story.append(Image(BytesIO(chart_bytes), width=176 * mm, height=83 * mm))
    story.append(Spacer(1, 5 * mm))

    story.append(Paragraph("Transactions", section_title_style))
    story.append(Spacer(1, 1 * mm))
    if len(summary.transactions) > TRANSACTIONS_DISPLAY_LIMIT:
        story.append(
            Paragraph(
                f"List truncated to the {TRANSACTIONS_DISPLAY_LIMIT} most recent of {len(summary.transactions)} transactions.",
                styles["Italic"],
            )
        )
        story.append(Spacer(1, 2 * mm))
    story.append(_build_transactions_table(summary))

    generated_on = data.generated_on.isoformat()
    doc.build(
        story,
        canvasmaker=lambda *args, **kwargs: _FooterCanvas(*args, generated_on=generated_on, **kwargs),
    )
    buffer.seek(0)
    return buffer.read()
