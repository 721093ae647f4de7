"""
Server-side forecast report rendering.

Builds the exported forecast PDF with reportlab: a summary matrix, the balance
check, key ratios, the cash conversion cycle table, common-size statements and
one page of statements per year. Labels come from the i18n dictionaries, so a
report can be rendered in any supported language.
"""

from __future__ import annotations

import io
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from moolaegis.core.logging_config import get_logger
from moolaegis.forecast.analysis import AnalysisReport, build_report
from moolaegis.forecast.formatting import RoundingMode, format_number, format_parens
from moolaegis.forecast.models import ForecastConstants, ForecastResult, YearRow
from moolaegis.i18n import Translator, get_translator

logger = get_logger(__name__)

LATIN_FONT = "Helvetica"
LATIN_FONT_BOLD = "Helvetica-Bold"
CJK_FONT = "MSung-Light"
HEADER_BACKGROUND = colors.HexColor("#f0f0f0")
TOTAL_COLOR = colors.HexColor("#0b4b8a")
_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\s]+')


def report_filename(title: str, result: ForecastResult) -> str:
    """File name of an exported report: ``<title>_<first year>-<last year>.pdf``."""
    safe = _UNSAFE_FILENAME.sub("_", title.strip()).strip("_") or "Forecast"
    return f"{safe}_{result.base.year}-{result.final.year}.pdf"


def _fonts(lang: str) -> tuple[str, str]:
    if lang == "zh":
        if CJK_FONT not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(CJK_FONT))
        return CJK_FONT, CJK_FONT
    return LATIN_FONT, LATIN_FONT_BOLD


@dataclass
class _Line:
    label: str
    getter: Callable[[YearRow], Optional[float]]
    total: bool = False


class ForecastPdfRenderer:
    """Renders one forecast into PDF bytes.

    Args:
        translator: Label source for the target language
        decimals: Fraction digits for money values
        rounding: Rounding mode for money values
    """

    def __init__(
        self,
        translator: Optional[Translator] = None,
        decimals: int = 0,
        rounding: RoundingMode = RoundingMode.ROUND,
    ) -> None:
        self.t = translator or get_translator()
        self.decimals = decimals
        self.rounding = rounding
        self.font, self.font_bold = _fonts(self.t.lang)

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "title", parent=styles["Title"], alignment=1, fontSize=16, fontName=self.font_bold
        )
        self.hdr = ParagraphStyle("hdr", parent=styles["Heading2"], alignment=0, fontSize=12, fontName=self.font_bold)
        self.normal = ParagraphStyle("body", parent=styles["Normal"], fontName=self.font)

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------

    def money(self, value: Optional[float]) -> str:
        return format_parens(value, self.decimals, self.rounding)

    @staticmethod
    def pct(value: Optional[float]) -> str:
        return "N/A" if value is None else f"{value:.1f}%"

    def _table(self, rows: List[List[str]], total_rows: Sequence[int] = (), first_col: int = 170) -> Table:
        columns = len(rows[0])
        other = max(60, int((A4[1] - 52 - first_col) / max(1, columns - 1)))
        table = Table(rows, colWidths=[first_col] + [other] * (columns - 1), hAlign="LEFT", repeatRows=1)
        style = [
            ("GRID", (0, 0), (-1, -1), 0.35, colors.grey),
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_BACKGROUND),
            ("FONTNAME", (0, 0), (-1, -1), self.font),
            ("FONTNAME", (0, 0), (-1, 0), self.font_bold),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
        ]
        for index in total_rows:
            style.append(("FONTNAME", (0, index), (-1, index), self.font_bold))
            style.append(("TEXTCOLOR", (0, index), (0, index), TOTAL_COLOR))
        table.setStyle(TableStyle(style))
        return table

    def _matrix(self, rows: Sequence[YearRow], lines: Sequence[_Line]) -> Table:
        data = [[self.t.tr("common.field", "Field")] + [str(r.year) for r in rows]]
        totals = []
        for line in lines:
            if line.total:
                totals.append(len(data))
            data.append([line.label] + [self.money(line.getter(r)) for r in rows])
        return self._table(data, totals)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _summary(self, result: ForecastResult) -> list:
        tr = self.t.tr
        c = result.constants
        income = [
            _Line(tr("state.pl.revenue", "Revenue"), lambda r: r.revenue),
            _Line(tr("state.pl.cogs", "COGS"), lambda r: r.cogs),
            _Line(tr("state.pl.expense", "Operating expense"), lambda r: r.opex),
            _Line(tr("state.labels.depreciation", "Depreciation"), lambda r: r.depreciation),
            _Line(tr("state.labels.interest", "Interest"), lambda r: r.interest),
            _Line(tr("state.pl.tax", "Income tax"), lambda r: r.tax),
            _Line(tr("state.labels.netProfit", "Net profit"), lambda r: r.net_income, total=True),
        ]
        balance = [
            _Line(tr("state.asset.cash", "Cash"), lambda r: r.cash),
            _Line(tr("state.asset.receivable", "Accounts receivable"), lambda r: r.ar),
            _Line(tr("state.asset.inventory", "Inventory"), lambda r: r.inventory),
            _Line(tr("state.asset.ppe", "PPE"), lambda r: r.ppe),
            _Line(tr("state.modal.asset.other", "Other assets"), lambda r: c.other_assets),
            _Line(
                tr("state.labels.totalAssets", "Total Assets"),
                lambda r: r.cash + r.ar + r.inventory + r.ppe + c.other_assets,
                total=True,
            ),
            _Line(tr("state.liability.payable", "Accounts payable"), lambda r: r.ap),
            _Line(tr("state.liability.debt", "Debt"), lambda r: c.debt),
            _Line(tr("state.modal.liability.other", "Other liabilities"), lambda r: c.other_liabs),
            _Line(tr("state.equity.capital", "Capital"), lambda r: c.capital),
            _Line(tr("state.modal.equity.other", "Other equity"), lambda r: c.other_equity),
            _Line(tr("state.equity.retainedEarnings", "Retained earnings"), lambda r: r.retained_earnings),
            _Line(
                tr("state.labels.totalLiabilitiesEquity", "Total Liabilities + Equity"),
                lambda r: r.ap + c.debt + c.other_liabs + c.capital + c.other_equity + r.retained_earnings,
                total=True,
            ),
        ]
        return [
            Paragraph(tr("state.analysis.summaryIS", "Income Statement Overview"), self.hdr),
            self._matrix(result.rows, income),
            Spacer(1, 10),
            Paragraph(tr("state.analysis.summaryBS", "Balance Sheet Overview"), self.hdr),
            self._matrix(result.rows, balance),
        ]

    def _analysis(self, result: ForecastResult, analysis: AnalysisReport) -> list:
        tr = self.t.tr
        years = [str(r.year) for r in result.rows]
        field = tr("common.field", "Field")

        check = [[field] + years]
        for key, label, attr in (
            ("state.labels.totalAssets", "Total Assets", "total_assets"),
            ("state.labels.totalLiabilitiesEquity", "Total Liabilities + Equity", "total_liabilities_equity"),
            ("state.labels.diff", "Difference", "difference"),
        ):
            check.append([tr(key, label)] + [self.money(getattr(b, attr)) for b in analysis.balance_check])

        ratios = [[tr("state.analysis.ratioTitle", "Key Ratios")] + years]
        for key, label, attr in (
            ("state.labels.grossMargin", "Gross margin", "gross_margin"),
            ("state.labels.netMargin", "Net margin", "net_margin"),
            ("state.labels.fcfMargin", "Free cash flow margin", "fcf_margin"),
            ("state.labels.debtRatio", "Debt ratio", "debt_ratio"),
        ):
            ratios.append([tr(key, label)] + [self.pct(getattr(r, attr) * 100) for r in analysis.ratios])

        days = tr("state.labels.days", "days")
        ccc = [[field] + years]
        for key, label, attr in (
            ("state.labels.dso", "DSO", "dso"),
            ("state.labels.dio", "DIO", "dio"),
            ("state.labels.dpo", "DPO", "dpo"),
            ("state.labels.ccc", "CCC", "ccc"),
        ):
            values = [format_number(getattr(e, attr), 1) for e in analysis.efficiency]
            ccc.append([f"{tr(key, label)} ({days})"] + values)

        common = [[field] + years]
        for key, label, attr in (
            ("state.pl.revenue", "Revenue", "revenue"),
            ("state.pl.cogs", "COGS", "cogs"),
            ("state.pl.expense", "Operating expense", "opex"),
            ("state.labels.netProfit", "Net profit", "net_income"),
            ("state.asset.cash", "Cash", "cash"),
            ("state.asset.receivable", "Accounts receivable", "ar"),
            ("state.asset.inventory", "Inventory", "inventory"),
            ("state.asset.ppe", "PPE", "ppe"),
            ("state.liability.payable", "Accounts payable", "ap"),
            ("state.liability.debt", "Debt", "debt"),
            ("state.equity.retainedEarnings", "Retained earnings", "retained_earnings"),
        ):
            common.append([tr(key, label)] + [self.pct(getattr(cs, attr)) for cs in analysis.common_size])

        kpi = analysis.kpi
        kpi_rows = [
            [f"{kpi.year}", ""],
            [tr("state.pl.revenue", "Revenue"), self.money(kpi.revenue)],
            [tr("state.labels.base", "Base"), self.money(kpi.base_revenue)],
            [tr("state.labels.netProfit", "Net profit"), self.money(kpi.net_income)],
            [tr("state.labels.base", "Base"), self.money(kpi.base_net_income)],
            [tr("state.labels.cfoTitle", "Operating Cash Flow (CFO)"), self.money(kpi.cfo)],
            [tr("state.labels.endingCash", "Ending Cash"), self.money(kpi.ending_cash)],
            [tr("state.labels.fcf", "Free cash flow"), self.money(kpi.free_cash_flow)],
        ]

        return [
            Paragraph(tr("state.analysis.summaryTitle", "Summary"), self.hdr),
            self._table(kpi_rows, first_col=220),
            Spacer(1, 10),
            Paragraph(tr("state.analysis.bscheckTitle", "Balance Check"), self.hdr),
            self._table(check),
            Spacer(1, 10),
            Paragraph(tr("state.analysis.ratioTitle", "Key Ratios"), self.hdr),
            self._table(ratios),
            Spacer(1, 10),
            Paragraph(tr("state.analysis.cccTitle", "Cash Conversion Cycle"), self.hdr),
            self._table(ccc),
            Spacer(1, 10),
            Paragraph(tr("state.analysis.commonTitle", "Common-size Statements"), self.hdr),
            self._table(common),
        ]

    def _year_section(self, row: YearRow, constants: ForecastConstants) -> list:
        tr = self.t.tr
        heading = tr("state.labels.base", "Base") if row.is_base else tr("state.labels.forecast", "Forecast")

        income = [
            [tr("state.pl.IS", "Income Statement"), str(row.year)],
            [tr("state.pl.revenue", "Revenue"), self.money(row.revenue)],
            [tr("state.pl.cogs", "COGS"), self.money(row.cogs)],
            [tr("state.labels.grossProfit", "Gross profit"), self.money(row.gross_profit)],
            [tr("state.pl.expense", "Operating expense"), self.money(row.opex)],
            [tr("state.labels.depreciation", "Depreciation"), self.money(row.depreciation)],
            [tr("state.pl.otherIncome", "Other income"), self.money(row.other_income)],
            [tr("state.labels.interest", "Interest"), self.money(row.interest)],
            [tr("state.labels.pretax", "Profit before tax"), self.money(row.pretax)],
            [tr("state.pl.tax", "Income tax"), self.money(row.tax)],
            [tr("state.labels.netProfit", "Net profit"), self.money(row.net_income)],
        ]
        balance = [
            [tr("state.bs.title", "Balance Sheet"), str(row.year)],
            [tr("state.asset.cash", "Cash"), self.money(row.cash)],
            [tr("state.asset.receivable", "Accounts receivable"), self.money(row.ar)],
            [tr("state.asset.inventory", "Inventory"), self.money(row.inventory)],
            [tr("state.asset.ppe", "PPE"), self.money(row.ppe)],
            [tr("state.modal.asset.other", "Other assets"), self.money(constants.other_assets)],
            [tr("state.liability.payable", "Accounts payable"), self.money(row.ap)],
            [tr("state.liability.debt", "Debt"), self.money(constants.debt)],
            [tr("state.modal.liability.other", "Other liabilities"), self.money(constants.other_liabs)],
            [tr("state.equity.capital", "Capital"), self.money(constants.capital)],
            [tr("state.modal.equity.other", "Other equity"), self.money(constants.other_equity)],
            [tr("state.equity.retainedEarnings", "Retained earnings"), self.money(row.retained_earnings)],
        ]
        cash_flow = [
            [tr("state.cf.title", "Cash Flow Statement"), str(row.year)],
            [tr("state.cf.operating", "Operating activities"), ""],
            [tr("state.labels.netProfit", "Net profit"), self.money(row.net_income)],
            [tr("state.labels.depreciation", "Depreciation"), self.money(row.depreciation)],
            [tr("state.labels.deltaNwc", "Change in working capital"), self.money(-row.delta_nwc)],
            [tr("state.cf.cfoTitle", "Cash flow from operations (CFO)"), self.money(row.cfo)],
            [tr("state.cf.investing", "Investing activities"), ""],
            [tr("state.labels.capex", "Capital expenditure"), self.money(-row.capex)],
            [tr("state.cf.cfiTitle", "Cash flow from investing (CFI)"), self.money(row.cfi)],
            [tr("state.cf.financing", "Financing activities"), ""],
            [tr("state.liability.debt", "Debt"), self.money(row.delta_debt)],
            [tr("state.equity.capital", "Capital"), self.money(row.capital_change)],
            [tr("state.cf.cffTitle", "Cash flow from financing (CFF)"), self.money(row.cff)],
            [tr("state.labels.beginningCash", "Beginning cash"), self.money(row.beginning_cash)],
            [tr("state.labels.ending", "Ending cash"), self.money(row.cash)],
        ]
        return [
            Paragraph(f"{row.year} {heading}", self.hdr),
            self._table(income, first_col=300),
            Spacer(1, 8),
            self._table(balance, first_col=300),
            Spacer(1, 8),
            self._table(cash_flow, first_col=300),
        ]

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def render(
        self,
        result: ForecastResult,
        title: Optional[str] = None,
        analysis: Optional[AnalysisReport] = None,
    ) -> bytes:
        """Render ``result`` to PDF bytes.

        Args:
            result: Forecast to render
            title: Report title, the translated default title when omitted
            analysis: Precomputed analysis, built from ``result`` when omitted

        Returns:
            The PDF document as bytes
        """
        analysis = analysis or build_report(result)
        title = title or self.t.tr("state.export.reportTitle", "Financial Forecast Report")

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            rightMargin=26,
            leftMargin=26,
            topMargin=26,
            bottomMargin=26,
            title=title,
        )
        story: list = [
            Paragraph(escape(title), self.title_style),
            Paragraph(f"{result.base.year} - {result.final.year}", self.normal),
            Spacer(1, 10),
        ]
        story.extend(self._summary(result))
        story.append(PageBreak())
        story.extend(self._analysis(result, analysis))
        for row in result.rows:
            story.append(PageBreak())
            story.extend(self._year_section(row, result.constants))

        doc.build(story)
        pdf = buffer.getvalue()
        logger.debug(f"Rendered forecast PDF: {len(pdf)} bytes, {len(result.rows)} years, lang={self.t.lang}")
        return pdf
