from __future__ import annotations

import csv
import datetime as dt
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from savings_core.domain.models import CalculatedSummary, ProjectionRow

CURRENCIES = ("EUR", "USD", "GBP")
LOCALES = ("nl-NL", "en-US", "en-GB", "de-DE", "fr-FR", "es-ES")

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}

# locale -> (group separator, decimal separator, symbol placement)
LOCALE_FORMATS = {
    "nl-NL": (".", ",", "prefix_space"),
    "en-US": (",", ".", "prefix"),
    "en-GB": (",", ".", "prefix"),
    "de-DE": (".", ",", "suffix"),
    "fr-FR": (" ", ",", "suffix"),
    "es-ES": (".", ",", "suffix"),
}

PROJECTION_COLUMNS = ["Month", "Date", "Starting Balance", "Contribution", "Interest", "Ending Balance"]

TABLE_HINT = "Projection (first rows shown in tool). Download CSV for full history."


def format_currency(value: float, locale: str, currency: str) -> str:
    group, decimal, placement = LOCALE_FORMATS.get(locale, LOCALE_FORMATS["en-US"])
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    digits = f"{abs(value):,.2f}".replace(",", "\0").replace(".", decimal).replace("\0", group)
    sign = "-" if round(value, 2) < 0 else ""
    if placement == "prefix":
        return f"{sign}{symbol}{digits}"
    if placement == "prefix_space":
        return f"{sign}{symbol} {digits}"
    return f"{sign}{digits} {symbol}"


def describe_duration(months: int) -> str:
    years, remaining = divmod(months, 12)
    parts = []
    if years > 0:
        parts.append(f"{years} {'year' if years == 1 else 'years'}")
    if remaining > 0:
        parts.append(f"{remaining} {'month' if remaining == 1 else 'months'}")
    if not parts:
        return "0 months"
    return " ".join(parts)


def format_long_date(date: dt.date) -> str:
    return f"{date:%B} {date.day}, {date.year}"


def format_month(date: dt.date) -> str:
    return f"{date:%b %Y}"


def summarise_projection(
    summary: CalculatedSummary,
    locale: str,
    currency: str,
    include_table_hint: bool = False,
) -> List[str]:
    """Plain-text lines used for copy/paste, CSV headers and the PDF report."""
    lines = [
        f"Mode: {'Time to reach goal' if summary.mode == 'time' else 'Monthly savings needed'}"
    ]
    if summary.finish_date:
        lines.append(f"Projected finish date: {format_long_date(summary.finish_date)}")
    if summary.required_monthly_contribution is not None:
        lines.append(
            f"Required monthly savings: {format_currency(summary.required_monthly_contribution, locale, currency)}"
        )
    lines.append(f"Total contributions: {format_currency(summary.total_contributions, locale, currency)}")
    lines.append(f"Total interest: {format_currency(summary.total_interest, locale, currency)}")
    if summary.inflation:
        real = summary.inflation
        lines.append(f"Real (today's money) finish: {format_currency(real.real_ending_balance, locale, currency)}")
        lines.append(f"Real contributions: {format_currency(real.real_contributions, locale, currency)}")
        lines.append(f"Real interest: {format_currency(real.real_interest, locale, currency)}")
    if include_table_hint:
        lines.append("")
        lines.append(TABLE_HINT)
    return lines


def summary_rows(
    summary: CalculatedSummary,
    goal_amount: float,
    current_savings: float,
    locale: str,
    currency: str,
) -> List[Tuple[str, str]]:
    """Label/value pairs for the on-screen result card."""
    rows: List[Tuple[str, str]] = []
    goal = max(0.0, goal_amount)
    current = max(0.0, current_savings)
    if goal > 0:
        percent = round(current / goal * 100)
        rows.append(
            (
                "Current progress",
                f"{format_currency(current, locale, currency)} of {format_currency(goal, locale, currency)} ({percent}%)",
            )
        )

    if summary.mode == "time":
        rows.append(("Estimated time", describe_duration(summary.months)))
        if summary.finish_date:
            rows.append(("Projected finish date", f"{summary.finish_date:%B %Y}"))
    elif summary.required_monthly_contribution is not None:
        rows.append(
            ("Required monthly savings", format_currency(summary.required_monthly_contribution, locale, currency))
        )
        rows.append(("Months until target", describe_duration(summary.months)))

    rows.append(("Total contributions", format_currency(summary.total_contributions, locale, currency)))
    rows.append(("Total interest", format_currency(summary.total_interest, locale, currency)))
    if summary.inflation:
        real = summary.inflation
        rows.append(("Goal in today's money", format_currency(real.real_goal_value, locale, currency)))
        rows.append(("Projected finish (real)", format_currency(real.real_ending_balance, locale, currency)))
        rows.append(("Contributions (real)", format_currency(real.real_contributions, locale, currency)))
        rows.append(("Interest (real)", format_currency(real.real_interest, locale, currency)))
    return rows


def projection_frame(projection: Sequence[ProjectionRow]) -> pd.DataFrame:
    records = [
        {
            "Month": row.month_index + 1,
            "Date": format_month(row.date),
            "Starting Balance": float(row.starting_balance),
            "Contribution": float(row.contribution),
            "Interest": float(row.interest_earned),
            "Ending Balance": float(row.ending_balance),
        }
        for row in projection
    ]
    return pd.DataFrame(records, columns=PROJECTION_COLUMNS)


def write_csv(path: str | Path, lines: Sequence[str], projection: Sequence[ProjectionRow]) -> Path:
    """
    Summary lines, a blank line, then the projection table.
    UTF-8 with BOM and every cell quoted so spreadsheet apps open it cleanly.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for line in lines:
            writer.writerow([line])
        writer.writerow([])
        projection_frame(projection).to_csv(
            f,
            index=False,
            quoting=csv.QUOTE_ALL,
            float_format="%.2f",
            lineterminator="\n",
        )
    return path


def build_pdf(
    lines: Sequence[str],
    projection: Sequence[ProjectionRow],
    title: str = "BudgetTools savings goal report",
    max_rows: Optional[int] = None,
) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, rightMargin=50, leftMargin=50, topMargin=50, bottomMargin=40)
    styles = getSampleStyleSheet()

    story = [Paragraph(title, styles["Heading1"]), Spacer(1, 12)]
    for line in lines:
        if line:
            story.append(Paragraph(_escape(line), styles["Normal"]))
        else:
            story.append(Spacer(1, 8))

    rows = list(projection if max_rows is None else projection[:max_rows])
    if rows:
        table_data = [PROJECTION_COLUMNS] + [
            [
                str(row.month_index + 1),
                format_month(row.date),
                f"{row.starting_balance:.2f}",
                f"{row.contribution:.2f}",
                f"{row.interest_earned:.2f}",
                f"{row.ending_balance:.2f}",
            ]
            for row in rows
        ]
        table = Table(table_data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ]
            )
        )
        story.append(Spacer(1, 16))
        story.append(table)

    doc.build(story)
    return buffer.getvalue()


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
