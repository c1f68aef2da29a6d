import datetime as dt
from pathlib import Path

from savings_core.domain.models import ScenarioInput
from savings_core.io import report
from savings_core.services.calculator import calculate_savings_scenario


def _summary(mode: str = "time", inflation=None):
    if mode == "time":
        scenario = ScenarioInput(
            mode="time",
            goal_amount=10_000,
            monthly_contribution=250,
            inflation_rate=inflation,
            start_date=dt.date(2024, 1, 1),
        )
    else:
        scenario = ScenarioInput(
            mode="monthly",
            goal_amount=20_000,
            current_savings=1_000,
            target_date=dt.date(2026, 1, 1),
            inflation_rate=inflation,
            start_date=dt.date(2024, 1, 1),
        )
    return calculate_savings_scenario(scenario)


def test_format_currency_per_locale():
    assert report.format_currency(1234.5, "en-US", "USD") == "$1,234.50"
    assert report.format_currency(1234.5, "en-GB", "GBP") == "£1,234.50"
    assert report.format_currency(1234.5, "nl-NL", "EUR") == "€ 1.234,50"
    assert report.format_currency(1234.5, "de-DE", "EUR") == "1.234,50 €"
    assert report.format_currency(1234567.891, "fr-FR", "EUR") == "1 234 567,89 €"
    assert report.format_currency(-10, "en-US", "USD") == "-$10.00"
    assert "\u00a0" not in report.format_currency(1234567.891, "fr-FR", "EUR")
    assert "\u202f" not in report.format_currency(1234567.891, "fr-FR", "EUR")


def test_describe_duration():
    assert report.describe_duration(0) == "0 months"
    assert report.describe_duration(1) == "1 month"
    assert report.describe_duration(12) == "1 year"
    assert report.describe_duration(13) == "1 year 1 month"
    assert report.describe_duration(40) == "3 years 4 months"


def test_summary_lines_time_mode():
    lines = report.summarise_projection(_summary(), "en-US", "USD")
    assert lines == [
        "Mode: Time to reach goal",
        "Projected finish date: May 1, 2027",
        "Total contributions: $10,000.00",
        "Total interest: $0.00",
    ]


def test_summary_lines_monthly_mode_with_inflation_and_hint():
    lines = report.summarise_projection(_summary("monthly", inflation=2), "nl-NL", "EUR", include_table_hint=True)
    assert lines[0] == "Mode: Monthly savings needed"
    assert lines[1] == "Projected finish date: January 1, 2026"
    assert lines[2] == "Required monthly savings: € 791,67"
    assert any(line.startswith("Real (today's money) finish: ") for line in lines)
    assert lines[-2:] == ["", report.TABLE_HINT]


def test_summary_rows_show_progress_and_duration():
    rows = dict(report.summary_rows(_summary(), 10_000, 2_500, "en-US", "USD"))
    assert rows["Current progress"] == "$2,500.00 of $10,000.00 (25%)"
    assert rows["Estimated time"] == "3 years 4 months"
    assert rows["Projected finish date"] == "May 2027"


def test_projection_frame_columns():
    frame = report.projection_frame(_summary().projection)
    assert list(frame.columns) == report.PROJECTION_COLUMNS
    assert len(frame) == 40
    assert frame.iloc[0]["Month"] == 1
    assert frame.iloc[0]["Date"] == "Feb 2024"


def test_write_csv(tmp_path: Path):
    summary = _summary()
    lines = report.summarise_projection(summary, "en-US", "USD", include_table_hint=True)
    path = report.write_csv(tmp_path / "out" / "report.csv", lines, summary.projection)

    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")

    rows = raw.decode("utf-8-sig").split("\n")
    assert rows[0] == '"Mode: Time to reach goal"'
    header_at = rows.index('"Month","Date","Starting Balance","Contribution","Interest","Ending Balance"')
    assert rows[header_at - 1] == ""
    assert rows[header_at + 1] == '"1","Feb 2024","0.00","250.00","0.00","250.00"'
    assert rows[header_at + 40].startswith('"40","May 2027"')


def test_build_pdf_returns_pdf_bytes():
    summary = _summary("monthly", inflation=2)
    lines = report.summarise_projection(summary, "de-DE", "EUR", include_table_hint=True)
    payload = report.build_pdf(lines, summary.projection)
    assert payload.startswith(b"%PDF")
    assert len(payload) > 500
