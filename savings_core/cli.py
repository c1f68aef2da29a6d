from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from savings_core.domain.models import COMPOUNDING_FREQUENCIES, MODES, CalculatedSummary, ScenarioInput
from savings_core.io import config as config_io
from savings_core.io import report
from savings_core.io.state import JsonStateStore, load_state, persist_state
from savings_core.services.calculator import calculate_savings_scenario

app = typer.Typer(help="BudgetTools savings goal calculator.")

PREVIEW_ROWS = 6

GUIDANCE = {
    "time": "Increase monthly savings or adjust your goal to get a result.",
    "monthly": "Goal may already be met or the target date is too soon.",
}
MISSING_GOAL = "Enter a goal amount to begin."

REMEMBERED_FIELDS = (
    "mode",
    "goal_amount",
    "current_savings",
    "monthly_contribution",
    "target_date",
    "apr",
    "compounding",
    "inflation_rate",
    "currency",
    "locale",
    "remember_inputs",
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log solver details")):
    """Work out how long a savings goal takes, or what it costs per month."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _summary_to_json(summary: CalculatedSummary) -> dict:
    inflation = summary.inflation
    return {
        "mode": summary.mode,
        "months": summary.months,
        "finish_date": summary.finish_date.isoformat() if summary.finish_date else None,
        "required_monthly_contribution": summary.required_monthly_contribution,
        "total_contributions": summary.total_contributions,
        "total_interest": summary.total_interest,
        "projection": [
            {
                "month_index": row.month_index,
                "date": row.date.isoformat(),
                "starting_balance": row.starting_balance,
                "contribution": row.contribution,
                "interest_earned": row.interest_earned,
                "ending_balance": row.ending_balance,
            }
            for row in summary.projection
        ],
        "inflation": None
        if inflation is None
        else {
            "real_goal_value": inflation.real_goal_value,
            "real_ending_balance": inflation.real_ending_balance,
            "real_contributions": inflation.real_contributions,
            "real_interest": inflation.real_interest,
        },
    }


def _check_choice(value: str, choices, name: str) -> str:
    if value not in choices:
        raise typer.BadParameter(f"{name} must be one of: {', '.join(choices)}")
    return value


def _build_scenario(values: Dict[str, Any], start: Optional[str]) -> ScenarioInput:
    payload = {key: values.get(key) for key in REMEMBERED_FIELDS if key not in ("currency", "locale", "remember_inputs")}
    payload["start_date"] = start
    try:
        return config_io.scenario_from_dict(payload)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _render(
    console: Console,
    summary: CalculatedSummary,
    scenario: ScenarioInput,
    locale: str,
    currency: str,
    show_all: bool,
) -> None:
    card = Table(show_header=False, box=None, pad_edge=False)
    card.add_column(style="bold")
    card.add_column(justify="right")
    rows = report.summary_rows(summary, scenario.goal_amount, scenario.current_savings, locale, currency)
    for label, value in rows:
        card.add_row(label, value)
    console.print("\n[bold cyan]== Savings goal ==[/bold cyan]")
    console.print(card)

    if not summary.projection:
        return

    shown = summary.projection if show_all else summary.projection[:PREVIEW_ROWS]
    table = Table(title="Projection")
    for column in ("Month", "Date", "Starting balance", "Contribution", "Interest", "Ending balance"):
        table.add_column(column, justify="left" if column == "Month" else "right")
    for row in shown:
        table.add_row(
            str(row.month_index + 1),
            report.format_month(row.date),
            report.format_currency(row.starting_balance, locale, currency),
            report.format_currency(row.contribution, locale, currency),
            report.format_currency(row.interest_earned, locale, currency),
            report.format_currency(row.ending_balance, locale, currency),
        )
    console.print(table)
    if len(shown) < len(summary.projection):
        console.print(
            f"[dim]Showing {len(shown)} of {len(summary.projection)} months. Use --all to show every month.[/dim]"
        )


def _run(
    console: Console,
    values: Dict[str, Any],
    scenario: ScenarioInput,
    show_all: bool = False,
    plain: bool = False,
    csv_out: Optional[Path] = None,
    pdf_out: Optional[Path] = None,
    out: Optional[Path] = None,
) -> CalculatedSummary:
    if not scenario.goal_amount or scenario.goal_amount <= 0:
        console.print(f"[yellow]{MISSING_GOAL}[/yellow]")
        raise typer.Exit(code=1)

    result = calculate_savings_scenario(scenario)
    if result is None:
        console.print(f"[yellow]{GUIDANCE[scenario.mode]}[/yellow]")
        raise typer.Exit(code=1)

    locale, currency = values["locale"], values["currency"]
    if plain:
        for line in report.summarise_projection(result, locale, currency):
            typer.echo(line)
    else:
        _render(console, result, scenario, locale, currency, show_all)

    if csv_out or pdf_out:
        lines = report.summarise_projection(result, locale, currency, include_table_hint=True)
        if csv_out:
            report.write_csv(csv_out, lines, result.projection)
            typer.echo(f"CSV report written to {csv_out}")
        if pdf_out:
            pdf_out.parent.mkdir(parents=True, exist_ok=True)
            pdf_out.write_bytes(report.build_pdf(lines, result.projection))
            typer.echo(f"PDF report written to {pdf_out}")
    if out:
        _save_json(out, _summary_to_json(result))
        typer.echo(f"Summary written to {out}")
    return result


@app.command()
def calculate(
    scenario: Optional[Path] = typer.Option(None, help="Scenario JSON (overrides the other inputs)"),
    mode: Optional[str] = typer.Option(None, help="time (months to goal) or monthly (savings per month by a date)"),
    goal: Optional[float] = typer.Option(None, help="Goal amount"),
    current: Optional[float] = typer.Option(None, help="Current savings"),
    monthly: Optional[float] = typer.Option(None, help="Monthly contribution (time mode)"),
    target: Optional[str] = typer.Option(None, help="Target month YYYY-MM (monthly mode)"),
    apr: Optional[float] = typer.Option(None, help="Annual interest rate in percent"),
    compounding: Optional[str] = typer.Option(None, help="monthly|quarterly|yearly"),
    inflation: Optional[float] = typer.Option(None, help="Annual inflation rate in percent"),
    start: Optional[str] = typer.Option(None, help="Projection start date YYYY-MM-DD (default today)"),
    currency: Optional[str] = typer.Option(None, help="EUR|USD|GBP"),
    locale: Optional[str] = typer.Option(None, help="Number format, e.g. nl-NL or en-US"),
    show_all: bool = typer.Option(False, "--all", help="Show every projection month"),
    plain: bool = typer.Option(False, help="Print plain summary lines only"),
    csv_out: Optional[Path] = typer.Option(None, "--csv", help="Write a CSV report"),
    pdf_out: Optional[Path] = typer.Option(None, "--pdf", help="Write a PDF report"),
    out: Optional[Path] = typer.Option(None, help="Write the result as JSON"),
    remember: Optional[bool] = typer.Option(None, "--remember/--forget", help="Keep inputs for next time"),
):
    """Solve a savings goal from options or a scenario file."""
    console = Console()
    store = JsonStateStore()
    state = load_state(store)
    given = {
        "mode": mode,
        "goal_amount": goal,
        "current_savings": current,
        "monthly_contribution": monthly,
        "target_date": target,
        "apr": apr,
        "compounding": compounding,
        "inflation_rate": inflation,
        "currency": currency,
        "locale": locale,
    }
    values = {**state, **{k: v for k, v in given.items() if v is not None}}
    values["currency"] = _check_choice(values["currency"].upper(), report.CURRENCIES, "currency")
    values["locale"] = _check_choice(values["locale"], report.LOCALES, "locale")

    if scenario:
        try:
            scenario_obj = config_io.load_scenario(scenario)
        except (ValueError, FileNotFoundError) as exc:
            raise typer.BadParameter(str(exc)) from exc
    else:
        if values.get("goal_amount") is None:
            console.print(f"[yellow]{MISSING_GOAL}[/yellow]")
            raise typer.Exit(code=1)
        values["mode"] = _check_choice(str(values["mode"]).lower(), MODES, "mode")
        values["compounding"] = _check_choice(
            str(values["compounding"]).lower(), COMPOUNDING_FREQUENCIES, "compounding"
        )
        scenario_obj = _build_scenario(values, start)

    values["remember_inputs"] = state["remember_inputs"] if remember is None else remember
    persist_state(store, {key: values.get(key) for key in REMEMBERED_FIELDS})

    _run(console, values, scenario_obj, show_all, plain, csv_out, pdf_out, out)


@app.command()
def interactive():
    """
    Interactive mode: answer a few questions, get the projection.
    """
    console = Console()
    console.print("[bold cyan]BudgetTools Savings Goal Calculator[/bold cyan]\n")
    store = JsonStateStore()
    state = load_state(store)

    mode = typer.prompt("Mode: time (how long) or monthly (how much per month)", default=state["mode"])
    mode = _check_choice(mode.strip().lower(), MODES, "mode")

    goal_in = typer.prompt("Goal amount", default=_as_text(state["goal_amount"]), show_default=bool(state["goal_amount"]))
    current_in = typer.prompt("Current savings (blank = 0)", default=_as_text(state["current_savings"]))

    monthly_in = ""
    target_in = ""
    if mode == "time":
        monthly_in = typer.prompt("Monthly contribution", default=_as_text(state["monthly_contribution"]))
    else:
        target_in = typer.prompt("Target month (YYYY-MM)", default=state["target_date"] or "")

    apr_in = typer.prompt("Annual interest rate % (blank = 0)", default=_as_text(state["apr"]))
    compounding = typer.prompt("Compounding (monthly/quarterly/yearly)", default=state["compounding"])
    inflation_in = typer.prompt(
        "Inflation rate % (blank = skip)", default=_as_text(state["inflation_rate"]), show_default=False
    )
    remember = typer.confirm("Remember my last inputs on this device?", default=bool(state["remember_inputs"]))

    target_date = config_io.parse_target_month(target_in)
    if mode == "monthly" and target_in and target_date is None:
        console.print("[yellow]Could not read the target month; expected YYYY-MM.[/yellow]")

    values = {
        **state,
        "mode": mode,
        "goal_amount": config_io.parse_amount(goal_in),
        "current_savings": config_io.parse_amount(current_in) or 0.0,
        "monthly_contribution": config_io.parse_amount(monthly_in),
        "target_date": target_date.strftime("%Y-%m") if target_date else "",
        "apr": config_io.parse_amount(apr_in) or 0.0,
        "compounding": _check_choice(compounding.strip().lower(), COMPOUNDING_FREQUENCIES, "compounding"),
        "inflation_rate": config_io.parse_amount(inflation_in),
        "remember_inputs": remember,
    }
    persist_state(store, {key: values.get(key) for key in REMEMBERED_FIELDS})

    if values["goal_amount"] is None:
        console.print(f"[yellow]{MISSING_GOAL}[/yellow]")
        raise typer.Exit(code=1)

    _run(console, values, _build_scenario(values, None))
    console.print("\n[dim]Estimates only. Returns are not guaranteed.[/dim]\n")


@app.command()
def reset():
    """Forget remembered inputs."""
    store = JsonStateStore()
    store.clear()
    typer.echo(f"Stored inputs cleared ({store.path}).")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return f"{value:g}" if isinstance(value, float) else str(value)


if __name__ == "__main__":
    app()
