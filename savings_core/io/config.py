from __future__ import annotations

import datetime as dt
import json
import math
import re
from pathlib import Path
from typing import Any, Dict, Optional

from savings_core.domain.models import COMPOUNDING_FREQUENCIES, MODES, ScenarioInput

_NON_NUMERIC = re.compile(r"[^0-9,.\-]")


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """
    Parse a user-typed amount. Accepts "1250", "1250.50", "1250,50" or "€ 1250".
    Returns None for blank or unparseable input.
    """
    if raw is None or raw == "":
        return None
    txt = _NON_NUMERIC.sub("", raw).replace(",", ".", 1)
    if txt in ("", "-", "."):
        return None
    try:
        val = float(txt)
    except ValueError:
        return None
    return val if math.isfinite(val) else None


def parse_target_month(raw: Optional[str]) -> Optional[dt.date]:
    """Parse "YYYY-MM" into the first day of that month."""
    if not raw:
        return None
    parts = raw.strip().split("-")
    if len(parts) < 2:
        return None
    try:
        year, month = int(parts[0]), int(parts[1])
        return dt.date(year, month, 1)
    except ValueError:
        return None


def scenario_from_dict(data: Dict[str, Any]) -> ScenarioInput:
    mode = str(data.get("mode", "time")).lower()
    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}', expected one of {MODES}")

    compounding = str(data.get("compounding", "monthly")).lower()
    if compounding not in COMPOUNDING_FREQUENCIES:
        raise ValueError(
            f"Unknown compounding '{compounding}', expected one of {COMPOUNDING_FREQUENCIES}"
        )

    if data.get("goal_amount") is None:
        raise ValueError("goal_amount is required")

    scenario = ScenarioInput(
        mode=mode,
        goal_amount=float(data["goal_amount"]),
        current_savings=float(data.get("current_savings") or 0.0),
        monthly_contribution=float(data.get("monthly_contribution") or 0.0),
        target_date=_coerce_month(data.get("target_date")),
        apr=float(data.get("apr") or 0.0),
        compounding=compounding,
        inflation_rate=_optional_float(data.get("inflation_rate")),
        start_date=_coerce_date(data.get("start_date")),
    )
    validate_scenario(scenario)
    return scenario


def validate_scenario(scenario: ScenarioInput) -> None:
    """Reject inputs the calculator treats as a contract violation."""
    for field in ("goal_amount", "current_savings", "monthly_contribution", "apr"):
        value = getattr(scenario, field)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"{field} must be a non-negative number, got {value}")
    if scenario.inflation_rate is not None and (
        not math.isfinite(scenario.inflation_rate) or scenario.inflation_rate < 0
    ):
        raise ValueError(f"inflation_rate must be a non-negative number, got {scenario.inflation_rate}")


def load_scenario(path: str | Path) -> ScenarioInput:
    return scenario_from_dict(_read_json(path))


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _coerce_month(value: Any) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.date):
        return value
    parsed = parse_target_month(str(value))
    if parsed is None:
        raise ValueError(f"target_date must look like YYYY-MM, got '{value}'")
    return parsed


def _coerce_date(value: Any) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"start_date must be an ISO date, got '{value}'") from exc


def _read_json(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
