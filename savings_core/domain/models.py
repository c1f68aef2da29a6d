from __future__ import annotations

import dataclasses
import datetime as dt
from typing import List, Optional

MODES = ("time", "monthly")
COMPOUNDING_FREQUENCIES = ("monthly", "quarterly", "yearly")

# 50 years
MAX_MONTHS = 600


@dataclasses.dataclass(frozen=True)
class ScenarioInput:
    mode: str  # "time" or "monthly"
    goal_amount: float
    current_savings: float = 0.0
    monthly_contribution: float = 0.0
    target_date: Optional[dt.date] = None
    apr: float = 0.0
    compounding: str = "monthly"
    inflation_rate: Optional[float] = None
    start_date: Optional[dt.date] = None


@dataclasses.dataclass(frozen=True)
class ProjectionRow:
    month_index: int
    date: dt.date
    starting_balance: float
    contribution: float
    interest_earned: float
    ending_balance: float


@dataclasses.dataclass(frozen=True)
class InflationBreakdown:
    real_goal_value: float
    real_ending_balance: float
    real_contributions: float
    real_interest: float


@dataclasses.dataclass(frozen=True)
class CalculatedSummary:
    mode: str
    months: int
    total_contributions: float
    total_interest: float
    projection: List[ProjectionRow]
    finish_date: Optional[dt.date] = None
    required_monthly_contribution: Optional[float] = None
    inflation: Optional[InflationBreakdown] = None
