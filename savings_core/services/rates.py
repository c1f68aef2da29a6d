from __future__ import annotations

import math
from typing import Optional

PERIODS_PER_YEAR = {
    "monthly": 12,
    "quarterly": 4,
    "yearly": 1,
}


def effective_monthly_rate(apr_percent: float, compounding: str) -> float:
    """
    Monthly growth rate for an APR quoted with the given compounding label.
    A zero (or negative) APR gives exactly 0.0.
    """
    apr = max(apr_percent, 0.0) / 100
    if apr == 0:
        return 0.0
    periods = PERIODS_PER_YEAR[compounding]
    return math.pow(1 + apr / periods, 1 / periods) - 1


def effective_monthly_inflation(annual_percent: Optional[float]) -> Optional[float]:
    if annual_percent is None:
        return None
    rate = max(annual_percent, 0.0) / 100
    if rate == 0:
        return 0.0
    return math.pow(1 + rate, 1 / 12) - 1
