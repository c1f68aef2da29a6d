from __future__ import annotations

import math
from typing import Optional


def solve_months(
    goal: float,
    current: float,
    monthly_contribution: float,
    monthly_rate: float,
) -> Optional[int]:
    """
    Closed-form number of months for a balance growing at `monthly_rate` with a
    level end-of-month contribution to reach `goal`. None when it never does.
    """
    if goal <= current:
        return 0

    if monthly_rate == 0:
        if monthly_contribution <= 0:
            return None
        return math.ceil((goal - current) / monthly_contribution)

    if monthly_contribution == 0:
        if current <= 0:
            return None
        ratio = goal / current
        if ratio <= 1:
            return 0
        months = math.log(ratio) / math.log(1 + monthly_rate)
        if not math.isfinite(months):
            return None
        return max(0, math.ceil(months))

    numerator = goal * monthly_rate + monthly_contribution
    denominator = current * monthly_rate + monthly_contribution
    if numerator <= 0 or denominator <= 0:
        return None
    months = math.log(numerator / denominator) / math.log(1 + monthly_rate)
    if not math.isfinite(months) or months < 0:
        return None
    return math.ceil(months)


def solve_contribution(
    goal: float,
    current: float,
    months: int,
    monthly_rate: float,
) -> Optional[float]:
    """
    Level monthly contribution that grows `current` into `goal` after `months`.
    None if the horizon is empty or the goal would be overshot with nothing paid in.
    """
    if months <= 0:
        return None
    if goal <= current:
        return 0.0

    if monthly_rate == 0:
        return max(0.0, (goal - current) / months)

    growth = math.pow(1 + monthly_rate, months)
    denominator = (growth - 1) / monthly_rate
    if denominator == 0:
        return None
    result = (goal - current * growth) / denominator
    if not math.isfinite(result) or result < 0:
        return None
    return result
