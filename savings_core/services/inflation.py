from __future__ import annotations

import math
from typing import Optional

from savings_core.domain.models import InflationBreakdown


def resolve_inflation(
    goal: float,
    ending_balance: float,
    monthly_inflation_rate: Optional[float],
    months: int,
    total_contributions: float,
    total_interest: float,
) -> Optional[InflationBreakdown]:
    """Express the nominal end-of-horizon figures in start-of-horizon money."""
    if monthly_inflation_rate is None:
        return None

    divisor = math.pow(1 + (monthly_inflation_rate or 0.0), months)
    if divisor == 0:
        return None

    return InflationBreakdown(
        real_goal_value=goal / divisor,
        real_ending_balance=ending_balance / divisor,
        real_contributions=total_contributions / divisor,
        real_interest=total_interest / divisor,
    )
