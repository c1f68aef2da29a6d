from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Tuple

from savings_core.domain.models import ProjectionRow
from savings_core.services.months import add_months, month_start


def generate_projection(
    months: int,
    starting_balance: float,
    monthly_contribution: float,
    monthly_rate: float,
    goal: float,
    start_date: dt.date,
    allow_over_goal: bool = False,
) -> List[ProjectionRow]:
    """
    Month-by-month replay of a savings plan:
    - Interest accrues on the opening balance.
    - The contribution lands at month end.
    - Unless `allow_over_goal`, the last contribution is trimmed so the balance
      lands exactly on the goal, and the replay stops once the goal is reached.
    """
    rows: List[ProjectionRow] = []
    balance = starting_balance

    for month in range(months):
        interest = balance * monthly_rate
        contribution = monthly_contribution
        if not allow_over_goal and goal > 0:
            if balance + interest + contribution > goal:
                contribution = max(0.0, goal - (balance + interest))

        ending = balance + interest + contribution
        rows.append(
            ProjectionRow(
                month_index=month,
                date=month_start(add_months(start_date, month + 1)),
                starting_balance=balance,
                contribution=contribution,
                interest_earned=interest,
                ending_balance=ending,
            )
        )
        balance = ending

        if not allow_over_goal and balance >= goal:
            break

    return rows


def accumulate(projection: Iterable[ProjectionRow]) -> Tuple[float, float]:
    total_contributions = 0.0
    total_interest = 0.0
    for row in projection:
        total_contributions += row.contribution
        total_interest += row.interest_earned
    return total_contributions, total_interest
