from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from savings_core.domain.models import MAX_MONTHS, CalculatedSummary, ScenarioInput
from savings_core.services.inflation import resolve_inflation
from savings_core.services.months import add_months, months_between
from savings_core.services.projection import accumulate, generate_projection
from savings_core.services.rates import effective_monthly_inflation, effective_monthly_rate
from savings_core.services.solver import solve_contribution, solve_months

logger = logging.getLogger(__name__)


def calculate_savings_scenario(scenario: ScenarioInput) -> Optional[CalculatedSummary]:
    """
    Solve a savings scenario and build its month-by-month projection.

    - "time": months needed with a fixed monthly contribution.
    - "monthly": contribution needed to hit the goal by `target_date`.

    Returns None when the scenario cannot be reached; callers show guidance
    instead of a result.
    """
    today = scenario.start_date or dt.date.today()
    goal = scenario.goal_amount
    current = scenario.current_savings
    monthly_rate = effective_monthly_rate(scenario.apr, scenario.compounding)
    inflation_rate = effective_monthly_inflation(scenario.inflation_rate)

    if goal <= current:
        logger.debug("Goal %.2f already met by savings %.2f", goal, current)
        inflation = resolve_inflation(goal, current, inflation_rate, 0, 0.0, 0.0)
        if scenario.mode == "time":
            return CalculatedSummary(
                mode="time",
                months=0,
                finish_date=today,
                total_contributions=0.0,
                total_interest=0.0,
                projection=[],
                inflation=inflation,
            )
        return CalculatedSummary(
            mode="monthly",
            months=0,
            finish_date=scenario.target_date,
            required_monthly_contribution=0.0,
            total_contributions=0.0,
            total_interest=0.0,
            projection=[],
            inflation=inflation,
        )

    if scenario.mode == "time":
        return _time_to_goal(scenario, today, monthly_rate, inflation_rate)
    return _contribution_for_date(scenario, today, monthly_rate, inflation_rate)


def _time_to_goal(
    scenario: ScenarioInput,
    today: dt.date,
    monthly_rate: float,
    inflation_rate: Optional[float],
) -> Optional[CalculatedSummary]:
    goal = scenario.goal_amount
    current = scenario.current_savings
    contribution = scenario.monthly_contribution or 0.0

    if monthly_rate == 0 and contribution <= 0:
        logger.debug("No growth and no contribution; goal cannot be reached")
        return None

    months_needed = solve_months(goal, current, contribution, monthly_rate)
    if months_needed is None:
        logger.debug("Closed-form month count is not reachable")
        return None
    if months_needed > MAX_MONTHS:
        logger.debug("Solved %d months exceeds the %d month horizon", months_needed, MAX_MONTHS)
        return None

    projection = generate_projection(months_needed, current, contribution, monthly_rate, goal, today)
    total_contributions, total_interest = accumulate(projection)
    ending = projection[-1].ending_balance if projection else current
    logger.debug("Goal reached in %d months (%d projection rows)", months_needed, len(projection))

    return CalculatedSummary(
        mode="time",
        months=months_needed,
        finish_date=add_months(today, months_needed),
        total_contributions=total_contributions,
        total_interest=total_interest,
        projection=projection,
        inflation=resolve_inflation(
            goal, ending, inflation_rate, months_needed, total_contributions, total_interest
        ),
    )


def _contribution_for_date(
    scenario: ScenarioInput,
    today: dt.date,
    monthly_rate: float,
    inflation_rate: Optional[float],
) -> Optional[CalculatedSummary]:
    goal = scenario.goal_amount
    current = scenario.current_savings
    target = scenario.target_date

    if target is None:
        logger.debug("Target date missing")
        return None

    months = months_between(today, target)
    if months <= 0 or months > MAX_MONTHS:
        logger.debug("Target date is %d months away; outside 1..%d", months, MAX_MONTHS)
        return None

    contribution = solve_contribution(goal, current, months, monthly_rate)
    if contribution is None:
        logger.debug("No non-negative level contribution reaches the goal")
        return None

    projection = generate_projection(
        months, current, contribution, monthly_rate, goal, today, allow_over_goal=True
    )
    total_contributions, total_interest = accumulate(projection)
    ending = projection[-1].ending_balance if projection else current
    logger.debug("Need %.2f per month over %d months", contribution, months)

    return CalculatedSummary(
        mode="monthly",
        months=months,
        finish_date=target,
        required_monthly_contribution=contribution,
        total_contributions=total_contributions,
        total_interest=total_interest,
        projection=projection,
        inflation=resolve_inflation(
            goal, ending, inflation_rate, months, total_contributions, total_interest
        ),
    )
