from savings_core.services.calculator import calculate_savings_scenario  # noqa: F401
from savings_core.services.inflation import resolve_inflation  # noqa: F401
from savings_core.services.months import add_months, months_between  # noqa: F401
from savings_core.services.projection import accumulate, generate_projection  # noqa: F401
from savings_core.services.rates import effective_monthly_inflation, effective_monthly_rate  # noqa: F401
from savings_core.services.solver import solve_contribution, solve_months  # noqa: F401

__all__ = [
    "calculate_savings_scenario",
    "resolve_inflation",
    "add_months",
    "months_between",
    "accumulate",
    "generate_projection",
    "effective_monthly_inflation",
    "effective_monthly_rate",
    "solve_contribution",
    "solve_months",
]
