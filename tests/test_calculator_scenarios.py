import datetime as dt

from savings_core.domain.models import MAX_MONTHS, ScenarioInput
from savings_core.services.calculator import calculate_savings_scenario

START = dt.date(2024, 1, 1)


def _time(goal: float, current: float, monthly: float, apr: float, compounding: str = "monthly", inflation=None):
    return calculate_savings_scenario(
        ScenarioInput(
            mode="time",
            goal_amount=goal,
            current_savings=current,
            monthly_contribution=monthly,
            apr=apr,
            compounding=compounding,
            inflation_rate=inflation,
            start_date=START,
        )
    )


def _monthly(goal: float, current: float, months_ahead: int, apr: float, compounding: str = "monthly", inflation=None):
    year, month = divmod(START.month - 1 + months_ahead, 12)
    return calculate_savings_scenario(
        ScenarioInput(
            mode="monthly",
            goal_amount=goal,
            current_savings=current,
            target_date=dt.date(START.year + year, month + 1, 1),
            apr=apr,
            compounding=compounding,
            inflation_rate=inflation,
            start_date=START,
        )
    )


def test_zero_rate_time_to_goal_is_exact():
    result = _time(10_000, 0, 250, 0)
    assert result is not None
    assert result.months == 40
    assert len(result.projection) == 40
    assert result.finish_date == dt.date(2027, 5, 1)
    assert abs(result.total_contributions - 10_000) < 1e-9
    assert result.total_interest == 0
    assert result.required_monthly_contribution is None


def test_small_rate_time_to_goal_range():
    result = _time(10_000, 2_000, 200, 3)
    assert result is not None
    assert 39 <= result.months <= 41


def test_goal_already_met_monthly_mode():
    result = _monthly(5_000, 5_500, 6, 3)
    assert result is not None
    assert result.months == 0
    assert result.required_monthly_contribution == 0
    assert result.projection == []
    assert result.total_contributions == 0
    assert result.finish_date == dt.date(2024, 7, 1)


def test_goal_already_met_time_mode_finishes_today():
    result = _time(5_000, 5_500, 100, 3, inflation=2)
    assert result is not None
    assert result.months == 0
    assert result.finish_date == START
    assert result.inflation is not None
    # nothing elapsed, so real and nominal figures coincide
    assert result.inflation.real_ending_balance == 5_500
    assert result.inflation.real_goal_value == 5_000


def test_zero_rate_contribution_solve():
    result = _monthly(20_000, 1_000, 24, 0)
    assert result is not None
    assert result.months == 24
    assert abs(result.required_monthly_contribution - 791.67) < 0.5
    assert len(result.projection) == 24


def test_positive_rate_contribution_solve():
    result = _monthly(20_000, 1_000, 24, 5)
    assert result is not None
    assert 780 <= result.required_monthly_contribution <= 790
    assert abs(result.projection[-1].ending_balance - 20_000) < 1e-6


def test_no_growth_and_no_contribution_is_infeasible():
    assert _time(5_000, 100, 0, 0) is None


def test_interest_only_growth_needs_a_starting_balance():
    assert _time(5_000, 0, 0, 5) is None
    result = _time(5_000, 4_000, 0, 12, compounding="yearly")
    assert result is not None
    # yearly compounding: monthly factor is 1.12, so 4000 -> 5000 in two steps
    assert result.months == 2
    assert len(result.projection) == 2
    assert result.total_contributions == 0
    assert result.projection[-1].ending_balance >= 5_000


def test_horizon_ceiling():
    # 1 per month at 0% would take 1000 months
    assert _time(1_000, 0, 1, 0) is None
    assert _time(600, 0, 1, 0).months == MAX_MONTHS


def test_target_date_must_be_in_future():
    assert _monthly(10_000, 0, 0, 3) is None
    assert _monthly(10_000, 0, -3, 3) is None
    assert _monthly(10_000, 0, MAX_MONTHS + 1, 3) is None


def test_missing_target_date_is_infeasible():
    result = calculate_savings_scenario(
        ScenarioInput(mode="monthly", goal_amount=10_000, current_savings=0, start_date=START)
    )
    assert result is None


def test_overshoot_with_zero_contribution_is_infeasible():
    # 9000 alone outgrows 10000 well before the target date
    assert _monthly(10_000, 9_000, 24, 12, compounding="yearly") is None


def test_inflation_discounts_final_balance():
    result = _monthly(15_000, 5_000, 36, 3, inflation=2)
    assert result is not None and result.inflation is not None
    assert result.inflation.real_ending_balance < result.projection[-1].ending_balance
    assert result.inflation.real_goal_value < 15_000
    assert result.inflation.real_contributions < result.total_contributions


def test_no_inflation_requested_means_no_breakdown():
    result = _monthly(15_000, 5_000, 36, 3)
    assert result.inflation is None


def test_zero_inflation_keeps_nominal_values():
    result = _time(10_000, 0, 250, 0, inflation=0)
    assert result.inflation is not None
    assert result.inflation.real_ending_balance == result.projection[-1].ending_balance


def test_months_do_not_increase_with_contribution():
    months = [_time(20_000, 1_000, c, 5).months for c in (50, 100, 200, 400, 800, 1_600)]
    assert months == sorted(months, reverse=True)


def test_same_input_same_result():
    first = _monthly(15_000, 5_000, 36, 3, inflation=2)
    second = _monthly(15_000, 5_000, 36, 3, inflation=2)
    assert first == second


def test_totals_match_projection_sums():
    result = _time(12_000, 500, 300, 4, compounding="quarterly")
    assert abs(result.total_contributions - sum(r.contribution for r in result.projection)) < 1e-9
    assert abs(result.total_interest - sum(r.interest_earned for r in result.projection)) < 1e-9
