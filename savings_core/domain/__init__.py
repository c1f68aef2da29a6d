from savings_core.domain.models import (  # noqa: F401
    COMPOUNDING_FREQUENCIES,
    MAX_MONTHS,
    MODES,
    CalculatedSummary,
    InflationBreakdown,
    ProjectionRow,
    ScenarioInput,
)

__all__ = [
    "COMPOUNDING_FREQUENCIES",
    "MAX_MONTHS",
    "MODES",
    "CalculatedSummary",
    "InflationBreakdown",
    "ProjectionRow",
    "ScenarioInput",
]
