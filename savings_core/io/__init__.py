from savings_core.io.config import (  # noqa: F401
    load_scenario,
    parse_amount,
    parse_target_month,
    scenario_from_dict,
)
from savings_core.io.report import build_pdf, summarise_projection, write_csv  # noqa: F401
from savings_core.io.state import JsonStateStore, load_state, persist_state  # noqa: F401

__all__ = [
    "load_scenario",
    "parse_amount",
    "parse_target_month",
    "scenario_from_dict",
    "build_pdf",
    "summarise_projection",
    "write_csv",
    "JsonStateStore",
    "load_state",
    "persist_state",
]
