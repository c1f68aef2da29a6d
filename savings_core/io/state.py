from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

STATE_ENV_VAR = "BT_SAVINGS_STATE"

DEFAULT_STATE: Dict[str, Any] = {
    "mode": "time",
    "goal_amount": None,
    "current_savings": 0.0,
    "monthly_contribution": None,
    "target_date": "",
    "apr": 0.0,
    "compounding": "monthly",
    "inflation_rate": None,
    "currency": "EUR",
    "locale": "nl-NL",
    "remember_inputs": False,
}


def default_state_path() -> Path:
    override = os.environ.get(STATE_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".budgettools_savings.json"


class JsonStateStore:
    """Key-value store for the last calculator inputs, kept in one JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else default_state_path()

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, state: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(state, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not store inputs at %s: %s", self.path, exc)

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", self.path, exc)


def load_state(store: JsonStateStore, **overrides: Any) -> Dict[str, Any]:
    """Defaults, then caller overrides, then whatever was remembered last time."""
    state = dict(DEFAULT_STATE)
    state.update({k: v for k, v in overrides.items() if v is not None})
    state.update(store.load())
    return state


def persist_state(store: JsonStateStore, state: Dict[str, Any]) -> None:
    if not state.get("remember_inputs"):
        store.clear()
        return
    store.save(state)
