from __future__ import annotations

import datetime as dt

import pandas as pd


def month_start(date: dt.date) -> dt.date:
    return dt.date(date.year, date.month, 1)


def add_months(date: dt.date, count: int) -> dt.date:
    """
    Shift by whole months. A day that does not exist in the target month is
    clamped to that month's last day (Jan 31 + 1 -> Feb 28/29).
    """
    shifted = pd.Timestamp(date) + pd.DateOffset(months=count)
    return shifted.date()


def months_between(start: dt.date, end: dt.date) -> int:
    """Whole calendar months from start's month to end's month; negative if end is earlier."""
    return (pd.Period(end, freq="M") - pd.Period(start, freq="M")).n
