"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

import click

from pos.domain.exceptions import DomainException
from pos.domain.model.value_objects import CENTS
from pos.domain.service.reporting import ReportWindow
from pos.infrastructure.bootstrap import Container

DATE_INPUT = click.DateTime(formats=["%Y-%m-%d"])
DEFAULT_WINDOW_DAYS = 30

pass_container = click.make_pass_decorator(Container)


def window_options(func: Callable) -> Callable:
    """Add ``--start`` / ``--end`` (YYYY-MM-DD, inclusive) to a command."""
    func = click.option("--end", type=DATE_INPUT, default=None, help="Last day (YYYY-MM-DD).")(func)
    func = click.option("--start", type=DATE_INPUT, default=None, help="First day (YYYY-MM-DD).")(func)
    return func


def build_window(
    start: datetime | None,
    end: datetime | None,
    default_days: int | None = DEFAULT_WINDOW_DAYS,
) -> ReportWindow | None:
    """Turn the parsed options into a window.

    With neither bound given, the window is the last ``default_days`` days
    (or no window at all when ``default_days`` is None).
    """
    if start is None and end is None:
        return ReportWindow.last_days(default_days) if default_days else None
    end_day = end.date() if end else date.today()
    start_day = start.date() if start else end_day - timedelta(days=(default_days or 1) - 1)
    try:
        return ReportWindow(start_day, end_day)
    except DomainException as exc:
        raise click.BadParameter(str(exc))


def format_amount(symbol: str, value: Decimal) -> str:
    """Format a report figure, which unlike Money may be negative."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value).quantize(CENTS, rounding=ROUND_HALF_UP):.2f}"
