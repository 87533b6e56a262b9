"""Command-line interface for the repurchase client."""

from __future__ import annotations

from contextlib import closing
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import typer

from .config import SOURCES
from .errors import RepurchaseError
from .logging import get_logger
from .models import Transaction
from .runtime import build_runtime

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="Share repurchase disclosures from Nasdaq Nordic")


@app.callback()
def _root() -> None:
    """Share repurchase disclosures from Nasdaq Nordic."""


@app.command("fetch")
def fetch_command(
    source: Optional[str] = typer.Option(
        None,
        "--source",
        help="Data source: 'html' (corporate actions page) or 'json' (yearly API)",
    ),
    days: Optional[int] = typer.Option(
        None,
        "--days",
        min=0,
        help="Fetch the given number of days back from today",
    ),
    start_value: Optional[str] = typer.Option(None, "--start", help="Inclusive start date (YYYY-MM-DD)"),
    end_value: Optional[str] = typer.Option(None, "--end", help="Inclusive end date (YYYY-MM-DD)"),
) -> None:
    if source is not None and source.lower() not in SOURCES:
        raise typer.BadParameter(f"--source must be one of {', '.join(SOURCES)}")
    if days is not None and (start_value or end_value):
        raise typer.BadParameter("--days cannot be combined with --start/--end")

    start = _parse_iso_date(start_value) if start_value else None
    end = _parse_iso_date(end_value) if end_value else None

    runtime = build_runtime(source=source.lower() if source else None)
    with closing(runtime):
        try:
            transactions = runtime.client.get_transactions(start, end, days_back=days)
            for transaction in transactions:
                typer.echo(json.dumps(_to_json(transaction), ensure_ascii=False))
        except RepurchaseError as exc:
            logger.error("fetch_command_failed", error=str(exc))
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc


def _to_json(transaction: Transaction) -> dict:
    return {
        "company": transaction.company,
        "type": transaction.type,
        "date": transaction.date.isoformat(),
        "price": _decimal_str(transaction.price),
        "quantity": _decimal_str(transaction.quantity),
        "value": _decimal_str(transaction.value),
        "comment": transaction.comment,
    }


def _decimal_str(value: Optional[Decimal]) -> Optional[str]:
    if value is None or not value.is_finite():
        return None
    return str(value)


def _parse_iso_date(value: Optional[str]) -> date:
    if value is None:
        raise typer.BadParameter("Date value is required")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter("Date must be in YYYY-MM-DD format") from exc


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
