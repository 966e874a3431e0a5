"""CLI for the ``chatter_earnings`` package.

This module exposes callable command handlers (``cmd_parse``,
``cmd_stats``, ``cmd_export_csv``, ``cmd_daily_sales``) and a Typer-based
console interface. Environment variables are loaded from a local ``.env``
using ``python-dotenv`` before settings are resolved. Business logic lives in
``chatter_earnings.api`` and related modules.
"""

from __future__ import annotations

import json
import sys
from datetime import date
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .config import Settings, load_settings
from .logging_setup import configure_logging, get_logger

_LOG = get_logger("chatter_earnings.cli")


# ---- Small module-level helpers used by CLI commands -------------------------


def _read_ledger(input_path: str) -> str | None:
    """Return the ledger text, or ``None`` after printing an error."""

    if input_path == "-":
        return sys.stdin.read()
    try:
        return Path(input_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Error: File not found: {input_path}", file=sys.stderr)
    except PermissionError:
        print(f"Error: Permission denied: {input_path}", file=sys.stderr)
    except UnicodeDecodeError as e:
        print(f"Error: '{input_path}' is not valid UTF-8: {e}", file=sys.stderr)
    return None


def _settings() -> Settings | None:
    """Load settings and route package logs to stderr at their level."""

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return None
    configure_logging(settings.log_level)
    return settings


def cmd_parse(input_path: str) -> int:
    """Print one tab-separated line per parsed transaction.

    Columns: date, time, gross, fee, net, category, hour, description.
    Skipped lines and a one-line summary go to stderr.
    """

    from .currency import format_amount
    from .parser import parse_transactions

    settings = _settings()
    text = _read_ledger(input_path)
    if settings is None or text is None:
        return 1

    result = parse_transactions(text, settings=settings)
    for t in result.transactions:
        print(
            "\t".join(
                [
                    t.date,
                    t.time,
                    format_amount(t.gross, result.currency),
                    format_amount(t.fee, result.currency),
                    format_amount(t.net, result.currency),
                    t.category,
                    str(t.hour),
                    t.description,
                ]
            )
        )
    for line in result.skipped_lines:
        print(f"Skipped: {line}", file=sys.stderr)

    n, k = len(result.transactions), len(result.skipped_lines)
    summary = f"Parsed {n} transaction{'s' if n != 1 else ''}"
    if k:
        summary += f", skipped {k} invalid line{'s' if k != 1 else ''}"
    print(summary + ".", file=sys.stderr)
    return 0


def cmd_stats(input_path: str) -> int:
    """Print the full earnings report as JSON."""

    from .api import analyze_ledger, report_to_dict

    settings = _settings()
    text = _read_ledger(input_path)
    if settings is None or text is None:
        return 1

    report = analyze_ledger(text, settings=settings)
    print(json.dumps(report_to_dict(report), indent=2))
    return 0


def cmd_export_csv(input_path: str, output_path: str | None = None) -> int:
    """Write the CSV export to ``output_path`` or stdout."""

    from .export import export_csv
    from .parser import parse_transactions

    settings = _settings()
    text = _read_ledger(input_path)
    if settings is None or text is None:
        return 1

    result = parse_transactions(text, settings=settings)
    if not result.transactions:
        print("Error: no transactions to export.", file=sys.stderr)
        return 1

    csv_text = export_csv(result.transactions, result.currency)
    if output_path is None:
        print(csv_text)
        return 0
    try:
        Path(output_path).write_text(csv_text + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error: failed to write '{output_path}': {e}", file=sys.stderr)
        return 1
    _LOG.info("exported %d transaction(s) to %s", len(result.transactions), output_path)
    return 0


def cmd_daily_sales(
    input_path: str,
    *,
    model_id: str,
    model_name: str,
    sale_date: str | None = None,
) -> int:
    """Print the per-day rollup payloads as JSON."""

    from .daily_sales import build_daily_sales
    from .parser import parse_transactions

    day: date | None = None
    if sale_date is not None:
        try:
            day = date.fromisoformat(sale_date)
        except ValueError:
            print(f"Error: --sale-date must be YYYY-MM-DD, got {sale_date!r}.", file=sys.stderr)
            return 1

    settings = _settings()
    text = _read_ledger(input_path)
    if settings is None or text is None:
        return 1

    result = parse_transactions(text, settings=settings)
    try:
        rollups = build_daily_sales(
            result.transactions, model_id=model_id, model_name=model_name, sale_date=day
        )
    except ValueError as e:
        hint = "pass --sale-date to book all transactions on one day"
        print(f"Error: {e} ({hint})", file=sys.stderr)
        return 1

    payload = [
        {**r.model_dump(mode="json"), "week_start": r.week_start.isoformat()} for r in rollups
    ]
    print(json.dumps(payload, indent=2))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Parse pasted payment-platform ledgers into categorized transactions "
        "and earnings totals. Loads settings overrides from a local .env."
    ),
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults).
INPUT_OPTION: OptionInfo = typer.Option(
    ...,
    "--input",
    "-i",
    help="Path to the pasted ledger text, or '-' to read stdin.",
)


@app.command("parse")
def parse_cmd(input_path: str = INPUT_OPTION) -> None:
    """Print parsed transactions as tab-separated lines."""

    raise typer.Exit(cmd_parse(input_path))


@app.command("stats")
def stats_cmd(input_path: str = INPUT_OPTION) -> None:
    """Print category totals, session counts and hourly breakdowns as JSON."""

    raise typer.Exit(cmd_stats(input_path))


@app.command("export-csv")
def export_csv_cmd(
    input_path: str = INPUT_OPTION,
    output_path: str | None = typer.Option(
        None, "--output", "-o", help="Write the CSV here instead of stdout."
    ),
) -> None:
    """Export parsed transactions as CSV."""

    raise typer.Exit(cmd_export_csv(input_path, output_path))


@app.command("daily-sales")
def daily_sales_cmd(
    input_path: str = INPUT_OPTION,
    model_id: str = typer.Option(..., help="Identifier of the model the sales belong to."),
    model_name: str = typer.Option(..., help="Display name of the model."),
    sale_date: str | None = typer.Option(
        None, help="Book every transaction on this day (YYYY-MM-DD)."
    ),
) -> None:
    """Print per-day rollups for the sheet store as JSON."""

    raise typer.Exit(
        cmd_daily_sales(input_path, model_id=model_id, model_name=model_name, sale_date=sale_date)
    )


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current directory before any command runs.

    Variables already set in the environment are not overridden.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m chatter_earnings.cli`
    app()
