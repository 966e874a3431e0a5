"""CSV export of parsed transactions, and re-import of such exports.

The export layout is ``Date,Time,Gross,Fee,Net,Category,Description`` with
amounts rendered as the batch's currency symbol plus two decimals. Quoting
follows RFC 4180 via the stdlib :mod:`csv` module, so descriptions (and the
comma inside dates like ``Oct 8, 2025``) survive a round trip.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from io import StringIO

from .categories import resolve_category
from .config import DEFAULT_SETTINGS, Settings
from .currency import detect_currency, format_amount, has_numeric_token
from .logging_setup import get_logger
from .models import ParseResult, Transaction
from .parser import parse_line

_LOG = get_logger("chatter_earnings.export")

CSV_HEADERS: tuple[str, ...] = ("Date", "Time", "Gross", "Fee", "Net", "Category", "Description")


def export_csv(transactions: Iterable[Transaction], currency: str) -> str:
    """Serialize ``transactions`` to CSV text (``\\n`` line endings, no
    trailing newline)."""

    with StringIO() as buf:
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for t in transactions:
            writer.writerow(
                [
                    t.date,
                    t.time,
                    format_amount(t.gross, currency),
                    format_amount(t.fee, currency),
                    format_amount(t.net, currency),
                    t.category,
                    t.description,
                ]
            )
        return buf.getvalue().rstrip("\n")


def _row_to_line(row: dict[str, str]) -> str:
    # Rebuild the fee-bearing ledger layout from the exported columns.
    parts = [(row.get(h) or "").strip() for h in ("Date", "Time", "Gross", "Fee", "Net")]
    description = " ".join((row.get("Description") or "").split())
    return " ".join([*parts, description])


def import_csv(csv_text: str, *, settings: Settings | None = None) -> ParseResult:
    """Read a file produced by :func:`export_csv` back into transactions.

    Each row is rebuilt into a ledger line and parsed with the same rules as
    pasted input, so amounts, fee, category and hour come out as they would
    from the original paste. A row whose ``Category`` is a manual label other
    than the automatic one keeps that label (it was a user override). Rows
    that no longer parse are returned in ``skipped_lines`` as rebuilt lines.

    Raises ``csv.Error`` when the header lacks any exported column.
    """

    s = settings or DEFAULT_SETTINGS
    currency = detect_currency(csv_text or "", s.default_currency)
    transactions: list[Transaction] = []
    skipped: list[str] = []

    with StringIO(csv_text or "") as f:
        reader = csv.DictReader(f)
        missing = [h for h in CSV_HEADERS if h not in (reader.fieldnames or [])]
        if missing:
            raise csv.Error(
                "CSV header mismatch for transaction export. Missing columns: "
                + ", ".join(missing)
            )
        for row in reader:
            line = _row_to_line(row)
            tx = parse_line(line, currency, settings=s)
            if tx is None:
                if has_numeric_token(line):
                    _LOG.debug("skipping unparsable export row: %r", line)
                    skipped.append(line)
                continue
            exported = resolve_category(row.get("Category") or "")
            if exported is not None and exported != tx.category:
                tx = tx.with_category(exported)
            transactions.append(tx)

    return ParseResult(
        transactions=tuple(transactions),
        skipped_lines=tuple(skipped),
        currency=currency,
    )


__all__ = ["CSV_HEADERS", "export_csv", "import_csv"]
