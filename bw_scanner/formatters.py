"""
Output formatting for scan results.

This is the presentation boundary: typed records become the positional
rows the HTML page indexes into, and the plain-text report printed by the
CLI. Column order follows DRAWDOWN_HEADERS and OPTION_HEADERS exactly.
"""

from typing import Any, Dict, List

from .constants import DRAWDOWN_HEADERS, OPTION_HEADERS, SEPARATOR_CELL, SUMMARY_LABEL
from .models import CallOption, DrawdownFailure, DrawdownResult, OptionTable, ScanResult

RANK_TITLES = ["Closest", "2nd Closest", "3rd Closest"]


def drawdown_row(result: DrawdownResult) -> List[Any]:
    """Positional drawdown row; failures keep the ticker and carry the reason in the last column."""
    if isinstance(result, DrawdownFailure):
        return [result.ticker, "ERROR", "-", "-", "-", result.reason]

    return [
        result.ticker,
        round(result.current_price, 2),
        round(result.raw_high, 2),
        round(result.smoothed_high, 2),
        f"{result.drawdown_pct:.2f}%",
        result.status.value,
    ]


def option_row(option: CallOption) -> List[Any]:
    """Positional option row."""
    return [
        option.expiration.isoformat(),
        option.ticker,
        round(option.spot, 2),
        option.strike,
        round(option.premium, 2),
        f"{option.pct_moneyness:.1f}%",
        round(option.breakeven, 2),
        f"{option.cash_yield:.1f}%",
        f"{option.assigned_gain:.1f}%",
        "Yes" if option.works else "No",
    ]


def table_rows(table: OptionTable) -> List[List[Any]]:
    """
    Positional rows for one bucket, followed by the separator and summary rows.

    An empty table stays empty.
    """
    rows = [option_row(option) for option in table.rows]
    if not rows or table.average_return is None:
        return rows

    width = len(OPTION_HEADERS)
    rows.append([SEPARATOR_CELL] * width)
    rows.append([SUMMARY_LABEL, f"{table.average_return:.1f}%"] + [""] * (width - 2))
    return rows


def _table_keys(prefix: str, tables: List[OptionTable]) -> Dict[str, List[List[Any]]]:
    return {f"{prefix}{i}": table_rows(table) for i, table in enumerate(tables, start=1)}


def scan_result_to_dict(result: ScanResult) -> Dict[str, Any]:
    """
    Scan result in the shape the presentation layer consumes.

    A halted scan carries only the status and empty tables.
    """
    payload: Dict[str, Any] = {
        "vixStatus": result.vix_status,
        "halt": result.halt,
        "drawdownTable": [drawdown_row(r) for r in result.drawdown_table],
    }
    payload.update(_table_keys("otm", result.otm_tables))
    payload.update(_table_keys("itm", result.itm_tables))

    if result.halt:
        return payload

    payload["headers"] = list(OPTION_HEADERS)
    payload["drawdownHeaders"] = list(DRAWDOWN_HEADERS)
    payload["runDate"] = result.run_date
    return payload


def render_table(title: str, headers: List[str], rows: List[List[Any]]) -> str:
    """Fixed-width text table, or a "No data available." note when empty."""
    if not rows:
        return f"{title}\nNo data available."

    cells = [[str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        if row[0] == SEPARATOR_CELL:
            continue
        for i, cell in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], len(cell))

    def line(row: List[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()

    out = [title, line(headers), line(["-" * w for w in widths])]
    for row in cells:
        if row[0] == SEPARATOR_CELL:
            out.append(line(["-" * w for w in widths]))
        else:
            out.append(line(row))
    return "\n".join(out)


def format_report(result: ScanResult) -> str:
    """Plain-text report of a scan, in the same order as the HTML page."""
    if result.halt:
        return result.vix_status

    sections = [
        f"Run Date (PT): {result.run_date}",
        result.vix_status,
        render_table(
            "BW Ticker Drawdown Check",
            DRAWDOWN_HEADERS,
            [drawdown_row(r) for r in result.drawdown_table],
        ),
    ]

    for side, tables in (("OTM", result.otm_tables), ("ITM", result.itm_tables)):
        for i, table in enumerate(tables):
            rank = RANK_TITLES[i] if i < len(RANK_TITLES) else f"{i + 1}th Closest"
            sections.append(render_table(f"{rank} {side}", OPTION_HEADERS, table_rows(table)))

    return "\n\n".join(sections)
