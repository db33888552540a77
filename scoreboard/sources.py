# scoreboard/sources.py
"""
Data source adapters for the scoreboard.

Two interchangeable strategies:
- a published CSV export URL (public "Publish to web" link), parsed with scoreboard.table
- the Google Sheets values API (api key + sheet id + A1 range), JSON {"values": [[...]]}

Both end in the same header resolution and return a list of RawRecord.
An unusable header (no Name or no Sum column) is an empty result, not an error.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

import requests

from config import (
    AVG_COL,
    COUNT_COL,
    NAME_COL,
    REQUEST_TIMEOUT_SECONDS,
    SCORE_COL,
    SHEETS_API_BASE,
    SourceConfig,
)
from scoreboard.errors import ConfigurationError, TransportError
from scoreboard.models import ColumnMapping, RawRecord
from scoreboard.table import parse_table

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


# ----------------------------
# Header resolution
# ----------------------------

def _norm(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


def resolve_columns(header: Sequence[Any]) -> ColumnMapping:
    """Locate the logical columns in a header row. Missing columns map to None."""
    positions = {}
    for i, title in enumerate(header):
        positions[_norm(title)] = i
    return ColumnMapping(
        name=positions.get(_norm(NAME_COL)),
        sum=positions.get(_norm(SCORE_COL)),
        count=positions.get(_norm(COUNT_COL)),
        avg=positions.get(_norm(AVG_COL)),
    )


def _cell(row: Sequence[Any], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row) or row[idx] is None:
        return ""
    return str(row[idx]).strip()


def rows_to_records(rows: Sequence[Sequence[Any]]) -> List[RawRecord]:
    """Turn header + data rows into RawRecords. Short rows read as empty cells."""
    if not rows:
        return []
    header, data = rows[0], rows[1:]
    cols = resolve_columns(header)
    if not cols.usable:
        logger.info("Header %r has no %s/%s column; treating as no data", list(header), NAME_COL, SCORE_COL)
        return []
    return [
        RawRecord(
            name=_cell(r, cols.name),
            sum=_cell(r, cols.sum),
            count=_cell(r, cols.count),
            avg=_cell(r, cols.avg),
        )
        for r in data
    ]


# ----------------------------
# HTTP
# ----------------------------

def _get(url: str, session: Optional[requests.Session], label: str, **kwargs) -> requests.Response:
    http = session or requests
    logger.debug("Fetching %s: %s", label, url)
    try:
        resp = http.get(url, headers=NO_CACHE_HEADERS, timeout=REQUEST_TIMEOUT_SECONDS, **kwargs)
    except requests.RequestException as e:
        raise TransportError(f"{label} fetch failed: {e}") from e
    if not 200 <= resp.status_code < 300:
        raise TransportError(f"{label} fetch failed: {resp.status_code}", status_code=resp.status_code)
    return resp


def fetch_export_rows(csv_url: str, session: Optional[requests.Session] = None) -> List[List[str]]:
    """Download a published CSV export and parse it into rows."""
    resp = _get(csv_url, session, "CSV")
    # Sheets exports are UTF-8 but often omit the charset header
    if resp.encoding is None or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = "utf-8"
    return parse_table(resp.text)


def sheets_values_url(sheet_id: str, cell_range: str) -> str:
    return f"{SHEETS_API_BASE}/{quote(sheet_id, safe='')}/values/{quote(cell_range, safe='')}"


def fetch_api_rows(
    api_key: str,
    sheet_id: str,
    cell_range: str,
    session: Optional[requests.Session] = None,
) -> List[List[str]]:
    """Read a range through the Sheets values API. A missing 'values' key is an empty sheet."""
    resp = _get(sheets_values_url(sheet_id, cell_range), session, "Sheets API", params={"key": api_key})
    try:
        payload = resp.json()
    except ValueError as e:
        raise TransportError(f"Sheets API returned malformed JSON: {e}") from e
    if not isinstance(payload, dict):
        raise TransportError("Sheets API returned malformed JSON: expected an object")

    values = payload.get("values") or []
    return [[("" if c is None else str(c)) for c in row] for row in values if isinstance(row, list)]


# ----------------------------
# Strategy selection
# ----------------------------

def fetch_records(source: SourceConfig, session: Optional[requests.Session] = None) -> List[RawRecord]:
    """Fetch and normalise records. The CSV URL wins when both sources are configured."""
    if source.csv_url:
        rows = fetch_export_rows(source.csv_url, session)
    elif source.api_key and source.sheet_id and source.range:
        rows = fetch_api_rows(source.api_key, source.sheet_id, source.range, session)
    else:
        raise ConfigurationError("Provide csv_url OR api_key+sheet_id+range")
    return rows_to_records(rows)
