"""Tests for the CSV-export and Sheets-API source adapters."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from config import SourceConfig
from scoreboard.errors import ConfigurationError, TransportError
from scoreboard.models import RawRecord
from scoreboard.sources import (
    fetch_api_rows,
    fetch_export_rows,
    fetch_records,
    resolve_columns,
    rows_to_records,
    sheets_values_url,
)


def _response(status=200, text="", payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400  # same rule as requests.Response.ok
    resp.text = text
    resp.encoding = "utf-8"
    if payload is None:
        resp.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    else:
        resp.json.return_value = payload
    return resp


def _session(resp):
    session = MagicMock()
    session.get.return_value = resp
    return session


# ----------------------------
# Header resolution
# ----------------------------

def test_resolve_columns_case_and_whitespace_insensitive():
    cols = resolve_columns(["  NAME ", "sum", "Count", "aVg"])
    assert (cols.name, cols.sum, cols.count, cols.avg) == (0, 1, 2, 3)
    assert cols.usable


def test_resolve_columns_missing_is_none():
    cols = resolve_columns(["Name", "Total"])
    assert cols.name == 0
    assert cols.sum is None
    assert not cols.usable


def test_rows_to_records_trims_and_fills_missing_cells():
    rows = [["Name", "Sum", "Count", "Avg"], ["  Alice ", " 42", "3", "14 "], ["Bob", "7"]]
    assert rows_to_records(rows) == [
        RawRecord(name="Alice", sum="42", count="3", avg="14"),
        RawRecord(name="Bob", sum="7", count="", avg=""),
    ]


def test_missing_optional_column_gives_empty_avg():
    records = rows_to_records([["Name", "Sum", "Count"], ["A", "1", "2"], ["B", "3", "4"]])
    assert [r.avg for r in records] == ["", ""]


def test_missing_required_column_gives_no_records():
    assert rows_to_records([["Name", "Count", "Avg"], ["A", "1", "2"]]) == []
    assert rows_to_records([["Sum"], ["1"]]) == []


def test_header_only_and_empty():
    assert rows_to_records([["Name", "Sum"]]) == []
    assert rows_to_records([]) == []


# ----------------------------
# CSV export
# ----------------------------

def test_fetch_export_rows_parses_body_and_disables_cache():
    session = _session(_response(text='Name,Sum\n"Smith, Jr.",10\n'))
    rows = fetch_export_rows("https://example.test/pub?output=csv", session)

    assert rows == [["Name", "Sum"], ["Smith, Jr.", "10"]]
    args, kwargs = session.get.call_args
    assert args[0] == "https://example.test/pub?output=csv"
    assert kwargs["headers"]["Cache-Control"] == "no-cache"
    assert kwargs["timeout"]


def test_fetch_export_rows_non_success_status():
    session = _session(_response(status=404))
    with pytest.raises(TransportError) as exc:
        fetch_export_rows("https://example.test/missing", session)
    assert "404" in str(exc.value)
    assert exc.value.status_code == 404


def test_fetch_export_rows_unfollowed_redirect_is_failure():
    session = _session(_response(status=304, text="Name,Sum\nStale,1\n"))
    with pytest.raises(TransportError) as exc:
        fetch_export_rows("https://example.test/pub?output=csv", session)
    assert str(exc.value) == "CSV fetch failed: 304"


def test_fetch_export_rows_network_failure():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(TransportError) as exc:
        fetch_export_rows("https://example.test/", session)
    assert "CSV fetch failed" in str(exc.value)
    assert exc.value.status_code is None


def test_fetch_export_rows_defaults_to_requests():
    with patch("scoreboard.sources.requests.get", return_value=_response(text="Name,Sum\nA,1\n")) as get:
        rows = fetch_export_rows("https://example.test/")
    assert rows[1] == ["A", "1"]
    get.assert_called_once()


# ----------------------------
# Sheets API
# ----------------------------

def test_sheets_values_url_encodes_range():
    url = sheets_values_url("abc123", "Sheet1!A1:D")
    assert url == "https://sheets.googleapis.com/v4/spreadsheets/abc123/values/Sheet1%21A1%3AD"


def test_fetch_api_rows_reads_values_and_sends_key():
    payload = {"range": "Sheet1!A1:D3", "values": [["Name", "Sum"], ["Alice", 42]]}
    session = _session(_response(payload=payload))

    rows = fetch_api_rows("KEY", "abc123", "Sheet1!A1:D", session)

    assert rows == [["Name", "Sum"], ["Alice", "42"]]
    _, kwargs = session.get.call_args
    assert kwargs["params"] == {"key": "KEY"}


def test_fetch_api_rows_missing_values_is_empty():
    session = _session(_response(payload={"range": "Sheet1!A1:D"}))
    assert fetch_api_rows("KEY", "abc123", "Sheet1!A1:D", session) == []


def test_fetch_api_rows_malformed_json():
    session = _session(_response(text="<html>oops</html>"))
    with pytest.raises(TransportError) as exc:
        fetch_api_rows("KEY", "abc123", "Sheet1!A1:D", session)
    assert "malformed JSON" in str(exc.value)


def test_fetch_api_rows_non_success_status():
    session = _session(_response(status=403, payload={"error": {}}))
    with pytest.raises(TransportError) as exc:
        fetch_api_rows("KEY", "abc123", "Sheet1!A1:D", session)
    assert str(exc.value) == "Sheets API fetch failed: 403"


# ----------------------------
# Strategy selection
# ----------------------------

def test_csv_url_wins_over_api_credentials():
    source = SourceConfig(csv_url="https://example.test/csv", api_key="K", sheet_id="S", range="A1:D")
    session = _session(_response(text="Name,Sum,Count,Avg\nAlice,42,3,14\n"))

    records = fetch_records(source, session)

    assert records == [RawRecord(name="Alice", sum="42", count="3", avg="14")]
    assert session.get.call_args[0][0] == "https://example.test/csv"


def test_api_strategy_used_without_csv_url():
    source = SourceConfig(api_key="K", sheet_id="S", range="A1:D")
    session = _session(_response(payload={"values": [["name", "SUM"], ["Bob", "5"]]}))

    records = fetch_records(source, session)

    assert records == [RawRecord(name="Bob", sum="5")]
    assert "/S/values/A1%3AD" in session.get.call_args[0][0]


@pytest.mark.parametrize(
    "source",
    [SourceConfig(), SourceConfig(api_key="K", sheet_id="S"), SourceConfig(sheet_id="S", range="A1:D")],
)
def test_incomplete_config_is_configuration_error(source):
    with pytest.raises(ConfigurationError):
        fetch_records(source, MagicMock())
