"""Tests for ui/log_utils.py and ui/dashboard.py"""

import json

import pytest

from core.config import Config
from ui import dashboard as dashboard_module
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, mask, redact_headers, write_cli_log, write_incoming_log


def test_redact_headers_masks_credentials():
    redacted = redact_headers(
        {
            "Authorization": "Bearer 0123456789abcdef",
            "X-Api-Key": "short",
            "Accept": "application/json",
        }
    )

    assert redacted == {
        "Authorization": "Bearer...cdef",
        "X-Api-Key": "***",
        "Accept": "application/json",
    }


def test_mask_short_values():
    assert mask("abc") == "***"


def test_write_incoming_log_redacts(tmp_path):
    path = write_incoming_log(
        "GET", "/categories", {"authorization": "Bearer client-supplied"}, None, log_root=tmp_path
    )

    payload = json.loads(path.read_text())
    assert path.parent == tmp_path / "incoming"
    assert payload["method"] == "GET"
    assert payload["headers"]["authorization"] == "Bearer...lied"


def test_clear_logs(tmp_path):
    write_incoming_log("GET", "/a", {}, None, log_root=tmp_path)
    write_incoming_log("GET", "/b", {}, None, log_root=tmp_path)

    assert clear_logs(tmp_path) == 2
    assert clear_logs(tmp_path) == 0


def test_write_cli_log_appends(tmp_path):
    log_file = tmp_path / "proxy.log"

    write_cli_log("ERROR", "boom", log_file=log_file, route="YNAB", status=502)
    write_cli_log("FORWARDED", "GET /categories", log_file=log_file)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("ERROR: boom route=YNAB status=502")
    assert lines[1].endswith("FORWARDED: GET /categories")


@pytest.fixture
def cli_lines(monkeypatch):
    lines = []
    monkeypatch.setattr(
        dashboard_module,
        "write_cli_log",
        lambda level, message, **extra: lines.append((level, message, extra)),
    )
    return lines


def test_dashboard_counts_requests(cli_lines):
    dashboard = Dashboard(Config())

    dashboard.log_request("OPTIONS", "/categories", 204, outcome="preflight")
    dashboard.log_request("GET", "/categories", 200, outcome="forwarded")
    dashboard.log_error("YNAB", 502, "ConnectError: refused")

    assert dashboard._request_count == {"forwarded": 1, "preflight": 1, "errors": 1}
    assert [line[0] for line in cli_lines] == ["PREFLIGHT", "FORWARDED", "ERROR"]
    assert cli_lines[2][2] == {"route": "YNAB", "status": 502}


def test_dashboard_keeps_recent_window(cli_lines):
    dashboard = Dashboard(Config())

    for i in range(15):
        dashboard.log_request("GET", f"/r/{i}", 200, outcome="forwarded")

    assert len(dashboard._recent) == 10
    assert dashboard._recent[0].path == "/r/14"
    assert dashboard._build_layout() is not None
