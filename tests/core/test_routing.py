"""Request Router — verifies the routing table, 404/405 policy and JSON bodies.

Tests cover:
    - Unknown paths → 404 for any method
    - Known paths with a non-GET method → 405
    - /hello name handling (default, explicit, malformed query)
    - /healthz status and RFC3339 time
    - /feature-probe version from APP_VERSION, re-read per call
    - / serves the dashboard HTML
"""

import json
import re
from datetime import datetime, timedelta, timezone

import pytest

from probe_api.core.domain_types import (
    CONTENT_TYPE_HTML, CONTENT_TYPE_JSON, CONTENT_TYPE_TEXT,
)
from probe_api.core.errors import PayloadEncodingError
from probe_api.core.routing import ROUTES, format_rfc3339, route

KNOWN_PATHS = ["/", "/healthz", "/hello", "/feature-probe"]
RFC3339 = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


# ─── 404 / 405 policy ───────────────────────────────────────────

@pytest.mark.parametrize("path", [
    "/not-found", "/healthz/", "/Hello", "/hello/world", "//", "/feature",
])
def test_unknown_path_returns_404(path):
    res = route("GET", path, "")
    assert res.status_code == 404
    assert res.body == "not found"
    assert res.content_type == CONTENT_TYPE_TEXT


def test_unknown_path_returns_404_for_any_method():
    assert route("POST", "/nope", "").status_code == 404


@pytest.mark.parametrize("path", KNOWN_PATHS)
@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "HEAD", "PATCH"])
def test_known_path_with_wrong_method_returns_405(method, path):
    res = route(method, path, "")
    assert res.status_code == 405
    assert res.body == "method not allowed"
    assert res.content_type == CONTENT_TYPE_TEXT


def test_routing_table_covers_known_paths():
    assert sorted(ROUTES) == sorted(KNOWN_PATHS)


def test_method_compare_is_case_insensitive():
    assert route("get", "/healthz", "").status_code == 200


def test_empty_path_defaults_to_root():
    res = route("GET", "", "")
    assert res.status_code == 200
    assert res.content_type == CONTENT_TYPE_HTML


def test_every_response_has_exactly_one_content_type():
    for path in KNOWN_PATHS + ["/missing"]:
        res = route("GET", path, "")
        assert list(res.headers) == ["Content-Type"]


# ─── / ──────────────────────────────────────────────────────────

def test_home_serves_dashboard_html():
    res = route("GET", "/", "")
    assert res.status_code == 200
    assert "text/html" in res.content_type
    assert "Service dashboard" in res.body


# ─── /healthz ───────────────────────────────────────────────────

def test_healthz_returns_ok_and_rfc3339_time():
    res = route("GET", "/healthz", "")
    assert res.status_code == 200
    assert res.content_type == CONTENT_TYPE_JSON
    assert '"status":"ok"' in res.body
    payload = json.loads(res.body)
    assert RFC3339.match(payload["time"])


def test_healthz_uses_injected_clock():
    now = datetime(2026, 10, 18, 12, 30, 45, 999, tzinfo=timezone.utc)
    res = route("GET", "/healthz", "", now=now)
    assert json.loads(res.body) == {"status": "ok", "time": "2026-10-18T12:30:45Z"}


def test_format_rfc3339_converts_to_utc():
    plus_two = timezone(timedelta(hours=2))
    moment = datetime(2026, 1, 1, 2, 0, 0, tzinfo=plus_two)
    assert format_rfc3339(moment) == "2026-01-01T00:00:00Z"


def test_format_rfc3339_treats_naive_as_utc():
    assert format_rfc3339(datetime(2026, 1, 1)) == "2026-01-01T00:00:00Z"


# ─── /hello ─────────────────────────────────────────────────────

def test_hello_with_name():
    res = route("GET", "/hello", "name=AWS")
    assert res.status_code == 200
    assert '"message":"hello, AWS"' in res.body


def test_hello_default_name():
    res = route("GET", "/hello", "")
    assert '"message":"hello, world"' in res.body


@pytest.mark.parametrize("raw_query, expected", [
    ("name=", "hello, world"),
    ("other=x", "hello, world"),
    ("name=dev&other=x", "hello, dev"),
    ("name=first&name=second", "hello, first"),
    ("name=Jane+Doe", "hello, Jane Doe"),
    ("name=caf%C3%A9", "hello, café"),
    ("name=%zz", "hello, world"),
    ("name=a;b", "hello, world"),
    ("name=bob&x=%", "hello, world"),
])
def test_hello_query_decoding(raw_query, expected):
    res = route("GET", "/hello", raw_query)
    assert res.status_code == 200
    assert json.loads(res.body) == {"message": expected}


def test_hello_omits_empty_fields():
    assert json.loads(route("GET", "/hello", "").body).keys() == {"message"}


# ─── /feature-probe ─────────────────────────────────────────────

def test_feature_probe_default_version():
    res = route("GET", "/feature-probe", "")
    assert res.status_code == 200
    assert json.loads(res.body) == {
        "status": "ok", "feature": "probe", "version": "local-dev",
    }


def test_feature_probe_version_from_env(monkeypatch):
    monkeypatch.setenv("APP_VERSION", "sha-test")
    res = route("GET", "/feature-probe", "")
    assert '"version":"sha-test"' in res.body


def test_feature_probe_empty_env_falls_back(monkeypatch):
    monkeypatch.setenv("APP_VERSION", "")
    assert '"version":"local-dev"' in route("GET", "/feature-probe", "").body


def test_feature_probe_rereads_env_each_call(monkeypatch):
    monkeypatch.setenv("APP_VERSION", "v1")
    assert '"version":"v1"' in route("GET", "/feature-probe", "").body
    monkeypatch.setenv("APP_VERSION", "v2")
    assert '"version":"v2"' in route("GET", "/feature-probe", "").body


def test_feature_probe_injected_environ():
    res = route("GET", "/feature-probe", "", environ={"APP_VERSION": "abc123"})
    assert json.loads(res.body)["version"] == "abc123"


# ─── encoding failure ───────────────────────────────────────────

def test_encoding_failure_returns_500(monkeypatch):
    def broken(self):
        raise PayloadEncodingError("boom")

    monkeypatch.setattr("probe_api.schemas.payload.ApiPayload.to_json", broken)
    res = route("GET", "/healthz", "")
    assert res.status_code == 500
    assert res.body == "encoding error"
    assert res.content_type == CONTENT_TYPE_TEXT


def test_not_found_is_logged_with_error_code(caplog):
    with caplog.at_level("INFO", logger="probe_api.core.routing"):
        route("GET", "/missing", "")
    record = next(r for r in caplog.records if r.name == "probe_api.core.routing")
    assert record.error_code == "NOT_FOUND"
    assert record.status_code == 404
