import pytest

from pureplate.api import state
from pureplate.errors import ExtractionError, UpstreamOther, UpstreamRateLimited
from pureplate.report_engine import parse_report
from pureplate.services import analyzer


@pytest.fixture
def fake_analyze(monkeypatch, sample_report):
    def install(side_effect=None):
        def analyze_product(query):
            if side_effect is not None:
                return side_effect(query)
            return parse_report(sample_report, query=query)
        monkeypatch.setattr(analyzer, "analyze_product", analyze_product)
    return install


def test_healthcheck(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"running" in resp.data


def test_analyze_returns_payload(client, fake_analyze):
    fake_analyze()
    resp = client.post("/analyze", json={"query": "test snack"})
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["ok"] is True
    assert body["issues"] == []
    assert body["result"]["productName"] == "Test Snack"
    assert body["result"]["scoreTier"] == "adverse"
    assert [i["name"] for i in body["result"]["concern"]] == ["Sugar"]


def test_analyze_requires_query(client, fake_analyze):
    fake_analyze()
    resp = client.post("/analyze", json={"query": "   "})
    assert resp.status_code == 400


@pytest.mark.parametrize("exc, status, code", [
    (UpstreamRateLimited("429 RESOURCE_EXHAUSTED"), 429, "RATE_LIMITED"),
    (UpstreamOther("Connection error."), 502, "UPSTREAM_ERROR"),
    (ExtractionError(), 422, "EXTRACTION_FAILED"),
])
def test_analyze_error_mapping(client, fake_analyze, exc, status, code):
    def fail(query):
        raise exc

    fake_analyze(fail)
    resp = client.post("/analyze", json={"query": "foo"})
    body = resp.get_json()
    assert resp.status_code == status
    assert body["ok"] is False
    assert body["error"] == code


def test_rate_limit_message_gives_retry_guidance(client, fake_analyze):
    def fail(query):
        raise UpstreamRateLimited("Error code: 429")

    fake_analyze(fail)
    body = client.post("/analyze", json={"query": "foo"}).get_json()
    assert "try again" in body["message"]


def test_stale_result_is_discarded(client, fake_analyze, sample_report):
    def superseded(query):
        # A newer query from the same client starts while this one runs.
        state.begin_query("client-1")
        return parse_report(sample_report, query=query)

    fake_analyze(superseded)
    resp = client.post("/analyze", json={"query": "old", "client_id": "client-1"})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "STALE_REQUEST"


def test_current_result_is_returned_for_client(client, fake_analyze):
    fake_analyze()
    resp = client.post("/analyze", json={"query": "foo"}, headers={"X-Client-Id": "client-2"})
    assert resp.status_code == 200
    assert not state.is_current("client-2", "anything")


def test_parse_endpoint(client, sample_report):
    citations = [{"web": {"title": "Label", "uri": "https://example.com"}}, {"other": 1}]
    resp = client.post("/parse", json={"text": sample_report, "citations": citations})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["result"]["sources"] == [{"title": "Label", "uri": "https://example.com"}]


def test_parse_endpoint_rejects_empty_table(client):
    resp = client.post("/parse", json={"text": "PRODUCT: X\nLIST_START\nLIST_END"})
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "EXTRACTION_FAILED"


def test_parse_endpoint_blank_text(client):
    resp = client.post("/parse", json={"text": ""})
    assert resp.status_code == 502
    assert resp.get_json()["error"] == "EMPTY_RESPONSE"


def test_parse_endpoint_requires_text(client):
    assert client.post("/parse", json={}).status_code == 400


def test_out_of_range_score_is_reported_as_issue(client):
    text = "HEALTH_SCORE: 150\nLIST_START\nOats | 90% | healthy | Whole grain\nLIST_END"
    body = client.post("/parse", json={"text": text, "query": "Oats"}).get_json()
    assert body["ok"] is True
    assert body["result"]["healthScore"] == 150
    assert body["issues"] and "Schema validation failed" in body["issues"][0]


def test_unexpected_error_does_not_leak_internal_text(client, fake_analyze):
    def crash(query):
        raise KeyError("secret internal detail")

    fake_analyze(crash)
    resp = client.post("/analyze", json={"query": "foo"})
    body = resp.get_json()
    assert resp.status_code == 500
    assert body["error"] == "INTERNAL_ERROR"
    assert body["message"] == "Something went wrong while scanning the product."
    assert "secret" not in resp.get_data(as_text=True)
