"""
tests/test_api.py

HTTP contract of the metrics and graph routers.
"""

from __future__ import annotations

import logging
import sys

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from kpi.types import Inputs
from metrics_graph.relationships import METRICS_RELATIONSHIPS


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app())


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "metric_count": 51}


class TestMetricsRouter:
    def test_calculate(self, client: TestClient, scenario_inputs: Inputs) -> None:
        response = client.post("/metrics/calculate", json=scenario_inputs.to_dict())
        assert response.status_code == 200
        body = response.json()

        assert body["metrics"]["new_bookings"] == pytest.approx(2450)
        assert body["metrics"]["ending_arr"] == pytest.approx(153.4)
        assert body["metrics"]["deals_closed_won"] == 14
        assert len(body["key_metrics"]) == 10
        assert body["key_metrics"][3]["name"] == "LTV:CAC"
        assert body["statuses"]["ltv-cac-ratio"] == "good"
        assert body["statuses"]["impressions"] == "neutral"
        assert body["formatted"]["ending-arr"] == "$153.4M"
        assert set(METRICS_RELATIONSHIPS) <= set(body["values"])

    def test_omitted_fields_default_to_zero(self, client: TestClient) -> None:
        response = client.post("/metrics/calculate", json={})
        assert response.status_code == 200
        assert response.json()["metrics"]["ending_arr"] == 0

    def test_unknown_field_rejected(self, client: TestClient) -> None:
        response = client.post("/metrics/calculate", json={"monthly_arr": 10})
        assert response.status_code == 422

    def test_non_numeric_rejected(self, client: TestClient) -> None:
        response = client.post("/metrics/calculate", json={"win_rate": "high"})
        assert response.status_code == 422

    def test_extreme_finite_inputs_still_serialise(self, client: TestClient) -> None:
        response = client.post(
            "/metrics/calculate", json={"beginning_arr": 1e305, "total_customers": 1}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["metrics"]["arpa"] == sys.float_info.max
        assert body["formatted"]["beginning-arr"] == f"${int(1e305)}.0M"
        assert body["formatted"]["gross-profit"] == "-"

    def test_non_finite_number_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/metrics/calculate",
            content='{"beginning_arr": 1e400}',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "beginning_arr"]

    def test_industry_defaults(self, client: TestClient) -> None:
        response = client.get("/metrics/defaults/banking")
        assert response.status_code == 200
        body = response.json()
        assert body["industry"] == "banking"
        assert body["display_name"] == "Banking"
        assert body["inputs"]["beginning_arr"] == 145
        assert body["field_labels"]["win_rate"] == "Win Rate (%)"
        assert body["persona_labels"]["cfo"] == "CFO"

    def test_unknown_industry(self, client: TestClient) -> None:
        response = client.get("/metrics/defaults/retail")
        assert response.status_code == 404
        assert "retail" in response.json()["detail"]

    def test_unknown_industry_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="app.api.routers.metrics_router"):
            client.get("/metrics/defaults/retail")
        assert any("retail" in r.getMessage() for r in caplog.records)


class TestGraphRouter:
    def test_edges(self, client: TestClient) -> None:
        response = client.get("/graph/edges")
        assert response.status_code == 200
        expected = sum(len(r.outputs) for r in METRICS_RELATIONSHIPS.values())
        assert len(response.json()) == expected

    def test_metrics(self, client: TestClient) -> None:
        body = client.get("/graph/metrics").json()
        assert len(body) == 51
        assert body[0]["metric_id"] == "sales-marketing-spend"
        assert body[0]["tier"] == "budget"

    def test_connections(self, client: TestClient) -> None:
        response = client.get("/graph/metrics/ltv-cac-ratio/connections")
        assert response.status_code == 200
        assert response.json() == {
            "metric_id": "ltv-cac-ratio",
            "label": "LTV:CAC Ratio",
            "tier": "outcomes",
            "inputs": ["ltv", "cac-blended"],
            "outputs": [],
        }

    def test_focus(self, client: TestClient) -> None:
        body = client.get("/graph/metrics/net-new-arr/focus").json()
        assert body["secondary"] == ["deals-won", "new-customers-added", "mrr", "arpa", "rule-of-40"]
        assert body["opacity"]["net-new-arr"] == 1.0
        assert body["opacity"]["ending-arr"] == 0.8
        assert body["opacity"]["mrr"] == 0.6
        assert body["opacity"]["cpm"] == 0.2
        edge_ids = {edge["id"] for edge in body["visible_edges"]}
        assert "net-new-arr-ending-arr" in edge_ids
        assert "impressions-cpm" not in edge_ids

    def test_upstream_with_depth(self, client: TestClient) -> None:
        body = client.get("/graph/metrics/ltv-cac-ratio/upstream", params={"max_depth": 1}).json()
        assert body == {
            "metric_id": "ltv-cac-ratio",
            "direction": "upstream",
            "max_depth": 1,
            "path": ["ltv", "cac-blended"],
        }

    def test_downstream_default_depth(self, client: TestClient) -> None:
        body = client.get("/graph/metrics/rd-spend/downstream").json()
        assert body["max_depth"] == 3
        assert body["path"] == ["total-opex", "ebitda", "ebitda-margin", "rule-of-40"]

    def test_default_depth_from_env(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GRAPH_MAX_PATH_DEPTH", "1")
        body = client.get("/graph/metrics/rd-spend/downstream").json()
        assert body["max_depth"] == 1
        assert body["path"] == ["total-opex"]

    def test_negative_depth_rejected(self, client: TestClient) -> None:
        response = client.get("/graph/metrics/rd-spend/downstream", params={"max_depth": -1})
        assert response.status_code == 422

    @pytest.mark.parametrize(
        "path",
        [
            "/graph/metrics/not-a-metric/connections",
            "/graph/metrics/not-a-metric/focus",
            "/graph/metrics/not-a-metric/upstream",
            "/graph/metrics/not-a-metric/downstream",
        ],
    )
    def test_unknown_metric(self, client: TestClient, path: str) -> None:
        response = client.get(path)
        assert response.status_code == 404
        assert "not-a-metric" in response.json()["detail"]
