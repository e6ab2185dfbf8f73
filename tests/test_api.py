"""
Tests for the HTTP adapter.
"""

import pytest
from fastapi.testclient import TestClient

from sortfilter_api import main


@pytest.fixture
def client(monkeypatch, routine_repo, scope_repo):
    monkeypatch.setattr(main, "ROUTINES", routine_repo)
    monkeypatch.setattr(main, "SCOPES", scope_repo)
    return TestClient(main.app)


class TestCodecRoutes:
    def test_decode_sorting(self, client):
        resp = client.post("/sorting/decode", json=[{"id": "partName", "desc": False}, {"id": "price", "desc": True}])
        assert resp.status_code == 200
        assert resp.json() == [
            {"id": "sort-0", "column_id": "partName", "direction": "asc"},
            {"id": "sort-1", "column_id": "price", "direction": "desc"},
        ]

    def test_encode_sorting(self, client):
        resp = client.post("/sorting/encode", json=[{"id": "sort-0", "column_id": "price", "direction": "desc"}])
        assert resp.json() == [{"id": "price", "desc": True}]

    def test_encode_sorting_rejects_unknown_fields(self, client):
        resp = client.post("/sorting/encode", json=[{"id": "sort-0", "col": "price"}])
        assert resp.status_code == 422

    def test_decode_filters_drops_null(self, client):
        resp = client.post("/filters/decode", json=[{"id": "partName", "value": ["test", None, 123]}])
        assert resp.json() == [
            {"id": "filter-partName", "filter_id": "partName", "values": ["test", 123], "condition": None}
        ]

    def test_decode_filters_tolerates_junk(self, client):
        resp = client.post("/filters/decode", json=[None, {"id": "plant", "value": {"x": 1}}])
        assert resp.status_code == 200
        assert resp.json() == [{"id": "filter-plant", "filter_id": "plant", "values": [], "condition": None}]

    def test_encode_filters(self, client):
        resp = client.post(
            "/filters/encode",
            json=[
                {"id": "filter-type", "filter_id": "type", "values": ["PO"]},
                {"id": "filter-plant", "filter_id": "plant", "values": []},
            ],
        )
        assert resp.json() == [{"id": "type", "value": "PO"}]


class TestEqualityRoutes:
    def test_filters_equal_ignores_order(self, client):
        a = [{"id": "type", "value": "PO"}, {"id": "plant", "value": ["plant_1"]}]
        resp = client.post("/filters/equal", json={"a": a, "b": list(reversed(a))})
        assert resp.json() == {"equal": True}

    def test_sorting_equal_respects_order(self, client):
        a = [{"id": "type", "desc": False}, {"id": "price", "desc": True}]
        resp = client.post("/sorting/equal", json={"a": a, "b": list(reversed(a))})
        assert resp.json() == {"equal": False}

    def test_merge(self, client):
        resp = client.post(
            "/filters/merge",
            json={
                "high_priority": [{"id": "column2", "value": ["value2"]}],
                "low_priority": [{"id": "column2", "value": ["scopeValue"]}, {"id": "column3", "value": ["value3"]}],
            },
        )
        assert resp.json() == [{"id": "column2", "value": ["value2"]}, {"id": "column3", "value": ["value3"]}]

    def test_diff_filters(self, client):
        resp = client.post(
            "/diff/filters",
            json={
                "draft": [
                    {"id": "filter-type", "filter_id": "type", "values": ["PO"]},
                    {"id": "filter-plant", "filter_id": "plant", "values": ["plant_1"]},
                ],
                "baseline": [{"id": "type", "value": "PO"}],
            },
        )
        assert [f["filter_id"] for f in resp.json()] == ["plant"]

    def test_diff_sorting(self, client):
        resp = client.post(
            "/diff/sorting",
            json={
                "draft": [{"id": "sort-0", "column_id": "price", "direction": "asc"}],
                "baseline": [{"id": "price", "desc": True}],
            },
        )
        assert resp.json() == [{"id": "sort-0", "column_id": "price", "direction": "asc"}]


class TestLookupRoutes:
    def test_column_for_filter(self, client):
        assert client.get("/columns/part-name").json() == {"filter_id": "part-name", "column_id": "partName"}
        assert client.get("/columns/unknown-filter").json() == {"filter_id": "unknown-filter", "column_id": None}

    def test_filter_definitions_search(self, client):
        body = client.get("/filter-definitions", params={"q": "buyer"}).json()
        assert {d["id"] for d in body["favorites"]} == {"consumed-part-buyer-codes", "produced-part-buyer-codes"}
        assert [d["id"] for d in body["consumed_parts"]] == ["buyer-codes"]
        assert body["produced_parts"] == []

    def test_filter_definitions_carry_conditions(self, client):
        body = client.get("/filter-definitions", params={"q": "price"}).json()
        price = body["general"][0]
        assert price["default_condition"] == "equals"
        assert "greaterThan" in price["conditions"]


class TestViewRoutes:
    def test_view_with_inline_filters(self, client, po_rows):
        resp = client.post(
            "/view",
            json={
                "rows": po_rows,
                "filters": [{"id": "type", "value": "PO"}],
                "scope_filters": [{"id": "plant", "value": ["plant_1"]}],
                "sorting": [{"id": "price", "desc": False}],
            },
        )
        body = resp.json()
        assert body["row_count"] == 2
        assert [r["id"] for r in body["rows"]] == ["5", "1"]

    def test_view_with_routine_and_scope(self, client, po_rows):
        resp = client.post("/view", json={"rows": po_rows, "routine_id": "routine-1", "scope_id": "scope-1"})
        body = resp.json()
        assert resp.status_code == 200
        assert [r["id"] for r in body["rows"]] == ["1", "5"]

    def test_unknown_routine_is_404(self, client, po_rows):
        resp = client.post("/view", json={"rows": po_rows, "routine_id": "nope"})
        assert resp.status_code == 404
        assert resp.json()["type"] == "NotFound"

    def test_export_view_csv(self, client, po_rows):
        resp = client.post("/export/view", json={"rows": po_rows, "filters": [{"id": "type", "value": "STO"}]})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        lines = resp.text.strip().splitlines()
        assert len(lines) == 2
        assert lines[1].startswith("4,STO")
