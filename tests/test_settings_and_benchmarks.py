"""Tests for restaurant settings and the benchmark endpoints."""

import pytest


def configure(client, restaurant_type="cafe", **extra):
    return client.put(
        "/dashboard/settings",
        json={"restaurant_type": restaurant_type, **extra},
    )


class TestRestaurantSettings:
    def test_unconfigured(self, authed_client):
        assert authed_client.get("/dashboard/settings").json() == {
            "configured": False,
            "settings": None,
        }

    def test_save_and_update_keeps_single_row(self, authed_client):
        first = configure(authed_client, "cafe", city_tier="metro", restaurant_name="  Brew Lab ")
        assert first.status_code == 200
        assert first.json()["restaurant_type_display_name"] == "Café"
        assert first.json()["restaurant_name"] == "Brew Lab"

        second = configure(authed_client, "qsr", region="south")
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["city_tier"] is None

        current = authed_client.get("/dashboard/settings").json()
        assert current["configured"] is True
        assert current["settings"]["restaurant_type"] == "qsr"
        assert current["settings"]["region"] == "south"

    def test_unknown_type_rejected(self, authed_client):
        assert configure(authed_client, "diner").status_code == 422


class TestBenchmarkCatalog:
    def test_list_types(self, authed_client):
        types = authed_client.get("/dashboard/benchmarks/types").json()
        assert len(types) == 7
        assert {"restaurant_type": "cafe", "display_name": "Café"} in types

    def test_profile(self, authed_client):
        profile = authed_client.get("/dashboard/benchmarks/types/cloud_kitchen").json()
        assert profile["display_name"] == "Cloud Kitchen"
        assert profile["core_benchmarks"]["delivery_ratio_percent"] == "85-95"

    def test_unknown_profile(self, authed_client):
        assert authed_client.get("/dashboard/benchmarks/types/diner").status_code == 422

    def test_adjusted_benchmark(self, authed_client):
        body = authed_client.get(
            "/dashboard/benchmarks/types/cafe/adjusted",
            params={"metric": "food_cost_percent_range", "region": "south"},
        ).json()
        assert body["benchmark"] == "32-38"
        assert body["adjusted_value"] == pytest.approx(35.0)
        assert body["regional_notes"]["coffee_preference"] == "High"

    def test_adjusted_benchmark_unknown_metric(self, authed_client):
        body = authed_client.get(
            "/dashboard/benchmarks/types/cafe/adjusted", params={"metric": "nothing"}
        ).json()
        assert body["benchmark"] is None
        assert body["adjusted_value"] is None
        assert body["regional_notes"] == {}


class TestBenchmarkCompare:
    def test_compare_requires_type_when_unconfigured(self, authed_client):
        response = authed_client.post(
            "/dashboard/benchmarks/compare", json={"metrics": {"food_cost_percent": 35}}
        )
        assert response.status_code == 404

    def test_compare_uses_configured_type(self, authed_client):
        configure(authed_client, "cafe")
        response = authed_client.post(
            "/dashboard/benchmarks/compare",
            json={"metrics": {"food_cost_percent": 42, "staff_cost_percent": 20}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["restaurant_type"] == "cafe"

        rows = {row["key"]: row for row in body["rows"]}
        assert set(rows) == {"food_cost_percent", "staff_cost_percent"}
        assert rows["food_cost_percent"]["comparison"]["status"] == "above"
        assert rows["food_cost_percent"]["tone"] == "unfavourable"
        assert rows["food_cost_percent"]["progress"] == 100.0
        assert rows["staff_cost_percent"]["comparison"]["status"] == "within"

    def test_explicit_type_overrides_settings(self, authed_client):
        configure(authed_client, "cafe")
        body = authed_client.post(
            "/dashboard/benchmarks/compare",
            json={"restaurant_type": "cloud_kitchen", "metrics": {"delivery_ratio_percent": 80}},
        ).json()
        assert body["restaurant_type"] == "cloud_kitchen"
        row = body["rows"][0]
        assert row["comparison"]["status"] == "below"
        assert row["tone"] == "unfavourable"

    def test_insights(self, authed_client):
        body = authed_client.post(
            "/dashboard/benchmarks/insights",
            json={"restaurant_type": "bakery", "metrics": {"waste": 15, "food_cost": 35}},
        ).json()
        by_metric = {i["metric"]: i for i in body["insights"]}
        assert by_metric["waste"]["comparison"]["status"] == "above"
        assert by_metric["waste"]["recommendation"] == "Consider optimizing waste to reduce costs"
        assert by_metric["food_cost"]["recommendation"] is None
        assert "Shelf-life issues" in body["common_problems"]

    def test_insights_need_metrics(self, authed_client):
        response = authed_client.post(
            "/dashboard/benchmarks/insights", json={"restaurant_type": "cafe", "metrics": {}}
        )
        assert response.status_code == 422
