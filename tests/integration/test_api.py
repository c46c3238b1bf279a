"""Integration tests for the REST API.

These tests run the FastAPI app against a seeded in-memory database and
verify:
- Live quotes and validation for the configurator
- Price list and catalog administration
- Order placement, lifecycle and repricing
- The JSON error shape of domain errors
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from panelcut.web import create_app
from panelcut.web.dependencies import get_service_factory

API = "/api/v1"


@pytest.fixture
def client(seeded_factory) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_service_factory] = lambda: seeded_factory
    return TestClient(app)


@pytest.fixture
def order_payload(order_part_payload) -> dict:
    return {"customer_id": "cust-1", "project_name": "Kitchen", "parts": [order_part_payload]}


@pytest.fixture
def order(client, order_payload) -> dict:
    response = client.post(f"{API}/orders", json=order_payload)
    assert response.status_code == 201
    return response.json()


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestQuotes:
    def test_quote_part(self, client, order_part_payload) -> None:
        response = client.post(f"{API}/quotes", json=order_part_payload)

        assert response.status_code == 200
        body = response.json()
        assert body["is_priced"] is True
        assert Decimal(body["breakdown"]["panel"]) == Decimal("16.32")
        assert Decimal(body["breakdown"]["total"]) == Decimal("26.88")

    def test_quote_without_panel(self, client) -> None:
        response = client.post(f"{API}/quotes", json={"reference": "Draft"})

        assert response.status_code == 200
        assert response.json()["is_priced"] is False
        assert Decimal(response.json()["breakdown"]["total"]) == 0

    def test_quote_without_size(self, client, order_part_payload) -> None:
        response = client.post(
            f"{API}/quotes", json={**order_part_payload, "length": 0, "width": 0}
        )

        assert response.status_code == 200
        assert response.json()["is_priced"] is False
        assert Decimal(response.json()["breakdown"]["total"]) == 0

    def test_quote_unknown_panel(self, client, order_part_payload) -> None:
        response = client.post(f"{API}/quotes", json={**order_part_payload, "panelId": "NOPE"})

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"
        assert response.json()["details"] == {"id": "NOPE"}

    def test_negative_size_rejected(self, client, order_part_payload) -> None:
        response = client.post(f"{API}/quotes", json={**order_part_payload, "length": -1})
        assert response.status_code == 422

    def test_validate_step(self, client) -> None:
        response = client.post(
            f"{API}/quotes/validate", json={"part": {"reference": "Side"}, "step": 2}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert [e["path"] for e in body["errors"]] == ["panel_id"]

    def test_validate_for_submission(self, client, order_part_payload) -> None:
        response = client.post(f"{API}/quotes/validate", json={"part": order_part_payload})
        assert response.json()["is_valid"] is True

    def test_system32_line(self, client) -> None:
        response = client.get(
            f"{API}/quotes/system32-line",
            params={"side": "top", "length_mm": 800, "width_mm": 400},
        )

        assert response.status_code == 200
        assert response.json()["count"] == 23
        assert response.json()["spacing_mm"] == 32

    def test_system32_line_too_short(self, client) -> None:
        response = client.get(
            f"{API}/quotes/system32-line",
            params={"side": "left", "length_mm": 800, "width_mm": 70},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["error_type"] == "too_short"


class TestPricing:
    def test_rates_grouped_by_category(self, client) -> None:
        body = client.get(f"{API}/pricing/rates").json()

        assert "LIVRAISON" in body
        keys = {rate["key"] for rate in body["DECOUPE"]}
        assert keys == {"COUPE_PANNEAU", "COUPE_MINIMUM"}

    def test_get_rate(self, client) -> None:
        body = client.get(f"{API}/pricing/rates/COUPE_PANNEAU").json()
        assert Decimal(body["value"]) == Decimal("1.5")

    def test_unknown_rate(self, client) -> None:
        response = client.get(f"{API}/pricing/rates/NOPE")
        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_update_rate_records_history(self, client) -> None:
        response = client.put(
            f"{API}/pricing/rates/COUPE_PANNEAU",
            json={"value": "1.75", "changed_by": "alice", "reason": "Blade costs"},
        )
        assert response.status_code == 200

        history = client.get(
            f"{API}/pricing/history", params={"key": "COUPE_PANNEAU"}
        ).json()
        assert history[0]["changed_by"] == "alice"
        assert Decimal(history[0]["old_value"]) == Decimal("1.5")
        assert Decimal(history[0]["new_value"]) == Decimal("1.75")

    def test_new_rate_applies_to_next_quote(self, client, order_part_payload) -> None:
        client.put(
            f"{API}/pricing/rates/COUPE_PANNEAU", json={"value": "2", "changed_by": "alice"}
        )
        body = client.post(f"{API}/quotes", json=order_part_payload).json()
        assert Decimal(body["breakdown"]["cutting"]) == Decimal("8.00")

    def test_negative_rate_rejected(self, client) -> None:
        response = client.put(
            f"{API}/pricing/rates/COUPE_PANNEAU", json={"value": "-1", "changed_by": "alice"}
        )
        assert response.status_code == 422

    def test_rate_finer_than_stored_precision_rejected(self, client) -> None:
        response = client.put(
            f"{API}/pricing/rates/PERCAGE_UNITAIRE",
            json={"value": "0.12345", "changed_by": "alice"},
        )
        assert response.status_code == 422

        body = client.get(f"{API}/pricing/rates/PERCAGE_UNITAIRE").json()
        assert Decimal(body["value"]) == Decimal("0.15")

    def test_bulk_update_is_all_or_nothing(self, client) -> None:
        response = client.post(
            f"{API}/pricing/rates/bulk",
            json={
                "updates": [
                    {"key": "COUPE_PANNEAU", "value": "9"},
                    {"key": "NOPE", "value": "1"},
                ],
                "changed_by": "alice",
            },
        )

        assert response.status_code == 404
        body = client.get(f"{API}/pricing/rates/COUPE_PANNEAU").json()
        assert Decimal(body["value"]) == Decimal("1.5")

    def test_create_rate(self, client) -> None:
        response = client.post(
            f"{API}/pricing/rates",
            json={"key": "LIVRAISON_ZONE2", "value": "45", "category": "LIVRAISON",
                  "changed_by": "alice"},
        )
        assert response.status_code == 201

        duplicate = client.post(
            f"{API}/pricing/rates",
            json={"key": "LIVRAISON_ZONE2", "value": "45", "category": "LIVRAISON",
                  "changed_by": "alice"},
        )
        assert duplicate.status_code == 409

    def test_categories(self, client) -> None:
        assert "FINITION" in client.get(f"{API}/pricing/categories").json()
        rates = client.get(f"{API}/pricing/categories/FINITION").json()
        assert len(rates) == 4


class TestCatalog:
    def test_list_panels(self, client) -> None:
        references = {p["reference"] for p in client.get(f"{API}/catalog/panels").json()}
        assert {"MEL-BLANC-18", "MDF-19"} <= references

    def test_panel_by_reference(self, client) -> None:
        body = client.get(f"{API}/catalog/panels/MEL-CHENE-18").json()
        assert body["grain_direction"] is True

    def test_compatible_edges(self, client) -> None:
        edges = client.get(f"{API}/catalog/panels/MEL-BLANC-18/edges").json()
        assert edges[0]["is_default"] is True
        assert edges[0]["edge"]["reference"] == "ABS-BLANC-23"

    def test_link_edge(self, client) -> None:
        response = client.post(
            f"{API}/catalog/panels/MDF-19/edges", json={"edge_id": "ABS-LASER-BLANC-23"}
        )
        assert response.status_code == 200
        assert response.json()["edge"]["is_laser"] is True

    def test_create_and_update_panel(self, client) -> None:
        response = client.post(
            f"{API}/catalog/panels",
            json={"reference": "CP-18", "name": "Plywood 18mm", "material": "CP",
                  "thickness_mm": 18, "length_mm": 2500, "width_mm": 1220,
                  "price_per_m2": "38"},
        )
        assert response.status_code == 201

        updated = client.patch(
            f"{API}/catalog/panels/{response.json()['id']}", json={"price_per_m2": "40"}
        )
        assert Decimal(updated.json()["price_per_m2"]) == Decimal("40")

    def test_sub_cent_panel_price_rejected(self, client) -> None:
        response = client.post(
            f"{API}/catalog/panels",
            json={"reference": "CP-18", "name": "Plywood 18mm", "material": "CP",
                  "thickness_mm": 18, "length_mm": 2500, "width_mm": 1220,
                  "price_per_m2": "38.123"},
        )
        assert response.status_code == 422

        patched = client.patch(f"{API}/catalog/panels/MDF-19", json={"price_per_m2": "18.005"})
        assert patched.status_code == 422

    def test_null_for_required_column_rejected(self, client) -> None:
        response = client.patch(f"{API}/catalog/panels/MDF-19", json={"price_per_m2": None})
        assert response.status_code == 422

        response = client.patch(f"{API}/catalog/edges/ABS-BLANC-23", json={"name": None})
        assert response.status_code == 422

        body = client.get(f"{API}/catalog/panels/MDF-19").json()
        assert Decimal(body["price_per_m2"]) == Decimal("18")

    def test_color_code_can_be_cleared(self, client) -> None:
        response = client.patch(
            f"{API}/catalog/panels/MEL-BLANC-18", json={"color_code": None}
        )
        assert response.status_code == 200
        assert response.json()["color_code"] is None

    def test_deactivated_panel_is_hidden(self, client, order_part_payload) -> None:
        assert client.delete(f"{API}/catalog/panels/MDF-19").json()["is_active"] is False

        references = {p["reference"] for p in client.get(f"{API}/catalog/panels").json()}
        assert "MDF-19" not in references
        assert client.get(f"{API}/catalog/panels/MDF-19").json()["is_active"] is False

        quote = client.post(
            f"{API}/quotes", json={**order_part_payload, "panelId": "MDF-19", "edges": []}
        )
        assert quote.status_code == 404

    def test_edges(self, client) -> None:
        edges = client.get(f"{API}/catalog/edges", params={"search": "laser"}).json()
        assert [e["reference"] for e in edges] == ["ABS-LASER-BLANC-23"]


class TestOrders:
    def test_create_order(self, order) -> None:
        assert order["status"] == "PENDING"
        assert Decimal(order["total_price"]) == Decimal("32.26")
        assert Decimal(order["parts"][0]["calculated_price"]) == Decimal("26.88")

    def test_price_mismatch(self, client, order_payload) -> None:
        order_payload["parts"][0]["calculatedPrice"] = "10.00"
        response = client.post(f"{API}/orders", json=order_payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "price_mismatch"
        assert Decimal(body["details"]["computed"]) == Decimal("26.88")

    def test_incomplete_part(self, client, order_payload) -> None:
        order_payload["parts"][0]["width"] = 0
        response = client.post(f"{API}/orders", json=order_payload)

        assert response.status_code == 422
        assert response.json()["error_type"] == "validation"
        assert response.json()["details"][0]["path"] == "width_mm"

    def test_duplicate_reference(self, client, order_payload, order_part_payload) -> None:
        order_payload["parts"].append(dict(order_part_payload))
        response = client.post(f"{API}/orders", json=order_payload)

        assert response.status_code == 409
        assert response.json()["error_type"] == "duplicate_reference"

    def test_no_parts(self, client, order_payload) -> None:
        order_payload["parts"] = []
        assert client.post(f"{API}/orders", json=order_payload).status_code == 422

    def test_get_and_list(self, client, order) -> None:
        assert client.get(f"{API}/orders/{order['order_number']}").json()["id"] == order["id"]
        assert client.get(f"{API}/orders", params={"search": "kitchen"}).json()["total"] == 1

    def test_other_customer(self, client, order) -> None:
        response = client.get(f"{API}/orders/{order['id']}", params={"customer_id": "cust-2"})
        assert response.status_code == 404

    def test_lifecycle(self, client, order) -> None:
        url = f"{API}/orders/{order['id']}"
        confirmed = client.put(f"{url}/status", json={"status": "CONFIRMED"}).json()
        assert confirmed["confirmed_at"] is not None

        response = client.post(f"{url}/cancel")
        assert response.status_code == 409
        assert response.json()["error_type"] == "invalid_transition"
        assert response.json()["details"] == {"current": "CONFIRMED", "target": "CANCELLED"}

    def test_cancel(self, client, order) -> None:
        response = client.post(f"{API}/orders/{order['id']}/cancel")
        assert response.json()["status"] == "CANCELLED"

    def test_prices_frozen_until_reprice(self, client, order) -> None:
        client.put(
            f"{API}/pricing/rates/COUPE_PANNEAU", json={"value": "2", "changed_by": "alice"}
        )
        url = f"{API}/orders/{order['id']}"
        assert Decimal(client.get(url).json()["total_price"]) == Decimal("32.26")

        repriced = client.post(f"{url}/reprice").json()
        assert Decimal(repriced["parts"][0]["calculated_price"]) == Decimal("28.88")

    def test_reprice_locked(self, client, order) -> None:
        url = f"{API}/orders/{order['id']}"
        client.put(f"{url}/status", json={"status": "CONFIRMED"})

        response = client.post(f"{url}/reprice")
        assert response.status_code == 409
        assert response.json()["error_type"] == "order_locked"

    def test_stats(self, client, order) -> None:
        body = client.get(f"{API}/orders/stats").json()
        assert body["total_orders"] == 1
        assert body["pending_orders"] == 1
        assert Decimal(body["revenue"]) == 0
