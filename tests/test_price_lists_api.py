"""
Tests for catalog administration endpoints.
"""

import pytest


ENTRY = {"serviceName": "Gloss A4", "category": "paper", "basePrice": "0.80", "unit": "sheet"}


# Fixtures

@pytest.fixture
def entry(client):
    response = client.post("/api/price-lists", json=ENTRY)
    assert response.status_code == 201
    return response.get_json()


class TestCreate:

    def test_create_defaults_to_active(self, entry):
        assert entry["serviceName"] == "Gloss A4"
        assert entry["basePrice"] == "0.80"
        assert entry["isActive"] is True

    def test_invalid_entry(self, client):
        response = client.post(
            "/api/price-lists",
            json={"serviceName": "", "category": "stationery", "basePrice": "-1"},
        )
        assert response.status_code == 400
        fields = {e["field"] for e in response.get_json()["fields"]}
        assert fields == {"serviceName", "category", "basePrice", "unit"}


class TestReadUpdateDelete:

    def test_list_sorted_by_category_then_name(self, seeded_client):
        entries = seeded_client.get("/api/price-lists").get_json()
        keys = [(e["category"], e["serviceName"]) for e in entries]
        assert keys == sorted(keys)
        assert len(entries) == 20

    def test_get(self, client, entry):
        assert client.get(f"/api/price-lists/{entry['id']}").get_json() == entry

    def test_partial_update(self, client, entry):
        response = client.put(f"/api/price-lists/{entry['id']}", json={"isActive": False})
        assert response.status_code == 200
        updated = response.get_json()
        assert updated["isActive"] is False
        assert updated["basePrice"] == "0.80"

    def test_update_validates(self, client, entry):
        response = client.put(f"/api/price-lists/{entry['id']}", json={"basePrice": "abc"})
        assert response.status_code == 400

    def test_delete(self, client, entry):
        assert client.delete(f"/api/price-lists/{entry['id']}").status_code == 204
        assert client.get(f"/api/price-lists/{entry['id']}").status_code == 404

    def test_delete_unknown_is_404(self, client):
        response = client.delete("/api/price-lists/12345")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Price list not found"}


class TestConflicts:

    def test_default_catalog_has_no_conflicts(self, seeded_client):
        assert seeded_client.get("/api/price-lists/conflicts").get_json() == []

    def test_overlapping_names_reported_with_lowest_id_winner(self, seeded_client, price_of):
        color = price_of("printing", "Color")
        premium = seeded_client.post("/api/price-lists", json={
            "serviceName": "Color Premium", "category": "printing", "basePrice": "0.40", "unit": "page",
        }).get_json()

        conflicts = seeded_client.get("/api/price-lists/conflicts").get_json()
        assert conflicts == [{
            "category": "printing",
            "entries": [
                {"id": color["id"], "serviceName": "Color"},
                {"id": premium["id"], "serviceName": "Color Premium"},
            ],
            "winner": color["id"],
        }]

    def test_inactive_entry_does_not_price(self, seeded_client, price_of):
        color = price_of("printing", "Color")
        seeded_client.put(f"/api/price-lists/{color['id']}", json={"isActive": False})
        quote = seeded_client.post("/api/orders/quote", json={
            "serviceType": "printing", "paperSize": "A4", "printType": "color", "quantity": 10,
        }).get_json()
        assert [line["service"] for line in quote["breakdown"]] == ["A4 Paper"]
        assert quote["total"] == "5.50"


class TestPriceBounds:

    def test_oversized_price_rejected_and_catalog_still_usable(self, seeded_client):
        response = seeded_client.post("/api/price-lists", json={
            "serviceName": "Gold Leaf", "category": "paper", "basePrice": "1e30", "unit": "sheet",
        })
        assert response.status_code == 400
        assert response.get_json()["fields"][0]["field"] == "basePrice"

        assert seeded_client.get("/api/price-lists").status_code == 200
        order = seeded_client.post("/api/orders", json={
            "serviceType": "printing", "paperSize": "A4", "printType": "color", "quantity": 1,
        })
        assert order.status_code == 201

    def test_oversized_price_update_rejected(self, client, entry):
        response = client.put(f"/api/price-lists/{entry['id']}", json={"basePrice": "100000000"})
        assert response.status_code == 400
        assert client.get(f"/api/price-lists/{entry['id']}").get_json()["basePrice"] == "0.80"
