"""
Integration tests for the floor-to-counter flow.

Tables and menu come from the demo seed: 6 tables, 10 menu items priced in INR.
Tax is 8% on the subtotal.
"""

from decimal import Decimal

from restaurant_pos.models.payment import PaymentMethod
from restaurant_pos.services.billing_service import calculate_change


def place_order(client, table_id, *lines):
    return client.post(
        "/dashboard/orders",
        json={
            "table_id": table_id,
            "items": [{"menu_item_id": item_id, "quantity": qty} for item_id, qty in lines],
        },
    )


class TestMenuAndTables:
    def test_seeded_menu(self, authed_client, menu_items):
        assert len(menu_items) == 10
        assert Decimal(menu_items["Filter Coffee"]["price"]) == Decimal("90.00")

        categories = authed_client.get("/dashboard/menu/categories").json()
        assert [c["name"] for c in categories] == ["Beverages", "Snacks", "Mains", "Desserts"]

    def test_toggle_availability(self, authed_client, menu_items):
        item_id = menu_items["Cold Coffee"]["id"]
        response = authed_client.post(f"/dashboard/menu/items/{item_id}/toggle-availability")
        assert response.json()["is_available"] is False

        available = authed_client.get("/dashboard/menu/items", params={"available_only": True})
        assert "Cold Coffee" not in {i["name"] for i in available.json()}

    def test_toggle_unknown_item(self, authed_client):
        response = authed_client.post("/dashboard/menu/items/9999/toggle-availability")
        assert response.status_code == 404

    def test_seeded_tables(self, tables):
        assert len(tables) == 6
        assert all(t["status"] == "available" for t in tables.values())

    def test_add_table(self, authed_client):
        response = authed_client.post("/dashboard/tables", json={"name": "Patio 1", "seats": 2})
        assert response.status_code == 201
        assert response.json()["status"] == "available"

    def test_add_duplicate_table(self, authed_client):
        response = authed_client.post("/dashboard/tables", json={"name": "Table 1", "seats": 2})
        assert response.status_code == 409

    def test_add_blank_table_name(self, authed_client):
        response = authed_client.post("/dashboard/tables", json={"name": "   ", "seats": 2})
        assert response.status_code == 422

    def test_reserve_table(self, authed_client, tables):
        table_id = tables["Table 3"]["id"]
        response = authed_client.patch(
            f"/dashboard/tables/{table_id}/status", json={"status": "reserved"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "reserved"


class TestPlaceOrder:
    def test_place_order_computes_totals_and_seats_table(self, authed_client, menu_items, tables):
        table_id = tables["Table 1"]["id"]
        response = place_order(
            authed_client,
            table_id,
            (menu_items["Filter Coffee"]["id"], 2),
            (menu_items["Paneer Roll"]["id"], 1),
        )
        assert response.status_code == 201
        order = response.json()

        assert order["status"] == "pending"
        assert order["table_name"] == "Table 1"
        assert Decimal(order["subtotal"]) == Decimal("360.00")
        assert Decimal(order["tax"]) == Decimal("28.80")
        assert Decimal(order["total"]) == Decimal("388.80")
        assert {i["menu_item_name"] for i in order["items"]} == {"Filter Coffee", "Paneer Roll"}

        table = authed_client.get("/dashboard/tables").json()[0]
        assert table["status"] == "occupied"
        assert table["current_order_id"] == order["id"]

    def test_repeated_items_are_merged(self, authed_client, menu_items, tables):
        coffee = menu_items["Masala Chai"]["id"]
        order = place_order(authed_client, tables["Table 2"]["id"], (coffee, 1), (coffee, 2)).json()
        assert len(order["items"]) == 1
        assert order["items"][0]["quantity"] == 3
        assert Decimal(order["items"][0]["line_total"]) == Decimal("180.00")

    def test_occupied_table_rejected(self, authed_client, menu_items, tables):
        table_id = tables["Table 1"]["id"]
        chai = menu_items["Masala Chai"]["id"]
        assert place_order(authed_client, table_id, (chai, 1)).status_code == 201
        assert place_order(authed_client, table_id, (chai, 1)).status_code == 409

    def test_unknown_table(self, authed_client, menu_items):
        response = place_order(authed_client, 9999, (menu_items["Masala Chai"]["id"], 1))
        assert response.status_code == 404

    def test_unavailable_item_rejected(self, authed_client, menu_items, tables):
        item_id = menu_items["Gulab Jamun"]["id"]
        authed_client.post(f"/dashboard/menu/items/{item_id}/toggle-availability")
        response = place_order(authed_client, tables["Table 4"]["id"], (item_id, 1))
        assert response.status_code == 422

    def test_empty_order_rejected(self, authed_client, tables):
        response = authed_client.post(
            "/dashboard/orders", json={"table_id": tables["Table 1"]["id"], "items": []}
        )
        assert response.status_code == 422

    def test_occupied_table_cannot_be_released_manually(self, authed_client, menu_items, tables):
        table_id = tables["Table 5"]["id"]
        place_order(authed_client, table_id, (menu_items["Masala Chai"]["id"], 1))
        response = authed_client.patch(
            f"/dashboard/tables/{table_id}/status", json={"status": "available"}
        )
        assert response.status_code == 409


class TestOrderLifecycle:
    def test_get_and_list_orders(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Veg Sandwich"]["id"], 1)
        ).json()

        assert authed_client.get(f"/dashboard/orders/{order['id']}").json()["id"] == order["id"]
        assert authed_client.get("/dashboard/orders/9999").status_code == 404

        pending = authed_client.get("/dashboard/orders", params={"status": "pending"}).json()
        assert [o["id"] for o in pending] == [order["id"]]
        assert authed_client.get("/dashboard/orders", params={"status": "paid"}).json() == []

    def test_replace_items_recomputes_totals(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Filter Coffee"]["id"], 1)
        ).json()

        response = authed_client.put(
            f"/dashboard/orders/{order['id']}/items",
            json={"items": [{"menu_item_id": menu_items["Chicken Biryani"]["id"], "quantity": 2}]},
        )
        assert response.status_code == 200
        updated = response.json()
        assert [i["menu_item_name"] for i in updated["items"]] == ["Chicken Biryani"]
        assert Decimal(updated["subtotal"]) == Decimal("640.00")
        assert Decimal(updated["total"]) == Decimal("691.20")

    def test_kitchen_board_and_status_changes(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["French Fries"]["id"], 1)
        ).json()

        board = authed_client.get("/dashboard/kitchen").json()
        assert [t["order"]["id"] for t in board["pending"]] == [order["id"]]
        assert board["preparing"] == []

        response = authed_client.patch(
            f"/dashboard/kitchen/orders/{order['id']}/status", json={"status": "preparing"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "preparing"
        assert all(i["status"] == "preparing" for i in response.json()["items"])

        board = authed_client.get("/dashboard/kitchen").json()
        assert board["pending"] == []
        assert [t["order"]["id"] for t in board["preparing"]] == [order["id"]]

        authed_client.patch(
            f"/dashboard/kitchen/orders/{order['id']}/status", json={"status": "served"}
        )
        board = authed_client.get("/dashboard/kitchen").json()
        assert board == {"pending": [], "preparing": [], "ready": []}

    def test_kitchen_cannot_mark_paid(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["French Fries"]["id"], 1)
        ).json()
        response = authed_client.patch(
            f"/dashboard/kitchen/orders/{order['id']}/status", json={"status": "paid"}
        )
        assert response.status_code == 422

    def test_cancel_frees_table(self, authed_client, menu_items, tables):
        table_id = tables["Table 6"]["id"]
        order = place_order(authed_client, table_id, (menu_items["Gulab Jamun"]["id"], 2)).json()

        response = authed_client.post(f"/dashboard/orders/{order['id']}/cancel")
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

        table = next(t for t in authed_client.get("/dashboard/tables").json() if t["id"] == table_id)
        assert table["status"] == "available"
        assert table["current_order_id"] is None

        # Closed orders cannot be cancelled again
        assert authed_client.post(f"/dashboard/orders/{order['id']}/cancel").status_code == 409


class TestBilling:
    def test_preview(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Chocolate Brownie"]["id"], 2)
        ).json()

        bill = authed_client.get(f"/dashboard/billing/orders/{order['id']}").json()
        assert bill["table_name"] == "Table 1"
        assert bill["currency"] == "INR"
        assert bill["tax_rate"] == 0.08
        assert Decimal(bill["subtotal"]) == Decimal("300.00")
        assert Decimal(bill["tax"]) == Decimal("24.00")
        assert Decimal(bill["total"]) == Decimal("324.00")

    def test_cash_settlement_returns_change_and_frees_table(
        self, authed_client, menu_items, tables
    ):
        table_id = tables["Table 1"]["id"]
        order = place_order(authed_client, table_id, (menu_items["Chocolate Brownie"]["id"], 2)).json()

        response = authed_client.post(
            f"/dashboard/billing/orders/{order['id']}/settle",
            json={"payment_method": "cash", "amount_received": "500"},
        )
        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["change_due"]) == Decimal("176.00")
        assert body["order"]["status"] == "paid"
        assert body["payment"]["payment_method"] == "cash"
        assert body["payment"]["status"] == "completed"
        assert Decimal(body["payment"]["amount"]) == Decimal("324.00")

        table = next(t for t in authed_client.get("/dashboard/tables").json() if t["id"] == table_id)
        assert table["status"] == "available"
        assert table["current_order_id"] is None

    def test_cash_change_is_rounded_to_paise(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Chocolate Brownie"]["id"], 2)
        ).json()
        body = authed_client.post(
            f"/dashboard/billing/orders/{order['id']}/settle",
            json={"payment_method": "cash", "amount_received": "500.005"},
        ).json()
        assert Decimal(body["change_due"]) == Decimal("176.01")
        assert Decimal(body["payment"]["amount_received"]) == Decimal("500.01")

        stored = authed_client.get(f"/dashboard/orders/{order['id']}").json()["payments"][0]
        assert Decimal(stored["change_due"]) == Decimal(body["change_due"])
        assert Decimal(stored["amount_received"]) == Decimal("500.01")

    def test_calculate_change(self):
        total = Decimal("324.00")
        assert calculate_change(total, PaymentMethod.CASH, Decimal("500.004")) == (
            Decimal("500.00"),
            Decimal("176.00"),
        )
        assert calculate_change(total, PaymentMethod.CASH, None) == (total, Decimal("0.00"))
        assert calculate_change(total, PaymentMethod.CARD, Decimal("999")) == (
            total,
            Decimal("0.00"),
        )

    def test_insufficient_cash(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Chicken Biryani"]["id"], 1)
        ).json()
        response = authed_client.post(
            f"/dashboard/billing/orders/{order['id']}/settle",
            json={"payment_method": "cash", "amount_received": "100"},
        )
        assert response.status_code == 422
        assert authed_client.get(f"/dashboard/orders/{order['id']}").json()["status"] == "pending"

    def test_upi_charged_exact_total(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Chicken Biryani"]["id"], 1)
        ).json()
        body = authed_client.post(
            f"/dashboard/billing/orders/{order['id']}/settle",
            json={"payment_method": "upi", "amount_received": "1000"},
        ).json()
        assert Decimal(body["change_due"]) == 0
        assert Decimal(body["payment"]["amount_received"]) == Decimal("345.60")

    def test_paid_order_is_closed(self, authed_client, menu_items, tables):
        order = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Masala Chai"]["id"], 1)
        ).json()
        authed_client.post(
            f"/dashboard/billing/orders/{order['id']}/settle", json={"payment_method": "card"}
        )

        status_change = authed_client.patch(
            f"/dashboard/kitchen/orders/{order['id']}/status", json={"status": "preparing"}
        )
        assert status_change.status_code == 409
        settle_again = authed_client.post(
            f"/dashboard/billing/orders/{order['id']}/settle", json={"payment_method": "card"}
        )
        assert settle_again.status_code == 409
        assert authed_client.get(f"/dashboard/billing/orders/{order['id']}").status_code == 409

    def test_admin_overview_counts_paid_revenue(self, authed_client, menu_items, tables):
        paid = place_order(
            authed_client, tables["Table 1"]["id"], (menu_items["Masala Chai"]["id"], 2)
        ).json()
        place_order(authed_client, tables["Table 2"]["id"], (menu_items["Filter Coffee"]["id"], 1))
        authed_client.post(
            f"/dashboard/billing/orders/{paid['id']}/settle", json={"payment_method": "upi"}
        )

        overview = authed_client.get("/dashboard/admin/overview").json()
        assert Decimal(overview["stats"]["total_revenue"]) == Decimal("129.60")
        assert overview["stats"]["total_orders"] == 2
        assert overview["order_status_breakdown"] == {"paid": 1, "pending": 1}
        assert overview["top_selling_items"] == [{"name": "Masala Chai", "quantity": 2}]
        assert overview["payment_breakdown"][0]["name"] == "UPI"
        assert overview["digital_payment_share"] == 100.0
        assert len(overview["revenue"]["daily"]) == 7
