from datetime import datetime

from conftest import make_customer, make_item
from models.sales_order import SalesOrder


def _order(client, headers, **overrides):
    body = {"orderNumber": "SO-2025-001", "customerName": "Walk-in"}
    body.update(overrides)
    return client.post("/api/sales-orders", json=body, headers=headers)


def _stock(client, headers, item_id):
    return client.get(f"/api/inventory/{item_id}", headers=headers).json()["data"]["quantity"]


def test_total_is_computed_from_lines_and_stock_is_taken(client, auth_headers):
    item = make_item(client, auth_headers, quantity=10, unitPrice=12.75)
    res = _order(client, auth_headers, totalAmount=999, items=[{"inventoryId": item["id"], "quantity": 2}])
    assert res.status_code == 201, res.text
    data = res.json()["data"]
    assert data["subtotal"] == 25.5
    assert data["totalAmount"] == 25.5
    assert data["status"] == "PENDING"
    assert data["items"][0]["unitPrice"] == 12.75
    assert data["items"][0]["totalPrice"] == 25.5
    assert data["items"][0]["inventory"]["sku"] == "WID-001"
    assert _stock(client, auth_headers, item["id"]) == 8


def test_tax_and_shipping(client, auth_headers):
    item = make_item(client, auth_headers, quantity=10, unitPrice=50)
    res = _order(client, auth_headers, taxRate=18, shippingCost=5,
                 items=[{"inventoryId": item["id"], "quantity": 2}])
    data = res.json()["data"]
    assert data["subtotal"] == 100.0
    assert data["taxAmount"] == 18.0
    assert data["shippingCost"] == 5.0
    assert data["totalAmount"] == 123.0


def test_line_price_override_is_snapshotted(client, auth_headers):
    item = make_item(client, auth_headers, unitPrice=10)
    res = _order(client, auth_headers, items=[{"inventoryId": item["id"], "quantity": 3, "unitPrice": 9.99}])
    order = res.json()["data"]
    assert order["totalAmount"] == 29.97

    client.put(f"/api/inventory/{item['id']}", json={"unitPrice": 20}, headers=auth_headers)
    again = client.get(f"/api/sales-orders/{order['id']}", headers=auth_headers).json()["data"]
    assert again["items"][0]["unitPrice"] == 9.99


def test_insufficient_stock_writes_nothing(client, auth_headers):
    item = make_item(client, auth_headers, quantity=3)
    res = _order(client, auth_headers, items=[
        {"inventoryId": item["id"], "quantity": 2},
        {"inventoryId": item["id"], "quantity": 2},
    ])
    assert res.status_code == 400
    assert res.json()["code"] == "InsufficientStock"
    assert client.get("/api/sales-orders", headers=auth_headers).json()["data"] == []
    assert _stock(client, auth_headers, item["id"]) == 3


def test_header_only_order_needs_total(client, auth_headers):
    missing = _order(client, auth_headers)
    assert missing.status_code == 400
    assert missing.json()["code"] == "ValidationError"

    res = _order(client, auth_headers, totalAmount=159.97)
    assert res.status_code == 201
    assert res.json()["data"]["totalAmount"] == 159.97


def test_customer_name_or_id_is_required(client, auth_headers):
    res = client.post("/api/sales-orders", json={"orderNumber": "SO-1", "totalAmount": 1}, headers=auth_headers)
    assert res.status_code == 400


def test_duplicate_order_number(client, auth_headers, other_headers):
    assert _order(client, auth_headers, totalAmount=1).status_code == 201
    dup = _order(client, auth_headers, totalAmount=2)
    assert dup.status_code == 400
    assert dup.json()["code"] == "DuplicateOrderNumber"
    assert _order(client, other_headers, totalAmount=2).status_code == 201


def test_customer_snapshot_survives_rename(client, auth_headers):
    customer = make_customer(client, auth_headers, name="Jane Smith", email="jane@example.com")
    order = client.post("/api/sales-orders", json={
        "orderNumber": "SO-9", "customerId": customer["id"], "totalAmount": 10,
    }, headers=auth_headers).json()["data"]
    assert order["customerName"] == "Jane Smith"
    assert order["customerEmail"] == "jane@example.com"
    assert order["customer"]["id"] == customer["id"]

    client.put(f"/api/customers/{customer['id']}", json={"name": "Jane Doe"}, headers=auth_headers)
    again = client.get(f"/api/sales-orders/{order['id']}", headers=auth_headers).json()["data"]
    assert again["customerName"] == "Jane Smith"
    assert again["customer"]["name"] == "Jane Doe"


def test_status_filter(client, auth_headers):
    _order(client, auth_headers, orderNumber="SO-1", totalAmount=1)
    _order(client, auth_headers, orderNumber="SO-2", totalAmount=1, status="shipped")

    res = client.get("/api/sales-orders/status/pending", headers=auth_headers)
    assert [o["orderNumber"] for o in res.json()["data"]] == ["SO-1"]

    bogus = client.get("/api/sales-orders/status/BOGUS", headers=auth_headers)
    assert bogus.status_code == 400
    assert bogus.json()["code"] == "InvalidStatus"


def test_update_status_and_reject_unknown(client, auth_headers):
    order = _order(client, auth_headers, totalAmount=1).json()["data"]
    res = client.put(f"/api/sales-orders/{order['id']}", json={"status": "delivered"}, headers=auth_headers)
    assert res.json()["data"]["status"] == "DELIVERED"

    bad = client.put(f"/api/sales-orders/{order['id']}", json={"status": "LOST"}, headers=auth_headers)
    assert bad.status_code == 400
    assert bad.json()["code"] == "InvalidStatus"


def test_replacing_items_moves_stock_and_totals(client, auth_headers):
    first = make_item(client, auth_headers, sku="A", quantity=10, unitPrice=5)
    second = make_item(client, auth_headers, sku="B", quantity=10, unitPrice=2)
    order = _order(client, auth_headers, items=[{"inventoryId": first["id"], "quantity": 4}]).json()["data"]
    assert _stock(client, auth_headers, first["id"]) == 6

    res = client.put(f"/api/sales-orders/{order['id']}", json={
        "items": [{"inventoryId": first["id"], "quantity": 1}, {"inventoryId": second["id"], "quantity": 3}],
    }, headers=auth_headers)
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert len(data["items"]) == 2
    assert data["totalAmount"] == 11.0
    assert _stock(client, auth_headers, first["id"]) == 9
    assert _stock(client, auth_headers, second["id"]) == 7


def test_update_order_number_collision(client, auth_headers):
    _order(client, auth_headers, orderNumber="SO-1", totalAmount=1)
    second = _order(client, auth_headers, orderNumber="SO-2", totalAmount=1).json()["data"]
    res = client.put(f"/api/sales-orders/{second['id']}", json={"orderNumber": "SO-1"}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "DuplicateOrderNumber"


def test_delete(client, auth_headers):
    order = _order(client, auth_headers, totalAmount=1).json()["data"]
    assert client.delete(f"/api/sales-orders/{order['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/sales-orders/{order['id']}", headers=auth_headers).status_code == 404


def test_date_range_is_inclusive(client, auth_headers):
    _order(client, auth_headers, orderNumber="JAN-01", totalAmount=1, orderDate="2025-01-01T00:00:00")
    _order(client, auth_headers, orderNumber="JAN-15", totalAmount=1, orderDate="2025-01-15T18:30:00")
    _order(client, auth_headers, orderNumber="FEB-01", totalAmount=1, orderDate="2025-02-01T08:00:00")

    res = client.get("/api/sales-orders/date-range?startDate=2025-01-01&endDate=2025-01-15", headers=auth_headers)
    assert [o["orderNumber"] for o in res.json()["data"]] == ["JAN-15", "JAN-01"]

    via_list = client.get("/api/sales-orders?startDate=2025-01-10", headers=auth_headers)
    assert [o["orderNumber"] for o in via_list.json()["data"]] == ["FEB-01", "JAN-15"]


def test_date_range_rejects_bad_dates(client, auth_headers):
    res = client.get("/api/sales-orders/date-range?startDate=yesterday&endDate=2025-01-15", headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "ValidationError"
    missing = client.get("/api/sales-orders/date-range?startDate=2025-01-01", headers=auth_headers)
    assert missing.status_code == 400


def test_end_to_end_scenario(client, auth_headers):
    item = make_item(client, auth_headers, sku="WID-001", quantity=6, reorderLevel=5)
    customer = make_customer(client, auth_headers)
    order = client.post("/api/sales-orders", json={
        "orderNumber": "SO-2025-100",
        "customerId": customer["id"],
        "items": [{"inventoryId": item["id"], "quantity": 2}],
    }, headers=auth_headers)
    assert order.status_code == 201

    low = client.get("/api/inventory/alerts/low-stock", headers=auth_headers).json()["data"]
    assert [i["sku"] for i in low] == ["WID-001"]

    summary = client.get("/api/dashboard/summary", headers=auth_headers).json()["data"]
    assert summary["inventoryItems"] == 1
    assert summary["lowStockItems"] == 1
    assert summary["salesOrdersByStatus"]["PENDING"] == 1
    assert summary["salesRevenue"] == 25.5


def test_two_line_total_is_stable(client, auth_headers):
    a = make_item(client, auth_headers, sku="A", quantity=100, unitPrice=10)
    b = make_item(client, auth_headers, sku="B", quantity=100, unitPrice=5.5)
    for n in range(3):
        res = _order(client, auth_headers, orderNumber=f"SO-{n}", items=[
            {"inventoryId": a["id"], "quantity": 2, "unitPrice": 10.00},
            {"inventoryId": b["id"], "quantity": 1, "unitPrice": 5.50},
        ])
        assert res.status_code == 201, res.text
        assert res.json()["data"]["totalAmount"] == 25.5


def test_low_stock_order_total_and_duplicate_sku(client, auth_headers):
    item = make_item(client, auth_headers, sku="WID-001", quantity=10, reorderLevel=20)
    low = client.get("/api/inventory/alerts/low-stock", headers=auth_headers).json()["data"]
    assert [i["sku"] for i in low] == ["WID-001"]

    order = _order(client, auth_headers, items=[{"inventoryId": item["id"], "quantity": 3}])
    assert order.status_code == 201, order.text
    assert order.json()["data"]["totalAmount"] == round(3 * item["unitPrice"], 2)

    dup = client.post("/api/inventory", json={
        "productName": "Widget Again", "sku": "WID-001", "category": "Electronics",
        "quantity": 1, "unitPrice": 1, "reorderLevel": 0,
    }, headers=auth_headers)
    assert dup.status_code == 400
    assert dup.json()["code"] == "DuplicateSku"


def test_status_filter_is_newest_first(client, db_session, auth_headers):
    for number in ("SO-A", "SO-B", "SO-C"):
        _order(client, auth_headers, orderNumber=number, totalAmount=1)
    _order(client, auth_headers, orderNumber="SO-D", totalAmount=1, status="cancelled")

    stamps = {"SO-A": datetime(2025, 1, 1), "SO-B": datetime(2025, 3, 1), "SO-C": datetime(2025, 2, 1)}
    for number, stamp in stamps.items():
        db_session.query(SalesOrder).filter_by(order_number=number).update({"created_at": stamp})
    db_session.commit()

    res = client.get("/api/sales-orders/status/PENDING", headers=auth_headers)
    assert [o["orderNumber"] for o in res.json()["data"]] == ["SO-B", "SO-C", "SO-A"]


def test_header_only_order_keeps_total_in_step_with_tax_and_shipping(client, auth_headers):
    order = _order(client, auth_headers, totalAmount=10).json()["data"]
    path = f"/api/sales-orders/{order['id']}"

    res = client.put(path, json={"shippingCost": 5, "taxRate": 10}, headers=auth_headers)
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["subtotal"] == 10.0
    assert data["taxAmount"] == 1.0
    assert data["shippingCost"] == 5.0
    assert data["totalAmount"] == 16.0

    # A new amount keeps the rate already on the order and takes the new shipping
    data = client.put(path, json={"totalAmount": 20, "shippingCost": 2}, headers=auth_headers).json()["data"]
    assert data["subtotal"] == 20.0
    assert data["taxRate"] == 10.0
    assert data["taxAmount"] == 2.0
    assert data["shippingCost"] == 2.0
    assert data["totalAmount"] == 24.0

    created = _order(client, auth_headers, orderNumber="SO-2", totalAmount=100, taxRate=18, shippingCost=5)
    data = created.json()["data"]
    assert data["subtotal"] == 100.0
    assert data["shippingCost"] == 5.0
    assert data["totalAmount"] == 123.0


def test_clearing_items_needs_a_new_total(client, auth_headers):
    item = make_item(client, auth_headers, quantity=10, unitPrice=5)
    order = _order(client, auth_headers, items=[{"inventoryId": item["id"], "quantity": 2}]).json()["data"]
    path = f"/api/sales-orders/{order['id']}"

    refused = client.put(path, json={"items": []}, headers=auth_headers)
    assert refused.status_code == 400
    assert refused.json()["code"] == "ValidationError"
    kept = client.get(path, headers=auth_headers).json()["data"]
    assert len(kept["items"]) == 1
    assert kept["totalAmount"] == 10.0
    assert _stock(client, auth_headers, item["id"]) == 8

    res = client.put(path, json={"items": [], "totalAmount": 7.5}, headers=auth_headers)
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["items"] == []
    assert data["subtotal"] == 7.5
    assert data["totalAmount"] == 7.5
    assert _stock(client, auth_headers, item["id"]) == 10
