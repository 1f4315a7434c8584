from conftest import make_item, make_supplier


def test_create_defaults_category_and_reports_low_stock(client, auth_headers):
    item = make_item(client, auth_headers, category=None, quantity=2, reorderLevel=5)
    assert item["category"] == "Other"
    assert item["unitPrice"] == 12.75
    assert item["isLowStock"] is True


def test_list_and_get(client, auth_headers):
    created = make_item(client, auth_headers)
    res = client.get("/api/inventory", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["total"] == 1
    assert res.json()["data"][0]["sku"] == "WID-001"

    one = client.get(f"/api/inventory/{created['id']}", headers=auth_headers)
    assert one.json()["data"]["productName"] == "Widget A"


def test_duplicate_sku_within_tenant(client, auth_headers):
    make_item(client, auth_headers)
    res = client.post("/api/inventory", json={
        "productName": "Other", "sku": "WID-001", "quantity": 1, "unitPrice": 1, "reorderLevel": 0,
    }, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "DuplicateSku"


def test_same_sku_allowed_for_another_tenant(client, auth_headers, other_headers):
    make_item(client, auth_headers)
    make_item(client, other_headers)


def test_update_sku_to_existing_one_is_rejected(client, auth_headers):
    make_item(client, auth_headers)
    second = make_item(client, auth_headers, sku="GAD-002")
    res = client.put(f"/api/inventory/{second['id']}", json={"sku": "WID-001"}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "DuplicateSku"


def test_partial_update(client, auth_headers):
    item = make_item(client, auth_headers)
    res = client.put(f"/api/inventory/{item['id']}", json={"quantity": 42}, headers=auth_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["quantity"] == 42
    assert data["productName"] == "Widget A"


def test_update_cannot_null_required_column(client, auth_headers):
    item = make_item(client, auth_headers)
    res = client.put(f"/api/inventory/{item['id']}", json={"productName": None}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "ValidationError"


def test_negative_quantity_is_a_validation_error(client, auth_headers):
    res = client.post("/api/inventory", json={
        "productName": "Bad", "sku": "BAD-1", "quantity": -1, "unitPrice": 1, "reorderLevel": 0,
    }, headers=auth_headers)
    assert res.status_code == 400
    assert any(d["field"] == "quantity" for d in res.json()["details"])


def test_low_stock_boundary(client, auth_headers):
    make_item(client, auth_headers, sku="A", productName="Four", quantity=4, reorderLevel=5)
    make_item(client, auth_headers, sku="B", productName="Five", quantity=5, reorderLevel=5)
    make_item(client, auth_headers, sku="C", productName="Six", quantity=6, reorderLevel=5)

    res = client.get("/api/inventory/alerts/low-stock", headers=auth_headers)
    assert res.status_code == 200
    assert [i["sku"] for i in res.json()["data"]] == ["A", "B"]


def test_list_by_category(client, auth_headers):
    make_item(client, auth_headers, sku="E1", category="Electronics")
    make_item(client, auth_headers, sku="H1", category="Hardware")
    res = client.get("/api/inventory/category/Hardware", headers=auth_headers)
    assert [i["sku"] for i in res.json()["data"]] == ["H1"]


def test_delete(client, auth_headers):
    item = make_item(client, auth_headers)
    res = client.delete(f"/api/inventory/{item['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert client.get(f"/api/inventory/{item['id']}", headers=auth_headers).status_code == 404


def test_delete_refused_while_orders_reference_item(client, auth_headers):
    item = make_item(client, auth_headers)
    order = client.post("/api/sales-orders", json={
        "orderNumber": "SO-1",
        "customerName": "Walk-in",
        "items": [{"inventoryId": item["id"], "quantity": 1}],
    }, headers=auth_headers)
    assert order.status_code == 201, order.text

    res = client.delete(f"/api/inventory/{item['id']}", headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "InventoryInUse"


def test_adjust_stock(client, auth_headers):
    item = make_item(client, auth_headers, quantity=10)
    res = client.post(f"/api/inventory/{item['id']}/adjust", json={"delta": 5}, headers=auth_headers)
    assert res.json()["data"]["quantity"] == 15

    res = client.post(f"/api/inventory/{item['id']}/adjust", json={"delta": -16}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "InsufficientStock"
    current = client.get(f"/api/inventory/{item['id']}", headers=auth_headers).json()["data"]
    assert current["quantity"] == 15


def test_supplier_link_must_be_owned(client, auth_headers, other_headers):
    foreign = make_supplier(client, other_headers)
    res = client.post("/api/inventory", json={
        "productName": "Linked", "sku": "L-1", "quantity": 1, "unitPrice": 1, "reorderLevel": 0,
        "supplierId": foreign["id"],
    }, headers=auth_headers)
    assert res.status_code == 404

    mine = make_supplier(client, auth_headers)
    item = make_item(client, auth_headers, supplierId=mine["id"])
    assert item["supplierId"] == mine["id"]
