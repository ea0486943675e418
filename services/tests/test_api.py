"""
Restaurant Ops HTTP tests

Tests:
  1. Auth enforcement (401 on missing or tampered JWT, public health)
  2. Order flow over HTTP (create, walk statuses, pay, report)
  3. Error mapping (403 / 404 / 409 / 422)
  4. Staff administration and access bootstrap
  5. Inventory and tables endpoints
"""
import pytest

from conftest import START_NS


# ─── Test 1: Auth Enforcement ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_rejects_unauthenticated_request(client):
    r = await client.get("/menu")
    assert r.status_code == 401, r.text
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_rejects_tampered_jwt(client, as_user):
    token = as_user("server")["Authorization"] + "tampered"
    r = await client.get("/menu", headers={"Authorization": token})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_health_is_public(client):
    r = await client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["dependencies"]["store"].startswith("ok")


# ─── Test 2: Order Flow ────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_order_flow_end_to_end(client, as_user, menu, table, clock):
    r = await client.post(
        "/orders",
        json={"table_number": 4, "items": [{"menu_item_id": menu["burger"], "quantity": 2}]},
        headers=as_user("server"),
    )
    assert r.status_code == 201, r.text
    order = r.json()
    assert order["total"] == 2500
    assert order["status"] == "pending"
    assert order["waiter"] == "server"

    r = await client.get("/orders/kitchen", headers=as_user("chef"))
    assert [o["id"] for o in r.json()] == [order["id"]]

    for principal, status in (
        ("chef", "preparing"), ("chef", "ready"), ("server", "served"), ("server", "completed"),
    ):
        r = await client.put(
            f"/orders/{order['id']}/status", json={"status": status}, headers=as_user(principal)
        )
        assert r.status_code == 200, r.text
        assert r.json()["status"] == status

    r = await client.post(
        "/transactions",
        json={"amount": 2500, "payment_method": "Card", "order_id": order["id"]},
        headers=as_user("server"),
    )
    assert r.status_code == 201, r.text
    assert r.json()["timestamp"] == START_NS

    r = await client.get("/reports/financial", params={"period": "daily"}, headers=as_user("boss"))
    assert r.status_code == 200
    report = r.json()
    assert report["total_revenue"] == 2500
    assert report["completed_orders"] == 1
    assert report["average_order_value"] == 2500
    assert report["payment_methods"] == [
        {"payment_method": "Card", "revenue": 2500, "percentage": 100.0}
    ]

    r = await client.get("/orders/active", headers=as_user("server"))
    assert r.json() == []


# ─── Test 3: Error Mapping ─────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_forbidden_carries_roles(client, as_user):
    r = await client.post(
        "/menu", json={"name": "Cake", "category": "dessert", "price": 600}, headers=as_user("chef")
    )
    assert r.status_code == 403
    body = r.json()
    assert body["required_roles"] == ["manager"]
    assert body["caller_role"] == "cook"


@pytest.mark.asyncio
async def test_invalid_transition_is_conflict(client, as_user, menu):
    r = await client.post(
        "/orders", json={"items": [{"menu_item_id": menu["soda"], "quantity": 1}]},
        headers=as_user("server"),
    )
    order_id = r.json()["id"]
    r = await client.put(f"/orders/{order_id}/status", json={"status": "served"}, headers=as_user("boss"))
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_domain_validation_is_unprocessable(client, as_user, menu):
    r = await client.post(
        "/orders", json={"items": [{"menu_item_id": menu["soda"], "quantity": 0}]},
        headers=as_user("server"),
    )
    assert r.status_code == 422
    r = await client.post(
        "/menu", json={"name": "Cake", "category": "dessert", "price": -1}, headers=as_user("boss")
    )
    assert r.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/menu/99", "/orders/99", "/tables/99", "/transactions/99", "/suppliers/99"])
async def test_missing_entities_are_not_found(client, as_user, path):
    r = await client.get(path, headers=as_user("boss"))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_missing_entity_on_update_is_not_found(client, as_user):
    r = await client.put("/inventory/7/quantity", json={"quantity": 1}, headers=as_user("boss"))
    assert r.status_code == 404


# ─── Test 4: Staff and Access ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_access_bootstrap_and_role_queries(client, as_user):
    r = await client.post("/access/initialize", headers=as_user("newcomer"))
    assert r.json() == {"principal": "newcomer", "role": "user", "is_admin": False}

    r = await client.get("/access/is-admin", headers=as_user("boss"))
    assert r.json() is True

    r = await client.get("/access/sections", headers=as_user("chef"))
    assert r.json() == ["kitchen", "menu", "inventory"]


@pytest.mark.asyncio
async def test_staff_administration(client, as_user):
    r = await client.post(
        "/staff", json={"principal": "nobody", "name": "Noor", "role": "waiter"}, headers=as_user("boss")
    )
    assert r.status_code == 201, r.text

    r = await client.put("/staff/nobody", json={"name": "Noor", "role": "cook"}, headers=as_user("boss"))
    assert r.json()["restaurant_role"] == "cook"

    r = await client.get("/staff", headers=as_user("boss"))
    assert [m["principal"] for m in r.json()] == ["boss", "chef", "nobody", "server"]

    r = await client.get("/staff", headers=as_user("server"))
    assert r.status_code == 403

    r = await client.put("/staff/nobody/system-role", json={"role": "admin"}, headers=as_user("boss"))
    assert r.status_code == 204
    r = await client.get("/access/role", headers=as_user("nobody"))
    assert r.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_profile_endpoints(client, as_user):
    r = await client.get("/profile/me", headers=as_user("intern"))
    assert r.status_code == 200
    assert r.json() is None

    r = await client.put("/profile/me", json={"name": "Ines"}, headers=as_user("intern"))
    assert r.json() == {"name": "Ines", "restaurant_role": None}

    r = await client.put(
        "/profile/me", json={"name": "Ines", "restaurant_role": "waiter"}, headers=as_user("intern")
    )
    assert r.status_code == 200
    assert r.json()["restaurant_role"] == "waiter"

    r = await client.put(
        "/profile/me", json={"name": "Ines", "restaurant_role": "manager"}, headers=as_user("intern")
    )
    assert r.status_code == 403

    r = await client.get("/profile/intern", headers=as_user("server"))
    assert r.status_code == 403
    r = await client.get("/profile/intern", headers=as_user("boss"))
    assert r.json()["name"] == "Ines"


# ─── Test 5: Inventory and Tables ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_inventory_low_stock_over_http(client, as_user):
    r = await client.post(
        "/suppliers", json={"name": "Dairy Farm", "contact_info": "+1 555 0100"}, headers=as_user("boss")
    )
    supplier_id = r.json()["id"]
    r = await client.post(
        "/inventory",
        json={"name": "Milk", "supplier_id": supplier_id, "low_stock_threshold": 5, "quantity": 8},
        headers=as_user("boss"),
    )
    assert r.status_code == 201, r.text
    item = r.json()
    assert item["low_stock"] is False

    r = await client.put(f"/inventory/{item['id']}/quantity", json={"quantity": 2}, headers=as_user("boss"))
    assert r.json()["low_stock"] is True

    r = await client.get("/inventory/low-stock", headers=as_user("chef"))
    assert [i["name"] for i in r.json()] == ["Milk"]


@pytest.mark.asyncio
async def test_table_endpoints(client, as_user, table):
    r = await client.post("/tables", json={"number": 4, "capacity": 6}, headers=as_user("server"))
    assert r.status_code == 422

    r = await client.put("/tables/4/status", json={"status": "occupied"}, headers=as_user("server"))
    assert r.json()["status"] == "occupied"

    r = await client.get("/tables/available", headers=as_user("server"))
    assert r.json() == []

    r = await client.put("/tables/4/status", json={"status": "reserved"}, headers=as_user("server"))
    assert r.status_code == 409
