"""Category, dish and subtag API tests."""
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.dish import Dish

from conftest import TENANT_HEADER


MENU = {TENANT_HEADER: "sabor.james.pe"}


async def create_category(client: AsyncClient, headers: dict, name: str = "Platos de Fondo") -> dict:
    response = await client.post("/api/v1/categories", headers=headers, json={"name": name})
    assert response.status_code == 201
    return response.json()["data"]


async def create_subtag(client: AsyncClient, headers: dict, name: str) -> dict:
    response = await client.post("/api/v1/subtags", headers=headers, json={"name": name})
    assert response.status_code == 201
    return response.json()["data"]


async def create_dish(client: AsyncClient, headers: dict, category_id: str, **fields) -> dict:
    payload = {
        "name": "Lomo Saltado",
        "description": "Trozos de lomo salteados al wok",
        "price": "32.50",
        "categoryId": category_id,
    }
    payload.update(fields)
    response = await client.post("/api/v1/dishes", headers=headers, json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


# Categories

@pytest.mark.asyncio
async def test_create_category_generates_slug(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers, "Postres Clásicos")
    assert category["slug"] == "postres-clasicos"
    assert category["tenantId"] == tenant.id

    response = await client.get("/api/v1/categories/slug/postres-clasicos", headers=MENU)
    assert response.status_code == 200
    assert response.json()["data"]["id"] == category["id"]


@pytest.mark.asyncio
async def test_duplicate_category(client: AsyncClient, tenant, admin_headers):
    await create_category(client, admin_headers, "Bebidas")
    response = await client.post("/api/v1/categories", headers=admin_headers, json={"name": "bebidas"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_categories_is_public_with_dish_counts(client: AsyncClient, tenant, admin_headers):
    fondo = await create_category(client, admin_headers, "Fondo")
    await create_category(client, admin_headers, "Entradas")
    await create_dish(client, admin_headers, fondo["id"])

    response = await client.get("/api/v1/categories", headers=MENU)
    assert response.status_code == 200
    counts = {c["name"]: c["dishCount"] for c in response.json()["data"]}
    assert counts == {"Fondo": 1, "Entradas": 0}


@pytest.mark.asyncio
async def test_catalog_mutation_requires_admin(client: AsyncClient, tenant, manager_headers):
    response = await client.post("/api/v1/categories", headers=manager_headers, json={"name": "Sopas"})
    assert response.status_code == 403

    response = await client.post("/api/v1/categories", headers=MENU, json={"name": "Sopas"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_category_with_dish_cannot_be_deleted(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers)
    dish = await create_dish(client, admin_headers, category["id"])

    response = await client.delete(f"/api/v1/categories/{category['id']}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["dishCount"] == 1

    response = await client.delete(f"/api/v1/dishes/{dish['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.delete(f"/api/v1/categories/{category['id']}", headers=admin_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_category_regenerates_slug(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers, "Sopas")
    response = await client.put(
        f"/api/v1/categories/{category['id']}", headers=admin_headers, json={"name": "Sopas Criollas"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["slug"] == "sopas-criollas"


@pytest.mark.asyncio
async def test_reorder_categories(client: AsyncClient, tenant, admin_headers):
    a = await create_category(client, admin_headers, "Alfa")
    b = await create_category(client, admin_headers, "Beta")
    c = await create_category(client, admin_headers, "Gamma")

    response = await client.post(
        "/api/v1/categories/reorder", headers=admin_headers, json={"ids": [c["id"], a["id"], b["id"]]}
    )
    assert response.status_code == 200

    response = await client.get("/api/v1/categories", headers=MENU)
    assert [x["name"] for x in response.json()["data"]] == ["Gamma", "Alfa", "Beta"]


@pytest.mark.asyncio
async def test_reorder_with_unknown_id_changes_nothing(client: AsyncClient, tenant, admin_headers):
    a = await create_category(client, admin_headers, "Alfa")
    b = await create_category(client, admin_headers, "Beta")

    response = await client.post(
        "/api/v1/categories/reorder", headers=admin_headers, json={"ids": [b["id"], "missing", a["id"]]}
    )
    assert response.status_code == 404

    response = await client.get("/api/v1/categories", headers=MENU)
    assert [x["sortOrder"] for x in response.json()["data"]] == [0, 0]


@pytest.mark.asyncio
async def test_categories_are_tenant_scoped(client: AsyncClient, tenant, other_tenant, admin_headers, other_admin_headers):
    category = await create_category(client, admin_headers, "Fondo")

    response = await client.get(f"/api/v1/categories/{category['id']}", headers={TENANT_HEADER: "otro.james.pe"})
    assert response.status_code == 404

    response = await client.delete(f"/api/v1/categories/{category['id']}", headers=other_admin_headers)
    assert response.status_code == 404

    response = await client.get("/api/v1/categories", headers={**other_admin_headers, **MENU})
    assert response.status_code == 403


# Dishes

@pytest.mark.asyncio
async def test_create_dish_with_subtags(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers)
    picante = await create_subtag(client, admin_headers, "Picante")

    dish = await create_dish(client, admin_headers, category["id"], subtagIds=[picante["id"]])
    assert dish["slug"] == "lomo-saltado"
    assert dish["category"]["id"] == category["id"]
    assert dish["subtags"] == [{"id": picante["id"], "name": "Picante"}]

    response = await client.get("/api/v1/dishes/slug/lomo-saltado", headers=MENU)
    assert response.status_code == 200
    assert response.json()["data"]["subtags"][0]["name"] == "Picante"


@pytest.mark.asyncio
async def test_create_dish_rejects_foreign_references(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers)

    response = await client.post("/api/v1/dishes", headers=admin_headers, json={
        "name": "Ceviche", "price": "28.00", "categoryId": "missing",
    })
    assert response.status_code == 404

    response = await client.post("/api/v1/dishes", headers=admin_headers, json={
        "name": "Ceviche", "price": "28.00", "categoryId": category["id"], "subtagIds": ["nope"],
    })
    assert response.status_code == 400
    assert response.json()["unknown"] == ["nope"]


@pytest.mark.asyncio
async def test_duplicate_dish(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers)
    await create_dish(client, admin_headers, category["id"])
    response = await client.post("/api/v1/dishes", headers=admin_headers, json={
        "name": "Lomo saltado", "price": "30.00", "categoryId": category["id"],
    })
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_dishes_filters(client: AsyncClient, tenant, admin_headers):
    fondo = await create_category(client, admin_headers, "Fondo")
    postres = await create_category(client, admin_headers, "Postres")
    await create_dish(client, admin_headers, fondo["id"], name="Ají de Gallina", isFeatured=True)
    await create_dish(client, admin_headers, fondo["id"], name="Arroz con Pollo")
    await create_dish(client, admin_headers, postres["id"], name="Suspiro Limeño", description="Manjar blanco con merengue")

    response = await client.get("/api/v1/dishes", headers=MENU)
    body = response.json()
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["limit"] == 10

    response = await client.get("/api/v1/dishes", headers=MENU, params={"categoryId": postres["id"]})
    assert [d["name"] for d in response.json()["data"]] == ["Suspiro Limeño"]

    response = await client.get("/api/v1/dishes", headers=MENU, params={"isFeatured": "true"})
    assert [d["name"] for d in response.json()["data"]] == ["Ají de Gallina"]

    response = await client.get("/api/v1/dishes", headers=MENU, params={"search": "merengue"})
    assert [d["name"] for d in response.json()["data"]] == ["Suspiro Limeño"]

    response = await client.get("/api/v1/dishes", headers=MENU, params={"limit": 2, "page": 2})
    assert len(response.json()["data"]) == 1
    assert response.json()["pagination"]["totalPages"] == 2


@pytest.mark.asyncio
async def test_update_dish(client: AsyncClient, tenant, admin_headers):
    fondo = await create_category(client, admin_headers, "Fondo")
    criollos = await create_category(client, admin_headers, "Criollos")
    dish = await create_dish(client, admin_headers, fondo["id"])

    response = await client.put(f"/api/v1/dishes/{dish['id']}", headers=admin_headers, json={
        "price": "35.00", "categoryId": criollos["id"], "isActive": False,
    })
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["price"] == "35.00"
    assert data["isActive"] is False
    assert data["category"]["name"] == "Criollos"


@pytest.mark.asyncio
async def test_reorder_dishes(client: AsyncClient, tenant, admin_headers):
    category = await create_category(client, admin_headers)
    first = await create_dish(client, admin_headers, category["id"], name="Causa Limeña")
    second = await create_dish(client, admin_headers, category["id"], name="Papa a la Huancaína")

    response = await client.post(
        "/api/v1/dishes/reorder", headers=admin_headers, json={"ids": [second["id"], first["id"]]}
    )
    assert response.status_code == 200

    response = await client.get("/api/v1/dishes", headers=MENU)
    assert [d["id"] for d in response.json()["data"]] == [second["id"], first["id"]]


# Subtags

@pytest.mark.asyncio
async def test_duplicate_subtag_is_case_insensitive(client: AsyncClient, tenant, admin_headers):
    await create_subtag(client, admin_headers, "Vegano")

    response = await client.post("/api/v1/subtags", headers=admin_headers, json={"name": "vegano"})
    assert response.status_code == 409
    assert response.json()["error"] == "Duplicate subtag name"

    response = await client.post("/api/v1/subtags", headers=admin_headers, json={"name": "  Vegano  "})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_duplicate_subtag_name_non_ascii(client: AsyncClient, tenant, admin_headers):
    await create_subtag(client, admin_headers, "Ñoqui")

    response = await client.post("/api/v1/subtags", headers=admin_headers, json={"name": "ñoqui"})
    assert response.status_code == 409
    assert response.json()["error"] == "Duplicate subtag name"


@pytest.mark.asyncio
async def test_same_subtag_name_in_other_tenant(client: AsyncClient, tenant, other_tenant, admin_headers, other_admin_headers):
    await create_subtag(client, admin_headers, "Vegano")
    await create_subtag(client, other_admin_headers, "Vegano")


@pytest.mark.asyncio
async def test_subtag_name_length(client: AsyncClient, tenant, admin_headers):
    response = await client.post("/api/v1/subtags", headers=admin_headers, json={"name": " a "})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rename_subtag(client: AsyncClient, tenant, admin_headers):
    vegano = await create_subtag(client, admin_headers, "Vegano")
    await create_subtag(client, admin_headers, "Picante")

    response = await client.patch(f"/api/v1/subtags/{vegano['id']}", headers=admin_headers, json={"name": "VEGANO"})
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "VEGANO"

    response = await client.patch(f"/api/v1/subtags/{vegano['id']}", headers=admin_headers, json={"name": "picante"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_subtag_unlinks_dishes(client: AsyncClient, db_session: AsyncSession, tenant, admin_headers):
    category = await create_category(client, admin_headers)
    vegano = await create_subtag(client, admin_headers, "Vegano")
    picante = await create_subtag(client, admin_headers, "Picante")
    dish = await create_dish(client, admin_headers, category["id"], subtagIds=[vegano["id"], picante["id"]])

    response = await client.delete(f"/api/v1/subtags/{vegano['id']}", headers=admin_headers)
    assert response.status_code == 200

    result = await db_session.execute(select(Dish.subtag_ids).where(Dish.id == dish["id"]))
    assert result.scalar_one() == [picante["id"]]

    response = await client.get("/api/v1/subtags", headers=admin_headers)
    assert [s["name"] for s in response.json()["data"]] == ["Picante"]


@pytest.mark.asyncio
async def test_dishes_are_tenant_scoped(client: AsyncClient, tenant, other_tenant, admin_headers, other_admin_headers):
    category = await create_category(client, admin_headers)
    dish = await create_dish(client, admin_headers, category["id"])

    response = await client.get(f"/api/v1/dishes/{dish['id']}", headers=other_admin_headers)
    assert response.status_code == 404

    response = await client.put(
        f"/api/v1/dishes/{dish['id']}", headers=other_admin_headers, json={"name": "Ceviche", "price": "28.00"}
    )
    assert response.status_code == 404

    response = await client.delete(f"/api/v1/dishes/{dish['id']}", headers=other_admin_headers)
    assert response.status_code == 404

    response = await client.get(f"/api/v1/dishes/{dish['id']}", headers=MENU)
    assert response.json()["data"]["name"] == "Lomo Saltado"


@pytest.mark.asyncio
async def test_subtags_are_tenant_scoped(client: AsyncClient, tenant, other_tenant, admin_headers, other_admin_headers):
    vegano = await create_subtag(client, admin_headers, "Vegano")

    response = await client.get(f"/api/v1/subtags/{vegano['id']}", headers=other_admin_headers)
    assert response.status_code == 404

    response = await client.patch(
        f"/api/v1/subtags/{vegano['id']}", headers=other_admin_headers, json={"name": "Picante"}
    )
    assert response.status_code == 404

    response = await client.delete(f"/api/v1/subtags/{vegano['id']}", headers=other_admin_headers)
    assert response.status_code == 404

    response = await client.get(f"/api/v1/subtags/{vegano['id']}", headers=admin_headers)
    assert response.json()["data"]["name"] == "Vegano"
