"""Tests for business settings and staff endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

OWNER = {
    "authUserId": "owner-1",
    "role": "owner",
    "fullName": "Laura Martínez",
    "email": "laura@clinica.mx",
    "phone": "555",
}


@pytest.mark.asyncio
async def test_settings_flow_inserts_then_updates(api_client: AsyncClient) -> None:
    await api_client.post("/api/onboarding", json=OWNER)

    empty = await api_client.get("/api/business", params={"authUserId": "owner-1"})
    assert empty.status_code == 200
    body = empty.json()
    assert body["business"] == {"id": None, "name": "", "description": "", "logoUrl": ""}
    assert isinstance(body["ownerId"], int)

    created = await api_client.put(
        "/api/business",
        json={"authUserId": "owner-1", "businessName": "Clínica Norte", "description": "Consultas"},
    )
    assert created.status_code == 200
    business_id = created.json()["businessId"]

    updated = await api_client.put(
        "/api/business",
        json={
            "authUserId": "owner-1",
            "businessId": business_id,
            "businessName": "Clínica Sur",
            "logoUrl": "https://cdn.mx/logo.png",
        },
    )
    assert updated.json() == {"success": True, "businessId": business_id}

    current = (await api_client.get("/api/business", params={"authUserId": "owner-1"})).json()
    assert current["business"] == {
        "id": business_id,
        "name": "Clínica Sur",
        "description": "",
        "logoUrl": "https://cdn.mx/logo.png",
    }


@pytest.mark.asyncio
async def test_settings_get_looks_up_owner_once(
    api_client: AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await api_client.post("/api/onboarding", json=OWNER)
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany) -> None:
        statements.append(statement)

    engine = session_factory.kw["bind"].sync_engine
    event.listen(engine, "before_cursor_execute", record)
    try:
        response = await api_client.get("/api/business", params={"authUserId": "owner-1"})
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert response.status_code == 200
    user_lookups = [s for s in statements if 'FROM "user"' in s or "FROM user" in s]
    assert len(user_lookups) == 1


@pytest.mark.asyncio
async def test_settings_for_unknown_principal_is_400(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/business", params={"authUserId": "nobody"})

    assert response.status_code == 400
    assert response.json() == {"error": "No pudimos obtener la información del usuario."}


@pytest.mark.asyncio
async def test_staff_roster(api_client: AsyncClient) -> None:
    await api_client.post("/api/onboarding", json={**OWNER, "businessName": "Clínica Norte"})

    empty = await api_client.get("/api/staff", params={"authUserId": "owner-1"})
    assert empty.json() == {"staff": []}

    created = await api_client.post(
        "/api/staff",
        json={
            "authUserId": "owner-1",
            "fullName": "Pedro Ruiz",
            "email": "pedro@clinica.mx",
            "role": "Médico",
            "phone": "55 1234 5678",
        },
    )
    assert created.status_code == 201
    member = created.json()["staff"]
    assert member["name"] == "Pedro Ruiz"
    assert member["cargo"] == "Médico"

    roster = (await api_client.get("/api/staff", params={"authUserId": "owner-1"})).json()
    assert [m["id"] for m in roster["staff"]] == [member["id"]]


@pytest.mark.asyncio
async def test_adding_staff_without_business_is_400(api_client: AsyncClient) -> None:
    await api_client.post("/api/onboarding", json=OWNER)

    response = await api_client.post(
        "/api/staff",
        json={
            "authUserId": "owner-1",
            "fullName": "Pedro Ruiz",
            "email": "pedro@clinica.mx",
            "role": "Médico",
            "phone": "55 1234 5678",
        },
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Primero registra tu negocio"}


@pytest.mark.asyncio
async def test_adding_staff_with_invalid_email_is_400(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/staff",
        json={
            "authUserId": "owner-1",
            "fullName": "Pedro Ruiz",
            "email": "pedro",
            "role": "Médico",
            "phone": "55 1234 5678",
        },
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "body.email"
