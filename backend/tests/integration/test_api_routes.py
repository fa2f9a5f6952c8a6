"""End-to-end tests for the /api/v1 roster routes over a temporary SQLite database."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dashboard.application.services import ExecutiveFetchPolicy
from dashboard.domain.entities import ExecutiveRecord
from dashboard.infrastructure.database import (
    Base,
    ProfileModel,
    build_engine,
    build_session_factory,
)
from dashboard.infrastructure.database.repositories import SQLAlchemyExecutiveRepository
from dashboard.infrastructure.dependencies import (
    get_change_feed,
    get_executive_fetch_policy,
    get_session_factory,
)
from dashboard.infrastructure.realtime import InProcessChangeFeed
from dashboard.main import app

MARZO = {"mes": 3, "anio": 2025}


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'api.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    feed = InProcessChangeFeed()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_change_feed] = lambda: feed
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await feed.shutdown()


async def _seed_executives(session_factory, *records: ExecutiveRecord) -> list[ExecutiveRecord]:
    return await SQLAlchemyExecutiveRepository(session_factory).create_many(list(records))


# ── Clientes ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_client_uses_query_period(client):
    response = await client.post(
        "/api/v1/clientes",
        params=MARZO,
        json={"ejecutivo": "Ana", "producto": "Crédito de nómina", "monto": 1000,
              "mes_registro": 9, "telefono": "555"},
    )

    assert response.status_code == 201
    data = response.json()
    assert (data["mes_registro"], data["anio_registro"]) == (3, 2025)
    assert data["fecha_inicio"] is not None
    assert data["telefono"] == "555"


@pytest.mark.asyncio
async def test_client_lifecycle_and_stats(client):
    created = (await client.post(
        "/api/v1/clientes",
        params=MARZO,
        json={"ejecutivo": "Ana", "producto": "Crédito de nómina", "monto": 1000},
    )).json()
    await client.post(
        "/api/v1/clientes", params=MARZO, json={"ejecutivo": "Luis", "producto": "Motos"}
    )

    status_response = await client.patch(
        f"/api/v1/clientes/{created['id']}/estatus",
        params=MARZO,
        json={"estatus": "Dispersión", "actualizacion": "Depositado"},
    )
    roster = (await client.get("/api/v1/clientes", params=MARZO)).json()

    assert status_response.status_code == 200
    assert status_response.json()["fecha_final"] is not None
    assert roster["stats"] == {
        "total_clientes": 2,
        "en_pipeline": 1,
        "dispersiones": 1,
        "total_monto_nomina": 1000,
        "motos_vendidas": 0,
    }

    only_luis = (await client.get("/api/v1/clientes", params={**MARZO, "ejecutivo": "Luis"})).json()
    assert [c["ejecutivo"] for c in only_luis["clients"]] == ["Luis"]

    deleted = await client.delete(f"/api/v1/clientes/{created['id']}", params=MARZO)
    assert deleted.status_code == 204
    remaining = (await client.get("/api/v1/clientes", params=MARZO)).json()
    assert [c["ejecutivo"] for c in remaining["clients"]] == ["Luis"]


@pytest.mark.asyncio
async def test_create_client_rejects_reserved_extra_key(client):
    response = await client.post(
        "/api/v1/clientes", params=MARZO, json={"ejecutivo": "Ana", "extra": "nota libre"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_field_on_protected_column_is_rejected(client):
    created = (await client.post("/api/v1/clientes", params=MARZO, json={})).json()

    response = await client.patch(
        f"/api/v1/clientes/{created['id']}",
        params=MARZO,
        json={"field": "mes_registro", "value": 4},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_unknown_client_returns_404(client):
    response = await client.patch(
        "/api/v1/clientes/999", params=MARZO, json={"field": "estatus", "value": "Rechazado"}
    )

    assert response.status_code == 404


# ── Ejecutivos ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_linked_roster_only_lists_linked_names(client, session_factory):
    ana, _luis = await _seed_executives(
        session_factory,
        ExecutiveRecord(nombre="Ana", mes=3, anio=2025, tipo="nómina", meta=20),
        ExecutiveRecord(nombre="Luis", mes=3, anio=2025, tipo="motos", meta=5),
    )
    async with session_factory() as session:
        session.add(ProfileModel(id="u-1", nombre="Ana", ejecutivo_id=ana.id))
        await session.commit()

    roster = (await client.get("/api/v1/ejecutivos", params=MARZO)).json()

    assert [e["nombre"] for e in roster["ejecutivos"]] == ["Ana"]
    assert [e["nombre"] for e in roster["nomina"]] == ["Ana"]
    assert roster["motos"] == []


@pytest.mark.asyncio
async def test_meta_and_activo_updates(client, session_factory):
    [ana] = await _seed_executives(
        session_factory, ExecutiveRecord(nombre="Ana", mes=3, anio=2025, meta=20)
    )

    meta = await client.patch(f"/api/v1/ejecutivos/{ana.id}/meta", json={"meta": 30})
    activo = await client.patch(f"/api/v1/ejecutivos/{ana.id}/activo", json={"activo": False})
    missing = await client.patch("/api/v1/ejecutivos/999/meta", json={"meta": 1})

    assert meta.json()["meta"] == 30
    assert activo.json()["activo"] is False
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_rollover_copies_previous_month(client, session_factory):
    app.dependency_overrides[get_executive_fetch_policy] = lambda: ExecutiveFetchPolicy.SIMPLE
    await _seed_executives(
        session_factory,
        ExecutiveRecord(nombre="Ana", mes=12, anio=2024, tipo="nómina", meta=20),
        ExecutiveRecord(nombre="Luis", mes=12, anio=2024, tipo="motos", meta=5, activo=False),
    )

    response = await client.post("/api/v1/ejecutivos/rollover", json={"mes": 1, "anio": 2025})

    assert response.status_code == 201
    data = response.json()
    assert data["copied"] == 2
    assert [(e["nombre"], e["meta"], e["activo"]) for e in data["roster"]["ejecutivos"]] == [
        ("Ana", 20, True),
        ("Luis", 5, False),
    ]
    assert {e["mes"] for e in data["roster"]["ejecutivos"]} == {1}


@pytest.mark.asyncio
async def test_rollover_without_previous_data_conflicts(client):
    response = await client.post("/api/v1/ejecutivos/rollover", json={"mes": 3, "anio": 2025})

    assert response.status_code == 409
    assert response.json()["detail"] == "No hay datos del mes anterior"


# ── Feed ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_feed_rejects_unknown_collection(client):
    response = await client.get("/api/v1/feed/perfiles")

    assert response.status_code == 404
