import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

import tenantkit.domain.entities  # noqa: F401
from config import ApplicationConfig
from tenantkit.adapter.database.engine import create_engine, create_session_factory
from tenantkit.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantkit.api.utils.jwt import generate_jwt
from tenantkit.depends import get_unit_of_work
from tests.fixtures.json_loader import PayloadLoader


@pytest_asyncio.fixture
def test_data():
    return PayloadLoader()


@pytest_asyncio.fixture
async def engine():
    # Foreign keys are switched on so tenant deletion cascades
    engine = create_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = create_session_factory(engine)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from tenantkit.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth():
    """Headers for a caller token, optionally naming the tenant"""

    def headers(external_id: str, tenant: str = None, email: str = None):
        result = {"Authorization": f"Bearer {generate_jwt(external_id, email=email)}"}
        if tenant:
            result["x-tenant-slug"] = tenant
        return result

    return headers


@pytest.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
async def acme(client, auth, test_data):
    """Tenant 'acme' owned by caller 'alice'"""
    response = await client.post("/tenants", json=test_data.payload("acme_tenant"), headers=auth("alice"))
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def globex(client, auth, test_data):
    """Tenant 'globex' owned by caller 'gina'"""
    response = await client.post("/tenants", json=test_data.payload("globex_tenant"), headers=auth("gina"))
    assert response.status_code == 201
    return response.json()
