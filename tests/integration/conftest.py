import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fakes.billing_gateway import FakeBillingGateway
from tests.fixtures.payloads import RequestPayloads
from coursedesk.depends import get_billing_gateway, get_unit_of_work
from coursedesk.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


@pytest_asyncio.fixture
def test_data():
    return RequestPayloads()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def billing_gateway():
    """None means dev mode; tests swap in a FakeBillingGateway"""
    return {"gateway": None}


@pytest_asyncio.fixture
async def client(db_session, billing_gateway):
    from httpx import ASGITransport
    from coursedesk.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    def override_get_billing_gateway():
        return billing_gateway["gateway"]

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_billing_gateway] = override_get_billing_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def fake_gateway(billing_gateway):
    gateway = FakeBillingGateway()
    billing_gateway["gateway"] = gateway
    return gateway
