"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh aiosqlite engine with the full schema created from
the ORM metadata, so no external database is needed.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def customer(db: AsyncSession):
    """테스트 고객을 생성합니다."""
    from app.models.customer import Customer
    c = Customer(name="Minera Andina", tax_id="76.123.456-7")
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


@pytest_asyncio.fixture
async def faena(db: AsyncSession, customer):
    """고객 소속 현장을 생성합니다."""
    from app.models.customer import Faena
    f = Faena(customer_id=customer.id, name="Faena Norte", location="Antofagasta")
    db.add(f)
    await db.flush()
    await db.refresh(f)
    return f


@pytest_asyncio.fixture
async def make_user(db: AsyncSession) -> Callable[..., Awaitable[Any]]:
    """작업자 생성 팩토리 (Factory for field workers)."""
    from app.models.user import User

    async def _make(external_id: str, is_active: bool = True):
        user = User(
            external_id=external_id,
            full_name=f"Worker {external_id}",
            email=f"{external_id}@test.com",
            is_active=is_active,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    return _make


@pytest_asyncio.fixture
async def worker(make_user):
    """기본 작업자 (u-1)."""
    return await make_user("u-1")


@pytest_asyncio.fixture
async def make_task_template(db: AsyncSession) -> Callable[..., Awaitable[Any]]:
    """작업 템플릿 생성 팩토리 (Factory for task templates)."""
    from app.models.template import TaskTemplate

    async def _make(name: str, **kwargs: Any):
        template = TaskTemplate(name=name, **kwargs)
        db.add(template)
        await db.flush()
        await db.refresh(template)
        return template

    return _make


@pytest_asyncio.fixture
async def task_template(make_task_template):
    """기본 작업 템플릿."""
    return await make_task_template("Inspección de equipos")


@pytest_asyncio.fixture
async def service(db: AsyncSession):
    """작업 템플릿이 없는 빈 서비스."""
    from app.models.service import Service
    s = Service(name="Mantención", default_days=3, required_people=2)
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


@pytest_asyncio.fixture
async def make_work_order(db: AsyncSession, customer, faena) -> Callable[..., Awaitable[Any]]:
    """작업 지시 생성 팩토리 — 서비스 계층을 통해 일자까지 확장합니다."""
    from app.services.work_order_service import work_order_service

    async def _make(
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 1, 3),
        service_id=None,
        required_people_per_day: int = 2,
        name: str = "OT-001",
    ):
        return await work_order_service.create_work_order(
            db,
            customer_id=customer.id,
            faena_id=faena.id,
            start_date=start_date,
            end_date=end_date,
            required_people_per_day=required_people_per_day,
            name=name,
            service_id=service_id,
        )

    return _make


@pytest_asyncio.fixture
async def days_of(db: AsyncSession) -> Callable[..., Awaitable[Any]]:
    """작업 지시의 일자 목록 조회 헬퍼 (day_number 순)."""
    from app.repositories.work_order_repository import work_order_day_repository

    async def _days(work_order):
        return list(await work_order_day_repository.get_by_work_order(db, work_order.id))

    return _days
