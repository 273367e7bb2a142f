from typing import AsyncGenerator, Iterable

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.infrastructure.db.database import Base, get_db, get_session_factory
from app.infrastructure.db.models import (
    BoundaryModel,
    CommitmentModel,
    CommitmentStatusEnum,
    EventModel,
    EventTypeEnum,
    LifeAreaModel,
)
from app.api.routes import health, insights, life_areas
from app.services.recalculation_service import ScoreRecalculationService


@pytest.fixture()
async def db_engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        future=True,
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def seed_life_area(session_factory):
    """
    Insert a life area with its scoring inputs.

    events: iterable of (type, emotional_charge, occurred_at[, tags])
    commitments: iterable of status strings
    boundaries: iterable of violation counts
    """

    async def _seed(
        life_area_id: str,
        events: Iterable[tuple] = (),
        commitments: Iterable[str] = (),
        boundaries: Iterable[int] = (),
        is_active: bool = True,
    ) -> str:
        async with session_factory() as session:
            session.add(
                LifeAreaModel(
                    id=life_area_id,
                    name=life_area_id.title(),
                    is_active=is_active,
                )
            )
            for event_type, charge, occurred_at, *tags in events:
                session.add(
                    EventModel(
                        life_area_id=life_area_id,
                        type=EventTypeEnum(event_type),
                        emotional_charge=charge,
                        occurred_at=occurred_at,
                        tags=tags[0] if tags else None,
                    )
                )
            for status in commitments:
                session.add(
                    CommitmentModel(life_area_id=life_area_id, status=CommitmentStatusEnum(status))
                )
            for violations in boundaries:
                session.add(
                    BoundaryModel(life_area_id=life_area_id, violation_count=violations)
                )
            await session.commit()
        return life_area_id

    return _seed


@pytest.fixture()
async def api_app(session_factory) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(life_areas.router, prefix="/api/v1/life-areas", tags=["Life Areas"])
    app.include_router(insights.router, prefix="/api/v1/insights", tags=["Insights"])

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    # SQLite allows a single writer
    app.dependency_overrides[life_areas.get_recalculation_service] = (
        lambda: ScoreRecalculationService(session_factory, concurrency=1)
    )

    return app


@pytest.fixture()
async def client(api_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
