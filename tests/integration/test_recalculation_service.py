from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.domain.models import LifeAreaNotFoundError, LifeAreaStatus
from app.infrastructure.db.repositories.event_repository import EventRepository
from app.infrastructure.db.repositories.life_area_repository import LifeAreaRepository
from app.services.recalculation_service import ScoreRecalculationService


NOW = datetime(2026, 10, 1, 12, 0)


def _service(session_factory, **kwargs) -> ScoreRecalculationService:
    kwargs.setdefault("concurrency", 1)
    return ScoreRecalculationService(session_factory, clock=lambda: NOW, **kwargs)


async def _stored(session_factory, life_area_id):
    async with session_factory() as session:
        return await LifeAreaRepository(session).get(life_area_id)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculate_life_area_persists_score_and_status(session_factory, seed_life_area):
    await seed_life_area("career", commitments=["COMPLETED", "ACTIVE", "ACTIVE"])
    service = _service(session_factory)

    async with session_factory() as session:
        result = await service.recalculate_life_area(session, "career")
        await session.commit()

    stored = await _stored(session_factory, "career")
    assert result.score == 57.3
    assert stored.current_score == 57.3
    assert stored.status == LifeAreaStatus.BALANCED
    assert stored.last_calculated_at == NOW


@pytest.mark.asyncio
@pytest.mark.integration
async def test_events_outside_window_are_ignored(session_factory, seed_life_area):
    await seed_life_area(
        "health",
        events=[
            ("BREAKTHROUGH", 5, NOW - timedelta(days=2)),
            ("UPSET", -5, NOW - timedelta(days=91)),
            ("UPSET", -5, NOW - timedelta(days=200)),
        ],
    )
    service = _service(session_factory)

    async with session_factory() as session:
        result = await service.preview_life_area(session, "health")

    # momentum 10 + breakthrough 15, old upsets excluded
    assert result.event_count == 1
    assert result.score == 75.0
    assert result.status == LifeAreaStatus.THRIVING


@pytest.mark.asyncio
@pytest.mark.integration
async def test_preview_does_not_persist(session_factory, seed_life_area):
    await seed_life_area("health", boundaries=[3])
    service = _service(session_factory)

    async with session_factory() as session:
        result = await service.preview_life_area(session, "health")
        await session.commit()

    stored = await _stored(session_factory, "health")
    assert result.score == 20.0
    assert stored.current_score == 50.0
    assert stored.last_calculated_at is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_life_area_raises(session_factory):
    service = _service(session_factory)

    async with session_factory() as session:
        with pytest.raises(LifeAreaNotFoundError):
            await service.recalculate_life_area(session, "nope")
        with pytest.raises(LifeAreaNotFoundError):
            await service.preview_life_area(session, "nope")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculate_all_skips_inactive_areas(session_factory, seed_life_area):
    await seed_life_area("career", commitments=["COMPLETED"])
    await seed_life_area("health", boundaries=[1])
    await seed_life_area("archived", boundaries=[5], is_active=False)

    results = await _service(session_factory).recalculate_all()

    assert [r.life_area_id for r in results] == ["career", "health"]
    assert all(r.success for r in results)
    assert {r.life_area_id: r.score for r in results} == {"career": 60.0, "health": 40.0}
    assert (await _stored(session_factory, "archived")).current_score == 50.0
    assert (await _stored(session_factory, "health")).status == LifeAreaStatus.BALANCED


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculate_all_is_idempotent(session_factory, seed_life_area):
    await seed_life_area(
        "health",
        events=[("UPSET", -2, NOW - timedelta(days=3)), ("MILESTONE", 4, NOW - timedelta(days=1))],
        commitments=["ACTIVE", "INTEGRATED"],
        boundaries=[1],
    )
    service = _service(session_factory)

    first = await service.recalculate_all()
    second = await service.recalculate_all()

    assert (first[0].score, first[0].status) == (second[0].score, second[0].status)


class FlakyRecalculationService(ScoreRecalculationService):
    """Fails for one life area to exercise batch isolation"""

    async def recalculate_life_area(self, session, life_area_id):
        if life_area_id == "broken":
            raise RuntimeError("store unreachable")
        return await super().recalculate_life_area(session, life_area_id)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_failure_for_one_area_does_not_abort_batch(session_factory, seed_life_area, caplog):
    await seed_life_area("broken")
    await seed_life_area("career", commitments=["COMPLETED"])
    await seed_life_area("health", boundaries=[2])

    service = FlakyRecalculationService(session_factory, concurrency=1, clock=lambda: NOW)
    results = await service.recalculate_all()

    by_id = {r.life_area_id: r for r in results}
    assert by_id["broken"].success is False
    assert by_id["broken"].error == "store unreachable"
    assert by_id["career"].success is True
    assert by_id["health"].score == 30.0
    assert (await _stored(session_factory, "health")).status == LifeAreaStatus.STRUGGLING
    assert "broken" in caplog.text


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculate_all_with_explicit_ids_reports_missing(session_factory, seed_life_area):
    await seed_life_area("career")

    results = await _service(session_factory).recalculate_all(["career", "ghost"])

    assert [r.success for r in results] == [True, False]
    assert "ghost" in results[1].error


def test_invalid_service_configuration():
    with pytest.raises(ValueError):
        ScoreRecalculationService(None, window_days=0)
    with pytest.raises(ValueError):
        ScoreRecalculationService(None, concurrency=0)


class OfflineSessionFactory:
    def __call__(self):
        raise RuntimeError("database offline")


@pytest.mark.asyncio
async def test_recalculate_all_propagates_when_store_is_down():
    service = ScoreRecalculationService(OfflineSessionFactory(), concurrency=1, clock=lambda: NOW)

    with pytest.raises(RuntimeError, match="database offline"):
        await service.recalculate_all()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculate_all_propagates_listing_failure(session_factory, seed_life_area, monkeypatch):
    await seed_life_area("career")
    failure = SQLAlchemyError("life_area table unavailable")

    async def failing_list(self, active_only=True):
        raise failure

    monkeypatch.setattr(LifeAreaRepository, "list_all_life_area_ids", failing_list)

    with pytest.raises(SQLAlchemyError) as excinfo:
        await _service(session_factory).recalculate_all()

    assert excinfo.value is failure


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculate_life_area_propagates_data_access_error(session_factory, seed_life_area, monkeypatch):
    await seed_life_area("health", commitments=["ACTIVE"])
    failure = SQLAlchemyError("disk I/O error")

    async def failing_fetch(self, life_area_id, since):
        raise failure

    monkeypatch.setattr(EventRepository, "fetch_recent_events", failing_fetch)
    service = _service(session_factory)

    async with session_factory() as session:
        with pytest.raises(SQLAlchemyError) as excinfo:
            await service.recalculate_life_area(session, "health")

    assert excinfo.value is failure
    stored = await _stored(session_factory, "health")
    assert stored.last_calculated_at is None
