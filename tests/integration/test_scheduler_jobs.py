from datetime import timedelta

import pytest

from app.scheduler.jobs import (
    run_monthly_rollup_job,
    run_pattern_detection_job,
    run_score_recalculation_job,
    run_weekly_summary_job,
)
from app.utils.time import now_utc_naive


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recalculation_job_uses_given_session_factory(session_factory, seed_life_area):
    await seed_life_area("career", commitments=["COMPLETED"])

    results = await run_score_recalculation_job(session_factory)

    assert len(results) == 1
    assert results[0].success is True
    assert results[0].score == 60.0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_rollup_job_returns_summary(session_factory, seed_life_area):
    await seed_life_area("health")

    summary = await run_monthly_rollup_job(session_factory)

    assert summary["created"] == ["health"]


class BrokenFactory:
    def __call__(self):
        raise RuntimeError("database offline")


@pytest.mark.asyncio
async def test_jobs_fail_safely_when_store_is_down(caplog):
    assert await run_score_recalculation_job(BrokenFactory()) is None
    assert await run_monthly_rollup_job(BrokenFactory()) is None
    assert "database offline" in caplog.text


@pytest.mark.asyncio
@pytest.mark.integration
async def test_pattern_and_weekly_jobs_return_summaries(session_factory, seed_life_area):
    recent = now_utc_naive() - timedelta(hours=1)
    await seed_life_area(
        "health",
        events=[("PROGRESS", 4, recent - timedelta(days=d), ["sleep"]) for d in (0, 1, 2)],
    )

    patterns = await run_pattern_detection_job(session_factory)
    weekly = await run_weekly_summary_job(session_factory)

    assert patterns["insights_created"] >= 1
    assert weekly["event_count"] == 3
    assert weekly["created"] is True


@pytest.mark.asyncio
async def test_insight_jobs_fail_safely_when_store_is_down(caplog):
    assert await run_pattern_detection_job(BrokenFactory()) is None
    assert await run_weekly_summary_job(BrokenFactory()) is None
    assert "Pattern detection job failed safely" in caplog.text
    assert "Weekly summary job failed safely" in caplog.text
