from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from submanager.config.settings import DAILY_REPORT_HOUR
from submanager.schedulers import daily_report
from submanager.schedulers.setup import setup_schedulers


def test_daily_job_is_registered() -> None:
    scheduler = AsyncIOScheduler()

    setup_schedulers(scheduler)

    job = scheduler.get_job("daily_alerts")
    assert job is not None
    assert job.func is daily_report.send_daily_alerts
    fields = {f.name: str(f) for f in job.trigger.fields}
    assert fields["hour"] == str(DAILY_REPORT_HOUR)


async def test_daily_job_never_raises(monkeypatch, db_path) -> None:
    async def broken(db_path, now):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(daily_report, "check_and_notify", broken)

    await daily_report.send_daily_alerts(db_path)
