import asyncio
from datetime import datetime, timedelta

import pytest

from spendwise.config import Settings
from spendwise.errors import InvalidArgument
from spendwise.scheduler import next_run, run_schedule, start_scheduler

# 2025-03-10 is a Monday
MONDAY = datetime(2025, 3, 10, 15, 30)


class _Stop(Exception):
    pass


def _settings(**kw) -> Settings:
    return Settings(scheduler_enabled=False, **kw)


def test_daily_next_run():
    assert next_run("daily", MONDAY, _settings()) == datetime(2025, 3, 11)


def test_daily_next_run_is_strictly_after_now():
    assert next_run("daily", datetime(2025, 3, 11), _settings()) == datetime(2025, 3, 12)


def test_daily_next_run_custom_hour():
    assert next_run("daily", MONDAY, _settings(report_hour=18)) == datetime(2025, 3, 10, 18)


def test_weekly_next_run_defaults_to_sunday():
    assert next_run("weekly", MONDAY, _settings()) == datetime(2025, 3, 16)
    assert next_run("weekly", datetime(2025, 3, 9), _settings()) == datetime(2025, 3, 16)
    assert next_run("weekly", datetime(2025, 3, 8, 23, 59), _settings()) == datetime(2025, 3, 9)


def test_weekly_next_run_custom_weekday():
    assert next_run("weekly", MONDAY, _settings(weekly_report_weekday=2)) == datetime(2025, 3, 12)


def test_monthly_next_run():
    assert next_run("monthly", MONDAY, _settings()) == datetime(2025, 4, 1)
    assert next_run("monthly", datetime(2025, 12, 5), _settings()) == datetime(2026, 1, 1)


def test_monthly_next_run_clamps_day():
    assert next_run("monthly", datetime(2025, 2, 10), _settings(monthly_report_day=31)) == datetime(2025, 2, 28)


def test_next_run_unknown_period():
    with pytest.raises(InvalidArgument):
        next_run("yearly", MONDAY, _settings())


def _fake_time(start: datetime, max_sleeps: int, drift: timedelta = timedelta()):
    current = [start]
    sleeps: list[float] = []

    async def sleep(seconds: float) -> None:
        if len(sleeps) == max_sleeps:
            raise _Stop
        sleeps.append(seconds)
        current[0] += timedelta(seconds=seconds) - drift

    return (lambda: current[0]), sleep, sleeps


async def test_run_schedule_fires_each_slot():
    clock, sleep, sleeps = _fake_time(MONDAY, max_sleeps=3)
    fired = []

    with pytest.raises(_Stop):
        await run_schedule("daily", lambda p, now: fired.append((p, now)), _settings(), clock, sleep)

    assert fired == [
        ("daily", datetime(2025, 3, 11)),
        ("daily", datetime(2025, 3, 12)),
        ("daily", datetime(2025, 3, 13)),
    ]
    assert sleeps[1:] == [86400.0, 86400.0]


async def test_run_schedule_early_wakeup_does_not_refire():
    clock, sleep, sleeps = _fake_time(MONDAY, max_sleeps=2, drift=timedelta(seconds=1))
    fired = []

    with pytest.raises(_Stop):
        await run_schedule("daily", lambda p, now: fired.append(now), _settings(), clock, sleep)

    assert len(fired) == 2
    assert sleeps[1] > 86000


async def test_run_schedule_survives_failing_trigger():
    clock, sleep, _ = _fake_time(MONDAY, max_sleeps=2)
    calls = []

    def trigger(period, now):
        calls.append(now)
        raise RuntimeError("boom")

    with pytest.raises(_Stop):
        await run_schedule("weekly", trigger, _settings(), clock, sleep)

    assert calls == [datetime(2025, 3, 16), datetime(2025, 3, 23)]


async def test_start_scheduler_creates_one_task_per_period():
    tasks = start_scheduler(lambda p, now: None, _settings())
    try:
        assert sorted(t.get_name() for t in tasks) == ["report-daily", "report-monthly", "report-weekly"]
        assert not any(t.done() for t in tasks)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
