from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from src.platform.event.scheduler import DailyTimer, Scheduler


@pytest.fixture
def event_bus() -> AsyncMock:
    return AsyncMock()


class TestDailyTimer:
    def test_invalid_hour(self) -> None:
        with pytest.raises(ValueError):
            DailyTimer(label='x', hour=24, minute=0)

    def test_invalid_minute(self) -> None:
        with pytest.raises(ValueError):
            DailyTimer(label='x', hour=17, minute=60)


class TestScheduler:
    @pytest.mark.asyncio
    async def test_fires_once_per_day(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus, tick_seconds=0)
        scheduler.add_daily(17, 0, 'Reset parking status')

        first = await scheduler.check(datetime(2024, 5, 14, 17, 0, 5))
        again = await scheduler.check(datetime(2024, 5, 14, 17, 0, 40))
        next_day = await scheduler.check(datetime(2024, 5, 15, 17, 0, 1))

        assert [event.label for event in first] == ['Reset parking status']
        assert first[0].time == datetime(2024, 5, 14, 17, 0)
        assert again == []
        assert len(next_day) == 1
        assert event_bus.publish.await_count == 2

    @pytest.mark.asyncio
    async def test_does_not_fire_outside_its_minute(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus)
        scheduler.add_daily(17, 0, 'Reset parking status')

        assert await scheduler.check(datetime(2024, 5, 14, 16, 58)) == []
        assert await scheduler.check(datetime(2024, 5, 14, 16, 59, 59)) == []
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_independent_timers(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus)
        scheduler.add_daily(17, 0, 'Reset parking status')
        scheduler.add_daily(17, 0, 'Reset workspaces status')

        fired = await scheduler.check(datetime(2024, 5, 14, 17, 0))

        assert {event.label for event in fired} == {
            'Reset parking status',
            'Reset workspaces status',
        }

    @pytest.mark.asyncio
    async def test_run_uses_injected_clock(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus, tick_seconds=0, clock=lambda: datetime(2024, 5, 14, 17))
        scheduler.add_daily(17, 0, 'Reset parking status')

        async def stop_after_publish(event: object) -> None:
            scheduler.stop()

        event_bus.publish.side_effect = stop_after_publish
        await scheduler.run()

        event_bus.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_first_tick_after_its_minute_does_not_fire(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus)
        scheduler.add_daily(17, 0, 'Reset parking status')

        assert await scheduler.check(datetime(2024, 5, 14, 17, 1)) == []
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_late_tick_catches_up_skipped_minute(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus)
        scheduler.add_daily(17, 0, 'Reset parking status')

        before = await scheduler.check(datetime(2024, 5, 14, 16, 59, 59, 990000))
        late = await scheduler.check(datetime(2024, 5, 14, 17, 1, 0, 10000))
        after = await scheduler.check(datetime(2024, 5, 14, 17, 2, 0, 30000))

        assert before == []
        assert [event.label for event in late] == ['Reset parking status']
        assert late[0].time == datetime(2024, 5, 14, 17, 0)
        assert after == []
        event_bus.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_catch_up_across_midnight(self, event_bus: AsyncMock) -> None:
        scheduler = Scheduler(event_bus)
        scheduler.add_daily(0, 0, 'Midnight')

        await scheduler.check(datetime(2024, 5, 14, 23, 59, 59))
        fired = await scheduler.check(datetime(2024, 5, 15, 0, 1, 2))

        assert [event.time for event in fired] == [datetime(2024, 5, 15, 0, 0)]
