"""
Scheduler

Wall-clock driver that publishes labelled TimerDone events. Timers are
evaluated once per tick (one minute by default) and fire at most once per
day for their (hour, minute). A timer whose minute passed between two ticks
fires on the later tick, so a late tick never skips it.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Optional

import anyio
import attrs

from src.platform.event.i_event_bus import IEventBus
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.domain_event import TimerDone


DEFAULT_TICK_SECONDS = 60.0
ONE_MINUTE = timedelta(minutes=1)


def _validate_hour(instance: 'DailyTimer', attribute: 'attrs.Attribute', value: int) -> None:
    if not 0 <= value <= 23:
        raise ValueError(f'hour must be within 0..23, got {value}')


def _validate_minute(instance: 'DailyTimer', attribute: 'attrs.Attribute', value: int) -> None:
    if not 0 <= value <= 59:
        raise ValueError(f'minute must be within 0..59, got {value}')


@attrs.define
class DailyTimer:
    label: str
    hour: int = attrs.field(validator=_validate_hour)
    minute: int = attrs.field(validator=_validate_minute)
    last_fired: Optional[date] = None

    def target(self, now: datetime) -> datetime:
        return now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)

    def is_due(self, now: datetime, last_check: Optional[datetime] = None) -> bool:
        """Due within its own minute, or when its minute lies in (last_check, now]"""
        if self.last_fired == now.date():
            return False
        if now.hour == self.hour and now.minute == self.minute:
            return True
        return last_check is not None and last_check < self.target(now) <= now


class Scheduler:
    def __init__(
        self,
        event_bus: IEventBus,
        *,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.event_bus = event_bus
        self.tick_seconds = tick_seconds
        self.clock = clock
        self.timers: list[DailyTimer] = []
        self.last_check: Optional[datetime] = None
        self._running = False

    def add_daily(self, hour: int, minute: int, label: str) -> DailyTimer:
        timer = DailyTimer(label=label, hour=hour, minute=minute)
        self.timers.append(timer)
        Logger.base.info(f'⏰ [SCHEDULER] Daily timer {label!r} at {hour:02d}:{minute:02d}')
        return timer

    async def check(self, now: Optional[datetime] = None) -> list[TimerDone]:
        """Publish TimerDone for every due timer and return the published events"""
        now = now or self.clock()
        last_check, self.last_check = self.last_check, now
        fired: list[TimerDone] = []
        for timer in self.timers:
            if not timer.is_due(now, last_check):
                continue
            timer.last_fired = now.date()
            event = TimerDone(label=timer.label, time=timer.target(now))
            if now - event.time >= ONE_MINUTE:
                Logger.base.warning(
                    f'⏰ [SCHEDULER] Late tick at {now:%H:%M:%S}, catching up {timer.label!r}'
                )
            Logger.base.info(f'⏰ [SCHEDULER] {event.info()}')
            await self.event_bus.publish(event)
            fired.append(event)
        return fired

    async def run(self) -> None:
        self._running = True
        while self._running:
            await self.check()
            await anyio.sleep(self.tick_seconds)

    def stop(self) -> None:
        self._running = False
