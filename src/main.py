"""
Bot entry point

Startup:
1. Load the roster and both lots (a broken snapshot aborts the process)
2. Subscribe the managers, the response dispatcher and the event logger
3. Register the daily reset timers
4. Run the event bus and the scheduler until cancelled

A StorageError raised by any consumer propagates out of the bus and stops the
process.
"""

import sys

import anyio

from src.platform.config.di import cleanup, container, setup
from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger
from src.service.parking.driving_adapter.parking_manager import RESET_PARKING
from src.service.shared_kernel.domain.enum import EventType
from src.service.workspaces.driving_adapter.workspaces_manager import RESET_WORKSPACES


def subscribe_all() -> None:
    event_bus = container.event_bus()

    event_bus.subscribe(container.event_logger(), EventType.ANY)
    container.response_dispatcher().subscribe(event_bus)
    container.parking_manager().subscribe(event_bus)
    container.workspaces_manager().subscribe(event_bus)
    container.users_manager().subscribe(event_bus)
    container.parking_editor_manager().subscribe(event_bus)
    container.workspaces_editor_manager().subscribe(event_bus)
    container.roll_manager().subscribe(event_bus)


def register_timers() -> None:
    config = container.config_service()
    scheduler = container.scheduler()
    scheduler.add_daily(config.PARKING_RESET_HOUR, config.PARKING_RESET_MIN, RESET_PARKING)
    scheduler.add_daily(
        config.WORKSPACES_RESET_HOUR, config.WORKSPACES_RESET_MIN, RESET_WORKSPACES
    )


async def run() -> None:
    Logger.base.info('🚀 [BOT] Starting up...')
    setup()
    subscribe_all()
    register_timers()
    Logger.base.info('✅ [BOT] All services initialized')

    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(container.event_bus().run)
            tg.start_soon(container.scheduler().run)
    finally:
        Logger.base.info('🛑 [BOT] Shutting down...')
        cleanup()


def main() -> int:
    exit_code = 0
    try:
        anyio.run(run)
    except* StorageError as eg:
        # Raised from inside the task groups, so it arrives wrapped
        Logger.base.opt(exception=eg).critical('💥 [BOT] Storage failure, aborting')
        exit_code = 1
    except* KeyboardInterrupt:
        Logger.base.info('👋 [BOT] Interrupted')
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
