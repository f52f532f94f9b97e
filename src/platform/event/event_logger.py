from src.platform.event.i_event_bus import BusEvent
from src.platform.logging.loguru_io import Logger


class EventLogger:
    """Subscribed to every event type; writes one log line per bus event"""

    async def consume(self, event: BusEvent) -> None:
        Logger.base.info(f'📨 [EVENT] {event.info()}')
