"""
Response Dispatcher

Bus consumer for Response events. Applies each action, in order, through the
chat adapter. A failing action is logged and the remaining ones still run.
"""

from src.platform.event.i_event_bus import BusEvent, IEventBus
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface import IChatAdapter
from src.service.shared_kernel.domain.domain_event import Response
from src.service.shared_kernel.domain.enum import EventType


class ResponseDispatcher:
    def __init__(self, *, chat_adapter: IChatAdapter) -> None:
        self.chat_adapter = chat_adapter

    def subscribe(self, event_bus: IEventBus) -> None:
        event_bus.subscribe(self, EventType.RESPONSE)

    async def consume(self, event: BusEvent) -> None:
        if not isinstance(event, Response):
            return
        for action in event.actions:
            try:
                await action.apply(self.chat_adapter)
            except Exception as e:
                Logger.base.exception(
                    f'❌ [DISPATCH] {type(action).__name__} for {event.user_name} failed: {e}'
                )
