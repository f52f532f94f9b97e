"""
In-memory Event Bus Implementation

Architecture:
- Chat adapter / Scheduler / Managers -> publish() -> bounded stream
- run(): single dispatcher draining the stream
- One task per (consumer, event) inside the dispatcher's task group

Queue:
- anyio memory object stream with a fixed buffer
- Overflow policy: producer blocks until the dispatcher catches up
"""


import anyio
from anyio import create_memory_object_stream
import attrs

from src.platform.event.i_event_bus import BusEvent, IConsumer, IContextConsumer
from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.enum import EventType


DEFAULT_QUEUE_SIZE = 100


@attrs.define(frozen=True)
class Subscription:
    consumer: IConsumer
    context: str = ''

    def accepts(self, event: BusEvent) -> bool:
        return not self.context or event.has_context(self.context)


class EventBus:
    def __init__(self, *, max_buffer_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._subscriptions: dict[EventType, list[Subscription]] = {}
        self._send_stream, self._receive_stream = create_memory_object_stream[BusEvent](
            max_buffer_size=max_buffer_size
        )

    def subscribe(self, consumer: IConsumer, *event_types: EventType) -> None:
        self._register(Subscription(consumer=consumer), event_types)

    def subscribe_with_context(self, consumer: IContextConsumer, *event_types: EventType) -> None:
        self._register(Subscription(consumer=consumer, context=consumer.context), event_types)

    def _register(self, subscription: Subscription, event_types: tuple[EventType, ...]) -> None:
        if not event_types:
            raise ValueError('at least one event type is required')
        if EventType.ANY in event_types and len(event_types) > 1:
            raise ValueError('EventType.ANY cannot be combined with specific event types')

        for event_type in event_types:
            self._subscriptions.setdefault(event_type, []).append(subscription)

        Logger.base.debug(
            f'📡 [EVENT_BUS] Subscribed {type(subscription.consumer).__name__} '
            f'to {[str(t) for t in event_types]}'
            + (f' (context={subscription.context!r})' if subscription.context else '')
        )

    def subscriptions_for(self, event: BusEvent) -> list[Subscription]:
        matching = [
            *self._subscriptions.get(event.type, []),
            *self._subscriptions.get(EventType.ANY, []),
        ]
        return [subscription for subscription in matching if subscription.accepts(event)]

    async def publish(self, event: BusEvent) -> None:
        await self._send_stream.send(event)

    async def run(self) -> None:
        """Dispatch until close() is called; returns after in-flight deliveries finish"""
        Logger.base.info('📡 [EVENT_BUS] Dispatcher started')
        async with anyio.create_task_group() as tg:
            async with self._receive_stream:
                async for event in self._receive_stream:
                    for subscription in self.subscriptions_for(event):
                        tg.start_soon(self._deliver, subscription.consumer, event)
        Logger.base.info('📡 [EVENT_BUS] Dispatcher stopped')

    async def close(self) -> None:
        await self._send_stream.aclose()

    async def _deliver(self, consumer: IConsumer, event: BusEvent) -> None:
        try:
            await consumer.consume(event)
        except StorageError:
            # Lost writes can't be recovered from, take the whole process down
            raise
        except Exception as e:
            Logger.base.exception(
                f'❌ [EVENT_BUS] {type(consumer).__name__} failed on {event.info()}: {e}'
            )
