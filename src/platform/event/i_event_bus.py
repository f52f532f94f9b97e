"""
Event Bus Interface

Typed publish/subscribe between the chat adapter, the scheduler and the
managers that consume their events.
"""

from typing import Protocol, Union

from src.service.shared_kernel.domain.domain_event import ChatEvent, Response
from src.service.shared_kernel.domain.enum import EventType


BusEvent = Union[ChatEvent, Response]


class IConsumer(Protocol):
    async def consume(self, event: BusEvent) -> None: ...


class IContextConsumer(IConsumer, Protocol):
    @property
    def context(self) -> str:
        """Identifier matched against the title of interaction events"""
        ...


class IEventBus(Protocol):
    def subscribe(self, consumer: IConsumer, *event_types: EventType) -> None:
        """
        Register a consumer for the given event types

        Note:
            - EventType.ANY receives every event and can't be combined with other types
        """
        ...

    def subscribe_with_context(self, consumer: IContextConsumer, *event_types: EventType) -> None:
        """Like subscribe, but only events matching consumer.context are delivered"""
        ...

    async def publish(self, event: BusEvent) -> None:
        """Enqueue an event; blocks while the queue is full"""
        ...
