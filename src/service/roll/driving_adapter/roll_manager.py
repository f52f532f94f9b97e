import random
from typing import Optional

from src.platform.event.i_event_bus import BusEvent, IEventBus
from src.service.shared_kernel.domain.domain_event import Post, Response, SlashCommand
from src.service.shared_kernel.domain.enum import EventType
from src.service.shared_kernel.domain.slash_command import SlashCmd, should_process_slash


class RollManager:
    """/roll posts a random number between 1 and 100 to the channel"""

    def __init__(
        self,
        *,
        event_bus: IEventBus,
        testing_active: bool,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.event_bus = event_bus
        self.testing_active = testing_active
        self.rng = rng or random.Random()

    def subscribe(self, event_bus: IEventBus) -> None:
        event_bus.subscribe(self, EventType.SLASH_COMMAND)

    async def consume(self, event: BusEvent) -> None:
        if not isinstance(event, SlashCommand):
            return
        if not should_process_slash(event.command, SlashCmd.ROLL, self.testing_active):
            return
        await self.event_bus.publish(self.handle_slash_command(event))

    def handle_slash_command(self, event: SlashCommand) -> Response:
        roll = self.rng.randint(1, 100)
        return Response(
            user_name=event.user_name,
            actions=(Post(channel_id=event.channel_id, text=f'{event.user_name} rolled {roll}'),),
        )
