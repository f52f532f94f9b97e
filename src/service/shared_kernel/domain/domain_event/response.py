"""
Response Events

Outbound actions produced by the managers. Each action knows how to apply
itself to the chat adapter, so the dispatcher never has to switch on type.
"""

from typing import TYPE_CHECKING, ClassVar, Protocol, Union

import attrs

from src.service.shared_kernel.domain.enum import EventType
from src.service.shared_kernel.domain.modal import Modal


if TYPE_CHECKING:
    from src.service.shared_kernel.app.interface.i_chat_adapter import IChatAdapter


class ResponseAction(Protocol):
    async def apply(self, adapter: 'IChatAdapter') -> None: ...


@attrs.define(frozen=True)
class OpenView:
    trigger_id: str
    modal: Modal

    async def apply(self, adapter: 'IChatAdapter') -> None:
        await adapter.open_view(trigger_id=self.trigger_id, modal=self.modal)


@attrs.define(frozen=True)
class UpdateView:
    trigger_id: str
    view_id: str
    modal: Modal
    error_txt: str = ''

    async def apply(self, adapter: 'IChatAdapter') -> None:
        await adapter.update_view(view_id=self.view_id, modal=self.modal, error_txt=self.error_txt)


@attrs.define(frozen=True)
class PushView:
    trigger_id: str
    modal: Modal

    async def apply(self, adapter: 'IChatAdapter') -> None:
        await adapter.push_view(trigger_id=self.trigger_id, modal=self.modal)


@attrs.define(frozen=True)
class Post:
    channel_id: str
    text: str

    async def apply(self, adapter: 'IChatAdapter') -> None:
        await adapter.post_message(channel_id=self.channel_id, text=self.text)


@attrs.define(frozen=True)
class PostEphemeral:
    channel_id: str
    user_id: str
    text: str

    async def apply(self, adapter: 'IChatAdapter') -> None:
        await adapter.post_ephemeral(
            channel_id=self.channel_id, user_id=self.user_id, text=self.text
        )


AnyAction = Union[OpenView, UpdateView, PushView, Post, PostEphemeral]


@attrs.define(frozen=True)
class Response:
    type: ClassVar[EventType] = EventType.RESPONSE

    user_name: str
    actions: tuple[AnyAction, ...]

    def info(self) -> str:
        names = [type(action).__name__ for action in self.actions]
        return f'Response{{user={self.user_name!r} actions={names}}}'

    def has_context(self, context: str) -> bool:
        return True
