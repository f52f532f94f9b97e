"""Shared Kernel Domain Events"""

from src.service.shared_kernel.domain.domain_event.chat_event import (
    BlockAction,
    BlockActionItem,
    ChatEvent,
    SlashCommand,
    TimerDone,
    ViewClosed,
    ViewOpened,
    ViewSubmission,
    ViewValues,
)
from src.service.shared_kernel.domain.domain_event.response import (
    OpenView,
    Post,
    PostEphemeral,
    PushView,
    Response,
    ResponseAction,
    UpdateView,
)


__all__ = [
    'BlockAction',
    'BlockActionItem',
    'ChatEvent',
    'OpenView',
    'Post',
    'PostEphemeral',
    'PushView',
    'Response',
    'ResponseAction',
    'SlashCommand',
    'TimerDone',
    'UpdateView',
    'ViewClosed',
    'ViewOpened',
    'ViewSubmission',
    'ViewValues',
]
