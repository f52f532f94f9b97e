"""
Chat Events

Inbound events produced by the chat adapter and the scheduler.

Interaction events (block actions, view submissions, view lifecycle) carry the
title of the modal they originate from. Every modal title starts with the
identifier of the manager that rendered it, which is how context-filtered
subscriptions route those events back to their owner.
"""

from datetime import datetime
from typing import ClassVar, Optional, Union

import attrs

from src.service.shared_kernel.domain.enum import EventType


@attrs.define(frozen=True)
class BlockActionItem:
    """Single interactive element state (a pressed button, a picked date, ...)."""

    block_id: str = ''
    action_id: str = ''
    value: str = ''
    selected_date: str = ''
    selected_option: str = ''
    selected_user: str = ''
    selected_options: tuple[str, ...] = ()


# values[block_id][action_id] -> element state, as submitted with a modal
ViewValues = dict[str, dict[str, BlockActionItem]]


def _value_of(values: ViewValues, block_id: str, action_id: str) -> Optional[BlockActionItem]:
    return values.get(block_id, {}).get(action_id)


@attrs.define(frozen=True)
class SlashCommand:
    type: ClassVar[EventType] = EventType.SLASH_COMMAND

    user_name: str
    user_id: str
    command: str
    trigger_id: str = ''
    channel_name: str = ''
    channel_id: str = ''
    text: str = ''

    def info(self) -> str:
        return f'SlashCommand{{user={self.user_name!r} command={self.command!r}}}'

    def has_context(self, context: str) -> bool:
        return True


@attrs.define(frozen=True)
class BlockAction:
    type: ClassVar[EventType] = EventType.BLOCK_ACTION

    user_name: str
    user_id: str
    trigger_id: str = ''
    view_id: str = ''
    title: str = ''
    actions: tuple[BlockActionItem, ...] = ()
    values: ViewValues = attrs.field(factory=dict)
    selected_user_name: str = ''

    def value(self, block_id: str, action_id: str) -> Optional[BlockActionItem]:
        return _value_of(self.values, block_id, action_id)

    def info(self) -> str:
        action_ids = [action.action_id for action in self.actions]
        return f'BlockAction{{user={self.user_name!r} title={self.title!r} actions={action_ids}}}'

    def has_context(self, context: str) -> bool:
        return context in self.title


@attrs.define(frozen=True)
class ViewSubmission:
    type: ClassVar[EventType] = EventType.VIEW_SUBMISSION

    user_name: str
    user_id: str
    view_id: str
    trigger_id: str = ''
    title: str = ''
    values: ViewValues = attrs.field(factory=dict)

    def value(self, block_id: str, action_id: str) -> Optional[BlockActionItem]:
        return _value_of(self.values, block_id, action_id)

    def info(self) -> str:
        return (
            f'ViewSubmission{{user={self.user_name!r} title={self.title!r} '
            f'view={self.view_id!r}}}'
        )

    def has_context(self, context: str) -> bool:
        return context in self.title


@attrs.define(frozen=True)
class ViewOpened:
    type: ClassVar[EventType] = EventType.VIEW_OPENED

    user_name: str
    user_id: str
    view_id: str
    root_view_id: str = ''
    title: str = ''

    def info(self) -> str:
        return (
            f'ViewOpened{{user={self.user_name!r} title={self.title!r} '
            f'view={self.view_id!r} root={self.root_view_id!r}}}'
        )

    def has_context(self, context: str) -> bool:
        return context in self.title


@attrs.define(frozen=True)
class ViewClosed:
    type: ClassVar[EventType] = EventType.VIEW_CLOSED

    user_name: str
    user_id: str
    view_id: str
    trigger_id: str = ''
    title: str = ''

    def info(self) -> str:
        return f'ViewClosed{{user={self.user_name!r} title={self.title!r} view={self.view_id!r}}}'

    def has_context(self, context: str) -> bool:
        return context in self.title


@attrs.define(frozen=True)
class TimerDone:
    type: ClassVar[EventType] = EventType.TIMER_DONE

    label: str
    time: datetime

    def info(self) -> str:
        return f'TimerDone{{label={self.label!r} time={self.time.isoformat(sep=" ")}}}'

    def has_context(self, context: str) -> bool:
        return True


ChatEvent = Union[SlashCommand, BlockAction, ViewSubmission, ViewOpened, ViewClosed, TimerDone]
