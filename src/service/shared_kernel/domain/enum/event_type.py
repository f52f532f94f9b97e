"""Event Type Enum"""

from enum import StrEnum


class EventType(StrEnum):
    ANY = 'any'
    SLASH_COMMAND = 'slash_command'
    BLOCK_ACTION = 'block_action'
    VIEW_SUBMISSION = 'view_submission'
    VIEW_OPENED = 'view_opened'
    VIEW_CLOSED = 'view_closed'
    TIMER_DONE = 'timer_done'
    RESPONSE = 'response'
