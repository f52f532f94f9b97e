"""Slash command names and routing rules"""

from enum import StrEnum


class SlashCmd(StrEnum):
    PARKING = '/parking'
    WORKSPACE = '/workspace'
    USERS_PARKING = '/users-parking'
    SPACES_PARKING = '/spaces-parking'
    SPACES_WORKSPACE = '/spaces-workspace'
    ROLL = '/roll'


def alias_for_testing(command: str) -> str:
    """`/parking` -> `/test-parking`"""
    return '/test-' + command.removeprefix('/')


def should_process_slash(received: str, command: str, testing_active: bool) -> bool:
    """Only the `/test-*` alias is live in testing mode, only the real command otherwise."""
    if testing_active:
        return received == alias_for_testing(command)
    return received == command


def permission_denied_text(command: str) -> str:
    return f"You don't have permission to execute '{command}' command"
