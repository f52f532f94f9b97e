import pytest

from src.service.shared_kernel.domain.slash_command import (
    SlashCmd,
    alias_for_testing,
    permission_denied_text,
    should_process_slash,
)


class TestSlashCommand:
    def test_alias_for_testing(self) -> None:
        assert alias_for_testing(SlashCmd.PARKING) == '/test-parking'
        assert alias_for_testing(SlashCmd.USERS_PARKING) == '/test-users-parking'

    @pytest.mark.parametrize(
        'received,testing_active,expected',
        [
            ('/parking', False, True),
            ('/test-parking', False, False),
            ('/parking', True, False),
            ('/test-parking', True, True),
            ('/workspace', False, False),
        ],
    )
    def test_should_process_slash(
        self, received: str, testing_active: bool, expected: bool
    ) -> None:
        assert should_process_slash(received, SlashCmd.PARKING, testing_active) is expected

    def test_permission_denied_text(self) -> None:
        assert (
            permission_denied_text('/spaces-parking')
            == "You don't have permission to execute '/spaces-parking' command"
        )

