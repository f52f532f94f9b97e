"""
Unit tests for the users manager

/users-parking opens the settings modal for admins. Selecting a user adds
them to the roster on first sight; ticking checkboxes writes their rights
right away.
"""

from unittest.mock import AsyncMock

import pytest

from src.service.admin.driving_adapter.users_manager import TITLE, UsersManager
from src.service.admin.driving_adapter.view.users_view import (
    ADMIN_OPTION,
    PERMANENT_SPACE_OPTION,
    UsersActionId,
)
from src.service.shared_kernel.domain.domain_event import (
    BlockAction,
    BlockActionItem,
    OpenView,
    PostEphemeral,
    SlashCommand,
    UpdateView,
    ViewClosed,
)
from src.service.shared_kernel.domain.modal import Checkboxes
from src.service.user.domain.user_entity import AccessRight
from src.service.user.domain.user_roster import UserRoster
from test.constants import ADMIN_ID, ADMIN_NAME, GUEST_ID, GUEST_NAME, OTHER_ID, OTHER_NAME


@pytest.fixture
def manager(roster: UserRoster) -> UsersManager:
    return UsersManager(roster=roster, event_bus=AsyncMock(), testing_active=False)


def _select_user(user_id: str, user_name: str, admin_id: str = ADMIN_ID) -> BlockAction:
    return BlockAction(
        user_name=ADMIN_NAME,
        user_id=admin_id,
        view_id='V',
        title=TITLE,
        actions=(BlockActionItem(action_id=UsersActionId.USER_SELECT, selected_user=user_id),),
        selected_user_name=user_name,
    )


def _tick(*options: str) -> BlockAction:
    return BlockAction(
        user_name=ADMIN_NAME,
        user_id=ADMIN_ID,
        view_id='V',
        title=TITLE,
        actions=(
            BlockActionItem(action_id=UsersActionId.USER_OPTIONS, selected_options=options),
        ),
    )


class TestUsersSlashCommand:
    @pytest.mark.asyncio
    async def test_admin_opens_modal(self, manager: UsersManager) -> None:
        response = await manager.handle(
            SlashCommand(user_name=ADMIN_NAME, user_id=ADMIN_ID, command='/users-parking')
        )

        (action,) = response.actions
        assert isinstance(action, OpenView)
        assert action.modal.title == 'Users: Settings'

    @pytest.mark.asyncio
    async def test_standard_user_is_refused(self, manager: UsersManager) -> None:
        response = await manager.handle(
            SlashCommand(
                user_name=GUEST_NAME, user_id=GUEST_ID, command='/users-parking', channel_id='C1'
            )
        )

        (action,) = response.actions
        assert isinstance(action, PostEphemeral)
        assert action.channel_id == 'C1'
        assert action.text == "You don't have permission to execute '/users-parking' command"


class TestUsersBlockActions:
    @pytest.mark.asyncio
    async def test_select_and_grant_rights(
        self, roster: UserRoster, manager: UsersManager
    ) -> None:
        response = await manager.handle(_select_user(GUEST_ID, GUEST_NAME))

        (update,) = response.actions
        assert isinstance(update, UpdateView)
        checkboxes = update.modal.elements()[-1]
        assert isinstance(checkboxes, Checkboxes)
        assert checkboxes.initial_options == ()

        response = await manager.handle(_tick(ADMIN_OPTION.value, PERMANENT_SPACE_OPTION.value))

        user = roster.get_user(GUEST_ID)
        assert user.rights == AccessRight.ADMIN
        assert user.has_permanent_parking
        roster.store.save.assert_called()
        checkboxes = response.actions[0].modal.elements()[-1]
        assert checkboxes.initial_options == (ADMIN_OPTION, PERMANENT_SPACE_OPTION)

    @pytest.mark.asyncio
    async def test_unknown_user_is_added(self, roster: UserRoster, manager: UsersManager) -> None:
        await manager.handle(_select_user('U_NEW', 'dave'))

        assert roster.get_name_from_id('U_NEW') == 'dave'
        assert not roster.has_parking_by_id('U_NEW')

    @pytest.mark.asyncio
    async def test_name_clash_is_reported(
        self, roster: UserRoster, manager: UsersManager
    ) -> None:
        response = await manager.handle(_select_user('U_NEW', OTHER_NAME))

        assert response.actions[0].error_txt.startswith(f'Failed to add user {OTHER_NAME}')
        assert roster.get_user('U_NEW') is None
        assert roster.get_user(OTHER_ID) is not None

    @pytest.mark.asyncio
    async def test_options_need_a_selected_user(self, manager: UsersManager) -> None:
        response = await manager.handle(_tick(ADMIN_OPTION.value))
        assert response.actions[0].error_txt == 'Select a user first'

    @pytest.mark.asyncio
    async def test_non_admin_actions_are_ignored(
        self, roster: UserRoster, manager: UsersManager
    ) -> None:
        response = await manager.handle(_select_user(OTHER_ID, OTHER_NAME, admin_id=GUEST_ID))

        assert response is None
        assert GUEST_ID not in manager.selected_user

    @pytest.mark.asyncio
    async def test_close_forgets_selection(self, manager: UsersManager) -> None:
        await manager.handle(_select_user(GUEST_ID, GUEST_NAME))

        await manager.handle(
            ViewClosed(user_name=ADMIN_NAME, user_id=ADMIN_ID, view_id='V', title=TITLE)
        )

        assert ADMIN_ID not in manager.selected_user
