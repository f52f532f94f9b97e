from unittest.mock import AsyncMock

import pytest

from src.service.admin.driving_adapter.spaces_editor_manager import (
    PARKING_EDITOR,
    SpacesEditorManager,
)
from src.service.admin.driving_adapter.view.spaces_editor_view import (
    EditActionId,
    EditBlockId,
    EditOption,
)
from src.service.shared_kernel.domain.domain_event import (
    BlockAction,
    BlockActionItem,
    OpenView,
    PostEphemeral,
    SlashCommand,
    ViewClosed,
    ViewSubmission,
)
from src.service.shared_kernel.domain.modal import MultiSelect
from src.service.shared_kernel.domain.slash_command import SlashCmd
from src.service.spaces.domain.spaces_lot import SpacesLot
from src.service.user.domain.user_roster import UserRoster
from test.constants import (
    ADMIN_ID,
    ADMIN_NAME,
    FREE_SPACE,
    GUEST_ID,
    GUEST_NAME,
    OTHER_FREE_SPACE,
    OWNED_SPACE,
    UPPER_SPACE,
)


TITLE = PARKING_EDITOR + 'Spaces'


@pytest.fixture
def manager(lot: SpacesLot, roster: UserRoster) -> SpacesEditorManager:
    return SpacesEditorManager(
        identifier=PARKING_EDITOR,
        command=SlashCmd.SPACES_PARKING,
        lot=lot,
        user_rights=roster,
        event_bus=AsyncMock(),
        testing_active=False,
    )


def _choose(option: EditOption, user_id: str = ADMIN_ID) -> BlockAction:
    return BlockAction(
        user_name=ADMIN_NAME,
        user_id=user_id,
        view_id='V',
        title=TITLE,
        actions=(
            BlockActionItem(action_id=EditActionId.SELECT_EDIT_OPTION, selected_option=option),
        ),
    )


def _submit(values: dict[str, BlockActionItem] | None = None) -> ViewSubmission:
    return ViewSubmission(
        user_name=ADMIN_NAME,
        user_id=ADMIN_ID,
        view_id='V',
        title=TITLE,
        values={
            block_id: {item.action_id: item} for block_id, item in (values or {}).items()
        },
    )


class TestSpacesEditorSlashCommand:
    @pytest.mark.asyncio
    async def test_admin_opens_editor(self, manager: SpacesEditorManager) -> None:
        response = await manager.handle(
            SlashCommand(user_name=ADMIN_NAME, user_id=ADMIN_ID, command='/spaces-parking')
        )

        (action,) = response.actions
        assert isinstance(action, OpenView)
        assert action.modal.title == 'Parking Editor: Spaces'
        assert action.modal.submit_text == ''

    @pytest.mark.asyncio
    async def test_standard_user_is_refused(self, manager: SpacesEditorManager) -> None:
        response = await manager.handle(
            SlashCommand(user_name=GUEST_NAME, user_id=GUEST_ID, command='/spaces-parking')
        )
        assert isinstance(response.actions[0], PostEphemeral)

    @pytest.mark.asyncio
    async def test_workspace_command_is_not_ours(self, manager: SpacesEditorManager) -> None:
        response = await manager.handle(
            SlashCommand(user_name=ADMIN_NAME, user_id=ADMIN_ID, command='/spaces-workspace')
        )
        assert response is None


class TestSpacesEditorFlow:
    @pytest.mark.asyncio
    async def test_add_space(self, lot: SpacesLot, manager: SpacesEditorManager) -> None:
        response = await manager.handle(_choose(EditOption.ADD_SPACE))
        assert response.actions[0].modal.submit_text == 'Add'

        response = await manager.handle(
            _submit(
                {
                    EditBlockId.ADD_FLOOR: BlockActionItem(
                        action_id=EditActionId.ADD_FLOOR, value='2'
                    ),
                    EditBlockId.ADD_SPACE: BlockActionItem(
                        action_id=EditActionId.ADD_SPACE, value='7'
                    ),
                }
            )
        )

        (action,) = response.actions
        assert isinstance(action, PostEphemeral)
        assert action.user_id == ADMIN_ID
        assert action.text == 'Added space 2nd floor 7'
        assert '2nd floor 7' in lot.unit_spaces
        assert ADMIN_ID not in manager.selected_option

    @pytest.mark.asyncio
    async def test_remove_spaces(self, lot: SpacesLot, manager: SpacesEditorManager) -> None:
        response = await manager.handle(_choose(EditOption.REMOVE_SPACES))
        select = response.actions[0].modal.elements()[-1]
        assert isinstance(select, MultiSelect)
        assert [option.value for option in select.options] == [
            OWNED_SPACE,
            FREE_SPACE,
            OTHER_FREE_SPACE,
            UPPER_SPACE,
        ]

        response = await manager.handle(
            _submit(
                {
                    EditBlockId.SELECT_SPACES: BlockActionItem(
                        action_id=EditActionId.SELECT_SPACES,
                        selected_options=(FREE_SPACE, UPPER_SPACE),
                    )
                }
            )
        )

        assert response.actions[0].text == f'Removed space(s): {FREE_SPACE}, {UPPER_SPACE}'
        assert sorted(lot.unit_spaces) == [OWNED_SPACE, OTHER_FREE_SPACE]

    @pytest.mark.asyncio
    async def test_submit_without_option(self, manager: SpacesEditorManager) -> None:
        response = await manager.handle(_submit())
        assert response.actions[0].text == 'No operation selected -> nothing was done'

    @pytest.mark.asyncio
    async def test_close_forgets_option(self, manager: SpacesEditorManager) -> None:
        await manager.handle(_choose(EditOption.ADD_SPACE))

        await manager.handle(
            ViewClosed(user_name=ADMIN_NAME, user_id=ADMIN_ID, view_id='V', title=TITLE)
        )

        assert ADMIN_ID not in manager.selected_option

    @pytest.mark.asyncio
    async def test_non_admin_cannot_edit(
        self, lot: SpacesLot, manager: SpacesEditorManager
    ) -> None:
        assert await manager.handle(_choose(EditOption.REMOVE_SPACES, user_id=GUEST_ID)) is None
        assert GUEST_ID not in manager.selected_option
