from enum import StrEnum

from src.service.shared_kernel.domain.modal import (
    ActionsBlock,
    Block,
    Checkboxes,
    DividerBlock,
    Modal,
    Option,
    TextBlock,
    UserSelect,
    error_text,
)
from src.service.user.domain.user_roster import UserRoster


class UsersActionId(StrEnum):
    USER_SELECT = 'userActionId'
    USER_OPTIONS = 'userOptionId'


class UsersBlockId(StrEnum):
    USER = 'userBlockId'
    OPTIONS = 'userCheckboxActionId'


ADMIN_OPTION = Option(text='Admin', value='userRightsOption')
PERMANENT_SPACE_OPTION = Option(text='Permanent Space', value='userPermanentSpaceOption')


class UsersView:
    def __init__(self, *, title: str, roster: UserRoster) -> None:
        self.title = title
        self.roster = roster

    def generate(self, *, selected_user_id: str, error_txt: str = '') -> Modal:
        blocks: list[Block] = [
            TextBlock('Select user for which to change settings'),
            DividerBlock(),
            ActionsBlock(
                block_id=UsersBlockId.USER,
                elements=(
                    UserSelect(
                        action_id=UsersActionId.USER_SELECT,
                        placeholder='User',
                        initial_user=selected_user_id,
                    ),
                ),
            ),
        ]
        if error_txt:
            blocks.append(error_text(error_txt))

        # Checkboxes only once somebody is selected
        if not selected_user_id:
            return Modal(title=self.title, blocks=tuple(blocks))

        blocks.append(
            TextBlock(
                ':warning: *Before changing parking rights '
                'make sure the user has NOT booked any parking space!*'
            )
        )
        initial: list[Option] = []
        if self.roster.is_admin_id(selected_user_id):
            initial.append(ADMIN_OPTION)
        if self.roster.has_parking_by_id(selected_user_id):
            initial.append(PERMANENT_SPACE_OPTION)
        blocks.append(
            ActionsBlock(
                block_id=UsersBlockId.OPTIONS,
                elements=(
                    Checkboxes(
                        action_id=UsersActionId.USER_OPTIONS,
                        options=(ADMIN_OPTION, PERMANENT_SPACE_OPTION),
                        initial_options=tuple(initial),
                    ),
                ),
            )
        )
        return Modal(title=self.title, blocks=tuple(blocks))
