"""
Personal view: the viewer's own space and its scheduled releases.
"""

from src.platform.exception.exceptions import NotFoundError
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.reservation.driving_adapter.view.action import ActionId, ActionValues, ModalType
from src.service.shared_kernel.domain.date_util import format_date
from src.service.shared_kernel.domain.modal import (
    ActionsBlock,
    Block,
    Button,
    ButtonStyle,
    DividerBlock,
    Modal,
    TextBlock,
    error_text,
)
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.space import Space
from src.service.spaces.domain.spaces_lot import SpacesLot


PERSONAL_DESCRIPTION = (
    'This is your personal space page.\n'
    'Here you can add/delete/cancel temporary releases of your space.\n'
)


def owner_text(space: Space, owner_id: str) -> str:
    if space.reserved and space.reserved_by_id != owner_id:
        return f'\n\tOwner: <@{owner_id}>'
    return ''


def release_text(release: ReleaseInfo) -> str:
    clock = (release.unique_id % 12) + 1
    return (
        f':clock{clock}: Scheduled release from {format_date(release.start_date)} '
        f'to {format_date(release.end_date)}'
    )


def _button_block(action_id: ActionId, text: str, value: str, style: ButtonStyle) -> ActionsBlock:
    return ActionsBlock(
        elements=(Button(action_id=action_id, text=text, value=value, style=style),)
    )


class PersonalView:
    def __init__(self, *, title: str, lot: SpacesLot, user_rights: IUserRightsQuery) -> None:
        self.title = title
        self.lot = lot
        self.user_rights = user_rights

    def generate(self, *, user_id: str, error_txt: str) -> Modal:
        blocks: list[Block] = [TextBlock(PERSONAL_DESCRIPTION)]
        if error_txt:
            blocks.append(error_text(error_txt))

        try:
            space = self.lot.get_owned_space_by_user_id(user_id)
        except NotFoundError as e:
            # Back to the overview for anyone without a space
            blocks.extend([self._switch_overview_button(), DividerBlock(), error_text(e.message)])
            return Modal(title=self.title, blocks=tuple(blocks))

        if self.user_rights.is_admin_id(user_id):
            blocks.append(self._switch_overview_button())
        blocks.append(DividerBlock())

        value = ActionValues(space_key=space.key, modal_type=ModalType.PERSONAL).encode()
        blocks.append(TextBlock(self._space_text(space, user_id)))
        blocks.append(
            _button_block(
                ActionId.TEMP_RELEASE_SPACE, 'Add Temp Release!', value, ButtonStyle.PRIMARY
            )
        )
        if self.user_rights.is_admin_id(user_id):
            blocks.append(
                _button_block(ActionId.RELEASE_SPACE, 'Release!', value, ButtonStyle.DANGER)
            )
        blocks.append(DividerBlock())

        for release in self.lot.to_be_released.get_all(space.key):
            if not release.submitted or not release.data_present():
                continue
            blocks.append(TextBlock(release_text(release)))
            if not release.cancelled:
                cancel_value = ActionValues(
                    space_key=space.key,
                    modal_type=ModalType.PERSONAL,
                    release_id=release.unique_id,
                ).encode()
                blocks.append(
                    _button_block(
                        ActionId.CANCEL_TEMP_RELEASE, 'Cancel', cancel_value, ButtonStyle.DANGER
                    )
                )

        return Modal(title=self.title, blocks=tuple(blocks))

    def _switch_overview_button(self) -> ActionsBlock:
        return _button_block(
            ActionId.SWITCH_TO_OVERVIEW,
            'View All Spaces',
            ActionValues(modal_type=ModalType.PERSONAL).encode(),
            ButtonStyle.DEFAULT,
        )

    def _space_text(self, space: Space, owner_id: str) -> str:
        return (
            f'{space.status_emoji()} *{space.number}* \t{space.props_text()}\t '
            f'{space.status_description()}{owner_text(space, owner_id)}'
        )
