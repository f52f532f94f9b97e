"""
Booking view: every space of the selected floor with the buttons the viewer
is allowed to press.
"""

from datetime import datetime

from src.service.reservation.app.interface import IUserRightsQuery
from src.service.reservation.domain.reservation_view_state import (
    SHOW_FREE_OPTION,
    SHOW_OPTIONS,
    SHOW_TAKEN_OPTION,
)
from src.service.reservation.driving_adapter.view.action import (
    ActionId,
    ActionValues,
    BlockId,
    ModalType,
)
from src.service.shared_kernel.domain.date_util import DAY, format_date, is_before_cutoff
from src.service.shared_kernel.domain.modal import (
    ActionsBlock,
    Block,
    Button,
    ButtonStyle,
    DividerBlock,
    Modal,
    Option,
    StaticSelect,
    TextBlock,
    error_text,
)
from src.service.spaces.domain.space import Space, SpaceType
from src.service.spaces.domain.spaces_lot import SpacesLot


def switch_personal_button() -> ActionsBlock:
    return ActionsBlock(
        elements=(
            Button(
                action_id=ActionId.SWITCH_TO_PERSONAL,
                text='View My Space',
                value=ActionValues(modal_type=ModalType.BOOKING).encode(),
            ),
        )
    )


class BookingView:
    def __init__(
        self,
        *,
        title: str,
        lot: SpacesLot,
        user_rights: IUserRightsQuery,
        reset_hour: int,
        reset_minute: int,
    ) -> None:
        self.title = title
        self.lot = lot
        self.user_rights = user_rights
        self.reset_hour = reset_hour
        self.reset_minute = reset_minute

    def generate(
        self,
        *,
        user_id: str,
        floors: list[str],
        selected_floor: str,
        show_taken: bool,
        error_txt: str,
        now: datetime,
    ) -> Modal:
        blocks: list[Block] = [self._validity_block(now)]
        blocks.append(self._floor_select(floors, selected_floor))
        blocks.append(self._show_select(show_taken))
        if error_txt:
            blocks.append(error_text(error_txt))
        blocks.append(DividerBlock())

        user_space = self.lot.get_owned_space(user_id)
        if user_space is not None:
            blocks.extend([switch_personal_button(), DividerBlock()])

        space_type = SpaceType.TAKEN if show_taken else SpaceType.FREE
        for space in self.lot.get_spaces_by_floor(user_id, selected_floor, space_type):
            blocks.append(TextBlock(self._space_text(space)))

            # The viewer's own space links to the personal view instead
            if user_space is not None and user_space.key == space.key:
                blocks.extend([switch_personal_button(), DividerBlock()])
                continue

            # Users with rights but without a space may not take a space
            # somebody else has lent out
            if (
                user_space is None
                and self.user_rights.has_parking_by_id(user_id)
                and self.lot.to_be_released.has_active_release(space.key)
            ):
                blocks.append(DividerBlock())
                continue

            if buttons := self._space_buttons(space, user_id):
                blocks.append(ActionsBlock(elements=tuple(buttons)))
            blocks.append(DividerBlock())

        return Modal(title=self.title, blocks=tuple(blocks))

    def _validity_block(self, now: datetime) -> TextBlock:
        valid_for = now if is_before_cutoff(now, self.reset_hour, self.reset_minute) else now + DAY
        return TextBlock(f'_Reservation is valid for {format_date(valid_for)}_')

    def _floor_select(self, floors: list[str], selected_floor: str) -> ActionsBlock:
        options = tuple(Option(text=floor, value=floor) for floor in floors)
        initial = Option(text=selected_floor, value=selected_floor) if selected_floor else None
        return ActionsBlock(
            block_id=BlockId.FLOOR,
            elements=(
                StaticSelect(
                    action_id=ActionId.FLOOR_OPTION,
                    placeholder='Choose a floor',
                    options=options,
                    initial_option=initial,
                ),
            ),
        )

    def _show_select(self, show_taken: bool) -> ActionsBlock:
        selected = SHOW_TAKEN_OPTION if show_taken else SHOW_FREE_OPTION
        return ActionsBlock(
            block_id=BlockId.SHOW,
            elements=(
                StaticSelect(
                    action_id=ActionId.SHOW_OPTION,
                    placeholder='Choose what spaces to show',
                    options=tuple(Option(text=opt, value=opt) for opt in SHOW_OPTIONS),
                    initial_option=Option(text=selected, value=selected),
                ),
            ),
        )

    def _space_text(self, space: Space) -> str:
        release_scheduled = ''
        if (release := self.lot.to_be_released.get_active(space.key)) is not None:
            release_scheduled = (
                f'\n\t\tScheduled release from {format_date(release.start_date)} '
                f'to {format_date(release.end_date)}'
            )
        return (
            f'{space.status_emoji()} *{space.number}* \t{space.props_text()}\t '
            f'{space.status_description()}{release_scheduled}'
        )

    def _space_buttons(self, space: Space, user_id: str) -> list[Button]:
        is_admin = self.user_rights.is_admin_id(user_id)
        value = ActionValues(space_key=space.key, modal_type=ModalType.BOOKING).encode()
        buttons: list[Button] = []

        if space.reserved and (space.reserved_by_id == user_id or is_admin):
            # Admins may lend a space out on behalf of its permanent holder
            if is_admin and self.user_rights.has_parking_by_id(space.reserved_by_id):
                buttons.append(
                    Button(
                        action_id=ActionId.TEMP_RELEASE_SPACE,
                        text='Temp Release!',
                        value=value,
                        style=ButtonStyle.DANGER,
                    )
                )
            if is_admin or not self.user_rights.has_parking_by_id(user_id):
                buttons.append(
                    Button(
                        action_id=ActionId.RELEASE_SPACE,
                        text='Release!',
                        value=value,
                        style=ButtonStyle.DANGER,
                    )
                )
        elif not space.reserved and (
            is_admin
            or (
                not self.lot.has_space(user_id)
                and not self.lot.has_temp_release(user_id)
            )
        ):
            buttons.append(
                Button(
                    action_id=ActionId.RESERVE_SPACE,
                    text='Reserve! :eject:',
                    value=value,
                    style=ButtonStyle.PRIMARY,
                )
            )
        return buttons
