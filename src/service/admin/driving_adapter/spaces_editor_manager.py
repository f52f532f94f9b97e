"""
Spaces Editor Manager

Admin modal behind /spaces-parking and /spaces-workspace. The admin picks
"Add Space" or "Remove Space/s", fills in the form and submits; the outcome
is posted back as an ephemeral message.
"""

from typing import Optional

from src.platform.event.i_event_bus import BusEvent, IEventBus
from src.platform.logging.loguru_io import Logger
from src.service.admin.app.command.edit_spaces_use_case import EditSpacesUseCase
from src.service.admin.driving_adapter.view.spaces_editor_view import (
    EditActionId,
    EditBlockId,
    EditOption,
    SpacesEditorView,
)
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.shared_kernel.domain.domain_event import (
    BlockAction,
    OpenView,
    PostEphemeral,
    Response,
    SlashCommand,
    UpdateView,
    ViewClosed,
    ViewSubmission,
)
from src.service.shared_kernel.domain.enum import EventType
from src.service.shared_kernel.domain.slash_command import (
    SlashCmd,
    permission_denied_text,
    should_process_slash,
)
from src.service.spaces.domain.spaces_lot import SpacesLot


PARKING_EDITOR = 'Parking Editor: '
WORKSPACE_EDITOR = 'Workspace Editor: '


class SpacesEditorManager:
    def __init__(
        self,
        *,
        identifier: str,
        command: SlashCmd,
        lot: SpacesLot,
        user_rights: IUserRightsQuery,
        event_bus: IEventBus,
        testing_active: bool,
    ) -> None:
        self.identifier = identifier
        self.command = command
        self.lot = lot
        self.user_rights = user_rights
        self.event_bus = event_bus
        self.testing_active = testing_active
        self.title = identifier + 'Spaces'
        self.view = SpacesEditorView(title=self.title, lot=lot)
        self.edit_spaces_use_case = EditSpacesUseCase(lot=lot)
        # admin id -> selected edit option
        self.selected_option: dict[str, EditOption] = {}

    @property
    def context(self) -> str:
        return self.identifier

    def subscribe(self, event_bus: IEventBus) -> None:
        event_bus.subscribe(self, EventType.SLASH_COMMAND)
        event_bus.subscribe_with_context(
            self, EventType.BLOCK_ACTION, EventType.VIEW_SUBMISSION, EventType.VIEW_CLOSED
        )

    async def consume(self, event: BusEvent) -> None:
        response = await self.handle(event)
        if response is not None:
            await self.event_bus.publish(response)

    async def handle(self, event: BusEvent) -> Optional[Response]:
        async with self.lot.lock:
            match event:
                case SlashCommand():
                    return self.handle_slash_command(event)
                case BlockAction():
                    return self.handle_block_action(event)
                case ViewSubmission():
                    return self.handle_view_submission(event)
                case ViewClosed():
                    self.selected_option.pop(event.user_id, None)
        return None

    def _option_of(self, user_id: str) -> EditOption:
        return self.selected_option.get(user_id, EditOption.NOT_SELECTED)

    def handle_slash_command(self, event: SlashCommand) -> Optional[Response]:
        if not should_process_slash(event.command, self.command, self.testing_active):
            return None

        if not self.user_rights.is_admin_id(event.user_id):
            Logger.base.warning(
                f'🛠️ [EDIT] {event.user_name} is not allowed to run {event.command}'
            )
            return Response(
                user_name=event.user_name,
                actions=(
                    PostEphemeral(
                        channel_id=event.channel_id,
                        user_id=event.user_id,
                        text=permission_denied_text(event.command),
                    ),
                ),
            )

        self.selected_option.pop(event.user_id, None)
        modal = self.view.generate(selected_option=EditOption.NOT_SELECTED)
        return Response(
            user_name=event.user_name, actions=(OpenView(trigger_id=event.trigger_id, modal=modal),)
        )

    def handle_block_action(self, event: BlockAction) -> Optional[Response]:
        if not self.user_rights.is_admin_id(event.user_id):
            return None

        for item in event.actions:
            if item.action_id != EditActionId.SELECT_EDIT_OPTION:
                continue
            try:
                self.selected_option[event.user_id] = EditOption(item.selected_option)
            except ValueError:
                Logger.base.error(f'🛠️ [EDIT] Unknown edit option {item.selected_option!r}')

        modal = self.view.generate(selected_option=self._option_of(event.user_id))
        return Response(
            user_name=event.user_name,
            actions=(UpdateView(trigger_id=event.trigger_id, view_id=event.view_id, modal=modal),),
        )

    def handle_view_submission(self, event: ViewSubmission) -> Optional[Response]:
        if event.title != self.title or not self.user_rights.is_admin_id(event.user_id):
            return None

        match self.selected_option.pop(event.user_id, EditOption.NOT_SELECTED):
            case EditOption.ADD_SPACE:
                floor = event.value(EditBlockId.ADD_FLOOR, EditActionId.ADD_FLOOR)
                number = event.value(EditBlockId.ADD_SPACE, EditActionId.ADD_SPACE)
                description = event.value(EditBlockId.ADD_DESCRIPTION, EditActionId.ADD_DESCRIPTION)
                message, error_txt = self.edit_spaces_use_case.add_space(
                    floor=floor.value if floor else '',
                    number=number.value if number else '',
                    description=description.value if description else '',
                )
            case EditOption.REMOVE_SPACES:
                selected = event.value(EditBlockId.SELECT_SPACES, EditActionId.SELECT_SPACES)
                message, error_txt = self.edit_spaces_use_case.remove_spaces(
                    space_keys=list(selected.selected_options) if selected else []
                )
            case _:
                message, error_txt = '', 'No operation selected -> nothing was done'

        return Response(
            user_name=event.user_name,
            actions=(
                PostEphemeral(
                    channel_id=event.user_id, user_id=event.user_id, text=error_txt or message
                ),
            ),
        )
