"""
Users Manager

Admin modal behind /users-parking: pick a user, then toggle their admin and
permanent parking rights. Checkbox changes are written to the roster right
away; the modal has no submit step.
"""

from typing import Optional

from src.platform.event.i_event_bus import BusEvent, IEventBus
from src.platform.exception.exceptions import DuplicateUserError
from src.platform.logging.loguru_io import Logger
from src.service.admin.app.command.manage_user_rights_use_case import ManageUserRightsUseCase
from src.service.admin.driving_adapter.view.users_view import (
    ADMIN_OPTION,
    PERMANENT_SPACE_OPTION,
    UsersActionId,
    UsersView,
)
from src.service.shared_kernel.domain.domain_event import (
    BlockAction,
    BlockActionItem,
    OpenView,
    PostEphemeral,
    Response,
    SlashCommand,
    UpdateView,
    ViewClosed,
)
from src.service.shared_kernel.domain.enum import EventType
from src.service.shared_kernel.domain.slash_command import (
    SlashCmd,
    permission_denied_text,
    should_process_slash,
)
from src.service.user.domain.user_roster import UserRoster


IDENTIFIER = 'Users: '
TITLE = IDENTIFIER + 'Settings'


class UsersManager:
    def __init__(self, *, roster: UserRoster, event_bus: IEventBus, testing_active: bool) -> None:
        self.roster = roster
        self.event_bus = event_bus
        self.testing_active = testing_active
        self.view = UsersView(title=TITLE, roster=roster)
        self.manage_user_rights_use_case = ManageUserRightsUseCase(roster=roster)
        # admin id -> user being edited
        self.selected_user: dict[str, str] = {}

    @property
    def context(self) -> str:
        return IDENTIFIER

    def subscribe(self, event_bus: IEventBus) -> None:
        event_bus.subscribe(self, EventType.SLASH_COMMAND)
        event_bus.subscribe_with_context(self, EventType.BLOCK_ACTION, EventType.VIEW_CLOSED)

    async def consume(self, event: BusEvent) -> None:
        response = await self.handle(event)
        if response is not None:
            await self.event_bus.publish(response)

    async def handle(self, event: BusEvent) -> Optional[Response]:
        async with self.roster.lock:
            match event:
                case SlashCommand():
                    return self.handle_slash_command(event)
                case BlockAction():
                    return self.handle_block_action(event)
                case ViewClosed():
                    self.selected_user.pop(event.user_id, None)
        return None

    def handle_slash_command(self, event: SlashCommand) -> Optional[Response]:
        if not should_process_slash(event.command, SlashCmd.USERS_PARKING, self.testing_active):
            return None

        if not self.roster.is_admin_id(event.user_id):
            Logger.base.warning(
                f'👤 [USERS] {event.user_name} is not allowed to run {event.command}'
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

        self.selected_user.pop(event.user_id, None)
        modal = self.view.generate(selected_user_id='')
        return Response(
            user_name=event.user_name, actions=(OpenView(trigger_id=event.trigger_id, modal=modal),)
        )

    def handle_block_action(self, event: BlockAction) -> Optional[Response]:
        if not self.roster.is_admin_id(event.user_id):
            Logger.base.warning(f'👤 [USERS] Ignoring action of non-admin {event.user_name}')
            return None

        error_txt = ''
        for item in event.actions:
            error_txt = self._handle_action_item(event, item) or error_txt

        modal = self.view.generate(
            selected_user_id=self.selected_user.get(event.user_id, ''), error_txt=error_txt
        )
        return Response(
            user_name=event.user_name,
            actions=(
                UpdateView(
                    trigger_id=event.trigger_id,
                    view_id=event.view_id,
                    modal=modal,
                    error_txt=error_txt,
                ),
            ),
        )

    def _handle_action_item(self, event: BlockAction, item: BlockActionItem) -> str:
        match item.action_id:
            case UsersActionId.USER_SELECT:
                try:
                    self.manage_user_rights_use_case.ensure_user(
                        user_id=item.selected_user, user_name=event.selected_user_name
                    )
                except DuplicateUserError as e:
                    self.selected_user.pop(event.user_id, None)
                    return f'Failed to add user {event.selected_user_name}: {e}'
                self.selected_user[event.user_id] = item.selected_user

            case UsersActionId.USER_OPTIONS:
                user_id = self.selected_user.get(event.user_id)
                if not user_id:
                    return 'Select a user first'
                self.manage_user_rights_use_case.update_rights(
                    admin_name=event.user_name,
                    user_id=user_id,
                    is_admin=ADMIN_OPTION.value in item.selected_options,
                    has_parking=PERMANENT_SPACE_OPTION.value in item.selected_options,
                )
        return ''
