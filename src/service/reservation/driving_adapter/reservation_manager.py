"""
Reservation Manager

Bus consumer for one lot (parking or workspaces). Routes chat events to the
reservation use cases and answers with a Response carrying view updates and
notifications.

Event routing:
- SlashCommand  -> open the personal view for owners, the booking view otherwise
- BlockAction   -> by action id (floor/show selects, reserve, release,
                   temp release, cancel, date pickers, view switches)
- ViewSubmission of the release modal -> schedule the release
- ViewOpened / ViewClosed -> bind / discard the draft behind a release modal
- TimerDone with the lot's reset label -> daily transition

Handlers run under the lot lock so a read-modify-write on the lot never
interleaves with another handler or the daily reset.
"""

from datetime import datetime
from typing import Callable, Optional

from src.platform.event.i_event_bus import BusEvent, IEventBus
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.command.cancel_temp_release_use_case import (
    CancelTempReleaseUseCase,
)
from src.service.reservation.app.command.create_temp_release_use_case import (
    CreateTempReleaseUseCase,
)
from src.service.reservation.app.command.daily_reset_use_case import DailyResetUseCase
from src.service.reservation.app.command.release_space_use_case import ReleaseSpaceUseCase
from src.service.reservation.app.command.reserve_space_use_case import ReserveSpaceUseCase
from src.service.reservation.app.command.submit_temp_release_use_case import (
    SubmitTempReleaseUseCase,
)
from src.service.reservation.app.command.track_release_view_use_case import (
    TrackReleaseViewUseCase,
)
from src.service.reservation.app.command.update_release_date_use_case import (
    UpdateReleaseDateUseCase,
)
from src.service.reservation.app.dto import SubmitTempReleaseRequest
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.reservation.domain.reservation_config import ReservationConfig
from src.service.reservation.domain.reservation_view_state import ReservationViewState
from src.service.reservation.driving_adapter.view.action import (
    ActionId,
    ActionValues,
    BlockId,
    ModalType,
)
from src.service.reservation.driving_adapter.view.booking_view import BookingView
from src.service.reservation.driving_adapter.view.personal_view import PersonalView
from src.service.reservation.driving_adapter.view.release_view import ReleaseView
from src.service.shared_kernel.domain.domain_event import (
    BlockAction,
    BlockActionItem,
    OpenView,
    PostEphemeral,
    PushView,
    Response,
    SlashCommand,
    TimerDone,
    UpdateView,
    ViewClosed,
    ViewOpened,
    ViewSubmission,
)
from src.service.shared_kernel.domain.domain_event.response import AnyAction
from src.service.shared_kernel.domain.enum import EventType
from src.service.shared_kernel.domain.modal import Modal
from src.service.spaces.domain.spaces_lot import SpacesLot


class ReservationManager:
    def __init__(
        self,
        *,
        config: ReservationConfig,
        lot: SpacesLot,
        user_rights: IUserRightsQuery,
        event_bus: IEventBus,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.lot = lot
        self.user_rights = user_rights
        self.event_bus = event_bus
        self.clock = clock
        self.view_state = ReservationViewState()

        self.booking_view = BookingView(
            title=config.booking_title,
            lot=lot,
            user_rights=user_rights,
            reset_hour=config.reset_hour,
            reset_minute=config.reset_minute,
        )
        self.personal_view = PersonalView(
            title=config.personal_title, lot=lot, user_rights=user_rights
        )
        self.release_view = ReleaseView(title=config.release_title)

        self.reserve_space_use_case = ReserveSpaceUseCase(lot=lot, user_rights=user_rights)
        self.release_space_use_case = ReleaseSpaceUseCase(lot=lot, user_rights=user_rights)
        self.create_temp_release_use_case = CreateTempReleaseUseCase(
            lot=lot, user_rights=user_rights
        )
        self.update_release_date_use_case = UpdateReleaseDateUseCase(lot=lot)
        self.submit_temp_release_use_case = SubmitTempReleaseUseCase(
            lot=lot, reset_hour=config.reset_hour, reset_minute=config.reset_minute
        )
        self.cancel_temp_release_use_case = CancelTempReleaseUseCase(
            lot=lot,
            user_rights=user_rights,
            reset_hour=config.reset_hour,
            reset_minute=config.reset_minute,
        )
        self.track_release_view_use_case = TrackReleaseViewUseCase(lot=lot)
        self.daily_reset_use_case = DailyResetUseCase(lot=lot)

    # ------------------------------------------------------------------ bus wiring

    @property
    def context(self) -> str:
        return self.config.identifier

    def subscribe(self, event_bus: IEventBus) -> None:
        event_bus.subscribe(self, EventType.SLASH_COMMAND, EventType.TIMER_DONE)
        event_bus.subscribe_with_context(
            self,
            EventType.BLOCK_ACTION,
            EventType.VIEW_SUBMISSION,
            EventType.VIEW_OPENED,
            EventType.VIEW_CLOSED,
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
                case ViewOpened():
                    self.handle_view_opened(event)
                case ViewClosed():
                    self.handle_view_closed(event)
                case TimerDone():
                    self.handle_timer_done(event)
        return None

    # ------------------------------------------------------------------ views

    def floors(self) -> list[str]:
        if self.config.allowed_floors is None:
            return self.lot.get_all_floors()
        return self.lot.get_existing_floors(list(self.config.allowed_floors))

    def booking_modal(self, user_id: str, error_txt: str = '') -> Modal:
        floors = self.floors()
        return self.booking_view.generate(
            user_id=user_id,
            floors=floors,
            selected_floor=self.view_state.floor_for(user_id, floors),
            show_taken=self.view_state.show_taken(user_id),
            error_txt=error_txt,
            now=self.clock(),
        )

    def personal_modal(self, user_id: str, error_txt: str = '') -> Modal:
        return self.personal_view.generate(user_id=user_id, error_txt=error_txt)

    def landing_modal(self, user_id: str, error_txt: str = '') -> Modal:
        """Personal view for space owners, booking view for everyone else"""
        if self.lot.owns_space(user_id):
            return self.personal_modal(user_id, error_txt)
        return self.booking_modal(user_id, error_txt)

    # ------------------------------------------------------------------ handlers

    def handle_slash_command(self, event: SlashCommand) -> Optional[Response]:
        if not self.config.accepts_command(event.command):
            return None
        modal = self.landing_modal(event.user_id)
        return Response(
            user_name=event.user_name, actions=(OpenView(trigger_id=event.trigger_id, modal=modal),)
        )

    def handle_block_action(self, event: BlockAction) -> Optional[Response]:
        actions: list[AnyAction] = []
        for item in event.actions:
            try:
                actions.extend(self._handle_action_item(event, item))
            except ValidationError as e:
                Logger.base.error(f'🅿️ [{self.context.strip()}] Ignoring action: {e}')

        if not actions:
            return None
        return Response(user_name=event.user_name, actions=tuple(actions))

    def _update(self, event: BlockAction, modal: Modal, error_txt: str = '') -> UpdateView:
        return UpdateView(
            trigger_id=event.trigger_id, view_id=event.view_id, modal=modal, error_txt=error_txt
        )

    def _handle_action_item(self, event: BlockAction, item: BlockActionItem) -> list[AnyAction]:
        user_id = event.user_id
        now = self.clock()

        match item.action_id:
            case ActionId.FLOOR_OPTION:
                selected = event.value(BlockId.FLOOR, ActionId.FLOOR_OPTION) or item
                self.view_state.select_floor(user_id, selected.selected_option)
                return [self._update(event, self.booking_modal(user_id))]

            case ActionId.SHOW_OPTION:
                selected = event.value(BlockId.SHOW, ActionId.SHOW_OPTION) or item
                self.view_state.select_show(user_id, selected.selected_option)
                return [self._update(event, self.booking_modal(user_id))]

            case ActionId.RESERVE_SPACE:
                values = ActionValues.decode(item.value)
                error_txt = self.reserve_space_use_case.execute(
                    space_key=values.space_key,
                    user_name=event.user_name,
                    user_id=user_id,
                    now=now,
                )
                return [self._update(event, self.landing_modal(user_id, error_txt), error_txt)]

            case ActionId.RELEASE_SPACE:
                values = ActionValues.decode(item.value)
                result = self.release_space_use_case.execute(
                    space_key=values.space_key, user_name=event.user_name, user_id=user_id
                )
                actions: list[AnyAction] = []
                if result.victim_id:
                    Logger.base.warning(f'🅿️ [{self.context.strip()}] {result.message}')
                    actions.append(
                        PostEphemeral(
                            channel_id=result.victim_id,
                            user_id=result.victim_id,
                            text=result.message,
                        )
                    )
                actions.append(self._update(event, self.booking_modal(user_id)))
                return actions

            case ActionId.TEMP_RELEASE_SPACE:
                values = ActionValues.decode(item.value)
                draft = self.create_temp_release_use_case.execute(
                    space_key=values.space_key,
                    view_id=event.view_id,
                    user_name=event.user_name,
                    user_id=user_id,
                    now=now,
                )
                if draft.release is None:
                    modal = (
                        self.personal_modal(user_id, draft.error_txt)
                        if values.modal_type == ModalType.PERSONAL
                        else self.booking_modal(user_id, draft.error_txt)
                    )
                    return [self._update(event, modal, draft.error_txt)]

                modal = self.release_view.generate(
                    space=draft.space, release=draft.release, error_txt=draft.release.check(now)
                )
                return [PushView(trigger_id=event.trigger_id, modal=modal)]

            case ActionId.CANCEL_TEMP_RELEASE:
                values = ActionValues.decode(item.value)
                error_txt = self.cancel_temp_release_use_case.execute(
                    space_key=values.space_key,
                    release_id=values.release_id,
                    user_id=user_id,
                    now=now,
                )
                return [self._update(event, self.landing_modal(user_id, error_txt), error_txt)]

            case ActionId.RELEASE_START_DATE | ActionId.RELEASE_END_DATE:
                feedback = self.update_release_date_use_case.execute(
                    view_id=event.view_id,
                    selected_date=item.selected_date,
                    is_start_date=item.action_id == ActionId.RELEASE_START_DATE,
                    now=now,
                )
                if feedback is None:
                    return []
                modal = self.release_view.generate(
                    space=feedback.space, release=feedback.release, error_txt=feedback.error_txt
                )
                return [self._update(event, modal, feedback.error_txt)]

            case ActionId.SWITCH_TO_PERSONAL:
                return [self._update(event, self.personal_modal(user_id))]

            case ActionId.SWITCH_TO_OVERVIEW:
                return [self._update(event, self.booking_modal(user_id))]

        return []

    def handle_view_submission(self, event: ViewSubmission) -> Optional[Response]:
        if event.title != self.config.release_title:
            return None

        start = event.value(BlockId.RELEASE, ActionId.RELEASE_START_DATE)
        end = event.value(BlockId.RELEASE, ActionId.RELEASE_END_DATE)
        result = self.submit_temp_release_use_case.execute(
            request=SubmitTempReleaseRequest(
                view_id=event.view_id,
                user_name=event.user_name,
                user_id=event.user_id,
                start_date=start.selected_date if start else '',
                end_date=end.selected_date if end else '',
            ),
            now=self.clock(),
        )

        if not result.ok:
            return Response(
                user_name=event.user_name,
                actions=(
                    PostEphemeral(
                        channel_id=event.user_id, user_id=event.user_id, text=result.error_txt
                    ),
                ),
            )

        actions: list[AnyAction] = []
        if result.victim.victim_id:
            actions.append(
                PostEphemeral(
                    channel_id=result.victim.victim_id,
                    user_id=result.victim.victim_id,
                    text=result.victim.message,
                )
            )
        actions.append(
            UpdateView(
                trigger_id=event.trigger_id,
                view_id=result.root_view_id,
                modal=self.landing_modal(event.user_id),
            )
        )
        return Response(user_name=event.user_name, actions=tuple(actions))

    def handle_view_opened(self, event: ViewOpened) -> None:
        self.track_release_view_use_case.bind_view(
            root_view_id=event.root_view_id, view_id=event.view_id
        )

    def handle_view_closed(self, event: ViewClosed) -> None:
        self.track_release_view_use_case.discard_view(view_id=event.view_id)

    def handle_timer_done(self, event: TimerDone) -> None:
        if event.label != self.config.reset_label:
            return
        self.daily_reset_use_case.execute(time=event.time)
