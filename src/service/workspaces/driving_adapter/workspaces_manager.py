from datetime import datetime
from typing import Callable

from src.platform.config.core_setting import settings
from src.platform.event.i_event_bus import IEventBus
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.reservation.domain.reservation_config import ReservationConfig
from src.service.reservation.driving_adapter.reservation_manager import ReservationManager
from src.service.shared_kernel.domain.slash_command import SlashCmd
from src.service.spaces.domain.spaces_lot import SpacesLot


IDENTIFIER = 'Workspaces: '
RESET_WORKSPACES = 'Reset workspaces status'


def workspaces_config() -> ReservationConfig:
    return ReservationConfig(
        identifier=IDENTIFIER,
        command=SlashCmd.WORKSPACE,
        reset_label=RESET_WORKSPACES,
        reset_hour=settings.WORKSPACES_RESET_HOUR,
        reset_minute=settings.WORKSPACES_RESET_MIN,
        testing_active=settings.TESTING_ACTIVE,
    )


class WorkspacesManager(ReservationManager):
    """Office workstations, booked through /workspace"""

    def __init__(
        self,
        *,
        lot: SpacesLot,
        user_rights: IUserRightsQuery,
        event_bus: IEventBus,
        config: ReservationConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(
            config=config or workspaces_config(),
            lot=lot,
            user_rights=user_rights,
            event_bus=event_bus,
            clock=clock,
        )
