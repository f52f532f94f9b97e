from datetime import datetime
from typing import Callable

from src.platform.config.core_setting import settings
from src.platform.event.i_event_bus import IEventBus
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.reservation.domain.reservation_config import ReservationConfig
from src.service.reservation.driving_adapter.reservation_manager import ReservationManager
from src.service.shared_kernel.domain.slash_command import SlashCmd
from src.service.spaces.domain.spaces_lot import SpacesLot


IDENTIFIER = 'Parking: '
RESET_PARKING = 'Reset parking status'


def parking_config() -> ReservationConfig:
    return ReservationConfig(
        identifier=IDENTIFIER,
        command=SlashCmd.PARKING,
        reset_label=RESET_PARKING,
        reset_hour=settings.PARKING_RESET_HOUR,
        reset_minute=settings.PARKING_RESET_MIN,
        testing_active=settings.TESTING_ACTIVE,
    )


class ParkingManager(ReservationManager):
    """Parking spots, booked through /parking"""

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
            config=config or parking_config(),
            lot=lot,
            user_rights=user_rights,
            event_bus=event_bus,
            clock=clock,
        )
