from datetime import datetime

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.spaces.domain.spaces_lot import SpacesLot


class ReserveSpaceUseCase:
    """
    Reserve a space for the caller

    Users with permanent rights keep the space until they release it; everyone
    else gets a same-day reservation that ends at the next daily reset.
    """

    def __init__(self, *, lot: SpacesLot, user_rights: IUserRightsQuery) -> None:
        self.lot = lot
        self.user_rights = user_rights

    @Logger.io
    def execute(self, *, space_key: str, user_name: str, user_id: str, now: datetime) -> str:
        auto_release = not self.user_rights.has_parking_by_id(user_id)
        return self.lot.reserve(space_key, user_name, user_id, auto_release, now)
