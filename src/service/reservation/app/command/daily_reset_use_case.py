from datetime import datetime

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.spaces.domain.spaces_lot import SpacesLot


class DailyResetUseCase:
    def __init__(self, *, lot: SpacesLot) -> None:
        self.lot = lot

    @Logger.io
    def execute(self, *, time: datetime) -> list[CustomBaseError]:
        Logger.base.info(f'🕔 [RESET] Releasing spaces at {time:%Y-%m-%d %H:%M}')
        return self.lot.release_spaces(time)
