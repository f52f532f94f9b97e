from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto import ReleaseSpaceResult
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.spaces.domain.spaces_lot import SpacesLot


class ReleaseSpaceUseCase:
    """
    Free a reserved space

    Anyone may free a space; a displaced holder is returned as the victim to
    notify. An admin releasing a space also drops every release scheduled for
    it, since the space stops having a permanent owner.
    """

    def __init__(self, *, lot: SpacesLot, user_rights: IUserRightsQuery) -> None:
        self.lot = lot
        self.user_rights = user_rights

    @Logger.io
    def execute(self, *, space_key: str, user_name: str, user_id: str) -> ReleaseSpaceResult:
        victim_id, message = self.lot.release(space_key, user_name, user_id)

        if self.user_rights.is_admin_id(user_id) and self.lot.to_be_released.remove_all_releases(
            space_key
        ):
            Logger.base.info(f'🔓 [RELEASE] Admin {user_name} dropped all releases of {space_key}')
            self.lot.synchronize_to_file()

        return ReleaseSpaceResult(victim_id=victim_id, message=message)
