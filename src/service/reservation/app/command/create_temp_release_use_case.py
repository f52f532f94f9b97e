from datetime import datetime

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto import TempReleaseDraftResult
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.spaces.domain.spaces_lot import SpacesLot


class CreateTempReleaseUseCase:
    """
    Start a temporary release of a permanently owned space

    The draft is bound to the view the button was pressed in. The pushed
    release modal gets attached to it once the adapter reports it opened.
    """

    def __init__(self, *, lot: SpacesLot, user_rights: IUserRightsQuery) -> None:
        self.lot = lot
        self.user_rights = user_rights

    @Logger.io
    def execute(
        self,
        *,
        space_key: str,
        view_id: str,
        user_name: str,
        user_id: str,
        now: datetime,
    ) -> TempReleaseDraftResult:
        space = self.lot.get_space(space_key)
        if space is None:
            return TempReleaseDraftResult(error_txt=f"Couldn't find the space {space_key}")

        # While a release runs the space is held by a borrower, not the owner
        active = self.lot.to_be_released.get_active(space_key)
        if active is not None:
            owner_id = active.owner_id
        else:
            owner_id = space.reserved_by_id if space.reserved else ''

        is_admin = self.user_rights.is_admin_id(user_id)
        if not is_admin and user_id != owner_id and not space.is_reserved_by(user_id):
            return TempReleaseDraftResult(
                space=space,
                error_txt=f'Only the owner of space {space_key} or an admin can release it',
            )

        if not owner_id or not self.user_rights.has_parking_by_id(owner_id):
            return TempReleaseDraftResult(
                space=space,
                error_txt=f'Space {space_key} has no permanent owner and cannot be released',
            )

        release = self.lot.to_be_released.add(view_id, user_name, user_id, space, now)
        self.lot.synchronize_to_file()
        return TempReleaseDraftResult(release=release, space=space)
