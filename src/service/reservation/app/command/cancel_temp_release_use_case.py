"""
Cancel Temp Release Use Case

A release that has not started yet is simply dropped and the owner keeps the
space. Once it has started, somebody may already be parked in the space; that
reservation is honoured and the owner gets the space back at the next reset
instead:

    before the reset -> end the release now, restored at today's reset
    after the reset  -> end the release tonight, restored at tomorrow's reset

If nobody took the space it goes straight back to the owner.
"""

from datetime import datetime, timedelta

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.shared_kernel.domain.date_util import is_before_cutoff
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.space import Space
from src.service.spaces.domain.spaces_lot import SpacesLot


class CancelTempReleaseUseCase:
    def __init__(
        self,
        *,
        lot: SpacesLot,
        user_rights: IUserRightsQuery,
        reset_hour: int,
        reset_minute: int,
    ) -> None:
        self.lot = lot
        self.user_rights = user_rights
        self.reset_hour = reset_hour
        self.reset_minute = reset_minute

    def _return_to_owner(self, space: Space, release: ReleaseInfo) -> None:
        space.restore_to(release.owner_name, release.owner_id)
        self.lot.to_be_released.remove(release)

    @Logger.io
    def execute(self, *, space_key: str, release_id: int, user_id: str, now: datetime) -> str:
        """Returns the text shown to the user, empty when there is nothing to tell"""
        space = self.lot.get_space(space_key)
        if space is None:
            return f"Couldn't find the space {space_key}"

        release = self.lot.to_be_released.get(space_key, release_id)
        if release is None:
            return f"Couldn't find release info for space {space_key}"

        if user_id not in (release.owner_id, release.releaser_id) and not (
            self.user_rights.is_admin_id(user_id)
        ):
            return f'Only the owner of space {space_key} or an admin can cancel its release'

        message = ''
        borrowed = space.reserved and space.reserved_by_id != release.owner_id
        cutoff = f'{self.reset_hour:02d}:{self.reset_minute:02d}'

        if release.start_date is None or release.start_date > now:
            Logger.base.info(f'🔓 [CANCEL] Scheduled release dropped: {release.info()}')
            self._return_to_owner(space, release)
        elif not borrowed:
            Logger.base.info(f'🔓 [CANCEL] Space not taken, returned to owner: {release.info()}')
            self._return_to_owner(space, release)
        elif is_before_cutoff(now, self.reset_hour, self.reset_minute):
            release.end_date = now
            release.mark_cancelled()
            message = (
                f'Temporary release cancelled. The space {space_key} '
                f'will be returned to you today at {cutoff}'
            )
            Logger.base.info(f'🔓 [CANCEL] Space taken, owner restored today: {release.info()}')
        else:
            release.end_date = now + timedelta(hours=24 - now.hour)
            release.mark_cancelled()
            message = (
                'Temporary release cancelled but someone already reserved the space '
                f'for tomorrow. The space {space_key} will be returned to you tomorrow at {cutoff}'
            )
            Logger.base.info(f'🔓 [CANCEL] Space taken, owner restored tomorrow: {release.info()}')

        self.lot.synchronize_to_file()
        return message
