"""
Spaces Lot

All spaces of one kind (parking or workspaces) plus their scheduled
temporary releases.

Every mutating operation flushes a snapshot through the attached store before
returning. Mutations themselves are synchronous; handlers that read and then
write the lot across an await hold `lot.lock`.
"""

from datetime import datetime, timedelta
from operator import attrgetter
from typing import TYPE_CHECKING, Optional

import anyio
import attrs

from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    DomainError,
    NotFoundError,
    ReleaseStateError,
)
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.date_util import DAY, RESERVED_TIME_FORMAT
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.release_map import ReleaseMap
from src.service.spaces.domain.space import Space, SpaceType, make_floor_str


if TYPE_CHECKING:
    from src.service.spaces.app.interface.i_lot_snapshot_store import ILotSnapshotStore


@attrs.define(eq=False)
class SpacesLot:
    unit_spaces: dict[str, Space] = attrs.field(factory=dict)
    to_be_released: ReleaseMap = attrs.field(factory=ReleaseMap)
    filename: str = ''
    store: Optional['ILotSnapshotStore'] = attrs.field(default=None, repr=False)
    lock: anyio.Lock = attrs.field(factory=anyio.Lock, repr=False)

    # ------------------------------------------------------------------ persistence

    def synchronize_to_file(self) -> None:
        if self.store is None:
            return
        self.store.save(self)

    # ------------------------------------------------------------------ lookups

    def get_space(self, space_key: str) -> Optional[Space]:
        space = self.unit_spaces.get(space_key)
        if space is None:
            Logger.base.error(f'🅿️ [LOT] Incorrect space: {space_key!r}')
        return space

    def has_space(self, user_id: str) -> bool:
        return any(space.is_reserved_by(user_id) for space in self.unit_spaces.values())

    def has_permanent_space(self, user_id: str) -> bool:
        return self.get_permanent_space(user_id) is not None

    def has_temp_release(self, user_id: str) -> bool:
        return self.get_temp_released_space(user_id) is not None

    def owns_space(self, user_id: str) -> bool:
        """Holds a space without auto-release, or has lent one out"""
        return self.get_owned_space(user_id) is not None

    def get_permanent_space(self, user_id: str) -> Optional[Space]:
        for space in self.unit_spaces.values():
            if space.is_reserved_by(user_id) and not space.auto_release:
                return space
        return None

    def get_temp_released_space(self, user_id: str) -> Optional[Space]:
        """The owned space of `user_id` that is currently lent out, if any"""
        for space_key, pool in self.to_be_released.items():
            release = pool.active()
            if release is not None and release.owner_id == user_id:
                return self.unit_spaces.get(space_key)
        return None

    def get_owned_space(self, user_id: str) -> Optional[Space]:
        return self.get_permanent_space(user_id) or self.get_temp_released_space(user_id)

    def get_owned_space_by_user_id(self, user_id: str) -> Space:
        """
        Space owned by `user_id`, even while it is lent to someone else

        Raises:
            NotFoundError: user holds no space and owns no released one
        """
        for space in self.unit_spaces.values():
            if space.is_reserved_by(user_id):
                return space

        for release in self.to_be_released.all_releases():
            if release.submitted and release.owner_id == user_id:
                space = self.unit_spaces.get(release.space_key)
                if space is None:
                    raise NotFoundError(
                        f'failed to get original space from release: {release.info()}'
                    )
                return space

        raise NotFoundError(f'no space for user: <@{user_id}>')

    def get_spaces_info(self, user_id: str) -> list[Space]:
        """User's own spaces first, then free spaces, then taken ones, each sorted"""
        user_spaces: list[Space] = []
        free: list[Space] = []
        taken: list[Space] = []
        for space in self.unit_spaces.values():
            if space.is_reserved_by(user_id):
                user_spaces.append(space)
            elif space.reserved:
                taken.append(space)
            else:
                free.append(space)

        by_address = attrgetter('sort_key')
        return [
            *sorted(user_spaces, key=by_address),
            *sorted(free, key=by_address),
            *sorted(taken, key=by_address),
        ]

    def get_spaces_by_floor(self, user_id: str, floor: str, space_type: SpaceType) -> list[Space]:
        if not floor:
            return []

        floor_spaces: list[Space] = []
        for space in self.get_spaces_info(user_id):
            if not space.key.startswith(f'{floor} '):
                continue

            if space.is_reserved_by(user_id):
                floor_spaces.append(space)
                continue

            match space_type:
                case SpaceType.FREE:
                    add = not space.reserved
                case SpaceType.TAKEN:
                    add = space.reserved
                case _:
                    add = True
            if add:
                floor_spaces.append(space)
        return floor_spaces

    def get_all_floors(self) -> list[str]:
        floors = sorted({space.floor for space in self.unit_spaces.values()})
        return [make_floor_str(floor) for floor in floors]

    def get_existing_floors(self, allowed_floors: list[int]) -> list[str]:
        """Formatted floors of this lot that are also in `allowed_floors`"""
        floors = sorted(
            {space.floor for space in self.unit_spaces.values() if space.floor in allowed_floors}
        )
        return [make_floor_str(floor) for floor in floors]

    # ------------------------------------------------------------------ reservations

    def reserve(
        self,
        space_key: str,
        user: str,
        user_id: str,
        auto_release: bool,
        now: Optional[datetime] = None,
    ) -> str:
        """Empty string on success, otherwise a user facing error"""
        space = self.get_space(space_key)
        if space is None:
            return f"Failed to reserve space: couldn't find the space {space_key}"

        if space.reserved and space.reserved_by_id != user_id:
            reserved_time = (
                space.reserved_time.strftime(RESERVED_TIME_FORMAT) if space.reserved_time else '-'
            )
            return (
                f'*Error*: Could not reserve *{space_key}*. '
                f'*{space.reserved_by}* has just reserved it (at *{reserved_time}*)'
            )

        # Same user clicking twice
        if space.is_reserved_by(user_id):
            return ''

        Logger.base.info(
            f'🅿️ [LOT] SPACE_RESERVE user={user} space={space_key} auto_release={auto_release}'
        )
        space.reserve(user, user_id, auto_release, now or datetime.now())
        self.synchronize_to_file()
        return ''

    def release(self, space_key: str, user_name: str, user_id: str) -> tuple[str, str]:
        """
        Free the space

        Returns:
            (victim_id, message): the displaced holder and the text to notify
            them with. Unknown spaces are reported back to the caller.
        """
        space = self.get_space(space_key)
        if space is None:
            return user_id, f"Failed to release space: couldn't find the space {space_key}"

        Logger.base.info(f'🅿️ [LOT] SPACE_RELEASE user={user_name} space={space_key}')
        was_reserved = space.reserved
        space.reserved = False
        self.synchronize_to_file()

        if was_reserved and space.reserved_by_id != user_id:
            return space.reserved_by_id, (
                f':warning: *{user_name}* released your (*{space.reserved_by}*) '
                f'space (*{space_key}*)'
            )
        return '', ''

    def restore_owner(self, release: ReleaseInfo) -> None:
        space = self.unit_spaces.get(release.space_key)
        if space is None:
            raise NotFoundError(f'space {release.space_key} of {release.info()} does not exist')
        space.restore_to(release.owner_name, release.owner_id)

    # ------------------------------------------------------------------ space editing

    def add_space(self, space: Space) -> None:
        if space.key in self.unit_spaces:
            raise ConflictError(f'Space {space.key} already exists')
        self.unit_spaces[space.key] = space
        Logger.base.info(f'🅿️ [LOT] Added space {space.key}')
        self.synchronize_to_file()

    def remove_space(self, space_key: str) -> Space:
        space = self.unit_spaces.pop(space_key, None)
        if space is None:
            raise NotFoundError(f"Couldn't find the space {space_key}")
        self.to_be_released.remove_all_releases(space_key)
        Logger.base.info(f'🅿️ [LOT] Removed space {space_key}')
        self.synchronize_to_file()
        return space

    # ------------------------------------------------------------------ daily tick

    def release_spaces(self, c_time: datetime) -> list[CustomBaseError]:
        """
        Daily transition at the cutoff

        - auto-release reservations end
        - releases whose end lies in the last 24h give the space back to the owner
        - releases whose start lies in the next 24h free the space

        Restorations run before activations so a release ending today hands
        over to one starting tomorrow. Broken releases are skipped and returned.
        """
        errors: list[CustomBaseError] = []

        for space_key, space in self.unit_spaces.items():
            if space.reserved and space.auto_release:
                Logger.base.info(f'🅿️ [LOT] AutoRelease space={space_key}')
                space.reserved = False
                space.auto_release = False

            pool = self.to_be_released.get_pool(space_key)
            if pool is None:
                continue

            due: list[tuple[ReleaseInfo, datetime, datetime]] = []
            for release in pool.all():
                if not release.submitted:
                    continue
                if not release.data_present() or not release.start_date or not release.end_date:
                    errors.append(
                        ReleaseStateError(f'[SKIP] release data missing: {release.info()}')
                    )
                    continue
                due.append((release, release.start_date, release.end_date))

            restored: set[int] = set()
            for release, _, end_date in due:
                if _within_day(c_time - end_date):
                    try:
                        space.restore_to(release.owner_name, release.owner_id)
                        pool.remove(release.unique_id)
                        restored.add(release.unique_id)
                        Logger.base.info(f'🅿️ [LOT] Release ended, restored: {release.info()}')
                    except DomainError as e:
                        errors.append(e)

            for release, start_date, _ in due:
                if release.unique_id in restored:
                    continue
                if _within_day(start_date - c_time):
                    try:
                        space.reserved = False
                        space.auto_release = False
                        release.mark_active(c_time)
                        Logger.base.info(f'🅿️ [LOT] Release started: {release.info()}')
                    except DomainError as e:
                        errors.append(e)

        for error in errors:
            Logger.base.error(f'🅿️ [LOT] {error}')

        self.synchronize_to_file()
        return errors


def _within_day(delta: timedelta) -> bool:
    return timedelta(0) <= delta < DAY
