"""
Release Map

Space key -> ReleasePool. A pool is created with the first release of its
space and may be left empty after the last removal; empty pools are dropped
when a snapshot is loaded.
"""

from collections.abc import Iterator
from datetime import datetime
from typing import Optional

from src.platform.exception.exceptions import ReleaseNotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.release_pool import ReleasePool
from src.service.spaces.domain.space import Space


class ReleaseMap:
    def __init__(self, pools: Optional[dict[str, ReleasePool]] = None) -> None:
        self.pools: dict[str, ReleasePool] = pools if pools is not None else {}

    def __contains__(self, space_key: str) -> bool:
        return space_key in self.pools

    def __iter__(self) -> Iterator[str]:
        return iter(self.pools)

    def __len__(self) -> int:
        return len(self.pools)

    def items(self) -> list[tuple[str, ReleasePool]]:
        return list(self.pools.items())

    def get_pool(self, space_key: str) -> Optional[ReleasePool]:
        return self.pools.get(space_key)

    def add(
        self,
        view_id: str,
        releaser_name: str,
        releaser_id: str,
        space: Space,
        now: Optional[datetime] = None,
    ) -> ReleaseInfo:
        pool = self.pools.setdefault(space.key, ReleasePool())

        # While another release is running the space is held by a borrower;
        # the owner of the new release is still the owner of the running one.
        if (active := pool.active()) is not None:
            owner_name, owner_id = active.owner_name, active.owner_id
        else:
            owner_name, owner_id = space.reserved_by, space.reserved_by_id

        release = pool.add(view_id, releaser_id, owner_id, owner_name, space.key, now)
        Logger.base.info(
            f'📝 [RELEASE] {releaser_name} started a release of {space.key} '
            f'(owner={owner_name}, id={release.unique_id})'
        )
        return release

    def get(self, space_key: str, release_id: int) -> Optional[ReleaseInfo]:
        pool = self.pools.get(space_key)
        return pool.by_idx(release_id) if pool else None

    def get_all(self, space_key: str) -> list[ReleaseInfo]:
        pool = self.pools.get(space_key)
        return pool.all() if pool else []

    def get_active(self, space_key: str) -> Optional[ReleaseInfo]:
        pool = self.pools.get(space_key)
        return pool.active() if pool else None

    def has_active_release(self, space_key: str) -> bool:
        return self.get_active(space_key) is not None

    def all_releases(self) -> list[ReleaseInfo]:
        return [release for pool in self.pools.values() for release in pool.all()]

    def get_by_root_view_id(self, view_id: str) -> Optional[ReleaseInfo]:
        for pool in self.pools.values():
            if (release := pool.by_root_view_id(view_id)) is not None:
                return release
        return None

    def get_by_view_id(self, view_id: str) -> Optional[ReleaseInfo]:
        for pool in self.pools.values():
            if (release := pool.by_view_id(view_id)) is not None:
                return release
        return None

    def check_overlap(self, release: ReleaseInfo) -> list[str]:
        """
        Date ranges of submitted releases of the same space overlapping `release`

        Dates are compared without time; ranges touching on a single day overlap.
        """
        if release.start_date is None or release.end_date is None:
            return []
        new_start, new_end = release.start_date.date(), release.end_date.date()

        overlaps: list[str] = []
        for other in self.get_all(release.space_key):
            if other.unique_id == release.unique_id or not other.submitted:
                continue
            if other.start_date is None or other.end_date is None:
                continue
            if new_start <= other.end_date.date() and other.start_date.date() <= new_end:
                overlaps.append(other.date_range())
        return overlaps

    def update(self, release: ReleaseInfo) -> None:
        pool = self.pools.get(release.space_key)
        if pool is None:
            raise ReleaseNotFoundError(f'no releases for space {release.space_key}')
        pool.update(release)

    def remove_release(self, space_key: str, release_id: int) -> None:
        pool = self.pools.get(space_key)
        if pool is None:
            raise ReleaseNotFoundError(f'no releases for space {space_key}')
        pool.remove(release_id)

    def remove(self, release: ReleaseInfo) -> None:
        self.remove_release(release.space_key, release.unique_id)

    def remove_by_view_id(self, view_id: str) -> Optional[str]:
        """Remove the draft bound to `view_id`; returns its space key"""
        for space_key, pool in self.pools.items():
            if (release := pool.by_view_id(view_id)) is not None:
                pool.remove(release.unique_id)
                return space_key
        return None

    def remove_all_releases(self, space_key: str) -> bool:
        return self.pools.pop(space_key, None) is not None

    def prune_drafts(self) -> int:
        """Drop unsubmitted releases and the pools left empty; returns the number dropped"""
        dropped = 0
        for space_key, pool in list(self.pools.items()):
            for release in pool.all():
                if not release.submitted:
                    pool.remove(release.unique_id)
                    dropped += 1
            if pool.is_empty():
                del self.pools[space_key]
        return dropped
