"""
Release Pool

Slot vector of releases for one space. A release's unique_id is its slot
index; removing a release frees the slot without shifting the others, so ids
stay stable across removals and restarts.
"""

from datetime import datetime
from typing import Optional

from src.platform.exception.exceptions import (
    ReleaseNotInUseError,
    ReleaseOutOfRangeError,
    ReleaseSlotEmptyError,
)
from src.service.spaces.domain.release_info import ReleaseInfo


DEFAULT_POOL_CAPACITY = 10


class ReleasePool:
    def __init__(
        self,
        capacity: int = DEFAULT_POOL_CAPACITY,
        data: Optional[list[ReleaseInfo]] = None,
    ) -> None:
        if data is None:
            data = [ReleaseInfo(unique_id=idx) for idx in range(capacity)]
        self.data = data

    @property
    def capacity(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return sum(1 for release in self.data if release.in_use)

    def is_empty(self) -> bool:
        return len(self) == 0

    def _first_free_idx(self) -> int:
        for idx, release in enumerate(self.data):
            if not release.in_use:
                return idx

        # Pool full -> double the capacity
        old_capacity = self.capacity
        self.data.extend(
            ReleaseInfo(unique_id=idx) for idx in range(old_capacity, max(old_capacity, 1) * 2)
        )
        return old_capacity

    def add(
        self,
        view_id: str,
        releaser_id: str,
        owner_id: str,
        owner_name: str,
        space_key: str,
        now: Optional[datetime] = None,
    ) -> ReleaseInfo:
        idx = self._first_free_idx()
        release = ReleaseInfo(
            unique_id=idx,
            in_use=True,
            releaser_id=releaser_id,
            owner_id=owner_id,
            owner_name=owner_name,
            space_key=space_key,
            created_time=now or datetime.now(),
            root_view_id=view_id,
        )
        self.data[idx] = release
        return release

    def remove(self, release_id: int) -> None:
        if not 0 <= release_id < self.capacity:
            raise ReleaseOutOfRangeError(release_id, self.capacity)
        if not self.data[release_id].in_use:
            raise ReleaseSlotEmptyError(release_id)
        self.data[release_id] = ReleaseInfo(unique_id=release_id)

    def update(self, release: ReleaseInfo) -> None:
        release_id = release.unique_id
        if not 0 <= release_id < self.capacity:
            raise ReleaseOutOfRangeError(release_id, self.capacity)
        if not self.data[release_id].in_use:
            raise ReleaseNotInUseError(release_id)
        release.in_use = True
        self.data[release_id] = release

    def by_idx(self, release_id: int) -> Optional[ReleaseInfo]:
        if not 0 <= release_id < self.capacity:
            return None
        release = self.data[release_id]
        return release if release.in_use else None

    def by_root_view_id(self, view_id: str) -> Optional[ReleaseInfo]:
        if not view_id:
            return None
        return next((r for r in self.all() if r.root_view_id == view_id), None)

    def by_view_id(self, view_id: str) -> Optional[ReleaseInfo]:
        if not view_id:
            return None
        return next((r for r in self.all() if r.view_id == view_id), None)

    def all(self) -> list[ReleaseInfo]:
        return [release for release in self.data if release.in_use]

    def active(self) -> Optional[ReleaseInfo]:
        return next((r for r in self.all() if r.active), None)
