"""
Analyze Lot Use Case

Offline consistency check of a parking snapshot against the user roster.

Reported issues:
- permanent reservation held by a user without parking rights
  (plus its active release and future releases, if any)
- release returning the space to an owner without parking rights
- active release whose end date already passed
- more than one active release for a space
- the same date range scheduled more than once for a space
"""

from collections import Counter
from datetime import datetime
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface import IUserRightsQuery
from src.service.shared_kernel.domain.date_util import format_date, today_date
from src.service.spaces.domain.spaces_lot import SpacesLot


class AnalyzeLotUseCase:
    def __init__(self, *, lot: SpacesLot, user_rights: IUserRightsQuery) -> None:
        self.lot = lot
        self.user_rights = user_rights

    @Logger.io
    def execute(self, *, now: Optional[datetime] = None) -> list[str]:
        """Returns one line per issue; an empty list means the snapshot is consistent"""
        today = today_date(now)
        issues: list[str] = []

        for space_key, space in self.lot.unit_spaces.items():
            if not space.reserved or space.auto_release:
                continue
            if self.user_rights.has_parking_by_id(space.reserved_by_id):
                continue

            issues.append(
                f'ERROR: {space_key} is permanently reserved by user {space.reserved_by!r} '
                "who doesn't have permanent space."
            )
            if self.lot.to_be_released.has_active_release(space_key):
                issues.append('\t and the space has an active temporary release')
            for release in self.lot.to_be_released.get_all(space_key):
                if (
                    release.submitted
                    and release.data_present()
                    and release.start_date is not None
                    and today < release.start_date
                ):
                    issues.append(
                        f'\t and the space has temp releases for the future {release.info()}'
                    )

        for space_key, pool in self.lot.to_be_released.items():
            ranges: Counter[str] = Counter()
            active: list[str] = []
            for release in pool.all():
                date_range = release.date_range()
                ranges[date_range] += 1

                if not self.user_rights.has_parking_by_id(release.owner_id):
                    issues.append(
                        f'ERROR: Temp release {release.info()} is set to return to owner '
                        f"{release.owner_name!r} who doesn't have permanent space."
                    )

                if release.active:
                    active.append(date_range)
                    if release.end_date is not None and today > release.end_date:
                        issues.append(
                            f'ERROR: {space_key!r} has active releases with end date in the '
                            f'past: {date_range} (today: {format_date(today)})'
                        )

            if len(active) > 1:
                issues.append(f'ERROR: {space_key!r} has {len(active)} active releases: {active}')

            for date_range, count in ranges.items():
                if count > 1:
                    issues.append(f'ERROR: {space_key!r} has {count} occurrences of {date_range!r}')

        return issues
