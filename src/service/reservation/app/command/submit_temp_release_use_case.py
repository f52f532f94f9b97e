"""
Submit Temp Release Use Case

Turns the draft behind a release modal into a scheduled release. Any invalid
input drops the draft; the user gets the reason as an ephemeral message and
has to start over.
"""

from datetime import datetime

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto import (
    ReleaseSpaceResult,
    SubmitTempReleaseRequest,
    SubmitTempReleaseResult,
)
from src.service.shared_kernel.domain.date_util import (
    DAY,
    check_date_range,
    equal_date,
    is_before_cutoff,
    parse_date,
)
from src.service.spaces.domain.spaces_lot import SpacesLot


class SubmitTempReleaseUseCase:
    def __init__(self, *, lot: SpacesLot, reset_hour: int, reset_minute: int) -> None:
        self.lot = lot
        self.reset_hour = reset_hour
        self.reset_minute = reset_minute

    def _reject(self, view_id: str, reason: str) -> SubmitTempReleaseResult:
        space_key = self.lot.to_be_released.remove_by_view_id(view_id) or ''
        self.lot.synchronize_to_file()
        return SubmitTempReleaseResult(
            error_txt=f'Failed to temporary release space {space_key}: {reason}'
        )

    def starts_immediately(self, start_date: datetime, now: datetime) -> bool:
        """
        A release starting today frees the space right away. So does one
        starting tomorrow once today's reset has passed, since no further
        tick runs before it begins.
        """
        if equal_date(start_date, now):
            return True
        return (
            now < start_date
            and start_date - now < DAY
            and not is_before_cutoff(now, self.reset_hour, self.reset_minute)
        )

    @Logger.io
    def execute(
        self, *, request: SubmitTempReleaseRequest, now: datetime
    ) -> SubmitTempReleaseResult:
        if not request.start_date:
            return self._reject(request.view_id, 'no start date provided')
        try:
            start_date = parse_date(request.start_date)
        except ValueError as e:
            return self._reject(
                request.view_id,
                f'failure to parse start date format {request.start_date}: {e}',
            )

        if not request.end_date:
            return self._reject(request.view_id, 'no end date provided')
        try:
            end_date = parse_date(request.end_date)
        except ValueError as e:
            return self._reject(
                request.view_id,
                f'failure to parse end date format {request.end_date}: {e}',
            )

        if error_txt := check_date_range(start_date, end_date, now):
            return self._reject(request.view_id, error_txt)

        release = self.lot.to_be_released.get_by_view_id(request.view_id)
        if release is None:
            return SubmitTempReleaseResult(
                error_txt='Failed to temporary release space: the release form has expired'
            )

        release.start_date = start_date
        release.end_date = end_date
        if overlaps := self.lot.to_be_released.check_overlap(release):
            return self._reject(
                request.view_id,
                f'overlaps with existing release(s) {", ".join(overlaps)}',
            )

        root_view_id = release.root_view_id
        release.mark_submitted(now)
        self.lot.synchronize_to_file()
        Logger.base.info(f'📝 [RELEASE] Submitted {release.info()}')

        victim = ReleaseSpaceResult()
        if self.starts_immediately(start_date, now):
            victim_id, message = self.lot.release(
                release.space_key, request.user_name, request.user_id
            )
            release.mark_active(now)
            self.lot.synchronize_to_file()
            victim = ReleaseSpaceResult(victim_id=victim_id, message=message)
            Logger.base.info(f'📝 [RELEASE] Started immediately {release.info()}')

        return SubmitTempReleaseResult(root_view_id=root_view_id, victim=victim)
