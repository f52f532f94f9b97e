from datetime import datetime
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto import ReleaseDraftFeedback
from src.service.shared_kernel.domain.date_util import parse_date
from src.service.spaces.domain.spaces_lot import SpacesLot


class UpdateReleaseDateUseCase:
    """Store a date picked in the release modal and validate the draft so far"""

    def __init__(self, *, lot: SpacesLot) -> None:
        self.lot = lot

    @Logger.io
    def execute(
        self,
        *,
        view_id: str,
        selected_date: str,
        is_start_date: bool,
        now: datetime,
    ) -> Optional[ReleaseDraftFeedback]:
        release = self.lot.to_be_released.get_by_view_id(view_id)
        if release is None:
            Logger.base.error(f'📝 [RELEASE] No draft release bound to view {view_id!r}')
            return None

        try:
            date: Optional[datetime] = parse_date(selected_date)
        except ValueError as e:
            Logger.base.error(f'📝 [RELEASE] Failed to parse date {selected_date!r}: {e}')
            date = None

        if is_start_date:
            release.start_date = date
        else:
            release.end_date = date

        error_txt = release.check(now)
        if not error_txt and (overlaps := self.lot.to_be_released.check_overlap(release)):
            error_txt = f'Overlaps with existing release(s): {", ".join(overlaps)}'

        return ReleaseDraftFeedback(
            release=release,
            space=self.lot.unit_spaces.get(release.space_key),
            error_txt=error_txt,
        )
