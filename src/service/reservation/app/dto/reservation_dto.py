"""
Reservation DTOs

Results handed from the reservation use cases back to the managers, which
turn them into view updates and notifications.
"""

from typing import Optional

import attrs

from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.space import Space


@attrs.define
class ReleaseSpaceResult:
    victim_id: str = ''  # user to notify, empty when nobody was displaced
    message: str = ''


@attrs.define
class TempReleaseDraftResult:
    """Draft created for the release modal, or the reason it was refused"""

    release: Optional[ReleaseInfo] = None
    space: Optional[Space] = None
    error_txt: str = ''


@attrs.define
class ReleaseDraftFeedback:
    release: ReleaseInfo
    space: Optional[Space]
    error_txt: str = ''  # date validation and overlap feedback for the modal


@attrs.define
class SubmitTempReleaseRequest:
    view_id: str
    user_name: str
    user_id: str
    start_date: str = ''  # raw picker values, YYYY-MM-DD
    end_date: str = ''


@attrs.define
class SubmitTempReleaseResult:
    error_txt: str = ''
    root_view_id: str = ''
    victim: ReleaseSpaceResult = attrs.field(factory=ReleaseSpaceResult)

    @property
    def ok(self) -> bool:
        return not self.error_txt
