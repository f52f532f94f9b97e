from datetime import datetime

import pytest

from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.spaces_lot import SpacesLot
from test.constants import OWNED_SPACE, OWNER_ID, OWNER_NAME


@pytest.fixture
def schedule_release(lot: SpacesLot):
    """Submitted release of the owner's space for the given dates"""

    def _schedule(start: datetime, end: datetime, active: bool = False) -> ReleaseInfo:
        release = lot.to_be_released.add('V', OWNER_NAME, OWNER_ID, lot.unit_spaces[OWNED_SPACE])
        release.start_date = start
        release.end_date = end
        release.mark_submitted()
        if active:
            lot.unit_spaces[OWNED_SPACE].reserved = False
            release.mark_active()
        return release

    return _schedule
