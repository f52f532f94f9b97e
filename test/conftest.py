"""
Test Configuration and Fixtures

This module provides:
- Test log directory, set before any module reads it at import time
- A small parking lot with one permanently owned space
- A roster with an owner, an admin and two standard users

Every lot fixture carries a MagicMock store so tests can assert on snapshot
writes without touching the filesystem.
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# loguru_io_config reads TEST_LOG_DIR when it is first imported
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ['TESTING_ACTIVE'] = 'false'


_early_setup_test_environment()

from datetime import datetime  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

from src.service.spaces.domain.space import Space  # noqa: E402
from src.service.spaces.domain.spaces_lot import SpacesLot  # noqa: E402
from src.service.user.domain.user_entity import AccessRight, User  # noqa: E402
from src.service.user.domain.user_roster import UserRoster  # noqa: E402
from test.constants import (  # noqa: E402
    ADMIN_ID,
    ADMIN_NAME,
    GUEST_ID,
    GUEST_NAME,
    OTHER_ID,
    OTHER_NAME,
    OWNER_ID,
    OWNER_NAME,
)


@pytest.fixture
def now() -> datetime:
    """Tuesday morning, before the 17:00 cutoff"""
    return datetime(2024, 5, 14, 10, 0)


@pytest.fixture
def roster() -> UserRoster:
    return UserRoster(
        users={
            OWNER_NAME: User(id=OWNER_ID, has_permanent_parking=True),
            ADMIN_NAME: User(id=ADMIN_ID, rights=AccessRight.ADMIN),
            GUEST_NAME: User(id=GUEST_ID),
            OTHER_NAME: User(id=OTHER_ID),
        },
        store=MagicMock(),
    )


@pytest.fixture
def lot(now: datetime) -> SpacesLot:
    """
    -1st floor 1  permanently held by the owner
    -1st floor 2  free
    -1st floor 3  free
     1st floor 10 free
    """
    owned = Space(number=1, floor=-1)
    owned.reserve(OWNER_NAME, OWNER_ID, False, now)
    spaces = [
        owned,
        Space(number=2, floor=-1),
        Space(number=3, floor=-1),
        Space(number=10, floor=1),
    ]
    return SpacesLot(
        unit_spaces={space.key: space for space in spaces},
        filename='parking.json',
        store=MagicMock(),
    )
