"""
Unit tests for the daily transition (SpacesLot.release_spaces)

Scenario: space "1st floor 10" permanently owned by alice (U1), cutoff 17:00.
"""

from datetime import datetime
from unittest.mock import MagicMock

import attrs
import pytest

from src.platform.exception.exceptions import ReleaseStateError
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.space import Space
from src.service.spaces.domain.spaces_lot import SpacesLot


SPACE_KEY = '1st floor 10'


@pytest.fixture
def owned_lot() -> SpacesLot:
    space = Space(number=10, floor=1)
    space.reserve('alice', 'U1', False, datetime(2025, 2, 1, 9))
    return SpacesLot(unit_spaces={space.key: space}, store=MagicMock())


def _schedule(lot: SpacesLot, start: datetime, end: datetime) -> ReleaseInfo:
    release = lot.to_be_released.add('V', 'alice', 'U1', lot.unit_spaces[SPACE_KEY])
    release.start_date = start
    release.end_date = end
    release.mark_submitted()
    return release


def _state(lot: SpacesLot) -> tuple:
    return (
        [attrs.asdict(space) for space in lot.unit_spaces.values()],
        [attrs.asdict(release) for release in lot.to_be_released.all_releases()],
    )


class TestActivationBoundary:
    def test_release_activates_on_eve_and_restores_on_last_day(self, owned_lot: SpacesLot) -> None:
        release = _schedule(owned_lot, datetime(2025, 3, 1), datetime(2025, 3, 5))
        space = owned_lot.unit_spaces[SPACE_KEY]

        assert owned_lot.release_spaces(datetime(2025, 2, 28, 17)) == []
        assert not space.reserved
        assert release.active

        owned_lot.release_spaces(datetime(2025, 3, 5, 17))
        assert space.reserved
        assert space.reserved_by == 'alice'
        assert owned_lot.to_be_released.get_all(SPACE_KEY) == []

    def test_release_further_away_stays_scheduled(self, owned_lot: SpacesLot) -> None:
        release = _schedule(owned_lot, datetime(2025, 3, 3), datetime(2025, 3, 5))

        owned_lot.release_spaces(datetime(2025, 2, 28, 17))

        assert owned_lot.unit_spaces[SPACE_KEY].is_reserved_by('U1')
        assert not release.active

    def test_tick_is_idempotent(self, owned_lot: SpacesLot) -> None:
        _schedule(owned_lot, datetime(2025, 3, 1), datetime(2025, 3, 5))
        tick = datetime(2025, 2, 28, 17)

        owned_lot.release_spaces(tick)
        once = _state(owned_lot)
        owned_lot.release_spaces(tick)

        assert _state(owned_lot) == once

    def test_restore_runs_before_activation(self, owned_lot: SpacesLot) -> None:
        ending = _schedule(owned_lot, datetime(2025, 3, 1), datetime(2025, 3, 5))
        ending.mark_active()
        owned_lot.unit_spaces[SPACE_KEY].reserve('bob', 'U2', True, datetime(2025, 3, 5, 8))
        starting = _schedule(owned_lot, datetime(2025, 3, 6), datetime(2025, 3, 8))

        owned_lot.release_spaces(datetime(2025, 3, 5, 17))

        assert owned_lot.to_be_released.get_all(SPACE_KEY) == [starting]
        assert starting.active
        assert not owned_lot.unit_spaces[SPACE_KEY].reserved
        assert owned_lot.to_be_released.get_pool(SPACE_KEY).active() is starting


class TestAutoRelease:
    def test_same_day_reservations_end(self, owned_lot: SpacesLot) -> None:
        guest = Space(number=11, floor=1)
        guest.reserve('bob', 'U2', True, datetime(2025, 2, 28, 9))
        owned_lot.unit_spaces[guest.key] = guest

        owned_lot.release_spaces(datetime(2025, 2, 28, 17))

        assert not guest.reserved
        assert not guest.auto_release
        assert owned_lot.unit_spaces[SPACE_KEY].is_reserved_by('U1')

    def test_snapshot_written_once_per_tick(self, owned_lot: SpacesLot) -> None:
        owned_lot.release_spaces(datetime(2025, 2, 28, 17))
        owned_lot.store.save.assert_called_once_with(owned_lot)


class TestBrokenReleases:
    def test_incomplete_release_is_reported_and_others_proceed(self, owned_lot: SpacesLot) -> None:
        broken = owned_lot.to_be_released.add('V', 'alice', 'U1', owned_lot.unit_spaces[SPACE_KEY])
        broken.mark_submitted()
        good = _schedule(owned_lot, datetime(2025, 3, 1), datetime(2025, 3, 5))

        errors = owned_lot.release_spaces(datetime(2025, 2, 28, 17))

        assert len(errors) == 1
        assert isinstance(errors[0], ReleaseStateError)
        assert good.active

    def test_drafts_are_ignored(self, owned_lot: SpacesLot) -> None:
        draft = owned_lot.to_be_released.add('V', 'alice', 'U1', owned_lot.unit_spaces[SPACE_KEY])
        draft.start_date = datetime(2025, 3, 1)
        draft.end_date = datetime(2025, 3, 5)

        assert owned_lot.release_spaces(datetime(2025, 2, 28, 17)) == []
        assert not draft.active
        assert owned_lot.unit_spaces[SPACE_KEY].reserved
