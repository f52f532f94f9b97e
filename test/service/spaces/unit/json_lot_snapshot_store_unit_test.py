"""
Unit tests for JsonLotSnapshotStore

Snapshot round trip keeps submitted releases and drops drafts; unreadable
snapshots are fatal.
"""

from datetime import datetime
from pathlib import Path

import orjson
import pytest

from src.platform.exception.exceptions import StorageCorruptionError
from src.service.spaces.domain.space import Space
from src.service.spaces.domain.spaces_lot import SpacesLot
from src.service.spaces.driven_adapter.json_lot_snapshot_store import (
    JsonLotSnapshotStore,
    decode_time,
    lot_to_dict,
)


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / 'parking.json'


@pytest.fixture
def store(snapshot_path: Path) -> JsonLotSnapshotStore:
    return JsonLotSnapshotStore(snapshot_path)


def _lot(store: JsonLotSnapshotStore) -> SpacesLot:
    owned = Space(number=10, floor=1, description='corner')
    owned.reserve('alice', 'U1', False, datetime(2025, 2, 1, 9, 15))
    free = Space(number=11, floor=1)
    lot = SpacesLot(
        unit_spaces={owned.key: owned, free.key: free}, filename=store.filename, store=store
    )

    submitted = lot.to_be_released.add('V1', 'alice', 'U1', owned, datetime(2025, 2, 2))
    submitted.start_date = datetime(2025, 2, 10)
    submitted.end_date = datetime(2025, 2, 20)
    submitted.mark_submitted(datetime(2025, 2, 2, 10))
    lot.to_be_released.add('V2', 'alice', 'U1', owned, datetime(2025, 2, 3))
    # A space whose last release was removed keeps an empty pool in memory
    emptied = lot.to_be_released.add('V3', 'bob', 'U2', free)
    lot.to_be_released.remove(emptied)
    return lot


class TestSnapshotRoundTrip:
    def test_write_then_read_drops_drafts_and_empty_pools(
        self, store: JsonLotSnapshotStore
    ) -> None:
        lot = _lot(store)

        lot.synchronize_to_file()
        loaded = store.load()

        expected = lot_to_dict(lot)
        lot.to_be_released.prune_drafts()
        assert lot_to_dict(loaded) == lot_to_dict(lot)
        assert lot_to_dict(loaded) != expected
        assert loaded.store is store

    def test_loaded_release_keeps_dates_and_flags(self, store: JsonLotSnapshotStore) -> None:
        _lot(store).synchronize_to_file()

        release = store.load().to_be_released.get('1st floor 10', 0)

        assert release.submitted
        assert release.start_date == datetime(2025, 2, 10)
        assert release.end_date == datetime(2025, 2, 20)
        assert release.owner_name == 'alice'
        assert release.space_key == '1st floor 10'

    def test_file_is_pretty_printed(self, store: JsonLotSnapshotStore, snapshot_path: Path) -> None:
        _lot(store).synchronize_to_file()

        text = snapshot_path.read_text()

        assert text.startswith('{\n  "UnitSpaces"')
        assert set(orjson.loads(text)) == {'UnitSpaces', 'ToBeReleased', 'Filename'}


class TestSnapshotLoadErrors:
    def test_missing_file(self, store: JsonLotSnapshotStore) -> None:
        with pytest.raises(StorageCorruptionError):
            store.load()

    def test_unparsable_file(self, store: JsonLotSnapshotStore, snapshot_path: Path) -> None:
        snapshot_path.write_text('{"UnitSpaces": ')
        with pytest.raises(StorageCorruptionError):
            store.load()

    def test_file_without_spaces(self, store: JsonLotSnapshotStore, snapshot_path: Path) -> None:
        snapshot_path.write_text('{"UnitSpaces": {}, "ToBeReleased": {}}')
        with pytest.raises(StorageCorruptionError):
            store.load()

    def test_releases_of_unknown_spaces_are_dropped(
        self, store: JsonLotSnapshotStore, snapshot_path: Path
    ) -> None:
        snapshot_path.write_bytes(
            orjson.dumps(
                {
                    'UnitSpaces': {'1st floor 10': {'Number': 10, 'Floor': 1}},
                    'ToBeReleased': {
                        '2nd floor 5': {
                            'Capacity': 1,
                            'Data': [{'InUse': True, 'Submitted': True, 'OwnerId': 'U1'}],
                        }
                    },
                }
            )
        )

        assert '2nd floor 5' not in store.load().to_be_released


class TestTimeDecoding:
    def test_zero_time_is_unset(self) -> None:
        assert decode_time('0001-01-01T00:00:00Z') is None
        assert decode_time(None) is None
        assert decode_time('') is None

    def test_naive_time(self) -> None:
        assert decode_time('2025-02-10T00:00:00') == datetime(2025, 2, 10)

    def test_aware_time_becomes_naive_local(self) -> None:
        decoded = decode_time('2025-02-10T12:00:00+00:00')
        assert decoded is not None
        assert decoded.tzinfo is None

    def test_short_data_list_is_padded_to_capacity(
        self, store: JsonLotSnapshotStore, snapshot_path: Path
    ) -> None:
        snapshot_path.write_bytes(
            orjson.dumps(
                {
                    'UnitSpaces': {'1st floor 10': {'Number': 10, 'Floor': 1}},
                    'ToBeReleased': {
                        '1st floor 10': {
                            'Capacity': 4,
                            'Data': [
                                {
                                    'InUse': True,
                                    'Submitted': True,
                                    'OwnerId': 'U1',
                                    'StartDate': '2025-02-10T00:00:00Z',
                                    'EndDate': '2025-02-12T00:00:00Z',
                                }
                            ],
                        }
                    },
                }
            )
        )

        pool = store.load().to_be_released.get_pool('1st floor 10')

        assert pool.capacity == 4
        assert len(pool) == 1
