"""
JSON Lot Snapshot Store

File layout:
    {
      "UnitSpaces":   {"<key>": {Number, Floor, Description, Reserved, ...}},
      "ToBeReleased": {"<key>": {"Capacity": N, "Data": [ReleaseInfo, ...]}},
      "Filename":     "<path>"
    }

Writes go to a sibling temp file which is then renamed over the snapshot, so a
crash mid-write never leaves a truncated file behind.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import orjson

from src.platform.exception.exceptions import StorageCorruptionError
from src.platform.logging.loguru_io import Logger
from src.platform.storage.atomic_file import write_atomic
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.release_map import ReleaseMap
from src.service.spaces.domain.release_pool import ReleasePool
from src.service.spaces.domain.space import Space
from src.service.spaces.domain.spaces_lot import SpacesLot


# Zero time value written by older snapshots for unset timestamps
_ZERO_TIME_PREFIX = '0001-01-01'


def encode_time(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def decode_time(value: Optional[str]) -> Optional[datetime]:
    if not value or value.startswith(_ZERO_TIME_PREFIX):
        return None
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is not None:
        # Everything in memory is naive local time
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def space_to_dict(space: Space) -> dict[str, Any]:
    return {
        'Number': space.number,
        'Floor': space.floor,
        'Description': space.description,
        'Reserved': space.reserved,
        'ReservedBy': space.reserved_by,
        'ReservedById': space.reserved_by_id,
        'ReservedTime': encode_time(space.reserved_time),
        'AutoRelease': space.auto_release,
    }


def space_from_dict(data: dict[str, Any]) -> Space:
    return Space(
        number=int(data['Number']),
        floor=int(data['Floor']),
        description=data.get('Description', ''),
        reserved=data.get('Reserved', False),
        reserved_by=data.get('ReservedBy', ''),
        reserved_by_id=data.get('ReservedById', ''),
        reserved_time=decode_time(data.get('ReservedTime')),
        auto_release=data.get('AutoRelease', False),
    )


def release_to_dict(release: ReleaseInfo) -> dict[str, Any]:
    return {
        'InUse': release.in_use,
        'ReleaserId': release.releaser_id,
        'OwnerId': release.owner_id,
        'OwnerName': release.owner_name,
        'SpaceKey': release.space_key,
        'StartDate': encode_time(release.start_date),
        'EndDate': encode_time(release.end_date),
        'Cancelled': release.cancelled,
        'Submitted': release.submitted,
        'SubmittedTime': encode_time(release.submitted_time),
        'UniqueId': release.unique_id,
        'Active': release.active,
        'ActiveTime': encode_time(release.active_time),
        'CreatedTime': encode_time(release.created_time),
        'RootViewId': release.root_view_id,
        'ViewId': release.view_id,
    }


def release_from_dict(data: dict[str, Any], idx: int, space_key: str) -> ReleaseInfo:
    return ReleaseInfo(
        unique_id=idx,
        in_use=data.get('InUse', False),
        releaser_id=data.get('ReleaserId', ''),
        owner_id=data.get('OwnerId', ''),
        owner_name=data.get('OwnerName', ''),
        space_key=data.get('SpaceKey') or (space_key if data.get('InUse') else ''),
        start_date=decode_time(data.get('StartDate')),
        end_date=decode_time(data.get('EndDate')),
        cancelled=data.get('Cancelled', False),
        submitted=data.get('Submitted', False),
        submitted_time=decode_time(data.get('SubmittedTime')),
        active=data.get('Active', False),
        active_time=decode_time(data.get('ActiveTime')),
        created_time=decode_time(data.get('CreatedTime')),
        root_view_id=data.get('RootViewId', ''),
        view_id=data.get('ViewId', ''),
    )


def pool_from_dict(data: dict[str, Any], space_key: str) -> ReleasePool:
    releases = [
        release_from_dict(item or {}, idx, space_key)
        for idx, item in enumerate(data.get('Data') or [])
    ]
    # Older snapshots serialized a shorter Data list than Capacity
    capacity = max(int(data.get('Capacity', len(releases))), len(releases))
    releases.extend(ReleaseInfo(unique_id=idx) for idx in range(len(releases), capacity))
    return ReleasePool(data=releases)


def lot_to_dict(lot: SpacesLot) -> dict[str, Any]:
    return {
        'UnitSpaces': {key: space_to_dict(space) for key, space in lot.unit_spaces.items()},
        'ToBeReleased': {
            key: {
                'Capacity': pool.capacity,
                'Data': [release_to_dict(release) for release in pool.data],
            }
            for key, pool in lot.to_be_released.items()
        },
        'Filename': lot.filename,
    }


def lot_from_dict(data: dict[str, Any], filename: str) -> SpacesLot:
    unit_spaces = {
        key: space_from_dict(space) for key, space in (data.get('UnitSpaces') or {}).items()
    }
    pools = {
        key: pool_from_dict(pool, key) for key, pool in (data.get('ToBeReleased') or {}).items()
    }
    # Releases of spaces that no longer exist are dropped
    for key in [key for key in pools if key not in unit_spaces]:
        Logger.base.warning(f'💾 [SNAPSHOT] Dropping releases of unknown space {key!r}')
        del pools[key]

    lot = SpacesLot(unit_spaces=unit_spaces, to_be_released=ReleaseMap(pools), filename=filename)
    dropped = lot.to_be_released.prune_drafts()
    if dropped:
        Logger.base.info(f'💾 [SNAPSHOT] Discarded {dropped} draft release(s) from {filename}')
    return lot


class JsonLotSnapshotStore:
    def __init__(self, filename: str | Path) -> None:
        self.filename = str(filename)

    def load(self) -> SpacesLot:
        try:
            raw = Path(self.filename).read_bytes()
            data = orjson.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f'expected a JSON object, got {type(data).__name__}')
            lot = lot_from_dict(data, self.filename)
        except (OSError, orjson.JSONDecodeError, TypeError, ValueError, KeyError) as e:
            raise StorageCorruptionError(
                f'Could not parse spaces file {self.filename}: {e}'
            ) from e

        if not lot.unit_spaces:
            raise StorageCorruptionError(f'Spaces file {self.filename} contains no spaces')

        lot.store = self
        Logger.base.info(
            f'💾 [SNAPSHOT] Loaded {len(lot.unit_spaces)} spaces from {self.filename}'
        )
        return lot

    def save(self, lot: SpacesLot) -> None:
        write_atomic(self.filename, orjson.dumps(lot_to_dict(lot), option=orjson.OPT_INDENT_2))
        Logger.base.debug(f'💾 [SNAPSHOT] Wrote spaces lot to {self.filename}')
