"""
Action ids and button payloads of the reservation modals.

Button values carry an encoded ActionValues so a click can be resolved to a
space (and release) without any server-side lookup of the rendered view.
"""

from enum import StrEnum

import attrs
import orjson

from src.platform.exception.exceptions import ValidationError


class ActionId(StrEnum):
    FLOOR_OPTION = 'floorOptionId'
    SHOW_OPTION = 'showOptionId'
    RESERVE_SPACE = 'reserveSpace'
    RELEASE_SPACE = 'releaseSpace'
    TEMP_RELEASE_SPACE = 'tempReleaseSpace'
    CANCEL_TEMP_RELEASE = 'cancelTempReleaseSpace'
    SWITCH_TO_PERSONAL = 'switchToPersonalView'
    SWITCH_TO_OVERVIEW = 'switchToAllSpacesOverview'
    RELEASE_START_DATE = 'releaseStartDate'
    RELEASE_END_DATE = 'releaseEndDate'


class BlockId(StrEnum):
    FLOOR = 'floorActionId'
    SHOW = 'showActionId'
    RELEASE = 'releaseBlockId'


class ModalType(StrEnum):
    BOOKING = 'booking'
    PERSONAL = 'personal'


@attrs.define(frozen=True)
class ActionValues:
    space_key: str = ''
    modal_type: ModalType = ModalType.BOOKING
    release_id: int = 0

    def encode(self) -> str:
        return orjson.dumps(
            {
                'SpaceKey': self.space_key,
                'ModalType': self.modal_type.value,
                'ReleaseId': self.release_id,
            }
        ).decode()

    @classmethod
    def decode(cls, value: str) -> 'ActionValues':
        try:
            data = orjson.loads(value)
            return cls(
                space_key=data.get('SpaceKey', ''),
                modal_type=ModalType(data.get('ModalType', ModalType.BOOKING)),
                release_id=int(data.get('ReleaseId', 0)),
            )
        except (orjson.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            raise ValidationError(f'Malformed action value {value!r}: {e}') from e
