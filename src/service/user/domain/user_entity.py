from enum import IntEnum
from typing import Any

import attrs


class AccessRight(IntEnum):
    STANDARD = 0
    ADMIN = 1


@attrs.define
class User:
    id: str
    rights: AccessRight = AccessRight.STANDARD
    has_permanent_parking: bool = False
    # HR linkage, stored and written back untouched
    hcm_id: int = 0
    hcm_company: str = ''
    # Unrecognised keys of the roster file, kept so a rewrite loses nothing
    extra: dict[str, Any] = attrs.field(factory=dict, repr=False)

    @property
    def is_admin(self) -> bool:
        return self.rights == AccessRight.ADMIN
