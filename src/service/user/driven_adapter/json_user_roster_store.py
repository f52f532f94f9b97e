"""
JSON User Roster Store

File layout:
    {"<display name>": {"Id": "...", "Rights": 0, "has_parking": false,
                        "HcmId": 0, "HcmCompany": ""}}
"""

from pathlib import Path
from typing import Any

import orjson

from src.platform.exception.exceptions import StorageCorruptionError
from src.platform.logging.loguru_io import Logger
from src.platform.storage.atomic_file import write_atomic
from src.service.user.domain.user_entity import AccessRight, User
from src.service.user.domain.user_roster import UserRoster


_KNOWN_KEYS = frozenset({'Id', 'Rights', 'has_parking', 'HcmId', 'HcmCompany'})


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        **user.extra,
        'Id': user.id,
        'Rights': int(user.rights),
        'has_parking': user.has_permanent_parking,
        'HcmId': user.hcm_id,
        'HcmCompany': user.hcm_company,
    }


def user_from_dict(data: dict[str, Any]) -> User:
    return User(
        id=data['Id'],
        rights=AccessRight(int(data.get('Rights', AccessRight.STANDARD))),
        has_permanent_parking=bool(data.get('has_parking', False)),
        hcm_id=int(data.get('HcmId') or 0),
        hcm_company=data.get('HcmCompany') or '',
        extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
    )


class JsonUserRosterStore:
    def __init__(self, filename: str | Path) -> None:
        self.filename = str(filename)

    def load(self) -> UserRoster:
        try:
            data = orjson.loads(Path(self.filename).read_bytes())
            if not isinstance(data, dict):
                raise TypeError(f'expected a JSON object, got {type(data).__name__}')
            users = {name: user_from_dict(user) for name, user in data.items()}
        except (OSError, orjson.JSONDecodeError, TypeError, ValueError, KeyError) as e:
            raise StorageCorruptionError(
                f'Could not parse users file {self.filename}: {e}'
            ) from e

        if not users:
            raise StorageCorruptionError(f'No users found in {self.filename}')

        Logger.base.info(f'👤 [ROSTER] User list loaded: {len(users)} users')
        return UserRoster(users=users, filename=self.filename, store=self)

    def save(self, roster: UserRoster) -> None:
        data = {name: user_to_dict(user) for name, user in roster.users.items()}
        write_atomic(self.filename, orjson.dumps(data, option=orjson.OPT_INDENT_2))
        Logger.base.info('👤 [ROSTER] Wrote users list to file')
