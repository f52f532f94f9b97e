"""
User Roster

Flat directory of chat users keyed by display name. Access rights decide who
may run the admin tools; the permanent-parking flag decides who keeps a
parking space across days.
"""

from typing import TYPE_CHECKING, Optional

import anyio
import attrs

from src.platform.exception.exceptions import DuplicateUserError
from src.platform.logging.loguru_io import Logger
from src.service.user.domain.user_entity import AccessRight, User


if TYPE_CHECKING:
    from src.service.user.app.interface.i_user_roster_store import IUserRosterStore


@attrs.define(eq=False)
class UserRoster:
    users: dict[str, User] = attrs.field(factory=dict)
    filename: str = ''
    store: Optional['IUserRosterStore'] = attrs.field(default=None, repr=False)
    lock: anyio.Lock = attrs.field(factory=anyio.Lock, repr=False)

    def synchronize_to_file(self) -> None:
        if self.store is None:
            return
        self.store.save(self)

    def _by_id(self, user_id: str) -> Optional[tuple[str, User]]:
        for name, user in self.users.items():
            if user.id == user_id:
                return name, user
        return None

    def get_user(self, user_id: str) -> Optional[User]:
        found = self._by_id(user_id)
        return found[1] if found else None

    def exists(self, user_id: str) -> bool:
        return self._by_id(user_id) is not None

    def is_admin_id(self, user_id: str) -> bool:
        user = self.get_user(user_id)
        return user is not None and user.is_admin

    def has_parking_by_id(self, user_id: str) -> bool:
        user = self.get_user(user_id)
        return user is not None and user.has_permanent_parking

    def get_name_from_id(self, user_id: str) -> str:
        found = self._by_id(user_id)
        return found[0] if found else ''

    def all_user_names(self) -> list[str]:
        return sorted(self.users)

    def insert_user(self, user_id: str, user_name: str) -> User:
        """
        Add a standard user without parking rights

        Raises:
            DuplicateUserError: id or display name already taken
        """
        if self.exists(user_id):
            raise DuplicateUserError(f'UserId ({user_id}) already exists')
        if user_name in self.users:
            raise DuplicateUserError(f'UserName ({user_name}) already exists')

        user = User(id=user_id)
        self.users[user_name] = user
        Logger.base.info(f'👤 [ROSTER] Inserted user {user_name} ({user_id})')
        return user

    def set_access_rights(self, user_id: str, rights: AccessRight) -> None:
        if (user := self.get_user(user_id)) is not None:
            user.rights = rights

    def set_parking_permission(self, user_id: str, has_parking: bool) -> None:
        if (user := self.get_user(user_id)) is not None:
            user.has_permanent_parking = has_parking
