from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from src.service.user.domain.user_roster import UserRoster


class IUserRosterStore(Protocol):
    def load(self) -> 'UserRoster':
        """
        Raises:
            StorageCorruptionError: file missing, unparsable or without users
        """
        ...

    def save(self, roster: 'UserRoster') -> None:
        """
        Raises:
            SnapshotWriteError: the roster could not be written
        """
        ...
