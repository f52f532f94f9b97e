from typing import Protocol


class IUserRightsQuery(Protocol):
    """Read side of the user roster the reservation flows depend on"""

    def is_admin_id(self, user_id: str) -> bool: ...

    def has_parking_by_id(self, user_id: str) -> bool: ...
