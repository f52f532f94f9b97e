from src.platform.logging.loguru_io import Logger
from src.service.user.domain.user_entity import AccessRight, User
from src.service.user.domain.user_roster import UserRoster


class ManageUserRightsUseCase:
    """
    Admin edits of the roster

    Users picked in the admin modal are added to the roster on first sight,
    as standard users without parking rights.
    """

    def __init__(self, *, roster: UserRoster) -> None:
        self.roster = roster

    @Logger.io
    def ensure_user(self, *, user_id: str, user_name: str) -> User:
        """
        Raises:
            DuplicateUserError: the display name belongs to another id
        """
        if (user := self.roster.get_user(user_id)) is not None:
            return user
        user = self.roster.insert_user(user_id, user_name)
        self.roster.synchronize_to_file()
        return user

    @Logger.io
    def update_rights(
        self, *, admin_name: str, user_id: str, is_admin: bool, has_parking: bool
    ) -> None:
        rights = AccessRight.ADMIN if is_admin else AccessRight.STANDARD
        self.roster.set_access_rights(user_id, rights)
        self.roster.set_parking_permission(user_id, has_parking)
        self.roster.synchronize_to_file()
        Logger.base.info(
            f'👤 [ROSTER] {admin_name} set {self.roster.get_name_from_id(user_id)} '
            f'rights={rights.name} has_parking={has_parking}'
        )
