from pathlib import Path

import orjson
import pytest

from src.platform.exception.exceptions import DuplicateUserError, StorageCorruptionError
from src.service.user.domain.user_entity import AccessRight
from src.service.user.domain.user_roster import UserRoster
from src.service.user.driven_adapter.json_user_roster_store import JsonUserRosterStore
from test.constants import ADMIN_ID, GUEST_ID, GUEST_NAME, OTHER_ID, OWNER_ID, OWNER_NAME


class TestUserRoster:
    def test_lookups_by_id(self, roster: UserRoster) -> None:
        assert roster.exists(OWNER_ID)
        assert roster.has_parking_by_id(OWNER_ID)
        assert not roster.has_parking_by_id(GUEST_ID)
        assert roster.is_admin_id(ADMIN_ID)
        assert not roster.is_admin_id(OWNER_ID)
        assert roster.get_name_from_id(GUEST_ID) == GUEST_NAME
        assert roster.get_name_from_id('U_NOBODY') == ''
        assert not roster.is_admin_id('U_NOBODY')

    def test_insert_user(self, roster: UserRoster) -> None:
        user = roster.insert_user('U_NEW', 'dave')

        assert roster.get_user('U_NEW') is user
        assert user.rights == AccessRight.STANDARD
        assert not user.has_permanent_parking
        assert 'dave' in roster.all_user_names()

    def test_insert_duplicate_id(self, roster: UserRoster) -> None:
        with pytest.raises(DuplicateUserError, match='UserId'):
            roster.insert_user(OWNER_ID, 'someone else')

    def test_insert_duplicate_name(self, roster: UserRoster) -> None:
        with pytest.raises(DuplicateUserError, match='UserName'):
            roster.insert_user('U_NEW', OWNER_NAME)

    def test_set_rights(self, roster: UserRoster) -> None:
        roster.set_access_rights(OTHER_ID, AccessRight.ADMIN)
        roster.set_parking_permission(OTHER_ID, True)

        assert roster.is_admin_id(OTHER_ID)
        assert roster.has_parking_by_id(OTHER_ID)

    def test_unknown_user_changes_are_ignored(self, roster: UserRoster) -> None:
        roster.set_access_rights('U_NOBODY', AccessRight.ADMIN)
        roster.set_parking_permission('U_NOBODY', True)
        assert not roster.exists('U_NOBODY')

    def test_all_user_names_sorted(self, roster: UserRoster) -> None:
        assert roster.all_user_names() == sorted(roster.users)


class TestJsonUserRosterStore:
    def test_round_trip_keeps_unknown_keys(self, tmp_path: Path) -> None:
        path = tmp_path / 'users.json'
        path.write_bytes(
            orjson.dumps(
                {
                    'alice': {
                        'Id': 'U1',
                        'Rights': 1,
                        'has_parking': True,
                        'HcmId': 42,
                        'HcmCompany': 'ACME',
                        'Team': 'infra',
                    }
                }
            )
        )
        store = JsonUserRosterStore(path)

        roster = store.load()
        alice = roster.get_user('U1')
        assert alice.is_admin
        assert alice.has_permanent_parking
        assert (alice.hcm_id, alice.hcm_company) == (42, 'ACME')

        roster.insert_user('U2', 'bob')
        roster.synchronize_to_file()
        written = orjson.loads(path.read_bytes())

        assert written['alice']['Team'] == 'infra'
        assert written['bob'] == {
            'Id': 'U2',
            'Rights': 0,
            'has_parking': False,
            'HcmId': 0,
            'HcmCompany': '',
        }

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(StorageCorruptionError):
            JsonUserRosterStore(tmp_path / 'users.json').load()

    def test_empty_roster(self, tmp_path: Path) -> None:
        path = tmp_path / 'users.json'
        path.write_text('{}')
        with pytest.raises(StorageCorruptionError, match='No users found'):
            JsonUserRosterStore(path).load()

    def test_entry_without_id(self, tmp_path: Path) -> None:
        path = tmp_path / 'users.json'
        path.write_text('{"alice": {"Rights": 0}}')
        with pytest.raises(StorageCorruptionError):
            JsonUserRosterStore(path).load()
