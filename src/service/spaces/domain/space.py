"""
Space

A single bookable slot (parking stall or desk) together with its current
reservation state.
"""

from datetime import datetime
from enum import StrEnum
from typing import Optional

import attrs


class SpaceType(StrEnum):
    FREE = 'free'
    TAKEN = 'taken'
    ANY = 'any'


def make_floor_str(floor: int) -> str:
    """`-1` -> `-1st floor`, `12` -> `12th floor`"""
    suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(abs(floor), 'th')
    return f'{floor}{suffix} floor'


def make_space_key(number: int, floor: int) -> str:
    return f'{make_floor_str(floor)} {number}'


@attrs.define
class Space:
    number: int
    floor: int
    description: str = ''
    reserved: bool = False
    reserved_by: str = ''
    reserved_by_id: str = ''
    reserved_time: Optional[datetime] = None
    auto_release: bool = False

    @property
    def key(self) -> str:
        return make_space_key(self.number, self.floor)

    @property
    def floor_str(self) -> str:
        return make_floor_str(self.floor)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.floor, self.number)

    def smaller(self, other: 'Space') -> bool:
        return self.sort_key < other.sort_key

    def is_reserved_by(self, user_id: str) -> bool:
        return self.reserved and self.reserved_by_id == user_id

    def reserve(self, user: str, user_id: str, auto_release: bool, now: datetime) -> None:
        self.reserved = True
        self.reserved_by = user
        self.reserved_by_id = user_id
        self.reserved_time = now
        self.auto_release = auto_release

    def restore_to(self, owner_name: str, owner_id: str) -> None:
        """Hand the space back to its permanent owner"""
        self.reserved = True
        self.auto_release = False
        self.reserved_by = owner_name
        self.reserved_by_id = owner_id

    def props_text(self) -> str:
        description = f' - {self.description}' if self.description else ''
        return f'({self.floor} floor{description})'

    def status_emoji(self) -> str:
        return ':large_orange_circle:' if self.reserved else ':large_green_circle:'

    def status_description(self) -> str:
        return f'<@{self.reserved_by_id}>' if self.reserved else ''
