"""
Per-user booking view selections. Kept in memory only; a restart resets
everybody to the first floor with free spaces shown.
"""

import attrs


SHOW_FREE_OPTION = 'Free'
SHOW_TAKEN_OPTION = 'Taken'
SHOW_OPTIONS = (SHOW_FREE_OPTION, SHOW_TAKEN_OPTION)


@attrs.define
class ReservationViewState:
    selected_floor: dict[str, str] = attrs.field(factory=dict)
    selected_show_taken: dict[str, bool] = attrs.field(factory=dict)

    def floor_for(self, user_id: str, floors: list[str]) -> str:
        """The user's floor if still offered, else the first offered floor"""
        selected = self.selected_floor.get(user_id, '')
        if selected in floors:
            return selected
        return floors[0] if floors else ''

    def select_floor(self, user_id: str, floor: str) -> None:
        self.selected_floor[user_id] = floor

    def show_taken(self, user_id: str) -> bool:
        return self.selected_show_taken.get(user_id, False)

    def select_show(self, user_id: str, option: str) -> None:
        self.selected_show_taken[user_id] = option == SHOW_TAKEN_OPTION
