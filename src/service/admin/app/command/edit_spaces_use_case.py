"""
Edit Spaces Use Case

Admin maintenance of a lot: add a single space, remove a batch of spaces
together with their scheduled releases.
"""

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.spaces.domain.space import Space
from src.service.spaces.domain.spaces_lot import SpacesLot


class EditSpacesUseCase:
    def __init__(self, *, lot: SpacesLot) -> None:
        self.lot = lot

    @Logger.io
    def add_space(self, *, floor: str, number: str, description: str = '') -> tuple[str, str]:
        """Returns (message, error); exactly one of them is set"""
        try:
            floor_value = int(floor)
        except ValueError:
            return '', f'Space was not added - floor {floor!r} is not a number'
        if floor_value == 0:
            return '', 'Space was not added - invalid floor value (0)'

        try:
            number_value = int(number)
        except ValueError:
            return '', f'Space was not added - space number {number!r} is not a number'
        if number_value <= 0:
            return '', f'Space was not added - invalid space number ({number_value})'

        space = Space(number=number_value, floor=floor_value, description=description.strip())
        try:
            self.lot.add_space(space)
        except ConflictError:
            return '', f"Can't add space {space.key!r} because it already exists"
        return f'Added space {space.key}', ''

    @Logger.io
    def remove_spaces(self, *, space_keys: list[str]) -> tuple[str, str]:
        if not space_keys:
            return '', 'No spaces selected for removal -> nothing was done'

        removed: list[str] = []
        missing: list[str] = []
        for space_key in space_keys:
            try:
                self.lot.remove_space(space_key)
                removed.append(space_key)
            except NotFoundError:
                missing.append(space_key)

        if missing:
            Logger.base.warning(f'🛠️ [EDIT] Spaces already gone: {missing}')
            return '', f"Couldn't find space(s): {', '.join(missing)}"
        return f'Removed space(s): {", ".join(removed)}', ''
