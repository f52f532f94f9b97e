from enum import StrEnum

from src.service.shared_kernel.domain.modal import (
    ActionsBlock,
    Block,
    InputBlock,
    Modal,
    MultiSelect,
    Option,
    StaticSelect,
    TextBlock,
    TextInput,
)
from src.service.spaces.domain.space import SpaceType
from src.service.spaces.domain.spaces_lot import SpacesLot


class EditOption(StrEnum):
    NOT_SELECTED = 'Not Selected'
    ADD_SPACE = 'Add Space'
    REMOVE_SPACES = 'Remove Space/s'


EDIT_OPTIONS = (EditOption.ADD_SPACE, EditOption.REMOVE_SPACES)


class EditActionId(StrEnum):
    SELECT_EDIT_OPTION = 'selectEditOptionId'
    SELECT_SPACES = 'selectSpaceOptionId'
    ADD_FLOOR = 'addFloorActionId'
    ADD_SPACE = 'addSpaceActionId'
    ADD_DESCRIPTION = 'addDescriptionActionId'


class EditBlockId(StrEnum):
    EDIT_OPTION = 'selectEditOptionBlockId'
    SELECT_SPACES = 'selectSpaceBlockId'
    ADD_FLOOR = 'addFloorBlockId'
    ADD_SPACE = 'addSpaceBlockId'
    ADD_DESCRIPTION = 'addDescriptionBlockId'


class SpacesEditorView:
    def __init__(self, *, title: str, lot: SpacesLot) -> None:
        self.title = title
        self.lot = lot

    def generate(self, *, selected_option: EditOption) -> Modal:
        blocks: list[Block] = [
            TextBlock('Select operation you want to perform'),
            ActionsBlock(
                block_id=EditBlockId.EDIT_OPTION,
                elements=(
                    StaticSelect(
                        action_id=EditActionId.SELECT_EDIT_OPTION,
                        placeholder='Choose an action',
                        options=tuple(Option(text=opt, value=opt) for opt in EDIT_OPTIONS),
                        initial_option=(
                            Option(text=selected_option, value=selected_option)
                            if selected_option != EditOption.NOT_SELECTED
                            else None
                        ),
                    ),
                ),
            ),
        ]

        match selected_option:
            case EditOption.ADD_SPACE:
                blocks.extend(self._add_space_blocks())
                return Modal(title=self.title, blocks=tuple(blocks), submit_text='Add')
            case EditOption.REMOVE_SPACES:
                blocks.append(self._remove_spaces_block())
                return Modal(title=self.title, blocks=tuple(blocks), submit_text='Remove')
        return Modal(title=self.title, blocks=tuple(blocks))

    def _add_space_blocks(self) -> list[Block]:
        return [
            InputBlock(
                label='Floor',
                element=TextInput(action_id=EditActionId.ADD_FLOOR, placeholder='-2'),
                block_id=EditBlockId.ADD_FLOOR,
            ),
            InputBlock(
                label='Space Number',
                element=TextInput(action_id=EditActionId.ADD_SPACE, placeholder='48'),
                block_id=EditBlockId.ADD_SPACE,
            ),
            InputBlock(
                label='Description',
                element=TextInput(action_id=EditActionId.ADD_DESCRIPTION),
                block_id=EditBlockId.ADD_DESCRIPTION,
                optional=True,
            ),
        ]

    def _remove_spaces_block(self) -> InputBlock:
        options: list[Option] = []
        for floor in self.lot.get_all_floors():
            floor_spaces = sorted(
                self.lot.get_spaces_by_floor('', floor, SpaceType.ANY), key=lambda s: s.number
            )
            options.extend(Option(text=space.key, value=space.key) for space in floor_spaces)

        return InputBlock(
            label='Select spaces you want to remove',
            element=MultiSelect(
                action_id=EditActionId.SELECT_SPACES,
                placeholder='Select space to remove',
                options=tuple(options),
            ),
            block_id=EditBlockId.SELECT_SPACES,
        )
