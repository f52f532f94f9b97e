"""
Modal view-model

Platform-neutral description of a modal window. The chat adapter renders
these blocks into its own wire format.
"""

from datetime import date
from enum import StrEnum
from typing import Optional, Union

import attrs


class ButtonStyle(StrEnum):
    DEFAULT = ''
    PRIMARY = 'primary'
    DANGER = 'danger'


@attrs.define(frozen=True)
class Option:
    text: str
    value: str


@attrs.define(frozen=True)
class Button:
    action_id: str
    text: str
    value: str = ''
    style: ButtonStyle = ButtonStyle.DEFAULT


@attrs.define(frozen=True)
class StaticSelect:
    action_id: str
    placeholder: str
    options: tuple[Option, ...]
    initial_option: Optional[Option] = None


@attrs.define(frozen=True)
class DatePicker:
    action_id: str
    placeholder: str
    initial_date: Optional[date] = None


@attrs.define(frozen=True)
class UserSelect:
    action_id: str
    placeholder: str
    initial_user: str = ''


@attrs.define(frozen=True)
class Checkboxes:
    action_id: str
    options: tuple[Option, ...]
    initial_options: tuple[Option, ...] = ()


@attrs.define(frozen=True)
class TextInput:
    action_id: str
    placeholder: str = ''


@attrs.define(frozen=True)
class MultiSelect:
    action_id: str
    placeholder: str
    options: tuple[Option, ...]


Element = Union[Button, StaticSelect, DatePicker, UserSelect, Checkboxes, TextInput, MultiSelect]


@attrs.define(frozen=True)
class TextBlock:
    text: str


@attrs.define(frozen=True)
class DividerBlock:
    pass


@attrs.define(frozen=True)
class ActionsBlock:
    elements: tuple[Element, ...]
    block_id: str = ''


@attrs.define(frozen=True)
class InputBlock:
    label: str
    element: Element
    block_id: str = ''
    optional: bool = False


Block = Union[TextBlock, DividerBlock, ActionsBlock, InputBlock]


@attrs.define(frozen=True)
class Modal:
    title: str
    blocks: tuple[Block, ...]
    submit_text: str = ''
    close_text: str = 'Close'

    def texts(self) -> list[str]:
        """All text block contents, in order"""
        return [block.text for block in self.blocks if isinstance(block, TextBlock)]

    def elements(self) -> list[Element]:
        found: list[Element] = []
        for block in self.blocks:
            if isinstance(block, ActionsBlock):
                found.extend(block.elements)
            elif isinstance(block, InputBlock):
                found.append(block.element)
        return found

    def action_ids(self) -> list[str]:
        return [element.action_id for element in self.elements()]


def error_text(error_txt: str) -> TextBlock:
    return TextBlock(f':warning: {error_txt}')
