from typing import Optional

from src.service.reservation.driving_adapter.view.action import ActionId, BlockId
from src.service.shared_kernel.domain.modal import ActionsBlock, Block, DatePicker, Modal, TextBlock
from src.service.spaces.domain.release_info import ReleaseInfo
from src.service.spaces.domain.space import Space


class ReleaseView:
    """Date range form pushed on top of the booking or personal view"""

    def __init__(self, *, title: str) -> None:
        self.title = title

    def generate(
        self,
        *,
        space: Optional[Space],
        release: Optional[ReleaseInfo] = None,
        error_txt: str = '',
    ) -> Modal:
        description = (
            f'Temporarily release space: {space.number} ({space.floor} floor)'
            if space is not None
            else 'Temporarily release space'
        )
        start = release.start_date.date() if release and release.start_date else None
        end = release.end_date.date() if release and release.end_date else None

        blocks: list[Block] = [
            TextBlock(description),
            ActionsBlock(
                block_id=BlockId.RELEASE,
                elements=(
                    DatePicker(
                        action_id=ActionId.RELEASE_START_DATE,
                        placeholder='Select START date',
                        initial_date=start,
                    ),
                    DatePicker(
                        action_id=ActionId.RELEASE_END_DATE,
                        placeholder='Select END date',
                        initial_date=end,
                    ),
                ),
            ),
        ]
        if error_txt:
            blocks.append(TextBlock(f':warning: *{error_txt}*'))

        return Modal(title=self.title, blocks=tuple(blocks), submit_text='Submit')
