from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.spaces.domain.spaces_lot import SpacesLot


class TrackReleaseViewUseCase:
    """Keeps a draft release tied to the modal it is being edited in"""

    def __init__(self, *, lot: SpacesLot) -> None:
        self.lot = lot

    def bind_view(self, *, root_view_id: str, view_id: str) -> bool:
        release = self.lot.to_be_released.get_by_root_view_id(root_view_id)
        if release is None or not release.is_draft:
            return False
        release.view_id = view_id
        return True

    @Logger.io
    def discard_view(self, *, view_id: str) -> Optional[str]:
        """Drop the draft of a closed modal; returns its space key"""
        space_key = self.lot.to_be_released.remove_by_view_id(view_id)
        if space_key is not None:
            Logger.base.info(f'📝 [RELEASE] Draft of {space_key} discarded with its modal')
            self.lot.synchronize_to_file()
        return space_key
