from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from src.service.spaces.domain.spaces_lot import SpacesLot


class ILotSnapshotStore(Protocol):
    """Durable whole-lot snapshot; every lot mutation is flushed through it"""

    def load(self) -> 'SpacesLot':
        """
        Raises:
            StorageCorruptionError: file missing, unparsable or without spaces
        """
        ...

    def save(self, lot: 'SpacesLot') -> None:
        """
        Raises:
            SnapshotWriteError: the snapshot could not be written
        """
        ...
