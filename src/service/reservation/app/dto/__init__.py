"""Reservation Application DTOs"""

from src.service.reservation.app.dto.reservation_dto import (
    ReleaseDraftFeedback,
    ReleaseSpaceResult,
    SubmitTempReleaseRequest,
    SubmitTempReleaseResult,
    TempReleaseDraftResult,
)


__all__ = [
    'ReleaseDraftFeedback',
    'ReleaseSpaceResult',
    'SubmitTempReleaseRequest',
    'SubmitTempReleaseResult',
    'TempReleaseDraftResult',
]
