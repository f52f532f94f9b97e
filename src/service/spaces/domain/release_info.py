"""
Release Info

A scheduled temporary handover of a permanently owned space.

Lifecycle (monotone): draft -> submitted -> active -> removed.
A draft only exists while its owner is filling in the release modal; it is
identified by the booking view it was started from (root_view_id) and the
pushed release modal (view_id). Both ids are dropped on submission.
"""

from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import ReleaseStateError
from src.service.shared_kernel.domain.date_util import check_date_range, format_date


@attrs.define
class ReleaseInfo:
    unique_id: int = 0
    in_use: bool = False
    releaser_id: str = ''
    owner_id: str = ''
    owner_name: str = ''
    space_key: str = ''
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    submitted: bool = False
    submitted_time: Optional[datetime] = None
    active: bool = False
    active_time: Optional[datetime] = None
    cancelled: bool = False
    created_time: Optional[datetime] = None
    root_view_id: str = ''
    view_id: str = ''

    @property
    def is_draft(self) -> bool:
        return not self.submitted

    def mark_submitted(self, now: Optional[datetime] = None) -> None:
        if self.submitted:
            return
        self.submitted = True
        self.submitted_time = now or datetime.now()
        self.root_view_id = ''
        self.view_id = ''

    def mark_active(self, now: Optional[datetime] = None) -> None:
        if not self.submitted:
            raise ReleaseStateError(
                f'cannot activate draft release {self.unique_id} of space {self.space_key}'
            )
        if self.active:
            return
        self.active = True
        self.active_time = now or datetime.now()

    def mark_cancelled(self) -> None:
        self.cancelled = True

    def data_present(self) -> bool:
        return bool(
            self.releaser_id
            and self.owner_id
            and self.owner_name
            and self.start_date is not None
            and self.end_date is not None
        )

    def check(self, now: Optional[datetime] = None) -> str:
        """Validation message for the release modal; empty when the dates are fine"""
        if self.start_date is None or self.end_date is None:
            return f'Missing date information for temporary release of space ({self.space_key})'
        return check_date_range(self.start_date, self.end_date, now)

    def date_range(self) -> str:
        return f'{format_date(self.start_date)} -> {format_date(self.end_date)}'

    def info(self) -> str:
        return (
            f'Release{{id={self.unique_id} space={self.space_key!r} owner={self.owner_name!r} '
            f'range={self.date_range()} submitted={self.submitted} active={self.active} '
            f'cancelled={self.cancelled}}}'
        )
