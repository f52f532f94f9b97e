from typing import Optional

import attrs

from src.platform.config.core_setting import settings
from src.service.shared_kernel.domain.slash_command import alias_for_testing, should_process_slash


def _validate_hour(instance: 'ReservationConfig', attribute: attrs.Attribute, value: int) -> None:
    if not 0 <= value <= 23:
        raise ValueError(f'{attribute.name} must be between 0 and 23, got {value}')


def _validate_minute(instance: 'ReservationConfig', attribute: attrs.Attribute, value: int) -> None:
    if not 0 <= value <= 59:
        raise ValueError(f'{attribute.name} must be between 0 and 59, got {value}')


@attrs.define(frozen=True)
class ReservationConfig:
    """
    Per-lot settings of a reservation manager

    `identifier` prefixes every modal title the manager renders and doubles
    as its event-bus context.
    """

    identifier: str
    command: str
    reset_label: str
    reset_hour: int = attrs.field(default=17, validator=_validate_hour)
    reset_minute: int = attrs.field(default=0, validator=_validate_minute)
    # Floors offered in the floor select; all floors of the lot when unset
    allowed_floors: Optional[tuple[int, ...]] = None
    testing_active: bool = attrs.field(factory=lambda: settings.TESTING_ACTIVE)

    @property
    def booking_title(self) -> str:
        return self.identifier + 'Booking'

    @property
    def personal_title(self) -> str:
        return self.identifier + 'Personal'

    @property
    def release_title(self) -> str:
        return self.identifier + 'Release a spot'

    @property
    def active_command(self) -> str:
        return alias_for_testing(self.command) if self.testing_active else self.command

    def accepts_command(self, command: str) -> bool:
        return should_process_slash(command, self.command, self.testing_active)
