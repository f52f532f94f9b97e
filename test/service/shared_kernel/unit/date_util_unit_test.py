from datetime import datetime

import pytest

from src.service.shared_kernel.domain.date_util import (
    check_date_range,
    equal_date,
    format_date,
    is_before_cutoff,
    parse_date,
    today_date,
)


class TestDateUtil:
    def test_parse_and_format(self) -> None:
        assert parse_date('2024-05-14') == datetime(2024, 5, 14)
        assert format_date(datetime(2024, 5, 14, 9, 30)) == '2024-05-14'
        assert format_date(None) == 'nil'
        with pytest.raises(ValueError):
            parse_date('14.05.2024')

    def test_today_and_equal_date(self) -> None:
        now = datetime(2024, 5, 14, 9, 30)
        assert today_date(now) == datetime(2024, 5, 14)
        assert equal_date(now, datetime(2024, 5, 14, 23, 59))
        assert not equal_date(now, datetime(2024, 5, 15))

    @pytest.mark.parametrize(
        'hour,minute,expected',
        [(16, 59, True), (17, 0, False), (18, 0, False), (0, 0, True)],
    )
    def test_is_before_cutoff(self, hour: int, minute: int, expected: bool) -> None:
        assert is_before_cutoff(datetime(2024, 5, 14, hour, minute), 17, 0) is expected

    def test_check_date_range(self) -> None:
        now = datetime(2024, 5, 14, 10)

        assert check_date_range(datetime(2024, 5, 14), datetime(2024, 5, 14), now) == ''
        assert check_date_range(datetime(2024, 5, 13), datetime(2024, 5, 14), now) == (
            'Start date is in the past: 2024-05-13'
        )
        assert check_date_range(datetime(2024, 5, 16), datetime(2024, 5, 15), now) == (
            'End date is before start date: Start(2024-05-16) - End(2024-05-15)'
        )
