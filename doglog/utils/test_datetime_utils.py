# doglog/utils/test_datetime_utils.py
"""
통합 시간 관리 유틸리티 기능 테스트

사용법: python -m pytest doglog/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone, timedelta

from doglog.utils.datetime_utils import DateTimeUtils, WEEKDAY_NAMES


def test_parse_iso_datetime_normalizes_to_utc():
    """ISO 포맷 파싱 테스트"""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T19:30:00+09:00",
        "2024-01-15T10:30:00",
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert dt.tzinfo == timezone.utc
        assert (dt.hour, dt.minute) == (10, 30)


def test_parse_invalid_strings_raise_value_error():
    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("")
    with pytest.raises(ValueError):
        DateTimeUtils.parse_date_string("2024/13/45")
    with pytest.raises(ValueError):
        DateTimeUtils.parse_month_string("March 2024")


def test_month_and_date_strings():
    assert DateTimeUtils.to_date_string(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"
    assert DateTimeUtils.to_month_string(date(2024, 3, 5)) == "2024-03"
    assert DateTimeUtils.parse_month_string("2024-03") == date(2024, 3, 1)


def test_is_same_month_ignores_day_and_time():
    reference = date(2024, 3, 15)
    assert DateTimeUtils.is_same_month(datetime(2024, 3, 1, 0, 0), reference)
    assert DateTimeUtils.is_same_month(date(2024, 3, 31), reference)
    assert not DateTimeUtils.is_same_month(date(2024, 2, 28), reference)
    assert not DateTimeUtils.is_same_month(date(2023, 3, 15), reference)


def test_weekday_name_is_locale_independent():
    # 2024-01-15 는 월요일
    monday = date(2024, 1, 15)
    names = [DateTimeUtils.weekday_name(monday + timedelta(days=i)) for i in range(7)]
    assert names == list(WEEKDAY_NAMES)


def test_get_month_range_handles_december_and_leap_year():
    assert DateTimeUtils.get_month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert DateTimeUtils.get_month_range(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


def test_age_components():
    assert DateTimeUtils.age_components(date(2020, 1, 10), on=date(2024, 3, 15)) == (4, 2)
    assert DateTimeUtils.age_components(date(2024, 1, 20), on=date(2024, 3, 15)) == (0, 1)
    # 미래의 생일은 0으로 처리
    assert DateTimeUtils.age_components(date(2030, 1, 1), on=date(2024, 3, 15)) == (0, 0)


def test_for_firestore():
    """Firestore 변환 테스트"""
    test_data = {
        'birthdate': date(2020, 1, 15),
        'timestamp': datetime(2024, 1, 15, 10, 30),
        'nested': {'event_date': date(2023, 12, 25)},
        'list_data': [{'created_at': datetime(2024, 1, 1)}],
        'name': 'Bori',
    }

    converted = DateTimeUtils.for_firestore(test_data)

    assert converted['birthdate'] == datetime(2020, 1, 15, tzinfo=timezone.utc)
    assert converted['timestamp'].tzinfo == timezone.utc
    assert isinstance(converted['nested']['event_date'], datetime)
    assert isinstance(converted['list_data'][0]['created_at'], datetime)
    assert converted['name'] == 'Bori'


def test_from_firestore_makes_naive_datetimes_aware():
    restored = DateTimeUtils.from_firestore({'when': datetime(2024, 1, 1, 8, 0), 'n': 3})
    assert restored['when'].tzinfo == timezone.utc
    assert restored['n'] == 3
