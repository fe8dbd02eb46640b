# doglog/analytics/time_range.py
from datetime import date, datetime
from typing import Optional, Union, List, TypeVar

from doglog.utils.datetime_utils import DateTimeUtils

T = TypeVar('T')


class TimeRange:
    """
    분석 대상 기간. '전체 기간' 또는 기준 날짜가 속한 '이번 달'.
    '이번 달' 끼리의 비교는 연/월만 봅니다 (기준 날짜의 일/시간은 무시).
    """
    ALL_TIME = "all"
    THIS_MONTH = "month"

    def __init__(self, kind: str, reference: Optional[Union[date, datetime]] = None):
        if kind not in (self.ALL_TIME, self.THIS_MONTH):
            raise ValueError(f"지원하지 않는 기간입니다: {kind}")
        if kind == self.THIS_MONTH and reference is None:
            raise ValueError("'이번 달' 기간에는 기준 날짜가 필요합니다.")
        self.kind = kind
        self.reference = DateTimeUtils.calendar_date(reference) if reference is not None else None

    @classmethod
    def all_time(cls) -> "TimeRange":
        return cls(cls.ALL_TIME)

    @classmethod
    def this_month(cls, reference: Union[date, datetime, None] = None) -> "TimeRange":
        return cls(cls.THIS_MONTH, reference or DateTimeUtils.today())

    @property
    def is_all_time(self) -> bool:
        return self.kind == self.ALL_TIME

    @property
    def display_name(self) -> str:
        return "All Time" if self.is_all_time else "This Month"

    @property
    def cache_tag(self) -> str:
        """캐시 키에 쓰이는 기간 표기: 'alltime' 또는 'YYYY-MM'"""
        if self.is_all_time:
            return "alltime"
        return DateTimeUtils.to_month_string(self.reference)

    def contains(self, value: Union[date, datetime]) -> bool:
        if self.is_all_time:
            return True
        return DateTimeUtils.is_same_month(value, self.reference)

    def _key(self):
        if self.is_all_time:
            return (self.kind,)
        return (self.kind, self.reference.year, self.reference.month)

    def __eq__(self, other):
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"TimeRange({self.cache_tag})"


def filter_by_time_range(records: List[T], time_range: TimeRange) -> List[T]:
    """
    기간에 속하는 기록만 원래 순서대로 남깁니다.
    '전체 기간'이면 입력을 그대로 돌려줍니다.
    """
    if time_range.is_all_time:
        return list(records)
    return [record for record in records if time_range.contains(record.date)]
