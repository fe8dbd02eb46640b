# doglog/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간/날짜 처리를 위한 중앙화된 유틸리티 모듈

이 모듈의 목적:
1. 모든 시간 관련 작업을 표준화
2. Firestore 호환성 보장
3. 기록의 '달력상 날짜'를 한 곳에서 계산
4. 캐시 키, 월 조회 등에 쓰이는 문자열 포맷 통일
"""

import logging
from datetime import datetime, date, timezone, time, timedelta
from typing import Union, Any, Tuple
from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

# 로케일과 무관하게 고정된 요일 이름 (date.weekday() 인덱스 순서)
WEEKDAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

ONE_WEEK = timedelta(days=7)


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def today() -> date:
        """오늘 날짜를 반환"""
        return datetime.now(timezone.utc).date()

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime 객체로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00
        """
        try:
            if not iso_string:
                raise ValueError("빈 문자열은 파싱할 수 없습니다")

            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'

            dt = dateutil_parser.isoparse(iso_string)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(timezone.utc)

        except Exception as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")

    @staticmethod
    def parse_date_string(date_string: str) -> date:
        """YYYY-MM-DD 형식의 문자열을 date 객체로 파싱"""
        try:
            if not date_string:
                raise ValueError("빈 문자열은 파싱할 수 없습니다")
            return datetime.strptime(date_string, '%Y-%m-%d').date()
        except Exception as e:
            logger.error(f"날짜 문자열 파싱 실패: {date_string} - {e}")
            raise ValueError(f"잘못된 날짜 형식입니다: {date_string}")

    @staticmethod
    def parse_month_string(month_string: str) -> date:
        """YYYY-MM 형식의 문자열을 해당 월 1일의 date 객체로 파싱"""
        try:
            return datetime.strptime(month_string, '%Y-%m').date()
        except Exception as e:
            logger.error(f"월 문자열 파싱 실패: {month_string} - {e}")
            raise ValueError(f"잘못된 월 형식입니다: {month_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime 객체를 Z 접미사를 가진 ISO 포맷 문자열로 변환"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        else:
            dt = dt.astimezone(timezone.utc)
        return dt.isoformat().replace('+00:00', 'Z')

    @staticmethod
    def to_date_string(d: Union[date, datetime]) -> str:
        """date 객체를 YYYY-MM-DD 형식 문자열로 변환"""
        return DateTimeUtils.calendar_date(d).strftime('%Y-%m-%d')

    @staticmethod
    def to_month_string(d: Union[date, datetime]) -> str:
        """date 객체를 YYYY-MM 형식 문자열로 변환 (캐시 키, 월별 조회용)"""
        return DateTimeUtils.calendar_date(d).strftime('%Y-%m')

    @staticmethod
    def calendar_date(value: Union[date, datetime]) -> date:
        """
        기록의 '달력상 날짜'를 반환합니다.
        datetime은 자신이 가진 timezone 기준의 날짜를 그대로 사용합니다.
        """
        if isinstance(value, datetime):
            return value.date()
        return value

    @staticmethod
    def to_utc_datetime(value: Union[date, datetime]) -> datetime:
        """
        date/datetime을 비교 가능한 UTC aware datetime으로 정규화합니다.
        - date -> 00:00:00 UTC
        - timezone-naive datetime -> UTC로 가정
        """
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        return datetime.combine(value, time.min).replace(tzinfo=timezone.utc)

    @staticmethod
    def is_same_month(d1: Union[date, datetime], d2: Union[date, datetime]) -> bool:
        """두 날짜가 같은 연/월에 속하는지 확인 (일/시간은 무시)"""
        c1 = DateTimeUtils.calendar_date(d1)
        c2 = DateTimeUtils.calendar_date(d2)
        return (c1.year, c1.month) == (c2.year, c2.month)

    @staticmethod
    def weekday_name(value: Union[date, datetime]) -> str:
        """요일 이름을 로케일과 무관한 영문으로 반환"""
        return WEEKDAY_NAMES[DateTimeUtils.calendar_date(value).weekday()]

    @staticmethod
    def get_month_range(year: int, month: int) -> Tuple[date, date]:
        """특정 년월의 첫째 날과 마지막 날을 반환"""
        start_date = date(year, month, 1)
        end_date = start_date + relativedelta(months=1) - relativedelta(days=1)
        return start_date, end_date

    @staticmethod
    def age_components(birthdate: Union[date, datetime], on: date = None) -> Tuple[int, int]:
        """생년월일로부터 (만 나이 년, 남은 개월) 을 계산"""
        birthdate = DateTimeUtils.calendar_date(birthdate)
        on = on or DateTimeUtils.today()
        delta = relativedelta(on, birthdate)
        if delta.years < 0 or delta.months < 0:
            return 0, 0
        return delta.years, delta.months

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 객체의 날짜/시간 필드를 변환

        변환 규칙:
        - date -> datetime (00:00:00 UTC)
        - timezone-naive datetime -> timezone-aware datetime (UTC)
        - dict/list 내부 재귀적 변환
        """
        if isinstance(obj, (date, datetime)):
            return DateTimeUtils.to_utc_datetime(obj)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Firestore에서 읽은 데이터의 datetime 필드를 UTC aware datetime으로 변환
        (DatetimeWithNanoseconds 는 datetime 의 하위 클래스)
        """
        try:
            if isinstance(obj, datetime):
                return DateTimeUtils.to_utc_datetime(obj)
            elif isinstance(obj, dict):
                return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [DateTimeUtils.from_firestore(item) for item in obj]
            return obj
        except Exception as e:
            logger.error(f"Firestore 읽기 변환 실패: {obj} ({type(obj)}) - {e}")
            # 변환 실패 시 원본 객체 반환 (로그만 남김)
            return obj


# 편의를 위한 글로벌 함수들
def now() -> datetime:
    """현재 UTC 시간 반환"""
    return DateTimeUtils.now()

def today() -> date:
    """오늘 날짜 반환"""
    return DateTimeUtils.today()

def for_firestore(obj: Any) -> Any:
    """Firestore 저장용 변환"""
    return DateTimeUtils.for_firestore(obj)

def from_firestore(obj: Any) -> Any:
    """Firestore 읽기용 변환"""
    return DateTimeUtils.from_firestore(obj)
