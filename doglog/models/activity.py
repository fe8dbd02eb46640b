# doglog/models/activity.py
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional, Dict, Any

from doglog.utils.datetime_utils import DateTimeUtils

@dataclass
class Activity:
    """
    Firestore 'activities' 컬렉션 문서 구조.
    하루에 여러 건 기록될 수 있으며, 하루 기록을 다시 저장하면 교체됩니다.
    """
    activity_id: str
    dog_id: str
    date: datetime      # 기록한 달력 날짜의 00:00 UTC (일/월 단위 묶음 기준)
    activity_type: str  # 고정 카탈로그 또는 사용자 정의 이름 (대소문자 구분)
    outcome: str        # 'good', 'okay', 'bad' (그 외 값은 중립으로 취급)
    notes: Optional[str] = None
    logged_at: Optional[datetime] = None  # 사용자가 입력한 실제 시각 (UTC)

    @property
    def search_date(self) -> str:
        """일 단위 조회를 위한 YYYY-MM-DD 문자열"""
        return DateTimeUtils.to_date_string(self.date)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        return cls(
            activity_id=data['activity_id'],
            dog_id=data['dog_id'],
            date=DateTimeUtils.from_firestore(data['date']),
            activity_type=data.get('activity_type', ''),
            outcome=data.get('outcome', ''),
            notes=data.get('notes'),
            logged_at=DateTimeUtils.from_firestore(data.get('logged_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        activity_dict = asdict(self)
        activity_dict['search_date'] = self.search_date
        return activity_dict
