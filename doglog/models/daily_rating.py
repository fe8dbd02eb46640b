# doglog/models/daily_rating.py
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional, Dict, Any

from doglog.utils.datetime_utils import DateTimeUtils

@dataclass
class DailyRating:
    """
    Firestore 'daily_ratings' 컬렉션 문서 구조.
    반려견별 하루 한 건이 일반적이지만 구조적으로 강제되지는 않습니다.
    rating 이 없고 메모만 있는 날도 존재할 수 있습니다.
    """
    rating_id: str
    dog_id: str
    date: datetime
    rating: Optional[str] = None  # 'good', 'okay', 'bad'
    notes: Optional[str] = None
    saved_at: Optional[datetime] = None  # 같은 날 평가가 여러 건이면 가장 늦게 저장된 것이 유효

    @property
    def search_date(self) -> str:
        return DateTimeUtils.to_date_string(self.date)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyRating":
        return cls(
            rating_id=data['rating_id'],
            dog_id=data['dog_id'],
            date=DateTimeUtils.from_firestore(data['date']),
            rating=data.get('rating'),
            notes=data.get('notes'),
            saved_at=DateTimeUtils.from_firestore(data.get('saved_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        rating_dict = asdict(self)
        rating_dict['search_date'] = self.search_date
        return rating_dict
