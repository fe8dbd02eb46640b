# doglog/api/daily_logs/services.py
import logging
import uuid
from datetime import date, datetime, time, timezone
from typing import Dict, Any, List, Optional

from firebase_admin import firestore

from doglog.models.activity import Activity
from doglog.models.daily_rating import DailyRating
from doglog.models.custom_activity import CustomActivity, PREDEFINED_ACTIVITY_TYPES
from doglog.utils.datetime_utils import DateTimeUtils

class DailyLogService:
    """
    하루 단위 기록(활동 목록 + 하루 평가)의 저장과 조회를 전담하는 서비스.
    기록이 바뀌면 해당 반려견의 AI 분석 캐시를 무효화합니다.
    """
    def __init__(self, dog_service, analysis_gateway=None, db=None):
        self.db = db or firestore.client()
        self.activities_ref = self.db.collection('activities')
        self.ratings_ref = self.db.collection('daily_ratings')
        self.dog_service = dog_service
        self.analysis_gateway = analysis_gateway
        logging.info("DailyLogService initialized.")

    @staticmethod
    def _rating_doc_id(dog_id: str, day: date) -> str:
        return f"{dog_id}_{day.strftime('%Y%m%d')}"

    def save_day(self, dog_id: str, day: date, day_log: Dict[str, Any]) -> Dict[str, Any]:
        """
        하루 기록을 통째로 교체합니다.
        기존 활동과 평가를 지우고 새 활동들과 (평가나 메모가 있으면) 평가 한 건을 저장합니다.
        모든 쓰기는 하나의 batch 로 커밋되어 실패 시 아무것도 반영되지 않습니다.
        """
        self.dog_service.get_dog(dog_id)
        search_date = DateTimeUtils.to_date_string(day)
        day_start = datetime.combine(day, time.min).replace(tzinfo=timezone.utc)

        new_activities = []
        for entry in day_log.get('activities', []):
            # 입력된 시간대 기준의 날짜로 비교한 뒤 UTC 로 저장
            logged_at = entry.get('logged_at')
            if logged_at is not None and DateTimeUtils.calendar_date(logged_at) != day:
                raise ValueError(f"활동 시간({logged_at.isoformat()})이 {search_date} 에 속하지 않습니다.")
            new_activities.append(Activity(
                activity_id=str(uuid.uuid4()),
                dog_id=dog_id,
                date=day_start,
                activity_type=entry['activity_type'].strip(),
                outcome=entry['outcome'],
                notes=entry.get('notes') or None,
                logged_at=DateTimeUtils.to_utc_datetime(logged_at) if logged_at else None,
            ))

        new_rating = None
        if day_log.get('rating') or day_log.get('notes'):
            new_rating = DailyRating(
                rating_id=self._rating_doc_id(dog_id, day),
                dog_id=dog_id,
                date=day_start,
                rating=day_log.get('rating'),
                notes=day_log.get('notes') or None,
                saved_at=DateTimeUtils.now(),
            )

        batch = self.db.batch()
        for doc in self._day_query(self.activities_ref, dog_id, search_date):
            batch.delete(doc.reference)
        for doc in self._day_query(self.ratings_ref, dog_id, search_date):
            batch.delete(doc.reference)
        for position, activity in enumerate(new_activities):
            activity_data = activity.to_dict()
            activity_data['position'] = position
            batch.set(self.activities_ref.document(activity.activity_id), DateTimeUtils.for_firestore(activity_data))
        if new_rating:
            batch.set(self.ratings_ref.document(new_rating.rating_id), DateTimeUtils.for_firestore(new_rating.to_dict()))

        try:
            batch.commit()
        except Exception as e:
            logging.error(f"Failed to save day log for dog {dog_id} on {search_date}: {e}", exc_info=True)
            raise

        if self.analysis_gateway:
            self.analysis_gateway.invalidate_cache(dog_id)
        logging.info(f"Day log saved for dog {dog_id} on {search_date}: {len(new_activities)} activities, rating={new_rating.rating if new_rating else None}")
        return {'date': day, 'activities': new_activities, 'rating': new_rating}

    def get_day(self, dog_id: str, day: date) -> Dict[str, Any]:
        """특정 날짜의 활동 목록과 하루 평가를 조회합니다."""
        self.dog_service.get_dog(dog_id)
        search_date = DateTimeUtils.to_date_string(day)

        activity_docs = [doc.to_dict() for doc in self._day_query(self.activities_ref, dog_id, search_date)]
        activity_docs.sort(key=lambda d: (DateTimeUtils.to_utc_datetime(d['date']), d.get('position', 0)))
        activities = [Activity.from_dict(data) for data in activity_docs]

        ratings = [DailyRating.from_dict(doc.to_dict()) for doc in self._day_query(self.ratings_ref, dog_id, search_date)]
        return {'date': day, 'activities': activities, 'rating': self._latest(ratings)}

    def get_month_calendar(self, dog_id: str, month: date) -> List[Dict[str, Any]]:
        """
        월간 달력용 요약. 기록이 있는 날짜만 날짜순으로 반환합니다.

        Returns:
            [{'date': 'YYYY-MM-DD', 'activity_count': int, 'rating': str|None, 'has_notes': bool}, ...]
        """
        self.dog_service.get_dog(dog_id)
        start_date, end_date = DateTimeUtils.get_month_range(month.year, month.month)
        start, end = DateTimeUtils.to_date_string(start_date), DateTimeUtils.to_date_string(end_date)

        days: Dict[str, Dict[str, Any]] = {}

        def _day(search_date: str) -> Dict[str, Any]:
            return days.setdefault(search_date, {
                'date': search_date, 'activity_count': 0, 'rating': None, 'has_notes': False,
            })

        for doc in self._month_query(self.activities_ref, dog_id, start, end):
            data = doc.to_dict()
            summary = _day(data['search_date'])
            summary['activity_count'] += 1
            summary['has_notes'] = summary['has_notes'] or bool(data.get('notes'))

        ratings_by_day: Dict[str, List[DailyRating]] = {}
        for doc in self._month_query(self.ratings_ref, dog_id, start, end):
            rating = DailyRating.from_dict(doc.to_dict())
            ratings_by_day.setdefault(rating.search_date, []).append(rating)
        for search_date, ratings in ratings_by_day.items():
            latest = self._latest(ratings)
            summary = _day(search_date)
            summary['rating'] = latest.rating
            summary['has_notes'] = summary['has_notes'] or bool(latest.notes)

        return [days[key] for key in sorted(days)]

    def get_activities(self, dog_id: str) -> List[Activity]:
        """반려견의 모든 활동 기록 (날짜순)"""
        docs = [doc.to_dict() for doc in self.activities_ref.where('dog_id', '==', dog_id).stream()]
        docs.sort(key=lambda d: (DateTimeUtils.to_utc_datetime(d['date']), d.get('position', 0)))
        return [Activity.from_dict(data) for data in docs]

    def get_ratings(self, dog_id: str) -> List[DailyRating]:
        """
        반려견의 하루 평가 기록 (날짜순).
        같은 날짜에 평가가 여러 건 있으면 가장 최근 것만 남깁니다.
        """
        by_day: Dict[str, List[DailyRating]] = {}
        for doc in self.ratings_ref.where('dog_id', '==', dog_id).stream():
            rating = DailyRating.from_dict(doc.to_dict())
            by_day.setdefault(rating.search_date, []).append(rating)
        return [self._latest(by_day[key]) for key in sorted(by_day)]

    @staticmethod
    def _latest(ratings: List[DailyRating]) -> Optional[DailyRating]:
        if not ratings:
            return None
        # 같은 날짜라면 나중에 저장된 평가를 사용 (saved_at 이 없는 예전 문서는 가장 오래된 것으로 취급)
        return max(ratings, key=lambda r: (DateTimeUtils.to_utc_datetime(r.date),
                                           DateTimeUtils.to_utc_datetime(r.saved_at or r.date)))

    @staticmethod
    def _day_query(collection_ref, dog_id: str, search_date: str):
        return collection_ref.where('dog_id', '==', dog_id).where('search_date', '==', search_date).stream()

    @staticmethod
    def _month_query(collection_ref, dog_id: str, start: str, end: str):
        return collection_ref.where('dog_id', '==', dog_id) \
                             .where('search_date', '>=', start) \
                             .where('search_date', '<=', end).stream()


class ActivityCatalogService:
    """기본 제공 활동 목록과 사용자 정의 활동 종류를 관리하는 서비스."""
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.custom_ref = self.db.collection('custom_activities')
        logging.info("ActivityCatalogService initialized.")

    def list_custom_activities(self) -> List[CustomActivity]:
        customs = []
        for doc in self.custom_ref.stream():
            data = DateTimeUtils.from_firestore(doc.to_dict())
            customs.append(CustomActivity(activity_id=doc.id, name=data['name'], created_at=data['created_at']))
        return sorted(customs, key=lambda c: c.created_at)

    def get_catalog(self) -> Dict[str, List[str]]:
        return {
            'predefined': list(PREDEFINED_ACTIVITY_TYPES),
            'custom': [c.name for c in self.list_custom_activities()],
        }

    def add_custom_activity(self, name: str) -> CustomActivity:
        """이름이 정확히 같은 활동(기본 제공 포함)이 이미 있으면 ValueError."""
        name = name.strip()
        if not name:
            raise ValueError("활동 이름이 비어 있습니다.")
        if name in PREDEFINED_ACTIVITY_TYPES or any(c.name == name for c in self.list_custom_activities()):
            raise ValueError(f"'{name}' 활동이 이미 존재합니다.")

        custom = CustomActivity(activity_id=str(uuid.uuid4()), name=name, created_at=DateTimeUtils.now())
        self.custom_ref.document(custom.activity_id).set({'name': custom.name, 'created_at': custom.created_at})
        logging.info(f"Custom activity added: {name}")
        return custom

    def delete_custom_activity(self, name: str) -> None:
        docs = list(self.custom_ref.where('name', '==', name).stream())
        if not docs:
            raise FileNotFoundError(f"'{name}' 사용자 정의 활동을 찾을 수 없습니다.")
        for doc in docs:
            doc.reference.delete()
        logging.info(f"Custom activity deleted: {name}")
