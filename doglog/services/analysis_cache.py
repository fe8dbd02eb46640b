# doglog/services/analysis_cache.py
"""
AI 분석 결과 캐시

키: "<namespace>_<dog_id>_<기간 태그>" (기간 태그는 'alltime' 또는 'YYYY-MM')
값: LLMAnalysisSchema 로 직렬화한 JSON 문자열
만료: 분석 생성 시각(generated_at)으로부터 TTL(기본 24시간). 그 외 제거 정책은 없습니다.
"""
import json
import logging
import threading
from datetime import timedelta, datetime
from typing import Optional, Callable, Dict, Tuple

from firebase_admin import firestore
from marshmallow import ValidationError

from doglog.analytics.time_range import TimeRange
from doglog.models.llm_analysis import LLMAnalysis
from doglog.schemas.llm_analysis_schema import LLMAnalysisSchema
from doglog.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "chatgpt"


class InMemoryCacheStore:
    """프로세스 메모리 기반 저장소 (테스트 및 단일 프로세스 개발 서버용)."""

    def __init__(self):
        self._entries: Dict[str, Tuple[str, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
        return entry[1] if entry else None

    def set(self, key: str, dog_id: str, payload: str) -> None:
        with self._lock:
            self._entries[key] = (dog_id, payload)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def delete_for_dog(self, dog_id: str) -> int:
        with self._lock:
            keys = [key for key, (owner, _) in self._entries.items() if owner == dog_id]
            for key in keys:
                del self._entries[key]
        return len(keys)


class FirestoreCacheStore:
    """Firestore 'ai_analysis_cache' 컬렉션 기반 저장소. 문서 ID 가 곧 캐시 키입니다."""

    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.cache_ref = self.db.collection('ai_analysis_cache')

    def get(self, key: str) -> Optional[str]:
        doc = self.cache_ref.document(key).get()
        if not doc.exists:
            return None
        return doc.to_dict().get('payload')

    def set(self, key: str, dog_id: str, payload: str) -> None:
        self.cache_ref.document(key).set({
            'dog_id': dog_id,
            'payload': payload,
            'cached_at': DateTimeUtils.now(),
        })

    def delete(self, key: str) -> None:
        self.cache_ref.document(key).delete()

    def delete_for_dog(self, dog_id: str) -> int:
        deleted = 0
        for doc in self.cache_ref.where('dog_id', '==', dog_id).stream():
            doc.reference.delete()
            deleted += 1
        return deleted


class AnalysisCache:
    """반려견 + 분석 기간 단위로 LLM 분석 결과를 보관하는 키-값 캐시."""

    def __init__(self, store, ttl: timedelta = timedelta(hours=24),
                 namespace: str = DEFAULT_NAMESPACE,
                 clock: Callable[[], datetime] = DateTimeUtils.now):
        self.store = store
        self.ttl = ttl
        self.namespace = namespace
        self.clock = clock
        self.schema = LLMAnalysisSchema()

    def key_for(self, dog_id: str, time_range: TimeRange) -> str:
        return f"{self.namespace}_{dog_id}_{time_range.cache_tag}"

    def get(self, dog_id: str, time_range: TimeRange) -> Optional[LLMAnalysis]:
        """
        유효한 캐시가 있으면 분석 결과를 반환합니다.
        만료되었거나 읽을 수 없는 항목은 이 시점에 삭제하고 None 을 반환합니다.
        """
        key = self.key_for(dog_id, time_range)
        payload = self.store.get(key)
        if payload is None:
            return None

        try:
            analysis = self.schema.loads(payload)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            self.store.delete(key)
            return None

        if analysis.generated_at is None or self.clock() - analysis.generated_at >= self.ttl:
            logger.info(f"Cache entry expired: {key}")
            self.store.delete(key)
            return None
        return analysis

    def put(self, dog_id: str, time_range: TimeRange, analysis: LLMAnalysis) -> None:
        key = self.key_for(dog_id, time_range)
        self.store.set(key, dog_id, json.dumps(self.schema.dump(analysis), ensure_ascii=False))
        logger.info(f"Cached AI analysis: {key}")

    def has(self, dog_id: str, time_range: TimeRange) -> bool:
        return self.get(dog_id, time_range) is not None

    def invalidate(self, dog_id: str) -> None:
        """해당 반려견의 모든 기간 캐시를 삭제합니다."""
        deleted = self.store.delete_for_dog(dog_id)
        logger.info(f"Invalidated {deleted} cached analyses for dog {dog_id}")
