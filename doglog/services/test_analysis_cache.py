# doglog/services/test_analysis_cache.py
from datetime import date, datetime, timedelta, timezone

import pytest

from doglog.analytics.time_range import TimeRange
from doglog.schemas.llm_analysis_schema import LLMAnalysisSchema
from doglog.services.analysis_cache import AnalysisCache, InMemoryCacheStore, FirestoreCacheStore

GENERATED_AT = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def analysis(analysis_payload):
    return LLMAnalysisSchema().load(analysis_payload).stamped(GENERATED_AT)


@pytest.fixture
def clock():
    return FakeClock(GENERATED_AT)


@pytest.fixture(params=["memory", "firestore"])
def cache(request, clock, fake_db):
    store = InMemoryCacheStore() if request.param == "memory" else FirestoreCacheStore(db=fake_db)
    return AnalysisCache(store, clock=clock)


def test_key_format(cache):
    assert cache.key_for("dog-1", TimeRange.all_time()) == "chatgpt_dog-1_alltime"
    assert cache.key_for("dog-1", TimeRange.this_month(date(2024, 3, 9))) == "chatgpt_dog-1_2024-03"


def test_round_trip_within_ttl_is_identical(cache, clock, analysis):
    cache.put("dog-1", TimeRange.all_time(), analysis)
    clock.now = GENERATED_AT + timedelta(hours=23, minutes=59)

    restored = cache.get("dog-1", TimeRange.all_time())

    schema = LLMAnalysisSchema()
    assert restored == analysis
    assert schema.dumps(restored) == schema.dumps(analysis)


def test_entry_expires_after_ttl(cache, clock, analysis):
    cache.put("dog-1", TimeRange.all_time(), analysis)
    clock.now = GENERATED_AT + timedelta(hours=24)

    assert cache.get("dog-1", TimeRange.all_time()) is None
    # 만료 항목은 읽는 시점에 삭제됨
    clock.now = GENERATED_AT
    assert cache.get("dog-1", TimeRange.all_time()) is None


def test_time_ranges_are_cached_separately(cache, analysis):
    march = TimeRange.this_month(date(2024, 3, 1))
    cache.put("dog-1", march, analysis)

    assert cache.has("dog-1", TimeRange.this_month(date(2024, 3, 31)))
    assert not cache.has("dog-1", TimeRange.this_month(date(2024, 4, 1)))
    assert not cache.has("dog-1", TimeRange.all_time())


def test_invalidate_removes_every_range_for_one_dog(cache, analysis):
    cache.put("dog-1", TimeRange.all_time(), analysis)
    cache.put("dog-1", TimeRange.this_month(date(2024, 3, 1)), analysis)
    cache.put("dog-2", TimeRange.all_time(), analysis)

    cache.invalidate("dog-1")

    assert cache.get("dog-1", TimeRange.all_time()) is None
    assert cache.get("dog-1", TimeRange.this_month(date(2024, 3, 1))) is None
    assert cache.get("dog-2", TimeRange.all_time()) == analysis


def test_unreadable_entry_is_discarded(clock):
    store = InMemoryCacheStore()
    cache = AnalysisCache(store, clock=clock)
    store.set("chatgpt_dog-1_alltime", "dog-1", "{not json")

    assert cache.get("dog-1", TimeRange.all_time()) is None
    assert store.get("chatgpt_dog-1_alltime") is None
