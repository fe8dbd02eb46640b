# doglog/analytics/mood.py
from typing import List

from doglog.models.daily_rating import DailyRating
from doglog.models.insights import MoodTrend, TrendDirection
from doglog.models.outcome import Outcome
from doglog.utils.datetime_utils import DateTimeUtils
from .scoring import mean_score, consistency, relative_change, split_halves

RECENT_WINDOW = 3
CONSISTENCY_WINDOW = 7
DIRECTION_THRESHOLD = 0.3


def sort_by_date(records: list) -> list:
    """날짜 오름차순 정렬 (같은 날짜는 입력 순서 유지)"""
    return sorted(records, key=lambda r: DateTimeUtils.to_utc_datetime(r.date))


def analyze_mood_trend(daily_ratings: List[DailyRating]) -> MoodTrend:
    """
    하루 평가 기록으로부터 현재 기분, 추세 방향, 일관성, 개선율을 계산합니다.

    - 기록이 없으면 중립 추세(okay / stable / 0.0 / 0.0)를 반환합니다.
    - 현재 기분은 가장 최근 기록의 평가이며, 알 수 없는 값이면 'okay' 로 봅니다.
    - 일관성은 최근 7건만 사용합니다.
    """
    if not daily_ratings:
        return MoodTrend(current=Outcome.OKAY.value, direction=TrendDirection.STABLE,
                         consistency=0.0, improvement=0.0)

    sorted_ratings = sort_by_date(daily_ratings)
    labels = [r.rating for r in sorted_ratings]

    latest = Outcome.parse(labels[-1])
    current = latest.value if latest else Outcome.OKAY.value

    return MoodTrend(
        current=current,
        direction=calculate_mood_direction(labels),
        consistency=consistency(labels[-CONSISTENCY_WINDOW:]),
        improvement=calculate_mood_improvement(labels),
    )


def calculate_mood_direction(labels: List[str]) -> TrendDirection:
    if len(labels) < RECENT_WINDOW:
        return TrendDirection.STABLE

    recent = labels[-RECENT_WINDOW:]
    # 최근 3건 바로 앞의 최대 3건
    older = labels[:-RECENT_WINDOW][-RECENT_WINDOW:]
    if not older:
        return TrendDirection.STABLE

    difference = mean_score(recent) - mean_score(older)
    if difference > DIRECTION_THRESHOLD:
        return TrendDirection.UP
    if difference < -DIRECTION_THRESHOLD:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def calculate_mood_improvement(labels: List[str]) -> float:
    """앞 절반 대비 뒤 절반 평균 점수의 변화율(%). 4건 미만이면 0.0"""
    if len(labels) < 4:
        return 0.0
    first_half, second_half = split_halves(labels)
    return relative_change(mean_score(first_half), mean_score(second_half)) * 100
