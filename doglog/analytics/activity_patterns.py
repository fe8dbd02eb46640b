# doglog/analytics/activity_patterns.py
from typing import List, Dict

from doglog.models.activity import Activity
from doglog.models.insights import ActivityPattern, PatternTrend
from doglog.models.outcome import Outcome
from doglog.utils.datetime_utils import DateTimeUtils, ONE_WEEK
from .mood import sort_by_date
from .scoring import mean_score, label_for_score, relative_change, split_halves, clamp

TREND_THRESHOLD = 0.2


def analyze_activity_patterns(activities: List[Activity]) -> List[ActivityPattern]:
    """
    활동 종류별(대소문자 구분) 통계를 계산하여 주당 빈도 내림차순으로 반환합니다.
    빈도가 같은 종류는 처음 등장한 순서를 유지합니다.
    """
    grouped: Dict[str, List[Activity]] = {}
    for activity in activities:
        grouped.setdefault(activity.activity_type, []).append(activity)

    patterns = [_analyze_activity_type(activity_type, group) for activity_type, group in grouped.items()]
    return sorted(patterns, key=lambda p: p.frequency, reverse=True)


def _analyze_activity_type(activity_type: str, activities: List[Activity]) -> ActivityPattern:
    sorted_activities = sort_by_date(activities)
    outcomes = [a.outcome for a in sorted_activities]

    return ActivityPattern(
        activity_type=activity_type,
        average_outcome=label_for_score(mean_score(outcomes)),
        frequency=calculate_weekly_frequency(sorted_activities),
        success_rate=calculate_success_rate(outcomes),
        trend=calculate_activity_trend(outcomes),
        best_time_of_day=None,
    )


def calculate_weekly_frequency(activities: List[Activity]) -> int:
    """
    실제로 관찰된 기간(첫 기록 ~ 마지막 기록) 기준의 주당 횟수.
    기간이 1주 미만이면 1주로 봅니다.
    """
    if not activities:
        return 0
    moments = [DateTimeUtils.to_utc_datetime(a.date) for a in activities]
    span = max(moments) - min(moments)
    weeks = max(1.0, span / ONE_WEEK)
    return int(len(activities) / weeks)


def calculate_success_rate(outcomes: List[str]) -> float:
    # 'okay' 는 부분 성공으로 치지 않음
    if not outcomes:
        return 0.0
    good_count = sum(1 for outcome in outcomes if outcome == Outcome.GOOD.value)
    return clamp(good_count / len(outcomes))


def calculate_activity_trend(outcomes: List[str]) -> PatternTrend:
    if len(outcomes) < 4:
        return PatternTrend.INSUFFICIENT_DATA

    first_half, second_half = split_halves(outcomes)
    improvement = relative_change(mean_score(first_half), mean_score(second_half))

    if improvement > TREND_THRESHOLD:
        return PatternTrend.IMPROVING
    if improvement < -TREND_THRESHOLD:
        return PatternTrend.DECLINING
    return PatternTrend.STABLE
