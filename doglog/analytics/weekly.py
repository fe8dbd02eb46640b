# doglog/analytics/weekly.py
from typing import List, Dict

from doglog.models.activity import Activity
from doglog.models.daily_rating import DailyRating
from doglog.models.insights import WeeklyTrend
from doglog.utils.datetime_utils import DateTimeUtils, WEEKDAY_NAMES
from .scoring import mean_score, consistency


def analyze_weekly_trends(activities: List[Activity], daily_ratings: List[DailyRating]) -> WeeklyTrend:
    """
    요일별 평균 평가로 가장 좋은/나쁜 요일(각 최대 2개)을 찾고,
    기록이 있는 날 기준 하루 평균 활동 수와 전체 평가의 안정성(평가가 없으면 1.0)을 계산합니다.
    """
    ratings_by_day: Dict[str, List[str]] = {}
    for rating in daily_ratings:
        ratings_by_day.setdefault(DateTimeUtils.weekday_name(rating.date), []).append(rating.rating)

    # 평균이 같으면 월요일부터의 요일 순서
    sorted_days = sorted(
        ratings_by_day,
        key=lambda day: (-mean_score(ratings_by_day[day]), WEEKDAY_NAMES.index(day)),
    )

    active_dates = {DateTimeUtils.calendar_date(a.date) for a in activities}
    average_per_day = len(activities) / len(active_dates) if active_dates else 0.0

    return WeeklyTrend(
        best_days=sorted_days[:2],
        worst_days=sorted_days[-2:],
        average_activities_per_day=average_per_day,
        # 평가가 없으면 흔들림도 없는 것으로 보고 1.0
        mood_stability=consistency([r.rating for r in daily_ratings]) if daily_ratings else 1.0,
    )
