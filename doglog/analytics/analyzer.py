# doglog/analytics/analyzer.py
import logging
from typing import List, Optional

from doglog.models.activity import Activity
from doglog.models.daily_rating import DailyRating
from doglog.models.insights import DogInsights
from .time_range import TimeRange, filter_by_time_range
from .mood import analyze_mood_trend
from .activity_patterns import analyze_activity_patterns
from .weekly import analyze_weekly_trends
from .insight_rules import generate_behavior_insights, generate_recommendations, insufficient_data_insights
from .confidence import calculate_confidence

logger = logging.getLogger(__name__)

MIN_ACTIVITIES = 5
MIN_RATINGS = 3


class PatternAnalyzer:
    """
    반려견 기록에 대한 로컬 패턴 분석기.
    입력 컬렉션을 읽기만 하고 새 결과 객체를 만들기 때문에 여러 스레드에서 공유해도 안전합니다.
    """

    def analyze_dog(self,
                    activities: List[Activity],
                    daily_ratings: List[DailyRating],
                    time_range: Optional[TimeRange] = None) -> DogInsights:
        """
        기간으로 기록을 거른 뒤 기분/활동/요일별 분석과 인사이트, 추천, 신뢰도를 묶어 반환합니다.

        활동 5건 미만이면서 평가 3건 미만이면 '데이터 부족' 고정 결과를 반환합니다.
        어떤 입력에도 예외를 던지지 않습니다.
        """
        time_range = time_range or TimeRange.all_time()
        activities = filter_by_time_range(activities, time_range)
        daily_ratings = filter_by_time_range(daily_ratings, time_range)

        if len(activities) < MIN_ACTIVITIES and len(daily_ratings) < MIN_RATINGS:
            logger.debug(f"Insufficient data for analysis ({len(activities)} activities, {len(daily_ratings)} ratings)")
            return insufficient_data_insights()

        overall_mood = analyze_mood_trend(daily_ratings)
        patterns = analyze_activity_patterns(activities)

        return DogInsights(
            overall_mood=overall_mood,
            activity_patterns=patterns,
            weekly_trends=analyze_weekly_trends(activities, daily_ratings),
            behavior_insights=generate_behavior_insights(daily_ratings, patterns),
            recommendations=generate_recommendations(overall_mood, patterns),
            confidence=calculate_confidence(len(activities) + len(daily_ratings)),
        )
