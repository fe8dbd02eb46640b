# doglog/analytics/insight_rules.py
"""
분석 결과에 대한 규칙 기반 인사이트/추천 생성.
각 규칙은 서로 독립적으로 평가되며, 생성 순서가 곧 표시 우선순위입니다.
"""
from typing import List

from doglog.models.daily_rating import DailyRating
from doglog.models.insights import (
    ActivityPattern, MoodTrend, BehaviorInsight, Recommendation, TrendDirection,
    InsightCategory, RecommendationPriority, RecommendationCategory,
    DogInsights, WeeklyTrend,
)
from doglog.models.outcome import Outcome
from .mood import sort_by_date

GREAT_WEEK_WINDOW = 7
GREAT_WEEK_MIN_GOOD_DAYS = 5
HIGH_SUCCESS_RATE = 0.8
LOW_SUCCESS_RATE = 0.5
MIN_EXERCISE_PER_WEEK = 3
EXERCISE_KEYWORDS = ("walk", "exercise", "play")


def generate_behavior_insights(daily_ratings: List[DailyRating],
                               patterns: List[ActivityPattern]) -> List[BehaviorInsight]:
    insights = []

    if patterns:
        favorite = patterns[0]
        insights.append(BehaviorInsight(
            title="Favorite Activity",
            description=(f"{favorite.activity_type} is your dog's most frequent activity "
                         f"with a {int(favorite.success_rate * 100)}% success rate."),
            confidence=0.8,
            category=InsightCategory.ACTIVITY,
        ))

    recent = sort_by_date(daily_ratings)[-GREAT_WEEK_WINDOW:]
    good_days = sum(1 for r in recent if r.rating == Outcome.GOOD.value)
    if good_days >= GREAT_WEEK_MIN_GOOD_DAYS:
        insights.append(BehaviorInsight(
            title="Great Week!",
            description=f"Your dog had {good_days} good days this week. Keep up the great routine!",
            confidence=0.9,
            category=InsightCategory.MOOD,
        ))

    top_activity = next((p for p in patterns if p.success_rate > HIGH_SUCCESS_RATE), None)
    if top_activity:
        insights.append(BehaviorInsight(
            title="High Success Activity",
            description=f"{top_activity.activity_type} consistently goes well - consider doing it more often!",
            confidence=0.85,
            category=InsightCategory.BEHAVIOR,
        ))

    return insights


def generate_recommendations(mood: MoodTrend, patterns: List[ActivityPattern]) -> List[Recommendation]:
    recommendations = []

    if mood.direction == TrendDirection.DOWN:
        recommendations.append(Recommendation(
            title="Boost Mood Activities",
            description="Try increasing activities that usually go well to improve overall mood.",
            priority=RecommendationPriority.HIGH,
            category=RecommendationCategory.ROUTINE,
        ))

    struggling = next((p for p in patterns if p.success_rate < LOW_SUCCESS_RATE), None)
    if struggling:
        recommendations.append(Recommendation(
            title=f"Improve {struggling.activity_type}",
            description=(f"Consider breaking down {struggling.activity_type} into smaller steps "
                         f"or trying different approaches."),
            priority=RecommendationPriority.MEDIUM,
            category=RecommendationCategory.TRAINING,
        ))

    exercise_patterns = [p for p in patterns if is_exercise_activity(p.activity_type)]
    if all(p.frequency < MIN_EXERCISE_PER_WEEK for p in exercise_patterns):
        recommendations.append(Recommendation(
            title="Increase Exercise",
            description="Regular exercise can improve mood and behavior. Aim for daily walks or play sessions.",
            priority=RecommendationPriority.HIGH,
            category=RecommendationCategory.EXERCISE,
        ))

    return recommendations


def is_exercise_activity(activity_type: str) -> bool:
    lowered = activity_type.lower()
    return any(keyword in lowered for keyword in EXERCISE_KEYWORDS)


def insufficient_data_insights() -> DogInsights:
    """분석에 충분한 기록이 쌓이기 전 보여주는 고정 결과"""
    return DogInsights(
        overall_mood=MoodTrend(current=Outcome.OKAY.value, direction=TrendDirection.STABLE,
                               consistency=0.5, improvement=0.0),
        activity_patterns=[],
        weekly_trends=WeeklyTrend(),
        behavior_insights=[BehaviorInsight(
            title="Building Your Profile",
            description="Keep logging activities and daily ratings to unlock AI insights about your dog's behavior patterns.",
            confidence=1.0,
            category=InsightCategory.ROUTINE,
        )],
        recommendations=[Recommendation(
            title="Start Logging Activities",
            description="Log more daily activities to get personalized insights about your dog's patterns and behavior.",
            priority=RecommendationPriority.HIGH,
            category=RecommendationCategory.ROUTINE,
        )],
        confidence=0.1,
    )
