# doglog/analytics/__init__.py
"""
로컬 패턴 분석 파이프라인

기록 -> 기간 필터 -> 차원별 분석(기분, 활동, 요일) -> 인사이트/추천 -> 신뢰도
"""

from .scoring import score_of, label_for_score
from .time_range import TimeRange, filter_by_time_range
from .mood import analyze_mood_trend
from .activity_patterns import analyze_activity_patterns
from .weekly import analyze_weekly_trends
from .insight_rules import generate_behavior_insights, generate_recommendations
from .confidence import calculate_confidence
from .analyzer import PatternAnalyzer

__all__ = [
    'score_of', 'label_for_score',
    'TimeRange', 'filter_by_time_range',
    'analyze_mood_trend',
    'analyze_activity_patterns',
    'analyze_weekly_trends',
    'generate_behavior_insights', 'generate_recommendations',
    'calculate_confidence',
    'PatternAnalyzer',
]
