# doglog/models/insights.py
"""
로컬 패턴 분석 결과 모델

모든 결과는 활동/하루 평가 기록으로부터 필요할 때마다 다시 계산되며
저장되지 않습니다.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Dict, Any


class PatternTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class InsightCategory(str, Enum):
    BEHAVIOR = "behavior"
    HEALTH = "health"
    ACTIVITY = "activity"
    MOOD = "mood"
    ROUTINE = "routine"


class RecommendationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationCategory(str, Enum):
    EXERCISE = "exercise"
    TRAINING = "training"
    HEALTH = "health"
    ROUTINE = "routine"
    SOCIALIZATION = "socialization"


@dataclass
class MoodTrend:
    current: str           # 'good', 'okay', 'bad'
    direction: TrendDirection
    consistency: float     # 0.0 ~ 1.0
    improvement: float     # 퍼센트 변화량


@dataclass
class ActivityPattern:
    activity_type: str
    average_outcome: str
    frequency: int         # 주당 횟수
    success_rate: float    # 0.0 ~ 1.0
    trend: PatternTrend
    best_time_of_day: Optional[str] = None  # 시간대 정보가 없어 항상 None


@dataclass
class WeeklyTrend:
    best_days: List[str] = field(default_factory=list)
    worst_days: List[str] = field(default_factory=list)
    average_activities_per_day: float = 0.0
    mood_stability: float = 0.0


@dataclass
class BehaviorInsight:
    title: str
    description: str
    confidence: float
    category: InsightCategory


@dataclass
class Recommendation:
    title: str
    description: str
    priority: RecommendationPriority
    category: RecommendationCategory
    actionable: bool = True


@dataclass
class DogInsights:
    overall_mood: MoodTrend
    activity_patterns: List[ActivityPattern]
    weekly_trends: WeeklyTrend
    behavior_insights: List[BehaviorInsight]
    recommendations: List[Recommendation]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        """Enum 값을 문자열로 풀어낸 JSON 직렬화용 딕셔너리"""
        return asdict(self, dict_factory=_enum_values)


def _enum_values(items) -> Dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in items}
